"""
py_mds_visualizer - Interactive 2-D projections of N-dimensional points.

A Plotly scatter view of multidimensional-scaling (or PCA, UMAP, ...)
coordinates for Jupyter, with metadata-driven grouping and labelling.

Features:
- Choose any pair of dimensions to display (1,2 / 1,3 / ... / N-1,N)
- Group and colour points by any metadata field, in first-seen order
- One legend entry per group, annotated with its size ("B2 (2)")
- Point labels with overlapping labels suppressed
- Highlight or hover a whole group at once
- Click/hover/unhover callbacks called as ``callback(view, event)``
- Distance ranking of all points from a chosen point
- AnnData input (obsm embeddings, categorical obs columns)

Basic Usage:
    >>> from py_mds_visualizer import create_mds_interface
    >>> points = [[0, 1, 2, 3], [3, 2, 4, 1], [2, 3, 1, 2], [0, 0, 3, 7]]
    >>> metadata = [{"celltype": "B2", "tissue": "BM"}, {"celltype": "Mac", "tissue": "BM"},
    ...             {"celltype": "B2", "tissue": "LN"}, {"celltype": "Mac", "tissue": "LN"}]
    >>> view, panel = create_mds_interface(points, metadata, layout={"title": "First plot"})

Without the widget layer:
    >>> from py_mds_visualizer import MDSView
    >>> view = MDSView(points, host, metadata=metadata, backend=my_backend)
    >>> view.set_dimension_pair((1, 3))
"""

__version__ = "0.1.0"

# Main interface
from .plotting import (
    MDSView,
    ViewState,
    RenderSnapshot,
    create_mds_interface,
    create_anndata_interface,
)

# Control panel bridge
from .bridge import ControlPanel, link_controls_to_view

# Engine building blocks
from .tools import (
    BoundRecord,
    RecordSet,
    GroupingEngine,
    bind_records,
    dimension_pairs,
    validate_dimension_pair,
    merge_config,
    Trace,
    build_traces,
    LabelBox,
    resolve_overlapping_labels,
    estimate_label_boxes,
    rank_by_distance,
    DEFAULT_LAYOUT,
    DEFAULT_RENDER_CONFIG,
    DEFAULT_TRACE_STYLE,
)

# Rendering backend
from .helpers import PlotlyBackend

from .exceptions import (
    MDSVisError,
    MissingCoordinatesError,
    MissingHostError,
    MalformedCoordinatesError,
    MetadataLengthError,
    IncompleteDimensionSelectionError,
    InvalidDimensionPairError,
    UnknownGroupKeyError,
    InvalidGroupIndexError,
)

__all__ = [
    # Version
    "__version__",

    # Main API
    "MDSView",
    "ViewState",
    "RenderSnapshot",
    "create_mds_interface",
    "create_anndata_interface",
    "ControlPanel",
    "link_controls_to_view",

    # Engine
    "BoundRecord",
    "RecordSet",
    "GroupingEngine",
    "bind_records",
    "dimension_pairs",
    "validate_dimension_pair",
    "merge_config",
    "Trace",
    "build_traces",
    "LabelBox",
    "resolve_overlapping_labels",
    "estimate_label_boxes",
    "rank_by_distance",
    "DEFAULT_LAYOUT",
    "DEFAULT_RENDER_CONFIG",
    "DEFAULT_TRACE_STYLE",

    # Backend
    "PlotlyBackend",

    # Errors
    "MDSVisError",
    "MissingCoordinatesError",
    "MissingHostError",
    "MalformedCoordinatesError",
    "MetadataLengthError",
    "IncompleteDimensionSelectionError",
    "InvalidDimensionPairError",
    "UnknownGroupKeyError",
    "InvalidGroupIndexError",
]
