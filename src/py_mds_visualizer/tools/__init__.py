"""
Tools module for py_mds_visualizer.

Contains the projection engine components (records, grouping, dimensions,
configuration, traces, labels, distances) and the callback handlers used by
the control panel.
"""

from .utils import _serialize_result

from .dimensions import (
    dimension_pairs,
    validate_dimension_pair,
    dimension_label,
    parse_dimension_label,
)
from .records import (
    UNGROUPED_NAME,
    BoundRecord,
    RecordSet,
    GroupingEngine,
    bind_records,
)
from .config import (
    DEFAULT_LAYOUT,
    DEFAULT_RENDER_CONFIG,
    DEFAULT_TRACE_STYLE,
    STANDARD_PALETTE,
    merge_config,
    create_color_lookup,
)
from .traces import Trace, build_traces
from .labels import (
    LabelBox,
    resolve_overlapping_labels,
    estimate_label_boxes,
    apply_hidden_labels,
)
from .distances import rank_by_distance

from .callback_functions import (
    # View state transitions
    set_dimension_pair,
    set_group_key,
    toggle_labels,
    set_highlighted_group,

    # Backend instructions
    highlight_group,
    unhighlight,
    hover_group,

    # Queries
    get_view_state,
    get_distance_ranking,

    # Plot events
    handle_plot_event,
    highlight_on_hover,
    unhighlight_on_unhover,
)

__all__ = [
    # Utils
    "_serialize_result",

    # Engine
    "dimension_pairs",
    "validate_dimension_pair",
    "dimension_label",
    "parse_dimension_label",
    "UNGROUPED_NAME",
    "BoundRecord",
    "RecordSet",
    "GroupingEngine",
    "bind_records",
    "DEFAULT_LAYOUT",
    "DEFAULT_RENDER_CONFIG",
    "DEFAULT_TRACE_STYLE",
    "STANDARD_PALETTE",
    "merge_config",
    "create_color_lookup",
    "Trace",
    "build_traces",
    "LabelBox",
    "resolve_overlapping_labels",
    "estimate_label_boxes",
    "apply_hidden_labels",
    "rank_by_distance",

    # Callbacks
    "set_dimension_pair",
    "set_group_key",
    "toggle_labels",
    "set_highlighted_group",
    "highlight_group",
    "unhighlight",
    "hover_group",
    "get_view_state",
    "get_distance_ranking",
    "handle_plot_event",
    "highlight_on_hover",
    "unhighlight_on_unhover",
]
