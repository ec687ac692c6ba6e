"""
Projection of grouped records onto the active dimension pair.

Each group becomes one Trace: parallel x/y arrays taken from the two active
dimensions, per-point label text, and a style derived from the merged trace
configuration. Group identity (coordinates, text, name) is always computed
here and never read from the configuration tree.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from .config import create_color_lookup, get_path, merge_config
from .records import GroupAssignment


IDENTITY_KEYS = ("x", "y", "text", "name", "customdata")

DIMMED_OPACITY = 0.3


@dataclass
class Trace:
    """One renderable series, corresponding to one group."""
    group: Any
    name: str
    x: np.ndarray
    y: np.ndarray
    text: List[str]
    indices: Tuple[int, ...]
    style: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.indices)

    def to_plotly(self) -> Dict[str, Any]:
        """Plotly trace dict: the style plus this group's identity."""
        trace = merge_config(self.style, None)
        trace.update(
            x=self.x.tolist(),
            y=self.y.tolist(),
            text=list(self.text),
            name=self.name,
            customdata=list(self.indices),
        )
        return trace


def group_label(value: Any) -> str:
    """Display text for a group value."""
    return str(value)


def strip_identity(style: Mapping) -> Dict[str, Any]:
    """Copy of a trace style without per-group identity keys."""
    return {k: v for k, v in merge_config(style, None).items() if k not in IDENTITY_KEYS}


def build_traces(
    assignment: GroupAssignment,
    view_state,
    trace_style: Optional[Mapping] = None,
    palette: Optional[List[str]] = None,
) -> List[Trace]:
    """Build one trace per group for the view state's dimension pair.

    Args:
        assignment: Ordered mapping of group value to records
        view_state: Current ViewState (dimension_pair, show_labels and
            highlighted_group are read)
        trace_style: Merged trace style shared by all groups
        palette: Colours cycled over the groups when the style does not set
            ``marker.color``

    Returns:
        Traces in group order
    """
    x_dim, y_dim = view_state.dimension_pair
    base_style = strip_identity(trace_style or {})
    colors = create_color_lookup(list(assignment.keys()), palette)
    fixed_color = get_path(base_style, ("marker", "color")) is not None

    traces = []
    for n, (value, records) in enumerate(assignment.items()):
        style = merge_config(base_style, None)
        style["mode"] = "markers+text" if view_state.show_labels else "markers"

        if not fixed_color:
            if not isinstance(style.get("marker"), Mapping):
                style["marker"] = {}
            style["marker"]["color"] = colors[value]

        if view_state.highlighted_group is not None:
            style["opacity"] = 1.0 if n == view_state.highlighted_group else DIMMED_OPACITY

        label = group_label(value)
        points = np.array([r.point for r in records], dtype=float).reshape(len(records), -1)
        traces.append(
            Trace(
                group=value,
                name=f"{label} ({len(records)})",
                x=points[:, x_dim - 1] if len(records) else np.empty(0),
                y=points[:, y_dim - 1] if len(records) else np.empty(0),
                text=[label] * len(records),
                indices=tuple(r.index for r in records),
                style=style,
            )
        )
    return traces
