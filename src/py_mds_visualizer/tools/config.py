"""
Default configuration trees and the recursive merge used to apply user overrides.

Three trees are kept apart for every view: the Plotly layout, the Plotly
render config (modebar, zoom behaviour) and the per-trace style.
"""

import copy
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence


DEFAULT_LAYOUT: Dict[str, Any] = {
    "title": {"text": "MDS Plot"},
    "width": 700,
    "height": 450,
    "hovermode": "closest",
    "showlegend": True,
    "margin": {"l": 80, "r": 80, "t": 100, "b": 80},
    "xaxis": {"showgrid": False, "zeroline": True},
    "yaxis": {"showgrid": False, "zeroline": True},
}

DEFAULT_RENDER_CONFIG: Dict[str, Any] = {
    "displaylogo": False,
    "scrollZoom": True,
    "modeBarButtonsToRemove": ["lasso2d", "select2d"],
}

DEFAULT_TRACE_STYLE: Dict[str, Any] = {
    "type": "scatter",
    "textposition": "middle right",
    "hoverinfo": "text",
    "marker": {"size": 10},
    "textfont": {"size": 10},
}

STANDARD_PALETTE: List[str] = [
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
]


def merge_config(base: Optional[Mapping], override: Optional[Mapping]) -> Dict[str, Any]:
    """Right-biased recursive merge of two configuration trees.

    Where both sides hold a mapping for a key the mappings are merged
    recursively. Any other override value (lists included) replaces the base
    value outright.

    Neither argument is modified, and the result shares no mutable
    containers with either of them.

    Args:
        base: Default tree
        override: User tree; may be None

    Returns:
        New merged tree

    Example:
        >>> merge_config({"a": 1, "b": {"x": 1}}, {"b": {"y": 2}})
        {'a': 1, 'b': {'x': 1, 'y': 2}}
        >>> merge_config({"a": [1, 2]}, {"a": [3]})
        {'a': [3]}
    """
    result: Dict[str, Any] = _copy_tree(base) if base is not None else {}
    if override is None:
        return result

    for key, value in override.items():
        if isinstance(value, Mapping):
            current = result.get(key)
            if not isinstance(current, Mapping):
                current = {}
            result[key] = merge_config(current, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _copy_tree(tree: Mapping) -> Dict[str, Any]:
    return {
        k: _copy_tree(v) if isinstance(v, Mapping) else copy.deepcopy(v)
        for k, v in tree.items()
    }


def get_path(tree: Mapping, path: Sequence[str], default: Any = None) -> Any:
    """Look up a nested key, e.g. ``get_path(style, ("marker", "color"))``."""
    node: Any = tree
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return default
        node = node[key]
    return node


def create_color_lookup(
    unique_values: Sequence[Any],
    palette: Optional[List[str]] = None,
) -> Dict[Any, str]:
    """Map each value to a palette colour, cycling when values outnumber colours.

    Values keep the order given; the caller decides that order.
    """
    palette = palette or STANDARD_PALETTE
    return {v: palette[i % len(palette)] for i, v in enumerate(unique_values)}
