"""
Python callback functions for the control panel and plot events.

Each callback takes the request data sent by the widget bridge plus the view
it acts on, and returns a JSON-serializable result dict with a "type" field.
Rejected requests come back as ``{"type": "error", "message": ...}``; the
view is left exactly as it was.
"""

from typing import Any, Dict, Optional

from ..exceptions import MDSVisError
from .dimensions import parse_dimension_label
from .utils import _serialize_result


def _error(message: str, **extra) -> Dict:
    return {"type": "error", "message": message, **extra}


def _state_result(view) -> Dict:
    return {
        "type": "view_state",
        "state": _serialize_result(view.state),
        "groups": [t.name for t in view.traces],
        "hidden_labels": sum(view.snapshot().hidden_labels),
    }


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on", "checked")
    return bool(value)


def _parse_index(value: Any) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return int(value)


# =============================================================================
# View State Transitions
# =============================================================================

def set_dimension_pair(data: Dict, view=None, **kwargs) -> Dict:
    """Change the displayed dimensions; accepts "1,3" or [1, 3]."""
    if view is None:
        return _error("No view provided")

    pair = data.get("pair")
    if pair is None:
        return _error("Please select a dimension pair")

    try:
        if isinstance(pair, str):
            pair = parse_dimension_label(pair)
        view.set_dimension_pair(pair)
    except MDSVisError as e:
        return _error(str(e), available_pairs=[list(p) for p in view.dimension_pairs()])
    return _state_result(view)


def set_group_key(data: Dict, view=None, **kwargs) -> Dict:
    """Group by another metadata field; a blank key means a single group."""
    if view is None:
        return _error("No view provided")

    key = data.get("groupKey")
    if isinstance(key, str):
        key = key.strip() or None

    try:
        view.set_group_key(key)
    except MDSVisError as e:
        return _error(str(e), available_keys=view.group_names())
    return _state_result(view)


def toggle_labels(data: Dict, view=None, **kwargs) -> Dict:
    """Show or hide point labels."""
    if view is None:
        return _error("No view provided")

    view.set_show_labels(_parse_bool(data.get("show", False)))
    return _state_result(view)


def set_highlighted_group(data: Dict, view=None, **kwargs) -> Dict:
    """Keep one group at full opacity in the view state (blank clears)."""
    if view is None:
        return _error("No view provided")

    try:
        view.set_highlighted_group(_parse_index(data.get("group")))
    except (ValueError, IndexError) as e:
        return _error(str(e))
    return _state_result(view)


# =============================================================================
# Backend Instructions
# =============================================================================

def highlight_group(data: Dict, view=None, **kwargs) -> Dict:
    """Dim all groups but one on the live plot."""
    if view is None:
        return _error("No view provided")

    try:
        index = _parse_index(data.get("group"))
        if index is None:
            return _error("Please select a group")
        view.highlight_group(index)
    except (ValueError, IndexError) as e:
        return _error(str(e))
    return {"type": "success"}


def unhighlight(data: Dict, view=None, **kwargs) -> Dict:
    """Restore all groups to full opacity on the live plot."""
    if view is None:
        return _error("No view provided")
    view.unhighlight()
    return {"type": "success"}


def hover_group(data: Dict, view=None, **kwargs) -> Dict:
    """Show hover labels for every point of a group."""
    if view is None:
        return _error("No view provided")

    try:
        index = _parse_index(data.get("group"))
        if index is None:
            return _error("Please select a group")
        view.hover_group(index)
    except (ValueError, IndexError) as e:
        return _error(str(e))
    return {"type": "success"}


# =============================================================================
# Queries
# =============================================================================

def get_view_state(data: Dict, view=None, **kwargs) -> Dict:
    """Current view state and group names."""
    if view is None:
        return _error("No view provided")
    return _state_result(view)


def get_distance_ranking(data: Dict, view=None, **kwargs) -> Dict:
    """Records ordered by distance from one record, in all dimensions."""
    if view is None:
        return _error("No view provided")

    try:
        index = _parse_index(data.get("index"))
        if index is None:
            return _error("Please select a point")
        ranking = view.distance_ranking(index)
    except (ValueError, IndexError) as e:
        return _error(str(e))

    limit = data.get("limit")
    if limit is not None:
        ranking = ranking[:int(limit)]
    return {"type": "distance_ranking", "index": index, "ranking": ranking}


# =============================================================================
# Plot Events
# =============================================================================

def handle_plot_event(data: Dict, view=None, kind: str = "click", **kwargs) -> Dict:
    """Pass a click/hover/unhover event from the plot to the view's user callback."""
    if view is None:
        return _error("No view provided")

    result = view.dispatch_event(kind, data)
    return {"type": "event_handled", "kind": kind, "result": _serialize_result(result)}


def highlight_on_hover(view, event: Dict) -> None:
    """Ready-made on_hover callback: highlight the hovered group."""
    points = event.get("points") or []
    if points:
        view.highlight_group(int(points[0]["curveNumber"]))


def unhighlight_on_unhover(view, event: Dict) -> None:
    """Ready-made on_unhover callback: clear any highlight."""
    view.unhighlight()
