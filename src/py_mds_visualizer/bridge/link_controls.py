"""
Control panel for an MDSView: selectors wired to the view's transitions,
plus the hidden widget bridge that carries plot events back to Python.
"""

import html
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import ipywidgets as widgets
from IPython.display import display, HTML

from ..helpers.communication import (
    create_data_bridges,
    create_poll_button,
    get_dispatcher_script,
    make_callback_handler,
)
from ..tools.callback_functions import (
    handle_plot_event,
    set_dimension_pair,
    set_group_key,
    toggle_labels,
)
from ..tools.dimensions import dimension_label
from ..tools.utils import _serialize_result


@dataclass
class ControlPanel:
    """Widgets created for one view."""
    channel_id: str
    dimension_selector: widgets.Dropdown
    group_selector: widgets.Dropdown
    label_toggle: widgets.Checkbox
    status: widgets.HTML
    output: widgets.Output
    container: widgets.VBox


def _plot_event_callbacks() -> Dict[str, Callable]:
    def _on_click(data, view=None, **kwargs):
        return handle_plot_event(data, view=view, kind="click")

    def _on_hover(data, view=None, **kwargs):
        return handle_plot_event(data, view=view, kind="hover")

    def _on_unhover(data, view=None, **kwargs):
        return handle_plot_event(data, view=view, kind="unhover")

    return {
        "plotClick": _on_click,
        "plotHover": _on_hover,
        "plotUnhover": _on_unhover,
    }


def link_controls_to_view(
    view,
    debug: bool = False,
    max_result_size: int = 1_000_000,
    display_panel: bool = True,
) -> ControlPanel:
    """
    Build the control panel for a view and connect it.

    The panel holds a dimension-pair selector, a group-key selector (hidden
    when the view has no metadata) and a "show labels" checkbox, above the
    view's host surface. Each control change runs the matching callback; a
    rejected change is reported in the status line and the control is reset
    to the view's actual state.

    Args:
        view: MDSView to control
        debug: Print diagnostics into the hidden output widget and enable
            browser console logging for plot events
        max_result_size: Largest event result, in bytes, sent to the browser
        display_panel: Display the panel immediately

    Returns:
        ControlPanel holding the created widgets
    """
    output = widgets.Output()
    channel_id = f"channel_{uuid.uuid4().hex}"
    state = view.state

    dimension_selector = widgets.Dropdown(
        options=[dimension_label(p) for p in view.dimension_pairs()],
        value=dimension_label(state.dimension_pair),
        description="Dimensions",
    )
    group_selector = widgets.Dropdown(
        options=view.group_names(),
        value=state.group_key,
        description="Group by",
    )
    if not view.has_metadata:
        group_selector.layout.display = "none"
    label_toggle = widgets.Checkbox(value=state.show_labels, description="show labels")
    status = widgets.HTML(value="")

    syncing = {"active": False}

    def _sync_controls():
        syncing["active"] = True
        try:
            current = view.state
            dimension_selector.value = dimension_label(current.dimension_pair)
            group_selector.value = current.group_key
            label_toggle.value = current.show_labels
        finally:
            syncing["active"] = False

    def _apply(callback: Callable, request: Dict[str, Any]) -> Optional[Dict]:
        if syncing["active"]:
            return None
        result = callback(request, view=view)
        if debug:
            with output:
                print(f"[MDSVis] {callback.__name__}({request}) -> {result.get('type')}")
        if result.get("type") == "error":
            status.value = f"<span style='color:#b00020'>{html.escape(result['message'])}</span>"
            _sync_controls()
        else:
            status.value = ""
        return result

    dimension_selector.observe(
        lambda change: _apply(set_dimension_pair, {"pair": change["new"]}), names="value"
    )
    group_selector.observe(
        lambda change: _apply(set_group_key, {"groupKey": change["new"]}), names="value"
    )
    label_toggle.observe(
        lambda change: _apply(toggle_labels, {"show": change["new"]}), names="value"
    )

    # ----------------------------
    # Plot events: browser -> data bridge -> poll button -> view.dispatch_event
    # ----------------------------
    if hasattr(view.backend, "enable_events"):
        view.backend.enable_events(channel_id)

    event_callbacks = _plot_event_callbacks()
    data_bridges = create_data_bridges(channel_id, list(event_callbacks))
    for eid in event_callbacks:
        create_poll_button(
            channel_id,
            eid,
            make_callback_handler(
                eid,
                event_callbacks,
                {"view": view},
                data_bridges,
                channel_id,
                output,
                _serialize_result,
                max_result_size=max_result_size,
                debug=debug,
            ),
        )
    display(HTML(get_dispatcher_script(channel_id)))

    children = [widgets.HBox([dimension_selector, group_selector, label_toggle]), status]
    if isinstance(view.host, widgets.Widget):
        children.append(view.host)
    container = widgets.VBox(children)

    output.layout.visibility = "hidden"
    output.layout.height = "0px"
    display(output)
    if display_panel:
        display(container)

    return ControlPanel(
        channel_id=channel_id,
        dimension_selector=dimension_selector,
        group_selector=group_selector,
        label_toggle=label_toggle,
        status=status,
        output=output,
        container=container,
    )
