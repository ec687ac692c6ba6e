"""
Communication helpers for the widget-based Python-JavaScript bridge.

Plot events (click, hover, unhover) happen in the browser. They are queued on
``window["_requests_<channel>"]``; a dispatcher script copies each request
into a hidden Text widget (the data bridge) and clicks a hidden Button (the
poll button) whose Python handler runs the matching callback.
"""

import json
import traceback
from typing import Any, Callable, Dict, List

import ipywidgets as widgets
from IPython.display import display, Javascript


_HIDDEN = dict(width="0px", height="0px", visibility="hidden", display="none")


def create_data_bridges(
    channel_id: str,
    event_ids: List[str],
) -> Dict[str, widgets.Text]:
    """
    Create one hidden Text widget per event for JavaScript to write requests into.

    Args:
        channel_id: Unique identifier of the view's event channel
        event_ids: Event names that need a data bridge

    Returns:
        Dict mapping event names to their Text widgets
    """
    data_bridges: Dict[str, widgets.Text] = {}

    for eid in event_ids:
        bridge = widgets.Text(
            value="",
            description=f"_data_{channel_id}_{eid}",
            placeholder=f"Data bridge for {eid}",
            layout=widgets.Layout(**_HIDDEN),
        )
        bridge.add_class(f"data-bridge-{channel_id}")
        bridge.add_class(f"data-bridge-{eid}")
        data_bridges[eid] = bridge
        display(bridge)

    return data_bridges


def create_poll_button(
    channel_id: str,
    event_id: str,
    handler: Callable,
) -> widgets.Button:
    """
    Create the hidden Button that the dispatcher clicks to run a Python handler.
    """
    label = f"_poll_{channel_id}__{event_id}"
    poll_btn = widgets.Button(
        description=label,
        tooltip=label,
        layout=widgets.Layout(**_HIDDEN),
    )
    poll_btn.on_click(handler)
    display(poll_btn)
    return poll_btn


def run_javascript(output: widgets.Output, js_code: str) -> None:
    """Execute a JavaScript snippet through an Output widget."""
    with output:
        display(Javascript(js_code))


def send_to_javascript(
    channel_id: str,
    data: Dict[str, Any],
    output: widgets.Output,
) -> None:
    """
    Hand a callback result to the browser.

    The result is passed to ``window["mdsvisResponse_<channel>"]`` when a page
    defines it, and is always re-dispatched as an ``mdsvisResponse`` event.
    """
    run_javascript(output, f"""
    (function() {{
      const channel = {json.dumps(channel_id)};
      const data = {json.dumps(data)};
      const hook = window["mdsvisResponse_" + channel];
      if (hook) hook(data);
      window.dispatchEvent(new CustomEvent('mdsvisResponse', {{detail: {{channel: channel, data: data}}}}));
    }})();
    """)


def make_callback_handler(
    event_id: str,
    callbacks: Dict[str, Callable],
    callback_args: Dict[str, Any],
    data_bridges: Dict[str, widgets.Text],
    channel_id: str,
    output: widgets.Output,
    serialize_fn: Callable,
    max_result_size: int = 1_000_000,
    debug: bool = False,
) -> Callable:
    """
    Create the poll-button handler for one event.

    The handler:
    1. Reads the request JSON from the event's data bridge
    2. Calls ``callbacks[event_id](request, **callback_args)``
    3. Serializes the result and checks its size
    4. Sends the result (or an error result) back to JavaScript

    Args:
        event_id: Event name
        callbacks: Dict mapping event names to callback functions
        callback_args: Extra keyword arguments passed to every callback
        data_bridges: Dict of data bridge widgets
        channel_id: Unique identifier of the view's event channel
        output: Hidden Output widget used for JavaScript and debug prints
        serialize_fn: Function converting results to JSON-compatible objects
        max_result_size: Largest result, in bytes, sent back to the browser
        debug: Print diagnostics into the output widget

    Returns:
        Handler suitable for Button.on_click
    """
    def handler(_b):
        try:
            bridge_value = data_bridges[event_id].value
            request_data: Dict[str, Any] = {}

            if bridge_value:
                try:
                    request_data = json.loads(bridge_value)
                except json.JSONDecodeError as e:
                    if debug:
                        with output:
                            print(f"[Python] JSON decode error: {e}, value: {bridge_value}")

            if debug:
                with output:
                    print(f"[Python] Handling {event_id!r}")
                    print(f"[Python] Request data: {request_data}")

            cb = callbacks[event_id]
            result = cb(request_data, **callback_args)

            serialized = serialize_fn(result)
            size = len(json.dumps(serialized).encode("utf-8"))
            if size > max_result_size:
                serialized = {"type": "error", "message": f"Result too large: {size:,} bytes"}

            send_to_javascript(channel_id, serialized, output)
            data_bridges[event_id].value = ""

        except Exception as e:
            if debug:
                with output:
                    print(f"[Python] Error in {event_id}:")
                    traceback.print_exc()

            error_result = {
                "type": "error",
                "message": str(e),
                "traceback": traceback.format_exc() if debug else None,
            }
            send_to_javascript(channel_id, error_result, output)

    return handler


def get_plot_event_script(div_id: str, channel_id: str, debug: bool = False) -> str:
    """
    JavaScript that forwards Plotly click/hover/unhover events to the request queue.

    Only plain point fields are forwarded; Plotly's event objects hold DOM
    references that cannot be serialized.
    """
    debug_log = "console.log('[mdsvis]', ...args);" if debug else ""
    return f"""
(function() {{
  const gd = document.getElementById({json.dumps(div_id)});
  const channel = {json.dumps(channel_id)};
  if (!gd || !gd.on) return;

  function log(...args) {{ {debug_log} }}

  function pointsOf(ev) {{
    return (ev && ev.points ? ev.points : []).map(p => ({{
      curveNumber: p.curveNumber,
      pointNumber: p.pointNumber,
      x: p.x,
      y: p.y,
      text: p.text,
      customdata: p.customdata
    }}));
  }}

  function enqueue(eventId, ev) {{
    const key = "_requests_" + channel;
    window[key] = window[key] || [];
    const data = {{points: pointsOf(ev)}};
    log("Queueing", eventId, data);
    window[key].push({{buttonId: eventId, data: data}});
  }}

  gd.on('plotly_click', ev => enqueue('plotClick', ev));
  gd.on('plotly_hover', ev => enqueue('plotHover', ev));
  gd.on('plotly_unhover', ev => enqueue('plotUnhover', ev));
}})();
"""


def get_dispatcher_script(channel_id: str) -> str:
    """
    HTML script that drains the request queue into the hidden widgets.

    Each request is written into its data bridge, then the matching poll
    button is clicked. One request is handled at a time.
    """
    return f"""
<script>
(function() {{
  const channel = {json.dumps(channel_id)};
  let busy = false;

  function findAndClick(label) {{
    for (const b of Array.from(document.querySelectorAll("button"))) {{
      const txt = (b.textContent || "");
      const title = (b.getAttribute("title") || "");
      if (txt.includes(label) || title.includes(label)) {{
        b.click();
        return true;
      }}
    }}
    return false;
  }}

  function setBridge(eventId, value) {{
    const selector = '.data-bridge-' + channel + '.data-bridge-' + eventId + ' input';
    const input = document.querySelector(selector);
    if (!input) return false;
    input.value = value;
    input.dispatchEvent(new Event('input', {{ bubbles: true }}));
    input.dispatchEvent(new Event('change', {{ bubbles: true }}));
    return true;
  }}

  function dispatch() {{
    if (busy) return;
    const q = window["_requests_" + channel] || [];
    if (q.length === 0) return;

    busy = true;
    const req = q.shift();
    setBridge(req.buttonId, JSON.stringify(req.data));

    setTimeout(() => {{
      findAndClick("_poll_" + channel + "__" + req.buttonId);
      setTimeout(() => {{ busy = false; }}, 100);
    }}, 150);
  }}

  setInterval(dispatch, 150);
}})();
</script>
"""
