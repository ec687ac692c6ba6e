"""
Plotly rendering backend.

Turns RenderSnapshots into Plotly figures displayed inside an ipywidgets
Output (the host surface), and forwards restyle/hover instructions to the
live plot as JavaScript.
"""

import json
import uuid
from typing import Any, Dict, List, Optional

import ipywidgets as widgets
import plotly.graph_objects as go
from IPython.display import HTML, clear_output, display

from .communication import get_plot_event_script, run_javascript


class PlotlyBackend:
    """Draws snapshots with Plotly into an ipywidgets Output."""

    def __init__(self, host: widgets.Output, div_id: Optional[str] = None, debug: bool = False):
        self.host = host
        self.div_id = div_id or f"mdsvis_{uuid.uuid4().hex}"
        self.debug = debug
        self.channel_id: Optional[str] = None
        self.figure: Optional[go.Figure] = None

    def enable_events(self, channel_id: str) -> None:
        """Forward plot events to the request queue of channel_id on the next draw."""
        self.channel_id = channel_id

    def build_figure(self, snapshot) -> go.Figure:
        payload = snapshot.to_plotly()
        return go.Figure(data=payload["data"], layout=payload["layout"])

    def draw(self, snapshot) -> go.Figure:
        """Render a snapshot from scratch, replacing anything shown in the host."""
        fig = self.build_figure(snapshot)
        post_script = None
        if self.channel_id is not None:
            post_script = get_plot_event_script(self.div_id, self.channel_id, debug=self.debug)

        html = fig.to_html(
            include_plotlyjs="cdn",
            full_html=False,
            div_id=self.div_id,
            config=snapshot.render_config,
            post_script=post_script,
        )
        with self.host:
            clear_output(wait=True)
            display(HTML(html))

        self.figure = fig
        return fig

    def redraw(self, snapshot) -> go.Figure:
        """Update the live plot in place (Plotly.react), drawing it first if needed."""
        if self.figure is None:
            return self.draw(snapshot)

        fig = self.build_figure(snapshot)
        self.figure = fig
        payload = json.loads(fig.to_json())
        run_javascript(self.host, f"""
        (function() {{
          const gd = document.getElementById({json.dumps(self.div_id)});
          if (gd && window.Plotly) {{
            Plotly.react(gd, {json.dumps(payload["data"])}, {json.dumps(payload["layout"])},
                         {json.dumps(snapshot.render_config)});
          }}
        }})();
        """)
        return fig

    def restyle(self, update: Dict[str, Any], trace_indices: Optional[List[int]] = None) -> None:
        """Apply a style update to some (or all) traces."""
        if self.figure is not None:
            indices = range(len(self.figure.data)) if trace_indices is None else trace_indices
            for i in indices:
                self.figure.data[i].update(update)

        indices_js = json.dumps(list(trace_indices)) if trace_indices is not None else "undefined"
        run_javascript(self.host, f"""
        (function() {{
          const gd = document.getElementById({json.dumps(self.div_id)});
          if (gd && window.Plotly) Plotly.restyle(gd, {json.dumps(update)}, {indices_js});
        }})();
        """)

    def hover(self, points: List[Dict[str, int]]) -> None:
        """Show hover labels for the given (curveNumber, pointNumber) points."""
        run_javascript(self.host, f"""
        (function() {{
          const gd = document.getElementById({json.dumps(self.div_id)});
          if (gd && window.Plotly) Plotly.Fx.hover(gd, {json.dumps(points)});
        }})();
        """)
