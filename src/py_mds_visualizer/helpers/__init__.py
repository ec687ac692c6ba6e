"""
Helpers module for py_mds_visualizer.

Provides the Plotly rendering backend and the Python-JavaScript
communication utilities.
"""

from .backend import PlotlyBackend
from .communication import (
    create_data_bridges,
    create_poll_button,
    run_javascript,
    send_to_javascript,
    make_callback_handler,
    get_plot_event_script,
    get_dispatcher_script,
)

__all__ = [
    "PlotlyBackend",
    "create_data_bridges",
    "create_poll_button",
    "run_javascript",
    "send_to_javascript",
    "make_callback_handler",
    "get_plot_event_script",
    "get_dispatcher_script",
]
