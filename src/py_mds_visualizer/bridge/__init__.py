"""
Bridge module for py_mds_visualizer.

Connects ipywidgets controls and Plotly plot events to an MDSView.
"""

from .link_controls import ControlPanel, link_controls_to_view

__all__ = [
    "ControlPanel",
    "link_controls_to_view",
]
