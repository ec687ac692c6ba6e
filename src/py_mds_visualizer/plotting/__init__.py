"""
Plotting module for py_mds_visualizer.

Provides the view engine and the high-level interfaces built on it.
"""

from .view import MDSView, ViewState, RenderSnapshot
from .mds_interface import (
    create_mds_interface,
    create_anndata_interface,
    anndata_points,
    anndata_metadata,
)

__all__ = [
    "MDSView",
    "ViewState",
    "RenderSnapshot",
    "create_mds_interface",
    "create_anndata_interface",
    "anndata_points",
    "anndata_metadata",
]
