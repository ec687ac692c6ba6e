"""
Main interface for creating interactive MDS visualizations.

This module provides the high-level API: build a view over a set of
N-dimensional points (or an AnnData embedding), wire up the control panel
and draw it.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import scipy.sparse as sp
import ipywidgets as widgets

from ..bridge.link_controls import ControlPanel, link_controls_to_view
from ..helpers.backend import PlotlyBackend
from ..tools.callback_functions import highlight_on_hover, unhighlight_on_unhover
from .view import MDSView


def create_mds_interface(
    points,
    metadata: Optional[Sequence[Dict[str, Any]]] = None,
    figsize: Tuple[int, int] = (700, 450),
    debug: bool = False,
    dimension_pair: Optional[Sequence[int]] = None,
    group_key: Optional[str] = None,
    layout: Optional[Dict[str, Any]] = None,
    render_config: Optional[Dict[str, Any]] = None,
    trace_style: Optional[Dict[str, Any]] = None,
    on_click: Optional[Callable] = None,
    on_hover: Optional[Callable] = None,
    on_unhover: Optional[Callable] = None,
    hover_highlighting: bool = True,
    palette: Optional[List[str]] = None,
    max_result_size: int = 1_000_000,
) -> Tuple[MDSView, ControlPanel]:
    """
    Create an interactive MDS plot with its control panel.

    The panel has a dimension-pair selector, a group-by selector (when
    metadata is given) and a "show labels" checkbox above a Plotly scatter
    plot with one trace per group.

    Args:
        points: M points of N coordinates each
        metadata: Optional list of M dicts (e.g. ``{"celltype": "B2"}``)
        figsize: Tuple of (width, height) in pixels; values in ``layout``
            take precedence
        debug: If True, prints diagnostics and enables browser console logging
        dimension_pair: Initial (x, y) dimensions, 1-based
        group_key: Initial metadata field to group by
        layout, render_config, trace_style: Plotly overrides
        on_click, on_hover, on_unhover: Called as ``callback(view, event)``
        hover_highlighting: Highlight the hovered group when no on_hover /
            on_unhover callbacks are given
        palette: Colours cycled over groups
        max_result_size: Largest event result sent to the browser, in bytes

    Returns:
        (view, panel)

    Example:
        >>> from py_mds_visualizer import create_mds_interface
        >>> points = [[0, 1, 2, 3], [3, 2, 4, 1], [2, 3, 1, 2], [0, 0, 3, 7]]
        >>> metadata = [{"celltype": "B2", "tissue": "BM"}, {"celltype": "Mac", "tissue": "BM"},
        ...             {"celltype": "B2", "tissue": "LN"}, {"celltype": "Mac", "tissue": "LN"}]
        >>> view, panel = create_mds_interface(points, metadata, group_key="tissue")
    """
    width, height = figsize
    layout = dict(layout or {})
    layout.setdefault("width", width)
    layout.setdefault("height", height)

    if hover_highlighting:
        on_hover = on_hover or highlight_on_hover
        on_unhover = on_unhover or unhighlight_on_unhover

    host = widgets.Output()
    view = MDSView(
        points,
        host,
        metadata=metadata,
        dimension_pair=dimension_pair,
        group_key=group_key,
        layout=layout,
        render_config=render_config,
        trace_style=trace_style,
        on_click=on_click,
        on_hover=on_hover,
        on_unhover=on_unhover,
        backend=PlotlyBackend(host, debug=debug),
        palette=palette,
    )

    if debug:
        print(f"[MDSVis] {len(view.records):,} points, {view.ndim} dimensions, "
              f"group keys: {view.group_names() or 'none'}")

    panel = link_controls_to_view(view, debug=debug, max_result_size=max_result_size)
    view.draw()
    return view, panel


def _categorical_obs_columns(obs: pd.DataFrame) -> List[str]:
    """Categorical/string obs columns, skipping internal '__' columns."""
    columns = []
    for col in obs.columns:
        if str(col).startswith("__"):
            continue
        dtype = obs[col].dtype
        if isinstance(dtype, pd.CategoricalDtype) or dtype == object or pd.api.types.is_string_dtype(dtype):
            columns.append(col)
    return columns


def anndata_points(adata, basis: Optional[str] = "X_pca", n_dims: Optional[int] = None) -> np.ndarray:
    """
    Coordinates of every cell from an AnnData embedding.

    Args:
        adata: AnnData object
        basis: Key in ``adata.obsm`` (``"pca"`` is read as ``"X_pca"``); None
            uses ``adata.X``
        n_dims: Keep only the first n_dims dimensions

    Returns:
        n_obs x N float array
    """
    if basis is None:
        X = adata.X
        coords = X.toarray() if sp.issparse(X) else np.asarray(X)
    else:
        key = basis if basis in adata.obsm else f"X_{basis}"
        if key not in adata.obsm:
            raise KeyError(f"Embedding {basis!r} not found in adata.obsm; available: {list(adata.obsm.keys())}")
        coords = adata.obsm[key]
        coords = coords.toarray() if sp.issparse(coords) else np.asarray(coords)

    coords = np.asarray(coords, dtype=float)
    if n_dims is not None:
        coords = coords[:, :n_dims]
    return coords


def anndata_metadata(adata, obs_columns: Optional[Sequence[str]] = None) -> Optional[List[Dict[str, Any]]]:
    """Per-cell metadata records from ``adata.obs`` (categorical/string columns by default)."""
    columns = list(obs_columns) if obs_columns is not None else _categorical_obs_columns(adata.obs)
    if not columns:
        return None
    missing = [c for c in columns if c not in adata.obs.columns]
    if missing:
        raise KeyError(f"Columns not found in adata.obs: {missing}")
    frame = adata.obs[columns].astype(object)
    return frame.to_dict("records")


def create_anndata_interface(
    adata,
    basis: Optional[str] = "X_pca",
    obs_columns: Optional[Sequence[str]] = None,
    n_dims: Optional[int] = None,
    **kwargs,
) -> Tuple[MDSView, ControlPanel]:
    """
    Create an interactive projection of an AnnData embedding.

    Args:
        adata: AnnData object
        basis: obsm key holding the N-dimensional coordinates (None for X)
        obs_columns: obs columns offered for grouping; defaults to every
            categorical or string column
        n_dims: Keep only the first n_dims dimensions (e.g. 4 PCs)
        **kwargs: Passed to create_mds_interface

    Returns:
        (view, panel)

    Example:
        >>> import anndata as ad
        >>> adata = ad.read_h5ad("my_data.h5ad")
        >>> view, panel = create_anndata_interface(adata, basis="X_pca", n_dims=4)
    """
    points = anndata_points(adata, basis=basis, n_dims=n_dims)
    metadata = anndata_metadata(adata, obs_columns)
    layout = {"title": {"text": f"{basis or 'X'} projection"}}
    layout.update(kwargs.get("layout") or {})
    kwargs["layout"] = layout
    return create_mds_interface(points, metadata=metadata, **kwargs)
