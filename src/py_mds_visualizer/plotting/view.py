"""
The projection view engine.

An MDSView owns one dataset and one ViewState. Every interaction goes
through a transition method, which validates its input, builds the new
traces, resolves label overlaps when labels are shown, and only then swaps
in the new state and hands the snapshot to the rendering backend. A failed
transition leaves the previous state in place.
"""

import numbers
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import InvalidDimensionPairError, InvalidGroupIndexError
from ..helpers.backend import PlotlyBackend
from ..tools.config import (
    DEFAULT_LAYOUT,
    DEFAULT_RENDER_CONFIG,
    DEFAULT_TRACE_STYLE,
    merge_config,
)
from ..tools.dimensions import DimensionPair, dimension_pairs, validate_dimension_pair
from ..tools.distances import rank_by_distance
from ..tools.labels import (
    LABEL_MARGIN,
    apply_hidden_labels,
    estimate_label_boxes,
    resolve_overlapping_labels,
)
from ..tools.records import UNGROUPED_NAME, GroupingEngine, bind_records
from ..tools.traces import DIMMED_OPACITY, Trace, build_traces, group_label


EVENT_KINDS = ("click", "hover", "unhover")


@dataclass(frozen=True)
class ViewState:
    """What the user is currently looking at."""
    dimension_pair: DimensionPair
    group_key: Optional[str] = None
    show_labels: bool = False
    highlighted_group: Optional[int] = None


@dataclass
class RenderSnapshot:
    """Everything the rendering backend needs to draw one frame."""
    traces: List[Trace]
    layout: Dict[str, Any]
    render_config: Dict[str, Any]
    view_state: ViewState
    hidden_labels: Tuple[bool, ...] = field(default_factory=tuple)

    def to_plotly(self) -> Dict[str, Any]:
        return {
            "data": [t.to_plotly() for t in self.traces],
            "layout": merge_config(self.layout, None),
            "config": merge_config(self.render_config, None),
        }


def axis_title(dimension: int) -> str:
    return f"Dimension {dimension}"


class MDSView:
    """
    Interactive 2-D view of N-dimensional points.

    Args:
        points: M points of N coordinates each (sequence of sequences or an
            M x N array)
        host: Surface to draw into (an ipywidgets.Output for the Plotly
            backend); required
        metadata: Optional sequence of M mappings used for grouping
        dimension_pair: Initial (x, y) dimensions, 1-based; defaults to (1, 2)
        group_key: Initial metadata field to group by; defaults to the
            alphabetically first field
        layout: Overrides merged onto DEFAULT_LAYOUT
        render_config: Overrides merged onto DEFAULT_RENDER_CONFIG
        trace_style: Overrides merged onto DEFAULT_TRACE_STYLE
        on_click, on_hover, on_unhover: Called as ``callback(view, event)``
        backend: Object with draw/redraw/restyle/hover methods; defaults to a
            PlotlyBackend drawing into host
        palette: Colours cycled over groups
        label_margin: Padding used by the label overlap test, in pixels

    Raises:
        MissingCoordinatesError, MissingHostError: Nothing to draw, or
            nowhere to draw it
        IncompleteDimensionSelectionError, InvalidDimensionPairError: Bad
            dimension_pair
        UnknownGroupKeyError: group_key is not a metadata field
    """

    def __init__(
        self,
        points,
        host,
        metadata: Optional[Sequence] = None,
        dimension_pair: Optional[Sequence[int]] = None,
        group_key: Optional[str] = None,
        layout: Optional[Dict[str, Any]] = None,
        render_config: Optional[Dict[str, Any]] = None,
        trace_style: Optional[Dict[str, Any]] = None,
        on_click: Optional[Callable] = None,
        on_hover: Optional[Callable] = None,
        on_unhover: Optional[Callable] = None,
        backend=None,
        palette: Optional[List[str]] = None,
        label_margin: float = LABEL_MARGIN,
    ):
        record_set = bind_records(points, host, metadata)
        grouping = GroupingEngine(record_set)

        pair = self._initial_pair(dimension_pair, record_set.ndim)
        if group_key is None:
            group_key = grouping.default_group_key()
        else:
            grouping.validate_group_key(group_key)

        self.host = host
        self.layout = merge_config(DEFAULT_LAYOUT, layout)
        self.render_config = merge_config(DEFAULT_RENDER_CONFIG, render_config)
        self.trace_style = merge_config(DEFAULT_TRACE_STYLE, trace_style)
        self.palette = palette
        self.label_margin = label_margin
        self._callbacks: Dict[str, Optional[Callable]] = {
            "click": on_click,
            "hover": on_hover,
            "unhover": on_unhover,
        }

        if backend is None:
            backend = PlotlyBackend(host)
        self.backend = backend

        self._grouping = grouping
        self._state = ViewState(dimension_pair=pair, group_key=group_key)
        self._snapshot = self._render(self._state)

    @staticmethod
    def _initial_pair(dimension_pair, ndim: int) -> DimensionPair:
        if dimension_pair is not None:
            return validate_dimension_pair(dimension_pair, ndim)
        pairs = dimension_pairs(ndim)
        if not pairs:
            raise InvalidDimensionPairError(
                f"At least two dimensions are needed for a 2-D view, got {ndim}"
            )
        return pairs[0]

    # ------------------------------------------------------------------
    # Read-only views of the current state
    # ------------------------------------------------------------------

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def records(self):
        return self._grouping.record_set.records

    @property
    def ndim(self) -> int:
        return self._grouping.record_set.ndim

    @property
    def traces(self) -> List[Trace]:
        return list(self._snapshot.traces)

    @property
    def has_metadata(self) -> bool:
        return self._grouping.record_set.has_metadata

    def dimension_pairs(self) -> List[DimensionPair]:
        return dimension_pairs(self.ndim)

    def group_names(self) -> List[str]:
        return self._grouping.group_names()

    def snapshot(self) -> RenderSnapshot:
        return self._snapshot

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _layout_for(self, state: ViewState) -> Dict[str, Any]:
        x_dim, y_dim = state.dimension_pair
        return merge_config(self.layout, {
            "xaxis": {"title": {"text": axis_title(x_dim)}},
            "yaxis": {"title": {"text": axis_title(y_dim)}},
        })

    def _measure_labels(self, traces: List[Trace], layout: Dict[str, Any]):
        measure = getattr(self.backend, "measure_labels", None)
        if callable(measure):
            return measure(traces, layout)
        return estimate_label_boxes(traces, layout)

    def _render(self, state: ViewState, grouping: Optional[GroupingEngine] = None) -> RenderSnapshot:
        grouping = grouping or self._grouping
        assignment = grouping.partition(state.group_key)
        traces = build_traces(assignment, state, self.trace_style, self.palette)
        layout = self._layout_for(state)

        hidden: Tuple[bool, ...] = ()
        if state.show_labels:
            boxes = self._measure_labels(traces, layout)
            hidden = resolve_overlapping_labels(boxes, margin=self.label_margin)
            traces = apply_hidden_labels(traces, hidden)

        return RenderSnapshot(
            traces=traces,
            layout=layout,
            render_config=merge_config(self.render_config, None),
            view_state=state,
            hidden_labels=hidden,
        )

    def _commit(self, state: ViewState) -> RenderSnapshot:
        snapshot = self._render(state)
        self._state = state
        self._snapshot = snapshot
        self.backend.redraw(snapshot)
        return snapshot

    def draw(self) -> RenderSnapshot:
        """Hand the current snapshot to the backend's draw entry point."""
        self.backend.draw(self._snapshot)
        return self._snapshot

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_dimension_pair(self, pair: Sequence[int]) -> RenderSnapshot:
        """Show dimension pair[0] on x and pair[1] on y."""
        pair = validate_dimension_pair(pair, self.ndim)
        return self._commit(replace(self._state, dimension_pair=pair))

    def set_group_key(self, group_key: Optional[str]) -> RenderSnapshot:
        """Group by another metadata field (None for a single group).

        The highlight is cleared, since group indices change meaning.
        """
        self._grouping.validate_group_key(group_key)
        return self._commit(replace(self._state, group_key=group_key, highlighted_group=None))

    def set_show_labels(self, show: bool) -> RenderSnapshot:
        if not isinstance(show, (bool, np.bool_)):
            raise TypeError(f"show must be a bool, got {show!r}")
        return self._commit(replace(self._state, show_labels=bool(show)))

    def set_highlighted_group(self, group_index: Optional[int]) -> RenderSnapshot:
        """Keep one group at full opacity and dim the others (None clears)."""
        if group_index is not None:
            group_index = self._check_group_index(group_index)
        return self._commit(replace(self._state, highlighted_group=group_index))

    def replace_data(self, points, metadata: Optional[Sequence] = None) -> RenderSnapshot:
        """Swap in a new dataset, discarding everything derived from the old one.

        The dimension pair and group key are kept when they are still valid
        for the new data and reset to their defaults otherwise.
        """
        record_set = bind_records(points, self.host, metadata)
        grouping = GroupingEngine(record_set)

        pair = self._state.dimension_pair
        if pair not in dimension_pairs(record_set.ndim):
            pair = self._initial_pair(None, record_set.ndim)
        group_key = self._state.group_key
        ungrouped_by_choice = group_key is None and self.has_metadata
        if group_key not in grouping.group_names() and not ungrouped_by_choice:
            group_key = grouping.default_group_key()

        state = replace(self._state, dimension_pair=pair, group_key=group_key, highlighted_group=None)
        snapshot = self._render(state, grouping)

        self._grouping.replace_records(record_set)
        self._state = state
        self._snapshot = snapshot
        self.backend.redraw(snapshot)
        return snapshot

    # ------------------------------------------------------------------
    # Backend instructions
    # ------------------------------------------------------------------

    def _check_group_index(self, group_index: int) -> int:
        n_groups = len(self._snapshot.traces)
        if isinstance(group_index, bool) or not isinstance(group_index, numbers.Integral) \
                or not 0 <= group_index < n_groups:
            raise InvalidGroupIndexError(
                f"Group index {group_index!r} out of range for {n_groups} groups"
            )
        return int(group_index)

    def hover_group(self, group_index: int) -> None:
        """Show hover labels on every point of a group."""
        group_index = self._check_group_index(group_index)
        n_points = len(self._snapshot.traces[group_index])
        self.backend.hover(
            [{"curveNumber": group_index, "pointNumber": i} for i in range(n_points)]
        )

    def highlight_group(self, group_index: int) -> None:
        """Dim every group except group_index on the live plot."""
        group_index = self._check_group_index(group_index)
        self.backend.restyle({"opacity": DIMMED_OPACITY})
        self.backend.restyle({"opacity": 1}, [group_index])

    def unhighlight(self) -> None:
        """Restore every group to full opacity on the live plot."""
        self.backend.restyle({"opacity": 1})

    # ------------------------------------------------------------------
    # Events and queries
    # ------------------------------------------------------------------

    def dispatch_event(self, kind: str, event: Any) -> Any:
        """Pass a plot event to the matching user callback as ``callback(view, event)``."""
        if kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind {kind!r}; expected one of {EVENT_KINDS}")
        callback = self._callbacks[kind]
        if callback is None:
            return None
        return callback(self, event)

    def record_group(self, index: int) -> str:
        """Display name of the group a record belongs to under the current key."""
        record = self.records[index]
        if self._state.group_key is None:
            return UNGROUPED_NAME
        return group_label(record.metadata.get(self._state.group_key))

    def distance_ranking(self, index: int) -> List[Dict[str, Any]]:
        """All records ordered by N-dimensional distance from record ``index``."""
        order, distances = rank_by_distance(self._grouping.record_set.coords, index)
        return [
            {"index": int(i), "group": self.record_group(int(i)), "distance": float(d)}
            for i, d in zip(order, distances)
        ]
