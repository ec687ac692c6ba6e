"""Tests for projecting groups onto traces."""

import numpy as np
import pytest

from py_mds_visualizer.plotting.view import ViewState
from py_mds_visualizer.tools.config import DEFAULT_TRACE_STYLE, merge_config
from py_mds_visualizer.tools.records import GroupingEngine, bind_records
from py_mds_visualizer.tools.traces import DIMMED_OPACITY, build_traces


@pytest.fixture
def engine(points, metadata, host):
    return GroupingEngine(bind_records(points, host, metadata))


def _build(engine, key="celltype", pair=(1, 2), style=None, **state):
    view_state = ViewState(dimension_pair=pair, group_key=key, **state)
    style = merge_config(DEFAULT_TRACE_STYLE, style)
    return build_traces(engine.partition(key), view_state, style)


class TestBuildTraces:
    def test_names_carry_group_sizes(self, engine):
        traces = _build(engine)
        assert [t.name for t in traces] == ["B2 (2)", "Mac (2)"]
        assert traces[0].text == ["B2", "B2"]

    def test_coordinates_follow_dimension_pair(self, engine):
        traces = _build(engine, key="tissue", pair=(1, 3))
        bm, ln = traces
        np.testing.assert_array_equal(bm.x, [0.0, 3.0])
        assert bm.y.tolist() == [2.0, 4.0]
        assert ln.x.tolist() == [2.0, 0.0]
        assert ln.y.tolist() == [1.0, 3.0]
        assert bm.indices == (0, 1)
        assert ln.indices == (2, 3)

    def test_ungrouped(self, engine):
        traces = _build(engine, key=None)
        assert len(traces) == 1
        assert traces[0].name == "all points (4)"

    def test_identity_keys_in_style_are_ignored(self, engine):
        style = {"x": [9, 9], "text": "bad", "name": "bad", "customdata": [7], "marker": {"size": 3}}
        trace = _build(engine, style=style)[0].to_plotly()
        assert trace["x"] == [0.0, 2.0]
        assert trace["name"] == "B2 (2)"
        assert trace["text"] == ["B2", "B2"]
        assert trace["customdata"] == [0, 2]
        assert trace["marker"]["size"] == 3

    def test_style_is_shared_by_groups(self, engine):
        traces = _build(engine, style={"marker": {"size": 20}})
        assert all(t.style["marker"]["size"] == 20 for t in traces)
        assert all(t.style["textposition"] == "middle right" for t in traces)

    def test_mode_follows_labels(self, engine):
        assert _build(engine)[0].style["mode"] == "markers"
        assert _build(engine, show_labels=True)[0].style["mode"] == "markers+text"

    def test_groups_get_distinct_colours(self, engine):
        colors = [t.style["marker"]["color"] for t in _build(engine)]
        assert len(set(colors)) == 2

    def test_fixed_marker_colour_is_kept(self, engine):
        traces = _build(engine, style={"marker": {"color": "black"}})
        assert [t.style["marker"]["color"] for t in traces] == ["black", "black"]

    def test_highlight_dims_other_groups(self, engine):
        traces = _build(engine, highlighted_group=1)
        assert traces[0].style["opacity"] == DIMMED_OPACITY
        assert traces[1].style["opacity"] == 1.0

    def test_no_opacity_without_highlight(self, engine):
        assert all("opacity" not in t.style for t in _build(engine))

    def test_traces_do_not_share_style(self, engine):
        traces = _build(engine)
        traces[0].style["marker"]["size"] = 99
        assert traces[1].style["marker"]["size"] == 10
