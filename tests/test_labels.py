"""Tests for overlapping label suppression."""

import numpy as np
import pytest

from py_mds_visualizer.tools.labels import (
    LabelBox,
    apply_hidden_labels,
    estimate_label_boxes,
    resolve_overlapping_labels,
)
from py_mds_visualizer.tools.traces import Trace


def _box(x, y, text, width=10.0, height=10.0):
    return LabelBox(x=x, y=y, width=width, height=height, text=text)


def _trace(name, xs, ys, font=10):
    return Trace(
        group=name,
        name=f"{name} ({len(xs)})",
        x=np.asarray(xs, dtype=float),
        y=np.asarray(ys, dtype=float),
        text=[name] * len(xs),
        indices=tuple(range(len(xs))),
        style={"textfont": {"size": font}, "marker": {"size": 10}},
    )


class TestResolveOverlappingLabels:
    def test_empty(self):
        assert resolve_overlapping_labels([]) == ()

    def test_same_position_different_text(self):
        assert resolve_overlapping_labels([_box(0, 0, "B2"), _box(0, 0, "Mac")]) == (False, True)

    def test_same_text_is_never_hidden(self):
        assert resolve_overlapping_labels([_box(0, 0, "B2"), _box(0, 0, "B2")]) == (False, False)

    def test_earlier_label_wins(self):
        assert resolve_overlapping_labels([_box(0, 0, "Mac"), _box(0, 0, "B2")]) == (False, True)

    def test_separate_labels(self):
        boxes = [_box(0, 0, "a"), _box(100, 0, "b"), _box(0, 100, "c")]
        assert resolve_overlapping_labels(boxes) == (False, False, False)

    def test_hidden_label_hides_nothing(self):
        boxes = [_box(0, 0, "a"), _box(8, 0, "b"), _box(16, 0, "c")]
        assert resolve_overlapping_labels(boxes) == (False, True, False)

    def test_visible_label_keeps_hiding(self):
        boxes = [_box(0, 0, "a"), _box(5, 5, "b"), _box(9, 9, "c")]
        assert resolve_overlapping_labels(boxes) == (False, True, True)

    def test_margin_extends_box(self):
        inside = [_box(10, 10, "a"), _box(8.5, 10, "b")]
        outside = [_box(10, 10, "a"), _box(7.5, 10, "b")]
        assert resolve_overlapping_labels(inside, margin=2.0) == (False, True)
        assert resolve_overlapping_labels(outside, margin=2.0) == (False, False)

    def test_far_edge_is_inclusive(self):
        assert resolve_overlapping_labels([_box(0, 0, "a"), _box(10, 10, "b")]) == (False, True)
        assert resolve_overlapping_labels([_box(0, 0, "a"), _box(10.5, 0, "b")]) == (False, False)


class TestEstimateLabelBoxes:
    def test_one_box_per_label(self):
        traces = [_trace("B2", [0, 1], [0, 1]), _trace("Mac", [2], [2])]
        boxes = estimate_label_boxes(traces, {"width": 700, "height": 450})
        assert [b.text for b in boxes] == ["B2", "B2", "Mac"]
        assert boxes[0].width == pytest.approx(2 * 10 * 0.6)
        assert boxes[2].width == pytest.approx(3 * 10 * 0.6)
        assert all(b.height == 10 for b in boxes)

    def test_screen_orientation(self):
        boxes = estimate_label_boxes([_trace("a", [0, 10], [0, 10])], {"width": 700, "height": 450})
        low, high = boxes
        assert high.x > low.x
        assert high.y < low.y

    def test_coincident_points_collide(self):
        traces = [_trace("B2", [1.0, 5.0], [1.0, 5.0]), _trace("Mac", [1.0], [1.0])]
        boxes = estimate_label_boxes(traces, {"width": 700, "height": 450})
        assert (boxes[0].x, boxes[0].y) == (boxes[2].x, boxes[2].y)
        assert resolve_overlapping_labels(boxes) == (False, False, True)

    def test_explicit_axis_range(self):
        layout = {"width": 700, "height": 450, "margin": {"l": 50, "r": 50, "t": 50, "b": 50},
                  "xaxis": {"range": [0, 10]}, "yaxis": {"range": [0, 10]}}
        box = estimate_label_boxes([_trace("a", [0], [10])], layout)[0]
        assert box.x == pytest.approx(50 + 5)
        assert box.y == pytest.approx(50 - 5)


class TestApplyHiddenLabels:
    def test_blanks_hidden_text(self):
        traces = [_trace("B2", [0, 1], [0, 1]), _trace("Mac", [2], [2])]
        result = apply_hidden_labels(traces, (False, True, True))
        assert result[0].text == ["B2", ""]
        assert result[1].text == [""]
        assert traces[0].text == ["B2", "B2"]

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="label flags"):
            apply_hidden_labels([_trace("a", [0], [0])], (False, False))


class TestTextPosition:
    def _box(self, position):
        trace = _trace("a", [0.0], [0.0])
        if position is not None:
            trace.style["textposition"] = position
        return estimate_label_boxes([trace], {"width": 700, "height": 450})[0]

    def test_default_is_middle_right(self):
        assert self._box(None) == self._box("middle right")

    def test_top_center(self):
        right, top = self._box("middle right"), self._box("top center")
        # marker 10, font 10, one character 6 px wide
        assert top.x == pytest.approx(right.x - 5 - 3)
        assert top.y == pytest.approx(right.y - 10)

    def test_bottom_left(self):
        right, bottom_left = self._box("middle right"), self._box("bottom left")
        assert bottom_left.x == pytest.approx(right.x - 10 - 6)
        assert bottom_left.y == pytest.approx(right.y + 10)

    def test_per_point_positions(self):
        trace = _trace("a", [0.0, 0.0], [0.0, 0.0])
        trace.style["textposition"] = ["middle right", "middle left"]
        first, second = estimate_label_boxes([trace], {"width": 700, "height": 450})
        assert second.x == pytest.approx(first.x - 10 - 6)
        assert second.y == pytest.approx(first.y)

    def test_position_changes_which_labels_collide(self):
        low = _trace("low", [0.0, 1.0], [0.0, 0.0])
        high = _trace("high", [0.0], [0.5])
        layout = {"width": 700, "height": 450,
                  "xaxis": {"range": [0, 100]}, "yaxis": {"range": [0, 100]}}
        side = estimate_label_boxes([low, high], layout)
        assert resolve_overlapping_labels(side)[-1] is True

        high.style["textposition"] = "top center"
        above = estimate_label_boxes([low, high], layout)
        assert resolve_overlapping_labels(above)[-1] is False
