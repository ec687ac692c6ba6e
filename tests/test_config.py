"""Tests for the configuration trees and their merge."""

import copy

from py_mds_visualizer.tools.config import (
    DEFAULT_LAYOUT,
    DEFAULT_RENDER_CONFIG,
    DEFAULT_TRACE_STYLE,
    STANDARD_PALETTE,
    create_color_lookup,
    get_path,
    merge_config,
)


class TestMergeConfig:
    def test_nested_merge(self):
        base = {"title": "MDS Plot", "xaxis": {"showgrid": False, "zeroline": True}}
        override = {"title": "First plot", "xaxis": {"showgrid": True}}
        assert merge_config(base, override) == {
            "title": "First plot",
            "xaxis": {"showgrid": True, "zeroline": True},
        }

    def test_lists_are_replaced(self):
        base = {"modeBarButtonsToRemove": ["lasso2d", "select2d"]}
        merged = merge_config(base, {"modeBarButtonsToRemove": ["zoom2d"]})
        assert merged["modeBarButtonsToRemove"] == ["zoom2d"]

    def test_mapping_over_scalar(self):
        assert merge_config({"a": 1}, {"a": {"b": 2}}) == {"a": {"b": 2}}

    def test_scalar_over_mapping(self):
        assert merge_config({"a": {"b": 1}}, {"a": None}) == {"a": None}

    def test_none_override_copies_base(self):
        base = {"a": {"b": [1, 2]}}
        merged = merge_config(base, None)
        assert merged == base
        assert merged["a"] is not base["a"]
        assert merged["a"]["b"] is not base["a"]["b"]

    def test_inputs_not_mutated(self):
        base = {"a": {"b": 1, "c": [1]}}
        override = {"a": {"b": 2, "d": {"e": 3}}}
        base_before = copy.deepcopy(base)
        override_before = copy.deepcopy(override)

        merge_config(base, override)

        assert base == base_before
        assert override == override_before

    def test_result_does_not_alias_override(self):
        override = {"marker": {"line": {"width": 2}}, "dash": [4, 2]}
        merged = merge_config({}, override)
        merged["marker"]["line"]["width"] = 9
        merged["dash"].append(1)
        assert override == {"marker": {"line": {"width": 2}}, "dash": [4, 2]}


class TestDefaults:
    def test_trees_are_separate(self):
        assert "displaylogo" not in DEFAULT_LAYOUT
        assert "hovermode" not in DEFAULT_RENDER_CONFIG
        assert "marker" not in DEFAULT_LAYOUT
        assert DEFAULT_TRACE_STYLE["type"] == "scatter"

    def test_view_does_not_touch_defaults(self, make_view):
        layout_before = copy.deepcopy(DEFAULT_LAYOUT)
        style_before = copy.deepcopy(DEFAULT_TRACE_STYLE)
        config_before = copy.deepcopy(DEFAULT_RENDER_CONFIG)

        view = make_view(
            layout={"title": "First plot", "xaxis": {"showgrid": True}},
            trace_style={"marker": {"size": 20}},
            render_config={"scrollZoom": False},
        )
        view.layout["margin"]["l"] = 0
        view.set_show_labels(True)

        assert DEFAULT_LAYOUT == layout_before
        assert DEFAULT_TRACE_STYLE == style_before
        assert DEFAULT_RENDER_CONFIG == config_before


class TestHelpers:
    def test_get_path(self):
        tree = {"marker": {"color": "red"}}
        assert get_path(tree, ("marker", "color")) == "red"
        assert get_path(tree, ("marker", "size"), 10) == 10
        assert get_path(tree, ("marker", "color", "x")) is None

    def test_color_lookup_cycles(self):
        values = [f"g{i}" for i in range(len(STANDARD_PALETTE) + 2)]
        lookup = create_color_lookup(values)
        assert lookup["g0"] == STANDARD_PALETTE[0]
        assert lookup[f"g{len(STANDARD_PALETTE)}"] == STANDARD_PALETTE[0]
        assert lookup[f"g{len(STANDARD_PALETTE) + 1}"] == STANDARD_PALETTE[1]

    def test_color_lookup_custom_palette(self):
        assert create_color_lookup(["a", "b", "c"], ["red", "blue"]) == {
            "a": "red", "b": "blue", "c": "red",
        }
