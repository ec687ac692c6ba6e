"""Tests for dimension pair enumeration and validation."""

import numpy as np
import pytest

from py_mds_visualizer.exceptions import (
    IncompleteDimensionSelectionError,
    InvalidDimensionPairError,
)
from py_mds_visualizer.tools.dimensions import (
    dimension_label,
    dimension_pairs,
    parse_dimension_label,
    validate_dimension_pair,
)


class TestDimensionPairs:
    def test_four_dimensions(self):
        assert dimension_pairs(4) == [(1, 2), (1, 3), (1, 4), (2, 3), (2, 4), (3, 4)]

    @pytest.mark.parametrize("ndim", range(0, 9))
    def test_count(self, ndim):
        assert len(dimension_pairs(ndim)) == ndim * (ndim - 1) // 2

    def test_pairs_are_ascending_and_unique(self):
        pairs = dimension_pairs(6)
        assert all(i < j for i, j in pairs)
        assert len(set(pairs)) == len(pairs)
        assert pairs == sorted(pairs)

    def test_too_few_dimensions(self):
        assert dimension_pairs(1) == []
        assert dimension_pairs(2) == [(1, 2)]


class TestValidateDimensionPair:
    def test_valid_pair(self):
        assert validate_dimension_pair([1, 3], 4) == (1, 3)

    def test_numpy_input(self):
        assert validate_dimension_pair(np.array([2, 4]), 4) == (2, 4)
        assert validate_dimension_pair((np.int64(1), np.int64(2)), 4) == (1, 2)

    def test_reversed_pair_is_invalid(self):
        with pytest.raises(InvalidDimensionPairError):
            validate_dimension_pair([3, 1], 4)

    @pytest.mark.parametrize("pair", [(2, 2), (0, 1), (1, 5), (1, 2, 3), (1.0, 2.0), (True, 2)])
    def test_non_canonical(self, pair):
        with pytest.raises(InvalidDimensionPairError):
            validate_dimension_pair(pair, 4)

    def test_string_is_invalid(self):
        with pytest.raises(InvalidDimensionPairError, match="sequence"):
            validate_dimension_pair("12", 4)

    @pytest.mark.parametrize("pair", [(1,), [3], (1, None), (None, 2), ()])
    def test_incomplete(self, pair):
        with pytest.raises(IncompleteDimensionSelectionError):
            validate_dimension_pair(pair, 4)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            validate_dimension_pair([3, 1], 4)


class TestDimensionLabels:
    def test_round_trip_of_a_label(self):
        assert dimension_label((1, 3)) == "1,3"
        assert parse_dimension_label("1,3") == (1, 3)
        assert parse_dimension_label(" 2 , 4 ") == (2, 4)

    def test_blank_entry_is_incomplete(self):
        pair = parse_dimension_label("1,")
        assert pair == (1, None)
        with pytest.raises(IncompleteDimensionSelectionError):
            validate_dimension_pair(pair, 4)

    def test_garbage(self):
        with pytest.raises(InvalidDimensionPairError, match="Cannot parse"):
            parse_dimension_label("a,b")
