"""Tests for distance ranking."""

import numpy as np
import pytest

from py_mds_visualizer.tools.distances import rank_by_distance


class TestRankByDistance:
    def test_ordering(self):
        coords = np.array([[0.0, 0.0], [3.0, 4.0], [1.0, 0.0]])
        order, distances = rank_by_distance(coords, 0)
        assert order.tolist() == [0, 2, 1]
        np.testing.assert_allclose(distances, [0.0, 1.0, 5.0])

    def test_uses_every_dimension(self):
        coords = [[0, 0, 0], [1, 0, 0], [0, 0, 3]]
        order, _ = rank_by_distance(coords, 0)
        assert order.tolist() == [0, 1, 2]

    def test_ties_keep_input_order(self):
        coords = [[1, 1], [0, 0], [1, 1], [2, 2]]
        order, _ = rank_by_distance(coords, 1)
        assert order.tolist() == [1, 0, 2, 3]

    @pytest.mark.parametrize("index", [-1, 3])
    def test_out_of_range(self, index):
        with pytest.raises(IndexError):
            rank_by_distance([[0, 0], [1, 1], [2, 2]], index)
