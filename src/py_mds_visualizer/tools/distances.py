"""
Ranking of points by their distance to a chosen point.

Distances are Euclidean and use every dimension, not only the two being
displayed, so the ranking does not change when the axes do.
"""

import numpy as np
from scipy.spatial.distance import cdist


def rank_by_distance(coords: np.ndarray, index: int):
    """Order all points by distance from coords[index].

    Ties (including duplicates of the reference point) keep input order.

    Args:
        coords: M x N coordinate array
        index: Row of the reference point

    Returns:
        Tuple of (indices, distances), both arrays of length M
    """
    coords = np.asarray(coords, dtype=float)
    if not 0 <= index < len(coords):
        raise IndexError(f"Point index {index} out of range for {len(coords)} points")

    distances = cdist(coords[index:index + 1], coords, metric="euclidean").ravel()
    order = np.argsort(distances, kind="stable")
    return order, distances[order]
