"""
Dimension pair enumeration and validation.

Dimensions are 1-based, matching the axis titles shown to users
("Dimension 1", "Dimension 2", ...).
"""

from typing import List, Sequence, Tuple

import numpy as np

from ..exceptions import IncompleteDimensionSelectionError, InvalidDimensionPairError


DimensionPair = Tuple[int, int]


def dimension_pairs(ndim: int) -> List[DimensionPair]:
    """Enumerate every canonical (i, j) pair with 1 <= i < j <= ndim.

    Pairs are ordered with i ascending in the outer loop and j ascending in
    the inner loop, so ``dimension_pairs(4)`` gives
    ``[(1, 2), (1, 3), (1, 4), (2, 3), (2, 4), (3, 4)]``.

    Args:
        ndim: Dimensionality of the points

    Returns:
        List of ndim * (ndim - 1) / 2 pairs
    """
    pairs = []
    for i in range(1, ndim + 1):
        for j in range(i + 1, ndim + 1):
            pairs.append((i, j))
    return pairs


def validate_dimension_pair(pair: Sequence, ndim: int) -> DimensionPair:
    """Check a requested axis pair against the canonical pairs for ndim.

    Args:
        pair: Requested (x, y) dimension indices, 1-based
        ndim: Dimensionality of the points

    Returns:
        The pair as a canonical tuple of ints

    Raises:
        IncompleteDimensionSelectionError: Only one axis index was given
        InvalidDimensionPairError: The pair is not a canonical pair for ndim
    """
    if pair is None:
        raise IncompleteDimensionSelectionError("No dimension pair supplied")
    if isinstance(pair, np.ndarray):
        pair = pair.tolist()
    if isinstance(pair, (str, bytes)) or not isinstance(pair, Sequence):
        raise InvalidDimensionPairError(f"Dimension pair must be a sequence, got {pair!r}")

    supplied = [p for p in pair if p is not None]
    if len(supplied) < 2 and len(pair) <= 2:
        raise IncompleteDimensionSelectionError(
            f"Both x and y dimensions must be supplied, got {list(pair)!r}"
        )
    if len(pair) != 2:
        raise InvalidDimensionPairError(f"Expected two dimensions, got {len(pair)}")

    candidate = []
    for p in pair:
        if isinstance(p, bool) or not isinstance(p, (int, np.integer)):
            raise InvalidDimensionPairError(f"Dimension indices must be integers, got {list(pair)!r}")
        candidate.append(int(p))

    candidate = tuple(candidate)
    if candidate not in dimension_pairs(ndim):
        raise InvalidDimensionPairError(
            f"{candidate} is not a valid dimension pair for {ndim} dimensions "
            f"(pairs must be ascending, between 1 and {ndim})"
        )
    return candidate


def dimension_label(pair: DimensionPair) -> str:
    """Selector label for a pair, e.g. ``"1,2"``."""
    return f"{pair[0]},{pair[1]}"


def parse_dimension_label(label: str) -> Tuple:
    """Parse a selector label back into a tuple.

    The result is not validated; pass it through validate_dimension_pair.
    Blank entries become None so that half-filled selections are reported
    as incomplete rather than invalid.
    """
    parts = []
    for part in str(label).split(","):
        part = part.strip()
        if not part:
            parts.append(None)
            continue
        try:
            parts.append(int(part))
        except ValueError:
            raise InvalidDimensionPairError(f"Cannot parse dimension pair {label!r}") from None
    return tuple(parts)
