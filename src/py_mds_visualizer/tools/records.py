"""
Binding coordinates to metadata, and partitioning the bound records into groups.

The record order established here (the position of each point in the input)
is the tie-break order used by every later stage: trace point order, group
order and label draw order all derive from it.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..exceptions import (
    MalformedCoordinatesError,
    MetadataLengthError,
    MissingCoordinatesError,
    MissingHostError,
    UnknownGroupKeyError,
)


UNGROUPED_NAME = "all points"


@dataclass(frozen=True)
class BoundRecord:
    """One point paired with its (possibly empty) metadata record."""
    index: int
    point: Tuple[float, ...]
    metadata: Mapping[str, Any]

    def coordinate(self, dimension: int) -> float:
        """Value along a 1-based dimension."""
        return self.point[dimension - 1]


GroupAssignment = Dict[Any, Tuple[BoundRecord, ...]]


@dataclass(frozen=True, eq=False)
class RecordSet:
    """Immutable result of binding: records plus array/frame views of them."""
    records: Tuple[BoundRecord, ...]
    coords: np.ndarray
    metadata_frame: Optional[pd.DataFrame] = None

    @property
    def has_metadata(self) -> bool:
        return self.metadata_frame is not None

    @property
    def ndim(self) -> int:
        return int(self.coords.shape[1])

    def __len__(self) -> int:
        return len(self.records)


def _as_coordinate_array(points) -> np.ndarray:
    if points is None:
        raise MissingCoordinatesError("No coordinates supplied")
    if isinstance(points, pd.DataFrame):
        points = points.to_numpy()

    try:
        coords = np.asarray(points, dtype=float)
    except (TypeError, ValueError) as e:
        if hasattr(points, "__len__") and len(points) == 0:
            raise MissingCoordinatesError("Coordinate sequence is empty") from None
        raise MalformedCoordinatesError(f"Coordinates must be a rectangular numeric array: {e}") from None

    if coords.size == 0 and (coords.ndim < 2 or coords.shape[0] == 0):
        raise MissingCoordinatesError("Coordinate sequence is empty")
    if coords.ndim != 2:
        raise MalformedCoordinatesError(
            f"Coordinates must be 2-D (points x dimensions), got shape {coords.shape}"
        )
    return coords


def bind_records(
    points,
    host,
    metadata: Optional[Sequence[Optional[Mapping[str, Any]]]] = None,
) -> RecordSet:
    """Pair every point with its metadata record, preserving input order.

    Args:
        points: Sequence of M points, each a sequence of N numbers (or an
            M x N array)
        host: Surface the view will draw into; only its presence is checked
        metadata: Optional sequence of M mappings (None entries are treated
            as empty records)

    Returns:
        RecordSet with M BoundRecords

    Raises:
        MissingCoordinatesError: points is None or empty
        MissingHostError: host is None
        MalformedCoordinatesError: points is ragged or non-numeric
        MetadataLengthError: metadata length differs from points
    """
    coords = _as_coordinate_array(points)
    if host is None:
        raise MissingHostError("No host surface supplied to draw into")

    coords = coords.copy()
    coords.setflags(write=False)

    frame = None
    meta_records: List[Mapping[str, Any]] = [{} for _ in range(len(coords))]
    if metadata is not None:
        if isinstance(metadata, pd.DataFrame):
            metadata = metadata.to_dict("records")
        metadata = list(metadata)
        if len(metadata) != len(coords):
            raise MetadataLengthError(
                f"Got {len(metadata)} metadata records for {len(coords)} points"
            )
        meta_records = [dict(m) if m is not None else {} for m in metadata]
        frame = pd.DataFrame.from_records(meta_records, index=range(len(coords)))

    records = tuple(
        BoundRecord(index=i, point=tuple(float(v) for v in row), metadata=meta)
        for i, (row, meta) in enumerate(zip(coords, meta_records))
    )
    return RecordSet(records=records, coords=coords, metadata_frame=frame)


class GroupingEngine:
    """Partitions a RecordSet by a metadata field.

    Group names are memoised for the current record set and dropped by
    replace_records.
    """

    def __init__(self, record_set: RecordSet):
        self._record_set = record_set
        self._group_names: Optional[List[str]] = None

    @property
    def record_set(self) -> RecordSet:
        return self._record_set

    def replace_records(self, record_set: RecordSet) -> None:
        """Swap in a freshly bound record set and invalidate the memo."""
        self._record_set = record_set
        self._group_names = None

    def group_names(self) -> List[str]:
        """Sorted metadata field names of the first record."""
        if self._group_names is None:
            rs = self._record_set
            if not rs.has_metadata or len(rs) == 0:
                self._group_names = []
            else:
                self._group_names = sorted(rs.records[0].metadata.keys())
        return list(self._group_names)

    def default_group_key(self) -> Optional[str]:
        names = self.group_names()
        return names[0] if names else None

    def validate_group_key(self, group_key: Optional[str]) -> Optional[str]:
        """Return group_key unchanged if usable, else raise UnknownGroupKeyError.

        None (ungrouped) is always accepted.
        """
        if group_key is None:
            return None
        if not self._record_set.has_metadata:
            raise UnknownGroupKeyError(f"Cannot group by {group_key!r}: no metadata supplied")
        names = self.group_names()
        if group_key not in names:
            raise UnknownGroupKeyError(
                f"Unknown group key {group_key!r}; available: {names}"
            )
        return group_key

    def partition(self, group_key: Optional[str]) -> GroupAssignment:
        """Split the records by the values of group_key.

        Groups appear in the order their value is first seen while scanning
        records by index. Without metadata (or with group_key None) there is
        a single implicit group named UNGROUPED_NAME.
        """
        self.validate_group_key(group_key)
        records = self._record_set.records
        if group_key is None:
            return {UNGROUPED_NAME: records}

        # Raw values; the frame column is dtype-inferred (1 -> 1.0, None -> nan)
        values = pd.Series([r.metadata.get(group_key) for r in records], dtype=object)
        codes, uniques = pd.factorize(values, use_na_sentinel=False)

        members: List[List[BoundRecord]] = [[] for _ in range(len(uniques))]
        for record, code in zip(records, codes):
            members[code].append(record)

        # Key each group by its first member's own value
        return {group[0].metadata.get(group_key): tuple(group) for group in members}
