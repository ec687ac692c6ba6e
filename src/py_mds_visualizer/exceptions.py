"""
Exception types raised by the projection view engine.

Construction errors are fatal (no view is created). Transition errors reject
the single operation and leave the current view state untouched.
"""


class MDSVisError(Exception):
    """Base class for all py_mds_visualizer errors."""


class MissingCoordinatesError(MDSVisError, ValueError):
    """No coordinates (or an empty coordinate sequence) were supplied."""


class MissingHostError(MDSVisError, ValueError):
    """No host surface was supplied to draw into."""


class MalformedCoordinatesError(MDSVisError, ValueError):
    """Coordinates are not a rectangular 2-D numeric array."""


class MetadataLengthError(MDSVisError, ValueError):
    """Metadata records are not parallel to the coordinates."""


class IncompleteDimensionSelectionError(MDSVisError, ValueError):
    """Only one of the two axis indices was supplied."""


class InvalidDimensionPairError(MDSVisError, ValueError):
    """The dimension pair is not one of the canonical ascending pairs."""


class UnknownGroupKeyError(MDSVisError, KeyError):
    """The group key is not a metadata field of this dataset."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class InvalidGroupIndexError(MDSVisError, IndexError):
    """A group index does not name one of the current groups."""
