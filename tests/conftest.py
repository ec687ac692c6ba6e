"""Shared fixtures: the four-sample dataset and a recording backend."""

import pytest


POINTS = [
    [0, 1, 2, 3],
    [3, 2, 4, 1],
    [2, 3, 1, 2],
    [0, 0, 3, 7],
]

METADATA = [
    {"celltype": "B2", "tissue": "BM"},
    {"celltype": "Mac", "tissue": "BM"},
    {"celltype": "B2", "tissue": "LN"},
    {"celltype": "Mac", "tissue": "LN"},
]


class RecordingBackend:
    """Stands in for the Plotly backend and records every instruction."""

    def __init__(self):
        self.draws = []
        self.redraws = []
        self.restyles = []
        self.hovers = []

    def draw(self, snapshot):
        self.draws.append(snapshot)

    def redraw(self, snapshot):
        self.redraws.append(snapshot)

    def restyle(self, update, trace_indices=None):
        self.restyles.append((update, trace_indices))

    def hover(self, points):
        self.hovers.append(points)


@pytest.fixture
def points():
    return [list(p) for p in POINTS]


@pytest.fixture
def metadata():
    return [dict(m) for m in METADATA]


@pytest.fixture
def host():
    return object()


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def make_view(points, metadata, host, backend):
    from py_mds_visualizer import MDSView

    def _make(**kwargs):
        kwargs.setdefault("metadata", metadata)
        kwargs.setdefault("backend", backend)
        return MDSView(kwargs.pop("points", points), kwargs.pop("host", host), **kwargs)

    return _make
