"""
Suppression of overlapping text labels.

Labels are compared pairwise in draw order. A label that is still visible
hides every later label with different text whose anchor falls inside its
bounding box (grown by a small margin). Earlier labels always win.

Screen coordinates follow the browser convention: x grows to the right,
y grows downwards, and a box's (x, y) is its top-left corner, which is also
the label's anchor point.
"""

from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .config import DEFAULT_LAYOUT, get_path
from .traces import Trace


LABEL_MARGIN = 2.0

# Plotly defaults, used when neither the layout nor the style says otherwise
_DEFAULT_MARGIN = {"l": 80, "r": 80, "t": 100, "b": 80}
_DEFAULT_FONT_SIZE = 12
_DEFAULT_MARKER_SIZE = 6
_AUTORANGE_PAD = 0.05
_DEFAULT_TEXTPOSITION = "middle right"


@dataclass(frozen=True)
class LabelBox:
    """Screen-space extent of one rendered label."""
    x: float
    y: float
    width: float
    height: float
    text: str


def resolve_overlapping_labels(
    boxes: Sequence[LabelBox],
    margin: float = LABEL_MARGIN,
) -> Tuple[bool, ...]:
    """Decide which labels to hide.

    Args:
        boxes: Label boxes in draw order
        margin: Padding added around each box before testing containment

    Returns:
        One flag per box, True where the label should be hidden
    """
    n = len(boxes)
    if n == 0:
        return ()

    xs = np.array([b.x for b in boxes], dtype=float)
    ys = np.array([b.y for b in boxes], dtype=float)
    texts = np.array([b.text for b in boxes], dtype=object)
    hidden = np.zeros(n, dtype=bool)

    for a, box in enumerate(boxes):
        if hidden[a]:
            continue
        xa0 = box.x - margin
        ya0 = box.y - margin
        xa1 = xa0 + box.width + margin
        ya1 = ya0 + box.height + margin

        later = slice(a + 1, n)
        overlaps = (
            (texts[later] != box.text)
            & (xs[later] >= xa0) & (xs[later] <= xa1)
            & (ys[later] >= ya0) & (ys[later] <= ya1)
        )
        hidden[later] |= overlaps

    return tuple(bool(h) for h in hidden)


def _axis_range(axis: Mapping, values: np.ndarray) -> Tuple[float, float]:
    explicit = axis.get("range") if isinstance(axis, Mapping) else None
    if explicit is not None and len(explicit) == 2:
        return float(explicit[0]), float(explicit[1])
    if values.size == 0:
        return -1.0, 1.0
    lo, hi = float(np.min(values)), float(np.max(values))
    if hi == lo:
        return lo - 1.0, hi + 1.0
    pad = (hi - lo) * _AUTORANGE_PAD
    return lo - pad, hi + pad


def estimate_label_boxes(
    traces: Sequence[Trace],
    layout: Optional[Mapping[str, Any]] = None,
    char_width: float = 0.6,
) -> List[LabelBox]:
    """Approximate where Plotly will draw each label.

    Each label is placed around its marker according to the trace's
    ``textposition`` ("middle right" when unset), with a width of
    ``char_width * font_size`` per character. Backends that can measure rendered text should pass real
    boxes to resolve_overlapping_labels instead.

    Args:
        traces: Traces in draw order
        layout: Merged Plotly layout (size, margins, axis ranges)
        char_width: Average glyph width as a fraction of font size

    Returns:
        One box per label, in draw order (trace by trace, point by point)
    """
    layout = layout or DEFAULT_LAYOUT
    width = float(layout.get("width") or DEFAULT_LAYOUT["width"])
    height = float(layout.get("height") or DEFAULT_LAYOUT["height"])
    margin = dict(_DEFAULT_MARGIN)
    if isinstance(layout.get("margin"), Mapping):
        margin.update(layout["margin"])

    plot_w = max(width - margin["l"] - margin["r"], 1.0)
    plot_h = max(height - margin["t"] - margin["b"], 1.0)

    all_x = np.concatenate([t.x for t in traces]) if traces else np.empty(0)
    all_y = np.concatenate([t.y for t in traces]) if traces else np.empty(0)
    x0, x1 = _axis_range(layout.get("xaxis") or {}, all_x)
    y0, y1 = _axis_range(layout.get("yaxis") or {}, all_y)

    boxes = []
    for trace in traces:
        font = float(get_path(trace.style, ("textfont", "size"), _DEFAULT_FONT_SIZE))
        marker = get_path(trace.style, ("marker", "size"), _DEFAULT_MARKER_SIZE)
        marker = float(marker) if np.isscalar(marker) else _DEFAULT_MARKER_SIZE

        positions = trace.style.get("textposition", _DEFAULT_TEXTPOSITION)
        if isinstance(positions, str) or positions is None:
            positions = [positions] * len(trace.text)

        px = margin["l"] + (trace.x - x0) / (x1 - x0) * plot_w
        py = margin["t"] + (y1 - trace.y) / (y1 - y0) * plot_h
        for sx, sy, text, position in zip(px, py, trace.text, positions):
            text_w = len(text) * font * char_width
            dx, dy = _text_offset(position, text_w, font, marker)
            boxes.append(
                LabelBox(
                    x=float(sx + dx),
                    y=float(sy + dy),
                    width=text_w,
                    height=font,
                    text=text,
                )
            )
    return boxes


def _text_offset(position: Optional[str], width: float, height: float, marker: float) -> Tuple[float, float]:
    """Offset of a label's top-left corner from its marker centre for a Plotly textposition."""
    parts = (position or _DEFAULT_TEXTPOSITION).split()
    if len(parts) == 2:
        vertical, horizontal = parts
    else:
        vertical, horizontal = "middle", parts[0]

    if horizontal == "left":
        dx = -marker / 2 - width
    elif horizontal == "center":
        dx = -width / 2
    else:
        dx = marker / 2

    if vertical == "top":
        dy = -marker / 2 - height
    elif vertical == "bottom":
        dy = marker / 2
    else:
        dy = -height / 2
    return dx, dy


def apply_hidden_labels(traces: Sequence[Trace], hidden: Sequence[bool]) -> List[Trace]:
    """Return copies of traces with hidden labels blanked.

    hidden is in the draw order produced by estimate_label_boxes.
    """
    total = sum(len(t.text) for t in traces)
    if len(hidden) != total:
        raise ValueError(f"Got {len(hidden)} label flags for {total} labels")

    result = []
    offset = 0
    for trace in traces:
        flags = hidden[offset:offset + len(trace.text)]
        offset += len(trace.text)
        text = ["" if h else t for t, h in zip(trace.text, flags)]
        result.append(replace(trace, text=text))
    return result
