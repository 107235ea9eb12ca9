"""
Freehand signature capture rendered to a base64 PNG data URI with Pillow.
"""

from __future__ import annotations

import base64
import io
import logging
from typing import Callable, List, Optional, Tuple

from PIL import Image, ImageColor, ImageDraw

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Stroke = Tuple[Point, ...]

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


class SignaturePadError(RuntimeError):
    """Raised when stroke events arrive out of order."""


class SignaturePad:
    """
    Drawing surface that accumulates strokes and renders them on ``save()``.

    ``on_begin`` fires when a stroke starts and ``on_end`` when it finishes;
    the form uses them to suspend and resume scrolling. ``reset()`` rebuilds
    the surface from scratch and bumps ``generation``.
    """

    def __init__(
        self,
        width: int = 600,
        height: int = 240,
        pen_color: str = "#000",
        min_width: float = 2.0,
        max_width: float = 3.5,
        dot_size: float = 2,
        on_begin: Optional[Callable[[], None]] = None,
        on_end: Optional[Callable[[], None]] = None,
    ):
        self.width = width
        self.height = height
        self.pen_color = pen_color
        self.min_width = min_width
        self.max_width = max_width
        self.dot_size = dot_size
        self.on_begin = on_begin
        self.on_end = on_end
        self.generation = 0
        self._strokes: List[Stroke] = []
        self._current: Optional[List[Point]] = None

    @property
    def strokes(self) -> Tuple[Stroke, ...]:
        """Completed strokes, oldest first."""
        return tuple(self._strokes)

    @property
    def is_drawing(self) -> bool:
        return self._current is not None

    @property
    def is_empty(self) -> bool:
        return not self._strokes and not self._current

    def begin_stroke(self, x: float, y: float) -> None:
        if self._current is not None:
            raise SignaturePadError("A stroke is already in progress")
        self._current = [(x, y)]
        if self.on_begin:
            self.on_begin()

    def add_point(self, x: float, y: float) -> None:
        if self._current is None:
            raise SignaturePadError("No stroke in progress")
        self._current.append((x, y))

    def end_stroke(self) -> None:
        if self._current is None:
            raise SignaturePadError("No stroke in progress")
        self._strokes.append(tuple(self._current))
        self._current = None
        if self.on_end:
            self.on_end()

    def draw(self, points: List[Point]) -> None:
        """Record a whole stroke in one call."""
        if not points:
            return
        first, *rest = points
        self.begin_stroke(*first)
        for point in rest:
            self.add_point(*point)
        self.end_stroke()

    def reset(self) -> None:
        """Discard every stroke, including one in progress, and start a new surface."""
        self._strokes = []
        self._current = None
        self.generation += 1

    def _pen_width(self) -> int:
        return max(1, round((self.min_width + self.max_width) / 2))

    def render(self) -> Image.Image:
        """Render completed strokes onto a transparent RGBA canvas."""
        image = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
        canvas = ImageDraw.Draw(image)
        color = ImageColor.getrgb(self.pen_color)
        pen_width = self._pen_width()
        radius = max(self.dot_size, pen_width / 2)

        for stroke in self._strokes:
            if len(stroke) == 1:
                x, y = stroke[0]
                canvas.ellipse((x - radius, y - radius, x + radius, y + radius), fill=color)
            else:
                canvas.line(stroke, fill=color, width=pen_width, joint="curve")
        return image

    def save(self) -> str:
        """
        Return the signature as a ``data:image/png;base64,...`` string.

        An empty pad yields ``""``.
        """
        if not self._strokes:
            return ""
        buffer = io.BytesIO()
        self.render().save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        logger.debug("signature_rendered", extra={"strokes": len(self._strokes)})
        return PNG_DATA_URI_PREFIX + encoded


def decode_signature(data_uri: str) -> Image.Image:
    """Load a signature produced by ``SignaturePad.save`` back into an image."""
    if not data_uri.startswith(PNG_DATA_URI_PREFIX):
        raise ValueError("Signature must be a PNG data URI")
    raw = base64.b64decode(data_uri[len(PNG_DATA_URI_PREFIX):])
    return Image.open(io.BytesIO(raw))
