"""Drawing surface abstraction used by the writer."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from canvaswriter.types import Color, LineJoin, TextAlign


@dataclass(frozen=True)
class TextMetrics:
    """
    Measurements of a run of text relative to its alignment point on the baseline.

    Attributes:
        width: Horizontal advance of the text.
        left_bearing: Distance from the alignment point to the left edge of the ink.
                      Positive when the ink extends left of the alignment point.
        ascent: Distance from the baseline to the top of the ink.
        em_descent: Font descent below the baseline (not glyph ink), so every line
                    of a font advances by the same amount below the baseline.
    """
    width: float
    left_bearing: float
    ascent: float
    em_descent: float

    @property
    def height(self) -> float:
        return self.ascent + self.em_descent


@dataclass(frozen=True)
class Shadow:
    """Drop shadow settings for filled and outlined text."""
    color: Color
    offset_x: float = 0
    offset_y: float = 0
    blur: float = 0

    @property
    def visible(self) -> bool:
        return bool(self.offset_x or self.offset_y or self.blur)


class Surface(ABC):
    """
    Base class for drawing surfaces.

    A surface owns the pixels and knows how to measure and draw text. Every drawing
    call receives its complete style, so no paint state is carried between calls.
    """

    @property
    @abstractmethod
    def width(self) -> int:
        """Surface width in pixels."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Surface height in pixels."""

    @abstractmethod
    def measure_text(self, text: str, font: str, align: TextAlign = "start") -> TextMetrics:
        """
        Measure text in the given font.

        Args:
            text: Text to measure.
            font: CSS-like font specification.
            align: Alignment the text will be drawn with.

        Returns:
            TextMetrics relative to the alignment point.
        """

    @abstractmethod
    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        font: str,
        style: Color,
        align: TextAlign = "start",
        shadow: Shadow | None = None,
    ) -> None:
        """Fill text with its baseline alignment point at (x, y)."""

    @abstractmethod
    def stroke_text(
        self,
        text: str,
        x: float,
        y: float,
        font: str,
        style: Color,
        width: float,
        join: LineJoin,
        align: TextAlign = "start",
        shadow: Shadow | None = None,
    ) -> None:
        """Outline text with its baseline alignment point at (x, y). The outline casts the shadow too."""

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, style: Color) -> None:
        """Fill a rectangle."""

    @abstractmethod
    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        """Draw an image scaled into the given rectangle."""

    @abstractmethod
    def encode(self, mime_type: str = "image/png", **options: Any) -> bytes:
        """
        Encode the surface contents.

        Args:
            mime_type: Output type, e.g. "image/png", "image/jpeg", "application/pdf".
            **options: Encoder options passed through to the backend.

        Returns:
            Encoded bytes.
        """
