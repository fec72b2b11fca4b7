"""Shared fixtures: a deterministic drawing surface for layout tests."""

from typing import Any

import pytest

from canvaswriter.render.surface import Shadow, Surface, TextMetrics

CHAR_WIDTH = 10
ASCENT = 12
DESCENT = 4
LEFT_BEARING = 1


class FakeSurface(Surface):
    """Monospace surface: every character is CHAR_WIDTH wide. Records every call."""

    def __init__(self, width: int = 100, height: int = 100) -> None:
        self._width = width
        self._height = height
        self.calls: list[tuple[Any, ...]] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def measure_text(self, text: str, font: str, align: str = "start") -> TextMetrics:
        width = CHAR_WIDTH * len(text)
        bearing = width / 2 if align == "center" else LEFT_BEARING
        return TextMetrics(
            width=width,
            left_bearing=bearing,
            ascent=ASCENT if text else 0,
            em_descent=DESCENT,
        )

    def fill_text(self, text, x, y, font, style, align="start", shadow: Shadow | None = None) -> None:
        self.calls.append(("fill_text", text, x, y, font, style, align, shadow))

    def stroke_text(self, text, x, y, font, style, width, join, align="start", shadow: Shadow | None = None) -> None:
        self.calls.append(("stroke_text", text, x, y, font, style, width, join, align, shadow))

    def fill_rect(self, x, y, width, height, style) -> None:
        self.calls.append(("fill_rect", x, y, width, height, style))

    def draw_image(self, image, x, y, width, height) -> None:
        self.calls.append(("draw_image", image, x, y, width, height))

    def encode(self, mime_type: str = "image/png", **options: Any) -> bytes:
        self.calls.append(("encode", mime_type, options))
        return b"fake:" + mime_type.encode()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


def monospace(text: str) -> float:
    """Width function matching FakeSurface."""
    return CHAR_WIDTH * len(text)
