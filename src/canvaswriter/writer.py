"""Incremental text writer over a drawing surface."""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

from PIL import Image

from canvaswriter.config import StrokeOptions, WriteOptions, coerce_options, coerce_stroke_options
from canvaswriter.render.image import PillowSurface, mime_type_for_path
from canvaswriter.render.surface import Shadow, Surface
from canvaswriter.types import Color
from canvaswriter.utils.text import TextInput, hard_wrap, split_lines, word_wrap

logger = logging.getLogger(__name__)

OptionsArg = Union[WriteOptions, Mapping[str, Any], None]
StrokeArg = Union[StrokeOptions, Mapping[str, Any], None]


class ExportError(OSError):
    """Encoding or saving the surface failed. The original error is the __cause__."""


@dataclass(frozen=True)
class LineRecord:
    """
    One line written by a CanvasWriter.

    Attributes:
        text: The rendered text.
        x: Computed draw x (alignment point) in surface coordinates.
        y: Computed baseline y in surface coordinates.
        options: Write options used for the line.
        stroke_options: Stroke options used for the line.
    """
    text: str
    x: float
    y: float
    options: WriteOptions
    stroke_options: StrokeOptions


class CanvasWriter:
    """
    Writes lines of text top to bottom onto a drawing surface.

    The writer keeps a vertical cursor and a log of every line it has drawn. All
    write methods return the writer so calls can be chained:

        writer = CanvasWriter(PillowSurface.new(400, 300))
        writer.draw_background("navy").write("Hello world!", 200, {"font": "24px serif"})
        await writer.save_file("hello.png")
    """

    def __init__(self, surface: Union[Surface, Image.Image]) -> None:
        """
        Initialize writer.

        Args:
            surface: Drawing surface, or a PIL image to draw on in place.
        """
        if isinstance(surface, Image.Image):
            surface = PillowSurface(surface)

        self.surface = surface
        self._cursor = 0.0
        self._records: list[LineRecord] = []

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def cursor(self) -> float:
        """Vertical position the next line is laid out from."""
        return self._cursor

    @property
    def last_write(self) -> Optional[LineRecord]:
        """The most recently written line, or None."""
        return self._records[-1] if self._records else None

    @property
    def line_count(self) -> int:
        return len(self._records)

    @property
    def lines(self) -> tuple[LineRecord, ...]:
        """All written lines in order."""
        return tuple(self._records)

    def __str__(self) -> str:
        return "\n".join(record.text for record in self._records)

    def __repr__(self) -> str:
        return (
            f"<CanvasWriter {self.surface.width}x{self.surface.height} "
            f"lines={self.line_count} cursor={self._cursor:.1f}>"
        )

    # ========================================================================
    # Backgrounds
    # ========================================================================

    def draw_background(self, style: Color) -> CanvasWriter:
        """
        Fill the whole surface.

        Args:
            style: Fill color.

        Returns:
            This writer.
        """
        self.surface.fill_rect(0, 0, self.surface.width, self.surface.height, style)
        return self

    def draw_background_image(self, image: Union[bytes, Image.Image]) -> CanvasWriter:
        """
        Draw an image stretched over the whole surface.

        Args:
            image: Encoded image bytes or a PIL image.

        Returns:
            This writer.
        """
        self.surface.draw_image(image, 0, 0, self.surface.width, self.surface.height)
        return self

    # ========================================================================
    # Writing
    # ========================================================================

    def write_text(self, text: str, options: OptionsArg = None, stroke_options: StrokeArg = None) -> CanvasWriter:
        """
        Write a single line of text below the previous one.

        Does nothing once the writer holds options.max_lines lines (when positive).

        Args:
            text: Text to write. Newlines are not interpreted.
            options: Write options (model or mapping).
            stroke_options: Stroke options (model or mapping). Any set field enables the outline.

        Returns:
            This writer.
        """
        options = coerce_options(options)
        stroke_options = coerce_stroke_options(stroke_options)

        if options.max_lines > 0 and self.line_count >= options.max_lines:
            logger.debug(f"Skipping line, max_lines={options.max_lines} reached")
            return self

        spacing = options.spacing if self._cursor != 0 else 0
        metrics = self.surface.measure_text(text, options.font, options.align)
        bearing = 0 if options.centered else metrics.left_bearing

        if stroke_options.active:
            stroke_width = stroke_options.effective_width
            x = options.x + (0 if options.centered else bearing + stroke_width)
            y = self._cursor + metrics.ascent + stroke_width + spacing + options.y
            advance = metrics.ascent + metrics.em_descent + stroke_width + spacing
        else:
            x = options.x + bearing
            y = self._cursor + metrics.ascent + spacing + options.y
            advance = metrics.ascent + metrics.em_descent + spacing

        self._records.append(LineRecord(text, x, y, options, stroke_options))

        shadow = self._shadow(options)
        if stroke_options.active:
            self.surface.stroke_text(
                text, x, y, options.font,
                stroke_options.effective_style,
                stroke_options.effective_width,
                stroke_options.effective_join,
                options.align,
                shadow,
            )
        self.surface.fill_text(text, x, y, options.font, options.style, options.align, shadow)

        self._cursor += advance
        logger.debug(f"Wrote line {self.line_count} at ({x:.1f}, {y:.1f}), cursor now {self._cursor:.1f}")
        return self

    @staticmethod
    def _shadow(options: WriteOptions) -> Optional[Shadow]:
        if options.shadow_color is None:
            return None
        return Shadow(
            color=options.shadow_color,
            offset_x=options.shadow_x,
            offset_y=options.shadow_y,
            blur=options.shadow_blur,
        )

    def write_lines(self, lines: TextInput, options: OptionsArg = None, stroke_options: StrokeArg = None) -> CanvasWriter:
        """
        Write several lines without wrapping.

        Args:
            lines: Newline-separated string or sequence of lines.
            options: Write options for every line.
            stroke_options: Stroke options for every line.

        Returns:
            This writer.
        """
        options = coerce_options(options)
        stroke_options = coerce_stroke_options(stroke_options)

        for line in split_lines(lines):
            self.write_text(line, options, stroke_options)
        return self

    def _measurer(self, options: WriteOptions) -> Callable[[str], float]:
        return lambda text: self.surface.measure_text(text, options.font, options.align).width

    def _wrap_and_write(
        self,
        wrap: Callable[[str, float, Callable[[str], float]], list[str]],
        text: str,
        max_width: Optional[float],
        options: OptionsArg,
        stroke_options: StrokeArg,
    ) -> CanvasWriter:
        options = coerce_options(options)
        if max_width is None:
            max_width = self.surface.width

        pieces = wrap(text, max_width, self._measurer(options))
        return self.write_lines(pieces, options, stroke_options)

    def write_wrapped(
        self,
        text: str,
        max_width: Optional[float] = None,
        options: OptionsArg = None,
        stroke_options: StrokeArg = None,
    ) -> CanvasWriter:
        """
        Write one line, breaking it anywhere so every piece fits max_width.

        Args:
            text: Single logical line.
            max_width: Maximum width. Defaults to the surface width.
            options: Write options.
            stroke_options: Stroke options.

        Returns:
            This writer.
        """
        return self._wrap_and_write(hard_wrap, text, max_width, options, stroke_options)

    def write_wrapped_lines(
        self,
        lines: TextInput,
        max_width: Optional[float] = None,
        options: OptionsArg = None,
        stroke_options: StrokeArg = None,
    ) -> CanvasWriter:
        """Hard-wrap and write each of several lines."""
        for line in split_lines(lines):
            self.write_wrapped(line, max_width, options, stroke_options)
        return self

    def write_word_wrapped(
        self,
        text: str,
        max_width: Optional[float] = None,
        options: OptionsArg = None,
        stroke_options: StrokeArg = None,
    ) -> CanvasWriter:
        """
        Write one line, breaking at spaces so every piece fits max_width.

        Words wider than max_width on their own are broken between characters.

        Args:
            text: Single logical line.
            max_width: Maximum width. Defaults to the surface width.
            options: Write options.
            stroke_options: Stroke options.

        Returns:
            This writer.
        """
        return self._wrap_and_write(word_wrap, text, max_width, options, stroke_options)

    def write_word_wrapped_lines(
        self,
        lines: TextInput,
        max_width: Optional[float] = None,
        options: OptionsArg = None,
        stroke_options: StrokeArg = None,
    ) -> CanvasWriter:
        """Word-wrap and write each of several lines."""
        for line in split_lines(lines):
            self.write_word_wrapped(line, max_width, options, stroke_options)
        return self

    def write(
        self,
        lines: TextInput,
        max_width: Optional[float] = None,
        options: OptionsArg = None,
        stroke_options: StrokeArg = None,
    ) -> CanvasWriter:
        """Shortcut for write_word_wrapped_lines()."""
        return self.write_word_wrapped_lines(lines, max_width, options, stroke_options)

    # ========================================================================
    # Layout Queries
    # ========================================================================

    def is_fitting(self) -> bool:
        """
        Check whether the written text still fits vertically.

        Based on font metrics, so not exact for every font.
        """
        return self._cursor < self.surface.height

    def clone_from(self, other: CanvasWriter, limit: Optional[int] = None) -> CanvasWriter:
        """
        Re-write the lines of another writer onto this one.

        Lines are laid out again from this writer's cursor, not copied as pixels.

        Args:
            other: Writer to copy lines from.
            limit: How many lines to copy from the start. None copies all of them.

        Returns:
            This writer.
        """
        records = other.lines if limit is None else other.lines[:limit]
        for record in records:
            self.write_text(record.text, record.options, record.stroke_options)
        return self

    # ========================================================================
    # Export
    # ========================================================================

    async def buffer(self, mime_type: str = "image/png", **options: Any) -> bytes:
        """
        Encode the surface.

        Args:
            mime_type: Image type, e.g. "image/png", "image/jpeg", "application/pdf".
            **options: Encoder options.

        Returns:
            Encoded bytes.

        Raises:
            ExportError: If encoding fails.
        """
        try:
            return await asyncio.to_thread(self.surface.encode, mime_type, **options)
        except Exception as e:
            raise ExportError(f"Failed to encode surface as {mime_type}: {e}") from e

    async def data_url(self, mime_type: str = "image/png", **options: Any) -> str:
        """
        Encode the surface as a data: URL.

        Raises:
            ExportError: If encoding fails.
        """
        data = await self.buffer(mime_type, **options)
        return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"

    async def save_file(self, path: Union[str, Path], mime_type: Optional[str] = None, **options: Any) -> Path:
        """
        Encode the surface and write it to a file.

        Args:
            path: Output file path.
            mime_type: Image type. Inferred from the file suffix when omitted,
                       PNG when the suffix is missing or unknown.
            **options: Encoder options.

        Returns:
            Resolved path of the written file.

        Raises:
            ExportError: If encoding or writing fails.
        """
        path = Path(path)
        if mime_type is None:
            mime_type = mime_type_for_path(path, default="image/png")

        data = await self.buffer(mime_type, **options)

        try:
            await asyncio.to_thread(path.write_bytes, data)
        except OSError as e:
            raise ExportError(f"Failed to write {path}: {e}") from e

        resolved = path.resolve()
        logger.info(f"Saved {self.line_count} line(s) to {resolved}")
        return resolved
