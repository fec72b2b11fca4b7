"""Text layout and wrapping onto raster images."""

__version__ = "0.1.0"

from canvaswriter.config import Config, StrokeOptions, WriteOptions, load_config
from canvaswriter.fonts import register_fonts, resolve_font
from canvaswriter.render import PillowSurface, Surface, TextMetrics
from canvaswriter.utils.text import hard_wrap, word_wrap
from canvaswriter.writer import CanvasWriter, ExportError, LineRecord

__all__ = [
    "CanvasWriter",
    "Config",
    "ExportError",
    "LineRecord",
    "PillowSurface",
    "StrokeOptions",
    "Surface",
    "TextMetrics",
    "WriteOptions",
    "hard_wrap",
    "load_config",
    "register_fonts",
    "resolve_font",
    "word_wrap",
]
