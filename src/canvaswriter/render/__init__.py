"""Drawing surfaces and encoders."""

from canvaswriter.render.image import (
    PillowSurface,
    load_image_from_bytes,
    mime_type_for_path,
    save_image_to_bytes,
)
from canvaswriter.render.pdf import encode_pdf
from canvaswriter.render.surface import Shadow, Surface, TextMetrics

__all__ = [
    "PillowSurface",
    "Shadow",
    "Surface",
    "TextMetrics",
    "encode_pdf",
    "load_image_from_bytes",
    "mime_type_for_path",
    "save_image_to_bytes",
]
