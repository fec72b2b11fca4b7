"""Pillow-backed drawing surface and image helpers."""

import logging
from io import BytesIO
from pathlib import Path
from typing import Any

from PIL import Image, ImageDraw, ImageFilter

from canvaswriter.fonts import resolve_font
from canvaswriter.render.pdf import encode_pdf
from canvaswriter.render.surface import Shadow, Surface, TextMetrics
from canvaswriter.types import Color, LineJoin, TextAlign

logger = logging.getLogger(__name__)

# Canvas alignment to Pillow anchor (horizontal + baseline)
TEXT_ANCHORS: dict[str, str] = {
    "start": "ls",
    "left": "ls",
    "center": "ms",
    "right": "rs",
    "end": "rs",
}

PIL_FORMATS: dict[str, str] = {
    "image/png": "PNG",
    "image/jpeg": "JPEG",
    "image/webp": "WEBP",
    "image/gif": "GIF",
    "image/bmp": "BMP",
    "image/tiff": "TIFF",
}

SUFFIX_MIME_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".pdf": "application/pdf",
}


def load_image_from_bytes(image_data: bytes) -> Image.Image:
    """
    Load image from raw bytes.

    Args:
        image_data: Raw image bytes (JPEG, PNG, etc.).

    Returns:
        PIL Image object.
    """
    return Image.open(BytesIO(image_data))


def save_image_to_bytes(img: Image.Image, format: str = "PNG", **params: Any) -> bytes:
    """
    Save PIL Image to bytes.

    Args:
        img: PIL Image object.
        format: Image format (PNG, JPEG, etc.).
        **params: Encoder parameters (quality, optimize, ...).

    Returns:
        Image as bytes.
    """
    buffer = BytesIO()
    img.save(buffer, format=format, **params)
    return buffer.getvalue()


def mime_type_for_path(path: Path, default: str | None = None) -> str:
    """
    Guess the export type from a file suffix.

    Args:
        path: Output path.
        default: Type returned for missing or unknown suffixes.

    Raises:
        ValueError: If the suffix is unknown and no default is given.
    """
    mime_type = SUFFIX_MIME_TYPES.get(path.suffix.lower())
    if mime_type is None and default is not None:
        logger.debug(f"No known image type for '{path.name}', using {default}")
        return default
    if mime_type is None:
        raise ValueError(
            f"Can't infer image type from '{path.name}'. "
            f"Supported extensions: {', '.join(sorted(SUFFIX_MIME_TYPES))}"
        )
    return mime_type


def _anchor(align: TextAlign) -> str:
    return TEXT_ANCHORS.get(align, "ls")


class PillowSurface(Surface):
    """Drawing surface over a PIL image."""

    def __init__(self, image: Image.Image) -> None:
        """
        Wrap an existing image. Drawing happens in place.

        Args:
            image: Target image. RGBA keeps transparency and soft shadows exact.
        """
        self.image = image
        self._draw = ImageDraw.Draw(image)

    @classmethod
    def new(cls, width: int, height: int, background: Color | None = None) -> "PillowSurface":
        """
        Allocate a new RGBA surface.

        Args:
            width: Width in pixels.
            height: Height in pixels.
            background: Initial fill. None = fully transparent.
        """
        return cls(Image.new("RGBA", (width, height), background or (0, 0, 0, 0)))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def measure_text(self, text: str, font: str, align: TextAlign = "start") -> TextMetrics:
        pil_font = resolve_font(font)
        _, descent = pil_font.getmetrics()

        if not text:
            return TextMetrics(width=0.0, left_bearing=0.0, ascent=0.0, em_descent=float(descent))

        # Bounding box is relative to the anchor point, y grows downward
        left, top, _, _ = pil_font.getbbox(text, anchor=_anchor(align))
        return TextMetrics(
            width=float(pil_font.getlength(text)),
            left_bearing=float(-left),
            ascent=float(-top),
            em_descent=float(descent),
        )

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
        pil_font = resolve_font(font)

        if shadow is not None and shadow.visible:
            self._draw_shadow(text, x, y, pil_font, align, shadow)

        self._draw.text((x, y), text, font=pil_font, fill=style, anchor=_anchor(align))

    def _draw_shadow(
        self,
        text: str,
        x: float,
        y: float,
        pil_font: Any,
        align: TextAlign,
        shadow: Shadow,
        stroke_width: int = 0,
    ) -> None:
        """Render the glyphs (or their outline) on a layer, blur it and composite it underneath."""
        layer = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        ImageDraw.Draw(layer).text(
            (x + shadow.offset_x, y + shadow.offset_y),
            text, font=pil_font, fill=shadow.color, anchor=_anchor(align),
            stroke_width=stroke_width, stroke_fill=shadow.color,
        )

        # Canvas blur is twice the Gaussian standard deviation
        if shadow.blur > 0:
            layer = layer.filter(ImageFilter.GaussianBlur(shadow.blur / 2))

        if self.image.mode == "RGBA":
            self.image.alpha_composite(layer)
        else:
            self.image.paste(layer, (0, 0), layer)

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
        # Canvas strokes straddle the outline, Pillow strokes grow outward only
        pil_width = max(1, round(width / 2))
        if join != "round":
            logger.debug(f"Pillow strokes always use round joins, ignoring '{join}'")

        pil_font = resolve_font(font)
        if shadow is not None and shadow.visible:
            self._draw_shadow(text, x, y, pil_font, align, shadow, stroke_width=pil_width)

        self._draw.text(
            (x, y), text,
            font=pil_font, fill=style, anchor=_anchor(align),
            stroke_width=pil_width, stroke_fill=style,
        )

    def fill_rect(self, x: float, y: float, width: float, height: float, style: Color) -> None:
        if width <= 0 or height <= 0:
            return
        # Pillow rectangles include both corner pixels
        self._draw.rectangle([(x, y), (x + width - 1, y + height - 1)], fill=style)

    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        """
        Draw an image scaled into the given rectangle.

        Args:
            image: PIL Image or raw encoded bytes.
            x, y: Top-left corner.
            width, height: Target size.
        """
        if isinstance(image, (bytes, bytearray)):
            image = load_image_from_bytes(bytes(image))

        size = (max(1, round(width)), max(1, round(height)))
        scaled = image.convert("RGBA").resize(size, Image.Resampling.LANCZOS)
        position = (round(x), round(y))

        if self.image.mode == "RGBA" and position[0] >= 0 and position[1] >= 0:
            self.image.alpha_composite(scaled, dest=position)
        else:
            self.image.paste(scaled, position, scaled)

    def encode(self, mime_type: str = "image/png", **options: Any) -> bytes:
        """
        Encode the surface.

        Args:
            mime_type: One of PIL_FORMATS or "application/pdf".
            **options: Pillow save parameters, or encode_pdf() keywords for PDF.

        Raises:
            ValueError: If the type is not supported.
        """
        if mime_type == "application/pdf":
            return encode_pdf(self.image, **options)

        pil_format = PIL_FORMATS.get(mime_type)
        if pil_format is None:
            raise ValueError(f"Unsupported image type: {mime_type}")

        img = self.image
        # JPEG has no alpha channel
        if pil_format == "JPEG" and img.mode not in ("RGB", "L"):
            img = img.convert("RGB")

        return save_image_to_bytes(img, pil_format, **options)
