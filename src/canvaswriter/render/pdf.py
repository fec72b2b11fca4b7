"""PDF export using ReportLab."""

import logging
from io import BytesIO

from PIL import Image as PILImage
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)


def pixels_to_points(pixels: float, dpi: float) -> float:
    """Convert a pixel length at the given DPI to PDF points."""
    return pixels / dpi * inch


def encode_pdf(image: PILImage.Image, dpi: float = 72.0, title: str | None = None) -> bytes:
    """
    Embed a raster image on a single PDF page of the same physical size.

    Args:
        image: Image to embed. Transparency is kept via an alpha mask.
        dpi: Resolution used to turn pixels into page size (72 = 1px per point).
        title: Optional document title.

    Returns:
        PDF document as bytes.

    Raises:
        ValueError: If dpi is not positive.
    """
    if dpi <= 0:
        raise ValueError(f"DPI must be positive, got {dpi}")

    page_width = pixels_to_points(image.width, dpi)
    page_height = pixels_to_points(image.height, dpi)

    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(page_width, page_height))
    if title:
        c.setTitle(title)

    # PDF origin is bottom-left; the image fills the page so no flip is needed
    c.drawImage(
        ImageReader(image), 0, 0,
        width=page_width, height=page_height,
        mask='auto',
    )
    c.showPage()
    c.save()

    logger.debug(f"Encoded {image.width}x{image.height}px image as {page_width:.1f}x{page_height:.1f}pt PDF")
    return buffer.getvalue()
