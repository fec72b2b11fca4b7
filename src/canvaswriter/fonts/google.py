"""Google Fonts lookup with a local TTF cache."""

import logging
import re
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)

CACHE_DIR = Path.home() / ".cache" / "canvas-writer" / "fonts"

# The v1 CSS API answers with TTF sources, which FreeType loads directly
FONTS_CSS_URL = "https://fonts.googleapis.com/css"

_TTF_URL_PATTERNS = (
    re.compile(r"src:\s*url\((https://[^)]+\.ttf)\)"),
    re.compile(r"(https://[^\s'\"()]+\.ttf)"),
)


def font_variant(weight: int, italic: bool = False) -> str:
    """Google Fonts variant name, e.g. "400", "700italic"."""
    return f"{weight}italic" if italic else str(weight)


def cached_font_path(family: str, weight: int, italic: bool = False) -> Path:
    """Cache location for one family/variant, e.g. OpenSans-700italic.ttf."""
    return CACHE_DIR / f"{family.replace(' ', '')}-{font_variant(weight, italic)}.ttf"


def get_google_font(family: str, weight: int = 400, italic: bool = False) -> Optional[Path]:
    """
    Return a local TTF for a Google Fonts family, downloading it on first use.

    Args:
        family: Font family name (e.g., "Orbitron", "Open Sans").
        weight: Numeric weight (100-900).
        italic: Request the italic face instead of the upright one.

    Returns:
        Path to the cached TTF file, or None if the font couldn't be fetched.
    """
    variant = font_variant(weight, italic)
    cache_path = cached_font_path(family, weight, italic)

    if cache_path.exists():
        logger.debug(f"Using cached Google Font {cache_path.name}")
        return cache_path

    logger.info(f"Downloading Google Font: {family} ({variant})")
    try:
        css = requests.get(FONTS_CSS_URL, params={"family": f"{family}:{variant}"}, timeout=10)
        css.raise_for_status()

        font_url = _extract_font_url_from_css(css.text)
        if font_url is None:
            logger.error(f"No TTF source in Google Fonts CSS for {family} ({variant})")
            return None

        font_file = requests.get(font_url, timeout=30)
        font_file.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Failed to download Google Font {family} ({variant}): {e}")
        return None

    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_path.write_bytes(font_file.content)
    logger.info(f"Cached {family} ({variant}) as {cache_path}")
    return cache_path


def _extract_font_url_from_css(css_content: str) -> Optional[str]:
    """First TTF URL in a Google Fonts stylesheet, preferring src: declarations."""
    for pattern in _TTF_URL_PATTERNS:
        if match := pattern.search(css_content):
            return match.group(1)
    return None
