"""Font specification parsing, registration and loading."""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from PIL import ImageFont

from canvaswriter.fonts.google import font_variant, get_google_font

logger = logging.getLogger(__name__)

FONTS_DIR = Path(__file__).parent

FONT_SUFFIXES = (".ttf", ".otf")

# Font path registry: maps normalized font names to their file paths
_FONT_PATHS: dict[str, Path] = {}
_DEFAULT_DIR_SCANNED = False

# CSS generic families mapped to common system font files (regular, bold)
GENERIC_FAMILIES: dict[str, list[tuple[str, str]]] = {
    "serif": [
        ("DejaVuSerif.ttf", "DejaVuSerif-Bold.ttf"),
        ("LiberationSerif-Regular.ttf", "LiberationSerif-Bold.ttf"),
        ("Times New Roman.ttf", "Times New Roman Bold.ttf"),
        ("times.ttf", "timesbd.ttf"),
    ],
    "sans-serif": [
        ("DejaVuSans.ttf", "DejaVuSans-Bold.ttf"),
        ("LiberationSans-Regular.ttf", "LiberationSans-Bold.ttf"),
        ("Arial.ttf", "Arial Bold.ttf"),
        ("arial.ttf", "arialbd.ttf"),
    ],
    "monospace": [
        ("DejaVuSansMono.ttf", "DejaVuSansMono-Bold.ttf"),
        ("LiberationMono-Regular.ttf", "LiberationMono-Bold.ttf"),
        ("Courier New.ttf", "Courier New Bold.ttf"),
        ("cour.ttf", "courbd.ttf"),
    ],
}
GENERIC_FAMILIES["system-ui"] = GENERIC_FAMILIES["sans-serif"]

_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)(px|pt)?(?:/\S+)?$", re.IGNORECASE)


@dataclass(frozen=True)
class FontSpec:
    """
    Parsed CSS-like font specification.

    Attributes:
        family: First family name from the specification (e.g., "Roboto", "serif").
        size: Font size in pixels.
        weight: Explicit numeric weight, or None when the specification didn't give one.
        italic: Whether an italic/oblique style was requested.
    """
    family: str
    size: float
    weight: int | None = None
    italic: bool = False

    @property
    def effective_weight(self) -> int:
        return self.weight if self.weight is not None else 400

    @property
    def bold(self) -> bool:
        return self.effective_weight >= 600


def parse_font_spec(spec: str) -> FontSpec:
    """
    Parse a CSS font shorthand such as "bold 24px Roboto" or "16px serif".

    Accepted form: [style] [weight] <size>[px|pt][/line-height] <family>[, fallbacks].
    Only the first family of a fallback list is used.

    Args:
        spec: Font specification string.

    Returns:
        Parsed FontSpec.

    Raises:
        ValueError: If the size or family is missing, or a modifier is unknown.
    """
    tokens = spec.split()

    size_index = None
    match = None
    for i, token in enumerate(tokens):
        match = _SIZE_PATTERN.match(token)
        if not match:
            continue
        # A numeric weight sits right before the size, e.g. "700 16px"
        if i + 1 < len(tokens) and _SIZE_PATTERN.match(tokens[i + 1]):
            continue
        size_index = i
        break

    if size_index is None or match is None:
        raise ValueError(f"Font specification '{spec}' has no size (expected e.g. '16px serif')")

    size = float(match.group(1))

    family = " ".join(tokens[size_index + 1:]).split(",")[0].strip().strip("'\"")
    if not family:
        raise ValueError(f"Font specification '{spec}' has no family")

    weight: int | None = None
    italic = False
    for token in tokens[:size_index]:
        lowered = token.lower()
        if lowered in ("italic", "oblique"):
            italic = True
        elif lowered in ("bold", "bolder"):
            weight = 700
        elif lowered == "lighter":
            weight = 300
        elif lowered == "normal":
            continue
        elif lowered.isdigit():
            weight = int(lowered)
        else:
            raise ValueError(f"Unknown modifier '{token}' in font specification '{spec}'")

    return FontSpec(family=family, size=size, weight=weight, italic=italic)


def _normalize_font_name(name: str) -> str:
    """
    Normalize a font name to TitleCase convention.

    Examples:
        "roboto-bold" → "Roboto-Bold"
        "open sans" → "Opensans"
        "roboto-mono" → "Roboto-Mono"

    Args:
        name: Font name to normalize (can be any case)

    Returns:
        TitleCase font name
    """
    parts = name.replace(" ", "").split('-')
    return '-'.join(part.title() for part in parts)


def register_fonts(directory: Path | None = None) -> int:
    """
    Register font files for text rendering.

    Auto-discovers all TTF/OTF files in the directory. Each font is registered with a
    TitleCase name based on its filename (without extension).

    Examples:
        - roboto-regular.ttf → registered as "Roboto-Regular"
        - Roboto-Bold.ttf → registered as "Roboto-Bold"
        - impact.ttf → registered as "Impact"

    Args:
        directory: Directory to scan. Defaults to the package fonts directory.

    Returns:
        Number of fonts registered.
    """
    global _DEFAULT_DIR_SCANNED

    if directory is None:
        directory = FONTS_DIR
        _DEFAULT_DIR_SCANNED = True

    font_files = sorted(p for p in directory.glob("*") if p.suffix.lower() in FONT_SUFFIXES)

    if not font_files:
        logger.debug(f"No font files found in {directory}")
        return 0

    for font_path in font_files:
        font_name = _normalize_font_name(font_path.stem)
        _FONT_PATHS[font_name] = font_path
        logger.info(f"Registered font: {font_name} from {font_path.name}")

    # Previously resolved specs may now map to a different file
    resolve_font.cache_clear()
    logger.info(f"Successfully registered {len(font_files)} font(s) from {directory}.")
    return len(font_files)


def get_font_path(font_name: str) -> Optional[Path]:
    """
    Get the file path for a registered font.

    Args:
        font_name: Registered font name (e.g., "Roboto-Bold").

    Returns:
        Path to the font file, or None if the font is not registered.
    """
    return _FONT_PATHS.get(_normalize_font_name(font_name))


def _registered_candidates(spec: FontSpec) -> list[str]:
    """Registry names to try for a spec, most specific first."""
    family = _normalize_font_name(spec.family)
    names = [_normalize_font_name(f"{family}-{font_variant(spec.effective_weight, spec.italic)}")]
    if spec.bold and spec.italic:
        names.append(f"{family}-Bolditalic")
    if spec.bold:
        names.append(f"{family}-Bold")
    if spec.italic:
        names.append(f"{family}-Italic")
        names.append(f"{family}-{spec.effective_weight}")
    names.extend([f"{family}-Regular", family])
    return names


def _system_candidates(spec: FontSpec) -> list[str]:
    """Font file names for Pillow's system font search."""
    generic = GENERIC_FAMILIES.get(spec.family.lower())
    if generic:
        return [bold if spec.bold else regular for regular, bold in generic]

    compact = spec.family.replace(" ", "")
    candidates = []
    if spec.bold:
        candidates.extend([f"{compact}-Bold.ttf", f"{spec.family} Bold.ttf"])
    candidates.extend([f"{compact}-Regular.ttf", f"{compact}.ttf", f"{spec.family}.ttf"])
    return candidates


def _ensure_default_fonts() -> None:
    if not _DEFAULT_DIR_SCANNED:
        register_fonts()


@lru_cache(maxsize=128)
def resolve_font(font_spec: str) -> ImageFont.FreeTypeFont:
    """
    Resolve a font specification to a loaded Pillow font.

    Resolution priority:
    1. Fonts registered with register_fonts()
    2. System fonts found by file name (generic families map to common files)
    3. Google Fonts (only when the specification carries an explicit weight)
    4. Pillow's bundled default font at the requested size

    Args:
        font_spec: CSS-like specification, e.g. "bold 24px Roboto".

    Returns:
        FreeTypeFont at the requested pixel size.

    Raises:
        ValueError: If the specification can't be parsed.

    Examples:
        >>> resolve_font("16px serif")          # DejaVuSerif on most Linux systems
        >>> resolve_font("700 32px Orbitron")   # Downloaded from Google Fonts if not local
    """
    _ensure_default_fonts()

    spec = parse_font_spec(font_spec)
    size = max(1, round(spec.size))

    # 1. Registered fonts
    for name in _registered_candidates(spec):
        if font_path := _FONT_PATHS.get(name):
            logger.debug(f"Font '{font_spec}' resolved to registered font {name}")
            return ImageFont.truetype(str(font_path), size)

    # 2. System fonts
    for candidate in _system_candidates(spec):
        try:
            font = ImageFont.truetype(candidate, size)
        except OSError:
            continue
        logger.debug(f"Font '{font_spec}' resolved to system font {candidate}")
        return font

    # 3. Google Fonts
    if spec.weight is not None and spec.family.lower() not in GENERIC_FAMILIES:
        logger.info(f"Font '{spec.family}' not found locally, trying Google Fonts...")
        if font_path := get_google_font(spec.family, spec.weight, spec.italic):
            registered_name = _normalize_font_name(f"{spec.family}-{font_variant(spec.weight, spec.italic)}")
            _FONT_PATHS[registered_name] = font_path
            return ImageFont.truetype(str(font_path), size)
        logger.warning(f"Could not download '{spec.family}' from Google Fonts")

    # 4. Fall back
    logger.warning(f"Using Pillow's default font for '{font_spec}'")
    return ImageFont.load_default(size=size)
