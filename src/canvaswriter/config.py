"""Configuration loading and validation."""

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from canvaswriter.types import Color, LineJoin, TextAlign

DEFAULT_CONFIG_NAME = "canvaswriter.toml"


class WriteOptions(BaseModel):
    """
    Options for drawing one line of text.

    All parameters have sensible defaults. Override only what you need using
    Pydantic's model_copy():

        base = WriteOptions(font="24px Roboto")
        centered = base.model_copy(update={"align": "center", "x": 200})
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # ========================================================================
    # Position
    # ========================================================================
    x: float = 5
    """Horizontal offset added to the computed x coordinate."""

    y: float = 5
    """Vertical offset added to the computed baseline."""

    spacing: float = 0
    """Extra vertical gap before the line. Ignored while nothing has been written yet."""

    # ========================================================================
    # Text Style
    # ========================================================================
    font: str = "16px serif"
    """CSS-like font specification, e.g. "bold 24px Roboto"."""

    style: Color = "white"
    """Fill color for the glyphs."""

    align: TextAlign = "start"
    """Horizontal alignment relative to x: start, left, center, right or end."""

    max_lines: int = 0
    """Cap on the total number of lines the writer may hold. 0 = unlimited."""

    # ========================================================================
    # Shadow
    # ========================================================================
    shadow_color: Color | None = None
    """Shadow color. None disables the shadow."""

    shadow_x: float = 0
    """Horizontal shadow offset."""

    shadow_y: float = 0
    """Vertical shadow offset."""

    shadow_blur: float = 0
    """Shadow blur radius."""

    @property
    def centered(self) -> bool:
        """Whether the line is anchored on its horizontal center."""
        return self.align == "center"


class StrokeOptions(BaseModel):
    """
    Outline settings for a line of text.

    Setting any one field turns the outline on. Unset fields then fall back to
    black, 1 unit wide, mitered joins.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    style: Color | None = None
    """Stroke color."""

    width: float | None = None
    """Stroke width in surface units."""

    join: LineJoin | None = None
    """Line-join mode."""

    @property
    def active(self) -> bool:
        """Whether an outline should be drawn."""
        return bool(self.style or self.width or self.join)

    @property
    def effective_style(self) -> Color:
        return self.style or "black"

    @property
    def effective_width(self) -> float:
        """Stroke width, falling back to 1 when unset or non-positive."""
        return self.width if self.width and self.width > 0 else 1.0

    @property
    def effective_join(self) -> LineJoin:
        return self.join or "miter"


class CanvasConfig(BaseModel):
    """Surface settings used by the command line front end."""

    width: int = 800
    """Surface width in pixels."""

    height: int = 600
    """Surface height in pixels."""

    background: Color | None = None
    """Background fill. None leaves the surface transparent."""

    background_image: Path | None = None
    """Image stretched over the whole surface before any text is written."""


class Config(BaseModel):
    """Root configuration."""

    canvas: CanvasConfig = CanvasConfig()
    write: WriteOptions = WriteOptions()
    stroke: StrokeOptions = StrokeOptions()


def coerce_options(value: WriteOptions | Mapping[str, Any] | None) -> WriteOptions:
    """
    Normalize user-supplied write options into a WriteOptions instance.

    Args:
        value: WriteOptions, a mapping of field names to values, or None.

    Returns:
        Validated WriteOptions (defaults when value is None).
    """
    if value is None:
        return WriteOptions()
    if isinstance(value, WriteOptions):
        return value
    return WriteOptions.model_validate(dict(value))


def coerce_stroke_options(value: StrokeOptions | Mapping[str, Any] | None) -> StrokeOptions:
    """Normalize user-supplied stroke options into a StrokeOptions instance."""
    if value is None:
        return StrokeOptions()
    if isinstance(value, StrokeOptions):
        return value
    return StrokeOptions.model_validate(dict(value))


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, looks for canvaswriter.toml in the
                     current directory and falls back to defaults when it is absent.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not config_path.exists():
            return Config()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy canvaswriter.toml.example to canvaswriter.toml and adjust it."
        )

    with open(config_path, "rb") as f:
        config_dict = tomllib.load(f)

    return Config(**config_dict)
