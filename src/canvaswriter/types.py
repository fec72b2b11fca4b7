"""Type aliases used across the canvaswriter package."""

from typing import Literal, Tuple, Union

# Color types
RGBColor = Tuple[int, int, int]  # RGB color in 0-255 range
RGBAColor = Tuple[int, int, int, int]  # RGBA color in 0-255 range
Color = Union[str, RGBColor, RGBAColor]  # Anything Pillow's ImageColor accepts

# Text placement
TextAlign = Literal["start", "left", "center", "right", "end"]
LineJoin = Literal["miter", "round", "bevel"]
