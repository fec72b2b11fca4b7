#!/usr/bin/env python3
"""
Example: Outlined, Centered Caption Over an Image

This example demonstrates stroke and shadow options, max_lines, and
copying lines from one writer onto another surface.

Requirements:
- Replace background.jpg with an image of your own
"""

import asyncio
from pathlib import Path

from canvaswriter import CanvasWriter, PillowSurface, StrokeOptions, WriteOptions

WIDTH, HEIGHT = 600, 400

# =============================================================================
# Caption: centered white Impact-style text with a black outline
# =============================================================================
caption = WriteOptions(
    font="bold 40px sans-serif",
    style="white",
    align="center",
    x=WIDTH / 2,
    y=10,
    max_lines=3,  # Anything past the third line is dropped
)
outline = StrokeOptions(style="black", width=6, join="round")

meme = CanvasWriter(PillowSurface.new(WIDTH, HEIGHT, "gray"))
background = Path("background.jpg")
if background.exists():
    meme.draw_background_image(background.read_bytes())

meme.write("When the layout engine wraps your caption perfectly on the first try", WIDTH - 20, caption, outline)

# =============================================================================
# Preview: same lines with a soft drop shadow instead of an outline
# =============================================================================
shadowed = caption.model_copy(update={"shadow_color": (0, 0, 0, 160), "shadow_x": 3, "shadow_y": 3, "shadow_blur": 6})

preview = CanvasWriter(PillowSurface.new(WIDTH, HEIGHT, "white"))
for line in meme.lines:
    preview.write_text(line.text, shadowed.model_copy(update={"style": "black"}))


async def main() -> None:
    await meme.save_file("meme.png")
    await preview.save_file("preview.pdf")
    print(await meme.data_url("image/jpeg", quality=80))


asyncio.run(main())

print("✓ Saved meme.png and preview.pdf")
print(str(meme))
