#!/usr/bin/env python3
"""
Simple Example: Word-Wrapped Text on a Solid Background

This is the simplest way to lay out a paragraph programmatically.
"""

import asyncio

from canvaswriter import CanvasWriter, PillowSurface, WriteOptions

writer = CanvasWriter(PillowSurface.new(400, 300))
writer.draw_background("#203040")

# Wrap to the surface width, 24px serif, with a little extra line spacing
writer.write(
    "Hello world!\nText that will probably be wrapped onto the next lines because it's longer than that.",
    options=WriteOptions(font="24px serif", spacing=4),
)

if not writer.is_fitting():
    print("Warning: text runs past the bottom edge")

path = asyncio.run(writer.save_file("hello.png"))

print(f"✓ {writer.line_count} lines saved to: {path}")
