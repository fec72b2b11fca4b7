"""Utility modules."""

from canvaswriter.utils.text import (
    MeasureFunc,
    hard_wrap,
    shrink_to_fit,
    split_lines,
    word_wrap,
)

__all__ = [
    "MeasureFunc",
    "hard_wrap",
    "shrink_to_fit",
    "split_lines",
    "word_wrap",
]
