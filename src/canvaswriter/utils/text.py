"""Line splitting and wrapping by measured width."""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence, Union

logger = logging.getLogger(__name__)

# Returns the horizontal advance of a string in surface units
MeasureFunc = Callable[[str], float]

TextInput = Union[str, Sequence[str]]


def split_lines(lines: TextInput) -> List[str]:
    """
    Normalize multi-line input into a list of logical lines.

    Strings are split on "\\n" only, so a trailing newline yields a trailing empty
    line. Sequences are copied as-is.

    Args:
        lines: Newline-separated string or sequence of lines.

    Returns:
        List of lines in order.
    """
    if isinstance(lines, str):
        return lines.split("\n")
    return list(lines)


# ============================================================================
# Hard (character-level) Wrapping
# ============================================================================

def shrink_to_fit(text: str, max_width: float, measure: MeasureFunc) -> str:
    """
    Drop trailing characters until the text fits within max_width.

    Never returns fewer than one character for non-empty input, so a single glyph
    wider than max_width is returned on its own.

    Args:
        text: Text to shrink.
        max_width: Maximum width.
        measure: Width measurement function.

    Returns:
        Longest prefix that fits (at least one character).
    """
    section = text
    while len(section) > 1 and measure(section) > max_width:
        section = section[:-1]
    return section


def hard_wrap(text: str, max_width: float, measure: MeasureFunc) -> List[str]:
    """
    Split one logical line into pieces that fit max_width, ignoring word boundaries.

    Each piece is the longest prefix of the remaining text that fits. A piece is
    only wider than max_width when it is a single character.

    Args:
        text: Single logical line (no newlines).
        max_width: Maximum width per piece.
        measure: Width measurement function.

    Returns:
        Pieces in order. Concatenated, they equal the input. Empty input gives [""].
    """
    results: List[str] = []
    remaining = text

    while measure(remaining) > max_width:
        section = shrink_to_fit(remaining, max_width, measure)
        results.append(section)
        remaining = remaining[len(section):]
        if not remaining:
            return results

    results.append(remaining)
    return results


# ============================================================================
# Word Wrapping
# ============================================================================

def word_wrap(text: str, max_width: float, measure: MeasureFunc) -> List[str]:
    """
    Split one logical line at spaces so each piece fits max_width.

    Greedy from the end: trailing words move to the next line until the rest fits.
    A word that is too wide on its own is hard-wrapped, and its leftover characters
    start the next line. Words are split on single spaces so runs of spaces are
    kept (as empty words) and no characters are lost.

    Args:
        text: Single logical line (no newlines).
        max_width: Maximum width per piece.
        measure: Width measurement function.

    Returns:
        Pieces in order. Empty input gives [""].
    """
    if not text:
        return [text]

    results: List[str] = []
    remaining = text

    while remaining:
        if measure(remaining) <= max_width:
            results.append(remaining)
            break

        section = remaining.split(" ")
        remainder: List[str] = []

        while len(section) > 1 and measure(" ".join(section)) > max_width:
            remainder.insert(0, section.pop())

        fitted = " ".join(section)
        if measure(fitted) > max_width and len(fitted) > 1:
            # A single word wider than the line: break inside it
            prefix = shrink_to_fit(fitted, max_width, measure)
            results.append(prefix)
            remainder.insert(0, fitted[len(prefix):])
        else:
            results.append(fitted)

        remaining = " ".join(remainder)

    logger.debug(f"Word-wrapped {len(text)} chars into {len(results)} line(s) at width {max_width}")
    return results
