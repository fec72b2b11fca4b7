"""Tests for the hard and word wrapping algorithms."""

import pytest

from canvaswriter.utils.text import hard_wrap, shrink_to_fit, split_lines, word_wrap
from conftest import monospace


class TestSplitLines:
    def test_string_is_split_on_newlines(self) -> None:
        assert split_lines("one\ntwo\n") == ["one", "two", ""]

    def test_sequence_is_copied(self) -> None:
        lines = ("a", "b")
        result = split_lines(lines)
        assert result == ["a", "b"]
        assert isinstance(result, list)


class TestShrinkToFit:
    def test_drops_trailing_characters(self) -> None:
        assert shrink_to_fit("abcdef", 35, monospace) == "abc"

    def test_keeps_at_least_one_character(self) -> None:
        assert shrink_to_fit("abc", 5, monospace) == "a"


class TestHardWrap:
    def test_text_that_fits_is_returned_unchanged(self) -> None:
        assert hard_wrap("hello", 80, monospace) == ["hello"]

    def test_breaks_between_characters(self) -> None:
        assert hard_wrap("abcdefghij", 30, monospace) == ["abc", "def", "ghi", "j"]

    def test_pieces_concatenate_to_input(self) -> None:
        text = "The quick brown fox jumps over the lazy dog"
        pieces = hard_wrap(text, 70, monospace)
        assert "".join(pieces) == text
        assert all(monospace(piece) <= 70 for piece in pieces)

    def test_character_wider_than_limit_stands_alone(self) -> None:
        assert hard_wrap("ab", 5, monospace) == ["a", "b"]

    def test_empty_text_gives_one_empty_line(self) -> None:
        assert hard_wrap("", 50, monospace) == [""]

    def test_exact_fit_is_not_split(self) -> None:
        assert hard_wrap("abcde", 50, monospace) == ["abcde"]


class TestWordWrap:
    def test_text_that_fits_is_returned_unchanged(self) -> None:
        assert word_wrap("hello there", 200, monospace) == ["hello there"]

    def test_breaks_at_spaces(self) -> None:
        assert word_wrap("the quick brown fox", 100, monospace) == ["the quick", "brown fox"]

    def test_long_word_is_broken_inside(self) -> None:
        result = word_wrap("a supercalifragilistic word", 80, monospace)
        assert result == ["a", "supercal", "ifragili", "stic", "word"]

    def test_does_not_split_words_that_fit(self) -> None:
        text = "lorem ipsum dolor sit amet consectetur adipiscing elit"
        words = set(text.split(" "))
        pieces = word_wrap(text, 120, monospace)

        assert len(pieces) > 1
        for piece in pieces:
            assert monospace(piece) <= 120
            assert all(word in words for word in piece.split(" "))
        assert " ".join(pieces) == text

    def test_greedy_breaks_with_fixed_width_glyphs(self) -> None:
        text = (
            "Hello world! Text that will probably be wrapped onto the next lines "
            "because it's longer than that -> "
        )
        narrow = lambda s: 5 * len(s)

        assert word_wrap(text, 80, narrow) == [
            "Hello world!",
            "Text that will",
            "probably be",
            "wrapped onto the",
            "next lines",
            "because it's",
            "longer than that",
            "-> ",
        ]

    def test_empty_text_gives_one_empty_line(self) -> None:
        assert word_wrap("", 50, monospace) == [""]

    def test_single_character_word_wider_than_limit(self) -> None:
        assert word_wrap("a b", 5, monospace) == ["a", "b"]

    @pytest.mark.parametrize("max_width", [10, 30, 60, 90])
    def test_no_characters_lost(self, max_width: int) -> None:
        text = "wrap me, then wrap me again"
        pieces = word_wrap(text, max_width, monospace)
        assert "".join(pieces).replace(" ", "") == text.replace(" ", "")
