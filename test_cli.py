"""Tests for the command line interface."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from canvaswriter import CanvasWriter
from canvaswriter.cli import main


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_wrap_single_line(runner: CliRunner) -> None:
    result = runner.invoke(main, ["wrap", "short text", "--max-width", "1000"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["short text"]


def test_wrap_hard_one_character_per_line(runner: CliRunner) -> None:
    result = runner.invoke(main, ["wrap", "abc", "--max-width", "1", "--hard-wrap"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["a", "b", "c"]


def test_wrap_reads_stdin(runner: CliRunner) -> None:
    result = runner.invoke(main, ["wrap", "-", "--max-width", "1000"], input="first\nsecond\n")
    assert result.output.splitlines() == ["first", "second"]


def test_wrap_invalid_font(runner: CliRunner) -> None:
    result = runner.invoke(main, ["wrap", "text", "--max-width", "100", "--font", "serif"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_render_png(runner: CliRunner, tmp_path: Path) -> None:
    output = tmp_path / "card.png"
    result = runner.invoke(
        main,
        [
            "render", "Hello world! This line wraps.",
            "-o", str(output),
            "--width", "200", "--height", "100",
            "--background", "navy",
            "--stroke-color", "black", "--stroke-width", "2",
            "--shadow-color", "black", "--shadow-offset", "1,1",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "saved to" in result.output
    assert output.read_bytes().startswith(b"\x89PNG")


def test_render_uses_config_file(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "canvaswriter.toml").write_text('[canvas]\nwidth = 64\nheight = 32\n')
    output = tmp_path / "small.pdf"

    result = runner.invoke(main, ["render", "Hi", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_bytes().startswith(b"%PDF")


def test_render_warns_on_overflow(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(
        main,
        ["render", "a\nb\nc\nd\ne\nf", "-o", str(tmp_path / "tall.png"), "--height", "20"],
    )
    assert result.exit_code == 0
    assert "Warning" in result.output


def test_render_unknown_extension_writes_png(runner: CliRunner, tmp_path: Path) -> None:
    output = tmp_path / "card.txt"
    result = runner.invoke(main, ["render", "Hi", "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.read_bytes().startswith(b"\x89PNG")


def test_render_bad_shadow_offset(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(
        main,
        ["render", "Hi", "-o", str(tmp_path / "c.png"), "--shadow-color", "black", "--shadow-offset", "2"],
    )
    assert result.exit_code == 1
    assert "shadow-offset" in result.output


@pytest.fixture
def write_options(monkeypatch: pytest.MonkeyPatch) -> list:
    """Collect the WriteOptions each render passes to CanvasWriter.write."""
    used = []
    original_write = CanvasWriter.write

    def spy(self, lines, max_width=None, options=None, stroke_options=None):
        used.append(options)
        return original_write(self, lines, max_width, options, stroke_options)

    monkeypatch.setattr(CanvasWriter, "write", spy)
    return used


def test_shadow_offset_from_config_is_kept(runner: CliRunner, tmp_path: Path, write_options: list) -> None:
    (tmp_path / "canvaswriter.toml").write_text("[write]\nshadow_x = 7\nshadow_y = 9\n")

    result = runner.invoke(main, ["render", "Hi", "-o", str(tmp_path / "c.png"), "--shadow-color", "black"])

    assert result.exit_code == 0, result.output
    options = write_options[0]
    assert (options.shadow_color, options.shadow_x, options.shadow_y) == ("black", 7, 9)


def test_shadow_offset_flag_overrides_config(runner: CliRunner, tmp_path: Path, write_options: list) -> None:
    (tmp_path / "canvaswriter.toml").write_text("[write]\nshadow_x = 7\nshadow_y = 9\n")

    result = runner.invoke(
        main,
        ["render", "Hi", "-o", str(tmp_path / "c.png"), "--shadow-color", "black", "--shadow-offset", "1,-2"],
    )

    assert result.exit_code == 0, result.output
    assert (write_options[0].shadow_x, write_options[0].shadow_y) == (1, -2)
