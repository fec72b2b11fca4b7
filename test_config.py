"""Tests for option models and TOML configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from canvaswriter.config import (
    Config,
    StrokeOptions,
    WriteOptions,
    coerce_options,
    coerce_stroke_options,
    load_config,
)


class TestWriteOptions:
    def test_defaults(self) -> None:
        options = WriteOptions()
        assert (options.x, options.y) == (5, 5)
        assert options.spacing == 0
        assert options.font == "16px serif"
        assert options.style == "white"
        assert options.align == "start"
        assert options.max_lines == 0
        assert options.shadow_color is None

    def test_explicit_zero_offset_is_kept(self) -> None:
        assert WriteOptions(x=0).x == 0

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            WriteOptions().x = 10

    def test_invalid_alignment(self) -> None:
        with pytest.raises(ValidationError):
            WriteOptions(align="middle")

    def test_model_copy_override(self) -> None:
        centered = WriteOptions(font="24px serif").model_copy(update={"align": "center"})
        assert centered.centered
        assert centered.font == "24px serif"


class TestStrokeOptions:
    def test_inactive_by_default(self) -> None:
        assert not StrokeOptions().active

    @pytest.mark.parametrize("fields", [{"style": "red"}, {"width": 3}, {"join": "bevel"}])
    def test_any_field_activates(self, fields: dict) -> None:
        assert StrokeOptions(**fields).active

    def test_effective_fallbacks(self) -> None:
        stroke = StrokeOptions(style="red")
        assert stroke.effective_width == 1.0
        assert stroke.effective_join == "miter"
        assert StrokeOptions(width=3).effective_style == "black"

    def test_non_positive_width_falls_back(self) -> None:
        assert StrokeOptions(style="red", width=-2).effective_width == 1.0


class TestCoercion:
    def test_none_gives_defaults(self) -> None:
        assert coerce_options(None) == WriteOptions()
        assert coerce_stroke_options(None) == StrokeOptions()

    def test_instances_pass_through(self) -> None:
        options = WriteOptions(spacing=3)
        assert coerce_options(options) is options

    def test_mapping_is_validated(self) -> None:
        assert coerce_options({"max_lines": 4}).max_lines == 4
        assert coerce_stroke_options({"width": 2}).width == 2

    def test_unknown_key_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            coerce_stroke_options({"colour": "red"})


class TestLoadConfig:
    def test_loads_tables(self, tmp_path: Path) -> None:
        path = tmp_path / "canvaswriter.toml"
        path.write_text(
            '[canvas]\nwidth = 320\nheight = 200\nbackground = "navy"\n\n'
            '[write]\nfont = "bold 20px serif"\nspacing = 4\nshadow_color = [0, 0, 0]\n\n'
            '[stroke]\nwidth = 3\n'
        )

        config = load_config(path)

        assert config.canvas.width == 320
        assert config.canvas.background == "navy"
        assert config.write.font == "bold 20px serif"
        assert config.write.spacing == 4
        assert config.write.shadow_color == (0, 0, 0)
        assert config.stroke.active

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config() == Config()

    def test_invalid_content(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text('[write]\nalign = "diagonal"\n')
        with pytest.raises(ValueError):
            load_config(path)
