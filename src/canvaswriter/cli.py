"""CLI interface for canvas writer."""

import asyncio
import logging
from pathlib import Path

import click

from canvaswriter.config import StrokeOptions, WriteOptions, load_config
from canvaswriter.fonts import register_fonts, resolve_font
from canvaswriter.render import PillowSurface
from canvaswriter.utils.text import hard_wrap, split_lines, word_wrap
from canvaswriter.writer import CanvasWriter, ExportError

ALIGN_CHOICES = ["start", "left", "center", "right", "end"]


def _parse_offset(value: str) -> tuple[float, float]:
    """Parse an "x,y" pair."""
    parts = value.split(",")
    if len(parts) != 2:
        raise ValueError("Expected two comma-separated values")
    return float(parts[0].strip()), float(parts[1].strip())


def _read_text(text: str) -> str:
    if text == "-":
        return click.get_text_stream("stdin").read().rstrip("\n")
    return text


@click.group()
@click.version_option(package_name="canvas-writer")
@click.option("-v", "--verbose", count=True, help="Show progress (-v) or layout details (-vv).")
@click.option(
    "--fonts-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory with extra .ttf/.otf files to register.",
)
def main(verbose: int, fonts_dir: Path | None) -> None:
    """Lay out and wrap text onto images."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # Register bundled fonts at startup
    register_fonts()
    if fonts_dir:
        register_fonts(fonts_dir)


@main.command()
@click.argument("text")
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    required=True,
    help="Output file. The type follows the extension (.png, .jpg, .webp, .pdf, ...).",
)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to canvaswriter.toml. Defaults to ./canvaswriter.toml when present.",
)
@click.option("--width", type=int, help="Surface width in pixels.")
@click.option("--height", type=int, help="Surface height in pixels.")
@click.option("--background", type=str, help="Background color, e.g. 'black' or '#203040'.")
@click.option(
    "--background-image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Image stretched over the whole surface.",
)
@click.option("--font", type=str, help="CSS-like font, e.g. 'bold 24px sans-serif'.")
@click.option("--color", type=str, help="Text fill color.")
@click.option("--align", type=click.Choice(ALIGN_CHOICES, case_sensitive=False), help="Horizontal alignment.")
@click.option("--x", "offset_x", type=float, help="Horizontal offset (default: 5).")
@click.option("--y", "offset_y", type=float, help="Vertical offset (default: 5).")
@click.option("--max-width", type=float, help="Wrap width in pixels. Defaults to the surface width.")
@click.option("--spacing", type=float, help="Extra gap between lines.")
@click.option("--max-lines", type=int, help="Stop after this many lines.")
@click.option("--stroke-color", type=str, help="Outline color.")
@click.option("--stroke-width", type=float, help="Outline width.")
@click.option("--shadow-color", type=str, help="Drop shadow color. Needs an offset or blur to show.")
@click.option("--shadow-offset", type=str, help="Shadow offset as 'x,y', e.g. 2,2.")
@click.option("--shadow-blur", type=float, help="Shadow blur radius.")
@click.option("--hard-wrap", "hard", is_flag=True, help="Break anywhere instead of at spaces.")
def render(
    text: str,
    output: Path,
    config: Path | None,
    width: int | None,
    height: int | None,
    background: str | None,
    background_image: Path | None,
    font: str | None,
    color: str | None,
    align: str | None,
    offset_x: float | None,
    offset_y: float | None,
    max_width: float | None,
    spacing: float | None,
    max_lines: int | None,
    stroke_color: str | None,
    stroke_width: float | None,
    shadow_color: str | None,
    shadow_offset: str | None,
    shadow_blur: float | None,
    hard: bool,
) -> None:
    """
    Render TEXT onto a new image and save it.

    Newlines in TEXT start new paragraphs. Use '-' to read TEXT from stdin.
    """
    try:
        cfg = load_config(config)

        # Build settings with CLI option overrides
        canvas_updates = {
            "width": width,
            "height": height,
            "background": background,
            "background_image": background_image,
        }
        write_updates = {
            "font": font,
            "style": color,
            "align": align.lower() if align else None,
            "x": offset_x,
            "y": offset_y,
            "spacing": spacing,
            "max_lines": max_lines,
            "shadow_color": shadow_color,
            "shadow_blur": shadow_blur,
        }
        stroke_updates = {"style": stroke_color, "width": stroke_width}

        # Offsets from the config file stay unless the flag is passed
        if shadow_offset is not None:
            try:
                shadow_x, shadow_y = _parse_offset(shadow_offset)
            except ValueError as e:
                click.echo(f"Error: Invalid --shadow-offset '{shadow_offset}': {e}", err=True)
                raise SystemExit(1)
            write_updates.update(shadow_x=shadow_x, shadow_y=shadow_y)

        canvas_cfg = cfg.canvas.model_copy(update={k: v for k, v in canvas_updates.items() if v is not None})
        write_options = WriteOptions.model_validate(
            {**cfg.write.model_dump(), **{k: v for k, v in write_updates.items() if v is not None}}
        )
        stroke_options = StrokeOptions.model_validate(
            {**cfg.stroke.model_dump(), **{k: v for k, v in stroke_updates.items() if v is not None}}
        )

        surface = PillowSurface.new(canvas_cfg.width, canvas_cfg.height, canvas_cfg.background)
        writer = CanvasWriter(surface)
        if canvas_cfg.background_image:
            writer.draw_background_image(canvas_cfg.background_image.read_bytes())

        content = _read_text(text)
        if hard:
            writer.write_wrapped_lines(content, max_width, write_options, stroke_options)
        else:
            writer.write(content, max_width, write_options, stroke_options)

        if not writer.is_fitting():
            click.echo(
                f"Warning: text runs past the bottom edge ({writer.cursor:.0f}px of {surface.height}px).",
                err=True,
            )

        saved = asyncio.run(writer.save_file(output))
        click.echo(f"✓ {writer.line_count} line(s) saved to: {saved}")

    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except ExportError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("text")
@click.option("--font", type=str, default="16px serif", help="CSS-like font used for measuring.")
@click.option("--max-width", type=float, required=True, help="Wrap width in pixels.")
@click.option("--hard-wrap", "hard", is_flag=True, help="Break anywhere instead of at spaces.")
def wrap(text: str, font: str, max_width: float, hard: bool) -> None:
    """
    Print TEXT wrapped to MAX_WIDTH, one line per output line.

    Use '-' to read TEXT from stdin.
    """
    try:
        pil_font = resolve_font(font)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    wrap_line = hard_wrap if hard else word_wrap
    for line in split_lines(_read_text(text)):
        for piece in wrap_line(line, max_width, pil_font.getlength):
            click.echo(piece)


if __name__ == "__main__":
    main()
