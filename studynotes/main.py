from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from . import config
from .layout.theme import ThemeRegistry
from .models import OverflowPolicy, RenderOptions
from .pipeline.run import run_render

app = typer.Typer(help="Lay out study notes as themed, paginated PDFs")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log layout decisions")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@app.command()
def render(
    note: Path = typer.Argument(..., help="Note JSON produced by the summariser"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    original: Optional[Path] = typer.Option(None, "--original", help="Original text used when the note has no structure"),
    theme: str = typer.Option(config.DEFAULT_THEME, "--theme", help="Design style"),
    color_scheme: str = typer.Option(config.DEFAULT_COLOR_SCHEME, "--color-scheme", help="Colour scheme"),
    font_size: Optional[float] = typer.Option(None, "--font-size", help="Body font size (default: theme)"),
    line_spacing: Optional[float] = typer.Option(None, "--line-spacing", help="Line spacing multiplier (default: theme)"),
    margin: Optional[float] = typer.Option(None, "--margin", help="Side margin in points (default: theme)"),
    font_family: Optional[str] = typer.Option(None, "--font-family", help="helvetica | times | courier"),
    page_size: str = typer.Option(config.DEFAULT_PAGE_SIZE, "--page-size", help="letter | a4"),
    single_page: bool = typer.Option(False, "--single-page", help="Drop overflowing content instead of adding pages"),
    no_header: bool = typer.Option(False, "--no-header", help="Skip the header band"),
    no_footer: bool = typer.Option(False, "--no-footer", help="Skip page footers"),
    no_visual_elements: bool = typer.Option(False, "--no-visual-elements", help="Skip the visual elements banner"),
    preview: bool = typer.Option(False, "--preview", help="Also write a PNG of the first page"),
) -> None:
    options = RenderOptions(
        theme=theme,
        color_scheme=color_scheme,
        font_size=font_size,
        line_spacing=line_spacing,
        margin=margin,
        font_family=font_family,
        include_header=not no_header,
        include_footer=not no_footer,
        include_visual_elements=not no_visual_elements,
        overflow=OverflowPolicy.STOP if single_page else OverflowPolicy.PAGE_BREAK,
        page_size=page_size,
    )
    try:
        artifacts = run_render(note, options, out_dir=out, original_text=original, preview=preview)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"FAILED: {exc}")
        raise typer.Exit(code=1)
    for kind, path in artifacts.items():
        typer.echo(f"{kind}: {path}")


@app.command()
def themes() -> None:
    registry = ThemeRegistry()
    typer.echo("Design styles: " + ", ".join(registry.design_styles))
    typer.echo("Colour schemes: " + ", ".join(registry.palettes))


if __name__ == "__main__":
    app()
