from __future__ import annotations

import argparse
import logging
from pathlib import Path

from studynotes import config
from studynotes.layout.theme import ThemeRegistry
from studynotes.models import RenderOptions, note_from_dict
from studynotes.pipeline.run import render_note


def main() -> None:
    """Render the bundled sample note once per design style and colour scheme."""
    parser = argparse.ArgumentParser()
    parser.add_argument("--sample", default="photosynthesis", help="Sample name under assets/samples")
    parser.add_argument("--out", default="out/samples", help="Output directory")
    parser.add_argument("--page-size", default=config.DEFAULT_PAGE_SIZE, help="letter | a4")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    note = note_from_dict(config.load_sample_note(args.sample))
    registry = ThemeRegistry()
    out_root = Path(args.out)
    for style in registry.design_styles:
        for scheme in registry.palettes:
            options = RenderOptions(theme=style, color_scheme=scheme, page_size=args.page_size)
            artifacts = render_note(note, options, out_dir=out_root / f"{style}-{scheme}")
            print(f"{style}/{scheme}: {artifacts['pdf']}")


if __name__ == "__main__":
    main()
