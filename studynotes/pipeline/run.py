from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from .. import config
from ..layout.assemble import layout_note
from ..models import NoteModel, RenderOptions
from ..storage import artifact_path, write_text_artifact
from .ingest import load_note, slug_from_title
from .render_pdf import write_layout, write_pdf
from .render_preview import render_preview

logger = logging.getLogger(__name__)


def render_note(
    note: NoteModel,
    options: Optional[RenderOptions] = None,
    out_dir: Optional[Path] = None,
    preview: bool = False,
    generated_at: Optional[datetime] = None,
) -> Dict[str, Path]:
    """Lay out one note and write its artifacts under ``<out_dir>/<slug>/``."""
    options = options or RenderOptions()
    base_dir = out_dir or config.OUT_DIR
    slug = slug_from_title(note.title)
    artifacts: Dict[str, Path] = {}
    try:
        document = layout_note(note, options, generated_at=generated_at)
        if document.truncated_sections:
            logger.info("Truncated sections for %s: %s", slug, ", ".join(document.truncated_sections))

        artifacts["pdf"] = write_pdf(document, artifact_path(slug, "pdf", base_dir=base_dir), title=note.title)
        artifacts["layout"] = write_layout(document, artifact_path(slug, "layout", base_dir=base_dir))
        if preview:
            artifacts["preview_1"] = render_preview(slug, artifacts["pdf"], base_dir=base_dir)
    except Exception as exc:
        logger.exception("Render error for %s", slug)
        write_text_artifact(slug, "error", str(exc), base_dir=base_dir)
        raise

    logger.info("Rendered %s: %d page(s) with theme %s/%s", slug, document.page_count, options.theme, options.color_scheme)
    return artifacts


def run_render(
    note_path: Path,
    options: Optional[RenderOptions] = None,
    out_dir: Optional[Path] = None,
    original_text: Optional[Path] = None,
    preview: bool = False,
) -> Dict[str, Path]:
    note = load_note(note_path, original_text=original_text)
    return render_note(note, options, out_dir=out_dir, preview=preview)
