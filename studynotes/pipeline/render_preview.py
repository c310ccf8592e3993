from __future__ import annotations

from pathlib import Path

import fitz  # PyMuPDF

from ..storage import artifact_path


def _render_page_to_png(doc: fitz.Document, page_index: int, out_path: Path, min_px: int = 1600) -> None:
    page = doc.load_page(page_index)

    # scale so that the short side lands at roughly min_px pixels
    rect = page.rect
    short_side = min(rect.width, rect.height)
    zoom = max(1.0, min_px / float(short_side))
    mat = fitz.Matrix(zoom, zoom)

    pix = page.get_pixmap(matrix=mat, alpha=False)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    pix.save(str(out_path))


def render_preview(slug: str, pdf_path: Path, base_dir: Path | None = None, include_slug: bool = True) -> Path:
    """Rasterise the first page of the rendered notes."""
    out_path = artifact_path(slug, "preview_1", base_dir=base_dir, include_slug=include_slug)
    with fitz.open(pdf_path) as doc:
        _render_page_to_png(doc, 0, out_path)
    return out_path
