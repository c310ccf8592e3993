from __future__ import annotations

import io
import json
from dataclasses import asdict
from pathlib import Path
from typing import Callable, Dict

from reportlab.pdfgen import canvas

from ..layout.primitives import Circle, Document, FilledRect, Line, Primitive, TextRun


def _draw_text(canv: canvas.Canvas, run: TextRun) -> None:
    canv.setFillColorRGB(*run.color)
    canv.setFont(run.font_ref, run.size)
    canv.drawString(run.x, run.y, run.text)


def _draw_rect(canv: canvas.Canvas, rect: FilledRect) -> None:
    canv.setFillColorRGB(*rect.fill_color)
    stroke = 0
    if rect.border_color is not None:
        canv.setStrokeColorRGB(*rect.border_color)
        canv.setLineWidth(rect.border_width or 1)
        stroke = 1
    canv.rect(rect.x, rect.y, rect.width, rect.height, stroke=stroke, fill=1)


def _draw_circle(canv: canvas.Canvas, circle: Circle) -> None:
    canv.setFillColorRGB(*circle.fill_color)
    canv.circle(circle.x, circle.y, circle.radius, stroke=0, fill=1)


def _draw_line(canv: canvas.Canvas, line: Line) -> None:
    canv.setStrokeColorRGB(*line.color)
    canv.setLineWidth(line.thickness)
    canv.line(line.start[0], line.start[1], line.end[0], line.end[1])


PRIMITIVE_PAINTERS: Dict[type, Callable[[canvas.Canvas, Primitive], None]] = {
    TextRun: _draw_text,
    FilledRect: _draw_rect,
    Circle: _draw_circle,
    Line: _draw_line,
}


def _paint(canv: canvas.Canvas, document: Document) -> None:
    for page in document.pages:
        for primitive in page.primitives:
            PRIMITIVE_PAINTERS[type(primitive)](canv, primitive)
        canv.showPage()
    canv.save()


def write_pdf(document: Document, output_path: Path, title: str = "") -> Path:
    canv = canvas.Canvas(str(output_path), pagesize=(document.width, document.height))
    if title:
        canv.setTitle(title)
    _paint(canv, document)
    return output_path


def pdf_bytes(document: Document, title: str = "") -> bytes:
    buffer = io.BytesIO()
    canv = canvas.Canvas(buffer, pagesize=(document.width, document.height))
    if title:
        canv.setTitle(title)
    _paint(canv, document)
    return buffer.getvalue()


def write_layout(document: Document, output_path: Path) -> Path:
    """Dump the primitive pages as JSON for offline inspection."""
    payload = asdict(document)
    for page in payload["pages"]:
        for primitive, source in zip(page["primitives"], document.pages[page["index"]].primitives):
            primitive["kind"] = type(source).__name__
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return output_path
