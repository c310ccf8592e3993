from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from . import config

logger = logging.getLogger(__name__)


class OverflowPolicy(str, Enum):
    PAGE_BREAK = "page_break"
    STOP = "stop"


@dataclass(frozen=True)
class KeyConceptItem:
    title: str
    definition: str


@dataclass(frozen=True)
class SummaryItem:
    heading: str
    points: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProcessItem:
    step: int
    title: str
    description: str


@dataclass(frozen=True)
class NoteModel:
    """Finished note content as produced by the summarisation service."""

    title: str
    key_concepts: List[KeyConceptItem] = field(default_factory=list)
    summary_points: List[SummaryItem] = field(default_factory=list)
    process_flow: List[ProcessItem] = field(default_factory=list)
    original_content: str = ""


@dataclass(frozen=True)
class RenderOptions:
    theme: str = config.DEFAULT_THEME
    color_scheme: str = config.DEFAULT_COLOR_SCHEME
    # None keeps the theme's own value
    font_size: Optional[float] = None
    line_spacing: Optional[float] = None
    margin: Optional[float] = None
    font_family: Optional[str] = None
    include_header: bool = True
    include_footer: bool = True
    include_visual_elements: bool = True
    overflow: OverflowPolicy = OverflowPolicy.PAGE_BREAK
    page_size: str = config.DEFAULT_PAGE_SIZE


def _text(value, default: str = "") -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _list(value) -> list:
    return value if isinstance(value, list) else []


def _concepts(raw: list) -> List[KeyConceptItem]:
    items: List[KeyConceptItem] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            entry = {"definition": entry}
        title = _text(entry.get("title") or entry.get("concept"), f"Concept {i + 1}")
        definition = _text(
            entry.get("definition") or entry.get("description"),
            "No definition available",
        )
        items.append(KeyConceptItem(title=title, definition=definition))
    return items


def _summaries(raw: list) -> List[SummaryItem]:
    items: List[SummaryItem] = []
    for i, entry in enumerate(raw):
        if isinstance(entry, dict):
            heading = _text(entry.get("heading") or entry.get("title"), f"Section {i + 1}")
            points = entry.get("points")
        else:
            heading = f"Section {i + 1}"
            points = entry
        if not isinstance(points, list):
            points = [points] if points else []
        cleaned = [_text(p) for p in points]
        items.append(SummaryItem(heading=heading, points=[p for p in cleaned if p]))
    return items


def _steps(raw: list) -> List[ProcessItem]:
    items: List[ProcessItem] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            entry = {"description": entry}
        try:
            number = int(entry.get("step"))
        except (TypeError, ValueError):
            number = i + 1
        items.append(
            ProcessItem(
                step=number,
                title=_text(entry.get("title"), f"Step {number}"),
                description=_text(entry.get("description"), "Process step description."),
            )
        )
    return items


def note_from_dict(payload: dict, original_content: str = "") -> NoteModel:
    """
    Build a NoteModel from the summariser's JSON payload.

    Structured content may sit at the top level or under ``processedContent``.
    Missing or malformed pieces fall back to safe defaults instead of raising.
    """
    processed = payload.get("processedContent")
    content = processed if isinstance(processed, dict) else payload

    title = _text(payload.get("title") or content.get("title"), config.DEFAULT_NOTE_TITLE)
    if title == config.DEFAULT_NOTE_TITLE:
        logger.debug("Note has no title, using default")

    original = _text(original_content) or _text(payload.get("originalContent"))
    return NoteModel(
        title=title,
        key_concepts=_concepts(_list(content.get("keyConcepts"))),
        summary_points=_summaries(_list(content.get("summaryPoints"))),
        process_flow=_steps(_list(content.get("processFlow"))),
        original_content=original,
    )
