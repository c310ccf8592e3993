from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

RGB = Tuple[float, float, float]
Point = Tuple[float, float]


@dataclass(frozen=True)
class TextRun:
    text: str
    x: float
    y: float  # baseline
    size: float
    font_ref: str
    color: RGB
    max_width: Optional[float] = None


@dataclass(frozen=True)
class FilledRect:
    x: float
    y: float  # bottom edge
    width: float
    height: float
    fill_color: RGB
    border_color: Optional[RGB] = None
    border_width: Optional[float] = None


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    fill_color: RGB


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    thickness: float
    color: RGB


Primitive = Union[TextRun, FilledRect, Circle, Line]


@dataclass(frozen=True)
class Page:
    index: int
    primitives: Tuple[Primitive, ...]

    def text_runs(self) -> List[TextRun]:
        return [p for p in self.primitives if isinstance(p, TextRun)]


@dataclass(frozen=True)
class Document:
    """Engine output: pages of positioned primitives, ready for a serializer."""

    width: float
    height: float
    pages: Tuple[Page, ...]
    truncated_sections: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def page_count(self) -> int:
        return len(self.pages)
