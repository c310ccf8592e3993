from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union


@dataclass(frozen=True)
class Title:
    text: str
    show_header: bool = True
    badge: str = ""


@dataclass(frozen=True)
class SectionHeading:
    text: str


@dataclass(frozen=True)
class KeyConcept:
    index: int  # 1-based, shown in the badge
    title: str
    definition: str


@dataclass(frozen=True)
class SummarySection:
    heading: str
    points: Tuple[str, ...] = ()
    index: int = 1


@dataclass(frozen=True)
class ProcessStep:
    step_number: int
    title: str
    description: str


@dataclass(frozen=True)
class RawText:
    text: str


@dataclass(frozen=True)
class FeatureBanner:
    headline: str
    caption: str


ContentBlock = Union[Title, SectionHeading, KeyConcept, SummarySection, ProcessStep, RawText, FeatureBanner]


@dataclass
class Section:
    """Blocks that truncate together under the stop-and-drop policy."""

    name: str
    blocks: List[ContentBlock] = field(default_factory=list)
