"""Vertical flow of blocks down the page, with page-break or truncation on overflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..models import OverflowPolicy
from .theme import Margins, StyleTheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageFrame:
    width: float
    height: float
    margins: Margins

    @classmethod
    def from_theme(cls, theme: StyleTheme, page_size: Tuple[float, float]) -> "PageFrame":
        width, height = page_size
        return cls(width=float(width), height=float(height), margins=theme.margins)

    @property
    def left(self) -> float:
        return self.margins.left

    @property
    def right(self) -> float:
        return self.width - self.margins.right

    @property
    def content_width(self) -> float:
        return self.right - self.left

    @property
    def top(self) -> float:
        return self.height - self.margins.top

    @property
    def bottom(self) -> float:
        return self.margins.bottom

    @property
    def capacity(self) -> float:
        return self.top - self.bottom


@dataclass
class LayoutCursor:
    x: float
    y: float
    page_index: int
    remaining_height: float


@dataclass(frozen=True)
class CursorSnapshot:
    """Read-only view of the cursor handed to block renderers."""

    x: float
    y: float
    page_index: int
    remaining_height: float
    at_page_top: bool = True
    # bottom of the previous process-step badge on this page, if any
    anchor_y: Optional[float] = None
    # set under STOP: blocks that can be cut short draw only what fits
    clip_to_fit: bool = False


@dataclass(frozen=True)
class FlowDecision:
    cursor: CursorSnapshot
    overflowed: bool
    skip: bool = False
    new_page: bool = False


class PageFlowManager:
    """Sole owner of the layout cursor.

    Under ``PAGE_BREAK`` a block that does not fit moves to a fresh page; a
    block that does not fit even on an empty page is placed anyway and the
    cursor is clamped to the bottom margin. Under ``STOP`` the block and the
    rest of its section are dropped.
    """

    def __init__(self, frame: PageFrame, policy: OverflowPolicy = OverflowPolicy.PAGE_BREAK) -> None:
        self.frame = frame
        self.policy = OverflowPolicy(policy)
        self._cursor = LayoutCursor(x=frame.left, y=frame.top, page_index=0, remaining_height=frame.capacity)
        self._placed_on_page = False
        self._anchor_y: Optional[float] = None
        self._section = ""
        self._section_truncated = False
        self.truncated_sections: List[str] = []

    @property
    def page_index(self) -> int:
        return self._cursor.page_index

    @property
    def page_count(self) -> int:
        return self._cursor.page_index + 1

    @property
    def section_truncated(self) -> bool:
        return self._section_truncated

    def snapshot(self) -> CursorSnapshot:
        c = self._cursor
        return CursorSnapshot(
            x=c.x,
            y=c.y,
            page_index=c.page_index,
            remaining_height=c.remaining_height,
            at_page_top=not self._placed_on_page,
            anchor_y=self._anchor_y,
            clip_to_fit=self.policy is OverflowPolicy.STOP,
        )

    def begin_section(self, name: str) -> None:
        self._section = name
        self._section_truncated = False
        self._anchor_y = None

    def before_block(self, estimated_height: float, keep_with_next: float = 0.0) -> FlowDecision:
        if self._section_truncated:
            return FlowDecision(self.snapshot(), overflowed=True, skip=True)

        needed = estimated_height + keep_with_next
        if needed <= self._cursor.remaining_height:
            return FlowDecision(self.snapshot(), overflowed=False)

        if self.policy is OverflowPolicy.STOP:
            self._section_truncated = True
            self.truncated_sections.append(self._section)
            logger.debug(
                "Section %s truncated on page %d (needed %.1f, left %.1f)",
                self._section,
                self._cursor.page_index,
                needed,
                self._cursor.remaining_height,
            )
            return FlowDecision(self.snapshot(), overflowed=True, skip=True)

        if self._placed_on_page:
            self._start_page()
            logger.debug("Page break before %s block, now on page %d", self._section, self._cursor.page_index)
            return FlowDecision(self.snapshot(), overflowed=True, new_page=True)

        logger.debug("Block of %.1f exceeds an empty page of %.1f", needed, self.frame.capacity)
        return FlowDecision(self.snapshot(), overflowed=True)

    def truncate_section(self) -> None:
        """Record the current section as cut short; its remaining blocks are skipped."""
        if not self._section_truncated:
            self._section_truncated = True
            self.truncated_sections.append(self._section)
            logger.debug("Section %s clipped on page %d", self._section, self._cursor.page_index)

    def advance(self, height: float, anchor_y: Optional[float] = None) -> CursorSnapshot:
        c = self._cursor
        c.y = max(self.frame.bottom, c.y - height)
        c.remaining_height = max(0.0, c.y - self.frame.bottom)
        self._placed_on_page = True
        self._anchor_y = anchor_y
        return self.snapshot()

    def _start_page(self) -> None:
        c = self._cursor
        c.page_index += 1
        c.y = self.frame.top
        c.remaining_height = self.frame.capacity
        self._placed_on_page = False
        self._anchor_y = None
