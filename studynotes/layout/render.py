"""
Block renderers.

Each renderer takes a block, a read-only cursor snapshot, the theme and the
page frame, and returns the primitives it drew plus the vertical space it
used. Renderers never move the cursor; the flow manager does that.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .blocks import (
    ContentBlock,
    FeatureBanner,
    KeyConcept,
    ProcessStep,
    RawText,
    SectionHeading,
    SummarySection,
    Title,
)
from .flow import CursorSnapshot, PageFrame
from .primitives import RGB, Circle, FilledRect, Line, Primitive, TextRun
from .text import fit_font_size, measure, wrap_text
from .theme import SHADOW, WHITE, StyleTheme

MAX_DEFINITION_LINES = 3
MAX_POINTS_PER_SECTION = 5
MAX_LINES_PER_POINT = 2
MAX_STEP_LINES = 4
MAX_RAW_LINES = 30

ACCENT_BAR_HEIGHT = 6.0
BAND_BLEED = 20.0
HEADER_PADDING = 16.0
BADGE_FONT_SIZE = 9.0
CARD_PADDING = 10.0
BADGE_RADIUS = 9.0
STEP_RADIUS = 12.0
BULLET_RADIUS = 2.0
POINT_GAP = 5.0
SHADOW_OFFSET = 3.0
GRADIENT_STEPS = 4
BANNER_HEIGHT = 40.0
PATTERN_DOTS = 5


@dataclass(frozen=True)
class BlockRender:
    primitives: Tuple[Primitive, ...]
    height: float
    # only set by process steps; the next step draws its connector from here
    anchor_y: Optional[float] = None
    # drawn short because the cursor asked for clip_to_fit
    clipped: bool = False
    # smallest height the block can be cut down to; None when it cannot be cut
    min_height: Optional[float] = None


def _mix(a: RGB, b: RGB, t: float) -> RGB:
    return tuple(round(x + (y - x) * t, 4) for x, y in zip(a, b))


def _centered_baseline(top: float, box_height: float, size: float) -> float:
    return top - box_height / 2 - size * 0.3


def _border(theme: StyleTheme, color: RGB, width: float) -> dict:
    if not theme.decorations.borders:
        return {}
    return {"border_color": color, "border_width": width}


def _number_run(text: str, cx: float, cy: float, size: float, font: str) -> TextRun:
    return TextRun(text, cx - measure(text, font, size) / 2, cy - size * 0.35, size, font, WHITE)


def card_height(theme: StyleTheme) -> float:
    """Fixed key-concept card height; depends on the theme only."""
    title_size = theme.typography.body_size + 2
    return 2 * CARD_PADDING + title_size + 4 + MAX_DEFINITION_LINES * theme.line_height


def render_title(block: Title, cursor: CursorSnapshot, theme: StyleTheme, frame: PageFrame) -> BlockRender:
    ty = theme.typography
    p = theme.palette
    out: List[Primitive] = []
    y = cursor.y

    if not block.show_header:
        size = fit_font_size(block.text, ty.title_font, ty.title_size, frame.content_width, minimum=12.0)
        out.append(TextRun(block.text, frame.left, y - size * 0.8, size, ty.title_font, p.primary, frame.content_width))
        if theme.decorations.borders:
            rule_y = y - size - 4
            out.append(Line((frame.left, rule_y), (frame.right, rule_y), 1.5, p.secondary))
        return BlockRender(tuple(out), size + 8 + theme.spacing.section)

    badge_w = 0.0
    if block.badge:
        badge_w = measure(block.badge, ty.heading_font, BADGE_FONT_SIZE) + 20
    title_w = frame.content_width - (badge_w + 12 if badge_w else 0)
    size = fit_font_size(block.text, ty.title_font, ty.title_size, title_w, minimum=12.0)
    band_h = size + 2 * HEADER_PADDING
    band_y = y - band_h

    out.append(FilledRect(0, frame.height - ACCENT_BAR_HEIGHT, frame.width, ACCENT_BAR_HEIGHT, p.primary))
    out.append(
        FilledRect(
            frame.left - BAND_BLEED,
            band_y,
            frame.content_width + 2 * BAND_BLEED,
            band_h,
            p.accent,
            **_border(theme, p.primary, 2.0),
        )
    )
    if theme.decorations.gradients:
        # lower half fades from accent toward the page background
        strip_h = band_h / 2 / GRADIENT_STEPS
        for i in range(GRADIENT_STEPS):
            out.append(
                FilledRect(
                    frame.left - BAND_BLEED + 2,
                    band_y + 2 + i * strip_h,
                    frame.content_width + 2 * BAND_BLEED - 4,
                    strip_h,
                    _mix(p.accent, p.background, (GRADIENT_STEPS - i) / (GRADIENT_STEPS + 1)),
                )
            )
    if badge_w:
        badge_h = 18.0
        bx = frame.right - badge_w
        by = band_y + (band_h - badge_h) / 2
        out.append(FilledRect(bx, by, badge_w, badge_h, p.primary))
        out.append(TextRun(block.badge, bx + 10, by + 5.5, BADGE_FONT_SIZE, ty.heading_font, WHITE))

    out.append(
        TextRun(block.text, frame.left, _centered_baseline(y, band_h, size), size, ty.title_font, p.primary, title_w)
    )
    return BlockRender(tuple(out), band_h + theme.spacing.section)


def render_section_heading(
    block: SectionHeading, cursor: CursorSnapshot, theme: StyleTheme, frame: PageFrame
) -> BlockRender:
    ty = theme.typography
    p = theme.palette
    size = ty.heading_size
    bar_h = size + 10
    band = FilledRect(
        frame.left - 10,
        cursor.y - bar_h,
        frame.content_width + 20,
        bar_h,
        p.accent,
        **_border(theme, p.primary, 1.0),
    )
    text = TextRun(block.text, frame.left, _centered_baseline(cursor.y, bar_h, size), size, ty.heading_font, p.primary)
    return BlockRender((band, text), bar_h + theme.spacing.paragraph)


def render_key_concept(block: KeyConcept, cursor: CursorSnapshot, theme: StyleTheme, frame: PageFrame) -> BlockRender:
    ty = theme.typography
    p = theme.palette
    y = cursor.y
    out: List[Primitive] = []

    h = card_height(theme)
    card_y = y - h
    if theme.decorations.shadows:
        out.append(FilledRect(frame.left + SHADOW_OFFSET, card_y - SHADOW_OFFSET, frame.content_width, h, SHADOW))
    out.append(FilledRect(frame.left, card_y, frame.content_width, h, WHITE, **_border(theme, p.secondary, 1.0)))

    cx = frame.left + CARD_PADDING + BADGE_RADIUS
    cy = y - CARD_PADDING - BADGE_RADIUS
    out.append(Circle(cx, cy, BADGE_RADIUS, p.highlight))
    out.append(_number_run(str(block.index), cx, cy, 10.0, ty.heading_font))

    text_x = cx + BADGE_RADIUS + 10
    text_w = frame.right - CARD_PADDING - text_x
    title_size = ty.body_size + 2
    baseline = y - CARD_PADDING - title_size * 0.8
    out.append(TextRun(block.title, text_x, baseline, title_size, ty.heading_font, p.primary, text_w))

    line_y = baseline - title_size * 0.2 - 4 - ty.body_size * 0.8
    for line in wrap_text(block.definition, text_w, ty.body_font, ty.body_size)[:MAX_DEFINITION_LINES]:
        out.append(TextRun(line, text_x, line_y, ty.body_size, ty.body_font, p.text, text_w))
        line_y -= theme.line_height

    return BlockRender(tuple(out), h + theme.spacing.paragraph)


def render_summary_section(
    block: SummarySection, cursor: CursorSnapshot, theme: StyleTheme, frame: PageFrame
) -> BlockRender:
    ty = theme.typography
    p = theme.palette
    y = cursor.y
    out: List[Primitive] = []

    size = max(ty.body_size + 1, ty.heading_size - 2)
    bar_h = size + 6
    out.append(FilledRect(frame.left, y - bar_h, 5, bar_h, p.primary))
    out.append(
        TextRun(
            f"{block.index}. {block.heading}",
            frame.left + 12,
            _centered_baseline(y, bar_h, size),
            size,
            ty.heading_font,
            p.secondary,
            frame.content_width - 12,
        )
    )

    text_x = frame.left + 25
    text_w = frame.right - text_x
    tail = theme.spacing.section / 2
    cur = y - bar_h - theme.spacing.paragraph / 2
    wrapped = [wrap_text(point, text_w, ty.body_font, ty.body_size)[:MAX_LINES_PER_POINT] for point in block.points]
    wrapped = [lines for lines in wrapped if lines][:MAX_POINTS_PER_SECTION]
    min_height = None
    if wrapped:
        min_height = (y - cur) + len(wrapped[0]) * theme.line_height + POINT_GAP + tail
    if cursor.clip_to_fit and wrapped:
        # whole points only, as many as the remaining height takes
        used = y - cur
        fitting = 0
        for lines in wrapped:
            if used + len(lines) * theme.line_height + POINT_GAP + tail > cursor.remaining_height:
                break
            used += len(lines) * theme.line_height + POINT_GAP
            fitting += 1
        clipped = 0 < fitting < len(wrapped)
        if clipped:
            wrapped = wrapped[:fitting]
    else:
        clipped = False

    for lines in wrapped:
        baseline = cur - ty.body_size * 0.8
        out.append(Circle(frame.left + 15, baseline + ty.body_size * 0.3, BULLET_RADIUS, p.primary))
        for line in lines:
            out.append(TextRun(line, text_x, baseline, ty.body_size, ty.body_font, p.text, text_w))
            baseline -= theme.line_height
        cur -= len(lines) * theme.line_height + POINT_GAP

    return BlockRender(tuple(out), (y - cur) + tail, clipped=clipped, min_height=min_height)


def render_process_step(block: ProcessStep, cursor: CursorSnapshot, theme: StyleTheme, frame: PageFrame) -> BlockRender:
    ty = theme.typography
    p = theme.palette
    y = cursor.y
    out: List[Primitive] = []

    cx = frame.left + STEP_RADIUS
    cy = y - STEP_RADIUS
    if cursor.anchor_y is not None and not cursor.at_page_top:
        out.append(Line((cx, cursor.anchor_y), (cx, cy + STEP_RADIUS), 2.0, p.secondary))
    out.append(Circle(cx, cy, STEP_RADIUS, p.primary))
    out.append(_number_run(str(block.step_number), cx, cy, 10.0, ty.heading_font))

    text_x = cx + STEP_RADIUS + 14
    text_w = frame.right - text_x
    title_size = ty.body_size + 2
    baseline = y - title_size * 0.8
    out.append(TextRun(block.title, text_x, baseline, title_size, ty.heading_font, p.secondary, text_w))

    bottom = baseline - title_size * 0.2
    line_y = bottom - 4 - ty.body_size * 0.8
    for line in wrap_text(block.description, text_w, ty.body_font, ty.body_size)[:MAX_STEP_LINES]:
        out.append(TextRun(line, text_x, line_y, ty.body_size, ty.body_font, p.text, text_w))
        bottom = line_y - ty.body_size * 0.2
        line_y -= theme.line_height

    used = max(2 * STEP_RADIUS, y - bottom)
    return BlockRender(tuple(out), used + theme.spacing.paragraph + 6, anchor_y=cy - STEP_RADIUS)


def render_raw_text(block: RawText, cursor: CursorSnapshot, theme: StyleTheme, frame: PageFrame) -> BlockRender:
    ty = theme.typography
    lines = wrap_text(block.text, frame.content_width, ty.body_font, ty.body_size)[:MAX_RAW_LINES]
    clipped = False
    if cursor.clip_to_fit:
        room = int((cursor.remaining_height - theme.spacing.paragraph) // theme.line_height)
        if 0 < room < len(lines):
            lines = lines[:room]
            clipped = True
    out: List[Primitive] = []
    baseline = cursor.y - ty.body_size * 0.8
    for line in lines:
        out.append(TextRun(line, frame.left, baseline, ty.body_size, ty.body_font, theme.palette.text, frame.content_width))
        baseline -= theme.line_height
    return BlockRender(
        tuple(out),
        len(lines) * theme.line_height + theme.spacing.paragraph,
        clipped=clipped,
        min_height=theme.line_height + theme.spacing.paragraph,
    )


def render_feature_banner(
    block: FeatureBanner, cursor: CursorSnapshot, theme: StyleTheme, frame: PageFrame
) -> BlockRender:
    ty = theme.typography
    p = theme.palette
    d = theme.decorations
    y = cursor.y
    band_y = y - BANNER_HEIGHT
    band_x = frame.left - 10
    band_w = frame.content_width + 20
    out: List[Primitive] = []

    if d.shadows:
        out.append(FilledRect(band_x + SHADOW_OFFSET, band_y - SHADOW_OFFSET, band_w, BANNER_HEIGHT, SHADOW))
    out.append(FilledRect(band_x, band_y, band_w, BANNER_HEIGHT, p.accent, **_border(theme, p.primary, 1.0)))

    text_x = frame.left
    if d.icons:
        out.append(Circle(frame.left + 8, band_y + BANNER_HEIGHT / 2, 8.0, p.primary))
        text_x = frame.left + 24
    text_w = frame.right - text_x
    out.append(TextRun(block.headline, text_x, y - 17, 12.0, ty.heading_font, p.primary, text_w))
    out.append(TextRun(block.caption, text_x, y - 31, 9.0, ty.body_font, p.secondary, text_w))
    if d.patterns:
        for i in range(PATTERN_DOTS):
            out.append(Circle(frame.right - 8 - i * 10, band_y + BANNER_HEIGHT / 2, 2.5, p.secondary))

    return BlockRender(tuple(out), BANNER_HEIGHT + theme.spacing.section)


BLOCK_RENDERERS: Dict[type, Callable[[ContentBlock, CursorSnapshot, StyleTheme, PageFrame], BlockRender]] = {
    Title: render_title,
    SectionHeading: render_section_heading,
    KeyConcept: render_key_concept,
    SummarySection: render_summary_section,
    ProcessStep: render_process_step,
    RawText: render_raw_text,
    FeatureBanner: render_feature_banner,
}


def render_block(block: ContentBlock, cursor: CursorSnapshot, theme: StyleTheme, frame: PageFrame) -> BlockRender:
    fn = BLOCK_RENDERERS.get(type(block))
    if fn is None:
        raise TypeError(f"No renderer for block type {type(block).__name__}")
    return fn(block, cursor, theme, frame)


def page_background(theme: StyleTheme, frame: PageFrame) -> FilledRect:
    return FilledRect(0, 0, frame.width, frame.height, theme.palette.background)


def render_footer(
    theme: StyleTheme,
    frame: PageFrame,
    text: str,
    generated_on: str,
    page_number: int,
    page_count: int,
) -> List[Primitive]:
    ty = theme.typography
    p = theme.palette
    size = 9.0
    rule_y = frame.bottom * 0.75
    baseline = frame.bottom * 0.45
    label = f"Page {page_number} of {page_count}"
    return [
        Line((frame.left, rule_y), (frame.right, rule_y), 1.0, p.secondary),
        TextRun(text, frame.left, baseline, size, ty.body_font, p.secondary),
        TextRun(label, frame.right - measure(label, ty.body_font, size), baseline, size, ty.body_font, p.secondary),
        TextRun(f"Generated on: {generated_on}", frame.left, baseline - size - 2, size, ty.body_font, p.secondary),
    ]
