from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from reportlab.lib.pagesizes import A4, LETTER

from .. import config
from ..models import NoteModel, OverflowPolicy, RenderOptions
from .blocks import (
    FeatureBanner,
    KeyConcept,
    ProcessStep,
    RawText,
    Section,
    SectionHeading,
    SummarySection,
    Title,
)
from .flow import PageFlowManager, PageFrame
from .primitives import Document, Page, Primitive
from .render import page_background, render_block, render_footer
from .theme import StyleTheme, ThemeResolver, apply_options

logger = logging.getLogger(__name__)

PAGE_SIZES: Dict[str, Tuple[float, float]] = {
    "letter": LETTER,
    "a4": A4,
}


def page_size_for(name: Optional[str]) -> Tuple[float, float]:
    key = str(name or "").strip().lower()
    if key not in PAGE_SIZES:
        logger.debug("Unknown page size %r, using %s", name, config.DEFAULT_PAGE_SIZE)
        key = config.DEFAULT_PAGE_SIZE
    return PAGE_SIZES[key]


def build_sections(note: NoteModel, options: RenderOptions) -> List[Section]:
    """Blocks in traversal order, grouped into the sections they truncate with."""
    titles = config.SECTION_TITLES
    sections = [
        Section(
            "title",
            [
                Title(
                    note.title or config.DEFAULT_NOTE_TITLE,
                    show_header=options.include_header,
                    badge=config.HEADER_BADGE_TEXT if options.include_header else "",
                )
            ],
        )
    ]

    if note.key_concepts:
        section = Section("key_concepts", [SectionHeading(titles["key_concepts"])])
        for i, concept in enumerate(note.key_concepts):
            section.blocks.append(KeyConcept(index=i + 1, title=concept.title, definition=concept.definition))
        sections.append(section)

    if note.summary_points:
        section = Section("summary_points", [SectionHeading(titles["summary_points"])])
        for i, item in enumerate(note.summary_points):
            section.blocks.append(SummarySection(heading=item.heading, points=tuple(item.points), index=i + 1))
        sections.append(section)

    if note.process_flow:
        section = Section("process_flow", [SectionHeading(titles["process_flow"])])
        for step in note.process_flow:
            section.blocks.append(ProcessStep(step_number=step.step, title=step.title, description=step.description))
        sections.append(section)

    if not note.key_concepts and not note.summary_points:
        text = note.original_content or config.RAW_TEXT_PLACEHOLDER
        sections.append(Section("raw_text", [SectionHeading(titles["raw_text"]), RawText(text)]))

    if options.include_visual_elements:
        sections.append(
            Section("visual_elements", [FeatureBanner(config.BANNER_HEADLINE, config.BANNER_CAPTION)])
        )
    return sections


class DocumentAssembler:
    def __init__(
        self,
        theme: StyleTheme,
        page_size: Tuple[float, float] = LETTER,
        options: Optional[RenderOptions] = None,
        generated_at: Optional[datetime] = None,
    ) -> None:
        self.theme = theme
        self.options = options or RenderOptions()
        self.frame = PageFrame.from_theme(theme, page_size)
        self.generated_at = generated_at or datetime.now()

    def assemble(self, note: NoteModel) -> Document:
        flow = PageFlowManager(self.frame, self.options.overflow)
        pages: List[List[Primitive]] = [[page_background(self.theme, self.frame)]]

        for section in build_sections(note, self.options):
            flow.begin_section(section.name)
            blocks = section.blocks
            for i, block in enumerate(blocks):
                result = render_block(block, flow.snapshot(), self.theme, self.frame)
                keep = 0.0
                if isinstance(block, SectionHeading) and i + 1 < len(blocks):
                    # a heading never sits alone at the bottom of a page
                    following = render_block(blocks[i + 1], flow.snapshot(), self.theme, self.frame)
                    keep = following.height
                    if flow.policy is OverflowPolicy.STOP and following.min_height is not None:
                        keep = following.min_height

                decision = flow.before_block(result.height, keep_with_next=keep)
                if decision.skip:
                    break
                if decision.new_page:
                    pages.append([page_background(self.theme, self.frame)])
                    result = render_block(block, decision.cursor, self.theme, self.frame)

                pages[-1].extend(result.primitives)
                flow.advance(result.height, anchor_y=result.anchor_y)
                if result.clipped:
                    flow.truncate_section()

        if self.options.include_footer:
            stamp = self.generated_at.strftime("%Y-%m-%d %H:%M")
            for number, primitives in enumerate(pages, start=1):
                primitives.extend(
                    render_footer(self.theme, self.frame, config.FOOTER_TEXT, stamp, number, len(pages))
                )

        logger.debug("Assembled %r into %d page(s)", note.title, len(pages))
        return Document(
            width=self.frame.width,
            height=self.frame.height,
            pages=tuple(Page(index=i, primitives=tuple(p)) for i, p in enumerate(pages)),
            truncated_sections=tuple(flow.truncated_sections),
        )


def assemble(
    note: NoteModel,
    theme: StyleTheme,
    page_size: Tuple[float, float] = LETTER,
    options: Optional[RenderOptions] = None,
    generated_at: Optional[datetime] = None,
) -> Document:
    return DocumentAssembler(theme, page_size, options, generated_at).assemble(note)


def layout_note(
    note: NoteModel,
    options: Optional[RenderOptions] = None,
    resolver: Optional[ThemeResolver] = None,
    generated_at: Optional[datetime] = None,
) -> Document:
    """Resolve the theme named in ``options`` and lay the note out with it."""
    options = options or RenderOptions()
    theme = (resolver or ThemeResolver()).resolve(options.theme, options.color_scheme)
    theme = apply_options(theme, options)
    return assemble(note, theme, page_size_for(options.page_size), options, generated_at)
