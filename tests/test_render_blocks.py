from __future__ import annotations

from dataclasses import replace

import pytest
from reportlab.lib.pagesizes import LETTER

from studynotes.layout.blocks import (
    FeatureBanner,
    KeyConcept,
    ProcessStep,
    RawText,
    SectionHeading,
    SummarySection,
    Title,
)
from studynotes.layout.flow import CursorSnapshot, PageFrame
from studynotes.layout.primitives import Circle, FilledRect, Line, TextRun
from studynotes.layout.render import (
    MAX_RAW_LINES,
    STEP_RADIUS,
    card_height,
    render_block,
    render_feature_banner,
    render_footer,
    render_key_concept,
    render_process_step,
    render_raw_text,
    render_summary_section,
    render_title,
)
from studynotes.layout.text import wrap_text
from studynotes.layout.theme import SHADOW, ThemeResolver


@pytest.fixture
def theme():
    return ThemeResolver().resolve("modern", "blue")


@pytest.fixture
def frame(theme) -> PageFrame:
    return PageFrame.from_theme(theme, LETTER)


@pytest.fixture
def top(frame: PageFrame) -> CursorSnapshot:
    return CursorSnapshot(x=frame.left, y=frame.top, page_index=0, remaining_height=frame.capacity)


def _of(result, kind):
    return [p for p in result.primitives if isinstance(p, kind)]


def test_title_with_header(theme, frame, top) -> None:
    result = render_block(Title("Test", badge="Multi-Model AI"), top, theme, frame)
    rects = _of(result, FilledRect)
    accent = rects[0]
    assert (accent.x, accent.y, accent.width, accent.height) == (0, frame.height - 6, frame.width, 6)
    assert accent.fill_color == theme.palette.primary

    runs = _of(result, TextRun)
    assert [r.text for r in runs] == ["Multi-Model AI", "Test"]
    title = runs[-1]
    assert title.size == 24
    assert title.font_ref == "Helvetica-Bold"
    assert title.x == frame.left
    assert title.max_width < frame.content_width
    assert result.height > 24


def test_long_title_shrinks_to_fit(theme, frame, top) -> None:
    text = "An Extremely Long Title About Cellular Respiration And Everything Around It"
    result = render_title(Title(text, badge="Multi-Model AI"), top, theme, frame)
    title = _of(result, TextRun)[-1]
    assert title.size < theme.typography.title_size


def test_title_without_header(theme, frame, top) -> None:
    result = render_title(Title("Test", show_header=False), top, theme, frame)
    runs = _of(result, TextRun)
    assert [r.text for r in runs] == ["Test"]
    assert not _of(result, FilledRect)
    # modern has borders, so the title is underlined
    assert len(_of(result, Line)) == 1


def test_section_heading(theme, frame, top) -> None:
    result = render_block(SectionHeading("Key Concepts"), top, theme, frame)
    (run,) = _of(result, TextRun)
    assert run.text == "Key Concepts"
    assert run.size == theme.typography.heading_size
    assert len(_of(result, FilledRect)) == 1


def test_key_concept_card_height_is_constant(theme, frame, top) -> None:
    short = render_key_concept(KeyConcept(1, "A", "short"), top, theme, frame)
    long = render_key_concept(KeyConcept(2, "B", " ".join(["word"] * 300)), top, theme, frame)
    assert short.height == long.height == card_height(theme) + theme.spacing.paragraph


def test_key_concept_parts(theme, frame, top) -> None:
    result = render_key_concept(KeyConcept(1, "A", "short"), top, theme, frame)
    (badge,) = _of(result, Circle)
    assert badge.radius == 9
    texts = [r.text for r in _of(result, TextRun)]
    assert texts == ["1", "A", "short"]
    # shadow then card
    rects = _of(result, FilledRect)
    assert rects[0].fill_color == SHADOW
    assert rects[1].border_color == theme.palette.secondary


def test_long_definition_draws_only_three_lines(theme, frame, top) -> None:
    definition = " ".join(f"term{i}" for i in range(500))
    result = render_key_concept(KeyConcept(1, "Big", definition), top, theme, frame)

    body = [r for r in _of(result, TextRun) if r.font_ref == theme.typography.body_font]
    assert len(body) == 3
    expected = wrap_text(definition, body[0].max_width, "Helvetica", 12)
    assert len(expected) > 3
    assert [r.text for r in body] == expected[:3]
    drawn = " ".join(r.text for r in _of(result, TextRun))
    assert "term499" not in drawn


def test_summary_section_caps_points_and_lines(theme, frame, top) -> None:
    long_point = " ".join(["photosynthesis"] * 80)
    points = (long_point,) + tuple(f"point {i}" for i in range(6))
    result = render_summary_section(SummarySection("Inputs", points, index=2), top, theme, frame)

    bullets = [c for c in _of(result, Circle) if c.radius == 2]
    assert len(bullets) == 5
    runs = _of(result, TextRun)
    assert runs[0].text == "2. Inputs"
    long_lines = [r for r in runs[1:] if r.text.startswith("photosynthesis")]
    assert len(long_lines) == 2
    assert "point 4" not in [r.text for r in runs]


def test_summary_section_skips_empty_points(theme, frame, top) -> None:
    result = render_summary_section(SummarySection("Empty", ("", "  ")), top, theme, frame)
    assert not _of(result, Circle)
    assert len(_of(result, TextRun)) == 1


def test_process_step_connector(theme, frame) -> None:
    cursor = CursorSnapshot(x=frame.left, y=500, page_index=0, remaining_height=420, at_page_top=False, anchor_y=520)
    result = render_process_step(ProcessStep(2, "Split", "Water splits."), cursor, theme, frame)

    (connector,) = _of(result, Line)
    cx = frame.left + STEP_RADIUS
    assert connector.start == (cx, 520)
    assert connector.end == (cx, 500)
    assert result.anchor_y == 500 - 2 * STEP_RADIUS
    assert [r.text for r in _of(result, TextRun)][:2] == ["2", "Split"]


def test_process_step_without_connector(theme, frame, top) -> None:
    first = render_process_step(ProcessStep(1, "Absorb", "Light."), top, theme, frame)
    assert not _of(first, Line)

    after_break = CursorSnapshot(x=frame.left, y=frame.top, page_index=1, remaining_height=frame.capacity, anchor_y=90)
    assert not _of(render_process_step(ProcessStep(5, "Next", "More."), after_break, theme, frame), Line)


def test_process_step_caps_description(theme, frame, top) -> None:
    result = render_process_step(ProcessStep(1, "Long", " ".join(["enzyme"] * 400)), top, theme, frame)
    body = [r for r in _of(result, TextRun) if r.font_ref == theme.typography.body_font]
    assert len(body) == 4


def test_raw_text_is_capped(theme, frame, top) -> None:
    result = render_raw_text(RawText(" ".join(["chloroplast"] * 2000)), top, theme, frame)
    assert len(_of(result, TextRun)) == MAX_RAW_LINES


def test_banner_decorations_follow_theme(frame, top) -> None:
    colorful = ThemeResolver().resolve("colorful", "orange")
    result = render_feature_banner(FeatureBanner("Headline", "Caption"), top, colorful, PageFrame.from_theme(colorful, LETTER))
    assert _of(result, FilledRect)[0].fill_color == SHADOW
    radii = sorted(c.radius for c in _of(result, Circle))
    assert radii == [2.5] * 5 + [8.0]

    minimal = ThemeResolver().resolve("minimal", "orange")
    plain = render_feature_banner(FeatureBanner("Headline", "Caption"), top, minimal, PageFrame.from_theme(minimal, LETTER))
    assert not _of(plain, Circle)
    assert len(_of(plain, FilledRect)) == 1
    assert [r.text for r in _of(plain, TextRun)] == ["Headline", "Caption"]


def test_unknown_block_type_is_rejected(theme, frame, top) -> None:
    with pytest.raises(TypeError):
        render_block(object(), top, theme, frame)  # type: ignore[arg-type]


def test_renderers_do_not_depend_on_position_for_height(theme, frame, top) -> None:
    lower = CursorSnapshot(x=frame.left, y=300, page_index=0, remaining_height=220, at_page_top=False)
    block = SummarySection("Limits", ("Light", "Temperature"))
    assert render_block(block, top, theme, frame).height == render_block(block, lower, theme, frame).height


def test_footer(theme, frame) -> None:
    prims = render_footer(theme, frame, "footer text", "2024-01-02 03:04", 2, 3)
    texts = [p.text for p in prims if isinstance(p, TextRun)]
    assert texts == ["footer text", "Page 2 of 3", "Generated on: 2024-01-02 03:04"]
    assert isinstance(prims[0], Line)
    assert all(p.y < frame.bottom for p in prims if isinstance(p, TextRun))


def test_concept_badge_uses_highlight(theme, frame, top) -> None:
    (badge,) = _of(render_key_concept(KeyConcept(1, "A", "short"), top, theme, frame), Circle)
    assert badge.fill_color == theme.palette.highlight


def test_raw_text_clips_to_remaining_height(theme, frame) -> None:
    text = " ".join(["chloroplast"] * 2000)
    cursor = CursorSnapshot(x=frame.left, y=300, page_index=0, remaining_height=220, at_page_top=False, clip_to_fit=True)
    result = render_raw_text(RawText(text), cursor, theme, frame)

    # (220 - 12 paragraph) // 18 line height
    assert len(_of(result, TextRun)) == 11
    assert result.clipped
    assert result.height <= cursor.remaining_height
    assert result.min_height == theme.line_height + theme.spacing.paragraph

    unclipped = render_raw_text(RawText(text), replace(cursor, clip_to_fit=False), theme, frame)
    assert len(_of(unclipped, TextRun)) == MAX_RAW_LINES
    assert not unclipped.clipped


def test_raw_text_that_fits_is_not_clipped(theme, frame) -> None:
    cursor = CursorSnapshot(x=frame.left, y=600, page_index=0, remaining_height=520, clip_to_fit=True)
    result = render_raw_text(RawText("Short original text."), cursor, theme, frame)
    assert not result.clipped
    assert [r.text for r in _of(result, TextRun)] == ["Short original text."]


def test_summary_section_keeps_whole_points_that_fit(theme, frame) -> None:
    long_point = " ".join(["chlorophyll absorbs light"] * 20)
    block = SummarySection("Limits", (long_point,) * 5)
    cursor = CursorSnapshot(x=frame.left, y=244, page_index=0, remaining_height=164, at_page_top=False, clip_to_fit=True)
    result = render_summary_section(block, cursor, theme, frame)

    assert len([c for c in _of(result, Circle) if c.radius == 2]) == 3
    assert result.clipped
    assert result.height <= cursor.remaining_height
    # heading bar, one two-line point and the gaps around it
    assert result.min_height == 20 + 6 + 2 * 18 + 5 + 12
