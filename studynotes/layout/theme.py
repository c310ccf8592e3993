"""Theme tables and the resolver that turns identifiers into a StyleTheme."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics

from .. import config
from ..models import RenderOptions

logger = logging.getLogger(__name__)

RGB = Tuple[float, float, float]

WHITE: RGB = (1.0, 1.0, 1.0)
SHADOW: RGB = (0.82, 0.84, 0.87)

MIN_MARGIN = 24.0
MAX_MARGIN = 144.0
MIN_FONT_SIZE = 6.0
MAX_FONT_SIZE = 36.0
MIN_LINE_SPACING = 1.0
MAX_LINE_SPACING = 3.0

FONT_FAMILIES: Dict[str, Tuple[str, str]] = {
    "helvetica": ("Helvetica", "Helvetica-Bold"),
    "times": ("Times-Roman", "Times-Bold"),
    "courier": ("Courier", "Courier-Bold"),
}


def _rgb(value: str) -> RGB:
    return tuple(colors.HexColor("#" + str(value).lstrip("#")).rgb())


@dataclass(frozen=True)
class Palette:
    primary: RGB
    secondary: RGB
    accent: RGB
    background: RGB
    text: RGB
    highlight: RGB


@dataclass(frozen=True)
class Typography:
    title_font: str
    heading_font: str
    body_font: str
    title_size: float
    heading_size: float
    body_size: float


@dataclass(frozen=True)
class Margins:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class Spacing:
    line: float
    paragraph: float
    section: float


@dataclass(frozen=True)
class Decorations:
    borders: bool = False
    shadows: bool = False
    gradients: bool = False
    icons: bool = False
    patterns: bool = False


@dataclass(frozen=True)
class StyleTheme:
    name: str
    color_scheme: str
    palette: Palette
    typography: Typography
    margins: Margins
    spacing: Spacing
    columns: int
    decorations: Decorations

    @property
    def line_height(self) -> float:
        return self.typography.body_size * self.spacing.line


# Design styles: typography, layout and decoration presets.
DESIGN_STYLES: Dict[str, dict] = {
    "academic": {
        "fonts": ("Times-Bold", "Times-Bold", "Times-Roman"),
        "sizes": (24, 18, 11),
        "margins": (72, 72, 72, 72),
        "spacing": (1.4, 14, 28),
        "columns": 1,
        "decorations": {"borders": True},
    },
    "modern": {
        "fonts": ("Helvetica-Bold", "Helvetica-Bold", "Helvetica"),
        "sizes": (24, 16, 12),
        "margins": (80, 60, 80, 60),
        "spacing": (1.5, 12, 24),
        "columns": 1,
        "decorations": {"borders": True, "shadows": True, "gradients": True, "icons": True},
    },
    "minimal": {
        "fonts": ("Helvetica-Bold", "Helvetica", "Helvetica"),
        "sizes": (22, 14, 11),
        "margins": (72, 72, 72, 72),
        "spacing": (1.5, 12, 28),
        "columns": 1,
        "decorations": {},
    },
    "colorful": {
        "fonts": ("Helvetica-Bold", "Helvetica-Bold", "Helvetica"),
        "sizes": (28, 18, 11),
        "margins": (70, 50, 70, 50),
        "spacing": (1.3, 14, 28),
        "columns": 1,
        "decorations": {"borders": True, "shadows": True, "gradients": True, "icons": True, "patterns": True},
    },
    "executive": {
        "fonts": ("Times-Bold", "Times-Roman", "Times-Roman"),
        "sizes": (28, 18, 12),
        "margins": (80, 60, 80, 60),
        "spacing": (1.6, 16, 32),
        "columns": 1,
        "decorations": {"borders": True, "shadows": True, "gradients": True},
    },
    "creative": {
        "fonts": ("Helvetica-Bold", "Helvetica-Bold", "Helvetica"),
        "sizes": (32, 20, 13),
        "margins": (70, 50, 70, 50),
        "spacing": (1.8, 18, 36),
        "columns": 2,
        "decorations": {"borders": True, "shadows": True, "gradients": True, "icons": True, "patterns": True},
    },
    "technical": {
        "fonts": ("Courier-Bold", "Courier-Bold", "Courier"),
        "sizes": (24, 16, 11),
        "margins": (60, 40, 60, 40),
        "spacing": (1.4, 14, 28),
        "columns": 1,
        "decorations": {"patterns": True},
    },
}

COLOR_SCHEMES: Dict[str, Dict[str, str]] = {
    "blue": {
        "primary": "#3366CC",
        "secondary": "#6699E6",
        "accent": "#CCE6FF",
        "background": "#FCFCFF",
        "text": "#1A1A1A",
        "highlight": "#2563EB",
    },
    "green": {
        "primary": "#33994D",
        "secondary": "#66CC80",
        "accent": "#E6FFF2",
        "background": "#FCFFFC",
        "text": "#1A1A1A",
        "highlight": "#16A34A",
    },
    "purple": {
        "primary": "#8033CC",
        "secondary": "#B366E6",
        "accent": "#F2E6FF",
        "background": "#FFFCFF",
        "text": "#1A1A1A",
        "highlight": "#7C3AED",
    },
    "orange": {
        "primary": "#CC661A",
        "secondary": "#E6994D",
        "accent": "#FFF2E6",
        "background": "#FFFCFA",
        "text": "#1A1A1A",
        "highlight": "#EA580C",
    },
}


def _check_font(name: str) -> None:
    try:
        pdfmetrics.getFont(name)
    except KeyError:
        raise ValueError(f"Unknown font: {name}") from None


class ThemeRegistry:
    """Read-only tables of design styles and colour schemes.

    Fonts and colours are validated once here so that text measurement never
    has to handle a missing metric later on.
    """

    def __init__(
        self,
        design_styles: Mapping[str, dict] = DESIGN_STYLES,
        color_schemes: Mapping[str, Mapping[str, str]] = COLOR_SCHEMES,
        default_style: str = config.DEFAULT_THEME,
        default_scheme: str = config.DEFAULT_COLOR_SCHEME,
    ) -> None:
        if default_style not in design_styles:
            raise ValueError(f"Default design style missing: {default_style}")
        if default_scheme not in color_schemes:
            raise ValueError(f"Default colour scheme missing: {default_scheme}")
        for style in design_styles.values():
            for font in style["fonts"]:
                _check_font(font)
        self._styles = MappingProxyType({k: dict(v) for k, v in design_styles.items()})
        self._palettes = MappingProxyType(
            {k: Palette(**{field: _rgb(v) for field, v in scheme.items()}) for k, scheme in color_schemes.items()}
        )
        self.default_style = default_style
        self.default_scheme = default_scheme

    @property
    def design_styles(self) -> Mapping[str, dict]:
        return self._styles

    @property
    def palettes(self) -> Mapping[str, Palette]:
        return self._palettes


def _key(value: Optional[str]) -> str:
    return str(value or "").strip().lower()


class ThemeResolver:
    def __init__(self, registry: Optional[ThemeRegistry] = None) -> None:
        self.registry = registry or ThemeRegistry()

    def resolve(self, theme_id: Optional[str], color_scheme_id: Optional[str]) -> StyleTheme:
        """Map identifiers to a theme; unknown identifiers use the defaults."""
        styles = self.registry.design_styles
        palettes = self.registry.palettes

        name = _key(theme_id)
        if name not in styles:
            logger.debug("Unknown theme %r, using %s", theme_id, self.registry.default_style)
            name = self.registry.default_style
        scheme = _key(color_scheme_id)
        if scheme not in palettes:
            logger.debug("Unknown colour scheme %r, using %s", color_scheme_id, self.registry.default_scheme)
            scheme = self.registry.default_scheme

        style = styles[name]
        title_font, heading_font, body_font = style["fonts"]
        title_size, heading_size, body_size = style["sizes"]
        top, right, bottom, left = style["margins"]
        line, paragraph, section = style["spacing"]
        return StyleTheme(
            name=name,
            color_scheme=scheme,
            palette=palettes[scheme],
            typography=Typography(
                title_font=title_font,
                heading_font=heading_font,
                body_font=body_font,
                title_size=float(title_size),
                heading_size=float(heading_size),
                body_size=float(body_size),
            ),
            margins=Margins(top=float(top), right=float(right), bottom=float(bottom), left=float(left)),
            spacing=Spacing(line=float(line), paragraph=float(paragraph), section=float(section)),
            columns=int(style.get("columns", 1)),
            decorations=Decorations(**style.get("decorations", {})),
        )


def apply_options(theme: StyleTheme, options: RenderOptions) -> StyleTheme:
    """Return a copy of ``theme`` with the user's numeric and font overrides."""
    typography = theme.typography
    if options.font_family and _key(options.font_family) in FONT_FAMILIES:
        regular, bold = FONT_FAMILIES[_key(options.font_family)]
        typography = replace(typography, title_font=bold, heading_font=bold, body_font=regular)
    # non-positive overrides are ignored, the rest clamped like the margin
    if options.font_size is not None and options.font_size > 0:
        size = min(MAX_FONT_SIZE, max(MIN_FONT_SIZE, float(options.font_size)))
        typography = replace(typography, body_size=size)

    spacing = theme.spacing
    if options.line_spacing is not None and options.line_spacing > 0:
        line = min(MAX_LINE_SPACING, max(MIN_LINE_SPACING, float(options.line_spacing)))
        spacing = replace(spacing, line=line)

    margins = theme.margins
    if options.margin is not None:
        side = min(MAX_MARGIN, max(MIN_MARGIN, float(options.margin)))
        margins = replace(margins, left=side, right=side)

    return replace(theme, typography=typography, spacing=spacing, margins=margins)


def resolve(theme_id: Optional[str], color_scheme_id: Optional[str]) -> StyleTheme:
    return ThemeResolver().resolve(theme_id, color_scheme_id)
