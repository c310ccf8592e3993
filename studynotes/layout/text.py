from __future__ import annotations

from functools import lru_cache
from typing import List

from reportlab.pdfbase import pdfmetrics


@lru_cache(maxsize=4096)
def measure(text: str, font: str, size: float) -> float:
    """Rendered width of ``text`` in points, from reportlab's font metrics."""
    return pdfmetrics.stringWidth(text, font, size)


def wrap_text(text: str, max_width: float, font: str, size: float) -> List[str]:
    """
    Greedy word wrap.

    Words are never split: a word wider than ``max_width`` gets a line of its
    own and overflows.
    """
    lines: List[str] = []
    current = ""

    for word in (text or "").split():
        candidate = f"{current} {word}" if current else word
        if measure(candidate, font, size) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        current = word
        if measure(word, font, size) > max_width:
            lines.append(word)
            current = ""

    if current:
        lines.append(current)
    return lines


def fit_font_size(text: str, font: str, base_size: float, max_width: float, minimum: float = 7.0) -> float:
    """Shrink the size in half-point steps until ``text`` fits ``max_width``."""
    size = float(base_size)
    while size > minimum:
        if measure(text, font, size) <= max_width:
            return size
        size -= 0.5
    # never grow text that starts below the floor
    return min(float(base_size), minimum)
