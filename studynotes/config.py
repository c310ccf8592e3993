from __future__ import annotations

from pathlib import Path
import json


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"
SAMPLES_DIR = BASE_DIR / "assets" / "samples"

DEFAULT_THEME = "modern"
DEFAULT_COLOR_SCHEME = "blue"
DEFAULT_NOTE_TITLE = "Generated Notes"
DEFAULT_PAGE_SIZE = "letter"

FOOTER_TEXT = "Generated with NoteGPT - Multi-Model AI Processing"
HEADER_BADGE_TEXT = "Multi-Model AI"
BANNER_HEADLINE = "Enhanced with Visual AI Processing"
BANNER_CAPTION = "Charts, diagrams, and visual elements optimized for learning"
RAW_TEXT_PLACEHOLDER = "No content available"

SECTION_TITLES = {
    "key_concepts": "Key Concepts",
    "summary_points": "Summary Points",
    "process_flow": "Process Flow",
    "raw_text": "Content",
}


def load_sample_note(name: str = "photosynthesis") -> dict:
    path = SAMPLES_DIR / f"{name}.json"
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def set_out_dir(path: Path) -> None:
    global OUT_DIR
    OUT_DIR = path
