from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path

from slugify import slugify

from ..models import NoteModel, note_from_dict


def load_payload(json_path: Path) -> dict:
    if not json_path.exists():
        raise FileNotFoundError(f"Note JSON not found: {json_path}")
    with json_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError("Note JSON must be an object")
    return payload


def load_note(json_path: Path, original_text: Path | None = None) -> NoteModel:
    payload = load_payload(json_path)
    original = ""
    if original_text is not None:
        original = original_text.read_text(encoding="utf-8")
    return note_from_dict(payload, original_content=original)


def slug_from_title(title: str) -> str:
    slug = slugify(title)
    slug = re.sub(r"[^a-z0-9-]+", "-", slug.lower()).strip("-")
    if not slug:
        slug = hashlib.md5(title.encode("utf-8")).hexdigest()[:12]
    if ".." in slug or "/" in slug or "\\" in slug:
        raise ValueError("Invalid slug generated from title")
    return slug
