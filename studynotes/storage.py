from __future__ import annotations

from pathlib import Path
from typing import Dict

from . import config


# Files written for one note under <out>/<slug>/
ARTIFACT_NAMES = {
    "pdf": "notes.pdf",
    "layout": "layout.json",
    "preview_1": "preview_1.png",
    "error": "error.log",
}


def note_dir(slug: str, base_dir: Path | None = None, include_slug: bool = True) -> Path:
    root = base_dir or config.OUT_DIR
    path = root / slug if include_slug else root
    path.mkdir(parents=True, exist_ok=True)
    return path


def artifact_path(
    slug: str,
    artifact_type: str,
    base_dir: Path | None = None,
    include_slug: bool = True,
) -> Path:
    if artifact_type not in ARTIFACT_NAMES:
        raise KeyError(f"Unknown artifact type: {artifact_type}")
    return note_dir(slug, base_dir=base_dir, include_slug=include_slug) / ARTIFACT_NAMES[artifact_type]


def write_text_artifact(slug: str, artifact_type: str, text: str, base_dir: Path | None = None) -> Path:
    path = artifact_path(slug, artifact_type, base_dir=base_dir)
    path.write_text(text, encoding="utf-8")
    return path


def existing_artifacts(slug: str, base_dir: Path | None = None) -> Dict[str, Path]:
    """Artifacts already on disk for ``slug``, keyed by artifact type."""
    root = (base_dir or config.OUT_DIR) / slug
    found: Dict[str, Path] = {}
    for artifact_type, filename in ARTIFACT_NAMES.items():
        path = root / filename
        if path.exists():
            found[artifact_type] = path
    return found
