from __future__ import annotations

from pathlib import Path
from uuid import uuid4

from ..storage.json_db import JsonDb

UPLOADS_SUBDIR = "uploads"


def uploads_dir(db: JsonDb) -> Path:
    """Directory for uploaded files, next to the collection files."""
    p = db.resolve_data_directory() / UPLOADS_SUBDIR
    p.mkdir(parents=True, exist_ok=True)
    return p


def build_upload_name(original_name: str) -> str:
    ext = Path(str(original_name or "")).suffix.lower()
    return f"{uuid4().hex}{ext or '.bin'}"
