"""Output writing (JSON, CSV export)."""

from __future__ import annotations

import csv
import io
import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel

from bc_read.core.models import Video
from bc_read.utils.sanitize import clean_xss

EXPORT_COLUMNS = ("id", "name", "referenceId", "thumbnailURL")


def to_json(model: BaseModel, *, sanitize: bool = False) -> str:
    """Serialize an entity using the Media API's own field names."""
    data = model.model_dump(mode="json", by_alias=True)
    if sanitize:
        data = _sanitize(data)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def videos_to_csv(videos: Iterable[Video], *, sanitize: bool = False) -> str:
    """Render a library export: one row per video, ``EXPORT_COLUMNS`` header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for video in videos:
        row = [video.id, video.name, video.reference_id, video.thumbnail_url]
        writer.writerow(
            ["" if v is None else (clean_xss(str(v)) if sanitize else v) for v in row]
        )
    return buffer.getvalue()


def write_json(model: BaseModel, dest: Path, *, sanitize: bool = False) -> Path:
    """Write an entity as JSON. Returns the written file path."""
    _atomic_write_text(Path(dest), to_json(model, sanitize=sanitize))
    return Path(dest)


def write_videos_csv(videos: Iterable[Video], dest: Path, *, sanitize: bool = False) -> Path:
    """Write a CSV library export. Returns the written file path."""
    _atomic_write_text(Path(dest), videos_to_csv(videos, sanitize=sanitize))
    return Path(dest)


def _sanitize(value):
    if isinstance(value, str):
        return clean_xss(value)
    if isinstance(value, list):
        return [_sanitize(v) for v in value]
    if isinstance(value, dict):
        return {k: _sanitize(v) for k, v in value.items()}
    return value


def _atomic_write_text(dest: Path, content: str) -> None:
    """Write text atomically: write to temp file, then rename."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=dest.parent, suffix=".tmp", prefix=".bc_read_"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_path, dest)
    except BaseException:
        os.unlink(tmp_path)
        raise
