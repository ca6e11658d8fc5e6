"""Local media storage: filename conventions and file writes."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

from tiksaver.scraper.models import PostInfo

_UNSAFE_CHARS = re.compile(r"[^\w.-]", re.ASCII)


def safe_part(value: str, fallback: str = "unknown") -> str:
    """Reduce a filename component to ``[A-Za-z0-9_.-]`` with no leading dots."""
    cleaned = _UNSAFE_CHARS.sub("_", str(value)).lstrip(".")
    return cleaned or fallback


def format_upload_date(timestamp: int | float) -> str:
    """Render a Unix timestamp (seconds) as ``DDMMYYYY`` in UTC."""
    created = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return created.strftime("%d%m%Y")


def video_filename(info: PostInfo) -> str:
    """``<author>_video_<DDMMYYYY>_<post_id>.mp4``"""
    author = safe_part(info.author, "UnknownAuthor")
    post_id = safe_part(info.post_id)
    return f"{author}_video_{format_upload_date(info.create_time)}_{post_id}.mp4"


def image_filename(info: PostInfo, index: int) -> str:
    """``<author>_image_<DDMMYYYY>_<post_id>_<index>.jpg`` with a 1-based index."""
    author = safe_part(info.author, "UnknownAuthor")
    post_id = safe_part(info.post_id)
    date = format_upload_date(info.create_time)
    return f"{author}_image_{date}_{post_id}_{index}.jpg"


def save_media(directory: Path | str, filename: str, data: bytes) -> Path:
    """Write *data* to ``directory/filename``, creating *directory* if needed.

    Returns:
        The path of the written file.

    Raises:
        ValueError: If *filename* would resolve outside *directory*.
    """
    target_dir = Path(directory)
    path = target_dir / filename
    if path.resolve().parent != target_dir.resolve():
        raise ValueError(f"Refusing to write outside {target_dir}: {filename!r}")
    target_dir.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
