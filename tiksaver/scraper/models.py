"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal


@dataclass
class RawPage:
    """The raw HTTP response for a single post page fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class PostInfo:
    """Identity of a post, enough to build its output filenames."""

    post_id: str
    author: str
    create_time: int
    kind: Literal["video", "photo"] = "video"


@dataclass
class ResolvedVideo:
    """A direct, downloadable media URL plus the post it belongs to."""

    media_url: str
    info: PostInfo


@dataclass
class DownloadResult:
    """One saved file, as reported by the batch endpoint."""

    type: Literal["video", "image"]
    url: str
    filename: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
