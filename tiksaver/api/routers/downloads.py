"""Download endpoints.

Routes
------
GET  /            Download the configured batch     → download_urls
POST /downloads   Body: {"urls": ["https://..."]}   → download_urls
"""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter
from pydantic import BaseModel, Field

from tiksaver.config import settings
from tiksaver.downloader import download_urls

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class DownloadRequest(BaseModel):
    urls: list[str] = Field(..., min_length=1)


class DownloadResultOut(BaseModel):
    type: Literal["video", "image"]
    url: str
    filename: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/", response_model=list[DownloadResultOut])
def download_batch() -> list[dict[str, Any]]:
    """Download every post in ``settings.batch_urls``.

    Posts that fail are logged server-side and left out of the response.
    """
    return [r.to_dict() for r in download_urls(settings.batch_urls)]


@router.post("/downloads", response_model=list[DownloadResultOut])
def download_requested(body: DownloadRequest) -> list[dict[str, Any]]:
    """Download the posts listed in the request body."""
    return [r.to_dict() for r in download_urls(body.urls)]
