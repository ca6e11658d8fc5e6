"""HTTP fetches for post pages, the feed API and media files.

All requests share the process-wide client from
:mod:`tiksaver.scraper.session`, so cookies picked up from a post page are
sent along with the follow-up media request.
"""

from __future__ import annotations

from typing import Any

import httpx

from tiksaver.config import settings
from tiksaver.logging_config import setup_logging
from tiksaver.scraper.errors import ExtractionError
from tiksaver.scraper.models import RawPage
from tiksaver.scraper.session import get_client
from tiksaver.scraper.urls import is_short_url

logger = setup_logging(__name__)


def fetch_page(url: str) -> RawPage:
    """Fetch a post page with a desktop browser User-Agent.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        ExtractionError: If the response body is empty.
    """
    response = get_client().get(url, headers={"User-Agent": settings.browser_user_agent})
    response.raise_for_status()
    if not response.text:
        raise ExtractionError("Failed to retrieve HTML content from the provided URL")
    return RawPage(url=url, html=response.text, status_code=response.status_code)


def fetch_media(media_url: str, referer: str) -> bytes:
    """Download a media file; the CDN requires the post page as ``Referer``."""
    response = get_client().get(
        media_url,
        headers={
            "Referer": referer,
            "User-Agent": settings.browser_user_agent,
        },
    )
    response.raise_for_status()
    return response.content


def fetch_feed(post_id: str) -> dict[str, Any]:
    """Query the mobile feed API for a single post.

    Raises:
        httpx.HTTPStatusError: If the API returns a 4xx/5xx status code.
        ExtractionError: If the body is not a JSON object.
    """
    response = get_client().get(
        settings.feed_api_url,
        params={"aweme_id": post_id},
        headers={"User-Agent": settings.app_user_agent},
    )
    response.raise_for_status()
    try:
        data = response.json()
    except ValueError as exc:
        raise ExtractionError(f"Feed API returned a non-JSON body for {post_id}") from exc
    if not isinstance(data, dict):
        raise ExtractionError(f"Feed API returned an unexpected payload for {post_id}")
    return data


def resolve_short_url(url: str) -> str:
    """Follow the redirects of a ``vm.``/``vt.`` share link.

    Any other URL is returned unchanged.
    """
    if not is_short_url(url):
        return url
    response = get_client().get(url, headers={"User-Agent": settings.browser_user_agent})
    response.raise_for_status()
    resolved = str(response.url)
    logger.info("Resolved short link %s to %s", url, resolved)
    return resolved
