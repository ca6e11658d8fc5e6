"""Post URL helpers: validation, id extraction and query decoration."""

from __future__ import annotations

import re

from tiksaver.config import settings

_POST_URL = re.compile(r"^https?://(www\.|vm\.|vt\.|m\.)?tiktok\.com(?:/(.*))?$")
_SHORT_URL = re.compile(r"^https?://(vm|vt)\.tiktok\.com/", re.IGNORECASE)
_VIDEO_ID = re.compile(r"/video/(\d+)")
_PHOTO_ID = re.compile(r"/photo/(\d+)")


def validate_url(url: object) -> bool:
    """Return ``True`` if *url* is a non-empty string pointing at tiktok.com."""
    if not url or not isinstance(url, str):
        return False
    return _POST_URL.match(url) is not None


def get_video_id(url: str) -> str | None:
    match = _VIDEO_ID.search(url)
    return match.group(1) if match else None


def get_photo_id(url: str) -> str | None:
    match = _PHOTO_ID.search(url)
    return match.group(1) if match else None


def is_photo_url(url: str) -> bool:
    return "/photo/" in url


def is_short_url(url: str) -> bool:
    """Return ``True`` for ``vm.``/``vt.`` share links that redirect to a post."""
    return _SHORT_URL.match(url) is not None


def with_web_params(url: str, query: str | None = None) -> str:
    """Append the web-app query string to *url*.

    Uses ``&`` when *url* already carries a query string, ``?`` otherwise.
    An empty query leaves *url* untouched.
    """
    query = (settings.web_query_params if query is None else query).lstrip("?&")
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
