"""Process-wide HTTP client.

Every outbound request goes through one :class:`httpx.Client` so the cookies
set by the post pages are replayed on later feed-API and media requests.
"""

from __future__ import annotations

import httpx

from tiksaver.config import settings

_client: httpx.Client | None = None


def get_client() -> httpx.Client:
    """Return the shared client, creating it on first use."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.Client(
            timeout=settings.request_timeout,
            follow_redirects=True,
        )
    return _client


def close_client() -> None:
    """Close the shared client and drop its cookie jar."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
