"""Metadata extraction: post page HTML and feed-API JSON to media URLs.

Post pages embed their state as JSON inside::

    <script id="__UNIVERSAL_DATA_FOR_REHYDRATION__" type="application/json">

The video detail lives under
``__DEFAULT_SCOPE__ → webapp.video-detail → itemInfo → itemStruct``.
The feed API answers with ``{"aweme_list": [ {...} ]}`` where the first entry
is the requested post.
"""

from __future__ import annotations

import json
import time
from typing import Any

from bs4 import BeautifulSoup

from tiksaver.config import settings
from tiksaver.logging_config import setup_logging
from tiksaver.scraper.errors import ExtractionError
from tiksaver.scraper.models import PostInfo, ResolvedVideo

logger = setup_logging(__name__)

REHYDRATION_SCRIPT_ID = "__UNIVERSAL_DATA_FOR_REHYDRATION__"
VIDEO_DETAIL_SCOPE = "webapp.video-detail"


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

def load_document(
    html: str,
    retries: int | None = None,
    delay: float | None = None,
) -> BeautifulSoup:
    """Parse *html*, retrying a fixed number of times on parser failure.

    Args:
        html: Page markup.
        retries: Number of attempts (default ``settings.parse_retries``).
        delay: Seconds to wait between attempts (default
            ``settings.parse_retry_delay``).

    Raises:
        ExtractionError: If every attempt fails.
    """
    attempts = settings.parse_retries if retries is None else retries
    wait = settings.parse_retry_delay if delay is None else delay

    for attempt in range(1, attempts + 1):
        try:
            return BeautifulSoup(html, "html.parser")
        except Exception as exc:
            logger.error("Error while parsing HTML (attempt %d/%d): %s", attempt, attempts, exc)
        if attempt < attempts:
            time.sleep(wait)

    raise ExtractionError("Failed to parse HTML content")


def find_rehydration_json(soup: BeautifulSoup) -> str:
    """Return the raw JSON text embedded in the rehydration ``<script>``."""
    element = soup.find("script", id=REHYDRATION_SCRIPT_ID)
    if element is None:
        raise ExtractionError("Unable to find JSON data in HTML document")
    raw = element.string
    if not raw or not raw.strip():
        raise ExtractionError("Failed to extract JSON data from HTML")
    return raw


def parse_rehydration(raw: str) -> dict[str, Any]:
    if not raw:
        raise ExtractionError("No raw JSON data provided")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ExtractionError(f"Failed to parse JSON data: {exc}") from exc
    if not isinstance(data, dict):
        raise ExtractionError("Rehydration data is not a JSON object")
    return data


def _mapping(value: Any) -> dict[str, Any]:
    """Return *value* if it is a JSON object, an empty dict otherwise."""
    return value if isinstance(value, dict) else {}


def _timestamp(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def get_item_struct(data: dict[str, Any]) -> dict[str, Any]:
    """Walk the rehydration blob down to the video ``itemStruct``."""
    scope = _mapping(_mapping(data).get("__DEFAULT_SCOPE__"))
    video_detail = _mapping(scope.get(VIDEO_DETAIL_SCOPE))
    if not video_detail:
        raise ExtractionError("'videoDetail' is missing from the page data")
    item_struct = _mapping(_mapping(video_detail.get("itemInfo")).get("itemStruct"))
    if not item_struct:
        raise ExtractionError("'itemStruct' is missing from the page data")
    return item_struct


def extract_play_url(data: dict[str, Any]) -> str:
    """Return the direct play URL from a parsed rehydration blob.

    The page lists several CDN mirrors under
    ``video.bitrateInfo[0].PlayAddr.UrlList``.  The second mirror is the one
    returned, so the list must hold at least two entries.
    """
    try:
        url_list = get_item_struct(data)["video"]["bitrateInfo"][0]["PlayAddr"]["UrlList"]
    except (ExtractionError, KeyError, IndexError, TypeError):
        url_list = None

    if not isinstance(url_list, list) or len(url_list) < 2 or not isinstance(url_list[1], str):
        raise ExtractionError(
            "Invalid JSON structure. PlayAddr.UrlList not found or insufficient data."
        )
    return url_list[1]


def extract_post_info(item_struct: dict[str, Any]) -> PostInfo:
    author = _mapping(item_struct.get("author")).get("uniqueId") or "UnknownAuthor"
    return PostInfo(
        post_id=str(item_struct.get("id", "")),
        author=str(author),
        create_time=_timestamp(item_struct.get("createTime")),
        kind="video",
    )


# ---------------------------------------------------------------------------
# Feed API
# ---------------------------------------------------------------------------

def _first_aweme(feed: dict[str, Any]) -> dict[str, Any]:
    aweme_list = _mapping(feed).get("aweme_list")
    if not isinstance(aweme_list, list) or not aweme_list:
        raise ExtractionError("Feed response contains no posts")
    aweme = aweme_list[0]
    if not isinstance(aweme, dict):
        raise ExtractionError("Feed response post is not a JSON object")
    return aweme


def _feed_post_info(aweme: dict[str, Any], kind: str) -> PostInfo:
    author = _mapping(aweme.get("author")).get("unique_id") or "UnknownAuthor"
    return PostInfo(
        post_id=str(aweme.get("aweme_id", "")),
        author=str(author),
        create_time=_timestamp(aweme.get("create_time")),
        kind=kind,  # type: ignore[arg-type]
    )


def extract_feed_video(feed: dict[str, Any]) -> ResolvedVideo:
    """Return the first play URL of the first post in a feed response."""
    try:
        aweme = _first_aweme(feed)
        media_url = aweme["video"]["play_addr"]["url_list"][0]
    except (ExtractionError, KeyError, IndexError, TypeError):
        media_url = None

    if not media_url or not isinstance(media_url, str):
        raise ExtractionError("Couldn't resolve stream. No video URL found.")
    return ResolvedVideo(media_url=media_url, info=_feed_post_info(aweme, "video"))


def extract_feed_images(feed: dict[str, Any]) -> tuple[PostInfo, list[str]]:
    """Return the post identity and the display URL of every image.

    The list is empty for posts without ``image_post_info``.
    """
    aweme = _first_aweme(feed)
    info = _feed_post_info(aweme, "photo")

    images = _mapping(aweme.get("image_post_info")).get("images")
    if not isinstance(images, list):
        images = []
    urls: list[str] = []
    for image in images:
        url_list = _mapping(_mapping(image).get("display_image")).get("url_list")
        if isinstance(url_list, list) and url_list and isinstance(url_list[0], str):
            urls.append(url_list[0])
    return info, urls
