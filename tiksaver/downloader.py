"""Download pipeline — post URL to files on disk.

``download_urls`` drives the whole pipeline for a batch of post URLs:

    video:  fetch page → parse HTML → rehydration JSON → play URL
            (feed API fallback) → fetch bytes → write into ``video_dir``
    photo:  feed API → image URLs → fetch bytes → write into ``image_dir``

Every step runs sequentially on the shared HTTP client.
"""

from __future__ import annotations

import time
from typing import Any, Iterable

import httpx

from tiksaver.config import settings
from tiksaver.logging_config import setup_logging
from tiksaver.scraper.errors import ExtractionError
from tiksaver.scraper.extractor import (
    extract_feed_images,
    extract_feed_video,
    extract_play_url,
    extract_post_info,
    find_rehydration_json,
    get_item_struct,
    load_document,
    parse_rehydration,
)
from tiksaver.scraper.fetcher import fetch_feed, fetch_media, fetch_page, resolve_short_url
from tiksaver.scraper.models import DownloadResult, ResolvedVideo
from tiksaver.scraper.urls import (
    get_photo_id,
    get_video_id,
    is_photo_url,
    validate_url,
    with_web_params,
)
from tiksaver.storage import image_filename, save_media, video_filename

logger = setup_logging(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _require_valid(url: str) -> None:
    if not validate_url(url):
        raise ExtractionError("Invalid URL provided")


def _page_data(url: str) -> dict[str, Any]:
    """Fetch *url* and return its parsed rehydration blob."""
    raw = fetch_page(url)
    soup = load_document(raw.html)
    return parse_rehydration(find_rehydration_json(soup))


def _resolve_from_page(url: str) -> ResolvedVideo:
    data = _page_data(url)
    media_url = extract_play_url(data)
    info = extract_post_info(get_item_struct(data))
    return ResolvedVideo(media_url=media_url, info=info)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_info(url: str) -> str:
    """Return the direct play URL embedded in the page of a video post.

    Raises:
        ExtractionError: If *url* is not a post URL or the page data does not
            carry a usable play URL.
        httpx.HTTPStatusError: If the page request fails.
    """
    _require_valid(url)
    return extract_play_url(_page_data(url))


def resolve_video_url(url: str) -> ResolvedVideo:
    """Resolve a video post through the mobile feed API.

    Raises:
        ExtractionError: If *url* carries no video id or the feed response has
            no play address.
    """
    video_id = get_video_id(url)
    if not video_id:
        raise ExtractionError("Couldn't resolve stream. Video ID not found.")
    return extract_feed_video(fetch_feed(video_id))


def download_video(url: str) -> DownloadResult:
    """Download a single video post into ``settings.video_dir``.

    The page's embedded JSON is tried first; when it has no usable play URL
    (or the page request is refused) the feed API is used instead.

    Returns:
        The saved file, reported against the decorated page URL.
    """
    _require_valid(url)
    page_url = with_web_params(url)

    try:
        resolved = _resolve_from_page(page_url)
    except (ExtractionError, httpx.HTTPStatusError) as exc:
        logger.warning("Page extraction failed for %s (%s); trying feed API", url, exc)
        resolved = resolve_video_url(url)

    time.sleep(settings.settle_delay)

    data = fetch_media(resolved.media_url, referer=page_url)
    filename = video_filename(resolved.info)
    save_media(settings.video_dir, filename, data)
    logger.info("✅ Video downloaded for %s_%s", resolved.info.author, resolved.info.post_id)

    return DownloadResult(type="video", url=page_url, filename=filename)


def download_photo(url: str) -> list[DownloadResult]:
    """Download every image of a photo post into ``settings.image_dir``.

    An image that fails to download is logged and skipped; the others are
    still saved.
    """
    _require_valid(url)
    photo_id = get_photo_id(url)
    if not photo_id:
        raise ExtractionError("Couldn't resolve photo post. Photo ID not found.")

    info, image_urls = extract_feed_images(fetch_feed(photo_id))
    if not image_urls:
        logger.info("No images found for the provided photo URL: %s", url)
        return []

    results: list[DownloadResult] = []
    for index, image_url in enumerate(image_urls, start=1):
        filename = image_filename(info, index)
        try:
            data = fetch_media(image_url, referer=url)
            save_media(settings.image_dir, filename, data)
        except (httpx.HTTPError, OSError) as exc:
            logger.error("Error while downloading image %d of %s: %s", index, url, exc)
            continue
        logger.info("✅ Image %d downloaded for %s", index, info.author)
        results.append(DownloadResult(type="image", url=image_url, filename=filename))

    return results


def download_post(url: str) -> list[DownloadResult]:
    """Download a video or photo post, following short share links first."""
    _require_valid(url)
    url = resolve_short_url(url)
    if is_photo_url(url):
        return download_photo(url)
    return [download_video(url)]


def download_urls(urls: Iterable[str]) -> list[DownloadResult]:
    """Download each post in *urls* in order.

    A URL that fails is logged and skipped; the results of every other URL are
    still returned.
    """
    results: list[DownloadResult] = []
    for url in urls:
        try:
            results.extend(download_post(url))
        except Exception as exc:  # noqa: BLE001
            logger.error("Error while processing %s: %s", url, exc)
    return results
