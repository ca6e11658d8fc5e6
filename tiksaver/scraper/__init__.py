"""Scraper package — post page fetch & metadata extraction."""

from tiksaver.scraper.errors import ExtractionError
from tiksaver.scraper.extractor import (
    extract_feed_images,
    extract_feed_video,
    extract_play_url,
    find_rehydration_json,
    load_document,
    parse_rehydration,
)
from tiksaver.scraper.fetcher import fetch_feed, fetch_media, fetch_page
from tiksaver.scraper.models import DownloadResult, PostInfo, RawPage, ResolvedVideo

__all__ = [
    "ExtractionError",
    "fetch_page",
    "fetch_media",
    "fetch_feed",
    "load_document",
    "find_rehydration_json",
    "parse_rehydration",
    "extract_play_url",
    "extract_feed_video",
    "extract_feed_images",
    "RawPage",
    "PostInfo",
    "ResolvedVideo",
    "DownloadResult",
]
