"""Centralised settings for tiksaver.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_BATCH = (
    "https://www.tiktok.com/@user1/video/1234567890123456789,"
    "https://www.tiktok.com/@user2/video/2345678901234567890,"
    "https://www.tiktok.com/@user3/photo/3456789012345678901,"
    "https://www.tiktok.com/@user4/photo/4567890123456789012"
)


def _split_urls(value: str) -> list[str]:
    return [u.strip() for u in value.split(",") if u.strip()]


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Output directories
    # ------------------------------------------------------------------
    video_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("TIKSAVER_VIDEO_DIR", "./tiktok-videos"))
    )
    image_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("TIKSAVER_IMAGE_DIR", "./tiktok-images"))
    )

    # ------------------------------------------------------------------
    # Outbound HTTP
    # ------------------------------------------------------------------
    browser_user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "TIKSAVER_BROWSER_UA",
            "Mozilla/5.0 (Windows NT 10.0; WOW64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        )
    )
    app_user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "TIKSAVER_APP_UA",
            "TikTok 26.2.0 rv:262018 (iPhone; iOS 14.4.2; en_US) Cronet",
        )
    )
    feed_api_url: str = field(
        default_factory=lambda: os.environ.get(
            "TIKSAVER_FEED_API_URL",
            "https://api16-normal-c-useast1a.tiktokv.com/aweme/v1/feed/",
        )
    )
    web_query_params: str = field(
        default_factory=lambda: os.environ.get(
            "TIKSAVER_WEB_QUERY",
            "is_from_webapp=1&sender_device=pc&web_id=7221493350775866882",
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Pipeline pacing
    # ------------------------------------------------------------------
    parse_retries: int = field(
        default_factory=lambda: int(os.environ.get("PARSE_RETRIES", "5"))
    )
    parse_retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("PARSE_RETRY_DELAY", "3.0"))
    )
    settle_delay: float = field(
        default_factory=lambda: float(os.environ.get("SETTLE_DELAY", "2.0"))
    )

    # ------------------------------------------------------------------
    # HTTP endpoint
    # ------------------------------------------------------------------
    batch_urls: list[str] = field(
        default_factory=lambda: _split_urls(os.environ.get("TIKSAVER_URLS", _DEFAULT_BATCH))
    )
    host: str = field(default_factory=lambda: os.environ.get("TIKSAVER_HOST", "localhost"))
    port: int = field(
        default_factory=lambda: int(os.environ.get("TIKSAVER_PORT", "8080"))
    )

    log_level: str = field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"))

    def ensure_media_dirs(self) -> None:
        """Create the video and image directories if they do not exist."""
        self.video_dir.mkdir(parents=True, exist_ok=True)
        self.image_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton — import this everywhere:
#   from tiksaver.config import settings
settings = Settings()
