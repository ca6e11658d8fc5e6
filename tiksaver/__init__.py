"""tiksaver — save public TikTok videos and photo posts to local storage."""

__version__ = "0.1.0"
