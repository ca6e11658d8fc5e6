"""Exceptions raised by the scraper pipeline."""


class ExtractionError(ValueError):
    """A post page or feed response did not contain the expected media data."""
