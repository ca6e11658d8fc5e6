"""Logging setup shared by the pipeline, the API and the CLI.

Library modules only fetch a named logger via :func:`setup_logging`.  The
root handler is installed by the entry points (``create_app`` and the CLI)
through :func:`configure_logging`, so importing the pipeline never touches a
host application's logging.
"""

from __future__ import annotations

import logging

from tiksaver.config import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(name: str) -> logging.Logger:
    """Return the logger called *name*."""
    return logging.getLogger(name)


def configure_logging(level: str | None = None) -> None:
    """Install the root handler at *level* (default ``settings.log_level``)."""
    logging.basicConfig(level=(level or settings.log_level).upper(), format=_FORMAT)
