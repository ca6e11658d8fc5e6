"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from tiksaver.api import app

    uvicorn tiksaver.api:app
"""

from tiksaver.api.app import app

__all__ = ["app"]
