"""Controllers (FastAPI routers) for the MVC layout."""

from . import podcasts, upload

__all__ = ["podcasts", "upload"]
