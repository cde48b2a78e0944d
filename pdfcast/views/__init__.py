"""Pydantic schemas used as views in the MVC architecture."""

from .common import ErrorResponse
from .podcasts import (
    PodcastListResponse,
    PodcastResponse,
    SectionResponse,
    UploadResponse,
)

__all__ = [
    "ErrorResponse",
    "PodcastListResponse",
    "PodcastResponse",
    "SectionResponse",
    "UploadResponse",
]
