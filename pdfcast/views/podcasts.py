"""Schemas for upload results and stored podcasts."""

from typing import Any, Optional

from pydantic import BaseModel

from pdfcast.domain.models import PodcastScript


class UploadResponse(BaseModel):
    message: str
    fileName: str
    fileSize: int
    tempFilePath: str
    ocrResponse: dict[str, Any]
    audioFiles: dict[str, str]
    audioScript: PodcastScript
    podcastId: Optional[int] = None


class PodcastResponse(BaseModel):
    id: int
    ocrResponse: dict[str, Any]
    audioScript: PodcastScript
    audioFiles: dict[str, str]


class PodcastListResponse(BaseModel):
    ids: list[int]


class SectionResponse(BaseModel):
    index: int
    sectionId: str
    title: str
    text: str
    audioUrl: str
    lastIndex: int
