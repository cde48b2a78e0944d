"""Read access to stored podcasts and their playback sections."""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from pdfcast.controllers.dependencies import ArtifactStoreDep
from pdfcast.domain.models import ArtifactRecord
from pdfcast.domain.sections import SectionIndexError, last_index, resolve_section
from pdfcast.services import ArtifactStore, StorageError
from pdfcast.views import (
    ErrorResponse,
    PodcastListResponse,
    PodcastResponse,
    SectionResponse,
)

router = APIRouter(prefix="/api/podcasts", tags=["podcasts"])

logger = logging.getLogger(__name__)

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


async def _load_record(store: ArtifactStore, podcast_id: int) -> ArtifactRecord:
    try:
        record = await store.fetch(podcast_id)
    except StorageError as exc:
        logger.error(
            "GridDB lookup failed for podcast %s (status=%s)",
            podcast_id,
            exc.status_code,
            exc_info=exc,
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Podcast storage is unavailable",
        ) from exc

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Podcast {podcast_id} not found",
        )
    return record


@router.get("", response_model=PodcastListResponse)
async def list_podcasts(
    store: ArtifactStoreDep,
    limit: int = Query(50, ge=1, le=500),
) -> PodcastListResponse:
    """Stored podcast ids, highest first."""

    try:
        ids = await store.list_ids(limit)
    except StorageError as exc:
        logger.error("GridDB listing failed (status=%s)", exc.status_code, exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Podcast storage is unavailable",
        ) from exc
    return PodcastListResponse(ids=ids)


@router.get("/{podcast_id}", response_model=PodcastResponse, responses=_NOT_FOUND)
async def get_podcast(podcast_id: int, store: ArtifactStoreDep) -> PodcastResponse:
    record = await _load_record(store, podcast_id)
    return PodcastResponse(
        id=record.id,
        ocrResponse=record.ocr_response,
        audioScript=record.audio_script,
        audioFiles=record.audio_files,
    )


@router.get(
    "/{podcast_id}/sections/{index}",
    response_model=SectionResponse,
    responses=_NOT_FOUND,
)
async def get_section(podcast_id: int, index: int, store: ArtifactStoreDep) -> SectionResponse:
    """Resolve one playback index into its title, narration text and clip URL."""

    record = await _load_record(store, podcast_id)
    try:
        section = resolve_section(index, record.audio_script, record.audio_files)
    except SectionIndexError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return SectionResponse(
        index=section.index,
        sectionId=section.section_id,
        title=section.title,
        text=section.text,
        audioUrl=section.audio_url,
        lastIndex=last_index(record.audio_script),
    )
