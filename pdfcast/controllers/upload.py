"""PDF upload endpoint.

``POST /api/upload`` runs :class:`pdfcast.pipelines.podcast.PodcastPipeline`:
validation, scratch staging, OCR, script generation, per-section narration
and GridDB persistence. Validation problems come back as 400 with a specific
message; every other failure is logged here and answered with a generic 500.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from pdfcast.controllers.dependencies import PipelineDep
from pdfcast.pipelines.podcast import (
    IncomingUpload,
    PipelineFailure,
    UploadValidationError,
)
from pdfcast.views import ErrorResponse, UploadResponse

router = APIRouter(prefix="/api", tags=["upload"])

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to process file"

_PDF_FILE_UPLOAD = File(None)
_VOICE_FORM = Form(None)


async def read_incoming_upload(
    file: Optional[UploadFile],
    voice: Optional[str],
) -> IncomingUpload:
    """Load the multipart file part into memory; an empty file picker counts as missing."""

    if file is None:
        return IncomingUpload(file_name=None, content_type=None, data=None, voice=voice)

    data = await file.read()
    await file.close()
    if not file.filename and not data:
        return IncomingUpload(file_name=None, content_type=None, data=None, voice=voice)

    return IncomingUpload(
        file_name=file.filename,
        content_type=file.content_type,
        data=data,
        voice=voice,
    )


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def upload_pdf(
    pipeline: PipelineDep,
    file: Optional[UploadFile] = _PDF_FILE_UPLOAD,
    voice: Optional[str] = _VOICE_FORM,
) -> dict[str, Any]:
    """Convert an uploaded PDF into a narrated, sectioned podcast."""

    upload = await read_incoming_upload(file, voice)
    try:
        pipeline_run = await pipeline.run(upload)
    except UploadValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except PipelineFailure as exc:
        logger.error(
            "Error uploading file '%s' (failed at %s)",
            upload.file_name,
            exc.stage.value,
            exc_info=exc.__cause__ or exc,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_FAILURE_MESSAGE,
        ) from exc

    logger.info(
        "Podcast ready file=%s podcast_id=%s sections=%d",
        upload.file_name,
        pipeline_run.record_id,
        len(pipeline_run.public_audio_files),
    )
    return pipeline_run.result or {}
