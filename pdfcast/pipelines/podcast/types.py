"""Typed containers shared across the podcast pipeline stages.

Kept in their own module so ``ingestion``, ``flow`` and the controllers can
import them without circular dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pdfcast.domain.models import (
    OcrResult,
    PodcastScript,
    SectionAudioMap,
    UploadedDocument,
)


class PipelineState(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    STAGED = "staged"
    EXTRACTED = "extracted"
    SCRIPTED = "scripted"
    SYNTHESIZED = "synthesized"
    PERSISTED = "persisted"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineState.COMPLETED, PipelineState.FAILED)


@dataclass(frozen=True)
class IncomingUpload:
    """Raw multipart view of the request; ``data`` is None when no file part was sent."""

    file_name: Optional[str]
    content_type: Optional[str]
    data: Optional[bytes]
    voice: Optional[str] = None


@dataclass(slots=True)
class PipelineRun:
    """Mutable context carried through the stages of one upload."""

    run_id: str
    upload: IncomingUpload
    state: PipelineState = PipelineState.RECEIVED
    document: UploadedDocument | None = None
    staged_path: Path | None = None
    ocr: OcrResult | None = None
    script: PodcastScript | None = None
    audio_files: SectionAudioMap = field(default_factory=dict)
    public_audio_files: SectionAudioMap = field(default_factory=dict)
    record_id: int | None = None
    result: dict[str, Any] | None = None
    failed_stage: PipelineState | None = None
    error: BaseException | None = None
    history: list[PipelineState] = field(default_factory=list)


class PipelineFailure(RuntimeError):
    """A non-validation failure at any stage; the cause is chained."""

    def __init__(self, stage: PipelineState, message: str) -> None:
        super().__init__(message)
        self.stage = stage


__all__ = ["IncomingUpload", "PipelineFailure", "PipelineRun", "PipelineState"]
