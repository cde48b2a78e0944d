import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

SectionAudioMap = dict[str, str]
"""Section identifier -> audio file location."""


class TalkingPoint(BaseModel):
    """One titled segment of the episode body."""

    title: str
    content: str

    model_config = ConfigDict(extra="forbid")


class PodcastScript(BaseModel):
    """Structured podcast script produced by the language model."""

    introduction: str
    main_talking_points: list[TalkingPoint]
    conclusion: str
    call_to_action: str

    model_config = ConfigDict(extra="forbid")


@dataclass(frozen=True)
class UploadedDocument:
    """Validated upload, staged on local scratch storage."""

    file_name: str
    content_type: str
    size: int
    path: Optional[Path] = None


@dataclass(frozen=True)
class OcrResult:
    """Extracted document text plus the provider response it came from."""

    text: str
    response: dict[str, Any]


class ArtifactRecord(BaseModel):
    """Row persisted for every completed pipeline run."""

    id: int
    ocr_response: dict[str, Any] = Field(alias="ocrResponse")
    audio_script: PodcastScript = Field(alias="audioScript")
    audio_files: SectionAudioMap = Field(alias="audioFiles")

    model_config = ConfigDict(populate_by_name=True)

    def to_row(self) -> list[Any]:
        """Serialise into the four-column GridDB row layout."""

        return [
            int(self.id),
            json.dumps(self.ocr_response, ensure_ascii=False),
            self.audio_script.model_dump_json(),
            json.dumps(self.audio_files, ensure_ascii=False),
        ]

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "ArtifactRecord":
        """Inverse of :meth:`to_row`."""

        if len(row) != 4:
            raise ValueError(f"Expected 4 columns, got {len(row)}")
        record_id, ocr_response, audio_script, audio_files = row
        return cls(
            id=int(record_id),
            ocr_response=json.loads(ocr_response),
            audio_script=PodcastScript.model_validate_json(audio_script),
            audio_files=json.loads(audio_files),
        )


__all__ = [
    "ArtifactRecord",
    "OcrResult",
    "PodcastScript",
    "SectionAudioMap",
    "TalkingPoint",
    "UploadedDocument",
]
