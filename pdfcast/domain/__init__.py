"""Domain types for podcast scripts, audio maps and stored artifacts."""

from .models import (
    ArtifactRecord,
    OcrResult,
    PodcastScript,
    SectionAudioMap,
    TalkingPoint,
    UploadedDocument,
)
from .sections import (
    ResolvedSection,
    SectionIndexError,
    last_index,
    playback_order,
    resolve_section,
    section_ids,
    synthesis_order,
    talking_point_id,
)

__all__ = [
    "ArtifactRecord",
    "OcrResult",
    "PodcastScript",
    "ResolvedSection",
    "SectionAudioMap",
    "SectionIndexError",
    "TalkingPoint",
    "UploadedDocument",
    "last_index",
    "playback_order",
    "resolve_section",
    "section_ids",
    "synthesis_order",
    "talking_point_id",
]
