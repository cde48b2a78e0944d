"""Service layer helpers for external integrations."""

from .artifacts import PODCAST_COLUMNS, ArtifactStore, InsertResult
from .errors import (
    ExtractionFailed,
    ScriptGenerationFailed,
    StorageError,
    SynthesisFailed,
    UpstreamServiceError,
)
from .griddb import GridDBClient
from .llm_client import OpenAIScriptClient
from .ocr import MistralOcrService
from .tts import OpenAITtsService

__all__ = [
    "ArtifactStore",
    "InsertResult",
    "PODCAST_COLUMNS",
    "GridDBClient",
    "MistralOcrService",
    "OpenAIScriptClient",
    "OpenAITtsService",
    "UpstreamServiceError",
    "ExtractionFailed",
    "ScriptGenerationFailed",
    "SynthesisFailed",
    "StorageError",
]
