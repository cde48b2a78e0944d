"""Exception hierarchy for calls to external providers."""

from __future__ import annotations

from typing import Any


class UpstreamServiceError(RuntimeError):
    """Base class for failures reported by an external provider."""


class ExtractionFailed(UpstreamServiceError):
    """Raised when OCR upload, signing or processing fails."""


class ScriptGenerationFailed(UpstreamServiceError):
    """Raised when the language model call fails or returns an unusable script."""


class SynthesisFailed(UpstreamServiceError):
    """Raised when narration for any section cannot be produced."""


class StorageError(UpstreamServiceError):
    """Raised when a GridDB Web API call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


__all__ = [
    "ExtractionFailed",
    "ScriptGenerationFailed",
    "StorageError",
    "SynthesisFailed",
    "UpstreamServiceError",
]
