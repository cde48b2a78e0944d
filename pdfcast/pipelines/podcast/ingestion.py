"""Upload validation helpers (first stage of the podcast pipeline)."""

from __future__ import annotations

from typing import Final

from pdfcast.domain.models import UploadedDocument

from .types import IncomingUpload

PDF_CONTENT_TYPE: Final[str] = "application/pdf"
DEFAULT_MAX_BYTES: Final[int] = 10 * 1024 * 1024


class UploadValidationError(ValueError):
    """Raised for user-correctable problems with the uploaded file."""


class MissingFileError(UploadValidationError):
    def __init__(self) -> None:
        super().__init__("No file uploaded")


class InvalidFileTypeError(UploadValidationError):
    def __init__(self, content_type: str | None = None) -> None:
        super().__init__("Invalid file type. Please upload a PDF file")
        self.content_type = content_type


class FileTooLargeError(UploadValidationError):
    def __init__(self, size: int, max_bytes: int) -> None:
        limit_mb = max_bytes // (1024 * 1024)
        super().__init__(f"File size too large. Maximum size is {limit_mb}MB")
        self.size = size
        self.max_bytes = max_bytes


def resolve_content_type(declared: str | None) -> str | None:
    """Normalise the declared media type; parameters such as ``charset`` are dropped."""

    return (declared or "").split(";", 1)[0].strip().lower() or None


def validate_upload(
    upload: IncomingUpload,
    *,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> UploadedDocument:
    """Check presence, type and size; return the validated document."""

    if upload.data is None:
        raise MissingFileError()

    content_type = resolve_content_type(upload.content_type)
    if content_type != PDF_CONTENT_TYPE:
        raise InvalidFileTypeError(content_type)

    size = len(upload.data)
    if size > max_bytes:
        raise FileTooLargeError(size, max_bytes)

    return UploadedDocument(
        file_name=upload.file_name or "upload.pdf",
        content_type=content_type,
        size=size,
    )


__all__ = [
    "DEFAULT_MAX_BYTES",
    "FileTooLargeError",
    "InvalidFileTypeError",
    "MissingFileError",
    "PDF_CONTENT_TYPE",
    "UploadValidationError",
    "resolve_content_type",
    "validate_upload",
]
