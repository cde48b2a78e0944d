"""Mistral OCR integration used to pull text out of uploaded PDFs."""

from __future__ import annotations

import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool
from mistralai import Mistral

from pdfcast.domain.models import OcrResult

from .errors import ExtractionFailed

logger = logging.getLogger(__name__)


def _page_markdown(page: Any) -> str:
    if isinstance(page, dict):
        return page.get("markdown") or ""
    return getattr(page, "markdown", None) or ""


def _response_payload(response: Any) -> dict[str, Any]:
    """Return a JSON-compatible view of the OCR response."""

    if isinstance(response, dict):
        return response
    if hasattr(response, "model_dump"):
        return response.model_dump(mode="json")
    return {"pages": [{"markdown": _page_markdown(p)} for p in getattr(response, "pages", [])]}


def join_pages(pages: list[Any]) -> str:
    """Concatenate page markdown in page order, one newline after each page."""

    return "".join(_page_markdown(page) + "\n" for page in pages)


class MistralOcrService:
    """Upload a document to Mistral, sign it, and run OCR against the signed URL."""

    def __init__(
        self,
        *,
        api_key: str = "",
        model: str = "mistral-ocr-latest",
        client: Any | None = None,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = Mistral(api_key=self._api_key or None)
        return self._client

    async def extract(self, file_bytes: bytes, file_name: str) -> OcrResult:
        """Return the document text and raw OCR response for ``file_bytes``."""

        try:
            client = self._get_client()
            uploaded = await run_in_threadpool(
                client.files.upload,
                file={"file_name": file_name, "content": file_bytes},
                purpose="ocr",
            )
            signed = await run_in_threadpool(
                client.files.get_signed_url,
                file_id=uploaded.id,
            )
            response = await run_in_threadpool(
                client.ocr.process,
                model=self._model,
                document={"type": "document_url", "document_url": signed.url},
            )
        except Exception as exc:
            logger.exception("Mistral OCR failed for '%s'", file_name)
            raise ExtractionFailed(f"OCR failed for {file_name}: {exc}") from exc

        if isinstance(response, dict):
            pages = list(response.get("pages") or [])
        else:
            pages = list(getattr(response, "pages", None) or [])

        text = join_pages(pages)
        logger.info("OCR extracted %d pages (%d chars) from '%s'", len(pages), len(text), file_name)
        return OcrResult(text=text, response=_response_payload(response))


__all__ = ["MistralOcrService", "join_pages"]
