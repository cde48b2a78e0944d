"""OpenAI text-to-speech client."""

from __future__ import annotations

import logging
from typing import Any

import openai

from .errors import SynthesisFailed

logger = logging.getLogger(__name__)


class OpenAITtsService:
    """Synthesise narration clips with the OpenAI speech endpoint."""

    def __init__(
        self,
        *,
        api_key: str = "",
        client: Any | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = openai.AsyncOpenAI(api_key=self._api_key or None)
        return self._client

    async def synthesize(
        self,
        text: str,
        *,
        model: str,
        voice: str,
        instructions: str,
        response_format: str = "mp3",
    ) -> bytes:
        """Return encoded audio bytes for ``text``."""

        try:
            response = await self._get_client().audio.speech.create(
                model=model,
                voice=voice,
                instructions=instructions,
                input=text,
                response_format=response_format,
            )
        except openai.OpenAIError as exc:
            logger.exception("OpenAI TTS failed for voice '%s'", voice)
            raise SynthesisFailed(f"Failed to synthesize speech: {exc}") from exc

        audio_bytes = response.content
        if not audio_bytes:
            raise SynthesisFailed("OpenAI returned an empty audio payload.")
        return audio_bytes


__all__ = ["OpenAITtsService"]
