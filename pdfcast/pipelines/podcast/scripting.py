"""Script generation stage of the podcast pipeline."""

from __future__ import annotations

import logging
from typing import Protocol

from pydantic import ValidationError

from pdfcast.domain.models import PodcastScript
from pdfcast.services.errors import ScriptGenerationFailed

from .prompts import PODCAST_SCRIPT_SCHEMA, SCHEMA_NAME, SYSTEM_PROMPT

logger = logging.getLogger("pdfcast.pipeline")


class SchemaLlmClient(Protocol):
    async def invoke(
        self,
        *,
        system_prompt: str,
        user_text: str,
        schema_name: str,
        json_schema: dict,
    ) -> str: ...


def _truncate(value: str, max_length: int = 500) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


def parse_script(raw_response: str) -> PodcastScript:
    """Parse the model's JSON text into a :class:`PodcastScript`."""

    try:
        return PodcastScript.model_validate_json(raw_response)
    except ValidationError as exc:
        raise ScriptGenerationFailed(
            f"Model output does not match the podcast script schema: {exc}"
        ) from exc


class PodcastScriptGenerator:
    """Turn extracted document text into a structured podcast script."""

    def __init__(self, client: SchemaLlmClient) -> None:
        self._client = client

    async def generate(self, text: str) -> PodcastScript:
        raw_response = await self._client.invoke(
            system_prompt=SYSTEM_PROMPT,
            user_text=text,
            schema_name=SCHEMA_NAME,
            json_schema=PODCAST_SCRIPT_SCHEMA,
        )
        logger.info("Raw script response: %s", _truncate(raw_response))

        script = parse_script(raw_response)
        logger.info(
            "Generated script with %d talking points",
            len(script.main_talking_points),
        )
        return script


__all__ = ["PodcastScriptGenerator", "SchemaLlmClient", "parse_script"]
