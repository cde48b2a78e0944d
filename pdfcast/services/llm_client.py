"""Thin OpenAI Responses API wrapper for schema-constrained generations."""

from __future__ import annotations

import logging
from typing import Any

import openai

from .errors import ScriptGenerationFailed

logger = logging.getLogger(__name__)


def _first_output_text(response: Any) -> str | None:
    """Return the text of the first content item of the first output message."""

    output = getattr(response, "output", None) or []
    if not output:
        return None
    content = getattr(output[0], "content", None) or []
    if not content:
        return None
    return getattr(content[0], "text", None)


class OpenAIScriptClient:
    """Invoke an OpenAI model with a strict JSON schema output format."""

    def __init__(
        self,
        *,
        api_key: str = "",
        model: str = "gpt-4o-2024-08-06",
        temperature: float = 1.0,
        top_p: float = 1.0,
        max_output_tokens: int = 2048,
        client: Any | None = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._top_p = top_p
        self._max_output_tokens = max_output_tokens
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> Any:
        """Create the OpenAI client on first use; a missing key surfaces per request."""

        if self._client is None:
            self._client = openai.AsyncOpenAI(api_key=self._api_key or None)
        return self._client

    async def invoke(
        self,
        *,
        system_prompt: str,
        user_text: str,
        schema_name: str,
        json_schema: dict[str, Any],
    ) -> str:
        """Run a ``responses.create`` call and return the raw text payload."""

        try:
            response = await self._get_client().responses.create(
                model=self._model,
                input=[
                    {
                        "role": "system",
                        "content": [{"type": "input_text", "text": system_prompt}],
                    },
                    {
                        "role": "user",
                        "content": [{"type": "input_text", "text": user_text}],
                    },
                ],
                text={
                    "format": {
                        "type": "json_schema",
                        "name": schema_name,
                        "strict": True,
                        "schema": json_schema,
                    }
                },
                temperature=self._temperature,
                top_p=self._top_p,
                max_output_tokens=self._max_output_tokens,
                store=True,
            )
        except openai.OpenAIError as exc:
            raise ScriptGenerationFailed(f"OpenAI request failed: {exc}") from exc

        text = _first_output_text(response)
        if not text:
            raise ScriptGenerationFailed("OpenAI returned an empty response")
        return text


__all__ = ["OpenAIScriptClient"]
