"""Narration stage: one audio clip per script section."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Mapping, Protocol

from fastapi.concurrency import run_in_threadpool

from pdfcast.domain.models import PodcastScript, SectionAudioMap
from pdfcast.domain.sections import synthesis_order
from pdfcast.services.errors import SynthesisFailed

logger = logging.getLogger("pdfcast.pipeline")


class SpeechClient(Protocol):
    async def synthesize(
        self,
        text: str,
        *,
        model: str,
        voice: str,
        instructions: str,
        response_format: str = "mp3",
    ) -> bytes: ...


@dataclass(frozen=True)
class SynthesisOptions:
    """Voice, style directive, container format and destination for clips."""

    output_dir: Path
    voice: str = "fable"
    instructions: str = "excited and informable podcaster"
    output_format: str = "mp3"
    model: str = "gpt-4o-mini-tts"


def _write_clip(path: Path, audio_bytes: bytes) -> None:
    path.write_bytes(audio_bytes)


class AudioSynthesizer:
    """Generate section clips sequentially and map section ids to files."""

    def __init__(self, speech_client: SpeechClient) -> None:
        self._speech_client = speech_client

    async def synthesize(
        self,
        script: PodcastScript,
        options: SynthesisOptions,
    ) -> SectionAudioMap:
        """Return ``{section_id: file_path}`` for every section of ``script``.

        Sections are processed one at a time. The first failure aborts the
        whole call so callers never see a map with missing sections.
        """

        output_dir = Path(options.output_dir)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SynthesisFailed(f"Cannot create output directory {output_dir}: {exc}") from exc

        audio_files: SectionAudioMap = {}
        for section_id, text in synthesis_order(script):
            speech_file = output_dir / f"{section_id}.{options.output_format}"
            try:
                audio_bytes = await self._speech_client.synthesize(
                    text,
                    model=options.model,
                    voice=options.voice,
                    instructions=options.instructions,
                    response_format=options.output_format,
                )
                await run_in_threadpool(_write_clip, speech_file, audio_bytes)
            except SynthesisFailed:
                logger.error("Synthesis failed for section '%s'", section_id)
                raise
            except Exception as exc:
                logger.error("Synthesis failed for section '%s': %s", section_id, exc)
                raise SynthesisFailed(
                    f"Failed to synthesize section '{section_id}': {exc}"
                ) from exc

            audio_files[section_id] = str(speech_file)
            logger.info("Wrote %s (%d bytes)", speech_file, len(audio_bytes))

        return audio_files


def to_public_path(file_path: str | Path, public_root: str = "public") -> str:
    """Rewrite a filesystem path into a web path relative to ``public_root``.

    Everything up to and including the last ``public_root`` segment is
    dropped: ``/srv/app/public/audio/x.mp3`` -> ``/audio/x.mp3``.
    """

    parts = PurePosixPath(Path(file_path).as_posix()).parts
    root_name = PurePosixPath(public_root).name
    for position in range(len(parts) - 1, -1, -1):
        if parts[position] == root_name:
            remainder = parts[position + 1:]
            if not remainder:
                break
            return "/" + "/".join(remainder)
    raise ValueError(f"Path '{file_path}' is not under a '{root_name}' directory")


def to_public_map(audio_files: Mapping[str, str], public_root: str = "public") -> SectionAudioMap:
    return {
        section_id: to_public_path(path, public_root)
        for section_id, path in audio_files.items()
    }


__all__ = [
    "AudioSynthesizer",
    "SpeechClient",
    "SynthesisOptions",
    "to_public_map",
    "to_public_path",
]
