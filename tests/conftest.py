"""Shared fixtures and in-memory stand-ins for the external providers."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from pdfcast.domain.models import ArtifactRecord, OcrResult, PodcastScript  # noqa: E402
from pdfcast.pipelines.podcast import (  # noqa: E402
    AudioSynthesizer,
    PipelineConfig,
    PodcastPipeline,
    SynthesisOptions,
)
from pdfcast.services.artifacts import InsertResult  # noqa: E402


def make_script(talking_points: int = 3) -> PodcastScript:
    return PodcastScript(
        introduction="Welcome to the show.",
        main_talking_points=[
            {"title": f"Point {i}", "content": f"Discussion of point {i}."}
            for i in range(talking_points)
        ],
        conclusion="That wraps it up.",
        call_to_action="Subscribe for more.",
    )


def audio_map_for(script: PodcastScript, prefix: str = "/audio/run") -> dict[str, str]:
    ids = ["introduction", "conclusion", "call_to_action"]
    ids.extend(f"talking_point_{i}" for i in range(len(script.main_talking_points)))
    return {section_id: f"{prefix}/{section_id}.mp3" for section_id in ids}


class FakeExtractor:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[bytes, str]] = []

    async def extract(self, file_bytes: bytes, file_name: str) -> OcrResult:
        self.calls.append((file_bytes, file_name))
        if self.error is not None:
            raise self.error
        return OcrResult(
            text="Page one\nPage two\n",
            response={"pages": [{"markdown": "Page one"}, {"markdown": "Page two"}]},
        )


class FakeScriptGenerator:
    def __init__(self, script: PodcastScript | None = None, error: Exception | None = None) -> None:
        self.script = script or make_script()
        self.error = error
        self.calls: list[str] = []

    async def generate(self, text: str) -> PodcastScript:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.script


class FakeSpeechClient:
    """Returns deterministic bytes per input and can fail on a chosen call."""

    def __init__(self, fail_on: int | None = None, error: Exception | None = None) -> None:
        self.fail_on = fail_on
        self.error = error or RuntimeError("tts unavailable")
        self.calls: list[dict] = []

    async def synthesize(self, text, *, model, voice, instructions, response_format="mp3"):
        self.calls.append(
            {
                "text": text,
                "model": model,
                "voice": voice,
                "instructions": instructions,
                "response_format": response_format,
            }
        )
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            raise self.error
        return f"audio:{text}".encode("utf-8")


class FakeArtifactStore:
    def __init__(self, record_id: int = 4242, error: Exception | None = None) -> None:
        self.record_id = record_id
        self.error = error
        self.records: dict[int, ArtifactRecord] = {}
        self.container_name = "podcasts"
        self.ensure_calls = 0

    async def new_record_id(self) -> int:
        return self.record_id

    async def ensure_container(self) -> bool:
        self.ensure_calls += 1
        return False

    async def insert(self, record: ArtifactRecord) -> InsertResult:
        if self.error is not None:
            raise self.error
        self.records[record.id] = record
        return InsertResult(record_id=record.id, response={"count": 1})

    async def fetch(self, record_id: int) -> ArtifactRecord | None:
        if self.error is not None:
            raise self.error
        return self.records.get(record_id)

    async def list_ids(self, limit: int = 50) -> list[int]:
        if self.error is not None:
            raise self.error
        return sorted(self.records, reverse=True)[:limit]


class FakeGridDB:
    def __init__(self) -> None:
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True


def build_pipeline(
    tmp_path: Path,
    *,
    extractor: FakeExtractor | None = None,
    script_generator: FakeScriptGenerator | None = None,
    speech_client: FakeSpeechClient | None = None,
    store: FakeArtifactStore | None = None,
    max_bytes: int = 10 * 1024 * 1024,
    audio_subdir: str = "audio",
) -> PodcastPipeline:
    audio_root = tmp_path / "public" / audio_subdir
    return PodcastPipeline(
        extractor=extractor or FakeExtractor(),
        script_generator=script_generator or FakeScriptGenerator(),
        synthesizer=AudioSynthesizer(speech_client or FakeSpeechClient()),
        store=store or FakeArtifactStore(),
        config=PipelineConfig(
            scratch_dir=tmp_path / "scratch",
            audio_root=audio_root,
            public_root="public",
            max_bytes=max_bytes,
            narration=SynthesisOptions(output_dir=audio_root),
        ),
    )


@pytest.fixture
def script() -> PodcastScript:
    return make_script()


@pytest.fixture
def audio_files(script: PodcastScript) -> dict[str, str]:
    return audio_map_for(script)
