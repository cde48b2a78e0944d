"""State machine driving one PDF upload through to a stored podcast.

Each upload walks the states below in order. Every arrow is one transition
method on :class:`PodcastPipeline`, so stages can be exercised on their own
by preparing a :class:`PipelineRun` in the preceding state::

    RECEIVED -> VALIDATED -> STAGED -> EXTRACTED -> SCRIPTED
             -> SYNTHESIZED -> PERSISTED -> COMPLETED

Any failure moves the run to ``FAILED``. Validation problems are re-raised
unchanged (they map to 400s); anything else is raised as
:class:`PipelineFailure` with the original error chained. Nothing is rolled
back: scratch files, provider-side OCR uploads and written clips stay put.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Protocol
from uuid import uuid4

from pdfcast.domain.models import ArtifactRecord, OcrResult, PodcastScript, SectionAudioMap
from pdfcast.domain.sections import section_ids
from pdfcast.services.artifacts import InsertResult
from pdfcast.services.errors import SynthesisFailed
from pdfcast.telemetry import observe_stage, record_pipeline_outcome

from .ingestion import DEFAULT_MAX_BYTES, UploadValidationError, validate_upload
from .staging import read_staged, stage_upload
from .synthesis import SynthesisOptions, to_public_map
from .types import IncomingUpload, PipelineFailure, PipelineRun, PipelineState

logger = logging.getLogger("pdfcast.pipeline")

SUPPORTED_VOICES = frozenset(
    {
        "alloy",
        "ash",
        "ballad",
        "coral",
        "echo",
        "fable",
        "nova",
        "onyx",
        "sage",
        "shimmer",
        "verse",
    }
)


class TextExtractor(Protocol):
    async def extract(self, file_bytes: bytes, file_name: str) -> OcrResult: ...


class ScriptGenerator(Protocol):
    async def generate(self, text: str) -> PodcastScript: ...


class Synthesizer(Protocol):
    async def synthesize(self, script: PodcastScript, options: SynthesisOptions) -> SectionAudioMap: ...


class ArtifactWriter(Protocol):
    async def new_record_id(self) -> int: ...

    async def insert(self, record: ArtifactRecord) -> InsertResult: ...


@dataclass(frozen=True)
class PipelineStage:
    """Human-readable description of one stage in the podcast pipeline."""

    order: int
    state: PipelineState
    module: str
    summary: str


@dataclass(frozen=True)
class PipelineConfig:
    """Filesystem locations, limits and narration defaults for a pipeline."""

    scratch_dir: Path
    audio_root: Path
    public_root: str = "public"
    max_bytes: int = DEFAULT_MAX_BYTES
    narration: SynthesisOptions = field(default_factory=lambda: SynthesisOptions(output_dir=Path(".")))


class PodcastPipeline:
    """Run uploads through validation, OCR, scripting, narration and storage."""

    _STAGES: List[PipelineStage] = [
        PipelineStage(
            1,
            PipelineState.VALIDATED,
            "pdfcast.pipelines.podcast.ingestion",
            "Reject missing files, non-PDF content types and uploads over the size ceiling.",
        ),
        PipelineStage(
            2,
            PipelineState.STAGED,
            "pdfcast.pipelines.podcast.staging",
            "Write the upload to a uniquely named scratch file.",
        ),
        PipelineStage(
            3,
            PipelineState.EXTRACTED,
            "pdfcast.services.ocr",
            "Upload to Mistral, sign the file URL and OCR it into page-ordered text.",
        ),
        PipelineStage(
            4,
            PipelineState.SCRIPTED,
            "pdfcast.pipelines.podcast.scripting",
            "Ask the language model for a schema-constrained podcast script.",
        ),
        PipelineStage(
            5,
            PipelineState.SYNTHESIZED,
            "pdfcast.pipelines.podcast.synthesis",
            "Narrate every section sequentially into per-run audio files.",
        ),
        PipelineStage(
            6,
            PipelineState.PERSISTED,
            "pdfcast.services.artifacts",
            "Rewrite clip paths to public URLs and append the artifact row to GridDB.",
        ),
        PipelineStage(
            7,
            PipelineState.COMPLETED,
            "pdfcast.pipelines.podcast.flow",
            "Assemble the response bundle for the caller.",
        ),
    ]

    _TRANSITIONS = {
        PipelineState.RECEIVED: (PipelineState.VALIDATED, "validate"),
        PipelineState.VALIDATED: (PipelineState.STAGED, "stage"),
        PipelineState.STAGED: (PipelineState.EXTRACTED, "extract"),
        PipelineState.EXTRACTED: (PipelineState.SCRIPTED, "write_script"),
        PipelineState.SCRIPTED: (PipelineState.SYNTHESIZED, "synthesize"),
        PipelineState.SYNTHESIZED: (PipelineState.PERSISTED, "persist"),
        PipelineState.PERSISTED: (PipelineState.COMPLETED, "complete"),
    }

    def __init__(
        self,
        *,
        extractor: TextExtractor,
        script_generator: ScriptGenerator,
        synthesizer: Synthesizer,
        store: ArtifactWriter,
        config: PipelineConfig,
    ) -> None:
        self._extractor = extractor
        self._script_generator = script_generator
        self._synthesizer = synthesizer
        self._store = store
        self._config = config

    @classmethod
    def describe(cls) -> Iterable[PipelineStage]:
        """Expose the ordered list of stages for debugging and documentation."""

        return tuple(cls._STAGES)

    @staticmethod
    def new_run(upload: IncomingUpload) -> PipelineRun:
        return PipelineRun(run_id=uuid4().hex, upload=upload)

    async def run(self, upload: IncomingUpload) -> PipelineRun:
        """Drive a fresh run to ``COMPLETED`` or raise on failure."""

        pipeline_run = self.new_run(upload)
        logger.info(
            "Pipeline run=%s received file=%s voice=%s",
            pipeline_run.run_id,
            upload.file_name,
            upload.voice,
        )
        while not pipeline_run.state.is_terminal:
            await self.advance(pipeline_run)
        return pipeline_run

    async def advance(self, pipeline_run: PipelineRun) -> PipelineState:
        """Apply the single transition out of the run's current state."""

        if pipeline_run.state.is_terminal:
            raise RuntimeError(f"Run {pipeline_run.run_id} is already {pipeline_run.state.value}")

        target, method_name = self._TRANSITIONS[pipeline_run.state]
        transition = getattr(self, method_name)
        started = time.perf_counter()
        try:
            await transition(pipeline_run)
        except UploadValidationError as exc:
            self._fail(pipeline_run, target, exc)
            record_pipeline_outcome("rejected", target.value)
            logger.info("Pipeline run=%s rejected upload: %s", pipeline_run.run_id, exc)
            raise
        except Exception as exc:
            self._fail(pipeline_run, target, exc)
            record_pipeline_outcome("failed", target.value)
            logger.error(
                "Pipeline run=%s failed entering %s: %r",
                pipeline_run.run_id,
                target.value,
                exc,
            )
            raise PipelineFailure(
                target,
                f"Pipeline failed before reaching '{target.value}'",
            ) from exc

        elapsed = time.perf_counter() - started
        observe_stage(target.value, elapsed)
        pipeline_run.history.append(pipeline_run.state)
        pipeline_run.state = target
        logger.info(
            "Pipeline run=%s -> %s (%.3fs)",
            pipeline_run.run_id,
            target.value,
            elapsed,
        )
        if target is PipelineState.COMPLETED:
            record_pipeline_outcome("completed")
        return target

    @staticmethod
    def _fail(pipeline_run: PipelineRun, target: PipelineState, exc: BaseException) -> None:
        pipeline_run.history.append(pipeline_run.state)
        pipeline_run.state = PipelineState.FAILED
        pipeline_run.failed_stage = target
        pipeline_run.error = exc

    # -- transitions -----------------------------------------------------

    async def validate(self, pipeline_run: PipelineRun) -> None:
        pipeline_run.document = validate_upload(
            pipeline_run.upload,
            max_bytes=self._config.max_bytes,
        )

    async def stage(self, pipeline_run: PipelineRun) -> None:
        document = _require(pipeline_run.document, "document")
        path = await stage_upload(pipeline_run.upload.data or b"", self._config.scratch_dir)
        pipeline_run.staged_path = path
        pipeline_run.document = dataclasses.replace(document, path=path)
        logger.info("Staged upload run=%s at %s", pipeline_run.run_id, path)

    async def extract(self, pipeline_run: PipelineRun) -> None:
        document = _require(pipeline_run.document, "document")
        path = _require(pipeline_run.staged_path, "staged_path")
        file_bytes = await read_staged(path)
        pipeline_run.ocr = await self._extractor.extract(file_bytes, document.file_name)

    async def write_script(self, pipeline_run: PipelineRun) -> None:
        ocr = _require(pipeline_run.ocr, "ocr")
        pipeline_run.script = await self._script_generator.generate(ocr.text)

    async def synthesize(self, pipeline_run: PipelineRun) -> None:
        script = _require(pipeline_run.script, "script")
        options = self.synthesis_options(pipeline_run)
        audio_files = await self._synthesizer.synthesize(script, options)

        expected = section_ids(script)
        if set(audio_files) != expected:
            missing = sorted(expected - set(audio_files))
            extra = sorted(set(audio_files) - expected)
            raise SynthesisFailed(
                f"Audio map does not match script sections (missing={missing}, extra={extra})"
            )
        pipeline_run.audio_files = dict(audio_files)

    async def persist(self, pipeline_run: PipelineRun) -> None:
        ocr = _require(pipeline_run.ocr, "ocr")
        script = _require(pipeline_run.script, "script")
        public_files = to_public_map(pipeline_run.audio_files, self._config.public_root)
        record = ArtifactRecord(
            id=await self._store.new_record_id(),
            ocr_response=ocr.response,
            audio_script=script,
            audio_files=public_files,
        )
        await self._store.insert(record)
        pipeline_run.public_audio_files = public_files
        pipeline_run.record_id = record.id

    async def complete(self, pipeline_run: PipelineRun) -> None:
        document = _require(pipeline_run.document, "document")
        script = _require(pipeline_run.script, "script")
        ocr = _require(pipeline_run.ocr, "ocr")
        pipeline_run.result = build_result(
            document_name=document.file_name,
            document_size=document.size,
            temp_file_path=str(pipeline_run.staged_path),
            ocr_response=ocr.response,
            audio_files=pipeline_run.public_audio_files,
            script=script,
            podcast_id=pipeline_run.record_id,
        )

    def synthesis_options(self, pipeline_run: PipelineRun) -> SynthesisOptions:
        """Per-run narration options: own output directory, requested voice if known."""

        defaults = self._config.narration
        voice = defaults.voice
        requested = (pipeline_run.upload.voice or "").strip().lower()
        if requested in SUPPORTED_VOICES:
            voice = requested
        elif requested:
            logger.warning(
                "Unsupported voice '%s' for run=%s; using '%s'",
                pipeline_run.upload.voice,
                pipeline_run.run_id,
                voice,
            )
        return dataclasses.replace(
            defaults,
            voice=voice,
            output_dir=self._config.audio_root / pipeline_run.run_id,
        )


def build_result(
    *,
    document_name: str,
    document_size: int,
    temp_file_path: str,
    ocr_response: dict[str, Any],
    audio_files: SectionAudioMap,
    script: PodcastScript,
    podcast_id: int | None,
) -> dict[str, Any]:
    return {
        "message": "File uploaded successfully",
        "fileName": document_name,
        "fileSize": document_size,
        "tempFilePath": temp_file_path,
        "ocrResponse": ocr_response,
        "audioFiles": dict(audio_files),
        "audioScript": script.model_dump(),
        "podcastId": podcast_id,
    }


def _require(value: Any, name: str) -> Any:
    if value is None:
        raise RuntimeError(f"Pipeline run is missing '{name}' for this transition")
    return value


__all__ = [
    "PipelineConfig",
    "PipelineStage",
    "PodcastPipeline",
    "SUPPORTED_VOICES",
    "build_result",
]
