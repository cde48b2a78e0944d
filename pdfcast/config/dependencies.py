"""Construction of the long-lived service handles used by the API."""

from __future__ import annotations

from dataclasses import dataclass

from pdfcast.pipelines.podcast import (
    AudioSynthesizer,
    PipelineConfig,
    PodcastPipeline,
    PodcastScriptGenerator,
    SynthesisOptions,
)
from pdfcast.services import (
    ArtifactStore,
    GridDBClient,
    MistralOcrService,
    OpenAIScriptClient,
    OpenAITtsService,
)

from .settings import Settings


@dataclass
class ServiceContainer:
    """Service handles built once per process and shared by every request."""

    pipeline: PodcastPipeline
    artifact_store: ArtifactStore
    griddb: GridDBClient

    async def aclose(self) -> None:
        await self.griddb.aclose()


def build_services(settings: Settings) -> ServiceContainer:
    """Wire the provider clients, artifact store and pipeline from settings."""

    ocr = MistralOcrService(
        api_key=settings.mistral.api_key.get_secret_value(),
        model=settings.mistral.ocr_model,
    )
    script_generator = PodcastScriptGenerator(
        OpenAIScriptClient(
            api_key=settings.openai.api_key.get_secret_value(),
            model=settings.openai.script_model,
            temperature=settings.openai.temperature,
            top_p=settings.openai.top_p,
            max_output_tokens=settings.openai.max_output_tokens,
        )
    )
    synthesizer = AudioSynthesizer(
        OpenAITtsService(api_key=settings.openai.api_key.get_secret_value())
    )
    griddb = GridDBClient(
        settings.griddb.webapi_url,
        settings.griddb.username,
        settings.griddb.password.get_secret_value(),
    )
    artifact_store = ArtifactStore(griddb, settings.griddb.container_name)

    audio_root = settings.upload.audio_root
    pipeline = PodcastPipeline(
        extractor=ocr,
        script_generator=script_generator,
        synthesizer=synthesizer,
        store=artifact_store,
        config=PipelineConfig(
            scratch_dir=settings.upload.scratch_dir,
            audio_root=audio_root,
            public_root=settings.upload.public_dir.name,
            max_bytes=settings.upload.max_bytes,
            narration=SynthesisOptions(
                output_dir=audio_root,
                voice=settings.tts.voice,
                instructions=settings.tts.instructions,
                output_format=settings.tts.output_format,
                model=settings.tts.model,
            ),
        ),
    )
    return ServiceContainer(
        pipeline=pipeline,
        artifact_store=artifact_store,
        griddb=griddb,
    )


__all__ = ["ServiceContainer", "build_services"]
