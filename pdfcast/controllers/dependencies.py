"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from pdfcast.config.dependencies import ServiceContainer
from pdfcast.pipelines.podcast import PodcastPipeline
from pdfcast.services import ArtifactStore


def get_services(request: Request) -> ServiceContainer:
    """Return the service container built at application start."""

    return request.app.state.services


def get_pipeline(
    services: Annotated[ServiceContainer, Depends(get_services)],
) -> PodcastPipeline:
    return services.pipeline


def get_artifact_store(
    services: Annotated[ServiceContainer, Depends(get_services)],
) -> ArtifactStore:
    return services.artifact_store


PipelineDep = Annotated[PodcastPipeline, Depends(get_pipeline)]
ArtifactStoreDep = Annotated[ArtifactStore, Depends(get_artifact_store)]


__all__ = [
    "ArtifactStoreDep",
    "PipelineDep",
    "get_artifact_store",
    "get_pipeline",
    "get_services",
]
