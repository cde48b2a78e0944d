"""HTTP surface: upload, stored podcast lookups, health and metrics."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from pdfcast.config.dependencies import ServiceContainer
from pdfcast.config.settings import Settings, UploadConfig
from pdfcast.controllers.dependencies import get_pipeline
from pdfcast.domain.models import ArtifactRecord
from pdfcast.main import create_app
from pdfcast.pipelines.podcast import PipelineFailure, PipelineState
from pdfcast.services import ExtractionFailed, StorageError

from conftest import FakeArtifactStore, FakeExtractor, FakeGridDB, build_pipeline


@pytest.fixture
def store() -> FakeArtifactStore:
    return FakeArtifactStore(record_id=1234)


@pytest.fixture
def app(tmp_path, store):
    settings = Settings(
        log_file=str(tmp_path / "logs" / "app.log"),
        pipeline_log_file=str(tmp_path / "logs" / "pipeline.log"),
        upload=UploadConfig(public_dir=tmp_path / "public", scratch_dir=tmp_path / "scratch"),
    )
    services = ServiceContainer(
        pipeline=build_pipeline(tmp_path, store=store),
        artifact_store=store,
        griddb=FakeGridDB(),
    )
    application = create_app(settings=settings, services=services)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def _pdf(content: bytes = b"%PDF-1.4 sample", name: str = "paper.pdf", content_type: str = "application/pdf"):
    return {"file": (name, content, content_type)}


def test_health_and_root(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/").json()["status"] == "operational"


def test_startup_checks_the_container(client, store):
    assert store.ensure_calls == 1


def test_upload_returns_podcast_bundle_and_serves_audio(client, store):
    response = client.post("/api/upload", files=_pdf(), data={"voice": "nova"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == "File uploaded successfully"
    assert payload["fileName"] == "paper.pdf"
    assert payload["fileSize"] == len(b"%PDF-1.4 sample")
    assert payload["podcastId"] == 1234
    assert payload["audioScript"]["call_to_action"] == "Subscribe for more."
    assert len(payload["audioFiles"]) == 6
    assert response.headers["X-Request-ID"]

    audio = client.get(payload["audioFiles"]["introduction"])
    assert audio.status_code == 200
    assert audio.content == b"audio:Welcome to the show."
    assert 1234 in store.records


def test_clips_are_served_from_configured_audio_subdir(tmp_path, store):
    settings = Settings(
        log_file=str(tmp_path / "logs" / "app.log"),
        pipeline_log_file=str(tmp_path / "logs" / "pipeline.log"),
        upload=UploadConfig(public_dir=tmp_path / "public", audio_subdir="clips"),
    )
    services = ServiceContainer(
        pipeline=build_pipeline(tmp_path, store=store, audio_subdir="clips"),
        artifact_store=store,
        griddb=FakeGridDB(),
    )

    with TestClient(create_app(settings=settings, services=services)) as client:
        payload = client.post("/api/upload", files=_pdf()).json()
        clip_url = payload["audioFiles"]["conclusion"]
        audio = client.get(clip_url)

    assert clip_url.startswith("/clips/")
    assert audio.status_code == 200
    assert audio.content == b"audio:That wraps it up."
    assert REGISTRY.get_sample_value(
        "http_requests_total",
        {"method": "GET", "route": "/clips", "status": "200"},
    ) >= 1


def test_upload_without_file_is_a_bad_request(client, store):
    response = client.post("/api/upload", data={"voice": "fable"})

    assert response.status_code == 400
    assert response.json() == {"error": "No file uploaded"}
    assert store.records == {}


def test_upload_of_non_pdf_is_a_bad_request(client):
    response = client.post("/api/upload", files=_pdf(b"hello", "notes.txt", "text/plain"))

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file type. Please upload a PDF file"}


def test_upload_over_size_limit_is_a_bad_request(client):
    response = client.post("/api/upload", files=_pdf(b"0" * (10 * 1024 * 1024 + 1)))

    assert response.status_code == 400
    assert response.json() == {"error": "File size too large. Maximum size is 10MB"}


def test_provider_failure_is_a_generic_server_error(app, tmp_path, store):
    failing = build_pipeline(tmp_path, extractor=FakeExtractor(error=ExtractionFailed("ocr down")), store=store)
    app.dependency_overrides[get_pipeline] = lambda: failing

    with TestClient(app) as client:
        response = client.post("/api/upload", files=_pdf())

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process file"}
    assert store.records == {}


def test_pipeline_failure_from_any_stage_hides_details(app):
    class ExplodingPipeline:
        async def run(self, upload):
            raise PipelineFailure(PipelineState.PERSISTED, "GridDB rejected the row: secret detail")

    app.dependency_overrides[get_pipeline] = lambda: ExplodingPipeline()

    with TestClient(app) as client:
        response = client.post("/api/upload", files=_pdf())

    assert response.status_code == 500
    assert "secret" not in response.text


def _seed(store: FakeArtifactStore, script, audio_files, record_id: int = 7) -> ArtifactRecord:
    record = ArtifactRecord(
        id=record_id,
        ocr_response={"pages": []},
        audio_script=script,
        audio_files=audio_files,
    )
    store.records[record_id] = record
    return record


def test_list_and_get_podcasts(client, store, script, audio_files):
    _seed(store, script, audio_files, 7)
    _seed(store, script, audio_files, 11)

    assert client.get("/api/podcasts").json() == {"ids": [11, 7]}

    detail = client.get("/api/podcasts/7").json()
    assert detail["id"] == 7
    assert detail["audioFiles"] == audio_files
    assert detail["audioScript"]["introduction"] == "Welcome to the show."


def test_unknown_podcast_is_not_found(client):
    response = client.get("/api/podcasts/999")

    assert response.status_code == 404
    assert "999" in response.json()["error"]


def test_section_lookup_resolves_playback_index(client, store, script, audio_files):
    _seed(store, script, audio_files)

    first = client.get("/api/podcasts/7/sections/0").json()
    middle = client.get("/api/podcasts/7/sections/2").json()
    last = client.get("/api/podcasts/7/sections/5").json()

    assert first["title"] == "Introduction"
    assert first["lastIndex"] == 5
    assert middle == {
        "index": 2,
        "sectionId": "talking_point_1",
        "title": "Point 1",
        "text": "Discussion of point 1.",
        "audioUrl": "/audio/run/talking_point_1.mp3",
        "lastIndex": 5,
    }
    assert last["sectionId"] == "call_to_action"


@pytest.mark.parametrize("index", [6, -1])
def test_section_index_out_of_range_is_not_found(client, store, script, audio_files, index):
    _seed(store, script, audio_files)

    response = client.get(f"/api/podcasts/7/sections/{index}")

    assert response.status_code == 404
    assert "error" in response.json()


def test_storage_outage_is_a_bad_gateway(client, store):
    store.error = StorageError("HTTP error! status: 503", status_code=503)

    response = client.get("/api/podcasts/1")

    assert response.status_code == 502
    assert response.json() == {"error": "Podcast storage is unavailable"}


def test_metrics_endpoint_exposes_pipeline_counters(client):
    client.post("/api/upload", files=_pdf())

    body = client.get("/metrics").text

    assert "podcast_pipeline_runs_total" in body
    assert "http_requests_total" in body
    assert "podcast_upload_request_bytes_count" in body
