"""Prometheus metrics definitions and helpers."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests processed",
    ("method", "route", "status"),
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ("method", "route"),
    buckets=(
        0.005,
        0.01,
        0.025,
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.5,
        5.0,
        10.0,
        30.0,
        60.0,
    ),
)

ERROR_COUNTER = Counter(
    "app_internal_errors_total",
    "Number of requests ending in internal server error responses",
    ("method", "route"),
)

PIPELINE_RUNS = Counter(
    "podcast_pipeline_runs_total",
    "Podcast pipeline runs by final state and failing stage",
    ("outcome", "stage"),
)

PIPELINE_STAGE_LATENCY = Histogram(
    "podcast_pipeline_stage_duration_seconds",
    "Time spent entering each podcast pipeline state",
    ("stage",),
    buckets=(0.01, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0),
)

UPLOAD_BYTES = Histogram(
    "podcast_upload_request_bytes",
    "Declared size of upload request bodies",
    buckets=(64 * 1024, 256 * 1024, 1024 * 1024, 4 * 1024 * 1024, 10 * 1024 * 1024, 16 * 1024 * 1024),
)


def observe_request(
    method: str,
    route: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record metrics for a completed HTTP request."""

    safe_route = route or "unknown"
    safe_method = method or "UNKNOWN"
    status_label = str(status_code)
    observed_duration = duration_seconds if duration_seconds >= 0 else 0

    REQUEST_COUNT.labels(
        method=safe_method,
        route=safe_route,
        status=status_label,
    ).inc()
    REQUEST_LATENCY.labels(
        method=safe_method,
        route=safe_route,
    ).observe(observed_duration)

    if status_code >= 500:
        ERROR_COUNTER.labels(
            method=safe_method,
            route=safe_route,
        ).inc()


def observe_stage(stage: str, duration_seconds: float) -> None:
    """Record how long a pipeline transition took."""

    PIPELINE_STAGE_LATENCY.labels(stage=stage).observe(max(0.0, duration_seconds))


def record_pipeline_outcome(outcome: str, stage: str = "") -> None:
    """Count a finished pipeline run (``completed``/``rejected``/``failed``)."""

    PIPELINE_RUNS.labels(outcome=outcome, stage=stage or "none").inc()


def observe_upload_size(size_bytes: int) -> None:
    UPLOAD_BYTES.observe(max(0, size_bytes))
