"""Telemetry helpers and metrics."""

from .metrics import (
    ERROR_COUNTER,
    PIPELINE_RUNS,
    PIPELINE_STAGE_LATENCY,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    UPLOAD_BYTES,
    observe_request,
    observe_stage,
    observe_upload_size,
    record_pipeline_outcome,
)

__all__ = [
    "ERROR_COUNTER",
    "PIPELINE_RUNS",
    "PIPELINE_STAGE_LATENCY",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "UPLOAD_BYTES",
    "observe_request",
    "observe_stage",
    "observe_upload_size",
    "record_pipeline_outcome",
]
