"""Scratch-file staging for validated uploads."""

from __future__ import annotations

import secrets
import string
import time
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def scratch_file_name(extension: str = "pdf") -> str:
    """``upload_<epoch_ms>_<random>.<ext>``; unique across concurrent requests."""

    timestamp = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(6))
    return f"upload_{timestamp}_{suffix}.{extension.lstrip('.')}"


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


async def stage_upload(data: bytes, scratch_dir: Path) -> Path:
    """Write ``data`` to a new scratch file and return its path."""

    path = Path(scratch_dir) / scratch_file_name()
    await run_in_threadpool(_write, path, data)
    return path


async def read_staged(path: Path) -> bytes:
    return await run_in_threadpool(Path(path).read_bytes)


__all__ = ["read_staged", "scratch_file_name", "stage_upload"]
