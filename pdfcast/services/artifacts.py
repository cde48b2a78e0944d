"""Podcast artifact persistence on top of a GridDB container."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Any, Final

from pydantic import ValidationError

from pdfcast.domain.models import ArtifactRecord

from .errors import StorageError
from .griddb import GridDBClient

logger = logging.getLogger(__name__)

PODCAST_COLUMNS: Final[tuple[dict[str, str], ...]] = (
    {"name": "id", "type": "INTEGER"},
    {"name": "ocrResponse", "type": "STRING"},
    {"name": "audioScript", "type": "STRING"},
    {"name": "audioFiles", "type": "STRING"},
)

_MAX_INTEGER: Final[int] = 2**31 - 1
_ID_ATTEMPTS: Final[int] = 5


@dataclass(frozen=True)
class InsertResult:
    record_id: int
    response: Any


def _result_rows(response: Any) -> list[list[Any]]:
    """Pull the row list out of a ``/sql/dml/query`` response."""

    if not isinstance(response, list) or not response:
        return []
    first = response[0]
    if not isinstance(first, dict):
        return []
    return list(first.get("results") or [])


class ArtifactStore:
    """Ensure the podcasts container exists and append artifact rows to it."""

    def __init__(self, client: GridDBClient, container_name: str = "podcasts") -> None:
        self._client = client
        self._container_name = container_name

    @property
    def container_name(self) -> str:
        return self._container_name

    @staticmethod
    def draw_record_id() -> int:
        """Random positive id that fits a GridDB INTEGER column."""

        return secrets.randbelow(_MAX_INTEGER) + 1

    async def new_record_id(self) -> int:
        """Draw an id not yet present in the container.

        Row PUTs on a rowkey container overwrite, so a drawn id is checked
        before use. A concurrent insert between the check and the PUT can
        still collide.
        """

        for _ in range(_ID_ATTEMPTS):
            candidate = self.draw_record_id()
            if not await self.exists(candidate):
                return candidate
            logger.warning("Record id %s already taken in '%s'; drawing again", candidate, self._container_name)
        raise StorageError(
            f"Could not allocate a free record id in '{self._container_name}' after {_ID_ATTEMPTS} attempts"
        )

    async def exists(self, record_id: int) -> bool:
        statement = {
            "type": "sql-select",
            "stmt": f"SELECT id FROM {self._container_name} WHERE id = {int(record_id)}",
        }
        return bool(_result_rows(await self._client.query([statement])))

    async def ensure_container(self) -> bool:
        """Create the container when missing. Returns True if it was created."""

        response = await self._client.get_container_info(self._container_name)
        if response.status_code == 404:
            await self._client.create_container(self._container_name, PODCAST_COLUMNS)
            logger.info("Created GridDB container '%s'", self._container_name)
            return True
        if response.is_error:
            raise StorageError(
                f"Failed to look up GridDB container '{self._container_name}'",
                status_code=response.status_code,
                body=response.text,
            )
        logger.info("Container %s already exists", self._container_name)
        return False

    async def insert(self, record: ArtifactRecord) -> InsertResult:
        response = await self._client.put_rows(self._container_name, [record.to_row()])
        logger.info("Stored podcast artifact id=%s in '%s'", record.id, self._container_name)
        return InsertResult(record_id=record.id, response=response)

    async def fetch(self, record_id: int) -> ArtifactRecord | None:
        statement = {
            "type": "sql-select",
            "stmt": f"SELECT * FROM {self._container_name} WHERE id = {int(record_id)}",
        }
        rows = _result_rows(await self._client.query([statement]))
        if not rows:
            return None
        try:
            return ArtifactRecord.from_row(rows[0])
        except (ValueError, ValidationError) as exc:
            raise StorageError(
                f"Stored row {record_id} could not be decoded: {exc}",
                body=rows[0],
            ) from exc

    async def list_ids(self, limit: int = 50) -> list[int]:
        statement = {
            "type": "sql-select",
            "stmt": f"SELECT id FROM {self._container_name} ORDER BY id DESC LIMIT {int(limit)}",
        }
        rows = _result_rows(await self._client.query([statement]))
        return [int(row[0]) for row in rows if row]


__all__ = ["ArtifactStore", "InsertResult", "PODCAST_COLUMNS"]
