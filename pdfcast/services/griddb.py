"""GridDB Web API client."""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Sequence

import httpx

from .errors import StorageError

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Operation completed successfully"


def basic_auth_token(username: str, password: str) -> str:
    return base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")


def _process_response(response_text: str) -> Any:
    if not response_text:
        return {"message": SUCCESS_MESSAGE}
    try:
        return json.loads(response_text)
    except ValueError:
        return {"message": SUCCESS_MESSAGE, "response": response_text}


class GridDBClient:
    """Issue authenticated JSON requests against the GridDB Web API."""

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth_header = f"Basic {basic_auth_token(username, password)}"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        payload: Any = None,
    ) -> httpx.Response:
        headers = {"Authorization": self._auth_header}
        content = None
        if payload is not None:
            headers["Content-Type"] = "application/json; charset=UTF-8"
            content = json.dumps(payload).encode("utf-8")

        url = f"{self._base_url}{path}"
        logger.debug("GridDB %s %s", method, url)
        try:
            return await self._http.request(method, url, headers=headers, content=content)
        except httpx.RequestError as exc:
            raise StorageError(f"Failed to make request to GridDB: {exc}") from exc

    async def _request(self, method: str, path: str, payload: Any = None) -> Any:
        response = await self._send(method, path, payload)
        if response.is_error:
            body = response.text
            raise StorageError(
                f"HTTP error! status: {response.status_code} - {body or response.reason_phrase}",
                status_code=response.status_code,
                body=body,
            )
        return _process_response(response.text)

    async def get_container_info(self, container_name: str) -> httpx.Response:
        """Return the raw info response so callers can branch on 404."""

        return await self._send("GET", f"/containers/{container_name}/info")

    async def create_container(
        self,
        container_name: str,
        columns: Sequence[dict[str, str]],
        *,
        container_type: str = "COLLECTION",
        rowkey: bool = True,
    ) -> Any:
        payload = {
            "container_name": container_name,
            "container_type": container_type,
            "rowkey": rowkey,
            "columns": list(columns),
        }
        return await self._request("POST", "/containers", payload)

    async def put_rows(self, container_name: str, rows: Sequence[Sequence[Any]]) -> Any:
        return await self._request("PUT", f"/containers/{container_name}/rows", [list(r) for r in rows])

    async def query(self, statements: Sequence[dict[str, str]]) -> Any:
        """Run SQL statements through ``/sql/dml/query``."""

        if not statements:
            raise StorageError("Queries must be a non-empty array of SQL query objects.")
        return await self._request("POST", "/sql/dml/query", list(statements))


__all__ = ["GridDBClient", "basic_auth_token"]
