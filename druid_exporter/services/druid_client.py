from __future__ import annotations

import logging
from typing import Optional

import httpx
import orjson
from pydantic import TypeAdapter, ValidationError

from ..models import StrictTaskCountRecord, TaskCountRecord

logger = logging.getLogger(__name__)

TASK_STATS_SQL = "SELECT type,status,count(*) AS total FROM sys.tasks GROUP BY type,status"

_LENIENT = TypeAdapter(list[TaskCountRecord])
_STRICT = TypeAdapter(list[StrictTaskCountRecord])

# Longest slice of a bad response body quoted in error messages
_BODY_PREVIEW = 512


class DruidQueryError(Exception):
    def __init__(self, message: str, uri: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.uri = uri

    def __str__(self) -> str:
        if self.uri:
            return f"{self.message} (uri={self.uri})"
        return self.message


class DruidTransportError(DruidQueryError):
    """The request never got a response: connection refused, DNS failure, timeout."""


class DruidResponseError(DruidQueryError):
    """A response arrived but its body could not be read or its status was not 2xx."""


class DruidDecodeError(DruidQueryError):
    """The body is not a JSON array of task count records."""


class DruidClient:
    def __init__(self, druid_uri: str, strict: bool = False, transport: Optional[httpx.BaseTransport] = None):
        if not druid_uri:
            raise ValueError("Empty Druid URI")
        self.druid_uri = druid_uri
        self.strict = strict
        self.transport = transport

    def fetch_task_counts(self) -> list[TaskCountRecord]:
        return self.fetch(TASK_STATS_SQL)

    def fetch(self, sql: str = TASK_STATS_SQL) -> list[TaskCountRecord]:
        body = self._post(orjson.dumps({"query": sql}))
        try:
            tasks = self.parse_records(body, strict=self.strict)
        except DruidDecodeError as exc:
            exc.uri = self.druid_uri
            raise
        logger.debug("Druid returned %d task count rows", len(tasks))
        return tasks

    def _post(self, payload: bytes) -> bytes:
        try:
            with httpx.Client(transport=self.transport) as client:
                r = client.post(
                    self.druid_uri,
                    content=payload,
                    headers={"Content-Type": "application/json"},
                )
                r.raise_for_status()
                return r.content
        except httpx.HTTPStatusError as exc:
            raise DruidResponseError(
                f"Druid answered {exc.response.status_code}: {_preview(exc.response.content)}",
                self.druid_uri,
            ) from exc
        except (httpx.ReadError, httpx.RemoteProtocolError, httpx.DecodingError) as exc:
            raise DruidResponseError(f"An error occurred while reading the response: {exc!r}", self.druid_uri) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise DruidTransportError(f"An error occurred while making the request: {exc!r}", self.druid_uri) from exc

    @staticmethod
    def parse_records(body: bytes | str, strict: bool = False) -> list[TaskCountRecord]:
        try:
            data = orjson.loads(body)
        except orjson.JSONDecodeError as exc:
            raise DruidDecodeError(f"An error occurred while unmarshalling {_preview(body)}: {exc}") from exc

        if not isinstance(data, list):
            raise DruidDecodeError(
                f"Expected a JSON array of task counts, got {type(data).__name__}: {_preview(body)}"
            )

        adapter = _STRICT if strict else _LENIENT
        try:
            return adapter.validate_python(data)
        except ValidationError as exc:
            raise DruidDecodeError(
                f"An error occurred while unmarshalling {_preview(body)}: {exc.error_count()} invalid field(s)"
            ) from exc


def _preview(body: bytes | str) -> str:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if len(body) > _BODY_PREVIEW:
        return body[:_BODY_PREVIEW] + "..."
    return body
