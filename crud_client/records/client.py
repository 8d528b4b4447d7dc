"""
Record HTTP Client.

Async client for the remote record CRUD API. Each operation is one HTTP
round trip; nothing is cached and nothing is retried. Failures are raised
as the typed errors in crud_client.core.exceptions.

Endpoints (relative to the configured base URL):
    POST   /records          create
    GET    /records/{id}     get_by_id
    GET    /records          get_all
    PUT    /records/{id}     update
    DELETE /records/{id}     delete
"""

from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from crud_client.core.exceptions import (
    ConflictError,
    NetworkError,
    NotFoundError,
    ServerError,
)
from crud_client.core.logging import get_logger, log_with_source
from crud_client.records.schemas import ClientConfig, Record

logger = get_logger(__name__)

CONFLICT_STATUSES = frozenset({409, 412})


class RecordClient:
    """
    HTTP client for the record API.

    Features:
    - Immutable configuration (base URL, timeout, records path)
    - One lazily created httpx.AsyncClient shared by concurrent callers
    - Structured logging of requests/responses
    - Status codes mapped to NotFoundError, ConflictError, ServerError;
      transport failures mapped to NetworkError

    Usage:
        async with RecordClient(ClientConfig(base_url="https://host/")) as client:
            created = await client.create(Record(name="Widget"))
            fetched = await client.get_by_id(created.id)
            async for record in client.get_all():
                ...
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the record client.

        Args:
            config: Client settings. If None, reads config/settings/application.yaml.
            transport: Optional httpx transport, used by tests to stand in for the network.
        """
        self.config = config if config is not None else ClientConfig.from_app_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def __aenter__(self) -> "RecordClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                headers={"Accept": "application/json", **self.config.headers},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    # =========================================================================
    # CRUD operations
    # =========================================================================

    async def create(self, record: Record) -> Record:
        """
        Create a record.

        Returns:
            The record as stored, including the server-assigned id

        Raises:
            ConflictError: A record with the same id already exists
            NetworkError: The API could not be reached
            ServerError: Any other non-2xx response
        """
        response = await self._send(
            "POST", self._collection_path(), json=record.to_payload(),
        )
        self._raise_for_status(response, record.id)
        if not response.content:
            return record
        return self._decode_record(self._decode_json(response))

    async def get_by_id(self, record_id: str) -> Record:
        """
        Fetch one record.

        Raises:
            NotFoundError: No record with this id exists
        """
        response = await self._send("GET", self._item_path(record_id))
        self._raise_for_status(response, record_id)
        return self._decode_record(self._decode_json(response))

    async def get_all(self) -> AsyncIterator[Record]:
        """
        Yield every record in the collection.

        One request fetches the whole collection when iteration starts;
        records are decoded one at a time as they are consumed. Iterating
        again issues a fresh request.
        """
        response = await self._send("GET", self._collection_path())
        self._raise_for_status(response, None)
        for item in self._decode_collection(self._decode_json(response)):
            yield self._decode_record(item)

    async def update(self, record_id: str, record: Record) -> Record:
        """
        Replace a record.

        When the record carries an etag it is sent as If-Match, so a stale
        version is rejected by the store.

        Raises:
            ValueError: The record carries a different id
            NotFoundError: No record with this id exists
            ConflictError: The store rejected the version (409/412)
        """
        record = record.with_id(record_id)
        headers = {"If-Match": record.etag} if record.etag else None
        response = await self._send(
            "PUT", self._item_path(record_id), json=record.to_payload(), headers=headers,
        )
        self._raise_for_status(response, record_id)
        if not response.content:
            return record
        return self._decode_record(self._decode_json(response))

    async def delete(self, record_id: str) -> None:
        """
        Delete a record.

        Raises:
            NotFoundError: No record with this id exists
        """
        response = await self._send("DELETE", self._item_path(record_id))
        self._raise_for_status(response, record_id)

    # =========================================================================
    # Internals
    # =========================================================================

    def _collection_path(self) -> str:
        return self.config.records_path

    def _item_path(self, record_id: str) -> str:
        if not record_id:
            raise ValueError("record_id must be a non-empty string")
        return f"{self.config.records_path}/{quote(record_id, safe='')}"

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Issue one request, translating transport failures to NetworkError."""
        client = await self._get_client()

        log_with_source(logger, "client", "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            log_with_source(
                logger,
                "client",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise NetworkError(f"{method} {path} failed: {e}") from e

        log_with_source(
            logger,
            "client",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    def _raise_for_status(self, response: httpx.Response, record_id: str | None) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return

        detail = _error_detail(response)
        log_with_source(
            logger,
            "client",
            "warning",
            "API error response",
            method=response.request.method,
            path=response.request.url.path,
            status_code=status,
            detail=detail,
        )

        if status == 404:
            target = f"Record {record_id!r}" if record_id else "Resource"
            raise NotFoundError(f"{target} not found", status_code=status)
        if status in CONFLICT_STATUSES:
            raise ConflictError(
                detail or f"Conflict on record {record_id!r}", status_code=status,
            )
        raise ServerError(
            detail or f"Unexpected status {status}", status_code=status,
        )

    def _decode_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ServerError(
                f"Response is not valid JSON: {e}", status_code=response.status_code,
            ) from e

    def _decode_record(self, data: Any) -> Record:
        if not isinstance(data, dict):
            raise ServerError(f"Expected a record object, got {type(data).__name__}")
        try:
            return Record.model_validate(data)
        except ValidationError as e:
            raise ServerError(f"Malformed record in response: {e}") from e

    def _decode_collection(self, data: Any) -> list[Any]:
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            for key in ("data", "items"):
                if isinstance(data.get(key), list):
                    return data[key]
        raise ServerError(f"Expected a list of records, got {type(data).__name__}")


def _error_detail(response: httpx.Response) -> str | None:
    """Best-effort error message from an error response body."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] or None

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str):
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return None
