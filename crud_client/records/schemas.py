"""
Record Schemas.

Pydantic models for the record exchanged with the remote store and for the
client's construction-time configuration.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from crud_client.core.config import get_app_config, get_remote_base_url


class Record(BaseModel):
    """
    Application record stored in the remote document database.

    Unknown attribute fields are kept as extras and sent back unchanged.
    The identifier cannot change once assigned.
    """

    id: str | None = Field(
        default=None,
        description="Record identifier, assigned by the client or the store",
        examples=["abc123"],
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Record name",
        examples=["Widget"],
    )
    description: str | None = Field(
        default=None,
        description="Free-form description",
    )
    etag: str | None = Field(
        default=None,
        alias="_etag",
        description="Version token assigned by the store",
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and self.id is not None and value != self.id:
            raise ValueError(f"Record id is immutable (already {self.id!r})")
        super().__setattr__(name, value)

    def with_id(self, record_id: str) -> "Record":
        """Return a copy carrying `record_id`. Fails if a different id is set."""
        if self.id is not None and self.id != record_id:
            raise ValueError(f"Record id {self.id!r} does not match {record_id!r}")
        return self.model_copy(update={"id": record_id})

    def to_payload(self) -> dict[str, Any]:
        """JSON body for create/update. The version token travels in If-Match."""
        payload = self.model_dump(mode="json", exclude={"etag"})
        # unset built-in fields are omitted; extra attributes keep explicit nulls
        for key in ("id", "description"):
            if payload.get(key) is None:
                payload.pop(key, None)
        return payload

    def attributes(self) -> dict[str, Any]:
        """Everything except identity and version, for equivalence checks."""
        return self.model_dump(mode="json", exclude={"id", "etag"})


class ClientConfig(BaseModel):
    """Settings for RecordClient. Immutable once built."""

    base_url: str
    timeout: float = Field(default=30.0, gt=0)
    records_path: str = "records"
    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("base_url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value

    @field_validator("headers")
    @classmethod
    def _freeze_headers(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_validator("records_path")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        stripped = value.strip("/")
        if not stripped:
            raise ValueError("records_path must not be empty")
        return stripped

    @classmethod
    def from_app_config(cls, base_url: str | None = None) -> "ClientConfig":
        """Build from application.yaml (and CRUD_BASE_URL), optionally overriding the URL."""
        configured_url, timeout = get_remote_base_url()
        return cls(
            base_url=base_url or configured_url,
            timeout=timeout,
            records_path=get_app_config().application.remote.records_path,
        )
