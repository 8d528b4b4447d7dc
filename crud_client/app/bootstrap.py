"""
Application Bootstrap.

Builds the application context once at process start: registered fonts,
developer tools, and (in debug, or when a base URL is given explicitly)
the remote record service. The context is returned to the caller; nothing
is kept in a module-level registry.

Usage:
    context = build_app(debug=True)
    service = context.require_record_service()
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import httpx

from crud_client.core.config import get_app_config
from crud_client.core.exceptions import ConfigurationError
from crud_client.core.logging import get_logger, log_with_source
from crud_client.records.client import RecordClient
from crud_client.records.schemas import ClientConfig
from crud_client.records.service import RecordService

logger = get_logger(__name__)


@dataclass(frozen=True)
class AppContext:
    """Everything wired at startup."""

    name: str
    version: str
    debug: bool
    developer_tools: bool
    fonts: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    record_service: RecordService | None = None

    def require_record_service(self) -> RecordService:
        """Return the record service or fail when it was not wired."""
        if self.record_service is None:
            raise ConfigurationError(
                "Record service is not configured: run in debug mode or pass a base URL"
            )
        return self.record_service

    async def aclose(self) -> None:
        if self.record_service is not None:
            await self.record_service.close()


def build_app(
    debug: bool | None = None,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppContext:
    """
    Build the application context.

    Args:
        debug: Debug mode. If None, reads `debug` from application.yaml.
        base_url: Remote API address. Wires the record service even outside debug.
        transport: Optional httpx transport handed to the record client.

    Returns:
        Immutable AppContext. `record_service` is None outside debug unless
        `base_url` was supplied.
    """
    app_config = get_app_config().application
    effective_debug = app_config.debug if debug is None else debug

    record_service = None
    if effective_debug or base_url is not None:
        client_config = ClientConfig.from_app_config(base_url=base_url)
        record_service = RecordService(RecordClient(client_config, transport=transport))

    context = AppContext(
        name=app_config.name,
        version=app_config.version,
        debug=effective_debug,
        developer_tools=effective_debug and app_config.developer_tools,
        fonts=MappingProxyType(dict(app_config.fonts)),
        record_service=record_service,
    )

    log_with_source(
        logger,
        "app",
        "info",
        "Application built",
        debug=context.debug,
        fonts=sorted(context.fonts),
        record_service=record_service is not None,
        base_url=record_service.client.base_url if record_service else None,
    )
    return context
