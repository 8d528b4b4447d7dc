"""
Cosmos CRUD Client.

Typed async client for a record CRUD API backed by a document database,
plus the startup wiring and CLI around it.
"""

from crud_client.records.client import RecordClient
from crud_client.records.schemas import ClientConfig, Record

__all__ = ["ClientConfig", "Record", "RecordClient"]
