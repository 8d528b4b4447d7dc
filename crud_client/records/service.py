"""
Record Service.

Thin layer between callers (UI host, CLI) and RecordClient. Adds operation
logging and owns the client lifecycle. No caching, no retries.
"""

from crud_client.core.logging import get_logger
from crud_client.records.client import RecordClient
from crud_client.records.schemas import Record

logger = get_logger(__name__)


class RecordService:
    """Record operations for the presentation layer."""

    def __init__(self, client: RecordClient) -> None:
        self.client = client

    async def create_record(self, record: Record) -> Record:
        created = await self.client.create(record)
        logger.info("Record created", source="service", record_id=created.id)
        return created

    async def get_record(self, record_id: str) -> Record:
        return await self.client.get_by_id(record_id)

    async def list_records(self) -> list[Record]:
        """Collect the full collection into a list."""
        records = [record async for record in self.client.get_all()]
        logger.debug("Records listed", source="service", count=len(records))
        return records

    async def update_record(self, record_id: str, record: Record) -> Record:
        updated = await self.client.update(record_id, record)
        logger.info("Record updated", source="service", record_id=record_id)
        return updated

    async def delete_record(self, record_id: str) -> None:
        await self.client.delete(record_id)
        logger.info("Record deleted", source="service", record_id=record_id)

    async def close(self) -> None:
        await self.client.close()
