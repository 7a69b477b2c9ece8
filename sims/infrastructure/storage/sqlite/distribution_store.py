"""SQLite implementation of distribution storage."""

from datetime import datetime

import aiosqlite

from sims.config import get_logger
from sims.core.entities.distribution import Distribution, DistributionStatus
from sims.core.exceptions import DistributionNotFoundError
from sims.core.interfaces.distribution_store import IDistributionStore
from sims.core.interfaces.sequence_allocator import ISequenceAllocator, SequenceName
from sims.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from sims.infrastructure.storage.sqlite.rows import parse_date, parse_datetime
from sims.infrastructure.storage.sqlite.sequence_allocator import SQLiteSequenceAllocator

logger = get_logger(__name__)


class SQLiteDistributionStore(IDistributionStore):
    """SQLite implementation of distribution persistence."""

    def __init__(self, allocator: ISequenceAllocator | None = None):
        self._allocator = allocator or SQLiteSequenceAllocator()

    async def create_distribution(self, distribution: Distribution) -> Distribution:
        distribution.created_at = datetime.utcnow()
        async with get_transaction() as conn:
            distribution.id = await self._allocator.next_id(SequenceName.DISTRIBUTION)
            await conn.execute(
                """
                INSERT INTO distributions (
                    id, inventory_item_id, recipient_name, recipient_contact,
                    quantity, unit_price, total_amount, distribution_date,
                    notes, status, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    distribution.id,
                    distribution.inventory_item_id,
                    distribution.recipient_name,
                    distribution.recipient_contact,
                    distribution.quantity,
                    distribution.unit_price,
                    distribution.total_amount,
                    distribution.distribution_date.isoformat(),
                    distribution.notes,
                    distribution.status.value,
                    distribution.created_at.isoformat(),
                ),
            )
        logger.info(
            "distribution_stored",
            distribution_id=distribution.id,
            total_amount=distribution.total_amount,
        )
        return distribution

    async def get_distribution(self, distribution_id: int) -> Distribution | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM distributions WHERE id = ?", (distribution_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_distribution(row) if row else None

    async def list_distributions(self) -> list[Distribution]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM distributions ORDER BY distribution_date DESC, id DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_distribution(row) for row in rows]

    async def set_status(
        self, distribution_id: int, status: DistributionStatus
    ) -> Distribution:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE distributions SET status = ? WHERE id = ?",
                (DistributionStatus(status).value, distribution_id),
            )
            if cursor.rowcount == 0:
                raise DistributionNotFoundError(distribution_id)
            distribution = await self.get_distribution(distribution_id)

        logger.info("distribution_status_changed", distribution_id=distribution_id, status=status)
        return distribution

    async def delete_distribution(self, distribution_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM distributions WHERE id = ?", (distribution_id,)
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("distribution_deleted", distribution_id=distribution_id)
        return deleted

    @staticmethod
    def _row_to_distribution(row: aiosqlite.Row) -> Distribution:
        return Distribution(
            id=row["id"],
            inventory_item_id=row["inventory_item_id"],
            recipient_name=row["recipient_name"],
            recipient_contact=row["recipient_contact"],
            quantity=float(row["quantity"]),
            unit_price=float(row["unit_price"]),
            total_amount=float(row["total_amount"] or 0),
            distribution_date=parse_date(row["distribution_date"], datetime.utcnow().date()),
            notes=row["notes"] or "",
            status=DistributionStatus(row["status"] or DistributionStatus.COMPLETED.value),
            created_at=parse_datetime(row["created_at"]),
        )
