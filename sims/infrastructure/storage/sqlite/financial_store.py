"""SQLite implementation of financial transaction storage."""

from datetime import date, datetime

import aiosqlite

from sims.config import get_logger
from sims.core.entities.distribution import FinancialTransaction, TransactionType
from sims.core.interfaces.distribution_store import IFinancialStore
from sims.core.interfaces.sequence_allocator import ISequenceAllocator, SequenceName
from sims.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from sims.infrastructure.storage.sqlite.rows import parse_date, parse_datetime
from sims.infrastructure.storage.sqlite.sequence_allocator import SQLiteSequenceAllocator

logger = get_logger(__name__)


class SQLiteFinancialStore(IFinancialStore):
    """Revenue and expense records; rows are never updated once written."""

    def __init__(self, allocator: ISequenceAllocator | None = None):
        self._allocator = allocator or SQLiteSequenceAllocator()

    async def add_transaction(self, transaction: FinancialTransaction) -> FinancialTransaction:
        transaction.created_at = datetime.utcnow()
        async with get_transaction() as conn:
            transaction.id = await self._allocator.next_id(SequenceName.FINANCIAL_TRANSACTION)
            await conn.execute(
                """
                INSERT INTO financial_transactions (
                    id, transaction_type, amount, description, category,
                    distribution_id, batch_id, transaction_date, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    transaction.id,
                    transaction.transaction_type.value,
                    transaction.amount,
                    transaction.description,
                    transaction.category,
                    transaction.distribution_id,
                    transaction.batch_id,
                    transaction.transaction_date.isoformat(),
                    transaction.created_at.isoformat(),
                ),
            )
        logger.info(
            "financial_transaction_recorded",
            transaction_id=transaction.id,
            type=transaction.transaction_type.value,
            amount=transaction.amount,
        )
        return transaction

    async def list_transactions(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int | None = None,
    ) -> list[FinancialTransaction]:
        query = "SELECT * FROM financial_transactions WHERE 1 = 1"
        params: list = []
        if start_date is not None:
            query += " AND transaction_date >= ?"
            params.append(start_date.isoformat())
        if end_date is not None:
            query += " AND transaction_date <= ?"
            params.append(end_date.isoformat())
        query += " ORDER BY transaction_date DESC, id DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_transaction(row) for row in rows]

    async def list_for_distribution(self, distribution_id: int) -> list[FinancialTransaction]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM financial_transactions WHERE distribution_id = ? ORDER BY id",
                (distribution_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_transaction(row) for row in rows]

    @staticmethod
    def _row_to_transaction(row: aiosqlite.Row) -> FinancialTransaction:
        return FinancialTransaction(
            id=row["id"],
            transaction_type=TransactionType(row["transaction_type"]),
            amount=float(row["amount"] or 0),
            description=row["description"] or "",
            category=row["category"] or "",
            distribution_id=row["distribution_id"],
            batch_id=row["batch_id"],
            transaction_date=parse_date(row["transaction_date"], datetime.utcnow().date()),
            created_at=parse_datetime(row["created_at"]),
        )
