"""SQLite implementation of payment storage."""

from datetime import datetime
from typing import Any

import aiosqlite

from sims.config import get_logger
from sims.core.entities.payment import Payment
from sims.core.exceptions import InvalidInputError, PaymentNotFoundError
from sims.core.interfaces.payment_store import IPaymentStore
from sims.core.interfaces.sequence_allocator import ISequenceAllocator, SequenceName
from sims.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from sims.infrastructure.storage.sqlite.rows import parse_date, parse_datetime
from sims.infrastructure.storage.sqlite.sequence_allocator import SQLiteSequenceAllocator

logger = get_logger(__name__)

UPDATABLE_FIELDS = {
    "distribution_id",
    "recipient_name",
    "recipient_type",
    "amount_paid",
    "payment_date",
    "payment_method",
    "proof_reference",
    "notes",
}


class SQLitePaymentStore(IPaymentStore):
    """SQLite implementation of payment persistence."""

    def __init__(self, allocator: ISequenceAllocator | None = None):
        self._allocator = allocator or SQLiteSequenceAllocator()

    async def create_payment(self, payment: Payment) -> Payment:
        payment.created_at = datetime.utcnow()
        async with get_transaction() as conn:
            payment.id = await self._allocator.next_id(SequenceName.PAYMENT)
            await conn.execute(
                """
                INSERT INTO payments (
                    id, distribution_id, recipient_name, recipient_type,
                    amount_paid, payment_date, payment_method,
                    proof_reference, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payment.id,
                    payment.distribution_id,
                    payment.recipient_name,
                    payment.recipient_type,
                    payment.amount_paid,
                    payment.payment_date.isoformat(),
                    payment.payment_method,
                    payment.proof_reference,
                    payment.notes,
                    payment.created_at.isoformat(),
                ),
            )
        logger.info(
            "payment_stored",
            payment_id=payment.id,
            recipient=payment.recipient_name,
            amount=payment.amount_paid,
        )
        return payment

    async def get_payment(self, payment_id: int) -> Payment | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM payments WHERE id = ?", (payment_id,))
            row = await cursor.fetchone()
            return self._row_to_payment(row) if row else None

    async def list_payments(
        self,
        distribution_id: int | None = None,
        recipient_name: str | None = None,
    ) -> list[Payment]:
        query = "SELECT * FROM payments WHERE 1 = 1"
        params: list = []
        if distribution_id is not None:
            query += " AND distribution_id = ?"
            params.append(distribution_id)
        if recipient_name:
            query += " AND recipient_name = ?"
            params.append(recipient_name)
        query += " ORDER BY payment_date DESC, id DESC"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_payment(row) for row in rows]

    async def update_payment(self, payment_id: int, fields: dict[str, Any]) -> Payment:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(field=sorted(unknown)[0], message="field cannot be updated")

        values = {
            name: value.isoformat() if name == "payment_date" and value is not None else value
            for name, value in fields.items()
        }

        async with get_transaction() as conn:
            if values:
                assignments = ", ".join(f"{name} = ?" for name in values)
                cursor = await conn.execute(
                    f"UPDATE payments SET {assignments} WHERE id = ?",
                    (*values.values(), payment_id),
                )
                if cursor.rowcount == 0:
                    raise PaymentNotFoundError(payment_id)
            payment = await self.get_payment(payment_id)
            if payment is None:
                raise PaymentNotFoundError(payment_id)

        logger.info("payment_updated", payment_id=payment_id, fields=sorted(values))
        return payment

    async def delete_payment(self, payment_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM payments WHERE id = ?", (payment_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("payment_deleted", payment_id=payment_id)
        return deleted

    @staticmethod
    def _row_to_payment(row: aiosqlite.Row) -> Payment:
        return Payment(
            id=row["id"],
            distribution_id=row["distribution_id"],
            recipient_name=row["recipient_name"],
            recipient_type=row["recipient_type"] or "distributor",
            amount_paid=float(row["amount_paid"] or 0),
            payment_date=parse_date(row["payment_date"], datetime.utcnow().date()),
            payment_method=row["payment_method"] or "cash",
            proof_reference=row["proof_reference"],
            notes=row["notes"] or "",
            created_at=parse_datetime(row["created_at"]),
        )
