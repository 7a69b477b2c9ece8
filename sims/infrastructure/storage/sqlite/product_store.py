"""SQLite implementation of product catalogue storage."""

from datetime import datetime
from typing import Any

import aiosqlite

from sims.config import get_logger
from sims.core.entities.product import Product
from sims.core.exceptions import InvalidInputError, ProductNotFoundError
from sims.core.interfaces.product_store import IProductStore
from sims.core.interfaces.sequence_allocator import ISequenceAllocator, SequenceName
from sims.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from sims.infrastructure.storage.sqlite.rows import parse_date, parse_datetime, to_iso
from sims.infrastructure.storage.sqlite.sequence_allocator import SQLiteSequenceAllocator

logger = get_logger(__name__)

UPDATABLE_FIELDS = {
    "name",
    "category",
    "description",
    "idea_creation_date",
    "production_start_date",
    "is_active",
}


class SQLiteProductStore(IProductStore):
    """SQLite implementation of product storage."""

    def __init__(self, allocator: ISequenceAllocator | None = None):
        self._allocator = allocator or SQLiteSequenceAllocator()

    async def create_product(self, product: Product) -> Product:
        now = datetime.utcnow()
        product.created_at = now
        product.updated_at = now
        async with get_transaction() as conn:
            product.id = await self._allocator.next_id(SequenceName.PRODUCT)
            await conn.execute(
                """
                INSERT INTO products (
                    id, name, category, description, idea_creation_date,
                    production_start_date, is_active, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.id,
                    product.name,
                    product.category,
                    product.description,
                    to_iso(product.idea_creation_date),
                    to_iso(product.production_start_date),
                    int(product.is_active),
                    product.created_at.isoformat(),
                    product.updated_at.isoformat(),
                ),
            )
        logger.info("product_created", product_id=product.id, name=product.name)
        return product

    async def get_product(self, product_id: int) -> Product | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM products WHERE id = ?", (product_id,))
            row = await cursor.fetchone()
            return self._row_to_product(row) if row else None

    async def list_products(self, active_only: bool = False) -> list[Product]:
        query = "SELECT * FROM products"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY name, id"
        async with get_connection() as conn:
            cursor = await conn.execute(query)
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def update_product(self, product_id: int, fields: dict[str, Any]) -> Product:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            field = sorted(unknown)[0]
            raise InvalidInputError(field=field, message="field cannot be updated")

        async with get_transaction() as conn:
            existing = await conn.execute("SELECT 1 FROM products WHERE id = ?", (product_id,))
            if await existing.fetchone() is None:
                raise ProductNotFoundError(product_id)

            if fields:
                values = {key: self._to_column(key, value) for key, value in fields.items()}
                assignments = ", ".join(f"{key} = ?" for key in values)
                await conn.execute(
                    f"UPDATE products SET {assignments}, updated_at = ? WHERE id = ?",
                    (*values.values(), datetime.utcnow().isoformat(), product_id),
                )

            cursor = await conn.execute("SELECT * FROM products WHERE id = ?", (product_id,))
            row = await cursor.fetchone()

        logger.info("product_updated", product_id=product_id, fields=sorted(fields))
        return self._row_to_product(row)

    async def delete_product(self, product_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("product_deleted", product_id=product_id)
        return deleted

    @staticmethod
    def _to_column(key: str, value: Any) -> Any:
        if key == "is_active":
            return int(bool(value))
        if key.endswith("_date") and hasattr(value, "isoformat"):
            return value.isoformat()
        return value

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            description=row["description"],
            idea_creation_date=parse_date(row["idea_creation_date"]),
            production_start_date=parse_date(row["production_start_date"]),
            is_active=bool(row["is_active"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
