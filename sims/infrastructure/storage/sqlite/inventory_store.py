"""SQLite implementation of the inventory ledger."""

from datetime import datetime
from enum import Enum
from typing import Any

import aiosqlite

from sims.config import get_logger
from sims.core.entities.inventory import InventoryItem, ItemType
from sims.core.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    InventoryItemNotFoundError,
)
from sims.core.interfaces.inventory_store import IInventoryStore
from sims.core.interfaces.sequence_allocator import ISequenceAllocator, SequenceName
from sims.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from sims.infrastructure.storage.sqlite.rows import parse_datetime
from sims.infrastructure.storage.sqlite.sequence_allocator import SQLiteSequenceAllocator

logger = get_logger(__name__)

PROTECTED_FIELDS = {"id", "created_at"}

UPDATABLE_FIELDS = {
    "item_type",
    "name",
    "quantity",
    "unit_cost",
    "selling_price",
    "minimum_stock",
    "location",
    "supplier",
    "barcode",
    "notes",
    "batch_id",
    "batch_number",
    "product_id",
}


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of raw material and finished-goods storage."""

    def __init__(self, allocator: ISequenceAllocator | None = None):
        self._allocator = allocator or SQLiteSequenceAllocator()

    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """Create a new inventory item."""
        now = datetime.utcnow()
        item.created_at = now
        item.last_updated = now
        async with get_transaction() as conn:
            item.id = await self._allocator.next_id(SequenceName.INVENTORY)
            await conn.execute(
                """
                INSERT INTO inventory_items (
                    id, item_type, name, quantity, unit_cost, selling_price,
                    minimum_stock, location, supplier, barcode, notes,
                    batch_id, batch_number, product_id, last_updated, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.id,
                    item.item_type.value,
                    item.name,
                    item.quantity,
                    item.unit_cost,
                    item.selling_price,
                    item.minimum_stock,
                    item.location,
                    item.supplier,
                    item.barcode,
                    item.notes,
                    item.batch_id,
                    item.batch_number,
                    item.product_id,
                    item.last_updated.isoformat(),
                    item.created_at.isoformat(),
                ),
            )
        logger.info(
            "inventory_item_created",
            item_id=item.id,
            item_type=item.item_type.value,
            quantity=item.quantity,
        )
        return item

    async def get_item(self, item_id: int) -> InventoryItem | None:
        """Get inventory item by ID."""
        async with get_connection() as conn:
            row = await self._fetch_by_id(conn, item_id)
            return self._row_to_inventory_item(row) if row else None

    async def get_item_by_key(self, key: int | str) -> InventoryItem | None:
        """Get inventory item by numeric id, falling back to barcode."""
        async with get_connection() as conn:
            row = await self._fetch_by_key(conn, key)
            return self._row_to_inventory_item(row) if row else None

    async def list_items(self, item_type: ItemType | None = None) -> list[InventoryItem]:
        """List inventory items, optionally of one type."""
        async with get_connection() as conn:
            if item_type is None:
                cursor = await conn.execute(
                    "SELECT * FROM inventory_items ORDER BY item_type, name, id"
                )
            else:
                cursor = await conn.execute(
                    "SELECT * FROM inventory_items WHERE item_type = ? ORDER BY name, id",
                    (ItemType(item_type).value,),
                )
            rows = await cursor.fetchall()
            return [self._row_to_inventory_item(row) for row in rows]

    async def list_low_stock(self) -> list[InventoryItem]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_items
                WHERE quantity <= minimum_stock
                ORDER BY quantity - minimum_stock, name
                """
            )
            rows = await cursor.fetchall()
            return [self._row_to_inventory_item(row) for row in rows]

    async def adjust_quantity(
        self, item_id: int, delta: float, allow_negative: bool = False
    ) -> InventoryItem:
        """Atomically add delta to the item's quantity."""
        now = datetime.utcnow().isoformat()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_items
                SET quantity = quantity + ?, last_updated = ?
                WHERE id = ? AND (? OR quantity + ? >= 0)
                """,
                (delta, now, item_id, int(allow_negative), delta),
            )
            row = await self._fetch_by_id(conn, item_id)
            if cursor.rowcount == 0:
                if row is None:
                    raise InventoryItemNotFoundError(item_id)
                raise InsufficientStockError(
                    item_id=item_id,
                    requested=-delta,
                    available=float(row["quantity"]),
                )

        logger.info(
            "inventory_quantity_adjusted",
            item_id=item_id,
            delta=delta,
            quantity=row["quantity"],
        )
        return self._row_to_inventory_item(row)

    async def update_item(self, key: int | str, fields: dict[str, Any]) -> InventoryItem:
        """Apply a partial update; identifier fields are rejected."""
        protected = PROTECTED_FIELDS & set(fields)
        if protected:
            raise InvalidInputError(
                field=sorted(protected)[0], message="identifier fields cannot be updated"
            )
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(field=sorted(unknown)[0], message="unknown inventory field")

        values = {
            name: value.value if isinstance(value, Enum) else value
            for name, value in fields.items()
        }

        async with get_transaction() as conn:
            row = await self._fetch_by_key(conn, key)
            if row is None:
                raise InventoryItemNotFoundError(key)
            item_id = row["id"]

            if values:
                assignments = ", ".join(f"{name} = ?" for name in values)
                await conn.execute(
                    f"UPDATE inventory_items SET {assignments}, last_updated = ? WHERE id = ?",
                    (*values.values(), datetime.utcnow().isoformat(), item_id),
                )
                row = await self._fetch_by_id(conn, item_id)

        logger.info("inventory_item_updated", item_id=item_id, fields=sorted(values))
        return self._row_to_inventory_item(row)

    async def delete_item(self, key: int | str) -> bool:
        """Delete an item; batches and distributions referencing it are kept."""
        async with get_transaction() as conn:
            row = await self._fetch_by_key(conn, key)
            if row is None:
                return False
            cursor = await conn.execute("DELETE FROM inventory_items WHERE id = ?", (row["id"],))
            deleted = cursor.rowcount > 0

        logger.info("inventory_item_deleted", item_id=row["id"])
        return deleted

    @staticmethod
    async def _fetch_by_id(conn: aiosqlite.Connection, item_id: int) -> aiosqlite.Row | None:
        cursor = await conn.execute("SELECT * FROM inventory_items WHERE id = ?", (item_id,))
        return await cursor.fetchone()

    @classmethod
    async def _fetch_by_key(
        cls, conn: aiosqlite.Connection, key: int | str
    ) -> aiosqlite.Row | None:
        """Resolve a numeric id (int or digit string) first, then a barcode."""
        if isinstance(key, int) or (isinstance(key, str) and key.strip().isdigit()):
            row = await cls._fetch_by_id(conn, int(key))
            if row is not None or isinstance(key, int):
                return row

        cursor = await conn.execute(
            "SELECT * FROM inventory_items WHERE barcode = ? ORDER BY id LIMIT 1",
            (str(key).strip(),),
        )
        return await cursor.fetchone()

    @staticmethod
    def _row_to_inventory_item(row: aiosqlite.Row) -> InventoryItem:
        """Convert a database row to an InventoryItem entity."""
        return InventoryItem(
            id=row["id"],
            item_type=ItemType(row["item_type"]),
            name=row["name"],
            quantity=float(row["quantity"] or 0),
            unit_cost=row["unit_cost"],
            selling_price=row["selling_price"],
            minimum_stock=float(row["minimum_stock"] or 0),
            location=row["location"],
            supplier=row["supplier"],
            barcode=row["barcode"],
            notes=row["notes"] or "",
            batch_id=row["batch_id"],
            batch_number=row["batch_number"],
            product_id=row["product_id"],
            last_updated=parse_datetime(row["last_updated"]),
            created_at=parse_datetime(row["created_at"]),
        )
