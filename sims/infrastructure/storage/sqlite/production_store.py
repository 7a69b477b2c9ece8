"""SQLite implementation of production batch storage."""

import json
from collections import defaultdict
from datetime import datetime

import aiosqlite

from sims.config import get_logger
from sims.core.entities.production import (
    CostType,
    FixedCosts,
    MiscellaneousCost,
    ProductionBatch,
    ProductionCost,
    RawMaterialUsage,
)
from sims.core.exceptions import InsufficientRemainingError, ProductionBatchNotFoundError
from sims.core.interfaces.production_store import IProductionStore
from sims.core.interfaces.sequence_allocator import ISequenceAllocator, SequenceName
from sims.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from sims.infrastructure.storage.sqlite.rows import load_json, parse_date, parse_datetime
from sims.infrastructure.storage.sqlite.sequence_allocator import SQLiteSequenceAllocator

logger = get_logger(__name__)


class SQLiteProductionStore(IProductionStore):
    """SQLite implementation of batches and their cost lines."""

    def __init__(self, allocator: ISequenceAllocator | None = None):
        self._allocator = allocator or SQLiteSequenceAllocator()

    async def create_batch(self, batch: ProductionBatch) -> ProductionBatch:
        """Persist a batch and its cost lines in one transaction."""
        now = datetime.utcnow()
        batch.created_at = now
        batch.updated_at = now

        async with get_transaction() as conn:
            batch.id = await self._allocator.next_id(SequenceName.PRODUCTION_BATCH)
            await conn.execute(
                """
                INSERT INTO production_batches (
                    id, batch_number, product_id, product_name,
                    quantity_produced, quantity_remaining, rejected_units,
                    raw_materials_used, fixed_costs, miscellaneous_costs,
                    total_cost, cost_per_unit, production_date, notes,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    batch.id,
                    batch.batch_number,
                    batch.product_id,
                    batch.product_name,
                    batch.quantity_produced,
                    batch.quantity_remaining,
                    batch.rejected_units,
                    json.dumps([usage.model_dump() for usage in batch.raw_materials_used]),
                    json.dumps(batch.fixed_costs.model_dump()),
                    json.dumps([misc.model_dump() for misc in batch.miscellaneous_costs]),
                    batch.total_cost,
                    batch.cost_per_unit,
                    batch.production_date.isoformat(),
                    batch.notes,
                    batch.created_at.isoformat(),
                    batch.updated_at.isoformat(),
                ),
            )

            for cost in batch.costs:
                cost.id = await self._allocator.next_id(SequenceName.PRODUCTION_COST)
                cost.batch_id = batch.id
                cost.created_at = now
                await conn.execute(
                    """
                    INSERT INTO production_costs (
                        id, batch_id, cost_type, item_name, quantity,
                        unit_cost, raw_material_id, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        cost.id,
                        cost.batch_id,
                        cost.cost_type.value,
                        cost.item_name,
                        cost.quantity,
                        cost.unit_cost,
                        cost.raw_material_id,
                        cost.created_at.isoformat(),
                    ),
                )

        logger.info(
            "production_batch_stored",
            batch_id=batch.id,
            batch_number=batch.batch_number,
            cost_lines=len(batch.costs),
        )
        return batch

    async def get_batch(self, batch_id: int) -> ProductionBatch | None:
        """Get batch by ID, cost lines included."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM production_batches WHERE id = ?", (batch_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            costs = await self._fetch_costs(conn, batch_id)
            return self._row_to_batch(row, costs)

    async def list_batches(self) -> list[ProductionBatch]:
        """List batches, newest production date first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM production_batches ORDER BY production_date DESC, id DESC"
            )
            rows = await cursor.fetchall()
            costs_by_batch: dict[int, list[ProductionCost]] = defaultdict(list)
            for cost in await self._fetch_costs(conn):
                costs_by_batch[cost.batch_id].append(cost)
            return [self._row_to_batch(row, costs_by_batch[row["id"]]) for row in rows]

    async def apply_import(
        self, batch_id: int, accepted_units: float, rejected_units: float
    ) -> ProductionBatch:
        """Move accepted + rejected units out of quantity_remaining."""
        released = accepted_units + rejected_units
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE production_batches
                SET quantity_remaining = quantity_remaining - ?,
                    rejected_units = rejected_units + ?,
                    updated_at = ?
                WHERE id = ? AND quantity_remaining >= ?
                """,
                (released, rejected_units, datetime.utcnow().isoformat(), batch_id, released),
            )
            if cursor.rowcount == 0:
                check = await conn.execute(
                    "SELECT quantity_remaining FROM production_batches WHERE id = ?",
                    (batch_id,),
                )
                row = await check.fetchone()
                if row is None:
                    raise ProductionBatchNotFoundError(batch_id)
                raise InsufficientRemainingError(
                    batch_id=batch_id,
                    requested=released,
                    remaining=float(row["quantity_remaining"]),
                )

            batch = await self.get_batch(batch_id)

        logger.info(
            "production_batch_counters_updated",
            batch_id=batch_id,
            accepted=accepted_units,
            rejected=rejected_units,
            remaining=batch.quantity_remaining,
        )
        return batch

    async def list_costs(self, batch_id: int | None = None) -> list[ProductionCost]:
        async with get_connection() as conn:
            return await self._fetch_costs(conn, batch_id)

    async def _fetch_costs(
        self, conn: aiosqlite.Connection, batch_id: int | None = None
    ) -> list[ProductionCost]:
        if batch_id is None:
            cursor = await conn.execute("SELECT * FROM production_costs ORDER BY batch_id, id")
        else:
            cursor = await conn.execute(
                "SELECT * FROM production_costs WHERE batch_id = ? ORDER BY id", (batch_id,)
            )
        rows = await cursor.fetchall()
        return [self._row_to_cost(row) for row in rows]

    @staticmethod
    def _row_to_cost(row: aiosqlite.Row) -> ProductionCost:
        return ProductionCost(
            id=row["id"],
            batch_id=row["batch_id"],
            cost_type=CostType(row["cost_type"]),
            item_name=row["item_name"],
            quantity=row["quantity"],
            unit_cost=float(row["unit_cost"] or 0),
            raw_material_id=row["raw_material_id"],
            created_at=parse_datetime(row["created_at"]),
        )

    @staticmethod
    def _row_to_batch(row: aiosqlite.Row, costs: list[ProductionCost]) -> ProductionBatch:
        """Convert a database row to a ProductionBatch entity."""
        return ProductionBatch(
            id=row["id"],
            batch_number=row["batch_number"],
            product_id=row["product_id"],
            product_name=row["product_name"],
            quantity_produced=float(row["quantity_produced"]),
            quantity_remaining=float(row["quantity_remaining"]),
            rejected_units=float(row["rejected_units"] or 0),
            raw_materials_used=[
                RawMaterialUsage(**usage) for usage in load_json(row["raw_materials_used"], [])
            ],
            fixed_costs=FixedCosts(**load_json(row["fixed_costs"], {})),
            miscellaneous_costs=[
                MiscellaneousCost(**misc) for misc in load_json(row["miscellaneous_costs"], [])
            ],
            costs=costs,
            total_cost=float(row["total_cost"] or 0),
            cost_per_unit=float(row["cost_per_unit"] or 0),
            production_date=parse_date(row["production_date"], datetime.utcnow().date()),
            notes=row["notes"] or "",
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
