"""
SQLite-backed identifier allocator.

Each sequence is one row in the ``sequences`` table. Increment and read-back
run in the same IMMEDIATE transaction, which serialises concurrent writers.
"""

import aiosqlite

from sims.config import get_logger
from sims.core.exceptions import SequenceAllocationError, StorageError
from sims.core.interfaces.sequence_allocator import ISequenceAllocator
from sims.infrastructure.storage.sqlite.connection import get_transaction

logger = get_logger(__name__)


class SQLiteSequenceAllocator(ISequenceAllocator):
    """Atomic increment-and-read over the sequences table."""

    async def next_id(self, sequence_name: str) -> int:
        name = getattr(sequence_name, "value", sequence_name)
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO sequences (name, value) VALUES (?, 1)
                    ON CONFLICT(name) DO UPDATE SET value = value + 1
                    """,
                    (name,),
                )
                cursor = await conn.execute(
                    "SELECT value FROM sequences WHERE name = ?", (name,)
                )
                row = await cursor.fetchone()
                if row is None or row["value"] is None:
                    raise SequenceAllocationError(name, "counter row missing after increment")
        except SequenceAllocationError:
            raise
        except StorageError as e:
            raise SequenceAllocationError(name, e.message) from e
        except aiosqlite.Error as e:
            raise SequenceAllocationError(name, str(e)) from e

        logger.debug("sequence_allocated", sequence=name, value=row["value"])
        return int(row["value"])
