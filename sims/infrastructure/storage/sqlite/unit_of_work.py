"""SQLite implementation of the transactional boundary used by use cases."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sims.core.interfaces.unit_of_work import IUnitOfWork
from sims.infrastructure.storage.sqlite.connection import get_transaction


class SQLiteUnitOfWork(IUnitOfWork):
    """Opens one IMMEDIATE transaction that nested store calls join."""

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with get_transaction():
            yield
