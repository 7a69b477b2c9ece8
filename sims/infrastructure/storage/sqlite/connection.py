"""
Async SQLite connection pool with aiosqlite.

Provides connection management with proper async context handling.
A transaction opened with ``get_transaction()`` is published in a context
variable, so every store call made inside the same block (including the
sequence allocator) runs on that connection and commits or rolls back with it.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar
from pathlib import Path

import aiosqlite

from sims.config import get_logger, get_settings
from sims.core.exceptions import DatabaseError, StorageUnavailableError

logger = get_logger(__name__)

_active_connection: ContextVar[aiosqlite.Connection | None] = ContextVar(
    "sims_active_connection", default=None
)


class ConnectionPool:
    """
    Async SQLite connection pool.

    Manages a pool of connections with configurable size. Connections run in
    autocommit mode; writes happen only inside explicit BEGIN IMMEDIATE
    transactions.
    """

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Initialize the connection pool."""
        async with self._lock:
            if self._initialized:
                return

            # Ensure database directory exists
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            try:
                for _ in range(self.pool_size):
                    conn = await self._create_connection()
                    self._connections.append(conn)
                    await self._pool.put(conn)
            except aiosqlite.Error as e:
                logger.error("connection_pool_init_failed", db_path=str(self.db_path), error=str(e))
                raise StorageUnavailableError("connect", str(e)) from e

            self._initialized = True
            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _create_connection(self) -> aiosqlite.Connection:
        """Create a new database connection with optimized settings."""
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)

        # Enable WAL mode for better concurrency
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")

        # Row factory for dict-like access
        conn.row_factory = aiosqlite.Row

        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Acquire a connection from the pool.

        Inside an open transaction the transaction's connection is returned.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        active = _active_connection.get()
        if active is not None:
            yield active
            return

        if not self._initialized:
            await self.initialize()

        conn = await self._pool.get()
        try:
            yield conn
        except aiosqlite.OperationalError as e:
            raise StorageUnavailableError("query", str(e)) from e
        except aiosqlite.IntegrityError as e:
            raise DatabaseError("query", str(e)) from e
        finally:
            await self._pool.put(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Acquire a connection with transaction context.

        Automatically commits on success, rolls back on exception. Nested calls
        join the outermost transaction, which alone commits.
        """
        active = _active_connection.get()
        if active is not None:
            yield active
            return

        async with self.acquire() as conn:
            token = _active_connection.set(conn)
            try:
                if not conn.in_transaction:
                    await conn.execute("BEGIN IMMEDIATE")
                yield conn
                await conn.commit()
            except aiosqlite.OperationalError as e:
                await self._safe_rollback(conn)
                raise StorageUnavailableError("transaction", str(e)) from e
            except aiosqlite.IntegrityError as e:
                await self._safe_rollback(conn)
                raise DatabaseError("transaction", str(e)) from e
            except Exception:
                await self._safe_rollback(conn)
                raise
            finally:
                _active_connection.reset(token)

    @staticmethod
    async def _safe_rollback(conn: aiosqlite.Connection) -> None:
        if conn.in_transaction:
            await conn.rollback()
            logger.debug("transaction_rolled_back")

    async def close(self) -> None:
        """Close all connections in the pool."""
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._initialized = False
            logger.info("connection_pool_closed")


# Global connection pool
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the global connection pool."""
    global _pool
    if _pool is None:
        settings = get_settings()
        pool = ConnectionPool(
            db_path=settings.storage.db_path,
            pool_size=settings.storage.pool_size,
            busy_timeout=settings.storage.busy_timeout,
        )
        await pool.initialize()
        _pool = pool
    return _pool


async def close_pool() -> None:
    """Close the global connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """
    Get a connection from the global pool.

    Convenience wrapper for common usage.
    """
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """
    Get a connection with transaction context.

    Convenience wrapper for transactional operations.
    """
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn


async def check_connection() -> None:
    """Run a trivial query; raises StorageUnavailableError when unreachable."""
    async with get_connection() as conn:
        await conn.execute("SELECT 1")
