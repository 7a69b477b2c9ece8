"""
Schema migrator for the SIMS database.

Migrations are ``vNNN_<name>.sql`` files in this directory, applied in version
order and recorded in ``schema_migrations`` with a checksum. An applied
migration whose file has since changed stops the run. The database file is
copied aside before pending migrations run and restored if one fails.

CLI:
    python -m sims.infrastructure.storage.sqlite.migrations.migrator [--status|--verify|--no-backup]
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from sims.config import get_logger, get_settings
from sims.core.exceptions import DatabaseError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
MIGRATION_FILE = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = [
    "schema_migrations",
    "sequences",
    "products",
    "inventory_items",
    "production_batches",
    "production_costs",
    "distributions",
    "financial_transactions",
    "payments",
]


@dataclass
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILE.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)


@dataclass
class MigrationResult:
    """An applied migration and how long it took."""

    version: str
    name: str
    execution_time_ms: int


def discover_migrations() -> list[MigrationInfo]:
    """Migration files in version order; badly named files are skipped."""
    migrations = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def _applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        # Fresh database: the tracking table arrives with v001
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


def _pending(
    migrations: list[MigrationInfo], applied: dict[str, str]
) -> list[MigrationInfo]:
    for migration in migrations:
        recorded = applied.get(migration.version)
        if recorded is not None and recorded != migration.checksum:
            raise DatabaseError(
                "migrate",
                f"migration v{migration.version} changed after it was applied",
            )
    return [m for m in migrations if m.version not in applied]


async def _apply(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.monotonic()
    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        elapsed_ms = int((time.monotonic() - start) * 1000)
        await conn.execute(
            """
            INSERT INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed_ms),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        raise DatabaseError(f"migration v{migration.version}", str(e)) from e

    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed_ms)
    return MigrationResult(
        version=migration.version, name=migration.name, execution_time_ms=elapsed_ms
    )


def create_backup(db_path: Path) -> Path:
    """Copy the database file aside before migrating."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{timestamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Apply every pending migration.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Copy an existing database aside while migrating

    Returns:
        The migrations applied by this run, empty when already current

    Raises:
        DatabaseError: A migration failed or an applied one was edited
    """
    db_path = Path(db_path) if db_path is not None else get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    existed = db_path.exists()
    backup_path = None
    results: list[MigrationResult] = []

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            pending = _pending(discover_migrations(), await _applied_checksums(conn))
            if not pending:
                logger.debug("database_schema_current", db_path=str(db_path))
                return results

            if create_backup_before and existed:
                backup_path = create_backup(db_path)
            for migration in pending:
                results.append(await _apply(conn, migration))
    except Exception as e:
        logger.error("database_initialization_failed", db_path=str(db_path), error=str(e))
        if backup_path is not None:
            restore_backup(db_path, backup_path)
        raise
    finally:
        if backup_path is not None and backup_path.exists():
            backup_path.unlink()

    logger.info("database_initialized", db_path=str(db_path), applied=len(results))
    return results


# Alias used by the application lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Current version plus applied and pending migration versions."""
    db_path = Path(db_path) if db_path is not None else get_settings().storage.db_path
    discovered = discover_migrations()

    applied: dict[str, str] = {}
    if db_path.exists():
        async with aiosqlite.connect(db_path) as conn:
            applied = await _applied_checksums(conn)

    return {
        "exists": db_path.exists(),
        "current_version": max(applied) if applied else None,
        "applied_migrations": sorted(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """SQLite integrity check, required tables, and batch counter consistency."""
    db_path = Path(db_path) if db_path is not None else get_settings().storage.db_path
    checks = []

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = await cursor.fetchone()
        checks.append({
            "check": "integrity",
            "status": "PASS" if integrity and integrity[0] == "ok" else "FAIL",
            "result": integrity[0] if integrity else None,
        })

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        existing = {row[0] for row in await cursor.fetchall()}
        missing = [t for t in REQUIRED_TABLES if t not in existing]
        checks.append({
            "check": "required_tables",
            "status": "PASS" if not missing else "FAIL",
            "missing": missing,
        })

        # Batch counters must never exceed the produced quantity
        if "production_batches" in existing:
            cursor = await conn.execute(
                """
                SELECT COUNT(*) FROM production_batches
                WHERE quantity_remaining + rejected_units > quantity_produced
                   OR quantity_remaining < 0
                """
            )
            violations = (await cursor.fetchone())[0]
            checks.append({
                "check": "batch_counters",
                "status": "PASS" if violations == 0 else "FAIL",
                "violations": violations,
            })

    return checks


def main() -> None:
    """CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="SIMS database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument("--verify", action="store_true", help="Verify schema integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    args = parser.parse_args()

    async def run() -> None:
        if args.status:
            status = await get_migration_status(args.db_path)
            for key, value in status.items():
                print(f"{key}: {value}")
        elif args.verify:
            for check in await verify_schema_integrity(args.db_path):
                print(f"[{check['status']}] {check['check']}")
        else:
            results = await initialize_database(
                args.db_path, create_backup_before=not args.no_backup
            )
            for result in results:
                print(f"v{result.version} {result.name} ({result.execution_time_ms}ms)")
            if not results:
                print("Schema is current")

    asyncio.run(run())


if __name__ == "__main__":
    main()
