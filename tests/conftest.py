"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from sims.core.entities import (
    Distribution,
    InventoryItem,
    ItemType,
    Payment,
    Product,
    ProductionBatch,
)


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    mock.inventory.default_location = "Main Warehouse"
    mock.inventory.allow_negative_raw_material = False
    return mock


@pytest.fixture
async def sqlite_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated temp-file database behind the global pool and fresh store singletons."""
    from sims.infrastructure.storage import sqlite as sqlite_pkg
    from sims.infrastructure.storage.sqlite import connection as conn_module
    from sims.infrastructure.storage.sqlite.migrations.migrator import initialize_database

    await initialize_database(temp_db_path, create_backup_before=False)

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        conn_module._pool = None
        sqlite_pkg.reset_stores()
        yield temp_db_path
        await conn_module.close_pool()
        sqlite_pkg.reset_stores()


@pytest.fixture
def sample_product() -> Product:
    return Product(id=1, name="Rose Soap", category="Soap")


@pytest.fixture
def raw_material() -> InventoryItem:
    """Olive oil, 100 units at 2.0 each."""
    return InventoryItem(
        id=10,
        item_type=ItemType.RAW_MATERIAL,
        name="Olive oil",
        quantity=100.0,
        unit_cost=2.0,
        minimum_stock=5.0,
    )


@pytest.fixture
def finished_lot() -> InventoryItem:
    """60 finished units costing 1.5 each, linked to product 1."""
    return InventoryItem(
        id=20,
        item_type=ItemType.FINISHED_PRODUCT,
        name="Rose Soap",
        quantity=60.0,
        unit_cost=1.5,
        selling_price=5.0,
        batch_id=1,
        batch_number="BATCH-20260115-ABCDEF",
        product_id=1,
    )


@pytest.fixture
def sample_batch() -> ProductionBatch:
    return ProductionBatch(
        id=1,
        batch_number="BATCH-20260115-ABCDEF",
        product_id=1,
        product_name="Rose Soap",
        quantity_produced=100.0,
        quantity_remaining=100.0,
        total_cost=150.0,
        cost_per_unit=1.5,
        production_date=date(2026, 1, 15),
    )


@pytest.fixture
def sample_distribution() -> Distribution:
    return Distribution(
        id=1,
        inventory_item_id=20,
        recipient_name="Corner Shop",
        quantity=60.0,
        unit_price=5.0,
        distribution_date=date(2026, 1, 20),
    )


@pytest.fixture
def sample_payment() -> Payment:
    return Payment(
        id=1,
        recipient_name="Corner Shop",
        amount_paid=100.0,
        payment_date=date(2026, 1, 25),
    )
