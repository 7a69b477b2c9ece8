"""Fixtures shared by use case tests."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest


class FakeUnitOfWork:
    """Records transaction boundaries without touching storage."""

    def __init__(self):
        self.entered = 0
        self.committed = 0
        self.rolled_back = 0

    @asynccontextmanager
    async def transaction(self):
        self.entered += 1
        try:
            yield
        except Exception:
            self.rolled_back += 1
            raise
        self.committed += 1


@pytest.fixture
def unit_of_work() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def test_settings():
    settings = MagicMock()
    settings.inventory.default_location = "Main Warehouse"
    settings.inventory.allow_negative_raw_material = False
    return settings


@pytest.fixture
def mock_inventory_store():
    return AsyncMock()


@pytest.fixture
def mock_production_store():
    return AsyncMock()


@pytest.fixture
def mock_product_store():
    store = AsyncMock()
    store.get_product.return_value = None
    return store


@pytest.fixture
def mock_distribution_store():
    return AsyncMock()


@pytest.fixture
def mock_financial_store():
    store = AsyncMock()

    async def add_transaction(txn):
        txn.id = 1
        return txn

    store.add_transaction.side_effect = add_transaction
    return store


@pytest.fixture
def mock_payment_store():
    return AsyncMock()
