"""Tests for inventory entities."""

from sims.core.entities.inventory import (
    DEFAULT_LOCATION,
    InventoryItem,
    ItemType,
    StockStatus,
)


class TestInventoryItem:
    def test_defaults(self):
        item = InventoryItem(item_type=ItemType.RAW_MATERIAL, name="Lye")
        assert item.quantity == 0.0
        assert item.location == DEFAULT_LOCATION == "Main Warehouse"
        assert item.notes == ""
        assert item.minimum_stock == 0.0

    def test_low_stock_at_threshold(self):
        item = InventoryItem(
            item_type=ItemType.RAW_MATERIAL, name="Lye", quantity=5, minimum_stock=5
        )
        assert item.stock_status == StockStatus.LOW
        assert item.stock_status.value == "Low Stock"

    def test_in_stock_above_threshold(self):
        item = InventoryItem(
            item_type=ItemType.RAW_MATERIAL, name="Lye", quantity=6, minimum_stock=5
        )
        assert item.stock_status == StockStatus.IN_STOCK

    def test_raw_material_valued_at_cost(self, raw_material):
        raw_material.selling_price = 99.0
        assert raw_material.inventory_value == 200.0

    def test_finished_goods_valued_at_selling_price(self, finished_lot):
        assert finished_lot.inventory_value == 300.0

    def test_finished_goods_fall_back_to_cost(self, finished_lot):
        finished_lot.selling_price = None
        assert finished_lot.inventory_value == 90.0

    def test_missing_prices_value_zero(self):
        item = InventoryItem(item_type=ItemType.FINISHED_PRODUCT, name="Soap", quantity=4)
        assert item.inventory_value == 0.0
