"""Inventory domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_LOCATION = "Main Warehouse"


class ItemType(str, Enum):
    """Kinds of stock record held by the ledger."""

    RAW_MATERIAL = "raw_material"
    FINISHED_PRODUCT = "finished_product"


class StockStatus(str, Enum):
    LOW = "Low Stock"
    IN_STOCK = "In Stock"


class InventoryItem(BaseModel):
    """A raw material or a finished-goods lot with its current quantity."""

    id: int | None = None
    item_type: ItemType
    name: str
    quantity: float = 0.0
    unit_cost: float | None = None
    selling_price: float | None = None  # finished goods only
    minimum_stock: float = 0.0
    location: str = DEFAULT_LOCATION
    supplier: str | None = None
    barcode: str | None = None
    notes: str = ""
    batch_id: int | None = None  # weak ref → production_batches.id
    batch_number: str | None = None
    product_id: int | None = None  # weak ref → products.id
    last_updated: datetime = Field(default_factory=datetime.utcnow)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_finished(self) -> bool:
        return self.item_type == ItemType.FINISHED_PRODUCT

    @property
    def stock_status(self) -> StockStatus:
        if self.quantity <= self.minimum_stock:
            return StockStatus.LOW
        return StockStatus.IN_STOCK

    @property
    def valuation_price(self) -> float:
        """Finished goods are valued at selling price, raw materials at cost."""
        if self.is_finished:
            return self.selling_price or self.unit_cost or 0.0
        return self.unit_cost or 0.0

    @property
    def inventory_value(self) -> float:
        return (self.quantity or 0.0) * self.valuation_price
