"""Abstract interface for the inventory ledger."""

from abc import ABC, abstractmethod
from typing import Any

from sims.core.entities.inventory import InventoryItem, ItemType


class IInventoryStore(ABC):
    """Interface for raw material and finished-goods stock records."""

    @abstractmethod
    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """Create a new inventory item with an allocated id."""
        pass

    @abstractmethod
    async def get_item(self, item_id: int) -> InventoryItem | None:
        """Get inventory item by ID."""
        pass

    @abstractmethod
    async def get_item_by_key(self, key: int | str) -> InventoryItem | None:
        """Get inventory item by numeric id (int or numeric string) or barcode."""
        pass

    @abstractmethod
    async def list_items(self, item_type: ItemType | None = None) -> list[InventoryItem]:
        """List inventory items, optionally of one type."""
        pass

    @abstractmethod
    async def list_low_stock(self) -> list[InventoryItem]:
        """List items whose quantity is at or below their minimum_stock."""
        pass

    @abstractmethod
    async def adjust_quantity(
        self, item_id: int, delta: float, allow_negative: bool = False
    ) -> InventoryItem:
        """
        Atomically add delta (may be negative) to the item's quantity.

        Raises InventoryItemNotFoundError, or InsufficientStockError when the
        result would drop below zero and allow_negative is False.
        """
        pass

    @abstractmethod
    async def update_item(self, key: int | str, fields: dict[str, Any]) -> InventoryItem:
        """Apply a partial update; identifier fields are rejected."""
        pass

    @abstractmethod
    async def delete_item(self, key: int | str) -> bool:
        """Delete an item; returns whether a record was removed."""
        pass
