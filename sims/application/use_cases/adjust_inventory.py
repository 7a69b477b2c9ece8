"""Adjust Inventory Use Case - manual stock correction by a signed delta."""

from sims.application.dto.requests import AdjustInventoryRequest
from sims.application.dto.responses import InventoryItemResponse
from sims.config import get_logger
from sims.core.entities.inventory import InventoryItem
from sims.core.exceptions import InvalidInputError, InventoryItemNotFoundError
from sims.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


class AdjustInventoryUseCase:
    """Apply a manual quantity adjustment through the atomic ledger update."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from sims.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, key: int | str, request: AdjustInventoryRequest) -> InventoryItem:
        """Execute adjust inventory use case."""
        if request.delta is None or request.delta == 0:
            raise InvalidInputError(field="delta", message="must be a non-zero number")

        store = await self._get_inventory_store()
        item = await store.get_item_by_key(key)
        if item is None:
            raise InventoryItemNotFoundError(key)

        logger.info(
            "inventory_adjustment_started",
            item_id=item.id,
            delta=request.delta,
            reason=request.reason,
        )

        item = await store.adjust_quantity(
            item.id, request.delta, allow_negative=request.allow_negative
        )

        logger.info("inventory_adjustment_complete", item_id=item.id, quantity=item.quantity)
        return item

    def to_response(self, item: InventoryItem) -> InventoryItemResponse:
        return InventoryItemResponse.from_entity(item)
