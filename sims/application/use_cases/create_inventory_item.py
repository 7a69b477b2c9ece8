"""Create Inventory Item Use Case."""

from sims.application.dto.requests import CreateInventoryItemRequest
from sims.application.dto.responses import InventoryItemResponse
from sims.config import Settings, get_logger, get_settings
from sims.core.entities.inventory import InventoryItem
from sims.core.exceptions import InvalidInputError
from sims.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


class CreateInventoryItemUseCase:
    """Validate and record a raw material or finished-goods item."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        settings: Settings | None = None,
    ):
        self._inventory_store = inventory_store
        self._settings = settings

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from sims.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, request: CreateInventoryItemRequest) -> InventoryItem:
        """Execute create inventory item use case."""
        if request.item_type is None:
            raise InvalidInputError(field="item_type", message="is required")
        if not request.name or not request.name.strip():
            raise InvalidInputError(field="name", message="is required")
        if request.quantity is None:
            raise InvalidInputError(field="quantity", message="is required")
        if request.quantity < 0:
            raise InvalidInputError(
                field="quantity", message="cannot be negative", value=request.quantity
            )

        settings = self._settings or get_settings()
        item = InventoryItem(
            item_type=request.item_type,
            name=request.name.strip(),
            quantity=request.quantity,
            unit_cost=request.unit_cost,
            selling_price=request.selling_price,
            minimum_stock=request.minimum_stock,
            location=request.location or settings.inventory.default_location,
            supplier=request.supplier,
            barcode=request.barcode,
            notes=request.notes or "",
            batch_id=request.batch_id,
            batch_number=request.batch_number,
            product_id=request.product_id,
        )

        store = await self._get_inventory_store()
        item = await store.create_item(item)

        logger.info(
            "inventory_item_registered",
            item_id=item.id,
            item_type=item.item_type.value,
            name=item.name,
        )
        return item

    def to_response(self, item: InventoryItem) -> InventoryItemResponse:
        return InventoryItemResponse.from_entity(item)
