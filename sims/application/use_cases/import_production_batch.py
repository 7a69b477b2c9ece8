"""
Import Production Batch Use Case.

Quality-control release: accepted units of a batch become a new
finished-goods lot, rejected units are written off against the batch.
A batch can be imported repeatedly until nothing remains.
"""

from dataclasses import dataclass

from sims.application.dto.requests import ImportBatchRequest
from sims.application.dto.responses import ImportBatchResponse, InventoryItemResponse
from sims.config import Settings, get_logger, get_settings
from sims.core.entities.inventory import InventoryItem, ItemType
from sims.core.entities.production import ProductionBatch
from sims.core.exceptions import (
    InsufficientRemainingError,
    InvalidInputError,
    ProductionBatchNotFoundError,
)
from sims.core.interfaces import IInventoryStore, IProductionStore, IProductStore, IUnitOfWork

logger = get_logger(__name__)


def parse_batch_id(batch_id: int | str) -> int:
    """Accept an int or a numeric string; anything else is a bad id format."""
    if isinstance(batch_id, bool):
        raise InvalidInputError(field="batch_id", message="must be numeric", value=batch_id)
    if isinstance(batch_id, int):
        return batch_id
    if isinstance(batch_id, str) and batch_id.strip().isdigit():
        return int(batch_id.strip())
    raise InvalidInputError(field="batch_id", message="must be numeric", value=batch_id)


@dataclass
class ImportBatchResult:
    """Result of a QC import."""

    inventory_item: InventoryItem
    batch: ProductionBatch
    accepted_units: float
    rejected_units: float


class ImportProductionBatchUseCase:
    """Release accepted batch units into sellable inventory."""

    def __init__(
        self,
        production_store: IProductionStore | None = None,
        inventory_store: IInventoryStore | None = None,
        product_store: IProductStore | None = None,
        unit_of_work: IUnitOfWork | None = None,
        settings: Settings | None = None,
    ):
        self._production_store = production_store
        self._inventory_store = inventory_store
        self._product_store = product_store
        self._unit_of_work = unit_of_work
        self._settings = settings

    async def _get_production_store(self) -> IProductionStore:
        if self._production_store is None:
            from sims.infrastructure.storage.sqlite import get_production_store

            self._production_store = await get_production_store()
        return self._production_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from sims.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from sims.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    def _get_unit_of_work(self) -> IUnitOfWork:
        if self._unit_of_work is None:
            from sims.infrastructure.storage.sqlite import get_unit_of_work

            self._unit_of_work = get_unit_of_work()
        return self._unit_of_work

    @staticmethod
    def _validate(request: ImportBatchRequest) -> None:
        if request.rejected_units is None or request.rejected_units < 0:
            raise InvalidInputError(
                field="rejected_units", message="cannot be negative", value=request.rejected_units
            )
        if request.accepted_units is None or request.accepted_units <= 0:
            raise InvalidInputError(
                field="accepted_units",
                message="must be greater than zero",
                value=request.accepted_units,
            )
        if request.selling_price is None or request.selling_price <= 0:
            raise InvalidInputError(
                field="selling_price",
                message="must be greater than zero",
                value=request.selling_price,
            )

    async def execute(self, batch_id: int | str, request: ImportBatchRequest) -> ImportBatchResult:
        """Execute QC import use case."""
        parsed_id = parse_batch_id(batch_id)
        self._validate(request)

        accepted = request.accepted_units
        rejected = request.rejected_units
        settings = self._settings or get_settings()

        logger.info(
            "batch_import_started",
            batch_id=parsed_id,
            accepted_units=accepted,
            rejected_units=rejected,
        )

        production_store = await self._get_production_store()
        inventory_store = await self._get_inventory_store()
        product_store = await self._get_product_store()

        async with self._get_unit_of_work().transaction():
            batch = await production_store.get_batch(parsed_id)
            if batch is None:
                raise ProductionBatchNotFoundError(parsed_id)

            if accepted + rejected > batch.quantity_remaining:
                raise InsufficientRemainingError(
                    batch_id=parsed_id,
                    requested=accepted + rejected,
                    remaining=batch.quantity_remaining,
                )

            batch = await production_store.apply_import(parsed_id, accepted, rejected)

            product = await product_store.get_product(batch.product_id)
            name = (product.name if product else None) or batch.product_name
            notes = f"Imported from batch {batch.batch_number}. Rejected units: {rejected:g}"
            if request.notes:
                notes = f"{notes}. {request.notes}"

            item = await inventory_store.create_item(
                InventoryItem(
                    item_type=ItemType.FINISHED_PRODUCT,
                    name=name or f"Batch {batch.batch_number}",
                    quantity=accepted,
                    unit_cost=batch.cost_per_unit,
                    selling_price=request.selling_price,
                    location=request.location or settings.inventory.default_location,
                    batch_id=batch.id,
                    batch_number=batch.batch_number,
                    product_id=batch.product_id,
                    notes=notes,
                )
            )

        logger.info(
            "batch_import_complete",
            batch_id=batch.id,
            inventory_item_id=item.id,
            quantity_remaining=batch.quantity_remaining,
            rejected_units=batch.rejected_units,
        )

        return ImportBatchResult(
            inventory_item=item,
            batch=batch,
            accepted_units=accepted,
            rejected_units=rejected,
        )

    def to_response(self, result: ImportBatchResult) -> ImportBatchResponse:
        """Convert result to API response."""
        return ImportBatchResponse(
            inventory_item=InventoryItemResponse.from_entity(result.inventory_item),
            batch_id=result.batch.id,
            batch_number=result.batch.batch_number,
            quantity_remaining=result.batch.quantity_remaining,
            rejected_units=result.batch.rejected_units,
            accepted_units=result.accepted_units,
            rejected_in_import=result.rejected_units,
        )
