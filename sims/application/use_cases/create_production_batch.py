"""
Create Production Batch Use Case.

Turns a bill of raw materials plus fixed and miscellaneous costs into a
costed batch. Raw-material stock is checked for every line before any of it
is consumed, and the whole sequence runs in a single transaction:

1. Validate inputs (quantity_produced > 0, positive material quantities,
   no negative costs)
2. Resolve raw materials against the inventory ledger
3. Build cost lines and compute total_cost / cost_per_unit
4. Check then decrement raw-material stock
5. Persist the batch and its cost lines
6. Book the production expense
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date

from sims.application.dto.requests import CreateProductionBatchRequest
from sims.application.dto.responses import ProductionBatchResponse
from sims.config import Settings, get_logger, get_settings
from sims.core.entities.distribution import FinancialTransaction, TransactionType
from sims.core.entities.inventory import InventoryItem, ItemType
from sims.core.entities.production import (
    CostType,
    FixedCosts,
    MiscellaneousCost,
    ProductionBatch,
    ProductionCost,
    RawMaterialUsage,
)
from sims.core.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    InventoryItemNotFoundError,
)
from sims.core.interfaces import (
    IFinancialStore,
    IInventoryStore,
    IProductionStore,
    IProductStore,
    IUnitOfWork,
)
from sims.core.services.costing import (
    build_cost_lines,
    compute_cost_per_unit,
    consumption_from_cost_lines,
    fallback_cost_lines,
    generate_batch_number,
    sum_cost_lines,
)

logger = get_logger(__name__)

PRODUCTION_CATEGORY = "Production"


def _is_positive(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def _is_non_negative(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value >= 0


@dataclass
class CreateProductionBatchResult:
    """Result of creating a production batch."""

    batch: ProductionBatch
    expense: FinancialTransaction | None = None
    consumed: list[InventoryItem] = field(default_factory=list)


class CreateProductionBatchUseCase:
    """Record a production run with itemised cost accounting."""

    def __init__(
        self,
        production_store: IProductionStore | None = None,
        inventory_store: IInventoryStore | None = None,
        product_store: IProductStore | None = None,
        financial_store: IFinancialStore | None = None,
        unit_of_work: IUnitOfWork | None = None,
        settings: Settings | None = None,
    ):
        self._production_store = production_store
        self._inventory_store = inventory_store
        self._product_store = product_store
        self._financial_store = financial_store
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

    async def _get_financial_store(self) -> IFinancialStore:
        if self._financial_store is None:
            from sims.infrastructure.storage.sqlite import get_financial_store

            self._financial_store = await get_financial_store()
        return self._financial_store

    def _get_unit_of_work(self) -> IUnitOfWork:
        if self._unit_of_work is None:
            from sims.infrastructure.storage.sqlite import get_unit_of_work

            self._unit_of_work = get_unit_of_work()
        return self._unit_of_work

    @staticmethod
    def _validate(request: CreateProductionBatchRequest) -> None:
        """Range-check every quantity and cost before the ledger is touched."""
        if request.product_id is None:
            raise InvalidInputError(field="product_id", message="is required")
        if not _is_positive(request.quantity_produced):
            raise InvalidInputError(
                field="quantity_produced",
                message="must be greater than zero",
                value=request.quantity_produced,
            )

        for line in request.raw_materials_used:
            if not _is_positive(line.quantity):
                raise InvalidInputError(
                    field="raw_materials_used.quantity",
                    message="must be greater than zero",
                    value=line.quantity,
                )
            if line.unit_cost is not None and not _is_non_negative(line.unit_cost):
                raise InvalidInputError(
                    field="raw_materials_used.unit_cost",
                    message="cannot be negative",
                    value=line.unit_cost,
                )

        for name, value in request.fixed_costs.model_dump().items():
            if not _is_non_negative(value):
                raise InvalidInputError(
                    field=f"fixed_costs.{name}", message="cannot be negative", value=value
                )

        for misc in request.miscellaneous_costs:
            if not _is_non_negative(misc.amount):
                raise InvalidInputError(
                    field="miscellaneous_costs.amount",
                    message="cannot be negative",
                    value=misc.amount,
                )

        for cost in request.costs or []:
            if cost.quantity is not None and not _is_non_negative(cost.quantity):
                raise InvalidInputError(
                    field="costs.quantity", message="cannot be negative", value=cost.quantity
                )
            if not _is_non_negative(cost.unit_cost):
                raise InvalidInputError(
                    field="costs.unit_cost", message="cannot be negative", value=cost.unit_cost
                )
            # An absent quantity on a material-linked line consumes one unit
            if (
                cost.cost_type == CostType.RAW_MATERIAL
                and cost.raw_material_id is not None
                and cost.quantity == 0
            ):
                raise InvalidInputError(
                    field="costs.quantity",
                    message="must be greater than zero for a raw material",
                    value=cost.quantity,
                )

        if request.total_cost is not None and not _is_non_negative(request.total_cost):
            raise InvalidInputError(
                field="total_cost", message="cannot be negative", value=request.total_cost
            )

    async def execute(self, request: CreateProductionBatchRequest) -> CreateProductionBatchResult:
        """Execute create production batch use case."""
        self._validate(request)

        logger.info(
            "production_batch_started",
            product_id=request.product_id,
            quantity_produced=request.quantity_produced,
            raw_material_lines=len(request.raw_materials_used),
        )

        settings = self._settings or get_settings()
        allow_negative = settings.inventory.allow_negative_raw_material

        inventory_store = await self._get_inventory_store()
        production_store = await self._get_production_store()
        product_store = await self._get_product_store()
        financial_store = await self._get_financial_store()

        async with self._get_unit_of_work().transaction():
            ledger: dict[int, InventoryItem] = {}

            # 1. Resolve raw materials
            raw_materials = []
            for line in request.raw_materials_used:
                item = await self._load_raw_material(inventory_store, ledger, line.raw_material_id)
                raw_materials.append(
                    RawMaterialUsage(
                        raw_material_id=line.raw_material_id,
                        quantity=line.quantity,
                        unit_cost=line.unit_cost if line.unit_cost is not None else item.unit_cost,
                        material_name=line.material_name or item.name,
                    )
                )

            # 2. Cost lines: explicit lines win over structured inputs
            fixed_costs = FixedCosts(**request.fixed_costs.model_dump())
            misc_costs = [
                MiscellaneousCost(description=m.description, amount=m.amount)
                for m in request.miscellaneous_costs
            ]
            if request.costs:
                cost_lines = [ProductionCost(**c.model_dump()) for c in request.costs]
            else:
                cost_lines = build_cost_lines(raw_materials, fixed_costs, misc_costs)
            if not cost_lines:
                cost_lines = fallback_cost_lines(request.total_cost)

            total_cost = sum_cost_lines(cost_lines)
            cost_per_unit = compute_cost_per_unit(total_cost, request.quantity_produced)

            # 3. Consumption: structured lines, else material-linked cost lines
            consumption = raw_materials or consumption_from_cost_lines(cost_lines)
            required: dict[int, float] = defaultdict(float)
            for usage in consumption:
                await self._load_raw_material(inventory_store, ledger, usage.raw_material_id)
                required[usage.raw_material_id] += usage.quantity

            if not allow_negative:
                for material_id, quantity in required.items():
                    available = ledger[material_id].quantity
                    if available < quantity:
                        raise InsufficientStockError(
                            item_id=material_id, requested=quantity, available=available
                        )

            consumed = [
                await inventory_store.adjust_quantity(
                    material_id, -quantity, allow_negative=allow_negative
                )
                for material_id, quantity in required.items()
            ]

            # 4. Persist batch and cost lines
            product_name = request.product_name
            product = await product_store.get_product(request.product_id)
            if product is not None:
                product_name = product.name

            production_date = request.production_date or date.today()
            batch = ProductionBatch(
                batch_number=request.batch_number or generate_batch_number(production_date),
                product_id=request.product_id,
                product_name=product_name,
                quantity_produced=request.quantity_produced,
                quantity_remaining=request.quantity_produced,
                rejected_units=0,
                raw_materials_used=consumption,
                fixed_costs=fixed_costs,
                miscellaneous_costs=misc_costs,
                costs=cost_lines,
                total_cost=total_cost,
                cost_per_unit=cost_per_unit,
                notes=request.notes or "",
                production_date=production_date,
            )
            batch = await production_store.create_batch(batch)

            # 5. Production expense
            expense = None
            if total_cost > 0:
                expense = await financial_store.add_transaction(
                    FinancialTransaction(
                        transaction_type=TransactionType.EXPENSE,
                        amount=total_cost,
                        description=f"Production batch {batch.batch_number}",
                        category=PRODUCTION_CATEGORY,
                        batch_id=batch.id,
                        transaction_date=batch.production_date,
                    )
                )

        logger.info(
            "production_batch_created",
            batch_id=batch.id,
            batch_number=batch.batch_number,
            total_cost=total_cost,
            cost_per_unit=cost_per_unit,
        )

        return CreateProductionBatchResult(batch=batch, expense=expense, consumed=consumed)

    @staticmethod
    async def _load_raw_material(
        store: IInventoryStore,
        ledger: dict[int, InventoryItem],
        material_id: int,
    ) -> InventoryItem:
        if material_id not in ledger:
            item = await store.get_item(material_id)
            if item is None:
                raise InventoryItemNotFoundError(material_id)
            if item.item_type != ItemType.RAW_MATERIAL:
                raise InvalidInputError(
                    field="raw_material_id",
                    message="item is not a raw material",
                    value=material_id,
                )
            ledger[material_id] = item
        return ledger[material_id]

    def to_response(self, result: CreateProductionBatchResult) -> ProductionBatchResponse:
        """Convert result to API response."""
        return ProductionBatchResponse.from_entity(result.batch)
