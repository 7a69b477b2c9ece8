"""
Create Distribution Use Case.

Records a sale of a finished-goods lot to a recipient. Stock check,
decrement, distribution record and revenue booking commit together.
"""

from dataclasses import dataclass

from sims.application.dto.requests import CreateDistributionRequest
from sims.application.dto.responses import (
    CreateDistributionResponse,
    DistributionResponse,
    FinancialTransactionResponse,
)
from sims.config import get_logger
from sims.core.entities.distribution import (
    Distribution,
    FinancialTransaction,
    TransactionType,
)
from sims.core.entities.inventory import InventoryItem, ItemType
from sims.core.entities.product import Product
from sims.core.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    InventoryItemNotFoundError,
)
from sims.core.interfaces import (
    IDistributionStore,
    IFinancialStore,
    IInventoryStore,
    IProductStore,
    IUnitOfWork,
)
from sims.core.services.financial_aggregator import FinancialAggregator

logger = get_logger(__name__)

SALES_CATEGORY = "Sales"


@dataclass
class CreateDistributionResult:
    """Result of recording a distribution."""

    distribution: Distribution
    transaction: FinancialTransaction
    inventory_item: InventoryItem
    product: Product | None = None


class CreateDistributionUseCase:
    """Sell finished goods and book the revenue."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        distribution_store: IDistributionStore | None = None,
        financial_store: IFinancialStore | None = None,
        product_store: IProductStore | None = None,
        unit_of_work: IUnitOfWork | None = None,
    ):
        self._inventory_store = inventory_store
        self._distribution_store = distribution_store
        self._financial_store = financial_store
        self._product_store = product_store
        self._unit_of_work = unit_of_work

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from sims.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_distribution_store(self) -> IDistributionStore:
        if self._distribution_store is None:
            from sims.infrastructure.storage.sqlite import get_distribution_store

            self._distribution_store = await get_distribution_store()
        return self._distribution_store

    async def _get_financial_store(self) -> IFinancialStore:
        if self._financial_store is None:
            from sims.infrastructure.storage.sqlite import get_financial_store

            self._financial_store = await get_financial_store()
        return self._financial_store

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
    def _validate(request: CreateDistributionRequest) -> None:
        if request.inventory_item_id is None:
            raise InvalidInputError(field="inventory_item_id", message="is required")
        if not request.recipient_name or not request.recipient_name.strip():
            raise InvalidInputError(field="recipient_name", message="is required")
        if request.quantity is None or request.quantity <= 0:
            raise InvalidInputError(
                field="quantity", message="must be greater than zero", value=request.quantity
            )
        if request.unit_price is None or request.unit_price <= 0:
            raise InvalidInputError(
                field="unit_price", message="must be greater than zero", value=request.unit_price
            )

    async def execute(self, request: CreateDistributionRequest) -> CreateDistributionResult:
        """Execute create distribution use case."""
        self._validate(request)
        recipient = request.recipient_name.strip()

        logger.info(
            "distribution_started",
            inventory_item_id=request.inventory_item_id,
            recipient=recipient,
            quantity=request.quantity,
        )

        inventory_store = await self._get_inventory_store()
        distribution_store = await self._get_distribution_store()
        financial_store = await self._get_financial_store()
        product_store = await self._get_product_store()

        async with self._get_unit_of_work().transaction():
            item = await inventory_store.get_item(request.inventory_item_id)
            if item is None:
                raise InventoryItemNotFoundError(request.inventory_item_id)
            if item.item_type != ItemType.FINISHED_PRODUCT:
                raise InvalidInputError(
                    field="inventory_item_id",
                    message="item is not a finished product",
                    value=request.inventory_item_id,
                )
            if request.quantity > item.quantity:
                raise InsufficientStockError(
                    item_id=item.id, requested=request.quantity, available=item.quantity
                )

            item = await inventory_store.adjust_quantity(item.id, -request.quantity)

            distribution = Distribution(
                inventory_item_id=item.id,
                recipient_name=recipient,
                recipient_contact=request.recipient_contact,
                quantity=request.quantity,
                unit_price=request.unit_price,
                notes=request.notes or "",
            )
            if request.distribution_date:
                distribution.distribution_date = request.distribution_date
            distribution = await distribution_store.create_distribution(distribution)

            transaction = await financial_store.add_transaction(
                FinancialTransaction(
                    transaction_type=TransactionType.REVENUE,
                    amount=distribution.total_amount,
                    description=f"Sale to {recipient}",
                    category=SALES_CATEGORY,
                    distribution_id=distribution.id,
                    transaction_date=distribution.distribution_date,
                )
            )

        product = None
        if item.product_id is not None:
            product = await product_store.get_product(item.product_id)

        logger.info(
            "distribution_recorded",
            distribution_id=distribution.id,
            transaction_id=transaction.id,
            total_amount=distribution.total_amount,
            remaining_stock=item.quantity,
        )

        return CreateDistributionResult(
            distribution=distribution,
            transaction=transaction,
            inventory_item=item,
            product=product,
        )

    def to_response(self, result: CreateDistributionResult) -> CreateDistributionResponse:
        """Convert result to API response."""
        metrics = FinancialAggregator().distribution_metrics(
            result.distribution,
            {result.inventory_item.id: result.inventory_item},
            {result.product.id: result.product} if result.product else {},
        )
        return CreateDistributionResponse(
            distribution=DistributionResponse.from_entity(result.distribution, metrics),
            transaction=FinancialTransactionResponse.from_entity(result.transaction),
            remaining_stock=result.inventory_item.quantity,
        )
