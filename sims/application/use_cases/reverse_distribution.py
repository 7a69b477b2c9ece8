"""Reverse Distribution Use Case - correction of a recorded sale."""

from dataclasses import dataclass

from sims.application.dto.requests import ReverseDistributionRequest
from sims.application.dto.responses import (
    DistributionResponse,
    FinancialTransactionResponse,
    ReverseDistributionResponse,
)
from sims.config import get_logger
from sims.core.entities.distribution import (
    Distribution,
    DistributionStatus,
    FinancialTransaction,
    TransactionType,
)
from sims.core.entities.inventory import InventoryItem
from sims.core.exceptions import (
    DistributionNotFoundError,
    InvalidInputError,
    InventoryItemNotFoundError,
)
from sims.core.interfaces import (
    IDistributionStore,
    IFinancialStore,
    IInventoryStore,
    IUnitOfWork,
)
from sims.core.services.financial_aggregator import FinancialAggregator

logger = get_logger(__name__)

REVERSAL_CATEGORY = "Sales Reversal"


@dataclass
class ReverseDistributionResult:
    distribution: Distribution
    transaction: FinancialTransaction
    inventory_item: InventoryItem | None
    restocked_quantity: float = 0.0


class ReverseDistributionUseCase:
    """
    Undo a distribution's effects without deleting its record.

    Restocks the lot, books an offsetting expense and marks the distribution
    reversed, all in one transaction. When the lot has since been deleted the
    restock is skipped and the rest still applies. Deleting a distribution
    instead only purges the record.
    """

    def __init__(
        self,
        distribution_store: IDistributionStore | None = None,
        inventory_store: IInventoryStore | None = None,
        financial_store: IFinancialStore | None = None,
        unit_of_work: IUnitOfWork | None = None,
    ):
        self._distribution_store = distribution_store
        self._inventory_store = inventory_store
        self._financial_store = financial_store
        self._unit_of_work = unit_of_work

    async def _get_distribution_store(self) -> IDistributionStore:
        if self._distribution_store is None:
            from sims.infrastructure.storage.sqlite import get_distribution_store

            self._distribution_store = await get_distribution_store()
        return self._distribution_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from sims.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

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

    async def execute(
        self,
        distribution_id: int,
        request: ReverseDistributionRequest | None = None,
    ) -> ReverseDistributionResult:
        """Execute reverse distribution use case."""
        reason = request.reason if request else None
        logger.info("distribution_reversal_started", distribution_id=distribution_id, reason=reason)

        distribution_store = await self._get_distribution_store()
        inventory_store = await self._get_inventory_store()
        financial_store = await self._get_financial_store()

        async with self._get_unit_of_work().transaction():
            distribution = await distribution_store.get_distribution(distribution_id)
            if distribution is None:
                raise DistributionNotFoundError(distribution_id)
            if not distribution.is_active:
                raise InvalidInputError(
                    field="status",
                    message="distribution is already reversed",
                    value=distribution.status.value,
                )

            item = None
            restocked = 0.0
            try:
                item = await inventory_store.adjust_quantity(
                    distribution.inventory_item_id, distribution.quantity
                )
                restocked = distribution.quantity
            except InventoryItemNotFoundError:
                logger.warning(
                    "distribution_reversal_lot_missing",
                    distribution_id=distribution.id,
                    inventory_item_id=distribution.inventory_item_id,
                )

            description = f"Reversal of sale to {distribution.recipient_name}"
            if reason:
                description = f"{description}: {reason}"
            transaction = await financial_store.add_transaction(
                FinancialTransaction(
                    transaction_type=TransactionType.EXPENSE,
                    amount=distribution.total_amount,
                    description=description,
                    category=REVERSAL_CATEGORY,
                    distribution_id=distribution.id,
                )
            )

            distribution = await distribution_store.set_status(
                distribution.id, DistributionStatus.REVERSED
            )

        logger.info(
            "distribution_reversed",
            distribution_id=distribution.id,
            restocked=restocked,
            transaction_id=transaction.id,
        )

        return ReverseDistributionResult(
            distribution=distribution,
            transaction=transaction,
            inventory_item=item,
            restocked_quantity=restocked,
        )

    def to_response(self, result: ReverseDistributionResult) -> ReverseDistributionResponse:
        """Convert result to API response."""
        metrics = FinancialAggregator().distribution_metrics(
            result.distribution,
            {result.inventory_item.id: result.inventory_item} if result.inventory_item else {},
            {},
        )
        return ReverseDistributionResponse(
            distribution=DistributionResponse.from_entity(result.distribution, metrics),
            transaction=FinancialTransactionResponse.from_entity(result.transaction),
            restocked_quantity=result.restocked_quantity,
        )
