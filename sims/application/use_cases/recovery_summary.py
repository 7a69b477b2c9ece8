"""Recovery Summary Use Case - distributed value versus payments received."""

from sims.config import get_logger
from sims.core.entities.payment import RecoverySummary
from sims.core.interfaces import IDistributionStore, IPaymentStore
from sims.core.services.recovery import build_recovery_summary

logger = get_logger(__name__)


class RecoverySummaryUseCase:
    """Load distributions and payments and reconcile them per recipient."""

    def __init__(
        self,
        distribution_store: IDistributionStore | None = None,
        payment_store: IPaymentStore | None = None,
    ):
        self._distribution_store = distribution_store
        self._payment_store = payment_store

    async def _get_distribution_store(self) -> IDistributionStore:
        if self._distribution_store is None:
            from sims.infrastructure.storage.sqlite import get_distribution_store

            self._distribution_store = await get_distribution_store()
        return self._distribution_store

    async def _get_payment_store(self) -> IPaymentStore:
        if self._payment_store is None:
            from sims.infrastructure.storage.sqlite import get_payment_store

            self._payment_store = await get_payment_store()
        return self._payment_store

    async def execute(self) -> RecoverySummary:
        distributions = await (await self._get_distribution_store()).list_distributions()
        payments = await (await self._get_payment_store()).list_payments()

        summary = build_recovery_summary(distributions, payments)
        logger.info(
            "recovery_summary_built",
            recipients=len(summary.recipients),
            total_outstanding=summary.total_outstanding,
            recovery_rate=summary.recovery_rate,
        )
        return summary
