"""
Payment recovery reconciliation.

Matches payments to distributed value by recipient name. Payments from a
recipient with no distribution land in a single synthetic row so that the
per-recipient outstanding amounts always add up to the global figure.
"""

from collections import defaultdict

from sims.core.entities.distribution import Distribution
from sims.core.entities.payment import (
    UNMATCHED_RECIPIENT,
    Payment,
    RecipientBalance,
    RecoverySummary,
)


def _recovery_rate(distributed: float, recovered: float) -> float:
    if not distributed:
        return 0.0
    return round(recovered / distributed * 100, 2)


def build_recovery_summary(
    distributions: list[Distribution],
    payments: list[Payment],
) -> RecoverySummary:
    """
    Reduce distributions and payments into global and per-recipient balances.

    Only completed distributions count; reversed ones are excluded. Outstanding
    amounts are not clamped, so overpayment shows as a negative balance.
    """
    active = [d for d in distributions if d.is_active]

    distributed_by_recipient: dict[str, float] = defaultdict(float)
    count_by_recipient: dict[str, int] = defaultdict(int)
    for distribution in active:
        distributed_by_recipient[distribution.recipient_name] += distribution.total_amount or 0.0
        count_by_recipient[distribution.recipient_name] += 1

    paid_by_recipient: dict[str, float] = defaultdict(float)
    type_by_recipient: dict[str, str] = {}
    unmatched_paid = 0.0
    for payment in payments:
        amount = payment.amount_paid or 0.0
        if payment.recipient_name in distributed_by_recipient:
            paid_by_recipient[payment.recipient_name] += amount
            type_by_recipient.setdefault(payment.recipient_name, payment.recipient_type)
        else:
            unmatched_paid += amount

    recipients = [
        RecipientBalance(
            recipient_name=name,
            recipient_type=type_by_recipient.get(name, "distributor"),
            total_distributed=distributed,
            total_paid=paid_by_recipient[name],
            outstanding=distributed - paid_by_recipient[name],
            distribution_count=count_by_recipient[name],
        )
        for name, distributed in distributed_by_recipient.items()
    ]
    recipients.sort(key=lambda row: row.outstanding, reverse=True)

    if unmatched_paid:
        recipients.append(
            RecipientBalance(
                recipient_name=UNMATCHED_RECIPIENT,
                recipient_type="unmatched",
                total_paid=unmatched_paid,
                outstanding=-unmatched_paid,
                unmatched=True,
            )
        )

    total_distributed = sum(distributed_by_recipient.values())
    total_recovered = sum(p.amount_paid or 0.0 for p in payments)

    return RecoverySummary(
        total_distributed=total_distributed,
        total_recovered=total_recovered,
        total_outstanding=total_distributed - total_recovered,
        recovery_rate=_recovery_rate(total_distributed, total_recovered),
        recipients=recipients,
    )
