"""API tests for payment and recovery endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from sims.api.dependencies import (
    get_pay_store,
    get_record_payment_use_case,
    get_recovery_summary_use_case,
    get_update_payment_use_case,
)
from sims.application.use_cases.record_payment import RecordPaymentUseCase
from sims.application.use_cases.recovery_summary import RecoverySummaryUseCase
from sims.application.use_cases.update_payment import UpdatePaymentUseCase
from sims.core.exceptions import InvalidInputError, PaymentNotFoundError
from sims.core.services.recovery import build_recovery_summary


@pytest.fixture
def payment_store(overrides, sample_payment):
    store = AsyncMock()
    store.list_payments.return_value = [sample_payment]
    store.delete_payment.return_value = True
    overrides[get_pay_store] = lambda: store
    return store


@pytest.fixture
def record_use_case(overrides, sample_payment):
    uc = AsyncMock(spec=RecordPaymentUseCase)
    uc.execute.return_value = sample_payment
    uc.to_response.return_value = RecordPaymentUseCase().to_response(sample_payment)
    overrides[get_record_payment_use_case] = lambda: uc
    return uc


@pytest.fixture
def update_use_case(overrides, sample_payment):
    uc = AsyncMock(spec=UpdatePaymentUseCase)
    updated = sample_payment.model_copy(update={"amount_paid": 150.0})
    uc.execute.return_value = updated
    uc.to_response.return_value = UpdatePaymentUseCase().to_response(updated)
    overrides[get_update_payment_use_case] = lambda: uc
    return uc


class TestPaymentsAPI:
    async def test_list_with_filters(self, client: AsyncClient, payment_store):
        response = await client.get(
            "/api/payments", params={"distribution_id": 1, "recipient_name": "Corner Shop"}
        )

        assert response.status_code == 200
        assert response.json()["data"][0]["amount_paid"] == 100.0
        payment_store.list_payments.assert_awaited_once_with(
            distribution_id=1, recipient_name="Corner Shop"
        )

    async def test_record_accepts_string_amount(self, client: AsyncClient, record_use_case):
        response = await client.post(
            "/api/payments", json={"recipientName": "Corner Shop", "amountPaid": "100"}
        )

        assert response.status_code == 201
        request = record_use_case.execute.await_args.args[0]
        assert request.amount_paid == "100"

    async def test_record_invalid_amount(self, client: AsyncClient, record_use_case):
        record_use_case.execute.side_effect = InvalidInputError(
            field="amount_paid", message="must be a number"
        )

        response = await client.post(
            "/api/payments", json={"recipient_name": "Corner Shop", "amount_paid": "lots"}
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "amount_paid"

    async def test_update(self, client: AsyncClient, update_use_case):
        response = await client.put("/api/payments/1", json={"amount_paid": 150})

        assert response.status_code == 200
        assert response.json()["data"]["amount_paid"] == 150.0

    async def test_update_missing(self, client: AsyncClient, update_use_case):
        update_use_case.execute.side_effect = PaymentNotFoundError(4)

        response = await client.put("/api/payments/4", json={"notes": "x"})

        assert response.status_code == 404
        assert response.json()["error"] == "PAYMENT_NOT_FOUND"

    async def test_delete(self, client: AsyncClient, payment_store):
        assert (await client.delete("/api/payments/1")).status_code == 200

        payment_store.delete_payment.return_value = False
        assert (await client.delete("/api/payments/1")).status_code == 404

    async def test_recovery_summary(
        self, client: AsyncClient, overrides, sample_distribution, sample_payment
    ):
        uc = AsyncMock(spec=RecoverySummaryUseCase)
        uc.execute.return_value = build_recovery_summary([sample_distribution], [sample_payment])
        overrides[get_recovery_summary_use_case] = lambda: uc

        response = await client.get("/api/recovery-summary")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_outstanding"] == 200.0
        assert data["recovery_rate"] == 33.33
        assert data["recipients"][0]["recipient_name"] == "Corner Shop"
