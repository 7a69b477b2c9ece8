"""Tests for payment recording and updates."""

import pytest

from sims.application.dto.requests import RecordPaymentRequest, UpdatePaymentRequest
from sims.application.use_cases.record_payment import RecordPaymentUseCase, parse_amount
from sims.application.use_cases.update_payment import UpdatePaymentUseCase
from sims.core.exceptions import InvalidInputError, PaymentNotFoundError


class TestParseAmount:
    @pytest.mark.parametrize(
        "value,expected",
        [(100, 100.0), (0, 0.0), ("250.50", 250.5), (" 42 ", 42.0), (12.25, 12.25)],
    )
    def test_valid(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.parametrize("value", [None, True, "", "abc", "nan", "inf", -1, "-0.5", [1]])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_amount(value)
        assert exc_info.value.details["field"] == "amount_paid"


@pytest.fixture
def record_use_case(mock_payment_store):
    async def create_payment(payment):
        payment.id = 7
        return payment

    mock_payment_store.create_payment.side_effect = create_payment
    return RecordPaymentUseCase(payment_store=mock_payment_store)


class TestRecordPaymentUseCase:
    async def test_defaults(self, record_use_case):
        payment = await record_use_case.execute(
            RecordPaymentRequest(recipient_name="  Corner Shop ", amount_paid="100")
        )

        assert payment.id == 7
        assert payment.recipient_name == "Corner Shop"
        assert payment.amount_paid == 100.0
        assert payment.recipient_type == "distributor"
        assert payment.payment_method == "cash"
        assert payment.notes == ""

    async def test_camel_case_fields(self, record_use_case):
        request = RecordPaymentRequest.model_validate(
            {
                "recipientName": "Corner Shop",
                "amountPaid": 55,
                "paymentMethod": "bank_transfer",
                "paymentDate": "2026-02-01",
                "distributionId": 3,
            }
        )
        payment = await record_use_case.execute(request)

        assert payment.payment_method == "bank_transfer"
        assert str(payment.payment_date) == "2026-02-01"
        assert payment.distribution_id == 3

    async def test_requires_recipient(self, record_use_case, mock_payment_store):
        with pytest.raises(InvalidInputError):
            await record_use_case.execute(RecordPaymentRequest(recipient_name=" ", amount_paid=5))
        mock_payment_store.create_payment.assert_not_awaited()

    async def test_rejects_negative_amount(self, record_use_case):
        with pytest.raises(InvalidInputError):
            await record_use_case.execute(
                RecordPaymentRequest(recipient_name="Corner Shop", amount_paid=-5)
            )

    async def test_to_response(self, record_use_case):
        payment = await record_use_case.execute(
            RecordPaymentRequest(recipient_name="Corner Shop", amount_paid=10)
        )
        response = record_use_case.to_response(payment)
        assert response.id == 7
        assert response.amount_paid == 10.0


@pytest.fixture
def update_use_case(mock_payment_store, sample_payment):
    mock_payment_store.get_payment.return_value = sample_payment

    async def update_payment(payment_id, fields):
        return sample_payment.model_copy(update=fields)

    mock_payment_store.update_payment.side_effect = update_payment
    return UpdatePaymentUseCase(payment_store=mock_payment_store)


class TestUpdatePaymentUseCase:
    async def test_partial_update(self, update_use_case, mock_payment_store):
        payment = await update_use_case.execute(1, UpdatePaymentRequest(amount_paid="150"))

        mock_payment_store.update_payment.assert_awaited_once_with(1, {"amount_paid": 150.0})
        assert payment.amount_paid == 150.0
        assert payment.recipient_name == "Corner Shop"

    async def test_null_on_required_column(self, update_use_case, mock_payment_store):
        with pytest.raises(InvalidInputError) as exc_info:
            await update_use_case.execute(1, UpdatePaymentRequest(payment_method=None))
        assert exc_info.value.details["field"] == "payment_method"
        mock_payment_store.update_payment.assert_not_awaited()

    async def test_optional_column_can_be_cleared(self, update_use_case, mock_payment_store):
        await update_use_case.execute(1, UpdatePaymentRequest(proof_reference=None))
        mock_payment_store.update_payment.assert_awaited_once_with(1, {"proof_reference": None})

    async def test_invalid_amount(self, update_use_case):
        with pytest.raises(InvalidInputError):
            await update_use_case.execute(1, UpdatePaymentRequest(amount_paid="lots"))

    async def test_not_found(self, update_use_case, mock_payment_store):
        mock_payment_store.get_payment.return_value = None
        with pytest.raises(PaymentNotFoundError):
            await update_use_case.execute(99, UpdatePaymentRequest(notes="late"))
        mock_payment_store.update_payment.assert_not_awaited()
