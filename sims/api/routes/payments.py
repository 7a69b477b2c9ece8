"""Payment recovery endpoints."""

from fastapi import APIRouter, Depends, status

from sims.api.dependencies import (
    get_pay_store,
    get_record_payment_use_case,
    get_recovery_summary_use_case,
    get_update_payment_use_case,
)
from sims.application.dto.requests import RecordPaymentRequest, UpdatePaymentRequest
from sims.application.dto.responses import ApiResponse, ErrorResponse, PaymentResponse
from sims.application.use_cases import (
    RecordPaymentUseCase,
    RecoverySummaryUseCase,
    UpdatePaymentUseCase,
)
from sims.core.entities.payment import RecoverySummary
from sims.core.exceptions import PaymentNotFoundError
from sims.infrastructure.storage.sqlite import SQLitePaymentStore

router = APIRouter(prefix="/api/payments", tags=["payments"])
recovery_router = APIRouter(prefix="/api/recovery-summary", tags=["payments"])


@router.get("", response_model=ApiResponse[list[PaymentResponse]])
async def list_payments(
    distribution_id: int | None = None,
    recipient_name: str | None = None,
    store: SQLitePaymentStore = Depends(get_pay_store),
) -> ApiResponse[list[PaymentResponse]]:
    """List payments, optionally filtered by distribution or recipient."""
    payments = await store.list_payments(
        distribution_id=distribution_id, recipient_name=recipient_name
    )
    return ApiResponse(data=[PaymentResponse.from_entity(p) for p in payments])


@router.post(
    "",
    response_model=ApiResponse[PaymentResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def record_payment(
    request: RecordPaymentRequest,
    use_case: RecordPaymentUseCase = Depends(get_record_payment_use_case),
) -> ApiResponse[PaymentResponse]:
    payment = await use_case.execute(request)
    return ApiResponse(data=use_case.to_response(payment), message="Payment recorded")


@router.put(
    "/{payment_id}",
    response_model=ApiResponse[PaymentResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_payment(
    payment_id: int,
    request: UpdatePaymentRequest,
    use_case: UpdatePaymentUseCase = Depends(get_update_payment_use_case),
) -> ApiResponse[PaymentResponse]:
    payment = await use_case.execute(payment_id, request)
    return ApiResponse(data=use_case.to_response(payment), message="Payment updated")


@router.delete(
    "/{payment_id}",
    response_model=ApiResponse[None],
    responses={404: {"model": ErrorResponse}},
)
async def delete_payment(
    payment_id: int,
    store: SQLitePaymentStore = Depends(get_pay_store),
) -> ApiResponse[None]:
    if not await store.delete_payment(payment_id):
        raise PaymentNotFoundError(payment_id)
    return ApiResponse(message="Payment deleted")


@recovery_router.get("", response_model=ApiResponse[RecoverySummary])
async def recovery_summary(
    use_case: RecoverySummaryUseCase = Depends(get_recovery_summary_use_case),
) -> ApiResponse[RecoverySummary]:
    """Amounts distributed versus recovered, per recipient."""
    return ApiResponse(data=await use_case.execute())
