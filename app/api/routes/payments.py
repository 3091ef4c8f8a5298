"""Payment routes - API endpoints for payment operations."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import AdminCaller, Caller, DBSession
from app.events import NotificationDispatcher
from app.schemas.common import Pagination
from app.schemas.payment import (
    PaymentCreate,
    PaymentUpdate,
    PaymentFilters,
    PaymentResponse,
    PaymentList,
)
from app.services.payment_service import PaymentService

router = APIRouter()


@router.post("/", response_model=PaymentResponse, status_code=201)
async def create_payment(payment_data: PaymentCreate, caller: Caller, db: DBSession):
    """Record a payment for an appointment."""
    service = PaymentService(db)
    payment, event = await service.create_payment(caller, payment_data)
    await NotificationDispatcher(db).dispatch(event)
    return payment


@router.get("/", response_model=PaymentList)
async def get_payments(filters: Annotated[PaymentFilters, Query()], caller: Caller, db: DBSession):
    """List payments visible to the caller."""
    service = PaymentService(db)
    payments, total = await service.get_payments(caller, filters)
    return PaymentList(payments=payments, pagination=Pagination.build(filters, total))


@router.patch("/{payment_id}", response_model=PaymentResponse)
async def update_payment(payment_id: int, payment_data: PaymentUpdate, admin: AdminCaller, db: DBSession):
    """Apply a payment gateway status update."""
    service = PaymentService(db)
    return await service.update_payment(payment_id, payment_data)
