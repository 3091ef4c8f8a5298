"""Payment service - Recording payments and gateway status updates."""

import logfire
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth import CallerContext
from app.events import PaymentInitiated
from app.exceptions import AuthorizationError, InvalidStateTransition, NotFoundError
from app.models.appointment import Appointment
from app.models.payment import Payment, PaymentStatus
from app.models.professional import Professional
from app.models.user import UserRole
from app.schemas.payment import PaymentCreate, PaymentFilters, PaymentUpdate


class PaymentService:
    """Service class for payment operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_payment(
        self, ctx: CallerContext, data: PaymentCreate
    ) -> tuple[Payment, PaymentInitiated]:
        """Record a PENDING payment for an appointment without one."""
        result = await self.db.execute(
            select(Appointment)
            .where(Appointment.id == data.appointment_id)
            .options(
                selectinload(Appointment.customer),
                selectinload(Appointment.professional),
                selectinload(Appointment.payment),
            )
            .execution_options(populate_existing=True)
        )
        appointment = result.scalar_one_or_none()
        if not appointment:
            raise NotFoundError("Appointment not found")

        if appointment.customer_id != ctx.user_id and not ctx.is_admin:
            raise AuthorizationError()

        if appointment.payment:
            raise InvalidStateTransition("Payment already exists for this appointment")

        payment = Payment(**data.model_dump(), status=PaymentStatus.PENDING)
        self.db.add(payment)
        await self.db.flush()
        await self.db.refresh(payment)

        customer_name = appointment.customer.name or appointment.customer.email
        logfire.info(
            "payment_created",
            payment_id=payment.id,
            appointment_id=appointment.id,
            amount=payment.amount,
            method=payment.method.value,
        )
        event = PaymentInitiated(
            notify_user_id=appointment.professional.user_id,
            message=(
                f"Payment of {payment.amount:.2f} initiated for appointment with {customer_name}"
            ),
            payment_id=payment.id,
            appointment_id=appointment.id,
        )
        return payment, event

    async def update_payment(self, payment_id: int, data: PaymentUpdate) -> Payment:
        """Apply a gateway status update."""
        payment = await self.db.get(Payment, payment_id)
        if not payment:
            raise NotFoundError("Payment not found")

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(payment, field, value)
        await self.db.flush()
        await self.db.refresh(payment)
        logfire.info("payment_updated", payment_id=payment.id, status=payment.status.value)
        return payment

    async def get_payments(
        self, ctx: CallerContext, filters: PaymentFilters
    ) -> tuple[list[Payment], int]:
        """Payments on the caller's bookings, or on their clients' bookings for professionals."""
        if ctx.role == UserRole.PROFESSIONAL:
            own_professional = select(Professional.id).where(Professional.user_id == ctx.user_id)
            conditions = [Appointment.professional_id.in_(own_professional)]
        else:
            conditions = [Appointment.customer_id == ctx.user_id]

        if filters.status:
            conditions.append(Payment.status == filters.status)

        total = await self.db.scalar(
            select(func.count(Payment.id)).join(Payment.appointment).where(*conditions)
        )
        result = await self.db.execute(
            select(Payment)
            .join(Payment.appointment)
            .where(*conditions)
            .options(
                selectinload(Payment.appointment).selectinload(Appointment.customer),
                selectinload(Payment.appointment)
                .selectinload(Appointment.professional)
                .selectinload(Professional.user),
            )
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .execution_options(populate_existing=True)
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return list(result.scalars().all()), total or 0
