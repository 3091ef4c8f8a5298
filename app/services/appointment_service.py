"""Appointment service - Booking, conflict detection and status transitions."""

from datetime import datetime, timedelta

import logfire
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth import CallerContext
from app.events import AppointmentCancelled, AppointmentRequested, AppointmentUpdated
from app.exceptions import AuthorizationError, ConflictError, InvalidStateTransition, NotFoundError
from app.models.appointment import (
    ACTIVE_STATUSES,
    ALLOWED_TRANSITIONS,
    Appointment,
    AppointmentStatus,
)
from app.models.payment import PaymentStatus
from app.models.professional import Professional
from app.schemas.appointment import AppointmentCreate, AppointmentFilters, AppointmentUpdate

APPOINTMENT_CONFLICT = "Appointment time conflicts with existing booking"


def conflict_window(date_time: datetime, duration: int) -> tuple[datetime, datetime]:
    """Range of existing start times that clash with a booking at ``date_time``.

    Symmetric around the requested start: ``[date_time - duration, date_time + duration]``.
    """
    delta = timedelta(minutes=duration)
    return date_time - delta, date_time + delta


class AppointmentService:
    """Service class for appointment operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _with_details(self):
        return (
            selectinload(Appointment.customer),
            selectinload(Appointment.professional).selectinload(Professional.user),
            selectinload(Appointment.payment),
        )

    async def get_appointment_by_id(self, appointment_id: int) -> Appointment | None:
        """Get an appointment with customer, professional and payment loaded."""
        result = await self.db.execute(
            select(Appointment)
            .where(Appointment.id == appointment_id)
            .options(*self._with_details())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _require_appointment(self, appointment_id: int) -> Appointment:
        appointment = await self.get_appointment_by_id(appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    def _authorize(self, ctx: CallerContext, appointment: Appointment) -> None:
        """Only the customer, the professional or an admin may act on an appointment."""
        is_customer = appointment.customer_id == ctx.user_id
        is_professional = appointment.professional.user_id == ctx.user_id
        if not (is_customer or is_professional or ctx.is_admin):
            logfire.warn(
                "appointment_access_denied",
                appointment_id=appointment.id,
                user_id=ctx.user_id,
            )
            raise AuthorizationError()

    def _actor_name(self, ctx: CallerContext, appointment: Appointment) -> str:
        if appointment.customer_id == ctx.user_id:
            return appointment.customer.name or appointment.customer.email
        if appointment.professional.user_id == ctx.user_id:
            user = appointment.professional.user
            return user.name or user.email
        return "an administrator"

    def _other_party(self, ctx: CallerContext, appointment: Appointment) -> int:
        """Recipient of a notification about a change made by ``ctx``."""
        if appointment.customer_id == ctx.user_id:
            return appointment.professional.user_id
        return appointment.customer_id

    async def _lock_professional(self, professional_id: int) -> Professional | None:
        # Row lock serializes concurrent bookings for the same professional
        result = await self.db.execute(
            select(Professional)
            .where(Professional.id == professional_id)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def find_conflict(
        self,
        professional_id: int,
        date_time: datetime,
        duration: int,
        exclude_id: int | None = None,
    ) -> Appointment | None:
        """Find an active booking for the professional starting inside the conflict window."""
        window_start, window_end = conflict_window(date_time, duration)
        query = select(Appointment).where(
            Appointment.professional_id == professional_id,
            Appointment.date_time >= window_start,
            Appointment.date_time <= window_end,
            Appointment.status.in_(ACTIVE_STATUSES),
        )

        if exclude_id is not None:
            query = query.where(Appointment.id != exclude_id)

        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def _ensure_no_conflict(
        self,
        professional_id: int,
        date_time: datetime,
        duration: int,
        exclude_id: int | None = None,
    ) -> None:
        conflict = await self.find_conflict(professional_id, date_time, duration, exclude_id)
        if conflict:
            logfire.warn(
                "appointment_conflict",
                professional_id=professional_id,
                requested=date_time.isoformat(),
                conflicting_id=conflict.id,
            )
            raise ConflictError(APPOINTMENT_CONFLICT)

    def _refund_if_paid(self, appointment: Appointment) -> None:
        payment = appointment.payment
        if payment and payment.status == PaymentStatus.PAID:
            payment.status = PaymentStatus.REFUNDED
            logfire.info("payment_refunded", payment_id=payment.id, appointment_id=appointment.id)

    async def create_appointment(
        self, ctx: CallerContext, data: AppointmentCreate
    ) -> tuple[Appointment, AppointmentRequested]:
        """Book a PENDING appointment for the caller."""
        professional = await self._lock_professional(data.professional_id)
        if not professional or not professional.is_active:
            raise NotFoundError("Professional not found or inactive")

        await self._ensure_no_conflict(data.professional_id, data.date_time, data.duration)

        appointment = Appointment(
            **data.model_dump(),
            customer_id=ctx.user_id,
            status=AppointmentStatus.PENDING,
        )
        self.db.add(appointment)
        await self.db.flush()

        appointment = await self._require_appointment(appointment.id)
        customer_name = appointment.customer.name or appointment.customer.email
        logfire.info(
            "appointment_created",
            appointment_id=appointment.id,
            professional_id=professional.id,
            customer_id=ctx.user_id,
        )
        event = AppointmentRequested(
            notify_user_id=professional.user_id,
            message=f"New appointment request from {customer_name} for {data.service_type}",
            appointment_id=appointment.id,
        )
        return appointment, event

    async def update_appointment(
        self, ctx: CallerContext, appointment_id: int, data: AppointmentUpdate
    ) -> tuple[Appointment, AppointmentUpdated]:
        """Reschedule, change status or edit notes of an appointment."""
        appointment = await self._require_appointment(appointment_id)
        self._authorize(ctx, appointment)

        # notes may be cleared with null; the other columns are not nullable
        update_data = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field == "notes"
        }
        new_status = update_data.get("status")
        status_changed = new_status is not None and new_status != appointment.status

        if status_changed:
            if new_status not in ALLOWED_TRANSITIONS[appointment.status]:
                raise InvalidStateTransition(
                    f"Cannot change appointment from {appointment.status.value} to {new_status.value}"
                )

        rescheduling = "date_time" in update_data or "duration" in update_data
        if rescheduling and appointment.status.is_terminal:
            raise InvalidStateTransition(
                f"Cannot reschedule a {appointment.status.value.lower()} appointment"
            )

        # A REJECTED booking going back to PENDING must claim its slot again
        reactivating = (
            status_changed
            and new_status in ACTIVE_STATUSES
            and appointment.status not in ACTIVE_STATUSES
        )

        if rescheduling or reactivating:
            await self._lock_professional(appointment.professional_id)
            await self._ensure_no_conflict(
                appointment.professional_id,
                update_data.get("date_time", appointment.date_time),
                update_data.get("duration", appointment.duration),
                exclude_id=appointment.id,
            )

        for field, value in update_data.items():
            setattr(appointment, field, value)

        if status_changed and new_status == AppointmentStatus.CANCELLED:
            self._refund_if_paid(appointment)

        await self.db.flush()

        event = AppointmentUpdated(
            notify_user_id=self._other_party(ctx, appointment),
            message=f"Appointment updated by {self._actor_name(ctx, appointment)}",
            appointment_id=appointment.id,
        )
        logfire.info(
            "appointment_updated",
            appointment_id=appointment.id,
            fields=sorted(update_data),
            user_id=ctx.user_id,
        )
        return await self._require_appointment(appointment.id), event

    async def cancel_appointment(
        self, ctx: CallerContext, appointment_id: int, reason: str | None = None
    ) -> tuple[Appointment, AppointmentCancelled]:
        """Cancel an appointment and refund a settled payment."""
        appointment = await self._require_appointment(appointment_id)
        self._authorize(ctx, appointment)

        if appointment.status == AppointmentStatus.CANCELLED:
            raise InvalidStateTransition("Appointment is already cancelled")
        if appointment.status == AppointmentStatus.COMPLETED:
            raise InvalidStateTransition("Cannot cancel a completed appointment")

        appointment.status = AppointmentStatus.CANCELLED
        if reason:
            appointment.notes = f"{appointment.notes or ''}\n\nCancellation reason: {reason}".strip()
        self._refund_if_paid(appointment)
        await self.db.flush()

        message = f"Appointment cancelled by {self._actor_name(ctx, appointment)}"
        if reason:
            message += f". Reason: {reason}"
        event = AppointmentCancelled(
            notify_user_id=self._other_party(ctx, appointment),
            message=message,
            appointment_id=appointment.id,
            reason=reason,
        )
        logfire.info("appointment_cancelled", appointment_id=appointment.id, user_id=ctx.user_id)
        return await self._require_appointment(appointment.id), event

    async def get_appointment(self, ctx: CallerContext, appointment_id: int) -> Appointment:
        """Get an appointment the caller takes part in."""
        appointment = await self._require_appointment(appointment_id)
        self._authorize(ctx, appointment)
        return appointment

    async def get_appointments(
        self, ctx: CallerContext, filters: AppointmentFilters
    ) -> tuple[list[Appointment], int]:
        """Filtered, paginated appointments, newest first."""
        conditions = []

        if filters.professional_id:
            conditions.append(Appointment.professional_id == filters.professional_id)
        if filters.customer_id:
            conditions.append(Appointment.customer_id == filters.customer_id)
        if filters.status:
            conditions.append(Appointment.status == filters.status)
        if filters.start_date:
            conditions.append(Appointment.date_time >= filters.start_date)
        if filters.end_date:
            conditions.append(Appointment.date_time <= filters.end_date)

        # Non-admins only see their own bookings, on either side
        if not ctx.is_admin:
            own_professional = select(Professional.id).where(Professional.user_id == ctx.user_id)
            conditions.append(
                or_(
                    Appointment.customer_id == ctx.user_id,
                    Appointment.professional_id.in_(own_professional),
                )
            )

        total = await self.db.scalar(
            select(func.count()).select_from(Appointment).where(*conditions)
        )
        result = await self.db.execute(
            select(Appointment)
            .where(*conditions)
            .options(*self._with_details())
            .order_by(Appointment.date_time.desc(), Appointment.created_at.desc())
            .execution_options(populate_existing=True)
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return list(result.scalars().all()), total or 0

