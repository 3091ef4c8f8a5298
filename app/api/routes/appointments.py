"""Appointment routes - API endpoints for appointment operations."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import Caller, DBSession
from app.events import NotificationDispatcher
from app.schemas.appointment import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentCancel,
    AppointmentFilters,
    AppointmentResponse,
    AppointmentList,
)
from app.schemas.common import Pagination
from app.services.appointment_service import AppointmentService

router = APIRouter()


@router.post("/", response_model=AppointmentResponse, status_code=201)
async def create_appointment(appointment_data: AppointmentCreate, caller: Caller, db: DBSession):
    """Book an appointment with a professional."""
    service = AppointmentService(db)
    appointment, event = await service.create_appointment(caller, appointment_data)
    await NotificationDispatcher(db).dispatch(event)
    return appointment


@router.get("/", response_model=AppointmentList)
async def get_appointments(
    filters: Annotated[AppointmentFilters, Query()],
    caller: Caller,
    db: DBSession,
):
    """List appointments, newest first."""
    service = AppointmentService(db)
    appointments, total = await service.get_appointments(caller, filters)
    return AppointmentList(
        appointments=appointments,
        pagination=Pagination.build(filters, total),
    )


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(appointment_id: int, caller: Caller, db: DBSession):
    """Get an appointment by ID."""
    service = AppointmentService(db)
    return await service.get_appointment(caller, appointment_id)


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    appointment_data: AppointmentUpdate,
    caller: Caller,
    db: DBSession,
):
    """Update an appointment (reschedule, change status or notes)."""
    service = AppointmentService(db)
    appointment, event = await service.update_appointment(caller, appointment_id, appointment_data)
    await NotificationDispatcher(db).dispatch(event)
    return appointment


@router.post("/{appointment_id}/cancel", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: int,
    caller: Caller,
    db: DBSession,
    cancel_data: AppointmentCancel | None = None,
):
    """Cancel an appointment (soft delete by changing status)."""
    service = AppointmentService(db)
    reason = cancel_data.reason if cancel_data else None
    appointment, event = await service.cancel_appointment(caller, appointment_id, reason)
    await NotificationDispatcher(db).dispatch(event)
    return appointment
