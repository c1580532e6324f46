"""Appointment router - FastAPI endpoints for appointment operations"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...dependencies import get_scheduling_service
from ..scheduling.service import SchedulingService
from .schemas import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentStatus,
    AppointmentUpdate,
    PendingPaymentResponse,
    appointment_response,
)
from .service import AppointmentService

router = APIRouter(prefix="/citas", tags=["Appointments"])


def get_appointment_service(
    db: Session = Depends(get_db),
    scheduling: SchedulingService = Depends(get_scheduling_service),
) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db, scheduling)


@router.get("", response_model=AppointmentListResponse)
async def get_appointments(
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=500),
    estado: Optional[AppointmentStatus] = Query(None),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Get appointments ordered by date, optionally filtered by status"""
    return service.list_appointments(page, limit, estado)


@router.get("/pendientes-pago", response_model=PendingPaymentResponse)
async def get_pending_payment(service: AppointmentService = Depends(get_appointment_service)):
    """Done appointments without a registered payment"""
    return service.get_pending_payment()


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str, service: AppointmentService = Depends(get_appointment_service)
):
    return appointment_response(service.get_appointment(appointment_id))


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate, service: AppointmentService = Depends(get_appointment_service)
):
    """Create an appointment; 409 when the slot is taken unless overlap is allowed"""
    return appointment_response(service.create_appointment(data))


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Update an appointment (status change, reschedule, payment flag)"""
    return appointment_response(service.update_appointment(appointment_id, data))


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: str, service: AppointmentService = Depends(get_appointment_service)
):
    """Delete an appointment row"""
    return service.delete_appointment(appointment_id)
