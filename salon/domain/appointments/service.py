"""Appointment service - Business logic for appointment operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import STATUS_CANCELLED, Appointment, Client, Service
from ...shared.schemas import Pagination
from ..scheduling.service import SchedulingService
from .repository import AppointmentRepository
from .schemas import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentUpdate,
    PendingPaymentResponse,
    appointment_response,
)

logger = logging.getLogger(__name__)

# Update payload field -> Appointment column
UPDATE_COLUMNS = {
    "clienteId": "client_id",
    "servicioId": "service_id",
    "fecha": "date",
    "hora": "time",
    "estado": "status",
    "servicio": "service_label",
    "precio": "price",
    "notas": "notes",
    "recordatorio": "reminder",
    "pagado": "paid",
}

# Columns an update may set back to null
CLEARABLE_COLUMNS = {"service_id", "service_label", "price", "notes"}


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session, scheduling: SchedulingService):
        self.db = db
        self.scheduling = scheduling
        self.repo = AppointmentRepository()

    def list_appointments(
        self, page: int = 1, limit: int = 100, status: Optional[str] = None
    ) -> AppointmentListResponse:
        appointments, total = self.repo.list_appointments(self.db, status, (page - 1) * limit, limit)
        return AppointmentListResponse(
            citas=[appointment_response(a) for a in appointments],
            pagination=Pagination.build(page, limit, total),
        )

    def get_pending_payment(self) -> PendingPaymentResponse:
        appointments = self.repo.get_pending_payment(self.db)
        return PendingPaymentResponse(
            citas=[appointment_response(a) for a in appointments],
            total=len(appointments),
        )

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Cita no encontrada")
        return appointment

    def _get_client(self, client_id: str) -> Client:
        client = self.db.query(Client).filter(Client.id == client_id).first()
        if not client:
            raise HTTPException(status_code=404, detail="Cliente no encontrado")
        return client

    def _get_service(self, service_id: Optional[str]) -> Optional[Service]:
        if not service_id:
            return None
        service = self.db.query(Service).filter(Service.id == service_id).first()
        if not service:
            raise HTTPException(status_code=404, detail="Servicio no encontrado")
        return service

    def _ensure_slot_available(
        self, appointment_date, time_of_day: str, service_id: Optional[str], exclude_id: Optional[str] = None
    ) -> None:
        """Re-run the conflict check before writing; raise 409 on any conflict"""
        result = self.scheduling.find_booking_conflicts(
            appointment_date, time_of_day, service_id=service_id, exclude_id=exclude_id
        )
        if not result.available:
            conflicting = [c.slot.id for c in result.conflicts + result.overlaps]
            logger.warning(
                f"⚠️ Slot {appointment_date} {time_of_day} rejected, conflicts with {conflicting}"
            )
            raise HTTPException(status_code=409, detail=result.message)

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """Create an appointment after validating client, service and slot"""
        logger.info(f"📥 Creating appointment for client {data.clienteId} on {data.fecha} {data.hora}")

        self._get_client(data.clienteId)
        service = self._get_service(data.servicioId)

        price = data.precio
        if price is None and service:
            price = service.effective_price

        # Every row that is not cancelled takes its slot
        if data.estado != STATUS_CANCELLED and not data.permitirSuperposicion:
            self._ensure_slot_available(data.fecha, data.hora, data.servicioId)

        label = data.servicio.strip() if data.servicio and data.servicio.strip() else None
        notes = data.notas.strip() if data.notas and data.notas.strip() else None

        appointment = self.repo.create_appointment(
            self.db,
            client_id=data.clienteId,
            service_id=data.servicioId or None,
            date=data.fecha,
            time=data.hora,
            status=data.estado,
            service_label=label or (service.name if service else None),
            price=price if price and price > 0 else None,
            notes=notes,
            reminder=data.recordatorio,
        )
        logger.info(f"✅ Appointment {appointment.id} created ({appointment.status})")
        return appointment

    def update_appointment(self, appointment_id: str, data: AppointmentUpdate) -> Appointment:
        """
        Update the fields present in the payload.

        An explicit null clears the service reference, label, price or notes;
        fields left out stay as they are. The slot is re-checked when the
        appointment moves or leaves the cancelled state.
        """
        appointment = self.get_appointment(appointment_id)

        changes = {}
        for field, value in data.model_dump(exclude_unset=True, exclude={"permitirSuperposicion"}).items():
            column = UPDATE_COLUMNS[field]
            if value is None and column not in CLEARABLE_COLUMNS:
                continue
            if isinstance(value, str) and column in ("service_id", "service_label", "notes"):
                value = value.strip() or None
            changes[column] = value

        if changes.get("client_id"):
            self._get_client(changes["client_id"])
        if changes.get("service_id"):
            self._get_service(changes["service_id"])

        new_date = changes.get("date", appointment.date)
        new_time = changes.get("time", appointment.time)
        new_service_id = changes.get("service_id", appointment.service_id)
        new_status = changes.get("status", appointment.status)

        moved = (
            new_date != appointment.date
            or new_time != appointment.time
            or new_service_id != appointment.service_id
        )
        reactivated = appointment.status == STATUS_CANCELLED and new_status != STATUS_CANCELLED

        if new_status != STATUS_CANCELLED and (moved or reactivated) and not data.permitirSuperposicion:
            self._ensure_slot_available(new_date, new_time, new_service_id, exclude_id=appointment.id)

        updated = self.repo.update_appointment(self.db, appointment, **changes)
        logger.info(f"✅ Appointment {appointment_id} updated ({', '.join(changes) or 'no changes'})")
        return updated

    def delete_appointment(self, appointment_id: str) -> dict:
        appointment = self.get_appointment(appointment_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Appointment {appointment_id} deleted")
        return {"message": "Cita eliminada correctamente"}
