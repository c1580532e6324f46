"""Scheduling service - Availability checks and daily occupancy over a day snapshot"""

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import ACTIVE_STATUSES, Appointment
from ...shared.validators import time_to_minutes
from ..appointments.schemas import appointment_response
from ..settings.service import SettingsService
from .availability import AvailabilityResult, check_availability
from .occupancy import build_occupancy_report
from .repository import SchedulingRepository
from .schemas import AvailabilityQuery, AvailabilityResponse, OccupancyResponse
from .slots import suggest_slots
from .timeline import BookedSlot, SchedulingPolicy

logger = logging.getLogger(__name__)


class SchedulingService:
    """Runs the in-memory scheduling engine over one read of the day's rows"""

    def __init__(self, db: Session, settings: SettingsService, policy: Optional[SchedulingPolicy] = None):
        self.db = db
        self.settings = settings
        self.repo = SchedulingRepository()
        self._policy = policy

    @property
    def policy(self) -> SchedulingPolicy:
        if self._policy is None:
            self._policy = replace(SchedulingPolicy(), interval=self.settings.get_appointment_interval())
        return self._policy

    def resolve_duration(self, service_id: Optional[str]) -> int:
        """Service duration in minutes, or the default when unknown"""
        if service_id:
            duration = self.repo.get_service_duration(self.db, service_id)
            if duration:
                return duration
        return self.policy.default_duration

    def to_booked_slot(self, appointment: Appointment) -> BookedSlot:
        service = appointment.service
        client = appointment.client
        return BookedSlot(
            id=appointment.id,
            time=appointment.time,
            duration=(service.duration_minutes if service else None) or self.policy.default_duration,
            status=appointment.status,
            client_name=client.full_name if client else "",
            service_label=appointment.service_label or (service.name if service else None),
            price=appointment.price,
        )

    def evaluate(
        self,
        day: date,
        time_of_day: str,
        service_id: Optional[str] = None,
        allow_overlap: bool = False,
        exclude_id: Optional[str] = None,
        statuses: Optional[tuple[str, ...]] = None,
    ) -> tuple[AvailabilityResult, list[BookedSlot]]:
        """Classify a candidate against the day's working set"""
        duration = self.resolve_duration(service_id)
        appointments = self.repo.get_day_appointments(
            self.db, day, exclude_id=exclude_id, statuses=statuses
        )
        slots = [self.to_booked_slot(a) for a in appointments]

        result = check_availability(
            time_to_minutes(time_of_day),
            duration,
            slots,
            self.policy.interval,
            allow_overlap=allow_overlap,
        )
        return result, slots

    def check_availability(self, query: AvailabilityQuery) -> AvailabilityResponse:
        """Availability of a candidate slot plus alternative start times"""
        try:
            result, slots = self.evaluate(
                query.fecha,
                query.hora,
                service_id=query.servicioId,
                allow_overlap=query.permitirSuperposicion,
                exclude_id=query.excluirCitaId,
            )

            return AvailabilityResponse(
                disponible=result.available,
                conflictos=[c.to_dict() for c in result.conflicts] or None,
                superposiciones=[c.to_dict() for c in result.overlaps] or None,
                sugerencias=suggest_slots(slots, self.policy),
                duracionServicio=result.duration,
                intervaloConfigurado=result.interval,
                tiempoTotalOcupado=result.total_occupied,
                mensaje=result.message,
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"❌ Availability check failed for {query.fecha} {query.hora}: {e}")
            logger.exception(e)
            raise HTTPException(status_code=500, detail="Error interno del servidor")

    def find_booking_conflicts(
        self,
        day: date,
        time_of_day: str,
        service_id: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> AvailabilityResult:
        """Conflict check used before writing; only pending and confirmed rows block a slot"""
        result, _ = self.evaluate(
            day,
            time_of_day,
            service_id=service_id,
            exclude_id=exclude_id,
            statuses=ACTIVE_STATUSES,
        )
        return result

    def get_occupancy(self, day: date) -> OccupancyResponse:
        """Full day snapshot with statistics and free slots"""
        try:
            appointments = self.repo.get_day_appointments(self.db, day, include_cancelled=True)
            report = build_occupancy_report([self.to_booked_slot(a) for a in appointments], self.policy)

            return OccupancyResponse(
                fecha=day,
                citas=[appointment_response(a) for a in appointments],
                **report,
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"❌ Occupancy report failed for {day}: {e}")
            logger.exception(e)
            raise HTTPException(status_code=500, detail="Error interno del servidor")
