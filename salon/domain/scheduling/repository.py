"""Scheduling repository - Day snapshot queries"""

from datetime import date
from typing import Optional, Sequence

from sqlalchemy.orm import Session, joinedload

from ...models import STATUS_CANCELLED, Appointment, Service


class SchedulingRepository:
    """Read-only queries over a day's appointments"""

    @staticmethod
    def get_day_appointments(
        db: Session,
        day: date,
        exclude_id: Optional[str] = None,
        statuses: Optional[Sequence[str]] = None,
        include_cancelled: bool = False,
    ) -> list[Appointment]:
        """
        Appointments of one calendar day ordered by time, then creation.

        Cancelled rows are left out unless include_cancelled is set; statuses
        narrows the working set further.
        """
        query = (
            db.query(Appointment)
            .options(joinedload(Appointment.client), joinedload(Appointment.service))
            .filter(Appointment.date == day)
        )

        if statuses:
            query = query.filter(Appointment.status.in_(list(statuses)))
        elif not include_cancelled:
            query = query.filter(Appointment.status != STATUS_CANCELLED)

        if exclude_id:
            query = query.filter(Appointment.id != exclude_id)

        return query.order_by(Appointment.time, Appointment.created_at).all()

    @staticmethod
    def get_service_duration(db: Session, service_id: str) -> Optional[int]:
        row = db.query(Service.duration_minutes).filter(Service.id == service_id).first()
        return row[0] if row else None
