"""Appointment repository - Database operations for appointments"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import STATUS_DONE, Appointment


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def list_appointments(
        db: Session, status: Optional[str] = None, skip: int = 0, limit: int = 100
    ) -> tuple[list[Appointment], int]:
        """Appointments ordered by date and time, with the total count"""
        query = db.query(Appointment)
        if status:
            query = query.filter(Appointment.status == status)

        total = query.count()
        appointments = (
            query.options(joinedload(Appointment.client), joinedload(Appointment.service))
            .order_by(Appointment.date, Appointment.time)
            .offset(skip)
            .limit(limit)
            .all()
        )
        return appointments, total

    @staticmethod
    def get_pending_payment(db: Session) -> list[Appointment]:
        """Done appointments without a registered payment, newest first"""
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.client), joinedload(Appointment.service))
            .filter(Appointment.status == STATUS_DONE, Appointment.paid.is_(False))
            .order_by(Appointment.date.desc(), Appointment.time.desc())
            .all()
        )

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: str) -> Optional[Appointment]:
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.client), joinedload(Appointment.service))
            .filter(Appointment.id == appointment_id)
            .first()
        )

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment(db: Session, appointment: Appointment, **updates) -> Appointment:
        """Apply the given column values; None clears a nullable column"""
        for key, value in updates.items():
            setattr(appointment, key, value)

        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()
