from typing import Any, Dict, List, Optional
from datetime import date, time
from sqlalchemy import func, or_
from sqlmodel import select

from .....db.models import Appointment, AppointmentStatus, Doctor, Patient
from .....utils import utc_now
from .....application.ports.appointments_repo import (
    AppointmentsRepository,
    AppointmentDto,
    AppointmentView,
)
from .base import LIKE_ESCAPE, SqlRepository, contains_pattern


class SqlAppointmentsRepository(SqlRepository, AppointmentsRepository):
    def _appt_to_dto(self, a: Appointment) -> AppointmentDto:
        return AppointmentDto(
            id=a.id,
            patient_id=a.patient_id,
            doctor_id=a.doctor_id,
            appointment_date=a.appointment_date,
            appointment_time=a.appointment_time,
            status=a.status,
            notes=a.notes,
            created_at=a.created_at,
            updated_at=a.updated_at,
        )

    def _row_to_view(self, row) -> AppointmentView:
        a, patient_name, doctor_name, doctor_specialization = row
        return AppointmentView(
            id=a.id,
            patient_id=a.patient_id,
            doctor_id=a.doctor_id,
            appointment_date=a.appointment_date,
            appointment_time=a.appointment_time,
            status=a.status,
            notes=a.notes,
            created_at=a.created_at,
            updated_at=a.updated_at,
            patient_name=patient_name,
            doctor_name=doctor_name,
            doctor_specialization=doctor_specialization,
        )

    def _view_query(self):
        return (
            select(Appointment, Patient.name, Doctor.name, Doctor.specialization)
            .join(Patient, Appointment.patient_id == Patient.id)
            .join(Doctor, Appointment.doctor_id == Doctor.id)
        )

    def _newest_first(self, query):
        return query.order_by(
            Appointment.appointment_date.desc(),
            Appointment.appointment_time.desc(),
            Appointment.id.desc(),
        )

    def _get_row(self, appointment_id: int) -> Optional[Appointment]:
        if appointment_id is None or appointment_id <= 0:
            return None
        return self.session.exec(select(Appointment).where(Appointment.id == appointment_id)).first()

    def find_conflict(self, doctor_id: int, appointment_date: date, appointment_time: time,
                      exclude_id: Optional[int] = None) -> bool:
        query = (
            select(func.count(Appointment.id))
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.appointment_date == appointment_date)
            .where(Appointment.appointment_time == appointment_time)
            .where(Appointment.status != AppointmentStatus.CANCELLED.value)
        )
        if exclude_id is not None:
            query = query.where(Appointment.id != exclude_id)
        with self._guard("check appointment conflict", doctor_id=doctor_id,
                         date=appointment_date, time=appointment_time, exclude_id=exclude_id):
            count = self.session.exec(query).one()
        return count > 0

    def get_by_id(self, appointment_id: int) -> Optional[AppointmentDto]:
        with self._guard("fetch appointment", id=appointment_id):
            a = self._get_row(appointment_id)
        return self._appt_to_dto(a) if a else None

    def get_view(self, appointment_id: int) -> Optional[AppointmentView]:
        if appointment_id is None or appointment_id <= 0:
            return None
        with self._guard("fetch appointment", id=appointment_id):
            row = self.session.exec(self._view_query().where(Appointment.id == appointment_id)).first()
        return self._row_to_view(row) if row else None

    def list(self, limit: int, offset: int, status: Optional[str] = None) -> List[AppointmentView]:
        query = self._view_query()
        if status:
            query = query.where(Appointment.status == status)
        with self._guard("fetch appointments", limit=limit, offset=offset, status=status):
            rows = self.session.exec(self._newest_first(query).offset(offset).limit(limit)).all()
        return [self._row_to_view(r) for r in rows]

    def search(self, term: str, limit: int) -> List[AppointmentView]:
        pattern = contains_pattern(term)
        query = self._view_query().where(
            or_(
                func.lower(Patient.name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(Doctor.name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(func.coalesce(Appointment.notes, "")).like(pattern, escape=LIKE_ESCAPE),
            )
        )
        with self._guard("search appointments", term=term, limit=limit):
            rows = self.session.exec(self._newest_first(query).limit(limit)).all()
        return [self._row_to_view(r) for r in rows]

    def list_for_patient(self, patient_id: int) -> List[AppointmentView]:
        with self._guard("fetch patient appointments", patient_id=patient_id):
            rows = self.session.exec(
                self._newest_first(self._view_query().where(Appointment.patient_id == patient_id))
            ).all()
        return [self._row_to_view(r) for r in rows]

    def list_for_doctor(self, doctor_id: int) -> List[AppointmentView]:
        with self._guard("fetch doctor appointments", doctor_id=doctor_id):
            rows = self.session.exec(
                self._newest_first(self._view_query().where(Appointment.doctor_id == doctor_id))
            ).all()
        return [self._row_to_view(r) for r in rows]

    def list_for_date(self, day: date) -> List[AppointmentView]:
        with self._guard("fetch appointments for date", date=day):
            rows = self.session.exec(
                self._view_query()
                .where(Appointment.appointment_date == day)
                .order_by(Appointment.appointment_time, Appointment.id)
            ).all()
        return [self._row_to_view(r) for r in rows]

    def create(self, fields: Dict[str, Any]) -> AppointmentView:
        with self._guard("create appointment", **fields):
            appt = Appointment(**fields)
            self.session.add(appt)
            self.session.commit()
            self.session.refresh(appt)
            new_id = appt.id
        return self.get_view(new_id)

    def update(self, appointment_id: int, fields: Dict[str, Any]) -> Optional[AppointmentView]:
        with self._guard("update appointment", id=appointment_id, **fields):
            a = self._get_row(appointment_id)
            if not a:
                return None
            for key, value in fields.items():
                setattr(a, key, value)
            a.updated_at = utc_now()
            self.session.add(a)
            self.session.commit()
        return self.get_view(appointment_id)

    def delete(self, appointment_id: int) -> bool:
        with self._guard("delete appointment", id=appointment_id):
            a = self._get_row(appointment_id)
            if not a:
                return False
            self.session.delete(a)
            self.session.commit()
        return True
