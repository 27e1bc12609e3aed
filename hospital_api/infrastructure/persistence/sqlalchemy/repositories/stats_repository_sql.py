from typing import Dict, Optional
from datetime import date, datetime
from sqlalchemy import distinct, func
from sqlmodel import select

from .....db.models import Appointment, Doctor, Patient
from .....application.ports.stats_repo import StatsRepository
from .base import SqlRepository


class SqlStatsRepository(SqlRepository, StatsRepository):
    """Aggregate queries only; nothing here writes."""

    def count_patients(self) -> int:
        with self._guard("count patients"):
            return self.session.exec(select(func.count(Patient.id))).one()

    def average_patient_age(self) -> Optional[float]:
        with self._guard("average patient age"):
            value = self.session.exec(select(func.avg(Patient.age))).one()
        return float(value) if value is not None else None

    def count_patients_created_since(self, since: datetime) -> int:
        with self._guard("count new patients", since=since):
            return self.session.exec(
                select(func.count(Patient.id)).where(Patient.created_at >= since)
            ).one()

    def count_doctors(self) -> int:
        with self._guard("count doctors"):
            return self.session.exec(select(func.count(Doctor.id))).one()

    def count_specializations(self) -> int:
        with self._guard("count specializations"):
            return self.session.exec(select(func.count(distinct(Doctor.specialization)))).one()

    def count_appointments(self) -> int:
        with self._guard("count appointments"):
            return self.session.exec(select(func.count(Appointment.id))).one()

    def count_appointments_on(self, day: date, status: Optional[str] = None) -> int:
        query = select(func.count(Appointment.id)).where(Appointment.appointment_date == day)
        if status:
            query = query.where(Appointment.status == status)
        with self._guard("count appointments for date", date=day, status=status):
            return self.session.exec(query).one()

    def appointment_status_counts(self) -> Dict[str, int]:
        with self._guard("count appointments by status"):
            rows = self.session.exec(
                select(Appointment.status, func.count(Appointment.id)).group_by(Appointment.status)
            ).all()
        return {status: count for status, count in rows}
