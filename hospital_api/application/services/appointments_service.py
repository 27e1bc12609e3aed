from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union
from datetime import date
import logging

from ..ports.appointments_repo import AppointmentsRepository, AppointmentView
from ..ports.doctors_repo import DoctorsRepository
from ..ports.patients_repo import PatientsRepository
from ...db.models.appointment import AppointmentStatus
from ...exceptions import NotFound, SchedulingConflict
from ...schemas.appointments.appointment import AppointmentBase, AppointmentCreate, AppointmentUpdate
from ...utils import as_positive_id, clamp_page
from ._validation import coerce

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Doctor is not available at this time"


@dataclass
class AppointmentsService:
    repo: AppointmentsRepository
    patients: PatientsRepository
    doctors: DoctorsRepository
    today_provider: Callable[[], date] = date.today

    def list(self, limit: Optional[int] = None, offset: Optional[int] = None,
             search: Optional[str] = None, status: Optional[str] = None) -> Tuple[List[AppointmentView], int, int]:
        limit, offset = clamp_page(limit, offset)
        term = (search or "").strip()
        if term:
            return self.repo.search(term, limit), limit, 0
        return self.repo.list(limit, offset, status=status), limit, offset

    def today(self) -> List[AppointmentView]:
        return self.repo.list_for_date(self.today_provider())

    def find(self, appointment_id) -> Optional[AppointmentView]:
        appointment_id = as_positive_id(appointment_id)
        if appointment_id is None:
            return None
        return self.repo.get_view(appointment_id)

    def get(self, appointment_id) -> AppointmentView:
        appt = self.find(appointment_id)
        if not appt:
            raise NotFound("Appointment not found")
        return appt

    def _ensure_parties_exist(self, payload: AppointmentBase) -> None:
        if not self.patients.get_by_id(payload.patient_id):
            raise NotFound("Patient not found")
        if not self.doctors.get_by_id(payload.doctor_id):
            raise NotFound("Doctor not found")

    def book(self, data: Union[AppointmentCreate, dict]) -> AppointmentView:
        payload = coerce(AppointmentCreate, data)
        self._ensure_parties_exist(payload)

        # a cancelled booking never holds the slot, so it cannot collide
        if payload.status != AppointmentStatus.CANCELLED and self.repo.find_conflict(
            payload.doctor_id, payload.appointment_date, payload.appointment_time
        ):
            logger.info(
                f"Rejected booking for doctor {payload.doctor_id} at "
                f"{payload.appointment_date} {payload.appointment_time:%H:%M}: slot taken"
            )
            raise SchedulingConflict(CONFLICT_MESSAGE)

        fields = payload.model_dump()
        fields["status"] = payload.status.value
        appt = self.repo.create(fields)
        logger.info(f"Booked appointment {appt.id} for doctor {appt.doctor_id}")
        return appt

    def update(self, appointment_id, data: Union[AppointmentUpdate, dict]) -> AppointmentView:
        payload = coerce(AppointmentUpdate, data)
        appointment_id = as_positive_id(appointment_id)
        current = self.repo.get_by_id(appointment_id) if appointment_id else None
        if not current:
            raise NotFound("Appointment not found")
        self._ensure_parties_exist(payload)

        slot_changed = (
            payload.doctor_id != current.doctor_id
            or payload.appointment_date != current.appointment_date
            or payload.appointment_time != current.appointment_time
        )
        if slot_changed and self.repo.find_conflict(
            payload.doctor_id, payload.appointment_date, payload.appointment_time, exclude_id=current.id
        ):
            raise SchedulingConflict(CONFLICT_MESSAGE)

        fields = payload.model_dump()
        fields["status"] = payload.status.value if payload.status else current.status
        updated = self.repo.update(current.id, fields)
        if not updated:
            raise NotFound("Appointment not found")
        return updated

    def cancel(self, appointment_id) -> AppointmentView:
        """Mark an appointment Cancelled, releasing its slot."""
        current = self.get(appointment_id)
        if current.status == AppointmentStatus.CANCELLED.value:
            return current
        updated = self.repo.update(current.id, {"status": AppointmentStatus.CANCELLED.value})
        if not updated:
            raise NotFound("Appointment not found")
        return updated

    def delete(self, appointment_id) -> None:
        appointment_id = as_positive_id(appointment_id)
        if not appointment_id or not self.repo.delete(appointment_id):
            raise NotFound("Appointment not found")
