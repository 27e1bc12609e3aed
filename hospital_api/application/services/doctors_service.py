from dataclasses import dataclass
from typing import List, Optional, Tuple, Union
import logging

from ..ports.doctors_repo import DoctorsRepository, DoctorDto
from ..ports.appointments_repo import AppointmentsRepository, AppointmentView
from ...exceptions import DuplicateEmail, NotFound
from ...schemas.doctors.doctor import DoctorCreate, DoctorUpdate
from ...utils import as_positive_id, clamp_page
from ._validation import coerce

logger = logging.getLogger(__name__)


@dataclass
class DoctorsService:
    repo: DoctorsRepository
    appointments: AppointmentsRepository

    def list(self, limit: Optional[int] = None, offset: Optional[int] = None,
             search: Optional[str] = None) -> Tuple[List[DoctorDto], int, int]:
        limit, offset = clamp_page(limit, offset)
        term = (search or "").strip()
        if term:
            return self.repo.search(term, limit), limit, 0
        return self.repo.list(limit, offset), limit, offset

    def find(self, doctor_id) -> Optional[DoctorDto]:
        doctor_id = as_positive_id(doctor_id)
        if doctor_id is None:
            return None
        return self.repo.get_by_id(doctor_id)

    def get(self, doctor_id) -> DoctorDto:
        doctor = self.find(doctor_id)
        if not doctor:
            raise NotFound("Doctor not found")
        return doctor

    def create(self, data: Union[DoctorCreate, dict]) -> DoctorDto:
        payload = coerce(DoctorCreate, data)
        if self.repo.get_by_email(payload.email):
            raise DuplicateEmail("Doctor with this email already exists")
        doctor = self.repo.create(payload.model_dump())
        logger.info(f"Created doctor {doctor.id}")
        return doctor

    def update(self, doctor_id, data: Union[DoctorUpdate, dict]) -> DoctorDto:
        payload = coerce(DoctorUpdate, data)
        current = self.get(doctor_id)
        if payload.email != current.email:
            existing = self.repo.get_by_email(payload.email)
            if existing and existing.id != current.id:
                raise DuplicateEmail("Doctor with this email already exists")
        updated = self.repo.update(current.id, payload.model_dump())
        if not updated:
            raise NotFound("Doctor not found")
        return updated

    def delete(self, doctor_id) -> None:
        current = self.get(doctor_id)
        if not self.repo.delete(current.id):
            raise NotFound("Doctor not found")
        logger.info(f"Deleted doctor {current.id} and their appointments")

    def appointments_for(self, doctor_id) -> List[AppointmentView]:
        doctor = self.get(doctor_id)
        return self.appointments.list_for_doctor(doctor.id)
