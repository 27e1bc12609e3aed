from dataclasses import dataclass
from typing import List, Optional, Tuple, Union
import logging

from ..ports.patients_repo import PatientsRepository, PatientDto
from ..ports.appointments_repo import AppointmentsRepository, AppointmentView
from ...exceptions import DuplicateEmail, NotFound
from ...schemas.patients.patient import PatientCreate, PatientUpdate
from ...utils import as_positive_id, clamp_page
from ._validation import coerce

logger = logging.getLogger(__name__)


@dataclass
class PatientsService:
    repo: PatientsRepository
    appointments: AppointmentsRepository

    def list(self, limit: Optional[int] = None, offset: Optional[int] = None,
             search: Optional[str] = None) -> Tuple[List[PatientDto], int, int]:
        """Return one page of patients along with the limit and offset actually used."""
        limit, offset = clamp_page(limit, offset)
        term = (search or "").strip()
        if term:
            return self.repo.search(term, limit), limit, 0
        return self.repo.list(limit, offset), limit, offset

    def find(self, patient_id) -> Optional[PatientDto]:
        patient_id = as_positive_id(patient_id)
        if patient_id is None:
            return None
        return self.repo.get_by_id(patient_id)

    def get(self, patient_id) -> PatientDto:
        patient = self.find(patient_id)
        if not patient:
            raise NotFound("Patient not found")
        return patient

    def create(self, data: Union[PatientCreate, dict]) -> PatientDto:
        payload = coerce(PatientCreate, data)
        if self.repo.get_by_email(payload.email):
            raise DuplicateEmail("Patient with this email already exists")
        patient = self.repo.create(payload.model_dump())
        logger.info(f"Created patient {patient.id}")
        return patient

    def update(self, patient_id, data: Union[PatientUpdate, dict]) -> PatientDto:
        payload = coerce(PatientUpdate, data)
        current = self.get(patient_id)
        if payload.email != current.email:
            existing = self.repo.get_by_email(payload.email)
            if existing and existing.id != current.id:
                raise DuplicateEmail("Patient with this email already exists")
        updated = self.repo.update(current.id, payload.model_dump())
        if not updated:
            raise NotFound("Patient not found")
        return updated

    def delete(self, patient_id) -> None:
        current = self.get(patient_id)
        if not self.repo.delete(current.id):
            raise NotFound("Patient not found")
        logger.info(f"Deleted patient {current.id} and their appointments")

    def appointments_for(self, patient_id) -> List[AppointmentView]:
        patient = self.get(patient_id)
        return self.appointments.list_for_patient(patient.id)
