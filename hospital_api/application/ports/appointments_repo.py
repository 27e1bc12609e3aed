from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
from datetime import datetime, date, time


@dataclass
class AppointmentDto:
    id: int
    patient_id: int
    doctor_id: int
    appointment_date: date
    appointment_time: time
    status: str
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass
class AppointmentView:
    """An appointment joined with the display fields of its patient and doctor."""
    id: int
    patient_id: int
    doctor_id: int
    appointment_date: date
    appointment_time: time
    status: str
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
    patient_name: str
    doctor_name: str
    doctor_specialization: str


class AppointmentsRepository(Protocol):
    def find_conflict(self, doctor_id: int, appointment_date: date, appointment_time: time,
                      exclude_id: Optional[int] = None) -> bool:
        ...

    def get_by_id(self, appointment_id: int) -> Optional[AppointmentDto]:
        ...

    def get_view(self, appointment_id: int) -> Optional[AppointmentView]:
        ...

    def list(self, limit: int, offset: int, status: Optional[str] = None) -> List[AppointmentView]:
        ...

    def search(self, term: str, limit: int) -> List[AppointmentView]:
        ...

    def list_for_patient(self, patient_id: int) -> List[AppointmentView]:
        ...

    def list_for_doctor(self, doctor_id: int) -> List[AppointmentView]:
        ...

    def list_for_date(self, day: date) -> List[AppointmentView]:
        ...

    def create(self, fields: Dict[str, Any]) -> AppointmentView:
        ...

    def update(self, appointment_id: int, fields: Dict[str, Any]) -> Optional[AppointmentView]:
        ...

    def delete(self, appointment_id: int) -> bool:
        ...
