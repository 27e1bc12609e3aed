from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
from datetime import datetime


@dataclass
class PatientDto:
    id: int
    name: str
    age: int
    phone: Optional[str]
    email: str
    address: Optional[str]
    created_at: datetime
    updated_at: datetime


class PatientsRepository(Protocol):
    def list(self, limit: int, offset: int) -> List[PatientDto]:
        ...

    def get_by_id(self, patient_id: int) -> Optional[PatientDto]:
        ...

    def get_by_email(self, email: str) -> Optional[PatientDto]:
        ...

    def search(self, term: str, limit: int) -> List[PatientDto]:
        ...

    def create(self, fields: Dict[str, Any]) -> PatientDto:
        ...

    def update(self, patient_id: int, fields: Dict[str, Any]) -> Optional[PatientDto]:
        ...

    def delete(self, patient_id: int) -> bool:
        ...
