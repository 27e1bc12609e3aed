from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
from datetime import datetime


@dataclass
class DoctorDto:
    id: int
    name: str
    specialization: str
    phone: Optional[str]
    email: str
    created_at: datetime
    updated_at: datetime


class DoctorsRepository(Protocol):
    def list(self, limit: int, offset: int) -> List[DoctorDto]:
        ...

    def get_by_id(self, doctor_id: int) -> Optional[DoctorDto]:
        ...

    def get_by_email(self, email: str) -> Optional[DoctorDto]:
        ...

    def search(self, term: str, limit: int) -> List[DoctorDto]:
        ...

    def create(self, fields: Dict[str, Any]) -> DoctorDto:
        ...

    def update(self, doctor_id: int, fields: Dict[str, Any]) -> Optional[DoctorDto]:
        ...

    def delete(self, doctor_id: int) -> bool:
        ...
