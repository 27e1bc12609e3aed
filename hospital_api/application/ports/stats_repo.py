from typing import Dict, Optional, Protocol
from datetime import date, datetime


class StatsRepository(Protocol):
    def count_patients(self) -> int:
        ...

    def average_patient_age(self) -> Optional[float]:
        ...

    def count_patients_created_since(self, since: datetime) -> int:
        ...

    def count_doctors(self) -> int:
        ...

    def count_specializations(self) -> int:
        ...

    def count_appointments(self) -> int:
        ...

    def count_appointments_on(self, day: date, status: Optional[str] = None) -> int:
        ...

    def appointment_status_counts(self) -> Dict[str, int]:
        ...
