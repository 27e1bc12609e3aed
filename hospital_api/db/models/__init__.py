# Models package (re-export table modules for stable imports)
from .patient import Patient
from .doctor import Doctor
from .appointment import Appointment, AppointmentStatus

__all__ = [
    "Patient",
    "Doctor",
    "Appointment",
    "AppointmentStatus",
]
