# hospital_api/schemas/appointments/appointment.py
import re
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing import Optional
from datetime import date, datetime, time

from ...db.models.appointment import AppointmentStatus
from ..common.common import strip_optional

TIME_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")

class AppointmentBase(BaseModel):
    patient_id: int = Field(gt=0, description="Patient ID must be a positive integer")
    doctor_id: int = Field(gt=0, description="Doctor ID must be a positive integer")
    appointment_date: date  # YYYY-MM-DD
    appointment_time: time  # HH:MM
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("appointment_time", mode="before")
    @classmethod
    def validate_time(cls, v):
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not TIME_RE.match(v):
            raise ValueError("Time must be valid (HH:MM)")
        hour, minute = v.split(":")
        return f"{int(hour):02d}:{minute}"

    @field_validator("appointment_time")
    @classmethod
    def truncate_to_minute(cls, v: time) -> time:
        return v.replace(second=0, microsecond=0)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return strip_optional(v)

class AppointmentCreate(AppointmentBase):
    pass

class AppointmentUpdate(AppointmentBase):
    """Replacement of the mutable appointment fields; a missing status keeps the stored one."""
    status: Optional[AppointmentStatus] = None

class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    doctor_id: int
    appointment_date: date
    appointment_time: time
    status: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    patient_name: str
    doctor_name: str
    doctor_specialization: str

    @field_serializer("appointment_time")
    def serialize_time(self, v: time) -> str:
        return v.strftime("%H:%M")
