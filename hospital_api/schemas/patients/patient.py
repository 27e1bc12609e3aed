# hospital_api/schemas/patients/patient.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from ..common.common import normalize_email, normalize_phone, strip_optional

class PatientBase(BaseModel):
    name: str = Field(min_length=2, max_length=100, description="Patient's full name")
    age: int = Field(ge=0, le=150, description="Age must be between 0 and 150")
    phone: Optional[str] = Field(None, max_length=20)
    email: str = Field(max_length=100)
    address: Optional[str] = Field(None, max_length=500)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(v)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v):
        return strip_optional(v)

class PatientCreate(PatientBase):
    pass

class PatientUpdate(PatientBase):
    """Full replacement of the mutable patient fields."""
    pass

class PatientResponse(PatientBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime
