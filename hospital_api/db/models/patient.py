# hospital_api/db/models/patient.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from ...utils import utc_now

class Patient(SQLModel, table=True):
    __tablename__ = "patients"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, index=True)
    age: int
    phone: Optional[str] = Field(default=None, max_length=20)
    email: str = Field(max_length=100, unique=True, index=True)
    address: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
