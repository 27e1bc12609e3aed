# hospital_api/db/models/doctor.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from ...utils import utc_now

class Doctor(SQLModel, table=True):
    __tablename__ = "doctors"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, index=True)
    specialization: str = Field(max_length=50, index=True)
    phone: Optional[str] = Field(default=None, max_length=20)
    email: str = Field(max_length=100, unique=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
