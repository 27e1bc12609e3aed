from typing import Any, Dict, List, Optional
from sqlalchemy import func, or_
from sqlmodel import select

from .....db.models import Doctor
from .....utils import utc_now
from .....application.ports.doctors_repo import DoctorDto, DoctorsRepository
from .base import LIKE_ESCAPE, SqlRepository, contains_pattern


class SqlDoctorsRepository(SqlRepository, DoctorsRepository):
    def _to_dto(self, d: Doctor) -> DoctorDto:
        return DoctorDto(
            id=d.id,
            name=d.name,
            specialization=d.specialization,
            phone=d.phone,
            email=d.email,
            created_at=d.created_at,
            updated_at=d.updated_at,
        )

    def _get_row(self, doctor_id: int) -> Optional[Doctor]:
        if doctor_id is None or doctor_id <= 0:
            return None
        return self.session.exec(select(Doctor).where(Doctor.id == doctor_id)).first()

    def list(self, limit: int, offset: int) -> List[DoctorDto]:
        with self._guard("fetch doctors", limit=limit, offset=offset):
            rows = self.session.exec(
                select(Doctor).order_by(Doctor.name, Doctor.id).offset(offset).limit(limit)
            ).all()
        return [self._to_dto(r) for r in rows]

    def get_by_id(self, doctor_id: int) -> Optional[DoctorDto]:
        with self._guard("fetch doctor", id=doctor_id):
            d = self._get_row(doctor_id)
        return self._to_dto(d) if d else None

    def get_by_email(self, email: str) -> Optional[DoctorDto]:
        with self._guard("fetch doctor by email", email=email):
            d = self.session.exec(select(Doctor).where(Doctor.email == email)).first()
        return self._to_dto(d) if d else None

    def search(self, term: str, limit: int) -> List[DoctorDto]:
        pattern = contains_pattern(term)
        with self._guard("search doctors", term=term, limit=limit):
            rows = self.session.exec(
                select(Doctor)
                .where(
                    or_(
                        func.lower(Doctor.name).like(pattern, escape=LIKE_ESCAPE),
                        func.lower(Doctor.email).like(pattern, escape=LIKE_ESCAPE),
                        func.lower(func.coalesce(Doctor.phone, "")).like(pattern, escape=LIKE_ESCAPE),
                        func.lower(Doctor.specialization).like(pattern, escape=LIKE_ESCAPE),
                    )
                )
                .order_by(Doctor.name)
                .limit(limit)
            ).all()
        return [self._to_dto(r) for r in rows]

    def create(self, fields: Dict[str, Any]) -> DoctorDto:
        with self._guard("create doctor", **fields):
            d = Doctor(**fields)
            self.session.add(d)
            self.session.commit()
            self.session.refresh(d)
            new_id = d.id
        return self.get_by_id(new_id)

    def update(self, doctor_id: int, fields: Dict[str, Any]) -> Optional[DoctorDto]:
        with self._guard("update doctor", id=doctor_id, **fields):
            d = self._get_row(doctor_id)
            if not d:
                return None
            for key, value in fields.items():
                setattr(d, key, value)
            d.updated_at = utc_now()
            self.session.add(d)
            self.session.commit()
        return self.get_by_id(doctor_id)

    def delete(self, doctor_id: int) -> bool:
        with self._guard("delete doctor", id=doctor_id):
            d = self._get_row(doctor_id)
            if not d:
                return False
            self.session.delete(d)
            self.session.commit()
        return True
