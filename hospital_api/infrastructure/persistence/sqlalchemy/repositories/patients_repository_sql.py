from typing import Any, Dict, List, Optional
from sqlalchemy import func, or_
from sqlmodel import select

from .....db.models import Patient
from .....utils import utc_now
from .....application.ports.patients_repo import PatientDto, PatientsRepository
from .base import LIKE_ESCAPE, SqlRepository, contains_pattern


class SqlPatientsRepository(SqlRepository, PatientsRepository):
    def _to_dto(self, p: Patient) -> PatientDto:
        return PatientDto(
            id=p.id,
            name=p.name,
            age=p.age,
            phone=p.phone,
            email=p.email,
            address=p.address,
            created_at=p.created_at,
            updated_at=p.updated_at,
        )

    def _get_row(self, patient_id: int) -> Optional[Patient]:
        if patient_id is None or patient_id <= 0:
            return None
        return self.session.exec(select(Patient).where(Patient.id == patient_id)).first()

    def list(self, limit: int, offset: int) -> List[PatientDto]:
        with self._guard("fetch patients", limit=limit, offset=offset):
            rows = self.session.exec(
                select(Patient)
                .order_by(Patient.created_at.desc(), Patient.id.desc())
                .offset(offset)
                .limit(limit)
            ).all()
        return [self._to_dto(r) for r in rows]

    def get_by_id(self, patient_id: int) -> Optional[PatientDto]:
        with self._guard("fetch patient", id=patient_id):
            p = self._get_row(patient_id)
        return self._to_dto(p) if p else None

    def get_by_email(self, email: str) -> Optional[PatientDto]:
        with self._guard("fetch patient by email", email=email):
            p = self.session.exec(select(Patient).where(Patient.email == email)).first()
        return self._to_dto(p) if p else None

    def search(self, term: str, limit: int) -> List[PatientDto]:
        pattern = contains_pattern(term)
        with self._guard("search patients", term=term, limit=limit):
            rows = self.session.exec(
                select(Patient)
                .where(
                    or_(
                        func.lower(Patient.name).like(pattern, escape=LIKE_ESCAPE),
                        func.lower(Patient.email).like(pattern, escape=LIKE_ESCAPE),
                        func.lower(func.coalesce(Patient.phone, "")).like(pattern, escape=LIKE_ESCAPE),
                    )
                )
                .order_by(Patient.name)
                .limit(limit)
            ).all()
        return [self._to_dto(r) for r in rows]

    def create(self, fields: Dict[str, Any]) -> PatientDto:
        with self._guard("create patient", **fields):
            p = Patient(**fields)
            self.session.add(p)
            self.session.commit()
            self.session.refresh(p)
            new_id = p.id
        # re-read so the caller sees exactly what the store holds
        return self.get_by_id(new_id)

    def update(self, patient_id: int, fields: Dict[str, Any]) -> Optional[PatientDto]:
        with self._guard("update patient", id=patient_id, **fields):
            p = self._get_row(patient_id)
            if not p:
                return None
            for key, value in fields.items():
                setattr(p, key, value)
            p.updated_at = utc_now()
            self.session.add(p)
            self.session.commit()
        return self.get_by_id(patient_id)

    def delete(self, patient_id: int) -> bool:
        with self._guard("delete patient", id=patient_id):
            p = self._get_row(patient_id)
            if not p:
                return False
            self.session.delete(p)
            self.session.commit()
        return True
