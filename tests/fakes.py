"""In-memory stand-ins for the repository ports, used by the service tests."""
from typing import Dict, List

from hospital_api.application.ports.appointments_repo import AppointmentDto, AppointmentView
from hospital_api.application.ports.doctors_repo import DoctorDto
from hospital_api.application.ports.patients_repo import PatientDto
from hospital_api.utils import utc_now


class FakePatientsRepo:
    def __init__(self):
        self._id = 1
        self.rows: Dict[int, PatientDto] = {}

    def add(self, name="Jane Doe", age=30, email="jane@example.com", phone=None, address=None) -> PatientDto:
        return self.create({"name": name, "age": age, "email": email, "phone": phone, "address": address})

    def list(self, limit, offset):
        rows = sorted(self.rows.values(), key=lambda p: p.id, reverse=True)
        return rows[offset:offset + limit]

    def get_by_id(self, patient_id):
        return self.rows.get(patient_id)

    def get_by_email(self, email):
        return next((p for p in self.rows.values() if p.email == email), None)

    def search(self, term, limit):
        term = term.lower()
        hits = [p for p in self.rows.values()
                if term in p.name.lower() or term in p.email.lower() or term in (p.phone or "").lower()]
        return sorted(hits, key=lambda p: p.name)[:limit]

    def create(self, fields):
        now = utc_now()
        p = PatientDto(id=self._id, created_at=now, updated_at=now, **fields)
        self.rows[p.id] = p
        self._id += 1
        return p

    def update(self, patient_id, fields):
        p = self.rows.get(patient_id)
        if not p:
            return None
        for k, v in fields.items():
            setattr(p, k, v)
        p.updated_at = utc_now()
        return p

    def delete(self, patient_id):
        return self.rows.pop(patient_id, None) is not None


class FakeDoctorsRepo:
    def __init__(self):
        self._id = 1
        self.rows: Dict[int, DoctorDto] = {}

    def add(self, name="Dr. House", specialization="Diagnostics", email="house@example.com", phone=None) -> DoctorDto:
        return self.create({"name": name, "specialization": specialization, "email": email, "phone": phone})

    def list(self, limit, offset):
        return sorted(self.rows.values(), key=lambda d: d.name)[offset:offset + limit]

    def get_by_id(self, doctor_id):
        return self.rows.get(doctor_id)

    def get_by_email(self, email):
        return next((d for d in self.rows.values() if d.email == email), None)

    def search(self, term, limit):
        term = term.lower()
        return [d for d in self.rows.values() if term in d.name.lower()][:limit]

    def create(self, fields):
        now = utc_now()
        d = DoctorDto(id=self._id, created_at=now, updated_at=now, **fields)
        self.rows[d.id] = d
        self._id += 1
        return d

    def update(self, doctor_id, fields):
        d = self.rows.get(doctor_id)
        if not d:
            return None
        for k, v in fields.items():
            setattr(d, k, v)
        return d

    def delete(self, doctor_id):
        return self.rows.pop(doctor_id, None) is not None


class FakeAppointmentsRepo:
    def __init__(self, patients: FakePatientsRepo, doctors: FakeDoctorsRepo):
        self._id = 1
        self.rows: Dict[int, AppointmentDto] = {}
        self.patients = patients
        self.doctors = doctors
        self.conflict_checks: List[tuple] = []

    def _view(self, a: AppointmentDto) -> AppointmentView:
        doctor = self.doctors.get_by_id(a.doctor_id)
        return AppointmentView(
            **vars(a),
            patient_name=self.patients.get_by_id(a.patient_id).name,
            doctor_name=doctor.name,
            doctor_specialization=doctor.specialization,
        )

    def find_conflict(self, doctor_id, appointment_date, appointment_time, exclude_id=None):
        self.conflict_checks.append((doctor_id, appointment_date, appointment_time, exclude_id))
        return any(
            a.doctor_id == doctor_id
            and a.appointment_date == appointment_date
            and a.appointment_time == appointment_time
            and a.status != "Cancelled"
            and (exclude_id is None or a.id != exclude_id)
            for a in self.rows.values()
        )

    def get_by_id(self, appointment_id):
        a = self.rows.get(appointment_id)
        return AppointmentDto(**vars(a)) if a else None

    def get_view(self, appointment_id):
        a = self.rows.get(appointment_id)
        return self._view(a) if a else None

    def list(self, limit, offset, status=None):
        rows = [a for a in self.rows.values() if status is None or a.status == status]
        return [self._view(a) for a in rows][offset:offset + limit]

    def search(self, term, limit):
        return [v for v in (self._view(a) for a in self.rows.values())
                if term.lower() in v.patient_name.lower() or term.lower() in v.doctor_name.lower()][:limit]

    def list_for_patient(self, patient_id):
        return [self._view(a) for a in self.rows.values() if a.patient_id == patient_id]

    def list_for_doctor(self, doctor_id):
        return [self._view(a) for a in self.rows.values() if a.doctor_id == doctor_id]

    def list_for_date(self, day):
        rows = [a for a in self.rows.values() if a.appointment_date == day]
        return [self._view(a) for a in sorted(rows, key=lambda a: a.appointment_time)]

    def insert_raw(self, **fields) -> AppointmentDto:
        """Store a row without any checks, to simulate data that predates the rules."""
        now = utc_now()
        fields.setdefault("status", "Scheduled")
        fields.setdefault("notes", None)
        a = AppointmentDto(id=self._id, created_at=now, updated_at=now, **fields)
        self.rows[a.id] = a
        self._id += 1
        return a

    def create(self, fields):
        return self._view(self.insert_raw(**fields))

    def update(self, appointment_id, fields):
        a = self.rows.get(appointment_id)
        if not a:
            return None
        for k, v in fields.items():
            setattr(a, k, v)
        return self._view(a)

    def delete(self, appointment_id):
        return self.rows.pop(appointment_id, None) is not None
