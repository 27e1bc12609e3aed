import pytest

from hospital_api.application.services.doctors_service import DoctorsService
from hospital_api.exceptions import DuplicateEmail, NotFound, ValidationError

from fakes import FakeAppointmentsRepo, FakeDoctorsRepo, FakePatientsRepo


@pytest.fixture
def svc():
    doctors = FakeDoctorsRepo()
    return DoctorsService(repo=doctors, appointments=FakeAppointmentsRepo(FakePatientsRepo(), doctors))


def doctor(**overrides):
    data = {"name": "Dr. Sarah Wilson", "specialization": "Cardiology", "email": "sarah@example.com"}
    data.update(overrides)
    return data


def test_create_and_duplicate_email(svc):
    d = svc.create(doctor())
    assert d.id == 1
    with pytest.raises(DuplicateEmail):
        svc.create(doctor(name="Dr. Other"))


def test_specialization_required(svc):
    with pytest.raises(ValidationError):
        svc.create(doctor(specialization="  "))


def test_update_email_uniqueness_excludes_self(svc):
    a = svc.create(doctor())
    b = svc.create(doctor(name="Dr. Chen", email="chen@example.com"))
    assert svc.update(a.id, doctor(specialization="Neurology")).specialization == "Neurology"
    with pytest.raises(DuplicateEmail):
        svc.update(b.id, doctor(name="Dr. Chen"))


def test_get_missing_doctor(svc):
    with pytest.raises(NotFound):
        svc.get(12)
