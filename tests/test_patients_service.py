import pytest

from hospital_api.application.services.patients_service import PatientsService
from hospital_api.exceptions import DuplicateEmail, NotFound, ValidationError

from fakes import FakeAppointmentsRepo, FakeDoctorsRepo, FakePatientsRepo


@pytest.fixture
def svc():
    patients = FakePatientsRepo()
    return PatientsService(repo=patients, appointments=FakeAppointmentsRepo(patients, FakeDoctorsRepo()))


def patient(**overrides):
    data = {"name": "John Smith", "age": 45, "email": "john@example.com", "phone": "+1-555-1001"}
    data.update(overrides)
    return data


def test_create_returns_persisted_record(svc):
    p = svc.create(patient())
    assert p.id == 1
    assert p.created_at is not None
    assert p.updated_at is not None
    assert p.email == "john@example.com"


def test_create_duplicate_email_fails(svc):
    svc.create(patient())
    with pytest.raises(DuplicateEmail):
        svc.create(patient(name="Other John", email="JOHN@example.com"))
    assert len(svc.repo.rows) == 1


@pytest.mark.parametrize("overrides", [
    {"age": 200},
    {"age": -1},
    {"name": ""},
    {"name": "J"},
    {"email": "not-an-email"},
    {"email": None},
    {"phone": "call me"},
])
def test_create_rejects_invalid_fields(svc, overrides):
    with pytest.raises(ValidationError) as exc:
        svc.create(patient(**overrides))
    assert exc.value.status_code == 400
    assert exc.value.details
    assert svc.repo.rows == {}


def test_update_overwrites_fields(svc):
    p = svc.create(patient())
    updated = svc.update(p.id, patient(name="John A. Smith", age=46, phone=None, address="1 Road"))
    assert updated.name == "John A. Smith"
    assert updated.age == 46
    assert updated.phone is None
    assert updated.address == "1 Road"


def test_update_to_taken_email_fails(svc):
    svc.create(patient())
    other = svc.create(patient(email="jane@example.com", name="Jane"))
    with pytest.raises(DuplicateEmail):
        svc.update(other.id, patient(name="Jane"))


def test_update_keeping_own_email_is_allowed(svc):
    p = svc.create(patient())
    assert svc.update(p.id, patient(age=50)).age == 50


def test_update_and_delete_missing_patient(svc):
    with pytest.raises(NotFound):
        svc.update(7, patient())
    with pytest.raises(NotFound):
        svc.delete(7)


def test_find_with_malformed_id_returns_none(svc):
    svc.create(patient())
    assert svc.find("abc") is None
    assert svc.find(0) is None
    assert svc.find(-3) is None
    assert svc.find("1").id == 1


def test_list_clamps_page(svc):
    _, limit, offset = svc.list(limit=500, offset=-10)
    assert (limit, offset) == (100, 0)
    _, limit, offset = svc.list(limit=0)
    assert limit == 1
    _, limit, offset = svc.list()
    assert (limit, offset) == (50, 0)


def test_list_with_search_matches_phone(svc):
    svc.create(patient())
    svc.create(patient(name="Maria Garcia", email="maria@example.com", phone="+1-555-2002"))
    rows, _, _ = svc.list(search="2002")
    assert [p.name for p in rows] == ["Maria Garcia"]


def test_appointments_for_missing_patient(svc):
    with pytest.raises(NotFound):
        svc.appointments_for(3)
