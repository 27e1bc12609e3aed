from datetime import date, time

import pytest

from hospital_api.application.services.appointments_service import AppointmentsService
from hospital_api.exceptions import NotFound, SchedulingConflict, ValidationError

from fakes import FakeAppointmentsRepo, FakeDoctorsRepo, FakePatientsRepo


@pytest.fixture
def world():
    patients = FakePatientsRepo()
    doctors = FakeDoctorsRepo()
    appts = FakeAppointmentsRepo(patients, doctors)
    svc = AppointmentsService(repo=appts, patients=patients, doctors=doctors,
                              today_provider=lambda: date(2024, 6, 1))
    p1 = patients.add()
    d1 = doctors.add()
    return svc, appts, p1, d1


def booking(p, d, **overrides):
    data = {
        "patient_id": p.id,
        "doctor_id": d.id,
        "appointment_date": "2024-06-01",
        "appointment_time": "09:00",
        "status": "Scheduled",
    }
    data.update(overrides)
    return data


def test_book_free_slot_then_same_slot_conflicts(world):
    svc, appts, p1, d1 = world
    first = svc.book(booking(p1, d1))
    assert first.id == 1
    assert first.patient_name == "Jane Doe"
    assert first.doctor_name == "Dr. House"
    assert first.appointment_time == time(9, 0)

    with pytest.raises(SchedulingConflict):
        svc.book(booking(p1, d1))
    assert len(appts.rows) == 1


def test_cancelled_slot_can_be_rebooked(world):
    svc, appts, p1, d1 = world
    first = svc.book(booking(p1, d1))
    svc.update(first.id, booking(p1, d1, status="Cancelled"))

    second = svc.book(booking(p1, d1))
    assert second.id != first.id
    assert second.status == "Scheduled"


def test_cancel_releases_slot(world):
    svc, appts, p1, d1 = world
    first = svc.book(booking(p1, d1))
    assert svc.cancel(first.id).status == "Cancelled"
    svc.book(booking(p1, d1))
    assert len(appts.rows) == 2


def test_booking_as_cancelled_never_conflicts(world):
    svc, appts, p1, d1 = world
    svc.book(booking(p1, d1))
    created = svc.book(booking(p1, d1, status="Cancelled"))
    assert created.status == "Cancelled"


def test_same_time_different_doctor_is_fine(world):
    svc, appts, p1, d1 = world
    d2 = appts.doctors.add(name="Dr. Grey", email="grey@example.com")
    svc.book(booking(p1, d1))
    svc.book(booking(p1, d2))
    assert len(appts.rows) == 2


def test_notes_only_update_skips_conflict_check(world):
    svc, appts, p1, d1 = world
    # two rows already share a slot, e.g. from before the rule existed
    a = appts.insert_raw(patient_id=p1.id, doctor_id=d1.id,
                         appointment_date=date(2024, 6, 1), appointment_time=time(9, 0))
    appts.insert_raw(patient_id=p1.id, doctor_id=d1.id,
                     appointment_date=date(2024, 6, 1), appointment_time=time(9, 0))

    updated = svc.update(a.id, booking(p1, d1, notes="bring x-rays", status="Completed"))
    assert updated.notes == "bring x-rays"
    assert updated.status == "Completed"
    assert appts.conflict_checks == []


def test_moving_to_taken_slot_conflicts(world):
    svc, appts, p1, d1 = world
    svc.book(booking(p1, d1, appointment_time="09:00"))
    second = svc.book(booking(p1, d1, appointment_time="10:00"))

    with pytest.raises(SchedulingConflict):
        svc.update(second.id, booking(p1, d1, appointment_time="09:00"))
    assert appts.get_by_id(second.id).appointment_time == time(10, 0)


def test_moving_to_free_slot_excludes_itself(world):
    svc, appts, p1, d1 = world
    appt = svc.book(booking(p1, d1, appointment_time="09:00"))

    moved = svc.update(appt.id, booking(p1, d1, appointment_time="11:30"))
    assert moved.appointment_time == time(11, 30)
    assert appts.conflict_checks[-1] == (d1.id, date(2024, 6, 1), time(11, 30), appt.id)


def test_update_unknown_appointment_is_not_found(world):
    svc, appts, p1, d1 = world
    with pytest.raises(NotFound):
        svc.update(99, booking(p1, d1))


def test_book_requires_existing_patient_and_doctor(world):
    svc, appts, p1, d1 = world
    with pytest.raises(NotFound, match="Patient"):
        svc.book(booking(p1, d1, patient_id=42))
    with pytest.raises(NotFound, match="Doctor"):
        svc.book(booking(p1, d1, doctor_id=42))


@pytest.mark.parametrize("field,value", [
    ("appointment_time", "25:00"),
    ("appointment_time", "9am"),
    ("appointment_date", "2024-13-01"),
    ("status", "Pending"),
    ("notes", "x" * 1001),
    ("patient_id", 0),
])
def test_book_rejects_invalid_fields(world, field, value):
    svc, appts, p1, d1 = world
    with pytest.raises(ValidationError):
        svc.book(booking(p1, d1, **{field: value}))
    assert appts.rows == {}


@pytest.mark.parametrize("raw,expected", [
    ("9:00", time(9, 0)),
    ("09:05", time(9, 5)),
    (" 7:30 ", time(7, 30)),
    ("23:59", time(23, 59)),
])
def test_book_accepts_single_digit_hours(world, raw, expected):
    svc, appts, p1, d1 = world
    assert svc.book(booking(p1, d1, appointment_time=raw)).appointment_time == expected


def test_update_without_status_keeps_stored_status(world):
    svc, appts, p1, d1 = world
    cancelled = svc.book(booking(p1, d1, status="Cancelled"))
    svc.book(booking(p1, d1))

    data = booking(p1, d1, notes="moved to the annex")
    del data["status"]
    updated = svc.update(cancelled.id, data)
    assert updated.status == "Cancelled"
    assert updated.notes == "moved to the annex"
    held = [a for a in appts.rows.values() if a.status != "Cancelled"]
    assert len(held) == 1


def test_today_uses_server_date(world):
    svc, appts, p1, d1 = world
    svc.book(booking(p1, d1, appointment_time="14:00"))
    svc.book(booking(p1, d1, appointment_time="08:15"))
    svc.book(booking(p1, d1, appointment_date="2024-06-02"))

    today = svc.today()
    assert [a.appointment_time for a in today] == [time(8, 15), time(14, 0)]


def test_delete_missing_is_not_found(world):
    svc, appts, p1, d1 = world
    with pytest.raises(NotFound):
        svc.delete(5)
    appt = svc.book(booking(p1, d1))
    svc.delete(appt.id)
    assert appts.rows == {}
