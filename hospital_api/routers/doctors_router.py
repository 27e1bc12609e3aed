from typing import Optional
from fastapi import APIRouter, Depends, Query
import logging

from ..application.services.doctors_service import DoctorsService
from ..application.services.stats_service import StatsService
from ..exceptions import create_success_response
from ..schemas.appointments.appointment import AppointmentResponse
from ..schemas.doctors.doctor import DoctorCreate, DoctorResponse, DoctorUpdate
from ..utils import parse_id
from .dependencies import get_doctors_service, get_stats_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/doctors", tags=["Doctors"])


@router.get("")
def list_doctors(
    search: Optional[str] = Query(None, max_length=100),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    service: DoctorsService = Depends(get_doctors_service),
):
    doctors, limit, offset = service.list(limit=limit, offset=offset, search=search)
    return create_success_response(
        [DoctorResponse.model_validate(d) for d in doctors],
        count=len(doctors),
        pagination={"limit": limit, "offset": offset, "hasMore": len(doctors) == limit},
    )


@router.get("/stats")
def doctor_stats(stats: StatsService = Depends(get_stats_service)):
    return create_success_response(stats.doctor_stats())


@router.get("/{doctor_id}")
def get_doctor(doctor_id: str, service: DoctorsService = Depends(get_doctors_service)):
    doctor = service.get(parse_id(doctor_id, "doctor"))
    return create_success_response(DoctorResponse.model_validate(doctor))


@router.get("/{doctor_id}/appointments")
def get_doctor_appointments(doctor_id: str, service: DoctorsService = Depends(get_doctors_service)):
    appointments = service.appointments_for(parse_id(doctor_id, "doctor"))
    return create_success_response(
        [AppointmentResponse.model_validate(a) for a in appointments],
        count=len(appointments),
    )


@router.post("", status_code=201)
def create_doctor(payload: DoctorCreate, service: DoctorsService = Depends(get_doctors_service)):
    doctor = service.create(payload)
    return create_success_response(DoctorResponse.model_validate(doctor), "Doctor created successfully")


@router.put("/{doctor_id}")
def update_doctor(doctor_id: str, payload: DoctorUpdate, service: DoctorsService = Depends(get_doctors_service)):
    doctor = service.update(parse_id(doctor_id, "doctor"), payload)
    return create_success_response(DoctorResponse.model_validate(doctor), "Doctor updated successfully")


@router.delete("/{doctor_id}")
def delete_doctor(doctor_id: str, service: DoctorsService = Depends(get_doctors_service)):
    service.delete(parse_id(doctor_id, "doctor"))
    return {"success": True, "message": "Doctor deleted successfully"}
