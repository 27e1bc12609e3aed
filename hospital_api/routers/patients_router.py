from typing import Optional
from fastapi import APIRouter, Depends, Query
import logging

from ..application.services.patients_service import PatientsService
from ..application.services.stats_service import StatsService
from ..exceptions import create_success_response
from ..schemas.appointments.appointment import AppointmentResponse
from ..schemas.patients.patient import PatientCreate, PatientResponse, PatientUpdate
from ..utils import parse_id
from .dependencies import get_patients_service, get_stats_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/patients", tags=["Patients"])


@router.get("")
def list_patients(
    search: Optional[str] = Query(None, max_length=100),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    service: PatientsService = Depends(get_patients_service),
):
    patients, limit, offset = service.list(limit=limit, offset=offset, search=search)
    return create_success_response(
        [PatientResponse.model_validate(p) for p in patients],
        count=len(patients),
        pagination={"limit": limit, "offset": offset, "hasMore": len(patients) == limit},
    )


@router.get("/stats")
def patient_stats(stats: StatsService = Depends(get_stats_service)):
    return create_success_response(stats.patient_stats())


@router.get("/{patient_id}")
def get_patient(patient_id: str, service: PatientsService = Depends(get_patients_service)):
    patient = service.get(parse_id(patient_id, "patient"))
    return create_success_response(PatientResponse.model_validate(patient))


@router.get("/{patient_id}/appointments")
def get_patient_appointments(patient_id: str, service: PatientsService = Depends(get_patients_service)):
    appointments = service.appointments_for(parse_id(patient_id, "patient"))
    return create_success_response(
        [AppointmentResponse.model_validate(a) for a in appointments],
        count=len(appointments),
    )


@router.post("", status_code=201)
def create_patient(payload: PatientCreate, service: PatientsService = Depends(get_patients_service)):
    patient = service.create(payload)
    return create_success_response(PatientResponse.model_validate(patient), "Patient created successfully")


@router.put("/{patient_id}")
def update_patient(patient_id: str, payload: PatientUpdate, service: PatientsService = Depends(get_patients_service)):
    patient = service.update(parse_id(patient_id, "patient"), payload)
    return create_success_response(PatientResponse.model_validate(patient), "Patient updated successfully")


@router.delete("/{patient_id}")
def delete_patient(patient_id: str, service: PatientsService = Depends(get_patients_service)):
    service.delete(parse_id(patient_id, "patient"))
    return {"success": True, "message": "Patient deleted successfully"}
