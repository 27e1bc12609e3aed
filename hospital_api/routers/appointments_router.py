from typing import Optional
from fastapi import APIRouter, Depends, Query
import logging

from ..application.services.appointments_service import AppointmentsService
from ..application.services.stats_service import StatsService
from ..db.models.appointment import AppointmentStatus
from ..exceptions import create_success_response
from ..schemas.appointments.appointment import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from ..utils import parse_id
from .dependencies import get_appointments_service, get_stats_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


@router.get("")
def list_appointments(
    search: Optional[str] = Query(None, max_length=100),
    status: Optional[AppointmentStatus] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    service: AppointmentsService = Depends(get_appointments_service),
):
    appointments, limit, offset = service.list(
        limit=limit, offset=offset, search=search, status=status.value if status else None
    )
    return create_success_response(
        [AppointmentResponse.model_validate(a) for a in appointments],
        count=len(appointments),
        pagination={"limit": limit, "offset": offset, "hasMore": len(appointments) == limit},
    )


@router.get("/today")
def todays_appointments(service: AppointmentsService = Depends(get_appointments_service)):
    appointments = service.today()
    return create_success_response(
        [AppointmentResponse.model_validate(a) for a in appointments],
        count=len(appointments),
    )


@router.get("/stats")
def appointment_stats(stats: StatsService = Depends(get_stats_service)):
    return create_success_response(stats.appointment_stats())


@router.get("/{appointment_id}")
def get_appointment(appointment_id: str, service: AppointmentsService = Depends(get_appointments_service)):
    appt = service.get(parse_id(appointment_id, "appointment"))
    return create_success_response(AppointmentResponse.model_validate(appt))


@router.post("", status_code=201)
def book_appointment(payload: AppointmentCreate, service: AppointmentsService = Depends(get_appointments_service)):
    appt = service.book(payload)
    return create_success_response(AppointmentResponse.model_validate(appt), "Appointment created successfully")


@router.put("/{appointment_id}")
def update_appointment(
    appointment_id: str,
    payload: AppointmentUpdate,
    service: AppointmentsService = Depends(get_appointments_service),
):
    appt = service.update(parse_id(appointment_id, "appointment"), payload)
    return create_success_response(AppointmentResponse.model_validate(appt), "Appointment updated successfully")


@router.put("/{appointment_id}/cancel")
def cancel_appointment(appointment_id: str, service: AppointmentsService = Depends(get_appointments_service)):
    appt = service.cancel(parse_id(appointment_id, "appointment"))
    return create_success_response(AppointmentResponse.model_validate(appt), "Appointment cancelled successfully")


@router.delete("/{appointment_id}")
def delete_appointment(appointment_id: str, service: AppointmentsService = Depends(get_appointments_service)):
    service.delete(parse_id(appointment_id, "appointment"))
    return {"success": True, "message": "Appointment deleted successfully"}
