from fastapi import Depends
from sqlmodel import Session

from ..database import get_session
from ..application.services.appointments_service import AppointmentsService
from ..application.services.doctors_service import DoctorsService
from ..application.services.patients_service import PatientsService
from ..application.services.stats_service import StatsService
from ..infrastructure.persistence.sqlalchemy.repositories.appointments_repository_sql import SqlAppointmentsRepository
from ..infrastructure.persistence.sqlalchemy.repositories.doctors_repository_sql import SqlDoctorsRepository
from ..infrastructure.persistence.sqlalchemy.repositories.patients_repository_sql import SqlPatientsRepository
from ..infrastructure.persistence.sqlalchemy.repositories.stats_repository_sql import SqlStatsRepository


def get_patients_service(session: Session = Depends(get_session)) -> PatientsService:
    return PatientsService(repo=SqlPatientsRepository(session), appointments=SqlAppointmentsRepository(session))


def get_doctors_service(session: Session = Depends(get_session)) -> DoctorsService:
    return DoctorsService(repo=SqlDoctorsRepository(session), appointments=SqlAppointmentsRepository(session))


def get_appointments_service(session: Session = Depends(get_session)) -> AppointmentsService:
    return AppointmentsService(
        repo=SqlAppointmentsRepository(session),
        patients=SqlPatientsRepository(session),
        doctors=SqlDoctorsRepository(session),
    )


def get_stats_service(session: Session = Depends(get_session)) -> StatsService:
    return StatsService(repo=SqlStatsRepository(session))
