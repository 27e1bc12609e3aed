from dataclasses import dataclass, field
from typing import Any, Callable, Dict
from datetime import date, datetime, timedelta
import logging
import math

from sqlalchemy.exc import SQLAlchemyError

from ..ports.stats_repo import StatsRepository
from ...db.models.appointment import AppointmentStatus
from ...exceptions import StoreFailure
from ...utils import utc_now

logger = logging.getLogger(__name__)

NEW_PATIENT_WINDOW = timedelta(days=7)


def empty_patient_stats() -> Dict[str, Any]:
    return {"total": 0, "averageAge": 0, "newThisWeek": 0}


def empty_doctor_stats() -> Dict[str, Any]:
    return {"total": 0, "specializations": 0}


def empty_appointment_stats() -> Dict[str, Any]:
    return {"total": 0, "today": 0, "completedToday": 0, "statusDistribution": {}}


@dataclass
class StatsService:
    """Dashboard rollups.

    Every method returns the zeroed shape instead of raising when the store
    fails, so one broken query never takes the dashboard down.
    """

    repo: StatsRepository
    now_provider: Callable[[], datetime] = field(default=utc_now)
    today_provider: Callable[[], date] = field(default=date.today)

    def patient_stats(self) -> Dict[str, Any]:
        try:
            average = self.repo.average_patient_age()
            return {
                "total": self.repo.count_patients(),
                "averageAge": int(math.floor(average + 0.5)) if average is not None else 0,
                "newThisWeek": self.repo.count_patients_created_since(self.now_provider() - NEW_PATIENT_WINDOW),
            }
        except (StoreFailure, SQLAlchemyError) as e:
            logger.error(f"Error computing patient stats: {e}")
            return empty_patient_stats()

    def doctor_stats(self) -> Dict[str, Any]:
        try:
            return {
                "total": self.repo.count_doctors(),
                "specializations": self.repo.count_specializations(),
            }
        except (StoreFailure, SQLAlchemyError) as e:
            logger.error(f"Error computing doctor stats: {e}")
            return empty_doctor_stats()

    def appointment_stats(self) -> Dict[str, Any]:
        today = self.today_provider()
        try:
            return {
                "total": self.repo.count_appointments(),
                "today": self.repo.count_appointments_on(today),
                "completedToday": self.repo.count_appointments_on(today, AppointmentStatus.COMPLETED.value),
                "statusDistribution": dict(self.repo.appointment_status_counts()),
            }
        except (StoreFailure, SQLAlchemyError) as e:
            logger.error(f"Error computing appointment stats: {e}")
            return empty_appointment_stats()

    def dashboard(self) -> Dict[str, Any]:
        return {
            "patients": self.patient_stats(),
            "doctors": self.doctor_stats(),
            "appointments": self.appointment_stats(),
        }
