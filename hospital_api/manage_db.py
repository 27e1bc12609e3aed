#!/usr/bin/env python3
"""
Database tools for the hospital API

    python -m hospital_api.manage_db init        create tables
    python -m hospital_api.manage_db test        check the connection
    python -m hospital_api.manage_db seed        load sample data (skipped if patients exist)
    python -m hospital_api.manage_db drop --confirm
"""
import argparse
import logging
import sys
from datetime import date, time, timedelta
from typing import Optional, Sequence

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import select

from .config import settings
from .database import create_db_and_tables, create_db_engine, drop_db_and_tables, ping, transaction
from .db.models import Appointment, AppointmentStatus, Doctor, Patient

logger = logging.getLogger(__name__)

SAMPLE_DOCTORS = [
    ("Dr. Sarah Wilson", "Cardiology", "+1-555-0101", "sarah.wilson@hospital.example"),
    ("Dr. Michael Chen", "Neurology", "+1-555-0102", "michael.chen@hospital.example"),
    ("Dr. Emily Rodriguez", "Pediatrics", "+1-555-0103", "emily.rodriguez@hospital.example"),
    ("Dr. James Thompson", "Orthopedics", "+1-555-0104", "james.thompson@hospital.example"),
    ("Dr. Lisa Anderson", "Dermatology", "+1-555-0105", "lisa.anderson@hospital.example"),
]

SAMPLE_PATIENTS = [
    ("John Smith", 45, "+1-555-1001", "john.smith@mail.example", "123 Main St, Springfield"),
    ("Maria Garcia", 32, "+1-555-1002", "maria.garcia@mail.example", "456 Oak Ave, Springfield"),
    ("Robert Johnson", 67, "+1-555-1003", "robert.johnson@mail.example", "789 Pine Rd, Shelbyville"),
    ("Jennifer Brown", 28, "+1-555-1004", "jennifer.brown@mail.example", None),
    ("David Lee", 54, None, "david.lee@mail.example", "12 Elm St, Capital City"),
]

# (patient index, doctor index, day offset from today, time, status)
SAMPLE_APPOINTMENTS = [
    (0, 0, 0, time(9, 0), AppointmentStatus.SCHEDULED),
    (1, 2, 0, time(10, 30), AppointmentStatus.COMPLETED),
    (2, 1, 0, time(14, 0), AppointmentStatus.SCHEDULED),
    (3, 4, 1, time(11, 0), AppointmentStatus.SCHEDULED),
    (4, 3, 2, time(15, 30), AppointmentStatus.SCHEDULED),
    (0, 1, -3, time(9, 30), AppointmentStatus.COMPLETED),
    (2, 0, -1, time(13, 0), AppointmentStatus.CANCELLED),
]


def seed(engine: Engine, today: Optional[date] = None) -> bool:
    """Insert the sample records in a single transaction.

    Returns False without writing anything when patients already exist.
    """
    today = today or date.today()
    with transaction(engine) as session:
        if session.exec(select(func.count(Patient.id))).one() > 0:
            logger.info("Sample data skipped: database already has patients")
            return False

        doctors = [Doctor(name=n, specialization=s, phone=p, email=e) for n, s, p, e in SAMPLE_DOCTORS]
        patients = [Patient(name=n, age=a, phone=p, email=e, address=addr) for n, a, p, e, addr in SAMPLE_PATIENTS]
        session.add_all(doctors + patients)
        session.flush()

        for p_idx, d_idx, offset, at, status in SAMPLE_APPOINTMENTS:
            session.add(Appointment(
                patient_id=patients[p_idx].id,
                doctor_id=doctors[d_idx].id,
                appointment_date=today + timedelta(days=offset),
                appointment_time=at,
                status=status.value,
            ))
    logger.info(
        f"Seeded {len(SAMPLE_DOCTORS)} doctors, {len(SAMPLE_PATIENTS)} patients, "
        f"{len(SAMPLE_APPOINTMENTS)} appointments"
    )
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="hospital_api.manage_db", description="Hospital database tools")
    parser.add_argument("command", choices=["init", "test", "seed", "drop"])
    parser.add_argument("--database-url", default=None, help=f"defaults to {settings.DATABASE_URL}")
    parser.add_argument("--confirm", action="store_true", help="required by drop")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO), format=settings.LOG_FORMAT)
    engine = create_db_engine(args.database_url)
    try:
        if args.command == "test":
            if not ping(engine):
                logger.error("Database connection test failed")
                return 1
            logger.info("Database connection test successful")
        elif args.command == "init":
            create_db_and_tables(engine)
            logger.info("Database tables created or verified")
        elif args.command == "seed":
            create_db_and_tables(engine)
            seed(engine)
        elif args.command == "drop":
            if not args.confirm:
                logger.warning("Refusing to drop tables without --confirm")
                return 2
            drop_db_and_tables(engine)
            logger.info("All tables dropped")
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
