"""Populate an empty database with demo accounts, subjects and fees."""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from app.application.use_cases.academics import create_subject
from app.application.use_cases.fees import create_fee
from app.application.use_cases.users import create_admin, create_student, create_teacher
from app.config import get_settings
from app.domain.entities import Profile
from app.domain.errors import ConflictError
from app.infrastructure.database import SessionLocal, initialize_database
from app.utils import today_in_app_timezone

logger = logging.getLogger("seed_data")

TEACHERS = [
    ("Anita", "Rao", "anita.rao@college.edu", "Computer Science", "Associate Professor"),
    ("Vikram", "Shah", "vikram.shah@college.edu", "Electronics", "Assistant Professor"),
]

STUDENTS = [
    ("Rahul", "Verma", "rahul@college.edu", "Computer Science", "B.Tech CSE"),
    ("Priya", "Nair", "priya@college.edu", "Computer Science", "B.Tech CSE"),
    ("Arjun", "Mehta", "arjun@college.edu", "Electronics", "B.Tech ECE"),
    ("Sneha", "Iyer", "sneha@college.edu", "Electronics", "B.Tech ECE"),
    ("Karan", "Gupta", "karan@college.edu", "Computer Science", "B.Tech CSE"),
]

SUBJECTS = [
    ("CS101", "Programming Fundamentals", 4, "Computer Science", 1, 0),
    ("CS102", "Data Structures", 4, "Computer Science", 1, 0),
    ("EC101", "Circuit Theory", 3, "Electronics", 1, 1),
]

DEFAULT_PASSWORD = "password123"


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo data for the Campus API.")
    parser.add_argument("--batch", default="2024-2028", help="Batch assigned to seeded students")
    parser.add_argument(
        "--academic-year", default="2024-25", help="Academic year of the seeded fees"
    )
    parser.add_argument(
        "--fee", type=float, default=50000.0, help="Total amount of each seeded fee"
    )
    return parser.parse_args()


def seed(session: Session, *, batch: str, academic_year: str, fee_amount: float) -> None:
    settings = get_settings()
    try:
        create_admin(
            session,
            email=settings.seed_admin_email,
            password=settings.seed_admin_password,
            profile=Profile(first_name="System", last_name="Administrator"),
            permissions=["all"],
        )
    except ConflictError:
        logger.info("Admin %s already present, skipping seed", settings.seed_admin_email)
        return

    teacher_ids = []
    for first, last, email, department, designation in TEACHERS:
        teacher = create_teacher(
            session,
            email=email,
            password=DEFAULT_PASSWORD,
            profile=Profile(first_name=first, last_name=last),
            details={"department": department, "designation": designation},
        )
        teacher_ids.append(teacher.id)

    for code, name, credits, department, semester, teacher_index in SUBJECTS:
        create_subject(
            session,
            code=code,
            name=name,
            credits=credits,
            department=department,
            semester=semester,
            teacher_id=teacher_ids[teacher_index],
        )

    due_date = today_in_app_timezone() + timedelta(days=30)
    for first, last, email, department, program in STUDENTS:
        student = create_student(
            session,
            email=email,
            password=DEFAULT_PASSWORD,
            profile=Profile(first_name=first, last_name=last),
            details={"department": department, "program": program, "batch": batch},
        )
        create_fee(
            session,
            student_id=student.id,
            academic_year=academic_year,
            semester=1,
            total_amount=fee_amount,
            due_date=due_date,
        )

    logger.info(
        "Seeded 1 admin, %d teachers, %d subjects and %d students",
        len(TEACHERS),
        len(SUBJECTS),
        len(STUDENTS),
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    args = _parse_args()
    initialize_database()
    session = SessionLocal()
    try:
        seed(session, batch=args.batch, academic_year=args.academic_year, fee_amount=args.fee)
    finally:
        session.close()


if __name__ == "__main__":
    main()
