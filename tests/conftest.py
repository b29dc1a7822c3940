"""Shared fixtures: a throwaway SQLite database, seeded accounts and clients."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

TEST_DB_PATH = Path(tempfile.gettempdir()) / "campus_api_test.db"
TEST_UPLOAD_DIR = Path(tempfile.gettempdir()) / "campus_api_test_uploads"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["UPLOAD_DIR"] = str(TEST_UPLOAD_DIR)
os.environ["RAZORPAY_WEBHOOK_SECRET"] = "whsec-test"
for name in (
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "AZURE_STORAGE_CONNECTION_STRING",
    "RAZORPAY_KEY_ID",
    "RAZORPAY_KEY_SECRET",
):
    os.environ.pop(name, None)

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.application.use_cases.users import (  # noqa: E402
    create_admin,
    create_student,
    create_teacher,
)
from app.domain.entities import Profile, User  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from main import create_app  # noqa: E402

PASSWORD = "Secret123"


@dataclass
class Accounts:
    admin: User
    teacher: User
    student: User
    other_student: User


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def accounts(db) -> Accounts:
    admin = create_admin(
        db,
        email="admin@college.edu",
        password=PASSWORD,
        profile=Profile(first_name="Ada", last_name="Admin"),
    )
    teacher = create_teacher(
        db,
        email="teacher@college.edu",
        password=PASSWORD,
        profile=Profile(first_name="Tara", last_name="Teacher"),
        details={"department": "Computer Science", "designation": "Professor"},
    )
    student = create_student(
        db,
        email="student@college.edu",
        password=PASSWORD,
        profile=Profile(first_name="Sam", last_name="Student"),
        details={"department": "Computer Science", "program": "B.Tech", "batch": "2024"},
    )
    other_student = create_student(
        db,
        email="other@college.edu",
        password=PASSWORD,
        profile=Profile(first_name="Olive", last_name="Other"),
        details={"department": "Computer Science", "program": "B.Tech", "batch": "2024"},
    )
    return Accounts(admin=admin, teacher=teacher, student=student, other_student=other_student)


@pytest.fixture()
def app():
    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def login(client: TestClient, email: str, password: str = PASSWORD) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def admin_headers(client, accounts) -> dict[str, str]:
    return login(client, accounts.admin.email)


@pytest.fixture()
def teacher_headers(client, accounts) -> dict[str, str]:
    return login(client, accounts.teacher.email)


@pytest.fixture()
def student_headers(client, accounts) -> dict[str, str]:
    return login(client, accounts.student.email)
