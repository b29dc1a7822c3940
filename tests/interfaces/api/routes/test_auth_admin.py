"""Authentication, role checks and admin management endpoints."""

from __future__ import annotations

from app.application.use_cases.dashboard import get_dashboard_stats
from app.application.use_cases.users import create_student, update_user
from app.config import get_settings
from app.domain.entities import Profile, UserRole
from scripts.seed_data import seed
from tests.conftest import PASSWORD, login


def test_login_returns_token_and_user(client, accounts) -> None:
    response = client.post(
        "/api/auth/login", json={"email": accounts.admin.email, "password": PASSWORD}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["token"]
    assert payload["user"]["role"] == "admin"
    assert payload["user"]["profile"]["firstName"] == "Ada"
    assert "password" not in payload["user"]


def test_login_rejects_wrong_password(client, accounts) -> None:
    response = client.post(
        "/api/auth/login", json={"email": accounts.admin.email, "password": "wrong"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_deactivated_account_cannot_log_in(client, db, accounts) -> None:
    update_user(db, user_id=accounts.student.id, role=UserRole.STUDENT, is_active=False)

    response = client.post(
        "/api/auth/login", json={"email": accounts.student.email, "password": PASSWORD}
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "Account deactivated"


def test_token_of_deactivated_account_is_rejected(client, db, accounts) -> None:
    headers = login(client, accounts.student.email)
    update_user(db, user_id=accounts.student.id, role=UserRole.STUDENT, is_active=False)

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 403


def test_password_change_revokes_existing_tokens(client, db, accounts) -> None:
    headers = login(client, accounts.teacher.email)
    update_user(db, user_id=accounts.teacher.id, role=UserRole.TEACHER, password="Changed123")

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 401


def test_missing_or_garbage_token(client, accounts) -> None:
    assert client.get("/api/auth/me").status_code == 401
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_oauth2_token_endpoint(client, accounts) -> None:
    response = client.post(
        "/api/auth/token",
        data={"username": accounts.teacher.email, "password": PASSWORD},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"


def test_student_self_registration(client) -> None:
    response = client.post(
        "/api/auth/register/student",
        json={
            "email": "new@college.edu",
            "password": "Secret123",
            "profile": {"firstName": "Nia", "lastName": "New"},
            "studentDetails": {"department": "Physics", "program": "B.Sc", "batch": "2025"},
        },
    )

    assert response.status_code == 201
    details = response.json()["user"]["details"]
    assert details["studentCode"].startswith("STU")
    assert details["currentSemester"] == 1


def test_duplicate_registration_conflicts(client, accounts) -> None:
    response = client.post(
        "/api/auth/register/student",
        json={
            "email": accounts.student.email,
            "password": "Secret123",
            "profile": {"firstName": "Dup", "lastName": "Licate"},
            "studentDetails": {"department": "Physics", "program": "B.Sc", "batch": "2025"},
        },
    )

    assert response.status_code == 400


def test_validation_errors_use_common_envelope(client) -> None:
    response = client.post("/api/auth/login", json={"email": "not-an-email"})

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert body["errors"]


def test_forgot_password_answers_the_same_for_unknown_email(client, accounts, monkeypatch) -> None:
    sent = []
    monkeypatch.setattr(
        "app.interfaces.api.routes.auth.send_user_password_reset_email",
        lambda email, name, password: sent.append(email) or True,
    )

    known = client.post("/api/auth/forgot-password", json={"email": accounts.student.email})
    unknown = client.post("/api/auth/forgot-password", json={"email": "ghost@college.edu"})

    assert known.status_code == unknown.status_code == 202
    assert known.json() == unknown.json()
    assert sent == [accounts.student.email]


def test_admin_dashboard_requires_admin_role(client, admin_headers, student_headers) -> None:
    assert client.get("/api/admin/dashboard/stats", headers=student_headers).status_code == 403

    response = client.get("/api/admin/dashboard/stats", headers=admin_headers)

    assert response.status_code == 200
    stats = response.json()
    assert stats["totalStudents"] == 2
    assert stats["totalTeachers"] == 1
    assert stats["admissionsLast30Days"] == 2


def test_student_listing_is_paginated(client, db, accounts, admin_headers) -> None:
    for index in range(23):
        create_student(
            db,
            email=f"student{index}@college.edu",
            password=PASSWORD,
            profile=Profile(first_name=f"Student{index}", last_name="Bulk"),
            details={"department": "Mathematics", "program": "B.Sc", "batch": "2024"},
        )

    first = client.get("/api/admin/students", headers=admin_headers)
    second = client.get("/api/admin/students?page=2&limit=10", headers=admin_headers)
    third = client.get("/api/admin/students?page=3&limit=10", headers=admin_headers)
    filtered = client.get("/api/admin/students?department=Mathematics&limit=100", headers=admin_headers)

    assert first.status_code == 200
    assert len(first.json()["items"]) == 10
    assert first.json()["pagination"] == {"page": 1, "limit": 10, "total": 25, "pages": 3}
    assert len(second.json()["items"]) == 10
    assert second.json()["pagination"]["total"] == 25
    assert len(third.json()["items"]) == 5
    assert filtered.json()["pagination"]["total"] == 23


def test_pagination_limit_is_bounded(client, admin_headers) -> None:
    response = client.get("/api/admin/students?limit=500", headers=admin_headers)

    assert response.status_code == 400


def test_admin_creates_updates_and_deletes_teacher(client, admin_headers) -> None:
    created = client.post(
        "/api/admin/teachers",
        json={
            "email": "prof@college.edu",
            "password": "Secret123",
            "profile": {"firstName": "Pat", "lastName": "Prof"},
            "teacherDetails": {"department": "Physics", "designation": "Lecturer"},
        },
        headers=admin_headers,
    )
    assert created.status_code == 201
    teacher_id = created.json()["id"]
    assert created.json()["details"]["employeeCode"].startswith("TCH")

    updated = client.put(
        f"/api/admin/teachers/{teacher_id}",
        json={"teacherDetails": {"designation": "Senior Lecturer"}},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["details"]["designation"] == "Senior Lecturer"
    assert updated.json()["details"]["department"] == "Physics"

    assert client.delete(f"/api/admin/teachers/{teacher_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/admin/teachers/{teacher_id}", headers=admin_headers).status_code == 404


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_seeded_admin_can_read_dashboard(client, db) -> None:
    seed(db, batch="2024-2028", academic_year="2024-25", fee_amount=1000)
    settings = get_settings()

    headers = login(client, settings.seed_admin_email, settings.seed_admin_password)
    stats = client.get("/api/admin/dashboard/stats", headers=headers).json()

    assert stats["totalStudents"] == 5
    assert stats["totalTeachers"] == 2
    assert stats["totalSubjects"] == 3
    assert len(stats["recentAdmissions"]) == 5


def test_seeding_twice_is_a_no_op(db) -> None:
    seed(db, batch="2024-2028", academic_year="2024-25", fee_amount=1000)
    seed(db, batch="2024-2028", academic_year="2024-25", fee_amount=1000)

    stats = get_dashboard_stats(db)

    assert stats.total_students == 5
