"""Assignment submissions and the fee ledger."""

from __future__ import annotations

from tests.conftest import login


def _assignment(client, admin_headers, teacher_headers, teacher_id: int, due: str) -> int:
    subject = client.post(
        "/api/admin/subjects",
        json={
            "code": "CS201",
            "name": "Data Structures",
            "credits": 4,
            "department": "Computer Science",
            "semester": 1,
            "teacherId": teacher_id,
        },
        headers=admin_headers,
    )
    assert subject.status_code == 201, subject.text

    response = client.post(
        "/api/teacher/assignments",
        json={
            "subjectId": subject.json()["id"],
            "title": "Linked lists",
            "dueDate": due,
            "maximumMarks": 20,
        },
        headers=teacher_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


def test_submission_and_grading_flow(
    client, accounts, admin_headers, teacher_headers, student_headers
) -> None:
    assignment_id = _assignment(
        client, admin_headers, teacher_headers, accounts.teacher.id, "2099-01-01T00:00:00"
    )

    pending = client.get("/api/student/assignments?status=pending", headers=student_headers)
    assert [item["assignment"]["id"] for item in pending.json()] == [assignment_id]

    submitted = client.post(
        f"/api/student/assignments/{assignment_id}/submit",
        json={"fileUrl": "/uploads/documents/answer.pdf"},
        headers=student_headers,
    )
    assert submitted.status_code == 201, submitted.text
    assert submitted.json()["status"] == "submitted"

    again = client.post(
        f"/api/student/assignments/{assignment_id}/submit",
        json={"fileUrl": "/uploads/documents/answer-v2.pdf"},
        headers=student_headers,
    )
    assert again.status_code == 400
    assert again.json()["detail"] == "Assignment already submitted"

    listing = client.get("/api/teacher/assignments", headers=teacher_headers).json()
    assert listing[0]["status"] == "active"
    assert listing[0]["submissionCount"] == 1

    submissions = client.get(
        f"/api/teacher/assignments/{assignment_id}/submissions", headers=teacher_headers
    ).json()
    submission_id = submissions[0]["id"]

    too_high = client.put(
        f"/api/teacher/assignments/{assignment_id}/submissions/{submission_id}/grade",
        json={"marks": 25},
        headers=teacher_headers,
    )
    assert too_high.status_code == 400

    graded = client.put(
        f"/api/teacher/assignments/{assignment_id}/submissions/{submission_id}/grade",
        json={"marks": 18, "feedback": "Good work"},
        headers=teacher_headers,
    )
    assert graded.status_code == 200, graded.text
    assert graded.json()["status"] == "graded"
    assert graded.json()["marks"] == 18

    mine = client.get("/api/student/assignments?status=submitted", headers=student_headers).json()
    assert mine[0]["submission"]["feedback"] == "Good work"


def test_submission_after_due_date_is_late(
    client, accounts, admin_headers, teacher_headers, student_headers
) -> None:
    assignment_id = _assignment(
        client, admin_headers, teacher_headers, accounts.teacher.id, "2000-01-01T00:00:00"
    )

    overdue = client.get("/api/student/assignments?status=overdue", headers=student_headers)
    assert len(overdue.json()) == 1

    response = client.post(
        f"/api/student/assignments/{assignment_id}/submit",
        json={"fileUrl": "/uploads/documents/late.pdf"},
        headers=student_headers,
    )
    assert response.json()["status"] == "late"
    assert client.get("/api/teacher/assignments", headers=teacher_headers).json()[0][
        "status"
    ] == "closed"


def test_invalid_assignment_filter_is_rejected(client, accounts, student_headers) -> None:
    response = client.get("/api/student/assignments?status=graded", headers=student_headers)
    assert response.status_code == 400


def test_grading_foreign_assignment_is_hidden(
    client, accounts, admin_headers, teacher_headers
) -> None:
    assignment_id = _assignment(
        client, admin_headers, teacher_headers, accounts.teacher.id, "2099-01-01T00:00:00"
    )
    created = client.post(
        "/api/admin/teachers",
        json={
            "email": "second@college.edu",
            "password": "Secret123",
            "profile": {"firstName": "Second", "lastName": "Teacher"},
            "teacherDetails": {"department": "Computer Science", "designation": "Lecturer"},
        },
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    second = login(client, "second@college.edu")

    response = client.get(
        f"/api/teacher/assignments/{assignment_id}/submissions", headers=second
    )
    assert response.status_code == 404


def test_fee_ledger_derives_status(client, accounts, admin_headers, student_headers) -> None:
    created = client.post(
        "/api/admin/fees",
        json={
            "studentId": accounts.student.id,
            "academicYear": "2024-25",
            "semester": 1,
            "totalAmount": 5000,
            "paidAmount": 2000,
            "dueDate": "2024-12-31",
        },
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    fee = created.json()
    assert fee["dueAmount"] == 3000
    assert fee["status"] == "partial"

    paid = client.put(
        f"/api/admin/fees/{fee['id']}", json={"paidAmount": 5000}, headers=admin_headers
    )
    assert paid.json()["status"] == "paid"
    assert paid.json()["dueAmount"] == 0

    client.post(
        "/api/admin/fees",
        json={
            "studentId": accounts.student.id,
            "academicYear": "2024-25",
            "semester": 2,
            "totalAmount": 4000,
            "dueDate": "2025-06-30",
            "status": "overdue",
        },
        headers=admin_headers,
    )

    summary = client.get("/api/student/fees", headers=student_headers).json()
    assert summary["total"] == 9000
    assert summary["paid"] == 5000
    assert summary["due"] == 4000
    assert {item["status"] for item in summary["fees"]} == {"paid", "overdue"}

    overdue = client.get("/api/admin/fees?status=overdue", headers=admin_headers).json()
    assert overdue["pagination"]["total"] == 1


def test_fee_requires_a_student(client, accounts, admin_headers) -> None:
    response = client.post(
        "/api/admin/fees",
        json={
            "studentId": accounts.teacher.id,
            "academicYear": "2024-25",
            "semester": 1,
            "totalAmount": 100,
            "dueDate": "2024-12-31",
        },
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Student does not exist"
