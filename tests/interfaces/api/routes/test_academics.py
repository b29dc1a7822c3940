"""Subjects, attendance and grading across the admin, teacher and student views."""

from __future__ import annotations

import pytest

from app.domain.entities import letter_for_percentage


@pytest.mark.parametrize(
    ("percentage", "letter"),
    [(95, "A+"), (90, "A+"), (85, "A"), (70, "B"), (65, "C"), (50, "D"), (45, "E"), (39.9, "F")],
)
def test_letter_bands(percentage: float, letter: str) -> None:
    assert letter_for_percentage(percentage) == letter


def _subject(client, headers, teacher_id: int, code: str, credits: int) -> int:
    response = client.post(
        "/api/admin/subjects",
        json={
            "code": code,
            "name": f"Subject {code}",
            "credits": credits,
            "department": "Computer Science",
            "semester": 1,
            "teacherId": teacher_id,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


def _exam(client, headers, subject_id: int) -> int:
    response = client.post(
        "/api/teacher/exams",
        json={
            "subjectId": subject_id,
            "name": "Mid term",
            "type": "midterm",
            "date": "2024-10-01",
            "maximumMarks": 50,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    assert response.json()["type"] == "midterm"
    return response.json()["id"]


def test_subject_codes_are_unique(client, accounts, admin_headers) -> None:
    _subject(client, admin_headers, accounts.teacher.id, "cs101", 4)

    duplicate = client.post(
        "/api/admin/subjects",
        json={"code": "CS101", "name": "Again", "credits": 3, "department": "CS", "semester": 1},
        headers=admin_headers,
    )

    assert duplicate.status_code == 400


def test_teacher_sees_enrolled_students(client, accounts, admin_headers, teacher_headers) -> None:
    subject_id = _subject(client, admin_headers, accounts.teacher.id, "CS101", 4)

    subjects = client.get("/api/teacher/subjects", headers=teacher_headers).json()
    students = client.get(f"/api/teacher/subjects/{subject_id}/students", headers=teacher_headers)

    assert [subject["code"] for subject in subjects] == ["CS101"]
    assert {student["id"] for student in students.json()} == {
        accounts.student.id,
        accounts.other_student.id,
    }


def test_grades_produce_letters_and_weighted_cgpa(
    client, accounts, admin_headers, teacher_headers, student_headers
) -> None:
    heavy = _subject(client, admin_headers, accounts.teacher.id, "CS101", 4)
    light = _subject(client, admin_headers, accounts.teacher.id, "CS102", 2)

    for subject_id, marks in ((heavy, 46), (light, 30)):
        response = client.post(
            "/api/teacher/grades",
            json={
                "examId": _exam(client, teacher_headers, subject_id),
                "grades": [{"studentId": accounts.student.id, "marksObtained": marks}],
            },
            headers=teacher_headers,
        )
        assert response.status_code == 200, response.text

    performance = client.get("/api/student/grades", headers=student_headers).json()

    assert sorted(grade["grade"] for grade in performance["grades"]) == ["A+", "C"]
    assert performance["totalCredits"] == 6
    assert performance["cgpa"] == round((4.0 * 4 + 2.0 * 2) / 6, 2)
    assert performance["overallPercentage"] == 76.0


def test_regrading_replaces_previous_mark(client, accounts, admin_headers, teacher_headers) -> None:
    subject_id = _subject(client, admin_headers, accounts.teacher.id, "CS101", 4)
    exam_id = _exam(client, teacher_headers, subject_id)
    for marks in (20, 40):
        client.post(
            "/api/teacher/grades",
            json={"examId": exam_id, "grades": [{"studentId": accounts.student.id, "marksObtained": marks}]},
            headers=teacher_headers,
        )

    grades = client.get(f"/api/teacher/grades?subjectId={subject_id}", headers=teacher_headers).json()

    assert len(grades) == 1
    assert grades[0]["marksObtained"] == 40
    assert grades[0]["grade"] == "A"


def test_marks_above_maximum_are_rejected(client, accounts, admin_headers, teacher_headers) -> None:
    subject_id = _subject(client, admin_headers, accounts.teacher.id, "CS101", 4)
    exam_id = _exam(client, teacher_headers, subject_id)

    response = client.post(
        "/api/teacher/grades",
        json={"examId": exam_id, "grades": [{"studentId": accounts.student.id, "marksObtained": 51}]},
        headers=teacher_headers,
    )

    assert response.status_code == 400


def test_attendance_summary_counts_late_as_present(
    client, accounts, admin_headers, teacher_headers, student_headers
) -> None:
    subject_id = _subject(client, admin_headers, accounts.teacher.id, "CS101", 4)
    for day, status in (("2024-09-02", "present"), ("2024-09-03", "late"), ("2024-09-04", "absent"), ("2024-09-05", "present")):
        response = client.post(
            "/api/teacher/attendance",
            json={
                "subjectId": subject_id,
                "date": day,
                "records": [{"studentId": accounts.student.id, "status": status}],
            },
            headers=teacher_headers,
        )
        assert response.status_code == 200, response.text

    summary = client.get("/api/student/attendance", headers=student_headers).json()["summary"]
    by_month = client.get(
        f"/api/teacher/attendance/{subject_id}?month=9&year=2024", headers=teacher_headers
    ).json()
    single_day = client.get(
        f"/api/teacher/attendance/{subject_id}?date=2024-09-03", headers=teacher_headers
    ).json()

    assert summary == [
        {
            "subjectId": subject_id,
            "subjectName": "Subject CS101",
            "total": 4,
            "present": 3,
            "absent": 1,
            "percentage": 75.0,
        }
    ]
    assert len(by_month) == 4
    assert [record["status"] for record in single_day] == ["late"]


def test_teacher_cannot_grade_foreign_subject(client, db, accounts, admin_headers) -> None:
    from app.application.use_cases.users import create_teacher
    from app.domain.entities import Profile
    from tests.conftest import PASSWORD, login

    outsider = create_teacher(
        db,
        email="outsider@college.edu",
        password=PASSWORD,
        profile=Profile(first_name="Out", last_name="Sider"),
        details={"department": "Physics", "designation": "Lecturer"},
    )
    subject_id = _subject(client, admin_headers, accounts.teacher.id, "CS101", 4)

    response = client.get(
        f"/api/teacher/subjects/{subject_id}/students", headers=login(client, outsider.email)
    )

    assert response.status_code == 404
