"""Use cases for subjects, exams, attendance, grades and assignments."""

from .assignments import (
    StudentAssignment,
    TeacherAssignment,
    create_assignment,
    grade_submission,
    list_assignment_submissions,
    list_student_assignments,
    list_teacher_assignments,
    submit_assignment,
)
from .attendance import (
    AttendanceMark,
    StudentAttendance,
    SubjectAttendanceSummary,
    get_student_attendance,
    get_subject_attendance,
    mark_attendance,
)
from .exams import create_exam, get_owned_exam, list_subject_exams
from .grades import (
    GradeEntry,
    StudentPerformance,
    get_student_performance,
    list_teacher_grades,
    record_grades,
)
from .subjects import (
    create_subject,
    delete_subject,
    get_owned_subject,
    get_subject,
    list_departments,
    list_subject_students,
    list_subjects,
    list_teacher_subjects,
    update_subject,
)

__all__ = [
    "AttendanceMark",
    "GradeEntry",
    "StudentAssignment",
    "StudentAttendance",
    "StudentPerformance",
    "SubjectAttendanceSummary",
    "TeacherAssignment",
    "create_assignment",
    "create_exam",
    "create_subject",
    "delete_subject",
    "get_owned_exam",
    "get_owned_subject",
    "get_student_attendance",
    "get_student_performance",
    "get_subject",
    "get_subject_attendance",
    "grade_submission",
    "list_assignment_submissions",
    "list_departments",
    "list_student_assignments",
    "list_subject_exams",
    "list_subject_students",
    "list_subjects",
    "list_teacher_assignments",
    "list_teacher_grades",
    "list_teacher_subjects",
    "mark_attendance",
    "record_grades",
    "submit_assignment",
    "update_subject",
]
