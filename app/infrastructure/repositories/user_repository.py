"""Persistence layer for users and their role specific profiles."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import (
    AdminDetails,
    Profile,
    StudentDetails,
    TeacherDetails,
    User,
    UserRole,
)
from app.infrastructure.models import (
    AdminProfileModel,
    StudentProfileModel,
    TeacherProfileModel,
    UserModel,
)
from app.utils import PageRequest, PageResult, paginate


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter_by(email=email.lower()).first()
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        unique_ids = {int(user_id) for user_id in user_ids}
        if not unique_ids:
            return {}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def search(
        self,
        role: UserRole,
        page: PageRequest,
        *,
        search: str | None = None,
        department: str | None = None,
        semester: int | None = None,
        batch: str | None = None,
    ) -> PageResult[User]:
        query = self.session.query(UserModel).filter(UserModel.role == role.value)
        if role is UserRole.STUDENT:
            query = query.join(StudentProfileModel, StudentProfileModel.user_id == UserModel.id)
            if department:
                query = query.filter(StudentProfileModel.department == department)
            if semester is not None:
                query = query.filter(StudentProfileModel.current_semester == semester)
            if batch:
                query = query.filter(StudentProfileModel.batch == batch)
            code_column = StudentProfileModel.student_code
        elif role is UserRole.TEACHER:
            query = query.join(TeacherProfileModel, TeacherProfileModel.user_id == UserModel.id)
            if department:
                query = query.filter(TeacherProfileModel.department == department)
            code_column = TeacherProfileModel.employee_code
        else:
            code_column = UserModel.email
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    UserModel.first_name.ilike(pattern),
                    UserModel.last_name.ilike(pattern),
                    UserModel.email.ilike(pattern),
                    code_column.ilike(pattern),
                )
            )
        query = query.order_by(UserModel.created_at.desc(), UserModel.id.desc())
        rows, total = paginate(query, page)
        return PageResult(
            items=[self._to_entity(model) for model in rows],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    def count_by_role(self, role: UserRole) -> int:
        return self.session.query(UserModel).filter(UserModel.role == role.value).count()

    def count_admissions_since(self, start: date) -> int:
        return (
            self.session.query(StudentProfileModel)
            .filter(StudentProfileModel.admission_date >= start)
            .count()
        )

    def list_recent(self, role: UserRole, limit: int = 5) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.role == role.value)
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_students(
        self,
        *,
        department: str | None = None,
        semester: int | None = None,
        class_id: str | None = None,
        active_only: bool = True,
    ) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .join(StudentProfileModel, StudentProfileModel.user_id == UserModel.id)
        )
        if department:
            query = query.filter(StudentProfileModel.department == department)
        if semester is not None:
            query = query.filter(StudentProfileModel.current_semester == semester)
        if class_id:
            query = query.filter(StudentProfileModel.class_id == class_id)
        if active_only:
            query = query.filter(UserModel.is_active.is_(True))
        query = query.order_by(UserModel.first_name, UserModel.last_name)
        return [self._to_entity(model) for model in query.all()]

    def list_active_ids(self) -> list[int]:
        query = self.session.query(UserModel.id).filter(UserModel.is_active.is_(True))
        return [user_id for (user_id,) in query.all()]

    def list_ids_by_roles(self, roles: Iterable[UserRole | str]) -> list[int]:
        values = [UserRole(role).value for role in roles]
        if not values:
            return []
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.role.in_(values))
            .filter(UserModel.is_active.is_(True))
        )
        return [user_id for (user_id,) in query.all()]

    def list_ids_by_department(self, department: str) -> list[int]:
        students = (
            self.session.query(UserModel.id)
            .join(StudentProfileModel, StudentProfileModel.user_id == UserModel.id)
            .filter(StudentProfileModel.department == department)
            .filter(UserModel.is_active.is_(True))
        )
        teachers = (
            self.session.query(UserModel.id)
            .join(TeacherProfileModel, TeacherProfileModel.user_id == UserModel.id)
            .filter(TeacherProfileModel.department == department)
            .filter(UserModel.is_active.is_(True))
        )
        return [user_id for (user_id,) in students.union(teachers).all()]

    def list_ids_by_batch(self, batch: str) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .join(StudentProfileModel, StudentProfileModel.user_id == UserModel.id)
            .filter(StudentProfileModel.batch == batch)
            .filter(UserModel.is_active.is_(True))
        )
        return [user_id for (user_id,) in query.all()]

    def list_ids_by_class(self, class_id: str) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .join(StudentProfileModel, StudentProfileModel.user_id == UserModel.id)
            .filter(StudentProfileModel.class_id == class_id)
            .filter(UserModel.is_active.is_(True))
        )
        return [user_id for (user_id,) in query.all()]

    def filter_existing_ids(self, user_ids: Iterable[int]) -> list[int]:
        unique_ids = {int(user_id) for user_id in user_ids}
        if not unique_ids:
            return []
        query = self.session.query(UserModel.id).filter(UserModel.id.in_(unique_ids))
        return [user_id for (user_id,) in query.all()]

    def code_exists(self, code: str) -> bool:
        return any(
            self.session.query(column).filter(column == code).first() is not None
            for column in (
                StudentProfileModel.student_code,
                TeacherProfileModel.employee_code,
                AdminProfileModel.admin_code,
            )
        )

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int) -> None:
        model = self.session.get(UserModel, user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.email = user.email.lower()
        model.password = user.password
        model.role = user.role.value
        model.first_name = user.profile.first_name
        model.last_name = user.profile.last_name
        model.phone = user.profile.phone
        model.address = user.profile.address
        model.date_of_birth = user.profile.date_of_birth
        model.gender = user.profile.gender
        model.avatar = user.profile.avatar
        model.is_active = user.is_active
        model.last_login = user.last_login
        if user.created_at is not None:
            model.created_at = user.created_at

        details = user.details
        if isinstance(details, StudentDetails):
            profile = model.student_profile or StudentProfileModel()
            profile.student_code = details.student_code
            profile.department = details.department
            profile.program = details.program
            profile.batch = details.batch
            profile.current_semester = details.current_semester
            profile.admission_date = details.admission_date
            profile.class_id = details.class_id
            profile.father_name = details.father_name
            profile.mother_name = details.mother_name
            profile.guardian_phone = details.guardian_phone
            profile.guardian_email = details.guardian_email
            model.student_profile = profile
        elif isinstance(details, TeacherDetails):
            profile = model.teacher_profile or TeacherProfileModel()
            profile.employee_code = details.employee_code
            profile.department = details.department
            profile.designation = details.designation
            profile.qualifications = list(details.qualifications)
            profile.joining_date = details.joining_date
            profile.salary = details.salary
            model.teacher_profile = profile
        else:
            profile = model.admin_profile or AdminProfileModel()
            profile.admin_code = details.admin_code
            profile.permissions = list(details.permissions)
            model.admin_profile = profile

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        role = UserRole(model.role)
        if role is UserRole.STUDENT:
            profile = model.student_profile
            details = StudentDetails(
                student_code=profile.student_code,
                department=profile.department,
                program=profile.program,
                batch=profile.batch,
                current_semester=profile.current_semester,
                admission_date=profile.admission_date,
                class_id=profile.class_id,
                father_name=profile.father_name,
                mother_name=profile.mother_name,
                guardian_phone=profile.guardian_phone,
                guardian_email=profile.guardian_email,
            )
        elif role is UserRole.TEACHER:
            profile = model.teacher_profile
            details = TeacherDetails(
                employee_code=profile.employee_code,
                department=profile.department,
                designation=profile.designation,
                qualifications=list(profile.qualifications or []),
                joining_date=profile.joining_date,
                salary=profile.salary,
            )
        else:
            profile = model.admin_profile
            details = AdminDetails(
                admin_code=profile.admin_code,
                permissions=list(profile.permissions or []),
            )

        return User(
            id=model.id,
            email=model.email,
            password=model.password,
            role=role,
            profile=Profile(
                first_name=model.first_name,
                last_name=model.last_name,
                phone=model.phone,
                address=model.address,
                date_of_birth=model.date_of_birth,
                gender=model.gender,
                avatar=model.avatar,
            ),
            details=details,
            is_active=model.is_active,
            last_login=model.last_login,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["UserRepository"]
