"""Persistence helpers for fee ledgers."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Fee
from app.infrastructure.models import FeeModel
from app.utils import PageRequest, PageResult, paginate


class FeeRepository:
    """Provide CRUD operations for :class:`Fee` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, fee_id: int) -> Fee | None:
        model = self.session.get(FeeModel, fee_id)
        return self._to_entity(model) if model else None

    def search(
        self,
        page: PageRequest,
        *,
        status: str | None = None,
        academic_year: str | None = None,
        student_id: int | None = None,
    ) -> PageResult[Fee]:
        query = self.session.query(FeeModel)
        if status:
            query = query.filter(FeeModel.status == status)
        if academic_year:
            query = query.filter(FeeModel.academic_year == academic_year)
        if student_id is not None:
            query = query.filter(FeeModel.student_id == student_id)
        query = query.order_by(FeeModel.due_date.desc(), FeeModel.id.desc())
        rows, total = paginate(query, page)
        return PageResult(
            items=[self._to_entity(model) for model in rows],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    def list_for_student(self, student_id: int) -> list[Fee]:
        query = (
            self.session.query(FeeModel)
            .filter(FeeModel.student_id == student_id)
            .order_by(FeeModel.academic_year.desc(), FeeModel.semester.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, fee: Fee) -> Fee:
        model = FeeModel()
        self._apply_entity_to_model(model, fee)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, fee: Fee, *, commit: bool = True) -> Fee:
        model = self.session.get(FeeModel, fee.id)
        if model is None:
            msg = f"Fee with id {fee.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, fee)
        self.session.add(model)
        if not commit:
            self.session.flush()
            return self._to_entity(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def credit(self, fee_id: int, amount: float) -> Fee | None:
        """Add ``amount`` to the paid total in SQL and re-derive due amount and status.

        Only flushes; the caller owns the transaction.
        """

        updated = (
            self.session.query(FeeModel)
            .filter(FeeModel.id == fee_id)
            .update(
                {FeeModel.paid_amount: FeeModel.paid_amount + amount},
                synchronize_session=False,
            )
        )
        if not updated:
            return None
        model = self.session.get(FeeModel, fee_id, populate_existing=True)
        fee = self._to_entity(model)
        fee.recompute()
        self._apply_entity_to_model(model, fee)
        self.session.flush()
        return self._to_entity(model)

    def delete(self, fee_id: int) -> None:
        model = self.session.get(FeeModel, fee_id)
        if model is None:
            msg = f"Fee with id {fee_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _apply_entity_to_model(model: FeeModel, fee: Fee) -> None:
        model.student_id = fee.student_id
        model.academic_year = fee.academic_year
        model.semester = fee.semester
        model.total_amount = fee.total_amount
        model.paid_amount = fee.paid_amount
        model.due_amount = fee.due_amount
        model.due_date = fee.due_date
        model.status = fee.status

    @staticmethod
    def _to_entity(model: FeeModel) -> Fee:
        return Fee(
            id=model.id,
            student_id=model.student_id,
            academic_year=model.academic_year,
            semester=model.semester,
            total_amount=model.total_amount,
            paid_amount=model.paid_amount,
            due_amount=model.due_amount,
            due_date=model.due_date,
            status=model.status,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["FeeRepository"]
