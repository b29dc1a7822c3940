"""Persistence helpers for clubs and club memberships."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import Club, ClubMembership
from app.infrastructure.models import ClubMembershipModel, ClubModel, UserModel
from app.utils import now_in_app_naive_datetime


class ClubRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, club_id: int) -> Club | None:
        model = self.session.get(ClubModel, club_id)
        return self._to_entity(model, self._member_count(club_id)) if model else None

    def list_active(self) -> list[Club]:
        counts = dict(
            self.session.query(ClubMembershipModel.club_id, func.count(ClubMembershipModel.id))
            .filter(ClubMembershipModel.status == "active")
            .group_by(ClubMembershipModel.club_id)
            .all()
        )
        query = (
            self.session.query(ClubModel)
            .filter(ClubModel.is_active.is_(True))
            .order_by(ClubModel.name)
        )
        return [self._to_entity(model, counts.get(model.id, 0)) for model in query.all()]

    def create(self, club: Club, *, president_position: str = "president") -> Club:
        """Persist ``club`` and, when it has a president, their membership."""

        model = ClubModel(
            name=club.name,
            description=club.description,
            category=club.category,
            president_id=club.president_id,
            faculty_advisor_id=club.faculty_advisor_id,
            established_on=club.established_on,
            is_active=club.is_active,
            logo_url=club.logo_url,
        )
        self.session.add(model)
        self.session.flush()
        if club.president_id is not None:
            self.session.add(
                ClubMembershipModel(
                    club_id=model.id,
                    student_id=club.president_id,
                    position=president_position,
                )
            )
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model, self._member_count(model.id))

    def get_membership(self, membership_id: int) -> ClubMembership | None:
        model = self.session.get(ClubMembershipModel, membership_id)
        return self._membership_to_entity(model) if model else None

    def get_active_membership(self, club_id: int, student_id: int) -> ClubMembership | None:
        model = (
            self.session.query(ClubMembershipModel)
            .filter_by(club_id=club_id, student_id=student_id, status="active")
            .first()
        )
        return self._membership_to_entity(model) if model else None

    def add_membership(self, membership: ClubMembership) -> ClubMembership:
        model = ClubMembershipModel(
            club_id=membership.club_id,
            student_id=membership.student_id,
            position=membership.position,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._membership_to_entity(model)

    def end_membership(self, membership_id: int) -> ClubMembership:
        model = self.session.get(ClubMembershipModel, membership_id)
        if model is None:
            msg = f"Membership with id {membership_id} not found"
            raise ValueError(msg)
        model.status = "inactive"
        model.left_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._membership_to_entity(model)

    def list_members(self, club_id: int) -> list[ClubMembership]:
        query = (
            self.session.query(ClubMembershipModel, UserModel)
            .join(UserModel, UserModel.id == ClubMembershipModel.student_id)
            .filter(ClubMembershipModel.club_id == club_id)
            .filter(ClubMembershipModel.status == "active")
            .order_by(ClubMembershipModel.joined_at)
        )
        members = []
        for model, student in query.all():
            membership = self._membership_to_entity(model)
            membership.student_name = f"{student.first_name} {student.last_name}"
            members.append(membership)
        return members

    def _member_count(self, club_id: int) -> int:
        return (
            self.session.query(func.count(ClubMembershipModel.id))
            .filter(ClubMembershipModel.club_id == club_id)
            .filter(ClubMembershipModel.status == "active")
            .scalar()
            or 0
        )

    @staticmethod
    def _to_entity(model: ClubModel, member_count: int) -> Club:
        return Club(
            id=model.id,
            name=model.name,
            description=model.description,
            category=model.category,
            president_id=model.president_id,
            faculty_advisor_id=model.faculty_advisor_id,
            established_on=model.established_on,
            is_active=model.is_active,
            logo_url=model.logo_url,
            member_count=member_count,
            created_at=model.created_at,
        )

    @staticmethod
    def _membership_to_entity(model: ClubMembershipModel) -> ClubMembership:
        return ClubMembership(
            id=model.id,
            club_id=model.club_id,
            student_id=model.student_id,
            position=model.position,
            status=model.status,
            joined_at=model.joined_at,
            left_at=model.left_at,
        )


__all__ = ["ClubRepository"]
