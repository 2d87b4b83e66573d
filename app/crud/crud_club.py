# app/crud/crud_club.py
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from .base import CRUDBase
from app.models.club import Club, ClubMember, ClubMemberRole, ClubStatus
from app.schemas.club import ClubCreate, ClubJoin, ClubUpdate


class CRUDClub(CRUDBase[Club, ClubCreate, ClubUpdate]):
    def get_by_name(self, db: Session, *, name: str) -> Optional[Club]:
        return db.query(self.model).filter(self.model.name == name).first()

    def get_for_update(self, db: Session, *, club_id: int) -> Optional[Club]:
        """Lock the club row while its leader or member count changes."""
        return (
            db.query(self.model)
            .filter(self.model.id == club_id)
            .with_for_update()
            .first()
        )

    def get_detail(self, db: Session, *, club_id: int) -> Optional[Club]:
        return (
            db.query(self.model)
            .options(
                joinedload(self.model.leader),
                selectinload(self.model.members).joinedload(ClubMember.user),
            )
            .filter(self.model.id == club_id)
            .first()
        )

    def get_multi_ordered(self, db: Session) -> List[Club]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.leader))
            .order_by(self.model.name.asc())
            .all()
        )

    def get_pending(self, db: Session) -> List[Club]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.leader))
            .filter(self.model.status == ClubStatus.PENDING.value)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )


class CRUDClubMember(CRUDBase[ClubMember, ClubJoin, ClubJoin]):
    def get_membership(self, db: Session, *, club_id: int, user_id: int) -> Optional[ClubMember]:
        return (
            db.query(self.model)
            .filter(self.model.club_id == club_id, self.model.user_id == user_id)
            .first()
        )

    def get_leader(self, db: Session, *, club_id: int) -> Optional[ClubMember]:
        return (
            db.query(self.model)
            .filter(
                self.model.club_id == club_id,
                self.model.role == ClubMemberRole.LEADER.value,
            )
            .first()
        )

    def get_multi_by_club(self, db: Session, *, club_id: int) -> List[ClubMember]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.user))
            .filter(self.model.club_id == club_id)
            .order_by(self.model.created_at.asc(), self.model.id.asc())
            .all()
        )


club = CRUDClub(Club)
club_member = CRUDClubMember(ClubMember)
