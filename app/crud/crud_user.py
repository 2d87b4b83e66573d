# app/crud/crud_user.py
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.reservation import Reservation
from app.models.user import Role, User
from app.schemas.user import User as UserSchema


class CRUDUser(CRUDBase[User, UserSchema, UserSchema]):
    def get_by_intra_id(self, db: Session, *, intra_id: str) -> Optional[User]:
        return db.query(self.model).filter(self.model.intra_id == intra_id).first()

    def get_for_update(self, db: Session, *, user_id: int) -> Optional[User]:
        """Lock the user row while its penalty counters are read and bumped."""
        return (
            db.query(self.model)
            .filter(self.model.id == user_id)
            .with_for_update()
            .first()
        )

    def get_multi_with_reservation_count(self, db: Session) -> List[Tuple[User, int]]:
        return (
            db.query(self.model, func.count(Reservation.id))
            .outerjoin(Reservation, Reservation.user_id == self.model.id)
            .group_by(self.model.id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )

    def update_role(self, db: Session, *, db_obj: User, role: Role) -> User:
        return self.update(db, db_obj=db_obj, obj_in={"role": role.value})


user = CRUDUser(User)
