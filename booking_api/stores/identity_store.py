from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional

from ..core.exceptions import DuplicateEmailError, RecordNotFoundError
from ..core.security import UserRole
from ..models.user import User

class IdentityStore:
    """User records, looked up by id, email or role."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, **fields) -> User:
        if self.find_by_email(fields["email"]):
            raise DuplicateEmailError(fields["email"])

        user = User(**fields)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same address
            self.db.rollback()
            raise DuplicateEmailError(fields["email"])
        self.db.refresh(user)
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_role(self, role: UserRole) -> List[User]:
        return self.db.query(User).filter(User.role == role).order_by(User.id).all()

    def find_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def update(self, user_id: int, **fields) -> User:
        user = self.find_by_id(user_id)
        if not user:
            raise RecordNotFoundError("User", user_id)

        for key, value in fields.items():
            setattr(user, key, value)

        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if not user:
            raise RecordNotFoundError("User", user_id)

        self.db.delete(user)
        self.db.commit()
        return user
