from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List
import logging

from ..core.exceptions import BadRequestError, NotFoundError, RecordNotFoundError
from ..core.security import UserRole, get_password_hash
from ..models.user import User
from ..schemas.user import UserUpdate
from ..stores.identity_store import IdentityStore

logger = logging.getLogger(__name__)

class UserService:
    """Administrative user management. Callers are not authenticated."""

    def __init__(self, db: Session):
        self.db = db
        self.users = IdentityStore(db)

    def list_users(self) -> List[User]:
        return self.users.find_all()

    def list_doctors(self) -> List[User]:
        return self.users.find_by_role(UserRole.DOCTOR)

    def get_user(self, user_id: int) -> User:
        user = self.users.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_user(self, user_id: int, update: UserUpdate) -> User:
        fields = update.model_dump(exclude_unset=True, exclude_none=True)
        if "password" in fields:
            fields["password_hash"] = get_password_hash(fields.pop("password"))

        try:
            user = self.users.update(user_id, **fields)
        except RecordNotFoundError:
            raise NotFoundError("User not found")
        except IntegrityError:
            self.db.rollback()
            raise BadRequestError("Email already in use")

        logger.info(f"Updated user {user_id}: {sorted(fields)}")
        return user

    def delete_user(self, user_id: int) -> User:
        try:
            user = self.users.delete(user_id)
        except RecordNotFoundError:
            raise NotFoundError("User not found")
        except IntegrityError:
            # Only reachable on databases created with an older, constrained schema
            self.db.rollback()
            logger.warning(f"Delete of user {user_id} rejected by a database constraint")
            raise BadRequestError("User is still referenced by other records")

        logger.info(f"Deleted user {user_id}")
        return user
