"""
Credential Repository
"""
from typing import Optional

from sqlalchemy.exc import IntegrityError

from devconnector.core.exceptions import DuplicateUser
from devconnector.models.user import UserDB
from devconnector.repositories.base import BaseRepository
from devconnector.schemas.user import User, UserInDB

store_operation = BaseRepository.store_operation


class CredentialRepository(BaseRepository):
    """User data access layer"""

    @store_operation
    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        row = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return User.model_validate(row) if row else None

    @store_operation
    def get_by_email(self, email: str) -> Optional[UserInDB]:
        """Get user by email, including the password hash"""
        row = self.db.query(UserDB).filter(UserDB.email == email).first()
        return UserInDB.model_validate(row) if row else None

    @store_operation
    def create(self, *, name: str, email: str, hashed_password: str, avatar: Optional[str]) -> User:
        """Create user"""
        row = UserDB(name=name, email=email, hashed_password=hashed_password, avatar=avatar)
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with another registration for the same email
            self.db.rollback()
            raise DuplicateUser()
        self.db.refresh(row)
        return User.model_validate(row)

    @store_operation
    def delete(self, user_id: str) -> bool:
        """Delete user"""
        deleted = self.db.query(UserDB).filter(UserDB.id == user_id).delete()
        self.db.commit()
        return deleted > 0
