import uuid
from typing import List, Tuple

from fastapi import status
from loguru import logger
from sqlalchemy.orm import Session

from devconnector.core.exceptions import NoProfile, UserNotFound
from devconnector.repositories.credential_repository import CredentialRepository
from devconnector.repositories.profile_repository import ProfileRepository
from devconnector.schemas.profile import Experience, ExperienceCreate, Profile, ProfileUpdate


def is_valid_id(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (TypeError, ValueError):
        return False
    return True


class ProfileService:
    """Profile reads and writes, scoped to the authenticated user for writes."""

    def __init__(self, db: Session):
        self.profiles = ProfileRepository(db)
        self.users = CredentialRepository(db)

    def get_own(self, user_id: str) -> Profile:
        profile = self.profiles.get_by_user(user_id)
        if not profile:
            raise NoProfile("There is no profile for this user", status.HTTP_400_BAD_REQUEST)
        return profile

    def upsert(self, user_id: str, profile_in: ProfileUpdate) -> Tuple[Profile, bool]:
        """
        Create the profile or update the fields that were sent.

        Returns the profile and whether it was created.
        """
        fields = profile_in.profile_fields()
        social = profile_in.social_fields()

        profile = self.profiles.update(user_id, fields, social)
        if profile:
            return profile, False

        # The token can outlive the account it was issued for
        if not self.users.get_by_id(user_id):
            raise UserNotFound()

        profile = self.profiles.create(user_id, fields, social)
        logger.info(f"Created profile {profile.id} for user {user_id}")
        return profile, True

    def list_all(self) -> List[Profile]:
        return self.profiles.list_all()

    def get_by_user(self, user_id: str) -> Profile:
        # A malformed id can't match any user, so it is reported as not found
        profile = self.profiles.get_by_user(user_id) if is_valid_id(user_id) else None
        if not profile:
            raise NoProfile()
        return profile

    def delete(self, user_id: str) -> None:
        """Delete the profile and then the user account."""
        self.profiles.delete_by_user(user_id)
        self.users.delete(user_id)
        logger.info(f"Deleted profile and account of user {user_id}")

    def add_experience(self, user_id: str, experience_in: ExperienceCreate) -> Profile:
        experience = Experience(id=str(uuid.uuid4()), **experience_in.model_dump())
        profile = self.profiles.add_experience(user_id, experience)
        if not profile:
            raise NoProfile()
        return profile

    def remove_experience(self, user_id: str, experience_id: str) -> Profile:
        profile = self.profiles.remove_experience(user_id, experience_id)
        if not profile:
            raise NoProfile()
        return profile
