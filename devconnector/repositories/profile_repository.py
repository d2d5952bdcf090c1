"""
Profile Repository
"""
from typing import List, Optional

from devconnector.models.profile import ProfileDB
from devconnector.repositories.base import BaseRepository
from devconnector.schemas.profile import Experience, Profile, ProfileOwner

store_operation = BaseRepository.store_operation

# Request field name -> column name
_COLUMNS = {"githubusername": "github_username"}


def to_profile(row: ProfileDB) -> Profile:
    return Profile(
        id=row.id,
        user=ProfileOwner(id=row.user.id, name=row.user.name, avatar=row.user.avatar),
        company=row.company,
        website=row.website,
        location=row.location,
        bio=row.bio,
        status=row.status,
        githubusername=row.github_username,
        skills=list(row.skills or []),
        social=row.social or {},
        experience=[Experience.model_validate(item) for item in row.experience or []],
        created_at=row.created_at,
    )


class ProfileRepository(BaseRepository):
    """Profile data access layer"""

    def _locked(self, user_id: str) -> Optional[ProfileDB]:
        # Row lock for the read half of read-modify-write updates
        return (
            self.db.query(ProfileDB)
            .filter(ProfileDB.user_id == user_id)
            .with_for_update(of=ProfileDB)
            .first()
        )

    def _save(self, row: ProfileDB) -> Profile:
        self.db.commit()
        self.db.refresh(row)
        return to_profile(row)

    @store_operation
    def get_by_user(self, user_id: str) -> Optional[Profile]:
        """Get the profile owned by ``user_id``"""
        row = self.db.query(ProfileDB).filter(ProfileDB.user_id == user_id).first()
        return to_profile(row) if row else None

    @store_operation
    def list_all(self) -> List[Profile]:
        """Get every profile"""
        rows = self.db.query(ProfileDB).order_by(ProfileDB.created_at).all()
        return [to_profile(row) for row in rows]

    @store_operation
    def create(self, user_id: str, fields: dict, social: dict) -> Profile:
        """Create a profile from the supplied fields only"""
        row = ProfileDB(
            user_id=user_id,
            social={key: value for key, value in social.items() if value is not None},
            experience=[],
        )
        for name, value in fields.items():
            setattr(row, _COLUMNS.get(name, name), value)
        self.db.add(row)
        return self._save(row)

    @store_operation
    def update(self, user_id: str, fields: dict, social: dict) -> Optional[Profile]:
        """Apply a sparse update; returns None when the user has no profile"""
        row = self._locked(user_id)
        if row is None:
            self.db.rollback()
            return None

        for name, value in fields.items():
            setattr(row, _COLUMNS.get(name, name), value)
        if social:
            row.social = {**(row.social or {}), **social}
        return self._save(row)

    @store_operation
    def add_experience(self, user_id: str, experience: Experience) -> Optional[Profile]:
        """Insert ``experience`` at the front of the list"""
        row = self._locked(user_id)
        if row is None:
            self.db.rollback()
            return None

        entry = experience.model_dump(mode="json", by_alias=True)
        row.experience = [entry] + list(row.experience or [])
        return self._save(row)

    @store_operation
    def remove_experience(self, user_id: str, experience_id: str) -> Optional[Profile]:
        """Drop the experience entry with ``experience_id``, keeping the order of the rest"""
        row = self._locked(user_id)
        if row is None:
            self.db.rollback()
            return None

        row.experience = [item for item in row.experience or [] if item.get("id") != experience_id]
        return self._save(row)

    @store_operation
    def delete_by_user(self, user_id: str) -> bool:
        """Delete the profile owned by ``user_id``"""
        deleted = self.db.query(ProfileDB).filter(ProfileDB.user_id == user_id).delete()
        self.db.commit()
        return deleted > 0
