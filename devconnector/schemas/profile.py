from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from devconnector.utils.validators import split_skills

SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def _is_blank(v: Any) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


class Social(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ExperienceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_default=True)

    title: str = None
    company: str = None
    location: Optional[str] = None
    from_date: date = Field(default=None, alias="from")
    to_date: Optional[date] = Field(default=None, alias="to")
    current: bool = False
    description: Optional[str] = None

    @field_validator("title", "company", "from_date", mode="before")
    @classmethod
    def required(cls, v: Any, info: ValidationInfo) -> Any:
        if _is_blank(v):
            label = {"title": "Title", "company": "Company", "from_date": "From date"}[info.field_name]
            raise ValueError(f"{label} is required")
        return v


class Experience(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: Optional[str] = None
    from_date: date = Field(alias="from")
    to_date: Optional[date] = Field(default=None, alias="to")
    current: bool = False
    description: Optional[str] = None


class ProfileUpdate(BaseModel):
    """
    Body of ``POST /api/profile``.

    Only the fields present in the request are written, so ``model_fields_set``
    separates "not sent" from an explicit ``null``.
    """

    model_config = ConfigDict(validate_default=True)

    status: str = None
    skills: List[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def status_required(cls, v: Any) -> str:
        if _is_blank(v):
            raise ValueError("Status is required")
        return v.strip() if isinstance(v, str) else v

    @field_validator("skills", mode="before")
    @classmethod
    def skills_required(cls, v: Any) -> List[str]:
        skills = split_skills(v)
        if not skills:
            raise ValueError("Skills is required")
        return skills

    def profile_fields(self) -> dict:
        """Top-level profile fields that were sent."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name not in SOCIAL_FIELDS
        }

    def social_fields(self) -> dict:
        """Social links that were sent."""
        return {name: getattr(self, name) for name in self.model_fields_set if name in SOCIAL_FIELDS}


class ProfileOwner(BaseModel):
    id: str
    name: str
    avatar: Optional[str] = None


class Profile(BaseModel):
    id: str
    user: ProfileOwner
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: str
    githubusername: Optional[str] = None
    skills: List[str] = []
    social: Social = Social()
    experience: List[Experience] = []
    created_at: Optional[datetime] = None
