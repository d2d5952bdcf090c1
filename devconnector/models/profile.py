from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from devconnector.db.database import Base
from devconnector.models.user import new_id, utcnow


class ProfileDB(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False)
    company = Column(String, nullable=True)
    website = Column(String, nullable=True)
    location = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    status = Column(String, nullable=False)
    github_username = Column(String, nullable=True)
    skills = Column(JSON, nullable=False, default=list)  # List of skills
    social = Column(JSON, nullable=False, default=dict)  # youtube, twitter, facebook, linkedin, instagram
    experience = Column(JSON, nullable=False, default=list)  # Most recent first
    created_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("UserDB", lazy="joined")
