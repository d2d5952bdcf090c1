from devconnector.models.profile import ProfileDB
from devconnector.models.user import UserDB

__all__ = ["ProfileDB", "UserDB"]
