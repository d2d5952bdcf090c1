from loguru import logger
from sqlalchemy.orm import Session

from devconnector.core.config import Settings
from devconnector.core.exceptions import DuplicateUser, InvalidCredentials, UserNotFound
from devconnector.core.security import PasswordHasher
from devconnector.repositories.credential_repository import CredentialRepository
from devconnector.schemas.user import LoginRequest, RegisterRequest, User
from devconnector.services.token_service import TokenService
from devconnector.utils.gravatar import gravatar_url


class UserService:
    """Registration, login and the current-user lookup."""

    def __init__(
        self,
        db: Session,
        settings: Settings,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.users = CredentialRepository(db)
        self.settings = settings
        self.hasher = hasher
        self.tokens = tokens

    def register(self, user_in: RegisterRequest) -> str:
        """Create a user and return a token for it."""
        if self.users.get_by_email(user_in.email):
            raise DuplicateUser()

        user = self.users.create(
            name=user_in.name,
            email=user_in.email,
            hashed_password=self.hasher.hash(user_in.password),
            avatar=gravatar_url(user_in.email, self.settings.GRAVATAR_URL),
        )
        logger.info(f"Registered user {user.id}")
        return self.tokens.issue(user.id)

    def authenticate(self, credentials: LoginRequest) -> str:
        """Check email and password and return a token on match."""
        user = self.users.get_by_email(credentials.email)
        if not user or not self.hasher.verify(credentials.password, user.hashed_password):
            logger.warning("Failed login attempt")
            raise InvalidCredentials()

        logger.info(f"User {user.id} logged in")
        return self.tokens.issue(user.id)

    def get_user(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if not user:
            raise UserNotFound()
        return user
