from passlib.context import CryptContext

from devconnector.core.config import Settings


class PasswordHasher:
    """bcrypt hashing with a random salt per call."""

    def __init__(self, settings: Settings):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

    def hash(self, password: str) -> str:
        """Generate password hash from plain password."""
        return self.pwd_context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a plain password against its hash."""
        return self.pwd_context.verify(plain_password, hashed_password)
