from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from devconnector.core.config import Settings
from devconnector.core.exceptions import InvalidToken
from devconnector.schemas.token import TokenPayload


class TokenService:
    """Issues and verifies the signed identity tokens sent in ``x-auth-token``."""

    def __init__(self, settings: Settings):
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.lifetime = timedelta(seconds=settings.TOKEN_EXPIRE_SECONDS)

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Create a token for ``user_id`` that expires after the configured lifetime."""
        current_time = now or datetime.now(timezone.utc)
        expire = current_time + self.lifetime

        to_encode = {
            "sub": str(user_id),
            "iat": int(current_time.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str, now: Optional[datetime] = None) -> TokenPayload:
        """Verify and decode a token."""
        current_time = now or datetime.now(timezone.utc)
        try:
            # Expiry is checked below against ``current_time``
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
            token_data = TokenPayload(
                sub=payload["sub"],
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (JWTError, KeyError, TypeError, ValueError):
            raise InvalidToken()

        if token_data.exp <= current_time:
            raise InvalidToken()
        return token_data

    def verify(self, token: str, now: Optional[datetime] = None) -> str:
        """Return the user id carried by a valid token."""
        return self.decode(token, now).sub
