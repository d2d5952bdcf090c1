from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from devconnector.core.config import Settings
from devconnector.core.exceptions import MissingToken
from devconnector.core.security import PasswordHasher
from devconnector.db.database import get_db
from devconnector.services.profile_service import ProfileService
from devconnector.services.token_service import TokenService
from devconnector.services.user_service import UserService

TOKEN_HEADER = "x-auth-token"

token_header = APIKeyHeader(name=TOKEN_HEADER, auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_user_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> UserService:
    return UserService(db, settings, hasher, tokens)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)


async def get_current_user_id(
    request: Request,
    token: Optional[str] = Security(token_header),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """
    Auth guard for private routes.

    Verifies the token from the ``x-auth-token`` header and stores the user id
    on ``request.state.user_id``.
    """
    if not token:
        raise MissingToken()

    user_id = tokens.verify(token)
    request.state.user_id = user_id
    return user_id
