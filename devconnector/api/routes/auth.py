from fastapi import APIRouter, Depends

from devconnector.api.deps import get_current_user_id, get_user_service
from devconnector.schemas.base import ErrorResponse
from devconnector.schemas.token import TokenResponse
from devconnector.schemas.user import LoginRequest, User
from devconnector.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=User, responses={401: {"model": ErrorResponse}})
def read_current_user(
    user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    """Get the authenticated user, without the password."""
    return service.get_user(user_id)


@router.post("", response_model=TokenResponse, responses={400: {"model": ErrorResponse}})
def login(
    credentials: LoginRequest,
    service: UserService = Depends(get_user_service),
):
    """Login user & get token."""
    token = service.authenticate(credentials)
    return TokenResponse(token=token)
