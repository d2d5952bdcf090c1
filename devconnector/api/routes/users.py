from fastapi import APIRouter, Depends, status

from devconnector.api.deps import get_user_service
from devconnector.schemas.base import ErrorResponse
from devconnector.schemas.token import TokenResponse
from devconnector.schemas.user import RegisterRequest
from devconnector.services.user_service import UserService

router = APIRouter()


@router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def register(
    user_in: RegisterRequest,
    service: UserService = Depends(get_user_service),
):
    """Register a user and return a token."""
    token = service.register(user_in)
    return TokenResponse(token=token)
