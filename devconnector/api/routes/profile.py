from typing import List

from fastapi import APIRouter, Depends, Response, status

from devconnector.api.deps import get_current_user_id, get_profile_service
from devconnector.schemas.base import ErrorResponse, MessageResponse
from devconnector.schemas.profile import ExperienceCreate, Profile, ProfileUpdate
from devconnector.services.profile_service import ProfileService

router = APIRouter()


@router.get("/me", response_model=Profile, responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}})
def read_own_profile(
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Current user profile."""
    return service.get_own(user_id)


@router.post(
    "",
    response_model=Profile,
    responses={201: {"model": Profile}, 400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def upsert_profile(
    profile_in: ProfileUpdate,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Create or update the current user's profile."""
    profile, created = service.upsert(user_id, profile_in)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return profile


@router.get("", response_model=List[Profile])
def list_profiles(service: ProfileService = Depends(get_profile_service)):
    """All profiles."""
    return service.list_all()


@router.get("/user/{user_id}", response_model=Profile, responses={404: {"model": ErrorResponse}})
def read_profile_by_user(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
):
    """Profile by user ID."""
    return service.get_by_user(user_id)


@router.delete("", response_model=MessageResponse, responses={401: {"model": ErrorResponse}})
def delete_profile(
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Delete profile and user."""
    service.delete(user_id)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=Profile,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def add_experience(
    experience_in: ExperienceCreate,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Add profile experience."""
    return service.add_experience(user_id, experience_in)


@router.delete(
    "/experience/{exp_id}",
    response_model=Profile,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def remove_experience(
    exp_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Delete experience from profile."""
    return service.remove_experience(user_id, exp_id)
