"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.api.schemas import (
    DeactivateUserRequest,
    FollowIdResponse,
    FollowListResponse,
    FollowRequest,
    RegisterUserRequest,
    StatusResponse,
    UpdateProfileRequest,
    UserIdResponse,
    UserResponse,
)
from identity.follow.management import FollowUser, UnfollowUser, followed_by, followers_of
from identity.user.account import DeactivateUser, ReactivateUser
from identity.user.profile import UpdateProfile
from identity.user.registration import RegisterUser, find_user_by_external_id
from identity.user.user import User

router = APIRouter(prefix="/users", tags=["users"])


def _user_response(user) -> UserResponse:
    # Personal details stay private unless the user opted in
    personal = bool(user.show_personal_info)
    return UserResponse(
        user_id=str(user.id),
        external_id=user.external_id,
        username=user.username,
        email=user.email,
        first_name=user.first_name if personal else None,
        last_name=user.last_name if personal else None,
        country=user.country if personal else None,
        city=user.city if personal else None,
        avatar_url=user.avatar_url,
        self_description=user.self_description,
        custom_url=user.custom_url,
        status=user.status,
        registered_at=user.registered_at,
    )


@router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(
        external_id=body.external_id,
        username=body.username,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@router.get("/external/{external_id}", response_model=UserResponse)
async def get_user_by_external_id(external_id: str) -> UserResponse:
    user = find_user_by_external_id(external_id)
    if user is None:
        raise ObjectNotFoundError(f"No user for subject {external_id}")
    return _user_response(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str) -> UserResponse:
    return _user_response(current_domain.repository_for(User).get(user_id))


@router.put("/{user_id}/profile", response_model=StatusResponse)
async def update_profile(user_id: str, body: UpdateProfileRequest) -> StatusResponse:
    command = UpdateProfile(user_id=user_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.put("/{user_id}/deactivate", response_model=StatusResponse)
async def deactivate_user(user_id: str, body: DeactivateUserRequest) -> StatusResponse:
    current_domain.process(DeactivateUser(user_id=user_id, reason=body.reason), asynchronous=False)
    return StatusResponse()


@router.put("/{user_id}/reactivate", response_model=StatusResponse)
async def reactivate_user(user_id: str) -> StatusResponse:
    current_domain.process(ReactivateUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


@router.post("/{user_id}/following", status_code=201, response_model=FollowIdResponse)
async def follow_user(user_id: str, body: FollowRequest) -> FollowIdResponse:
    result = current_domain.process(FollowUser(follower_id=user_id, followed_id=body.user_id), asynchronous=False)
    return FollowIdResponse(follow_id=result)


@router.delete("/{user_id}/following/{followed_id}", response_model=StatusResponse)
async def unfollow_user(user_id: str, followed_id: str) -> StatusResponse:
    current_domain.process(UnfollowUser(follower_id=user_id, followed_id=followed_id), asynchronous=False)
    return StatusResponse()


@router.get("/{user_id}/following", response_model=FollowListResponse)
async def list_following(user_id: str) -> FollowListResponse:
    return FollowListResponse(user_ids=followed_by(user_id))


@router.get("/{user_id}/followers", response_model=FollowListResponse)
async def list_followers(user_id: str) -> FollowListResponse:
    return FollowListResponse(user_ids=followers_of(user_id))
