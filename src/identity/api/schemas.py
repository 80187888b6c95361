"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "external_id": "auth0|64f1c2",
                    "username": "ironsmith",
                    "email": "jane.doe@example.com",
                    "first_name": "Jane",
                    "last_name": "Doe",
                }
            ]
        }
    }

    external_id: str = Field(..., max_length=255)
    username: str = Field(..., max_length=50)
    email: str = Field(..., max_length=254)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class UpdateProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"username": "ironsmith", "country": "PL", "custom_url": "iron-smith"}]}
    }

    username: str | None = Field(None, max_length=50)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    city: str | None = Field(None, max_length=100)
    avatar_url: str | None = Field(None, max_length=500)
    self_description: str | None = None
    show_personal_info: bool | None = None
    custom_url: str | None = Field(None, max_length=50)


class DeactivateUserRequest(BaseModel):
    reason: str = Field(..., max_length=500)


class FollowRequest(BaseModel):
    user_id: str


# --- Response Schemas ---


class UserIdResponse(BaseModel):
    user_id: str


class UserResponse(BaseModel):
    user_id: str
    external_id: str
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    country: str | None = None
    city: str | None = None
    avatar_url: str | None = None
    self_description: str | None = None
    custom_url: str | None = None
    status: str
    registered_at: datetime | None = None


class FollowIdResponse(BaseModel):
    follow_id: str


class FollowListResponse(BaseModel):
    user_ids: list[str]


class StatusResponse(BaseModel):
    status: str = "ok"
