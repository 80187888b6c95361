"""Pydantic request/response schemas for the Library API."""

from datetime import datetime

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


class IdResponse(BaseModel):
    id: str


# --- Ownership ---


class GrantGameRequest(BaseModel):
    user_id: str
    game_id: str


class GrantAddonRequest(BaseModel):
    user_id: str
    game_id: str
    addon_id: str


class LibraryGameResponse(BaseModel):
    library_game_id: str
    user_id: str
    game_id: str
    order_id: str | None = None
    purchased_at: datetime | None = None
    addon_ids: list[str] = []


class LibraryResponse(BaseModel):
    games: list[LibraryGameResponse]


# --- Achievements ---


class CreateAchievementRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"game_id": "game-001", "name": "First Blood", "description": "Win a duel", "points": 10}]
        }
    }

    game_id: str
    name: str = Field(..., max_length=100)
    description: str | None = None
    points: int = Field(0, ge=0)
    logo_url: str | None = Field(None, max_length=500)


class UpdateAchievementRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = None
    points: int | None = Field(None, ge=0)
    logo_url: str | None = Field(None, max_length=500)


class UnlockAchievementRequest(BaseModel):
    user_id: str


class AchievementResponse(BaseModel):
    achievement_id: str
    game_id: str
    name: str
    description: str | None = None
    points: int = 0
    logo_url: str | None = None
    is_deleted: bool = False


class AchievementListResponse(BaseModel):
    achievements: list[AchievementResponse]


class UserAchievementResponse(BaseModel):
    user_achievement_id: str
    achievement_id: str
    game_id: str
    achieved_at: datetime


class UserAchievementListResponse(BaseModel):
    achievements: list[UserAchievementResponse]
    total_points: int = 0


# --- Reviews ---


class SubmitReviewRequest(BaseModel):
    user_id: str
    game_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = None


class EditReviewRequest(BaseModel):
    user_id: str
    rating: int | None = Field(None, ge=1, le=5)
    comment: str | None = None


class ModerateReviewRequest(BaseModel):
    action: str  # "Approve" or "Reject"
    reason: str | None = Field(None, max_length=500)


class ReviewResponse(BaseModel):
    review_id: str
    user_id: str
    game_id: str
    rating: int
    comment: str | None = None
    status: str
    is_deleted: bool = False
    created_at: datetime | None = None
    modified_at: datetime | None = None


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]


class GameRatingResponse(BaseModel):
    game_id: str
    review_count: int = 0
    average_rating: float = 0.0


# --- Wishlist ---


class WishlistRequest(BaseModel):
    product_id: str


class WishlistItemResponse(BaseModel):
    product_id: str
    added_at: datetime | None = None


class WishlistResponse(BaseModel):
    user_id: str
    items: list[WishlistItemResponse]
