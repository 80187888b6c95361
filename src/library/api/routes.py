"""FastAPI routes for the Library domain — ownership, achievements, reviews, wishlist."""

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from library.achievement.achievement import Achievement
from library.achievement.management import (
    CreateAchievement,
    DeleteAchievement,
    RestoreAchievement,
    UnlockAchievement,
    UpdateAchievement,
    achievements_of_game,
    achievements_of_user,
)
from library.api.schemas import (
    AchievementListResponse,
    AchievementResponse,
    CreateAchievementRequest,
    EditReviewRequest,
    GameRatingResponse,
    GrantAddonRequest,
    GrantGameRequest,
    IdResponse,
    LibraryGameResponse,
    LibraryResponse,
    ModerateReviewRequest,
    ReviewListResponse,
    ReviewResponse,
    StatusResponse,
    SubmitReviewRequest,
    UnlockAchievementRequest,
    UpdateAchievementRequest,
    UserAchievementListResponse,
    UserAchievementResponse,
    WishlistItemResponse,
    WishlistRequest,
    WishlistResponse,
)
from library.ownership.grants import (
    GrantAddon,
    GrantGame,
    RemoveLibraryGame,
    RestoreLibraryGame,
    owned_games,
)
from library.projections.game_rating import GameRating
from library.review.moderation import DeleteReview, ModerateReview, RestoreReview
from library.review.review import Review
from library.review.submission import EditReview, SubmitReview
from library.wishlist.management import AddToWishlist, RemoveFromWishlist, wishlist_of

library_router = APIRouter(prefix="/library", tags=["library"])
achievement_router = APIRouter(prefix="/achievements", tags=["achievements"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def _achievement_response(achievement) -> AchievementResponse:
    return AchievementResponse(
        achievement_id=str(achievement.id),
        game_id=str(achievement.game_id),
        name=achievement.name,
        description=achievement.description,
        points=achievement.points or 0,
        logo_url=achievement.logo_url,
        is_deleted=bool(achievement.is_deleted),
    )


def _review_response(review) -> ReviewResponse:
    return ReviewResponse(
        review_id=str(review.id),
        user_id=str(review.user_id),
        game_id=str(review.game_id),
        rating=review.rating,
        comment=review.comment,
        status=review.status,
        is_deleted=bool(review.is_deleted),
        created_at=review.created_at,
        modified_at=review.modified_at,
    )


# ---------------------------------------------------------------------------
# Ownership
# ---------------------------------------------------------------------------
@library_router.get("/{user_id}", response_model=LibraryResponse)
async def get_library(user_id: str) -> LibraryResponse:
    return LibraryResponse(
        games=[
            LibraryGameResponse(
                library_game_id=str(entry.id),
                user_id=str(entry.user_id),
                game_id=str(entry.game_id),
                order_id=str(entry.order_id) if entry.order_id else None,
                purchased_at=entry.purchased_at,
                addon_ids=entry.owned_addon_ids,
            )
            for entry in owned_games(user_id)
        ]
    )


@library_router.post("/games", status_code=201, response_model=IdResponse)
async def grant_game(body: GrantGameRequest) -> IdResponse:
    result = current_domain.process(GrantGame(user_id=body.user_id, game_id=body.game_id), asynchronous=False)
    return IdResponse(id=result)


@library_router.post("/addons", status_code=201, response_model=StatusResponse)
async def grant_addon(body: GrantAddonRequest) -> StatusResponse:
    command = GrantAddon(user_id=body.user_id, game_id=body.game_id, addon_id=body.addon_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@library_router.delete("/games/{library_game_id}", response_model=StatusResponse)
async def remove_library_game(library_game_id: str) -> StatusResponse:
    current_domain.process(RemoveLibraryGame(library_game_id=library_game_id), asynchronous=False)
    return StatusResponse()


@library_router.put("/games/{library_game_id}/restore", response_model=StatusResponse)
async def restore_library_game(library_game_id: str) -> StatusResponse:
    current_domain.process(RestoreLibraryGame(library_game_id=library_game_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------
@achievement_router.post("", status_code=201, response_model=IdResponse)
async def create_achievement(body: CreateAchievementRequest) -> IdResponse:
    command = CreateAchievement(
        game_id=body.game_id,
        name=body.name,
        description=body.description,
        points=body.points,
        logo_url=body.logo_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@achievement_router.get("/game/{game_id}", response_model=AchievementListResponse)
async def list_game_achievements(game_id: str, include_deleted: bool = False) -> AchievementListResponse:
    return AchievementListResponse(
        achievements=[_achievement_response(a) for a in achievements_of_game(game_id, include_deleted)]
    )


@achievement_router.get("/user/{user_id}", response_model=UserAchievementListResponse)
async def list_user_achievements(user_id: str, game_id: str | None = None) -> UserAchievementListResponse:
    unlocked = achievements_of_user(user_id, game_id)
    achievement_repo = current_domain.repository_for(Achievement)
    total_points = sum(achievement_repo.get(r.achievement_id).points or 0 for r in unlocked)
    return UserAchievementListResponse(
        achievements=[
            UserAchievementResponse(
                user_achievement_id=str(r.id),
                achievement_id=str(r.achievement_id),
                game_id=str(r.game_id),
                achieved_at=r.achieved_at,
            )
            for r in unlocked
        ],
        total_points=total_points,
    )


@achievement_router.get("/{achievement_id}", response_model=AchievementResponse)
async def get_achievement(achievement_id: str) -> AchievementResponse:
    return _achievement_response(current_domain.repository_for(Achievement).get(achievement_id))


@achievement_router.put("/{achievement_id}", response_model=StatusResponse)
async def update_achievement(achievement_id: str, body: UpdateAchievementRequest) -> StatusResponse:
    command = UpdateAchievement(achievement_id=achievement_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@achievement_router.delete("/{achievement_id}", response_model=StatusResponse)
async def delete_achievement(achievement_id: str) -> StatusResponse:
    current_domain.process(DeleteAchievement(achievement_id=achievement_id), asynchronous=False)
    return StatusResponse()


@achievement_router.put("/{achievement_id}/restore", response_model=StatusResponse)
async def restore_achievement(achievement_id: str) -> StatusResponse:
    current_domain.process(RestoreAchievement(achievement_id=achievement_id), asynchronous=False)
    return StatusResponse()


@achievement_router.post("/{achievement_id}/unlock", status_code=201, response_model=IdResponse)
async def unlock_achievement(achievement_id: str, body: UnlockAchievementRequest) -> IdResponse:
    command = UnlockAchievement(user_id=body.user_id, achievement_id=achievement_id)
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.post("", status_code=201, response_model=IdResponse)
async def submit_review(body: SubmitReviewRequest) -> IdResponse:
    command = SubmitReview(
        user_id=body.user_id,
        game_id=body.game_id,
        rating=body.rating,
        comment=body.comment,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@review_router.get("/game/{game_id}", response_model=ReviewListResponse)
async def list_game_reviews(game_id: str, approved_only: bool = True) -> ReviewListResponse:
    reviews = (
        current_domain.repository_for(Review)
        ._dao.query.filter(game_id=game_id, is_deleted=False)
        .limit(None)
        .all()
        .items
    )
    if approved_only:
        reviews = [r for r in reviews if r.is_approved]
    return ReviewListResponse(reviews=[_review_response(r) for r in reviews])


@review_router.get("/game/{game_id}/rating", response_model=GameRatingResponse)
async def get_game_rating(game_id: str) -> GameRatingResponse:
    try:
        rating = current_domain.repository_for(GameRating).get(game_id)
    except ObjectNotFoundError:
        return GameRatingResponse(game_id=game_id)
    return GameRatingResponse(
        game_id=str(rating.game_id),
        review_count=rating.review_count or 0,
        average_rating=rating.average_rating or 0.0,
    )


@review_router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: str) -> ReviewResponse:
    return _review_response(current_domain.repository_for(Review).get(review_id))


@review_router.put("/{review_id}", response_model=StatusResponse)
async def edit_review(review_id: str, body: EditReviewRequest) -> StatusResponse:
    command = EditReview(review_id=review_id, user_id=body.user_id, rating=body.rating, comment=body.comment)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.put("/{review_id}/moderate", response_model=StatusResponse)
async def moderate_review(review_id: str, body: ModerateReviewRequest) -> StatusResponse:
    command = ModerateReview(review_id=review_id, action=body.action, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str) -> StatusResponse:
    current_domain.process(DeleteReview(review_id=review_id), asynchronous=False)
    return StatusResponse()


@review_router.put("/{review_id}/restore", response_model=StatusResponse)
async def restore_review(review_id: str) -> StatusResponse:
    current_domain.process(RestoreReview(review_id=review_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Wishlist
# ---------------------------------------------------------------------------
@wishlist_router.get("/{user_id}", response_model=WishlistResponse)
async def get_wishlist(user_id: str) -> WishlistResponse:
    return WishlistResponse(
        user_id=user_id,
        items=[WishlistItemResponse(product_id=str(i.product_id), added_at=i.added_at) for i in wishlist_of(user_id)],
    )


@wishlist_router.post("/{user_id}", status_code=201, response_model=IdResponse)
async def add_to_wishlist(user_id: str, body: WishlistRequest) -> IdResponse:
    result = current_domain.process(AddToWishlist(user_id=user_id, product_id=body.product_id), asynchronous=False)
    return IdResponse(id=result)


@wishlist_router.delete("/{user_id}/{product_id}", response_model=StatusResponse)
async def remove_from_wishlist(user_id: str, product_id: str) -> StatusResponse:
    current_domain.process(RemoveFromWishlist(user_id=user_id, product_id=product_id), asynchronous=False)
    return StatusResponse()
