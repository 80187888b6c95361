"""GameRating — approved review count and average rating per game."""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer
from protean.utils.globals import current_domain

from library.domain import library
from library.review.events import (
    ReviewApproved,
    ReviewDeleted,
    ReviewEdited,
    ReviewRejected,
    ReviewRestored,
)
from library.review.review import Review, ReviewStatus


@library.projection
class GameRating:
    game_id = Identifier(identifier=True, required=True)
    review_count = Integer(default=0)
    average_rating = Float(default=0.0)
    updated_at = DateTime()


def _approved_ratings(game_id):
    reviews = (
        current_domain.repository_for(Review)
        ._dao.query.filter(game_id=str(game_id), status=ReviewStatus.APPROVED.value, is_deleted=False)
        .limit(None)
        .all()
        .items
    )
    return [r.rating for r in reviews]


@library.projector(projector_for=GameRating, aggregates=[Review])
class GameRatingProjector:
    """Recomputes the game's figures from the approved reviews on every change."""

    @on(ReviewApproved)
    def on_review_approved(self, event):
        self._refresh(event.game_id, event.approved_at)

    @on(ReviewRejected)
    def on_review_rejected(self, event):
        self._refresh(event.game_id, event.rejected_at)

    @on(ReviewEdited)
    def on_review_edited(self, event):
        self._refresh(event.game_id, event.edited_at)

    @on(ReviewDeleted)
    def on_review_deleted(self, event):
        self._refresh(event.game_id, event.deleted_at)

    @on(ReviewRestored)
    def on_review_restored(self, event):
        self._refresh(event.game_id, event.restored_at)

    def _refresh(self, game_id, moment):
        repo = current_domain.repository_for(GameRating)
        try:
            rating = repo.get(str(game_id))
        except ObjectNotFoundError:
            rating = GameRating(game_id=str(game_id))

        ratings = _approved_ratings(game_id)
        rating.review_count = len(ratings)
        rating.average_rating = round(sum(ratings) / len(ratings), 2) if ratings else 0.0
        rating.updated_at = moment
        repo.add(rating)
