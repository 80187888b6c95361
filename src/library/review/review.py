"""Review aggregate — a game owner's rating and comment.

State Machine:
    PENDING → APPROVED | REJECTED
    APPROVED | REJECTED → PENDING (on edit)

Deletion is orthogonal to status: a deleted review keeps its status and
comes back with it when restored.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from library.domain import library
from library.review.events import (
    ReviewApproved,
    ReviewDeleted,
    ReviewEdited,
    ReviewRejected,
    ReviewRestored,
    ReviewSubmitted,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

MIN_RATING = 1
MAX_RATING = 5


class ReviewStatus(Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ModerationAction(Enum):
    APPROVE = "Approve"
    REJECT = "Reject"


@library.aggregate
class Review:
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    status = String(choices=ReviewStatus, default=ReviewStatus.PENDING.value)
    moderation_notes = Text()
    is_deleted = Boolean(default=False)
    created_at = DateTime()
    modified_at = DateTime()

    @invariant.post
    def rating_must_be_in_range(self):
        if self.rating is not None and not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValidationError({"rating": [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]})

    @classmethod
    def submit(cls, user_id, game_id, rating, comment=None):
        now = datetime.now(UTC)
        review = cls(
            user_id=user_id,
            game_id=game_id,
            rating=rating,
            comment=comment,
            created_at=now,
            modified_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                user_id=str(user_id),
                game_id=str(game_id),
                rating=rating,
                comment=comment,
                submitted_at=now,
            )
        )
        return review

    @property
    def is_approved(self):
        return self.status == ReviewStatus.APPROVED.value and not self.is_deleted

    def _ensure_not_deleted(self):
        if self.is_deleted:
            raise ValidationError({"is_deleted": ["Review has been deleted"]})

    def edit(self, rating=_UNSET, comment=_UNSET):
        """Change the review. Any edit sends it back to moderation."""
        self._ensure_not_deleted()

        if rating is not _UNSET:
            self.rating = rating
        if comment is not _UNSET:
            self.comment = comment

        previous = self.status
        now = datetime.now(UTC)
        self.status = ReviewStatus.PENDING.value
        self.moderation_notes = None
        self.modified_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                game_id=str(self.game_id),
                rating=self.rating,
                comment=self.comment,
                previous_status=previous,
                edited_at=now,
            )
        )

    def approve(self, notes=None):
        self._ensure_not_deleted()
        if self.status != ReviewStatus.PENDING.value:
            raise ValidationError({"status": [f"Cannot approve a review in {self.status} status"]})

        now = datetime.now(UTC)
        self.status = ReviewStatus.APPROVED.value
        self.moderation_notes = notes
        self.modified_at = now
        self.raise_(
            ReviewApproved(
                review_id=str(self.id),
                game_id=str(self.game_id),
                rating=self.rating,
                approved_at=now,
            )
        )

    def reject(self, reason=None):
        self._ensure_not_deleted()
        if self.status != ReviewStatus.PENDING.value:
            raise ValidationError({"status": [f"Cannot reject a review in {self.status} status"]})

        now = datetime.now(UTC)
        self.status = ReviewStatus.REJECTED.value
        self.moderation_notes = reason
        self.modified_at = now
        self.raise_(
            ReviewRejected(
                review_id=str(self.id),
                game_id=str(self.game_id),
                reason=reason,
                rejected_at=now,
            )
        )

    def delete(self):
        self._ensure_not_deleted()
        now = datetime.now(UTC)
        self.is_deleted = True
        self.modified_at = now
        self.raise_(ReviewDeleted(review_id=str(self.id), game_id=str(self.game_id), deleted_at=now))

    def restore(self):
        if not self.is_deleted:
            raise ValidationError({"is_deleted": ["Review is not deleted"]})
        now = datetime.now(UTC)
        self.is_deleted = False
        self.modified_at = now
        self.raise_(ReviewRestored(review_id=str(self.id), game_id=str(self.game_id), restored_at=now))
