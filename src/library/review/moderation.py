"""ModerateReview, DeleteReview and RestoreReview — commands and handler."""

from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from library.domain import library
from library.review.review import ModerationAction, Review
from library.review.submission import live_review_of


@library.command(part_of="Review")
class ModerateReview:
    review_id = Identifier(required=True)
    action = String(required=True, choices=ModerationAction)
    reason = String(max_length=500)


@library.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)


@library.command(part_of="Review")
class RestoreReview:
    review_id = Identifier(required=True)


@library.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ModerateReview)
    def moderate_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        if ModerationAction(command.action) == ModerationAction.APPROVE:
            review.approve(notes=command.reason)
        else:
            review.reject(reason=command.reason)

        repo.add(review)

    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.delete()
        repo.add(review)

    @handle(RestoreReview)
    def restore_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        if live_review_of(review.user_id, review.game_id) is not None:
            raise ValidationError({"review_id": ["The user has written a newer review of this game"]})
        review.restore()
        repo.add(review)
