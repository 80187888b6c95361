"""SubmitReview and EditReview — commands and handler.

Only owners of a game may review it, once. A deleted review does not count,
so the user may write a fresh one instead of restoring the old.
"""

from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from library.domain import library
from library.ownership.grants import owns_game
from library.review.review import Review


@library.command(part_of="Review")
class SubmitReview:
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()


@library.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer()
    comment = Text()


def live_review_of(user_id, game_id):
    reviews = (
        current_domain.repository_for(Review)
        ._dao.query.filter(user_id=str(user_id), game_id=str(game_id), is_deleted=False)
        .limit(None)
        .all()
        .items
    )
    return reviews[0] if reviews else None


@library.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        if not owns_game(command.user_id, command.game_id):
            raise ValidationError({"game_id": ["Only owners of the game can review it"]})
        if live_review_of(command.user_id, command.game_id) is not None:
            raise ValidationError({"game_id": ["You have already reviewed this game"]})

        review = Review.submit(
            user_id=command.user_id,
            game_id=command.game_id,
            rating=command.rating,
            comment=command.comment,
        )
        current_domain.repository_for(Review).add(review)
        return str(review.id)

    @handle(EditReview)
    def edit_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        if str(review.user_id) != str(command.user_id):
            raise ValidationError({"user_id": ["Only the author can edit a review"]})

        changes = {}
        if command.rating is not None:
            changes["rating"] = command.rating
        if command.comment is not None:
            changes["comment"] = command.comment
        review.edit(**changes)
        repo.add(review)
