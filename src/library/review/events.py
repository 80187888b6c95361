"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from library.domain import library


@library.event(part_of="Review")
class ReviewSubmitted:
    __version__ = 1

    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    submitted_at = DateTime(required=True)


@library.event(part_of="Review")
class ReviewEdited:
    """The review changed and went back to moderation."""

    __version__ = 1

    review_id = Identifier(required=True)
    game_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    previous_status = String(required=True)
    edited_at = DateTime(required=True)


@library.event(part_of="Review")
class ReviewApproved:
    __version__ = 1

    review_id = Identifier(required=True)
    game_id = Identifier(required=True)
    rating = Integer(required=True)
    approved_at = DateTime(required=True)


@library.event(part_of="Review")
class ReviewRejected:
    __version__ = 1

    review_id = Identifier(required=True)
    game_id = Identifier(required=True)
    reason = String()
    rejected_at = DateTime(required=True)


@library.event(part_of="Review")
class ReviewDeleted:
    __version__ = 1

    review_id = Identifier(required=True)
    game_id = Identifier(required=True)
    deleted_at = DateTime(required=True)


@library.event(part_of="Review")
class ReviewRestored:
    __version__ = 1

    review_id = Identifier(required=True)
    game_id = Identifier(required=True)
    restored_at = DateTime(required=True)
