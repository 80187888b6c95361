"""User aggregate root — a storefront account tied to an identity-provider subject.

Authentication happens elsewhere; the store only knows the provider's subject
id (``external_id``) and keeps the public profile that goes with it.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from identity.domain import identity
from identity.user.events import ProfileUpdated, UserDeactivated, UserReactivated, UserRegistered

_EMAIL_PATTERN = re.compile(r"^[^@\s;,<>()\"]+@[^@\s;,<>()\"]+\.[^@\s;,<>()\".]+$")
_CUSTOM_URL_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

PROFILE_FIELDS = (
    "username",
    "first_name",
    "last_name",
    "country",
    "city",
    "avatar_url",
    "self_description",
    "show_personal_info",
    "custom_url",
)


class UserStatus(Enum):
    ACTIVE = "Active"
    DEACTIVATED = "Deactivated"


@identity.aggregate
class User:
    """A registered shopper. Email and provider subject are unique across users."""

    external_id: String(required=True, max_length=255, unique=True)
    username: String(required=True, max_length=50)
    email: String(required=True, max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    country: String(max_length=100)
    city: String(max_length=100)
    avatar_url: String(max_length=500)
    self_description: Text()
    show_personal_info: Boolean(default=False)
    custom_url: String(max_length=50)
    status: String(choices=UserStatus, default=UserStatus.ACTIVE.value)
    registered_at: DateTime()
    modified_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not self.email or not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @invariant.post
    def custom_url_must_be_a_slug(self):
        if self.custom_url and not _CUSTOM_URL_PATTERN.match(self.custom_url):
            raise ValidationError({"custom_url": ["Use lowercase letters, digits, '-' and '_' only"]})

    @classmethod
    def register(cls, external_id, username, email, first_name=None, last_name=None):
        now = datetime.now(UTC)
        user = cls(
            external_id=external_id,
            username=username,
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name,
            registered_at=now,
            modified_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                external_id=external_id,
                username=username,
                email=user.email,
                registered_at=now,
            )
        )
        return user

    @property
    def is_active(self):
        return self.status == UserStatus.ACTIVE.value

    def update_profile(self, **changes):
        """Apply a partial profile update. Fields left as ``_UNSET`` keep their value."""
        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationError({"profile": [f"Unknown profile fields: {', '.join(sorted(unknown))}"]})

        for field, value in changes.items():
            if value is _UNSET:
                continue
            if field == "username" and not value:
                raise ValidationError({"username": ["Username cannot be empty"]})
            setattr(self, field, value)

        now = datetime.now(UTC)
        self.modified_at = now
        self.raise_(
            ProfileUpdated(
                user_id=str(self.id),
                username=self.username,
                first_name=self.first_name,
                last_name=self.last_name,
                country=self.country,
                city=self.city,
                custom_url=self.custom_url,
                modified_at=now,
            )
        )

    def deactivate(self, reason):
        if not self.is_active:
            raise ValidationError({"status": ["User is already deactivated"]})

        now = datetime.now(UTC)
        self.status = UserStatus.DEACTIVATED.value
        self.modified_at = now
        self.raise_(UserDeactivated(user_id=str(self.id), reason=reason, deactivated_at=now))

    def reactivate(self):
        if self.is_active:
            raise ValidationError({"status": ["Only deactivated users can be reactivated"]})

        now = datetime.now(UTC)
        self.status = UserStatus.ACTIVE.value
        self.modified_at = now
        self.raise_(UserReactivated(user_id=str(self.id), reactivated_at=now))
