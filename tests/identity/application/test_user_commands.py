"""Application tests for user registration, profile and account commands."""

import pytest
from identity.projections.user_lookup import UserLookup
from identity.user.account import DeactivateUser, ReactivateUser
from identity.user.profile import UpdateProfile
from identity.user.registration import RegisterUser, find_user_by_external_id
from identity.user.user import User, UserStatus
from protean import current_domain
from protean.exceptions import ValidationError


def _register(external_id="auth0|001", email="jane@example.com", username="ironsmith"):
    return current_domain.process(
        RegisterUser(external_id=external_id, username=username, email=email), asynchronous=False
    )


def _load(user_id):
    return current_domain.repository_for(User).get(user_id)


class TestRegisterUser:
    def test_register(self):
        user_id = _register()
        user = _load(user_id)
        assert user.external_id == "auth0|001"
        assert find_user_by_external_id("auth0|001").id == user.id

    def test_duplicate_subject_is_rejected(self):
        _register()
        with pytest.raises(ValidationError) as exc:
            _register(email="other@example.com")
        assert "external_id" in exc.value.messages

    def test_duplicate_email_is_rejected_ignoring_case(self):
        _register()
        with pytest.raises(ValidationError) as exc:
            _register(external_id="auth0|002", email="JANE@example.com")
        assert "email" in exc.value.messages

    def test_lookup_projection(self):
        user_id = _register()
        lookup = current_domain.repository_for(UserLookup).get("auth0|001")
        assert lookup.user_id == user_id
        assert lookup.email == "jane@example.com"


class TestUpdateProfile:
    def test_only_given_fields_change(self):
        user_id = _register()
        current_domain.process(UpdateProfile(user_id=user_id, city="Gdańsk"), asynchronous=False)
        current_domain.process(UpdateProfile(user_id=user_id, country="PL"), asynchronous=False)

        user = _load(user_id)
        assert user.city == "Gdańsk"
        assert user.country == "PL"
        assert user.username == "ironsmith"

    def test_custom_url_is_unique(self):
        first = _register()
        second = _register(external_id="auth0|002", email="john@example.com", username="anvil")
        current_domain.process(UpdateProfile(user_id=first, custom_url="smith"), asynchronous=False)

        with pytest.raises(ValidationError):
            current_domain.process(UpdateProfile(user_id=second, custom_url="smith"), asynchronous=False)

    def test_keeping_own_custom_url(self):
        user_id = _register()
        current_domain.process(UpdateProfile(user_id=user_id, custom_url="smith"), asynchronous=False)
        current_domain.process(
            UpdateProfile(user_id=user_id, custom_url="smith", show_personal_info=True), asynchronous=False
        )
        assert _load(user_id).show_personal_info is True


class TestAccountLifecycle:
    def test_deactivate_and_reactivate(self):
        user_id = _register()

        current_domain.process(DeactivateUser(user_id=user_id, reason="Fraud"), asynchronous=False)
        assert _load(user_id).status == UserStatus.DEACTIVATED.value

        current_domain.process(ReactivateUser(user_id=user_id), asynchronous=False)
        assert _load(user_id).status == UserStatus.ACTIVE.value

    def test_reason_is_required(self):
        user_id = _register()
        with pytest.raises(ValidationError):
            current_domain.process(DeactivateUser(user_id=user_id), asynchronous=False)
