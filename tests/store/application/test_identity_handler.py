"""Application tests for IdentityOrderEventHandler — the DeactivatedUser projection."""

from datetime import UTC, datetime

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from shared.events.identity import UserDeactivated, UserReactivated
from store.order.identity_events import IdentityOrderEventHandler
from store.projections.deactivated_users import DeactivatedUser


def _deactivated(user_id="user-001", reason="Chargeback abuse"):
    return UserDeactivated(user_id=user_id, reason=reason, deactivated_at=datetime.now(UTC))


class TestIdentityOrderEventHandler:
    def test_deactivation_records_user(self):
        IdentityOrderEventHandler().on_user_deactivated(_deactivated())

        record = current_domain.repository_for(DeactivatedUser).get("user-001")
        assert record.reason == "Chargeback abuse"

    def test_repeated_deactivation_keeps_first_record(self):
        handler = IdentityOrderEventHandler()
        handler.on_user_deactivated(_deactivated(reason="First"))
        handler.on_user_deactivated(_deactivated(reason="Second"))

        assert current_domain.repository_for(DeactivatedUser).get("user-001").reason == "First"

    def test_reactivation_removes_record(self):
        handler = IdentityOrderEventHandler()
        handler.on_user_deactivated(_deactivated())
        handler.on_user_reactivated(UserReactivated(user_id="user-001", reactivated_at=datetime.now(UTC)))

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(DeactivatedUser).get("user-001")

    def test_reactivating_unknown_user_is_a_no_op(self):
        IdentityOrderEventHandler().on_user_reactivated(
            UserReactivated(user_id="user-404", reactivated_at=datetime.now(UTC))
        )
