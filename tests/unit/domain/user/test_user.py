"""Unit tests for the User aggregate and its value objects."""

from datetime import timedelta
from uuid import uuid4

import pytest

from shopfront.domain.shared.time import utc_now
from shopfront.domain.user import Email, InvalidEmailError, User, UserRole


class TestEmail:
    def test_normalizes_case_and_whitespace(self):
        assert Email("  Alice@Example.COM ").value == "alice@example.com"

    @pytest.mark.parametrize("value", ["", "alice", "alice@", "@example.com", "a@b"])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidEmailError):
            Email(value)

    def test_equality_after_normalization(self):
        assert Email("ALICE@example.com") == Email("alice@example.com")


class TestUserCreate:
    def test_defaults(self):
        user = User.create("Alice@Example.com", "Alice", "Lee")

        assert user.email == "alice@example.com"
        assert user.role == UserRole.CUSTOMER
        assert user.is_active is True
        assert user.email_verified is False
        assert user.phone is None
        assert user.is_admin is False
        assert user.full_name == "Alice Lee"

    def test_ids_are_random(self):
        a = User.create("a@example.com", "Ann", "Lee")
        b = User.create("a@example.com", "Ann", "Lee")

        assert a.id != b.id
        assert a != b

    def test_invalid_email_rejected(self):
        with pytest.raises(InvalidEmailError):
            User.create("not-an-email", "Alice", "Lee")

    def test_reconstitute_accepts_role_string(self):
        now = utc_now()
        user = User.reconstitute(
            id=uuid4(),
            email="admin@example.com",
            first_name="Ada",
            last_name="Admin",
            phone=None,
            role="ADMIN",
            is_active=False,
            email_verified=True,
            created_at=now,
            updated_at=now,
        )

        assert user.role == UserRole.ADMIN
        assert user.is_admin
        assert not user.is_active
        assert user.email_verified


class TestUserMutations:
    def setup_method(self):
        self.user = User.create("alice@example.com", "Alice", "Lee", phone="+15550100")
        self.before = self.user.updated_at - timedelta(seconds=1)

    def test_update_profile_changes_only_supplied_fields(self):
        self.user.update_profile(first_name="Alicia")

        assert self.user.first_name == "Alicia"
        assert self.user.last_name == "Lee"
        assert self.user.phone == "+15550100"
        assert self.user.updated_at > self.before

    def test_update_profile_with_nothing_keeps_values(self):
        self.user.update_profile()

        assert (self.user.first_name, self.user.last_name) == ("Alice", "Lee")

    def test_deactivate_and_reactivate(self):
        self.user.deactivate()
        assert not self.user.is_active

        self.user.reactivate()
        assert self.user.is_active

    def test_mark_email_verified(self):
        self.user.mark_email_verified()
        assert self.user.email_verified

    def test_promote_to_admin(self):
        self.user.promote_to_admin()
        assert self.user.role == UserRole.ADMIN

    def test_equality_is_by_id(self):
        clone = User.reconstitute(
            id=self.user.id,
            email="other@example.com",
            first_name="X",
            last_name="Y",
            phone=None,
            role=UserRole.CUSTOMER,
            is_active=True,
            email_verified=False,
            created_at=self.user.created_at,
            updated_at=self.user.updated_at,
        )

        assert clone == self.user
        assert hash(clone) == hash(self.user)
