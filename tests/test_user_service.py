"""Tests for user role assignment and profiles."""
import pytest

from core.exceptions import NotFoundError, ValidationRejectedError
from schemas.users import UserOut
from services.user_service import (
    create_user,
    get_all_users,
    get_profile,
    get_user_by_id,
    profile_initials,
    summarize_users,
    update_user_role,
)


class TestUpdateUserRole:
    async def test_assign_admin(self, db_session, sample_users):
        user_id = sample_users["viewer"].user_id

        await update_user_role(db_session, user_id, "admin")

        user = await get_user_by_id(db_session, user_id)
        assert user.role == "admin"

    async def test_invalid_role_rejected_and_unchanged(self, db_session, sample_users):
        user_id = sample_users["viewer"].user_id

        with pytest.raises(ValidationRejectedError):
            await update_user_role(db_session, user_id, "superuser")

        user = await get_user_by_id(db_session, user_id)
        assert user.role == "viewer"

    async def test_missing_user(self, db_session):
        with pytest.raises(NotFoundError):
            await update_user_role(db_session, "nobody000000", "editor")


class TestUsers:
    async def test_create_user_normalizes_email(self, db_session):
        user = await create_user(db_session, "  New@Example.COM ", name="New User")
        assert user.email == "new@example.com"
        assert user.role == "viewer"
        assert len(user.user_id) == 12

    async def test_create_user_invalid_role(self, db_session):
        with pytest.raises(ValidationRejectedError):
            await create_user(db_session, "x@example.com", role="owner")

    async def test_list_and_summary(self, db_session, sample_users):
        users = await get_all_users(db_session)
        stats = summarize_users(users)

        assert {user.id for user in users} == {u.user_id for u in sample_users.values()}
        assert stats.total_users == 3
        assert (stats.admin_users, stats.editor_users, stats.viewer_users) == (1, 1, 1)

    def test_summary_ignores_unknown_roles(self):
        users = [
            UserOut(id="a", email="a@example.com", role="admin"),
            UserOut(id="b", email="b@example.com", role="legacy"),
        ]
        stats = summarize_users(users)
        assert stats.total_users == 2
        assert stats.admin_users == 1
        assert stats.viewer_users == 0


class TestProfile:
    @pytest.mark.parametrize(
        "name,email,expected",
        [
            ("Ada Lovelace", "ada@example.com", "AL"),
            ("Grace Brewster Hopper", None, "GH"),
            ("cher", None, "CH"),
            (None, "zed@example.com", "ZE"),
            (None, None, "U"),
        ],
    )
    def test_initials(self, name, email, expected):
        assert profile_initials(name, email) == expected

    async def test_profile_has_full_profile_access(self, db_session, sample_users):
        profile = await get_profile(db_session, sample_users["viewer"].user_id)

        assert profile.email == "vi@example.com"
        assert profile.initials == "VI"
        assert profile.access.can_view and profile.access.can_delete

    async def test_profile_missing_user(self, db_session):
        with pytest.raises(NotFoundError):
            await get_profile(db_session, "ghost0000000")
