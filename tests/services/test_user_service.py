import pytest
from unittest.mock import MagicMock

from app.core.exceptions import BackendError
from app.schemas.auth_schemas import AuthUser
from app.schemas.user_schemas import Role
from app.services import user_service

from conftest import add_user


class TestNormalizeRole:

    @pytest.mark.parametrize("stored, expected", [
        ("admin", Role.ORGANIZER),
        ("organizer", Role.ORGANIZER),
        ("player", Role.PLAYER),
        (None, Role.PLAYER),
        ("", Role.PLAYER),
    ])
    def test_roles(self, stored, expected):
        assert user_service.normalize_role(stored) == expected


class TestProfileAndAuthState:

    def test_load_profile(self, db_session, backend):
        add_user(db_session, "u1", first_name="Ana", last_name="Pop", role="admin", mp_points=1200, level="elite")

        profile = user_service.load_profile(backend, "u1")

        assert profile.first_name == "Ana"
        assert profile.mp_points == 1200
        assert profile.level == "elite"
        assert profile.role == "organizer"

    @pytest.mark.parametrize("column, value", [("level", "incepator"), ("role", "captain")])
    def test_unknown_stored_value_gives_none(self, db_session, backend, column, value):
        add_user(db_session, "u1", **{column: value})
        assert user_service.load_profile(backend, "u1") is None

        state = user_service.load_auth_state(backend, AuthUser(id="u1"))
        assert state.user_id == "u1"
        assert state.profile is None
        assert state.role is None

    def test_missing_profile_gives_none(self, backend):
        assert user_service.load_profile(backend, "ghost") is None

    def test_visitor_state(self, backend):
        state = user_service.load_auth_state(backend, None)
        assert state.user is None
        assert state.role is None
        assert not state.can_manage_tournaments

    def test_signed_in_state(self, db_session, backend):
        add_user(db_session, "org", role="organizer")
        state = user_service.load_auth_state(backend, AuthUser(id="org", email="org@club.ro"))

        assert state.user_id == "org"
        assert state.profile.id == "org"
        assert state.can_manage_tournaments

    def test_signed_in_without_profile(self, backend):
        state = user_service.load_auth_state(backend, AuthUser(id="new"))
        assert state.user_id == "new"
        assert state.profile is None
        assert not state.can_manage_tournaments


class TestRankings:

    def test_active_users_by_points(self, db_session, backend):
        add_user(db_session, "u1", first_name="Ana", last_name="Pop", mp_points=900)
        add_user(db_session, "u2", first_name="Dan", last_name="Ilie", mp_points=1500, level="open")
        add_user(db_session, "u3", first_name="Ion", last_name="Rusu", mp_points=2000, is_active=False)

        rankings = user_service.load_rankings(backend)

        assert rankings.error is None
        assert [u.id for u in rankings.users] == ["u2", "u1"]
        assert rankings.users[0].initials == "DI"
        assert rankings.users[0].level_label == "Open"
        assert rankings.users[1].level_label == "Hobby"

    def test_fetch_error(self):
        backend = MagicMock()
        backend.select.side_effect = BackendError("permission denied for table users")
        rankings = user_service.load_rankings(backend)
        assert rankings.users == []
        assert rankings.error == "permission denied for table users"
