import pytest
from unittest.mock import MagicMock
from fastapi import HTTPException

from app.core.exceptions import AuthError, FormValidationError
from app.models import AuthSession, User
from app.schemas.auth_schemas import AuthUser, SignUpRequest
from app.services.auth_service import SIGNED_IN, SIGNED_OUT, AuthClient, AuthEvents


@pytest.fixture
def events():
    return AuthEvents()

@pytest.fixture
def auth_client(db_session, events):
    return AuthClient(db_session, events=events)

@pytest.fixture
def signed_up(auth_client):
    return auth_client.sign_up(SignUpRequest(
        email="Ana.Pop@Club.ro", password="secret123", first_name=" Ana ", last_name="Pop",
    ))


class TestAuthEvents:

    def test_subscribe_and_unsubscribe(self, events):
        listener = MagicMock()
        subscription = events.subscribe(listener)
        events.publish(SIGNED_IN, AuthUser(id="u1"))

        subscription.unsubscribe()
        events.publish(SIGNED_OUT, None)

        listener.assert_called_once_with(SIGNED_IN, AuthUser(id="u1"))
        assert events.listener_count == 0

    def test_failing_listener_does_not_stop_others(self, events):
        broken = MagicMock(side_effect=RuntimeError("listener crashed"))
        healthy = MagicMock()
        events.subscribe(broken)
        events.subscribe(healthy)

        events.publish(SIGNED_OUT, None)

        healthy.assert_called_once_with(SIGNED_OUT, None)

    def test_unsubscribe_twice_is_harmless(self, events):
        subscription = events.subscribe(MagicMock())
        subscription.unsubscribe()
        subscription.unsubscribe()
        assert events.listener_count == 0


class TestSignUp:

    def test_creates_profile_and_session(self, db_session, signed_up):
        profile = db_session.query(User).filter(User.id == signed_up.user_id).one()
        assert profile.email == "ana.pop@club.ro"
        assert profile.first_name == "Ana"
        assert profile.role == "player"
        assert db_session.query(AuthSession).filter(AuthSession.user_id == signed_up.user_id).count() == 1

    def test_publishes_signed_in(self, auth_client, events):
        listener = MagicMock()
        events.subscribe(listener)
        token = auth_client.sign_up(SignUpRequest(email="dan@club.ro", password="secret123"))

        event, user = listener.call_args[0]
        assert event == SIGNED_IN
        assert user.id == token.user_id

    def test_duplicate_email(self, auth_client, signed_up):
        with pytest.raises(AuthError, match="already registered"):
            auth_client.sign_up(SignUpRequest(email="ana.pop@club.ro", password="other-pass"))

    def test_blank_password(self, auth_client):
        with pytest.raises(FormValidationError):
            auth_client.sign_up(SignUpRequest(email="dan@club.ro", password="   "))

    def test_organizer_role_can_be_requested(self, db_session, auth_client):
        token = auth_client.sign_up(SignUpRequest(email="org@club.ro", password="secret123", role="organizer"))
        assert db_session.query(User).filter(User.id == token.user_id).one().role == "organizer"


class TestSignInAndOut:

    def test_sign_in_and_current_user(self, auth_client, signed_up):
        token = auth_client.sign_in("ana.pop@club.ro", "secret123")

        user = auth_client.get_current_user(token.access_token)
        assert user.id == signed_up.user_id
        assert user.email == "ana.pop@club.ro"

    def test_wrong_password(self, auth_client, signed_up):
        with pytest.raises(AuthError, match="Invalid login credentials"):
            auth_client.sign_in("ana.pop@club.ro", "nope")

    def test_unknown_email(self, auth_client):
        with pytest.raises(AuthError):
            auth_client.sign_in("ghost@club.ro", "secret123")

    def test_missing_fields(self, auth_client):
        with pytest.raises(FormValidationError, match="Completeaza"):
            auth_client.sign_in("", "")

    def test_no_token_is_a_visitor(self, auth_client):
        assert auth_client.get_current_user(None) is None

    def test_garbage_token_is_a_visitor(self, auth_client):
        assert auth_client.get_current_user("not-a-jwt") is None

    def test_sign_out_revokes_the_token(self, auth_client, events, signed_up):
        listener = MagicMock()
        events.subscribe(listener)

        auth_client.sign_out(signed_up.access_token)

        listener.assert_called_once_with(SIGNED_OUT, None)
        assert auth_client.get_current_user(signed_up.access_token) is None

    def test_sign_out_with_revoked_token(self, auth_client, signed_up):
        auth_client.sign_out(signed_up.access_token)
        with pytest.raises(HTTPException) as exc_info:
            auth_client.sign_out(signed_up.access_token)
        assert exc_info.value.status_code == 401
