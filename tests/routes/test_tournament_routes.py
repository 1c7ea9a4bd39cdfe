import datetime

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from app.main import app
from app.api.dependencies import get_backend, get_current_user
from app.core.exceptions import BackendError
from app.schemas.auth_schemas import AuthUser

from conftest import add_participant, add_tournament, add_user

TODAY = datetime.date.today()
NEXT_MONTH = TODAY + datetime.timedelta(days=30)
LAST_MONTH = TODAY - datetime.timedelta(days=30)


def sign_in_as(user_id):
    app.dependency_overrides[get_current_user] = lambda: AuthUser(id=user_id, email=f"{user_id}@club.ro")


@pytest.fixture
def club(db_session):
    add_user(db_session, "org", first_name="Olga", last_name="Radu", role="organizer")
    add_user(db_session, "u1", first_name="Ana", last_name="Pop")
    add_user(db_session, "u2", first_name="Dan", last_name="Ilie")
    add_tournament(db_session, "open", NEXT_MONTH, name="Cupa de vara", max_players=16)
    add_tournament(db_session, "past", LAST_MONTH, status="completed", name="Cupa de primavara")
    add_participant(db_session, "past", "u1", total_wins=5, total_losses=1)
    return db_session


class TestTournamentListing:

    def test_visitor_listing(self, client: TestClient, club):
        response = client.get("/tournaments/")
        assert response.status_code == 200
        data = response.json()
        assert data["latest_upcoming"] is None
        assert [s["tournament"]["id"] for s in data["tournaments"]] == ["open", "past"]

    def test_organizer_listing_pins_upcoming(self, client: TestClient, club):
        sign_in_as("org")
        data = client.get("/tournaments/").json()
        assert data["latest_upcoming"]["tournament"]["id"] == "open"
        assert [s["tournament"]["id"] for s in data["tournaments"]] == ["past"]

    def test_card(self, client: TestClient, club):
        sign_in_as("u1")
        response = client.get("/tournaments/past")
        assert response.status_code == 200
        card = response.json()
        assert card["is_past"] is True
        assert card["is_registered"] is True
        assert card["registration_open"] is False
        assert card["participants"][0]["rank_class"] == "gold"
        assert card["participants"][0]["points_label"] == "5-1"

    def test_missing_tournament(self, client: TestClient, club):
        assert client.get("/tournaments/ghost").status_code == 404

    def test_lookup_error_is_a_bad_request(self, client: TestClient):
        failing_backend = MagicMock()
        failing_backend.select.side_effect = BackendError('relation "tournaments" does not exist', table="tournaments")
        app.dependency_overrides[get_backend] = lambda: failing_backend

        response = client.get("/tournaments/t1")

        assert response.status_code == 400
        assert response.json()["detail"] == 'relation "tournaments" does not exist'


class TestTournamentForms:

    def payload(self, **overrides):
        data = {
            "name": "Cupa Butterfly",
            "start_date": NEXT_MONTH.isoformat(),
            "end_date": NEXT_MONTH.isoformat(),
            "max_players": "32",
            "best_of": "5",
        }
        data.update(overrides)
        return data

    def test_create_as_organizer(self, client: TestClient, club):
        sign_in_as("org")
        response = client.post("/tournaments/", json=self.payload())
        assert response.status_code == 201
        assert response.json()["max_players"] == 32

    def test_create_as_player_is_forbidden(self, client: TestClient, club):
        sign_in_as("u1")
        assert client.post("/tournaments/", json=self.payload()).status_code == 403

    def test_create_as_visitor_is_forbidden(self, client: TestClient, club):
        assert client.post("/tournaments/", json=self.payload()).status_code == 403

    def test_create_with_missing_name(self, client: TestClient, club):
        sign_in_as("org")
        response = client.post("/tournaments/", json=self.payload(name=""))
        assert response.status_code == 400
        assert response.json()["detail"] == "Completeaza numele turneului."

    def test_update(self, client: TestClient, club):
        sign_in_as("org")
        response = client.put("/tournaments/open", json=self.payload(name="Cupa de toamna"))
        assert response.status_code == 200
        assert response.json()["name"] == "Cupa de toamna"

    def test_update_missing(self, client: TestClient, club):
        sign_in_as("org")
        assert client.put("/tournaments/ghost", json=self.payload()).status_code == 404


class TestRegistration:

    def test_register_and_withdraw(self, client: TestClient, club):
        sign_in_as("u2")

        response = client.post("/tournaments/open/registration")
        assert response.status_code == 200
        assert response.json()["message"] == "Inscriere reusita."
        assert [p["user_id"] for p in response.json()["participants"]] == ["u2"]

        response = client.delete("/tournaments/open/registration")
        assert response.status_code == 200
        assert response.json()["participants"] == []

    def test_duplicate_registration(self, client: TestClient, club):
        sign_in_as("u2")
        client.post("/tournaments/open/registration")
        response = client.post("/tournaments/open/registration")
        assert response.status_code == 400
        assert "UNIQUE" in response.json()["detail"].upper()

    def test_closed_tournament(self, client: TestClient, club):
        sign_in_as("u2")
        response = client.post("/tournaments/past/registration")
        assert response.status_code == 400
        assert "finalizat" in response.json()["detail"]

    def test_visitor_must_sign_in(self, client: TestClient, club):
        assert client.post("/tournaments/open/registration").status_code == 401


class TestOrganizerRoster:

    def test_add_and_remove(self, client: TestClient, club):
        sign_in_as("org")

        response = client.post("/tournaments/past/participants", json={"user_id": "u2"})
        assert response.status_code == 200
        assert [p["user_id"] for p in response.json()["participants"]] == ["u1", "u2"]

        response = client.delete("/tournaments/past/participants/u1")
        assert response.status_code == 200
        assert [p["user_id"] for p in response.json()["participants"]] == ["u2"]

    def test_player_cannot_add(self, client: TestClient, club):
        sign_in_as("u1")
        response = client.post("/tournaments/open/participants", json={"user_id": "u2"})
        assert response.status_code == 403
