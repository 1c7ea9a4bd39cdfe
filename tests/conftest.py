import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.main import app
from app.api.dependencies import get_db
from app.models import EquipmentSetup, Match, Tournament, TournamentParticipant, User
from app.schemas.auth_schemas import AuthState, AuthUser
from app.services.backend import BackendClient

@pytest.fixture
def db_session():
    # One in-memory database per test, shared by every connection of the test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()

@pytest.fixture
def backend(db_session):
    return BackendClient(db_session)

@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Row factories ---

def add_user(db, user_id, first_name="Ana", last_name="Pop", role="player", mp_points=0, level="hobby", **kwargs):
    user = User(
        id=user_id,
        email=kwargs.pop("email", f"{user_id}@club.ro"),
        first_name=first_name,
        last_name=last_name,
        role=role,
        mp_points=mp_points,
        level=level,
        **kwargs,
    )
    db.add(user)
    db.commit()
    return user

def add_tournament(db, tournament_id, start_date, end_date=None, status="upcoming", name=None, **kwargs):
    tournament = Tournament(
        id=tournament_id,
        name=name or f"Cupa {tournament_id}",
        start_date=start_date,
        end_date=end_date or start_date,
        status=status,
        **kwargs,
    )
    db.add(tournament)
    db.commit()
    return tournament

def add_participant(db, tournament_id, user_id, total_wins=0, total_losses=0):
    participant = TournamentParticipant(
        tournament_id=tournament_id, user_id=user_id, total_wins=total_wins, total_losses=total_losses
    )
    db.add(participant)
    db.commit()
    return participant

def add_match(db, match_id, player1_id, player2_id, winner_id=None, match_date=None, score=(None, None), **kwargs):
    match = Match(
        id=match_id,
        player1_id=player1_id,
        player2_id=player2_id,
        winner_id=winner_id,
        match_date=match_date,
        player1_score=score[0],
        player2_score=score[1],
        **kwargs,
    )
    db.add(match)
    db.commit()
    return match

def add_setup(db, user_id, blade, is_current=False, created_at=None):
    setup = EquipmentSetup(
        user_id=user_id,
        blade=blade,
        is_current=is_current,
        created_at=created_at or datetime.datetime.utcnow(),
    )
    db.add(setup)
    db.commit()
    return setup

def auth_state_for(user_id, role="player"):
    return AuthState(user=AuthUser(id=user_id, email=f"{user_id}@club.ro"), role=role)
