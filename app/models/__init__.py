from app.core.database import Base, engine

# Import all models here to ensure they are registered with Base
from .user import User
from .tournament import Tournament
from .participant import TournamentParticipant
from .match import Match
from .equipment import EquipmentSetup
from .auth import AuthAccount, AuthSession


def create_tables(bind=engine):
    Base.metadata.create_all(bind=bind)
