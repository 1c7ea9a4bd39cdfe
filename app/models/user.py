import datetime
import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, index=True, nullable=True)
    first_name = Column(String, default="")
    last_name = Column(String, default="")
    avatar_url = Column(String, nullable=True)
    mp_points = Column(Integer, default=0)
    level = Column(String, default="hobby") # hobby, avansati, open, elite
    role = Column(String, default="player") # player, organizer, admin
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    created_tournaments = relationship("Tournament", back_populates="creator")
    participations = relationship("TournamentParticipant", back_populates="user")
    equipment_setups = relationship("EquipmentSetup", back_populates="user")
    # Matches reference users three times (player1, player2, winner); they are
    # navigated from the Match side only.
