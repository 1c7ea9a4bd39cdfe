from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

class ParticipantUser(BaseModel):
    first_name: str = ""
    last_name: str = ""
    level: Optional[str] = None
    mp_points: Optional[int] = None

class TournamentParticipant(BaseModel):
    id: str
    user_id: str
    total_wins: Optional[int] = None
    total_losses: Optional[int] = None
    user: ParticipantUser = Field(default_factory=ParticipantUser)

class RankClass(str, Enum):
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"

class RankedParticipant(TournamentParticipant):
    position: int
    rank_class: Optional[RankClass] = None
    points_label: str
    initials: str
    level_label: str

    class Config:
        use_enum_values = True

class ParticipantList(BaseModel):
    participants: List[TournamentParticipant] = []
    error: Optional[str] = None

class AddParticipantRequest(BaseModel):
    user_id: str

class RosterResult(BaseModel):
    message: str
    participants: List[RankedParticipant] = []
    error: Optional[str] = None
