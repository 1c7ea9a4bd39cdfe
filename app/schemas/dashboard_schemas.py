from typing import List, Optional

from pydantic import BaseModel

from .equipment_schemas import EquipmentSetup
from .match_schemas import MatchView
from .participant_schemas import RankedParticipant
from .tournament_schemas import TournamentSummary
from .user_schemas import UserProfile, UserStats

class Dashboard(BaseModel):
    club_name: str
    display_name: str
    initials: str
    level_label: Optional[str] = None
    profile: Optional[UserProfile] = None
    stats: Optional[UserStats] = None
    equipment: Optional[EquipmentSetup] = None
    latest_tournament: Optional[TournamentSummary] = None
    standings: List[RankedParticipant] = []
    recent_matches: List[MatchView] = []
