from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

class MatchPlayer(BaseModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    level: Optional[str] = None
    mp_points: Optional[int] = None

class MatchTournament(BaseModel):
    name: str

class MatchRead(BaseModel):
    id: str
    match_date: Optional[datetime] = None
    player1_score: Optional[int] = None
    player2_score: Optional[int] = None
    winner_id: Optional[str] = None
    player1: MatchPlayer
    player2: MatchPlayer
    tournament: Optional[MatchTournament] = None

class MatchOutcome(BaseModel):
    """Just enough of a match to count wins and losses."""
    id: str
    player1_id: str
    player2_id: str
    winner_id: Optional[str] = None

class MatchView(MatchRead):
    score_label: str
    score_caption: str
    date_label: str
    player1_won: bool
    player2_won: bool

class MatchHistory(BaseModel):
    matches: List[MatchView] = []
    error: Optional[str] = None
