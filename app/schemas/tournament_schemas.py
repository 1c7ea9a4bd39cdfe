from datetime import date
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel

from .participant_schemas import RankedParticipant

class TournamentStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class TournamentFormat(str, Enum):
    ROUND_ROBIN = "round_robin"
    SWISS = "swiss"
    SINGLE_ELIMINATION = "single_elimination"
    DOUBLE_ELIMINATION = "double_elimination"

class Tournament(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    status: TournamentStatus
    format: Optional[TournamentFormat] = TournamentFormat.ROUND_ROBIN
    max_players: Optional[int] = None
    best_of: Optional[int] = None

    class Config:
        from_attributes = True
        use_enum_values = True

class TournamentForm(BaseModel):
    """Create/edit form. Values arrive as typed by the organizer and are checked by the service."""
    name: str = ""
    description: Optional[str] = ""
    start_date: str = ""
    end_date: str = ""
    status: TournamentStatus = TournamentStatus.UPCOMING
    format: TournamentFormat = TournamentFormat.ROUND_ROBIN
    max_players: Optional[Union[int, str]] = "16"
    best_of: Optional[Union[int, str]] = "3"

    class Config:
        use_enum_values = True

    @classmethod
    def from_tournament(cls, tournament: Tournament) -> "TournamentForm":
        return cls(
            name=tournament.name,
            description=tournament.description or "",
            start_date=tournament.start_date.isoformat(),
            end_date=tournament.end_date.isoformat(),
            status=tournament.status,
            format=tournament.format or TournamentFormat.ROUND_ROBIN,
            max_players="" if tournament.max_players is None else str(tournament.max_players),
            best_of="" if tournament.best_of is None else str(tournament.best_of),
        )

class TournamentSummary(BaseModel):
    tournament: Tournament
    date_range: str
    status_label: str
    details: str

class TournamentListing(BaseModel):
    latest_upcoming: Optional[TournamentSummary] = None
    tournaments: List[TournamentSummary] = []
    error: Optional[str] = None

class TournamentCard(BaseModel):
    tournament: Tournament
    date_range: str
    status_label: str
    is_past: bool
    is_upcoming: bool
    registration_open: bool
    is_registered: bool
    notice: Optional[str] = None
    participants_label: str
    participants: List[RankedParticipant] = []
    error: Optional[str] = None
