from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

class Role(str, Enum):
    PLAYER = "player"
    ORGANIZER = "organizer"
    ADMIN = "admin"

class UserLevel(str, Enum):
    HOBBY = "hobby"
    AVANSATI = "avansati"
    OPEN = "open"
    ELITE = "elite"

class UserProfile(BaseModel):
    id: str
    email: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    avatar_url: Optional[str] = None
    mp_points: Optional[int] = 0
    level: Optional[UserLevel] = UserLevel.HOBBY
    role: Optional[Role] = None

    class Config:
        from_attributes = True
        use_enum_values = True

class RankingEntry(BaseModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    avatar_url: Optional[str] = None
    mp_points: Optional[int] = None
    level: Optional[str] = None
    level_label: str
    initials: str

class Rankings(BaseModel):
    users: List[RankingEntry] = []
    error: Optional[str] = None

class UserStats(BaseModel):
    matches_played: int
    wins: int
    losses: int
    win_rate: int
    tournaments: int
