import logging
from typing import Optional, Sequence

from app.core.exceptions import BackendError
from app.schemas.match_schemas import MatchOutcome
from app.schemas.user_schemas import UserStats
from app.services.backend import BackendClient

logger = logging.getLogger(__name__)


def win_rate(wins: int, matches_played: int) -> int:
    """Percentage of matches won, rounded half up; 0 before the first match."""
    if matches_played <= 0:
        return 0
    return (200 * wins + matches_played) // (2 * matches_played)


def compute_user_stats(matches: Sequence[MatchOutcome], user_id: str, tournaments: int = 0) -> UserStats:
    # A match without a winner counts as played but is neither a win nor a loss
    wins = sum(1 for m in matches if m.winner_id == user_id)
    losses = sum(1 for m in matches if m.winner_id and m.winner_id != user_id)
    return UserStats(
        matches_played=len(matches),
        wins=wins,
        losses=losses,
        win_rate=win_rate(wins, len(matches)),
        tournaments=tournaments,
    )


def load_user_stats(backend: BackendClient, user_id: Optional[str]) -> Optional[UserStats]:
    if not user_id:
        return None

    try:
        rows = backend.select(
            "matches",
            columns=("id", "player1_id", "player2_id", "winner_id"),
            any_of={"player1_id": user_id, "player2_id": user_id},
        )
        matches = [MatchOutcome(**row) for row in rows]
    except BackendError as e:
        logger.warning("stats match error for %s: %s", user_id, e.message)
        matches = []

    try:
        tournaments = len(backend.select("tournament_participants", columns=("id",), filters={"user_id": user_id}))
    except BackendError as e:
        logger.warning("stats tournaments error for %s: %s", user_id, e.message)
        tournaments = 0

    return compute_user_stats(matches, user_id, tournaments)
