from typing import Optional

from app.core.exceptions import BackendError
from app.schemas.match_schemas import MatchHistory, MatchRead, MatchView
from app.services.backend import BackendClient
from app.utils.formatting import NO_VALUE, format_date

MATCH_COLUMNS = ("id", "match_date", "player1_score", "player2_score", "winner_id")
PLAYER_COLUMNS = ("id", "first_name", "last_name", "level", "mp_points")


def score_label(match: MatchRead) -> str:
    if match.player1_score is None or match.player2_score is None:
        return NO_VALUE
    return f"{match.player1_score}-{match.player2_score}"


def to_view(match: MatchRead) -> MatchView:
    label = score_label(match)
    return MatchView(
        **match.model_dump(),
        score_label=label,
        score_caption="Scor indisponibil" if label == NO_VALUE else "Scor final",
        date_label=format_date(match.match_date, short=True) or "Data necunoscută",
        player1_won=match.winner_id is not None and match.winner_id == match.player1.id,
        player2_won=match.winner_id is not None and match.winner_id == match.player2.id,
    )


def load_matches(backend: BackendClient, user_id: Optional[str] = None, limit: Optional[int] = None) -> MatchHistory:
    """Most recent matches first, optionally only those `user_id` played in."""
    try:
        rows = backend.select(
            "matches",
            columns=MATCH_COLUMNS,
            any_of={"player1_id": user_id, "player2_id": user_id} if user_id else None,
            order_by="match_date",
            descending=True,
            limit=limit,
            embed={
                "player1": PLAYER_COLUMNS,
                "player2": PLAYER_COLUMNS,
                "tournament": ("name",),
            },
        )
    except BackendError as e:
        return MatchHistory(error=e.message)

    return MatchHistory(matches=[to_view(MatchRead(**row)) for row in rows])
