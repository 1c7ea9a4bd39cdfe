import logging
from typing import List, Optional, Sequence

from app.core.exceptions import BackendError
from app.schemas.auth_schemas import AuthState
from app.schemas.participant_schemas import (
    ParticipantList,
    RankClass,
    RankedParticipant,
    RosterResult,
    TournamentParticipant,
)
from app.services.backend import BackendClient
from app.utils.formatting import initials, level_label

logger = logging.getLogger(__name__)

TABLE = "tournament_participants"
PARTICIPANT_COLUMNS = ("id", "user_id", "total_wins", "total_losses")
PARTICIPANT_USER_COLUMNS = ("first_name", "last_name", "level", "mp_points")

MEDALS = (RankClass.GOLD, RankClass.SILVER, RankClass.BRONZE)


def load_participants(backend: BackendClient, tournament_id: Optional[str]) -> ParticipantList:
    """Participants of one tournament, most wins first (the backend's order)."""
    if not tournament_id:
        return ParticipantList()
    try:
        rows = backend.select(
            TABLE,
            columns=PARTICIPANT_COLUMNS,
            filters={"tournament_id": tournament_id},
            order_by="total_wins",
            descending=True,
            embed={"user": PARTICIPANT_USER_COLUMNS},
        )
    except BackendError as e:
        return ParticipantList(error=e.message)

    participants = []
    for row in rows:
        user = row.pop("user", None) or {}
        participants.append(TournamentParticipant(
            **row,
            user={key: value for key, value in user.items() if value is not None},
        ))
    return ParticipantList(participants=participants)


def points_label(participant: TournamentParticipant) -> str:
    return f"{participant.total_wins or 0}-{participant.total_losses or 0}"


def rank_participants(participants: Sequence[TournamentParticipant]) -> List[RankedParticipant]:
    """Hand out medals by position. The input order is kept as-is; ties are not re-sorted."""
    ranked = []
    for index, participant in enumerate(participants):
        ranked.append(RankedParticipant(
            **participant.model_dump(),
            position=index + 1,
            rank_class=MEDALS[index] if index < len(MEDALS) else None,
            points_label=points_label(participant),
            initials=initials(participant.user.first_name, participant.user.last_name),
            level_label=level_label(participant.user.level),
        ))
    return ranked


def is_registered(participants: Sequence[TournamentParticipant], user_id: Optional[str]) -> bool:
    if not user_id:
        return False
    return any(p.user_id == user_id for p in participants)


def _reloaded(backend: BackendClient, tournament_id: str, message: str) -> RosterResult:
    refreshed = load_participants(backend, tournament_id)
    return RosterResult(
        message=message,
        participants=rank_participants(refreshed.participants),
        error=refreshed.error,
    )


def _require_organizer(auth_state: AuthState):
    if not auth_state.can_manage_tournaments:
        raise PermissionError("Doar organizatorii pot gestiona participanții.")


def self_register(backend: BackendClient, tournament_id: str, user_id: Optional[str]) -> RosterResult:
    if not user_id:
        raise PermissionError("Autentifica-te pentru inscriere.")
    backend.insert(TABLE, {"tournament_id": tournament_id, "user_id": user_id})
    logger.info("user %s registered for tournament %s", user_id, tournament_id)
    return _reloaded(backend, tournament_id, "Inscriere reusita.")


def self_withdraw(backend: BackendClient, tournament_id: str, user_id: Optional[str]) -> RosterResult:
    if not user_id:
        raise PermissionError("Autentifica-te pentru inscriere.")
    backend.delete(TABLE, {"tournament_id": tournament_id, "user_id": user_id})
    logger.info("user %s withdrew from tournament %s", user_id, tournament_id)
    return _reloaded(backend, tournament_id, "Te-ai retras din turneu.")


def admin_add(backend: BackendClient, auth_state: AuthState, tournament_id: str, user_id: str) -> RosterResult:
    _require_organizer(auth_state)
    if not user_id:
        raise ValueError("Selecteaza jucator.")
    backend.insert(TABLE, {"tournament_id": tournament_id, "user_id": user_id})
    logger.info("organizer %s added %s to tournament %s", auth_state.user_id, user_id, tournament_id)
    return _reloaded(backend, tournament_id, "Jucator inscris.")


def admin_remove(backend: BackendClient, auth_state: AuthState, tournament_id: str, user_id: str) -> RosterResult:
    _require_organizer(auth_state)
    backend.delete(TABLE, {"tournament_id": tournament_id, "user_id": user_id})
    logger.info("organizer %s removed %s from tournament %s", auth_state.user_id, user_id, tournament_id)
    return _reloaded(backend, tournament_id, "Jucator retras.")
