import logging
from datetime import date, datetime, time, timezone
from typing import List, Optional, Sequence, Tuple, Union

from app.core.exceptions import BackendError, FormValidationError
from app.schemas.auth_schemas import AuthState
from app.schemas.participant_schemas import ParticipantList
from app.schemas.tournament_schemas import (
    Tournament,
    TournamentCard,
    TournamentForm,
    TournamentListing,
    TournamentStatus,
    TournamentSummary,
)
from app.services import participant_service
from app.services.backend import BackendClient
from app.utils.formatting import format_range, status_label

logger = logging.getLogger(__name__)

TABLE = "tournaments"
TOURNAMENT_COLUMNS = (
    "id", "name", "description", "format", "start_date", "end_date", "status", "max_players", "best_of",
)

CLOSED_PAST = "Turneul este finalizat. Inscrierile nu mai sunt disponibile."
CLOSED_NOT_UPCOMING = "Inscrierile sunt disponibile doar pentru turneele viitoare."


# --- Listing ---

def load_tournaments(backend: BackendClient) -> Tuple[List[Tournament], Optional[str]]:
    """All tournaments, latest start date first, and the fetch error if there was one."""
    try:
        rows = backend.select(TABLE, columns=TOURNAMENT_COLUMNS, order_by="start_date", descending=True)
    except BackendError as e:
        return [], e.message
    return [Tournament(**row) for row in rows], None


def get_tournament(backend: BackendClient, tournament_id: str) -> Optional[Tournament]:
    rows = backend.select(TABLE, columns=TOURNAMENT_COLUMNS, filters={"id": tournament_id})
    return Tournament(**rows[0]) if rows else None


def sort_tournaments(tournaments: Sequence[Tournament]) -> List[Tournament]:
    # sorted() is stable with reverse=True too, so equal dates keep their input order
    return sorted(tournaments, key=lambda t: t.start_date, reverse=True)


def _start_instant(tournament: Tournament) -> datetime:
    return datetime.combine(tournament.start_date, time.min, tzinfo=timezone.utc)


def latest_upcoming(tournaments: Sequence[Tournament], now: Optional[datetime] = None) -> Optional[Tournament]:
    """The upcoming (or not yet started) tournament with the latest start date."""
    now = now or datetime.now(timezone.utc)
    upcoming = [
        t for t in tournaments
        if t.status == TournamentStatus.UPCOMING or _start_instant(t) > now
    ]
    if not upcoming:
        return None
    return sort_tournaments(upcoming)[0]


def partition_tournaments(
    tournaments: Sequence[Tournament], now: Optional[datetime] = None
) -> Tuple[Optional[Tournament], List[Tournament]]:
    """Split off the latest upcoming tournament; the rest stays sorted and never repeats it."""
    latest = latest_upcoming(tournaments, now)
    ordered = sort_tournaments(tournaments)
    if latest is None:
        return None, ordered
    return latest, [t for t in ordered if t.id != latest.id]


def details_label(tournament: Tournament) -> str:
    label = format_range(tournament.start_date, tournament.end_date)
    if tournament.max_players:
        label += f" · {tournament.max_players} jucatori"
    if tournament.best_of:
        label += f" · Best of {tournament.best_of}"
    return label


def summarize(tournament: Tournament) -> TournamentSummary:
    return TournamentSummary(
        tournament=tournament,
        date_range=format_range(tournament.start_date, tournament.end_date),
        status_label=status_label(tournament.status),
        details=details_label(tournament),
    )


def build_listing(backend: BackendClient, auth_state: AuthState, now: Optional[datetime] = None) -> TournamentListing:
    """The tournaments page. Organizers get the latest upcoming tournament pinned on top."""
    tournaments, error = load_tournaments(backend)
    if auth_state.can_manage_tournaments:
        latest, rest = partition_tournaments(tournaments, now)
    else:
        latest, rest = None, sort_tournaments(tournaments)
    return TournamentListing(
        latest_upcoming=summarize(latest) if latest else None,
        tournaments=[summarize(t) for t in rest],
        error=error,
    )


# --- Registration gate ---

def _today(today: Optional[date]) -> date:
    return today or datetime.now(timezone.utc).date()


def is_past(tournament: Tournament, today: Optional[date] = None) -> bool:
    return tournament.end_date < _today(today)


def is_upcoming(tournament: Tournament, today: Optional[date] = None) -> bool:
    return tournament.status == TournamentStatus.UPCOMING or tournament.start_date >= _today(today)


def registration_open(tournament: Tournament, today: Optional[date] = None) -> bool:
    return not is_past(tournament, today) and is_upcoming(tournament, today)


def registration_notice(tournament: Tournament, today: Optional[date] = None) -> Optional[str]:
    if registration_open(tournament, today):
        return None
    return CLOSED_PAST if is_past(tournament, today) else CLOSED_NOT_UPCOMING


def ensure_registration_open(tournament: Tournament, today: Optional[date] = None):
    notice = registration_notice(tournament, today)
    if notice:
        raise ValueError(notice)


def participants_label(count: int, tournament: Tournament) -> str:
    if tournament.max_players:
        return f"{count} / {tournament.max_players}"
    return str(count)


def build_card(
    tournament: Tournament,
    participants: ParticipantList,
    user_id: Optional[str] = None,
    today: Optional[date] = None,
) -> TournamentCard:
    past = is_past(tournament, today)
    return TournamentCard(
        tournament=tournament,
        date_range=format_range(tournament.start_date, tournament.end_date),
        status_label="Finalizat" if past else status_label(tournament.status),
        is_past=past,
        is_upcoming=is_upcoming(tournament, today),
        registration_open=registration_open(tournament, today),
        is_registered=participant_service.is_registered(participants.participants, user_id),
        notice=registration_notice(tournament, today),
        participants_label=participants_label(len(participants.participants), tournament),
        participants=participant_service.rank_participants(participants.participants),
        error=participants.error,
    )


# --- Create / update ---

def _parse_count(value: Union[int, str, None]) -> Optional[int]:
    if value is None or isinstance(value, int):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return None


def _parse_date(value: str, message: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise FormValidationError(message)


def validate_form(form: TournamentForm) -> dict:
    """Check the form and turn it into a `tournaments` row. Nothing is sent to the backend."""
    if not form.name.strip():
        raise FormValidationError("Completeaza numele turneului.")
    if not form.start_date.strip() or not form.end_date.strip():
        raise FormValidationError("Completeaza data de start si data de sfarsit.")

    start_date = _parse_date(form.start_date, "Data de start nu este valida.")
    end_date = _parse_date(form.end_date, "Data de sfarsit nu este valida.")
    if end_date < start_date:
        raise FormValidationError("Data de sfarsit trebuie sa fie dupa data de start.")

    return {
        "name": form.name.strip(),
        "description": (form.description or "").strip() or None,
        "start_date": start_date,
        "end_date": end_date,
        "status": form.status,
        "format": form.format,
        "max_players": _parse_count(form.max_players),
        "best_of": _parse_count(form.best_of),
    }


def create_tournament(backend: BackendClient, auth_state: AuthState, form: TournamentForm) -> Tournament:
    values = validate_form(form)
    if auth_state.user is None:
        raise PermissionError("Trebuie sa fii autentificat pentru a crea turneu.")
    if not auth_state.can_manage_tournaments:
        raise PermissionError("Doar organizatorii pot crea turnee.")

    values["created_by"] = auth_state.user_id
    row = backend.insert(TABLE, values, columns=TOURNAMENT_COLUMNS)
    logger.info("tournament %s created by %s", row["id"], auth_state.user_id)
    return Tournament(**row)


def update_tournament(
    backend: BackendClient, auth_state: AuthState, tournament_id: str, form: TournamentForm
) -> Optional[Tournament]:
    if not auth_state.can_manage_tournaments:
        raise PermissionError("Doar organizatorii pot edita turnee.")
    values = validate_form(form)

    rows = backend.update(TABLE, values, filters={"id": tournament_id}, columns=TOURNAMENT_COLUMNS)
    if not rows:
        return None
    logger.info("tournament %s updated by %s", tournament_id, auth_state.user_id)
    return Tournament(**rows[0])
