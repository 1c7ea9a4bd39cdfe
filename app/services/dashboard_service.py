from app.core.config import settings
from app.schemas.auth_schemas import AuthState
from app.schemas.dashboard_schemas import Dashboard
from app.services import equipment_service, match_service, participant_service, stats_service, tournament_service
from app.services.backend import BackendClient
from app.utils.formatting import full_name, initials, level_label


def build_dashboard(backend: BackendClient, auth_state: AuthState) -> Dashboard:
    """The home page: the member's card, the newest tournament's standings and the latest results."""
    profile = auth_state.profile
    tournaments, _ = tournament_service.load_tournaments(backend)
    # Newest by start date as the backend orders them, upcoming or not
    latest = tournaments[0] if tournaments else None
    standings = participant_service.load_participants(backend, latest.id if latest else None)

    return Dashboard(
        club_name=settings.CLUB_NAME,
        display_name=full_name(profile.first_name, profile.last_name) if profile else "Vizitator",
        initials=(initials(profile.first_name, profile.last_name) or "??") if profile else "??",
        level_label=level_label(profile.level or "hobby") if profile else None,
        profile=profile,
        stats=stats_service.load_user_stats(backend, auth_state.user_id),
        equipment=equipment_service.load_current_setup(backend, auth_state.user_id),
        latest_tournament=tournament_service.summarize(latest) if latest else None,
        standings=participant_service.rank_participants(standings.participants),
        recent_matches=match_service.load_matches(backend, limit=settings.RECENT_MATCHES_LIMIT).matches,
    )
