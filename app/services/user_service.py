import logging
from typing import Optional

from app.core.exceptions import BackendError
from app.schemas import auth_schemas
from app.schemas.user_schemas import Rankings, RankingEntry, Role, UserLevel, UserProfile
from app.services.backend import BackendClient
from app.utils.formatting import initials, level_label

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = ("id", "email", "first_name", "last_name", "avatar_url", "mp_points", "level", "role")
RANKING_COLUMNS = ("id", "first_name", "last_name", "avatar_url", "mp_points", "level")


def normalize_role(role: Optional[str]) -> Role:
    """Admins get the organizer permissions; an unset role is a plain player."""
    if role == Role.ADMIN:
        return Role.ORGANIZER
    return Role(role) if role else Role.PLAYER


def load_profile(backend: BackendClient, user_id: str) -> Optional[UserProfile]:
    try:
        row = backend.select_one("users", columns=PROFILE_COLUMNS, filters={"id": user_id})
    except BackendError as e:
        logger.warning("profile error for %s: %s", user_id, e.message)
        return None

    # An unknown stored level or role makes the profile unusable, not the request
    try:
        return UserProfile(
            id=row.get("id") or user_id,
            email=row.get("email"),
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            avatar_url=row.get("avatar_url"),
            mp_points=row.get("mp_points") or 0,
            level=row.get("level") or UserLevel.HOBBY,
            role=normalize_role(row.get("role")),
        )
    except ValueError as e:
        logger.warning("invalid profile for %s: %s", user_id, e)
        return None


def load_auth_state(backend: BackendClient, user: Optional[auth_schemas.AuthUser]) -> auth_schemas.AuthState:
    if user is None:
        return auth_schemas.AuthState()
    profile = load_profile(backend, user.id)
    if profile is None:
        return auth_schemas.AuthState(user=user)
    return auth_schemas.AuthState(user=user, role=profile.role, profile=profile)


def load_rankings(backend: BackendClient) -> Rankings:
    """Active players, best MP Points first."""
    try:
        rows = backend.select(
            "users",
            columns=RANKING_COLUMNS,
            filters={"is_active": True},
            order_by="mp_points",
            descending=True,
        )
    except BackendError as e:
        return Rankings(error=e.message)

    return Rankings(users=[
        RankingEntry(
            id=row["id"],
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            avatar_url=row.get("avatar_url"),
            mp_points=row.get("mp_points"),
            level=row.get("level"),
            level_label=level_label(row.get("level")),
            initials=initials(row.get("first_name"), row.get("last_name")),
        )
        for row in rows
    ])
