"""Display labels shared by the club pages (Romanian locale)."""
from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str, None]

MONTHS_LONG = (
    "ianuarie", "februarie", "martie", "aprilie", "mai", "iunie",
    "iulie", "august", "septembrie", "octombrie", "noiembrie", "decembrie",
)
MONTHS_SHORT = (
    "ian.", "feb.", "mar.", "apr.", "mai", "iun.",
    "iul.", "aug.", "sept.", "oct.", "nov.", "dec.",
)

STATUS_LABELS = {
    "ongoing": "În desfășurare",
    "upcoming": "În curând",
    "completed": "Finalizat",
    "cancelled": "Anulat",
}

LEVEL_LABELS = {
    "avansati": "Avansați",
    "open": "Open",
    "elite": "Elite",
}

NO_VALUE = "—"


def _as_date(value: DateLike) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def format_date(value: DateLike, short: bool = False) -> str:
    """`05 martie 2026`, or `05 mar. 2026` with `short`. Empty input gives ""."""
    day = _as_date(value)
    if day is None:
        return ""
    months = MONTHS_SHORT if short else MONTHS_LONG
    return f"{day.day:02d} {months[day.month - 1]} {day.year}"


def format_range(start: DateLike, end: DateLike) -> str:
    if not start or not end:
        return ""
    return f"{format_date(start)} - {format_date(end)}"


def status_label(status: Optional[str]) -> str:
    return STATUS_LABELS.get(status, "Necunoscut")


def level_label(level: Optional[str]) -> str:
    return LEVEL_LABELS.get(level, "Hobby")


def initials(first_name: Optional[str], last_name: Optional[str]) -> str:
    return f"{(first_name or '')[:1]}{(last_name or '')[:1]}".upper()


def full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    return f"{first_name or ''} {last_name or ''}".strip()
