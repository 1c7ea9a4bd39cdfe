import logging
from typing import Optional, Sequence

from app.core.exceptions import BackendError
from app.schemas.equipment_schemas import EquipmentForm, EquipmentSetup, EquipmentSetupRow
from app.services.backend import BackendClient

logger = logging.getLogger(__name__)

SETUP_COLUMNS = ("id", "forehand_rubber", "backhand_rubber", "blade", "is_current", "created_at")


def resolve_current_setup(rows: Sequence[EquipmentSetupRow]) -> Optional[EquipmentSetup]:
    """Pick the setup flagged current, else the newest one. `rows` must be newest first."""
    current = next((row for row in rows if row.is_current), None)
    if current is None and rows:
        current = rows[0]
    if current is None:
        return None
    return EquipmentSetup(
        forehand_rubber=current.forehand_rubber,
        backhand_rubber=current.backhand_rubber,
        blade=current.blade,
    )


def load_current_setup(backend: BackendClient, user_id: Optional[str]) -> Optional[EquipmentSetup]:
    if not user_id:
        return None
    try:
        rows = backend.select(
            "equipment_setups",
            columns=SETUP_COLUMNS,
            filters={"user_id": user_id},
            order_by="created_at",
            descending=True,
        )
    except BackendError as e:
        logger.warning("equipment error for %s: %s", user_id, e.message)
        return None
    return resolve_current_setup([EquipmentSetupRow(**row) for row in rows])


def save_setup(backend: BackendClient, user_id: Optional[str], form: EquipmentForm) -> Optional[EquipmentSetup]:
    """Store `form` as the user's current setup.

    Clearing the previous current flag and inserting the new row happen in one
    transaction, so a user never ends up with zero or two current setups.
    """
    if not user_id:
        raise PermissionError("Trebuie să te autentifici pentru a salva setup-ul.")

    with backend.transaction():
        backend.update(
            "equipment_setups",
            {"is_current": False},
            filters={"user_id": user_id, "is_current": True},
        )
        backend.insert("equipment_setups", {
            "user_id": user_id,
            "forehand_rubber": form.forehand or None,
            "backhand_rubber": form.backhand or None,
            "blade": form.blade or None,
            "is_current": True,
        })
    logger.info("equipment setup saved for %s", user_id)
    return load_current_setup(backend, user_id)
