from datetime import datetime
from typing import Optional

from pydantic import BaseModel

class EquipmentSetupRow(BaseModel):
    """A stored setup as returned by the backend, newest first."""
    id: Optional[str] = None
    forehand_rubber: Optional[str] = None
    backhand_rubber: Optional[str] = None
    blade: Optional[str] = None
    is_current: bool = False
    created_at: Optional[datetime] = None

class EquipmentSetup(BaseModel):
    forehand_rubber: Optional[str] = None
    backhand_rubber: Optional[str] = None
    blade: Optional[str] = None

class EquipmentForm(BaseModel):
    forehand: str = ""
    backhand: str = ""
    blade: str = ""

class EquipmentSaveResult(BaseModel):
    message: str
    setup: Optional[EquipmentSetup] = None
