from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.exceptions import BackendError
from app.schemas import auth_schemas, user_schemas
from app.schemas.equipment_schemas import EquipmentForm, EquipmentSaveResult, EquipmentSetup
from app.services import equipment_service, stats_service, user_service
from app.services.backend import BackendClient
from app.api.dependencies import get_backend, require_user

router = APIRouter()

@router.get("/", response_model=user_schemas.Rankings)
async def read_rankings(backend: BackendClient = Depends(get_backend)):
    """Active club members ordered by MP Points."""
    return user_service.load_rankings(backend)

@router.get("/me", response_model=user_schemas.UserProfile)
async def read_users_me(auth_state: auth_schemas.AuthState = Depends(require_user)):
    if auth_state.profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return auth_state.profile

@router.get("/me/stats", response_model=Optional[user_schemas.UserStats])
async def read_my_stats(
    auth_state: auth_schemas.AuthState = Depends(require_user),
    backend: BackendClient = Depends(get_backend),
):
    return stats_service.load_user_stats(backend, auth_state.user_id)

@router.get("/me/equipment", response_model=Optional[EquipmentSetup])
async def read_my_equipment(
    auth_state: auth_schemas.AuthState = Depends(require_user),
    backend: BackendClient = Depends(get_backend),
):
    return equipment_service.load_current_setup(backend, auth_state.user_id)

@router.put("/me/equipment", response_model=EquipmentSaveResult)
async def save_my_equipment(
    form: EquipmentForm,
    auth_state: auth_schemas.AuthState = Depends(require_user),
    backend: BackendClient = Depends(get_backend),
):
    """Replace the current setup. Earlier setups are kept as history."""
    try:
        setup = equipment_service.save_setup(backend, auth_state.user_id, form)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return EquipmentSaveResult(message="Setup salvat.", setup=setup)

@router.get("/{user_id}/stats", response_model=Optional[user_schemas.UserStats])
async def read_user_stats(user_id: str, backend: BackendClient = Depends(get_backend)):
    return stats_service.load_user_stats(backend, user_id)
