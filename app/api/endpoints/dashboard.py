from fastapi import APIRouter, Depends

from app.schemas import auth_schemas
from app.schemas.dashboard_schemas import Dashboard
from app.services import dashboard_service
from app.services.backend import BackendClient
from app.api.dependencies import get_auth_state, get_backend

router = APIRouter()

@router.get("/", response_model=Dashboard)
async def get_dashboard_endpoint(
    auth_state: auth_schemas.AuthState = Depends(get_auth_state),
    backend: BackendClient = Depends(get_backend),
):
    return dashboard_service.build_dashboard(backend, auth_state)
