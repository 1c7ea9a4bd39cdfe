from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.schemas import match_schemas
from app.services import match_service
from app.services.backend import BackendClient
from app.api.dependencies import get_backend

router = APIRouter()

@router.get("/", response_model=match_schemas.MatchHistory)
async def get_match_history_endpoint(
    user_id: Optional[str] = Query(None, description="Only matches this player took part in"),
    limit: Optional[int] = Query(None, ge=1),
    backend: BackendClient = Depends(get_backend),
):
    """Match history, newest first. A failed query comes back as `error` with no matches."""
    return match_service.load_matches(backend, user_id=user_id, limit=limit)
