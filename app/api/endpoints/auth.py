from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.exceptions import AuthError
from app.schemas import auth_schemas
from app.services.auth_service import AuthClient
from app.api.dependencies import get_auth_client, get_auth_state, require_token

router = APIRouter()

@router.post("/sign-up", response_model=auth_schemas.SignUpResult, status_code=status.HTTP_201_CREATED)
async def sign_up(
    request: auth_schemas.SignUpRequest,
    auth_client: AuthClient = Depends(get_auth_client),
):
    """Create an account (and its player profile) and sign it in straight away."""
    try:
        token = auth_client.sign_up(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return auth_schemas.SignUpResult(message="Cont creat si autentificat.", token=token)

@router.post("/sign-in", response_model=auth_schemas.Token)
async def sign_in(
    request: auth_schemas.SignInRequest,
    auth_client: AuthClient = Depends(get_auth_client),
):
    try:
        return auth_client.sign_in(request.email, request.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

@router.post("/sign-out", response_model=Dict[str, str])
async def sign_out(
    token: str = Depends(require_token),
    auth_client: AuthClient = Depends(get_auth_client),
):
    auth_client.sign_out(token)
    return {"message": "Signed out."}

@router.get("/me", response_model=auth_schemas.AuthState)
async def read_auth_state(auth_state: auth_schemas.AuthState = Depends(get_auth_state)):
    """The signed-in account, its normalized role and profile. All empty for visitors."""
    return auth_state
