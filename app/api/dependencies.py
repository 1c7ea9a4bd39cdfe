from typing import Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.core.security import oauth2_scheme
from app.schemas import auth_schemas
from app.services import user_service
from app.services.auth_service import AuthClient, auth_events
from app.services.backend import BackendClient

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_backend(db: Session = Depends(get_db)) -> BackendClient:
    return BackendClient(db)

def get_auth_client(db: Session = Depends(get_db)) -> AuthClient:
    return AuthClient(db, events=auth_events)

def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    auth_client: AuthClient = Depends(get_auth_client),
) -> Optional[auth_schemas.AuthUser]:
    return auth_client.get_current_user(token)

def get_auth_state(
    user: Optional[auth_schemas.AuthUser] = Depends(get_current_user),
    backend: BackendClient = Depends(get_backend),
) -> auth_schemas.AuthState:
    """Per-request view of who is signed in, passed explicitly into every page."""
    return user_service.load_auth_state(backend, user)

def require_user(auth_state: auth_schemas.AuthState = Depends(get_auth_state)) -> auth_schemas.AuthState:
    if auth_state.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_state

def require_token(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token
