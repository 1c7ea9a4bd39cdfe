import logging
import uuid
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.core import security
from app.core.config import settings
from app.core.exceptions import AuthError, FormValidationError
from app.models import AuthAccount, AuthSession, User
from app.schemas import auth_schemas
from app.schemas.user_schemas import Role

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

AuthListener = Callable[[str, Optional[auth_schemas.AuthUser]], None]


class Subscription:
    def __init__(self, events: "AuthEvents", listener: AuthListener):
        self._events = events
        self._listener = listener

    def unsubscribe(self):
        self._events._remove(self._listener)


class AuthEvents:
    """Session-change notifications: listeners hear every sign-in and sign-out."""

    def __init__(self):
        self._listeners: List[AuthListener] = []

    def subscribe(self, listener: AuthListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove(self, listener: AuthListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: str, user: Optional[auth_schemas.AuthUser]):
        for listener in list(self._listeners):
            try:
                listener(event, user)
            except Exception:
                logger.exception("auth listener failed on %s", event)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


auth_events = AuthEvents()


class AuthClient:
    def __init__(self, db: Session, events: AuthEvents = auth_events):
        self.db = db
        self.events = events

    def _open_session(self, account: AuthAccount) -> auth_schemas.Token:
        issued = security.create_access_token(data={"sub": account.id})
        self.db.add(AuthSession(
            id=issued.token_id,
            user_id=account.id,
            expires_at=issued.expires_at.replace(tzinfo=None),
        ))
        self.db.commit()
        return auth_schemas.Token(access_token=issued.access_token, user_id=account.id)

    def sign_up(self, request: auth_schemas.SignUpRequest) -> auth_schemas.Token:
        """Create the credentials and the matching `users` profile row, then sign in."""
        email = request.email.strip().lower()
        if not email or not request.password.strip():
            raise FormValidationError("Completeaza email si parola.")

        role = request.role
        if role != Role.PLAYER and not settings.ALLOW_ROLE_SELECTION:
            role = Role.PLAYER

        user_id = str(uuid.uuid4())
        account = AuthAccount(id=user_id, email=email, hashed_password=security.get_password_hash(request.password))
        profile = User(
            id=user_id,
            email=email,
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            role=Role(role).value,
        )
        try:
            self.db.add(account)
            self.db.flush()
            self.db.add(profile)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AuthError("User already registered")

        logger.info("new account %s (%s)", user_id, profile.role)
        token = self._open_session(account)
        self.events.publish(SIGNED_IN, auth_schemas.AuthUser(id=user_id, email=email))
        return token

    def sign_in(self, email: str, password: str) -> auth_schemas.Token:
        if not email.strip() or not password.strip():
            raise FormValidationError("Completeaza email si parola.")
        account = self.db.query(AuthAccount).filter(AuthAccount.email == email.strip().lower()).first()
        if not account or not security.verify_password(password, account.hashed_password):
            raise AuthError("Invalid login credentials")

        token = self._open_session(account)
        self.events.publish(SIGNED_IN, auth_schemas.AuthUser(id=account.id, email=account.email))
        return token

    def _token_data(self, token: str) -> auth_schemas.TokenData:
        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
        token_data = security.verify_token(token, credentials_exception)
        session = self.db.query(AuthSession).filter(AuthSession.id == token_data.token_id).first()
        if session is None or session.user_id != token_data.user_id:
            raise credentials_exception
        return token_data

    def get_current_user(self, token: Optional[str]) -> Optional[auth_schemas.AuthUser]:
        """The account behind `token`; None for visitors and for expired or revoked tokens."""
        if not token:
            return None
        try:
            token_data = self._token_data(token)
        except HTTPException as e:
            logger.info("ignoring unusable token: %s", e.detail)
            return None
        account = self.db.query(AuthAccount).filter(AuthAccount.id == token_data.user_id).first()
        if account is None:
            return None
        return auth_schemas.AuthUser(id=account.id, email=account.email)

    def sign_out(self, token: str):
        token_data = self._token_data(token)
        self.db.query(AuthSession).filter(AuthSession.id == token_data.token_id).delete(synchronize_session=False)
        self.db.commit()
        self.events.publish(SIGNED_OUT, None)
