import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String
from app.core.database import Base

class AuthAccount(Base):
    """Credentials owned by the auth backend. `id` is shared with `users.id`."""
    __tablename__ = "auth_accounts"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id = Column(String, primary_key=True, index=True) # token "jti"
    user_id = Column(String, ForeignKey("auth_accounts.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    expires_at = Column(DateTime, nullable=True)
