from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from .user_schemas import Role, UserProfile

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str

class IssuedToken(BaseModel):
    access_token: str
    token_id: str
    expires_at: datetime

class TokenData(BaseModel):
    user_id: str
    token_id: str

class SignInRequest(BaseModel):
    email: str = ""
    password: str = ""

class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = ""
    first_name: str = ""
    last_name: str = ""
    role: Role = Role.PLAYER

    @field_validator("role")
    @classmethod
    def self_service_role(cls, role):
        # Admins are appointed, never self-registered
        if role == Role.ADMIN:
            raise ValueError("role must be player or organizer")
        return role

class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None

class SignUpResult(BaseModel):
    message: str
    token: Token

class AuthState(BaseModel):
    """Who is looking at a page: the signed-in account, its normalized role and profile."""
    user: Optional[AuthUser] = None
    role: Optional[Role] = None
    profile: Optional[UserProfile] = None

    class Config:
        use_enum_values = True

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    @property
    def can_manage_tournaments(self) -> bool:
        return self.role == Role.ORGANIZER
