import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi.security import OAuth2PasswordBearer

from app.core.config import settings
from app.schemas import auth_schemas

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error is off: most pages are readable without signing in
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/sign-in", auto_error=False)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> auth_schemas.IssuedToken:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token_id = str(uuid.uuid4())
    to_encode.update({"exp": expire, "jti": token_id})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)
    return auth_schemas.IssuedToken(access_token=encoded_jwt, token_id=token_id, expires_at=expire)

def verify_token(token: str, credentials_exception) -> auth_schemas.TokenData:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        user_id: str = payload.get("sub")
        token_id: str = payload.get("jti")
        if user_id is None or token_id is None:
            raise credentials_exception
        token_data = auth_schemas.TokenData(user_id=user_id, token_id=token_id)
    except JWTError:
        raise credentials_exception
    return token_data

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)
