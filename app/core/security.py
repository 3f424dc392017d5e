# backend-server/app/core/security.py
# Handles password hashing, JWTs, and all role-checking dependencies.
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
import uuid

from app.db import models, session
from app.core.config import settings
from app.core.enums import UserStatus
from app.core.exceptions import AuthenticationError, ForbiddenError
from app.core.permissions import Permission, has_permission
from app.schemas import token as token_schema

# --- Password Hashing ---
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
def verify_password(plain: str, hashed: str) -> bool: return pwd_context.verify(plain, hashed)
def get_password_hash(pwd: str) -> str: return pwd_context.hash(pwd)

# --- JWT Creation ---
def _encode(user_id: int, token_type: str, expires: timedelta, secret: str) -> str:
    to_encode = {"sub": str(user_id), "type": token_type, "jti": uuid.uuid4().hex,
                 "exp": datetime.now(timezone.utc) + expires}
    return jwt.encode(to_encode, secret, algorithm=settings.JWT_ALGORITHM)

def create_access_token(user_id: int) -> str:
    return _encode(user_id, "access", timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES), settings.JWT_SECRET_KEY)

def create_refresh_token(user_id: int) -> str:
    return _encode(user_id, "refresh", timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS), settings.refresh_secret_key)

def generate_tokens(user_id: int) -> token_schema.TokenPair:
    return token_schema.TokenPair(
        access_token=create_access_token(user_id),
        refresh_token=create_refresh_token(user_id),
    )

def decode_token(token: str, token_type: str = "access") -> token_schema.TokenData:
    """Decodes a token of the given type, raising AuthenticationError on any problem."""
    secret = settings.JWT_SECRET_KEY if token_type == "access" else settings.refresh_secret_key
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid token.")
    if payload.get("type") != token_type or payload.get("sub") is None:
        raise AuthenticationError("Invalid token.")
    return token_schema.TokenData(user_id=int(payload["sub"]), type=token_type)

# --- Role-Checking Dependencies ---
bearer_scheme = HTTPBearer(auto_error=False)

def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(session.get_db),
) -> models.User:
    if credentials is None:
        raise AuthenticationError("Access denied. No token provided.")
    token_data = decode_token(credentials.credentials)

    user = db.get(models.User, token_data.user_id)
    if user is None or user.status != UserStatus.ACTIVE:
        raise AuthenticationError("Invalid token or user inactive.")
    return user

def require_permission(permission: Permission):
    def checker(current_user: models.User = Depends(get_current_user)) -> models.User:
        if not has_permission(current_user.role, permission):
            raise ForbiddenError("Access denied. Insufficient permissions.")
        return current_user
    return checker
