# backend-server/app/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db import session, models
from app.core import security
from app.core.enums import UserStatus
from app.core.exceptions import AuthenticationError
from app.core.permissions import Permission
from app.schemas import token as token_schema, user as user_schema
from app.schemas.common import Envelope, ok
from app.services import employees as employee_service

router = APIRouter()

@router.post("/login", response_model=Envelope[user_schema.LoginData])
def login(credentials: user_schema.LoginRequest, db: Session = Depends(session.get_db)):
    user = db.query(models.User).filter(models.User.email == credentials.email.lower()).first()
    if not user or not security.verify_password(credentials.password, user.hashed_password):
        raise AuthenticationError("Invalid email or password")
    if user.status != UserStatus.ACTIVE:
        raise AuthenticationError("Account is inactive. Please contact administrator.")

    tokens = security.generate_tokens(user.id)
    user.refresh_token = tokens.refresh_token
    db.commit()
    db.refresh(user)
    return ok({"user": user, **tokens.model_dump()}, "Login successful")

@router.post("/refresh-token", response_model=Envelope[token_schema.TokenPair])
def refresh_token(body: token_schema.RefreshRequest, db: Session = Depends(session.get_db)):
    """ Exchanges a valid refresh token for a new token pair. """
    if not body.refresh_token:
        raise AuthenticationError("Refresh token required")
    try:
        token_data = security.decode_token(body.refresh_token, token_type="refresh")
    except AuthenticationError:
        raise AuthenticationError("Invalid refresh token")

    user = db.get(models.User, token_data.user_id)
    if user is None or user.refresh_token != body.refresh_token:
        raise AuthenticationError("Invalid refresh token")

    tokens = security.generate_tokens(user.id)
    user.refresh_token = tokens.refresh_token
    db.commit()
    return ok(tokens, "Token refreshed successfully")

@router.post("/register", response_model=Envelope[user_schema.UserData], status_code=status.HTTP_201_CREATED)
def register(
    user_in: user_schema.UserCreate,
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.require_permission(Permission.REGISTER_USER)),
):
    """ Creates a new HR manager or employee profile. """
    user = employee_service.register_user(db, admin, user_in)
    return ok({"user": user}, "User registered successfully")

@router.post("/logout", response_model=Envelope[dict])
def logout(db: Session = Depends(session.get_db), current_user: models.User = Depends(security.get_current_user)):
    current_user.refresh_token = None
    db.commit()
    return ok(message="Logged out successfully")

@router.get("/profile", response_model=Envelope[user_schema.UserData])
def read_profile(current_user: models.User = Depends(security.get_current_user)):
    """ Get the details for the currently logged-in user. """
    return ok({"user": current_user})
