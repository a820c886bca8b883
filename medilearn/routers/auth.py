import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from medilearn.core.config import Settings, get_settings
from medilearn.core.deps import get_settings_dep
from medilearn.core.security import (
    InvalidSessionToken,
    create_session_token,
    decode_session_token,
    hash_password,
    password_bytes_ok,
    verify_password,
)
from medilearn.db.database import get_db
from medilearn.db.models import User
from medilearn.schemas.auth import (
    AuthOut,
    LoginIn,
    MeOut,
    RegisterIn,
    UserOut,
    normalize_email,
    validate_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


# =========================================================
# Session resolution (shared by every authenticated route)
# =========================================================
def read_session_user_id(request: Request) -> Optional[int]:
    """
    User id carried by a valid session cookie, else None.
    """
    token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    if not token:
        return None
    try:
        return decode_session_token(token)
    except InvalidSessionToken:
        return None


def get_session_user_id(request: Request) -> int:
    token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        return decode_session_token(token)
    except InvalidSessionToken as e:
        logger.info("Rejected session token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )


def get_current_user(
    user_id: int = Depends(get_session_user_id),
    db: Session = Depends(get_db),
) -> User:
    user = db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def set_session_cookie(response: Response, user: User, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(str(user.id)),
        max_age=settings.SESSION_MAX_AGE,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


# =========================================================
# Routes
# =========================================================
@router.post("/login", response_model=AuthOut)
def login(
    payload: LoginIn,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    email = normalize_email(payload.email)
    if not email or not payload.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )

    logger.info("Login attempt for %s", email)

    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    # same answer for unknown email and wrong password
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Invalid credentials for %s", email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    set_session_cookie(response, user, settings)
    return AuthOut(message="Login successful", user=UserOut.model_validate(user))


@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterIn,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    email = normalize_email(payload.email)
    if "@" not in email:
        raise HTTPException(status_code=400, detail="Invalid email")

    # 1) Password format
    try:
        validate_password(payload.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # 2) bcrypt bytes limit
    if not password_bytes_ok(payload.password):
        raise HTTPException(status_code=400, detail="Password too long (72 bytes max)")

    # 3) Unique email
    exists = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if exists:
        raise HTTPException(status_code=400, detail="Email already registered")

    # 4) Create user
    user = User(
        email=email,
        name=payload.name.strip(),
        password_hash=hash_password(payload.password),
        preferences={},
        last_login_at=datetime.now(timezone.utc),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)

    # 5) Auto-login
    set_session_cookie(response, user, settings)
    return AuthOut(message="Registration successful", user=UserOut.model_validate(user))


@router.post("/logout")
def logout(response: Response, settings: Settings = Depends(get_settings_dep)):
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return {"message": "Logged out"}


@router.get("/me", response_model=MeOut)
def me(current_user: User = Depends(get_current_user)):
    return MeOut(user=UserOut.model_validate(current_user))
