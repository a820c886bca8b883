from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

MIN_PASSWORD_LENGTH = 8


class LoginIn(BaseModel):
    # blank values are answered 400 by the route, not by the model
    email: str = ""
    password: str = ""


class RegisterIn(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str
    name: str = Field(default="", max_length=120)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None


class AuthOut(BaseModel):
    message: str
    user: UserOut


class MeOut(BaseModel):
    user: UserOut


def validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()
