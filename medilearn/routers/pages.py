from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from medilearn.db.database import get_db
from medilearn.db.models import User
from medilearn.routers.auth import get_current_user, get_session_user_id, read_session_user_id
from medilearn.routers.users import user_preferences
from medilearn.schemas.auth import UserOut
from medilearn.services import stats as stats_service

# Page contexts for the front-end (the route gate runs before these)
router = APIRouter(tags=["pages"], include_in_schema=False)


@router.get("/auth/login")
def login_page(redirectTo: Optional[str] = Query(default=None)):
    return {"page": "login", "redirectTo": redirectTo or "/personalized"}


@router.get("/personalized")
def personalized_page(
    user_id: int = Depends(get_session_user_id),
    db: Session = Depends(get_db),
):
    user = db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    return {
        "page": "personalized",
        "user": UserOut.model_validate(user).model_dump(mode="json") if user else None,
        "stats": stats_service.get_user_stats(db, user_id),
    }


@router.get("/personalized/direct")
def personalized_direct_page(request: Request, db: Session = Depends(get_db)):
    user = None
    user_id = read_session_user_id(request)
    if user_id is not None:
        user = db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    return {
        "page": "personalized-direct",
        "user": UserOut.model_validate(user).model_dump(mode="json") if user else None,
    }


@router.get("/profile")
def profile_page(user: User = Depends(get_current_user)):
    return {
        "page": "profile",
        "user": UserOut.model_validate(user).model_dump(mode="json"),
        "preferences": user_preferences(user).model_dump(),
    }
