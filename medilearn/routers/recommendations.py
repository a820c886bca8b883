import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from medilearn.core.deps import get_recommendation_service
from medilearn.db.database import get_db
from medilearn.db.models import User
from medilearn.routers.auth import read_session_user_id
from medilearn.schemas.recommendations import CategoryListOut, RecommendationsIn, RecommendationsOut
from medilearn.services.recommendations import RecommendationService, list_categories, static_preview

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


def _stored_preferences(request: Request, db: Session) -> dict:
    user_id = read_session_user_id(request)
    if user_id is None:
        return {}
    user = db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    return (user.preferences or {}) if user else {}


@router.post("", response_model=RecommendationsOut)
def recommend(
    payload: RecommendationsIn,
    request: Request,
    db: Session = Depends(get_db),
    service: RecommendationService = Depends(get_recommendation_service),
):
    categories = payload.categories
    preferred = payload.preferredSources

    # no categories sent: fall back on the caller's saved preferences
    if "categories" not in payload.model_fields_set:
        prefs = _stored_preferences(request, db)
        categories = prefs.get("categories") or []
        if preferred is None:
            preferred = prefs.get("preferredSources") or []

    if not isinstance(categories, list):
        raise HTTPException(status_code=400, detail="Categories must be an array")
    if preferred is None:
        preferred = []
    if not isinstance(preferred, list):
        raise HTTPException(status_code=400, detail="preferredSources must be an array")

    logger.info("Recommendations for %d categories", len(categories))
    return service.recommend(
        [c for c in categories if isinstance(c, str)],
        [s for s in preferred if isinstance(s, str)],
    )


@router.get("", response_model=RecommendationsOut)
def recommend_preview():
    return static_preview()


@router.get("/categories", response_model=CategoryListOut)
def categories():
    return CategoryListOut(items=list_categories())
