from typing import Iterator

import requests

from medilearn.core.config import get_settings
from medilearn.services.content_sources import ContentSources
from medilearn.services.recommendations import RecommendationService


def get_settings_dep():
    return get_settings()


def get_recommendation_service() -> Iterator[RecommendationService]:
    """
    Provides the recommendation aggregator (DI), built on the configured API keys.
    The HTTP session is closed once the request is done.
    """
    settings = get_settings()
    with requests.Session() as session:
        sources = ContentSources(
            youtube_api_key=settings.YOUTUBE_API_KEY,
            news_api_key=settings.NEWS_API_KEY,
            timeout=settings.HTTP_TIMEOUT,
            session=session,
        )
        yield RecommendationService(sources)
