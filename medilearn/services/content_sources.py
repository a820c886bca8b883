import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
NEWS_EVERYTHING_URL = "https://newsapi.org/v2/everything"


class ContentSourceError(Exception):
    """A third-party content API call failed (network, HTTP status or payload)."""


class ContentSources:
    """
    Thin clients for the two third-party content search APIs.
    - video search: YouTube Data API v3
    - article search: NewsAPI
    An empty key disables the matching API.
    """

    def __init__(
        self,
        youtube_api_key: str = "",
        news_api_key: str = "",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.youtube_api_key = (youtube_api_key or "").strip()
        self.news_api_key = (news_api_key or "").strip()
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def videos_enabled(self) -> bool:
        return bool(self.youtube_api_key)

    @property
    def articles_enabled(self) -> bool:
        return bool(self.news_api_key)

    def search_videos(self, query: str, max_results: int = 5) -> List[Dict[str, Any]]:
        params = {
            "part": "snippet",
            "maxResults": max_results,
            "q": query,
            "type": "video",
            "relevanceLanguage": "en",
            "key": self.youtube_api_key,
        }
        data = self._get_json(YOUTUBE_SEARCH_URL, params, api="YouTube")
        items = data.get("items")
        if not isinstance(items, list):
            raise ContentSourceError("YouTube response has no items")
        return items

    def search_articles(self, query: str, page_size: int = 10) -> List[Dict[str, Any]]:
        params = {
            "q": query,
            "language": "en",
            "sortBy": "relevancy",
            "pageSize": page_size,
            "apiKey": self.news_api_key,
        }
        data = self._get_json(NEWS_EVERYTHING_URL, params, api="News")
        articles = data.get("articles")
        if not isinstance(articles, list):
            raise ContentSourceError("News API response has no articles")
        return articles

    def _get_json(self, url: str, params: Dict[str, Any], api: str) -> Dict[str, Any]:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            # never log params: they carry the API key
            raise ContentSourceError(f"{api} API request failed: {type(e).__name__}") from e

        if not isinstance(data, dict):
            raise ContentSourceError(f"{api} API returned a non-object payload")
        return data
