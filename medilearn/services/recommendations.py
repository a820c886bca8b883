import copy
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from medilearn.services.catalog import CONTENT_CATEGORIES, RECENTLY_READ, STATIC_RECOMMENDATIONS
from medilearn.services.content_sources import ContentSourceError, ContentSources

logger = logging.getLogger(__name__)

MAX_VIDEOS = 5
MAX_ARTICLES = 5
MAX_ITEMS = 10


def _slug(category: str) -> str:
    return re.sub(r"\s+", "-", category)


def _is_youtube(item: Dict[str, Any]) -> bool:
    return "youtube.com" in (item.get("url") or "")


def static_for(category: str) -> List[Dict[str, Any]]:
    return copy.deepcopy(STATIC_RECOMMENDATIONS.get(category, []))


class RecommendationService:
    """
    Per category: video search + static content + article search, concatenated.
    - no dedup, no ranking, no cache
    - a disabled or failing API contributes nothing
    - empty result (or any error) -> static content
    """

    def __init__(self, sources: ContentSources):
        self.sources = sources

    # ---------- public API ----------

    def recommend(
        self,
        categories: Iterable[str],
        preferred_sources: Optional[List[str]] = None,
    ) -> Dict[str, List[Dict[str, Any]]]:
        preferred_sources = preferred_sources or []
        out: Dict[str, List[Dict[str, Any]]] = {RECENTLY_READ: static_for(RECENTLY_READ)}

        for category in categories:
            if category not in CONTENT_CATEGORIES:
                logger.debug("Skipping unknown category %r", category)
                continue
            out[category] = self.for_category(category, preferred_sources)
        return out

    def for_category(self, category: str, preferred_sources: List[str]) -> List[Dict[str, Any]]:
        static_content = static_for(category)
        try:
            videos_api = self.videos(category, preferred_sources)
            articles_api = self.articles(category)

            all_content = videos_api + static_content + articles_api
            if not all_content:
                return static_content

            videos = [i for i in all_content if i.get("type") == "video" or _is_youtube(i)]
            articles = [i for i in all_content if i.get("type") == "article" and not _is_youtube(i)]
            return (videos[:MAX_VIDEOS] + articles[:MAX_ARTICLES])[:MAX_ITEMS]
        except Exception:
            logger.exception("Error getting recommendations for %s, using static content", category)
            return static_content

    def videos(self, category: str, preferred_sources: List[str]) -> List[Dict[str, Any]]:
        if not self.sources.videos_enabled:
            logger.info("YouTube API key not configured")
            return []

        info = CONTENT_CATEGORIES.get(category)
        if not info:
            return []

        query = build_video_query(info["query"], info["videoSources"], preferred_sources)
        try:
            items = self.sources.search_videos(query)
        except ContentSourceError as e:
            logger.warning("Error fetching YouTube videos for %s: %s", category, e)
            return []

        slug = _slug(category)
        results = []
        for index, item in enumerate(items):
            snippet = item.get("snippet") or {}
            thumbnails = snippet.get("thumbnails") or {}
            image = (thumbnails.get("high") or {}).get("url") or (thumbnails.get("default") or {}).get("url")
            results.append({
                "id": f"youtube-{slug}-{index}",
                "title": snippet.get("title", ""),
                "description": snippet.get("description", ""),
                "source": {"name": snippet.get("channelTitle", "")},
                "url": f"https://www.youtube.com/watch?v={(item.get('id') or {}).get('videoId', '')}",
                "urlToImage": image,
                "publishedAt": snippet.get("publishedAt"),
                "type": "video",
            })
        return results

    def articles(self, category: str) -> List[Dict[str, Any]]:
        if not self.sources.articles_enabled:
            logger.info("News API key not configured")
            return []

        info = CONTENT_CATEGORIES.get(category)
        if not info:
            return []

        try:
            raw = self.sources.search_articles(info["query"])
        except ContentSourceError as e:
            logger.warning("Error fetching %s news: %s", category, e)
            return []

        slug = _slug(category)
        usable = [a for a in raw if isinstance(a, dict) and a.get("title") and a.get("description")]
        return [
            {**article, "id": f"news-{slug}-{index}", "type": "article"}
            for index, article in enumerate(usable)
        ]


def build_video_query(query: str, known_sources: List[str], preferred_sources: List[str]) -> str:
    """
    Narrow the category query to the preferred channels this category knows about.
    """
    channels = [s for s in known_sources if s in preferred_sources]
    if not channels:
        return query
    return f"({query}) ({' OR '.join(channels)})"


def static_preview(count: int = 2) -> Dict[str, List[Dict[str, Any]]]:
    return {category: static_for(category) for category in list(CONTENT_CATEGORIES)[:count]}


def list_categories() -> List[Dict[str, Any]]:
    return [
        {"name": name, "videoSources": list(info["videoSources"])}
        for name, info in CONTENT_CATEGORIES.items()
    ]
