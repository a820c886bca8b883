from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class RecommendationsIn(BaseModel):
    # shape checked by the route (400 with a readable message)
    categories: Optional[Any] = None
    preferredSources: Optional[Any] = None


class ContentSource(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None


class ContentItem(BaseModel):
    """
    One recommended piece of content. Article API items keep their extra
    fields (author, content, ...).
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    source: Optional[ContentSource] = None
    url: Optional[str] = None
    type: str
    urlToImage: Optional[str] = None
    publishedAt: Optional[str] = None


class CategoryOut(BaseModel):
    name: str
    videoSources: List[str]


class CategoryListOut(BaseModel):
    items: List[CategoryOut]


RecommendationsOut = Dict[str, List[ContentItem]]
