import requests

from medilearn.services.catalog import CONTENT_CATEGORIES, STATIC_RECOMMENDATIONS
from medilearn.services.content_sources import ContentSourceError, ContentSources
from medilearn.services.recommendations import RecommendationService, build_video_query

from conftest import FakeSources

NUTRITION = "Nutrition & Healthy Eating"
SLEEP = "Sleep & Recovery"


def _yt_item(n):
    return {
        "id": {"videoId": f"vid{n}"},
        "snippet": {
            "title": f"Video {n}",
            "description": "desc",
            "channelTitle": "Doctor Mike",
            "publishedAt": "2024-01-01T00:00:00Z",
            "thumbnails": {"default": {"url": f"https://img/{n}.jpg"}},
        },
    }


def _article(n, **overrides):
    item = {
        "title": f"Article {n}",
        "description": "about health",
        "url": f"https://news.example.com/{n}",
        "source": {"id": None, "name": "Health News"},
        "publishedAt": "2024-01-02T00:00:00Z",
    }
    item.update(overrides)
    return item


# =========================================================
# Route
# =========================================================
def test_without_api_keys_returns_static_content_per_category(test_client):
    body = {"categories": list(CONTENT_CATEGORIES), "preferredSources": []}
    r = test_client.post("/api/recommendations", json=body)
    assert r.status_code == 200, r.text
    data = r.json()

    assert data["Recently Read Articles"][0]["title"] == "Introduction to Human Anatomy"
    for category in CONTENT_CATEGORIES:
        titles = [i["title"] for i in data[category]]
        assert titles, category
        static_titles = {i["title"] for i in STATIC_RECOMMENDATIONS[category]}
        assert set(titles) <= static_titles


def test_unknown_categories_are_skipped(test_client):
    r = test_client.post("/api/recommendations", json={"categories": ["Astrology", SLEEP]})
    assert r.status_code == 200
    assert set(r.json()) == {"Recently Read Articles", SLEEP}


def test_categories_must_be_an_array(test_client):
    r = test_client.post("/api/recommendations", json={"categories": "Sleep & Recovery"})
    assert r.status_code == 400
    assert r.json() == {"error": "Categories must be an array"}


def test_empty_body_returns_only_recently_read(test_client):
    r = test_client.post("/api/recommendations", json={})
    assert r.status_code == 200
    assert list(r.json()) == ["Recently Read Articles"]


def test_saved_preferences_fill_missing_categories(test_client, registered_user, use_sources):
    fake = use_sources(FakeSources(videos=[_yt_item(0)]))
    test_client.put("/api/user/preferences", json={"categories": [SLEEP], "preferredSources": ["Ted-Ed"]})

    r = test_client.post("/api/recommendations", json={})
    assert r.status_code == 200, r.text
    assert SLEEP in r.json()
    assert fake.video_queries == [f"({CONTENT_CATEGORIES[SLEEP]['query']}) (Ted-Ed)"]


def test_api_results_are_merged(test_client, use_sources):
    use_sources(FakeSources(videos=[_yt_item(0), _yt_item(1)], articles=[_article(0), _article(1)]))

    r = test_client.post("/api/recommendations", json={"categories": [NUTRITION]})
    assert r.status_code == 200, r.text
    items = r.json()[NUTRITION]

    assert items[0]["id"] == "youtube-Nutrition-&-Healthy-Eating-0"
    assert items[0]["url"] == "https://www.youtube.com/watch?v=vid0"
    assert items[0]["urlToImage"] == "https://img/0.jpg"
    assert items[0]["source"] == {"name": "Doctor Mike"}
    # API articles keep their own fields
    news = [i for i in items if i["id"].startswith("news-")]
    assert news[0]["source"]["name"] == "Health News"


def test_get_returns_static_preview(test_client):
    r = test_client.get("/api/recommendations")
    assert r.status_code == 200
    assert list(r.json()) == list(CONTENT_CATEGORIES)[:2]


def test_list_categories(test_client):
    items = test_client.get("/api/recommendations/categories").json()["items"]
    assert [c["name"] for c in items] == list(CONTENT_CATEGORIES)
    assert "MadFit" in items[0]["videoSources"]


# =========================================================
# Aggregator
# =========================================================
def test_merge_caps_videos_then_articles():
    fake = FakeSources(
        videos=[_yt_item(i) for i in range(5)],
        articles=[_article(i) for i in range(10)],
    )
    items = RecommendationService(fake).for_category(NUTRITION, [])

    assert len(items) == 10
    assert all(i["type"] == "video" for i in items[:5])
    assert all(i["type"] == "article" for i in items[5:])
    # static NHS article comes before the API articles
    assert items[5]["title"] == "Healthy Eating – What You Need to Know"


def test_articles_without_title_or_description_are_dropped():
    fake = FakeSources(articles=[_article(0, title=None), _article(1, description=""), _article(2)])
    items = RecommendationService(fake).articles(SLEEP)
    assert [i["title"] for i in items] == ["Article 2"]
    assert items[0]["id"] == "news-Sleep-&-Recovery-0"


def test_failing_apis_fall_back_to_static():
    fake = FakeSources(
        videos_error=ContentSourceError("boom"),
        articles_error=ContentSourceError("boom"),
    )
    items = RecommendationService(fake).for_category(SLEEP, [])
    assert [i["title"] for i in items] == [i["title"] for i in STATIC_RECOMMENDATIONS[SLEEP]]


def test_unexpected_error_falls_back_to_static():
    fake = FakeSources(videos=[{"snippet": None, "id": None}, None])
    items = RecommendationService(fake).for_category(SLEEP, [])
    assert [i["title"] for i in items] == [i["title"] for i in STATIC_RECOMMENDATIONS[SLEEP]]


def test_static_content_is_not_shared_between_calls():
    service = RecommendationService(FakeSources())
    first = service.recommend([SLEEP])
    first[SLEEP][0]["title"] = "changed"
    assert service.recommend([SLEEP])[SLEEP][0]["title"] != "changed"


def test_video_query_uses_only_known_preferred_sources():
    info = CONTENT_CATEGORIES[NUTRITION]
    assert build_video_query(info["query"], info["videoSources"], []) == info["query"]
    assert build_video_query(info["query"], info["videoSources"], ["Headspace"]) == info["query"]
    assert build_video_query(
        info["query"], info["videoSources"], ["NutritionFacts.org", "Clean & Delicious"]
    ) == f"({info['query']}) (Clean & Delicious OR NutritionFacts.org)"


# =========================================================
# HTTP clients
# =========================================================
class _Response:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class _Session:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        return self.response


def test_search_videos_sends_expected_params():
    session = _Session(_Response({"items": [_yt_item(0)]}))
    sources = ContentSources(youtube_api_key="yt-key", timeout=3.0, session=session)

    assert sources.videos_enabled and not sources.articles_enabled
    assert sources.search_videos("sleep") == [_yt_item(0)]

    url, params, timeout = session.calls[0]
    assert url == "https://www.googleapis.com/youtube/v3/search"
    assert params["q"] == "sleep" and params["maxResults"] == 5 and params["key"] == "yt-key"
    assert timeout == 3.0


def test_http_errors_become_content_source_errors():
    for session in (
        _Session(_Response({}, status=403)),
        _Session(error=requests.ConnectionError("down")),
        _Session(_Response({"status": "error"})),
    ):
        sources = ContentSources(news_api_key="news-key", session=session)
        try:
            sources.search_articles("sleep")
        except ContentSourceError as e:
            assert "news-key" not in str(e)
        else:
            raise AssertionError("expected ContentSourceError")


def test_null_categories_are_rejected(test_client, registered_user):
    test_client.put("/api/user/preferences", json={"categories": [SLEEP]})

    r = test_client.post("/api/recommendations", json={"categories": None})
    assert r.status_code == 400
    assert r.json() == {"error": "Categories must be an array"}


def test_http_session_is_closed_after_each_request(test_client, monkeypatch):
    closed = []
    real_close = requests.Session.close

    def _close(self):
        closed.append(self)
        real_close(self)

    monkeypatch.setattr(requests.Session, "close", _close)

    for _ in range(3):
        assert test_client.post("/api/recommendations", json={"categories": [SLEEP]}).status_code == 200
    assert len(closed) == 3
