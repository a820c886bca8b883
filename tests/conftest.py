import pytest
from fastapi.testclient import TestClient

from medilearn.core.config import get_settings
from medilearn.core.deps import get_recommendation_service
from medilearn.main import create_app
from medilearn.services.recommendations import RecommendationService


class FakeSources:
    """
    Stand-in for ContentSources: canned API payloads, no network.
    """

    def __init__(self, videos=None, articles=None, videos_error=None, articles_error=None):
        self.videos = videos
        self.articles = articles
        self.videos_error = videos_error
        self.articles_error = articles_error
        self.video_queries = []
        self.article_queries = []

    @property
    def videos_enabled(self):
        return self.videos is not None or self.videos_error is not None

    @property
    def articles_enabled(self):
        return self.articles is not None or self.articles_error is not None

    def search_videos(self, query, max_results=5):
        self.video_queries.append(query)
        if self.videos_error:
            raise self.videos_error
        return self.videos

    def search_articles(self, query, page_size=10):
        self.article_queries.append(query)
        if self.articles_error:
            raise self.articles_error
        return self.articles


@pytest.fixture
def app(tmp_path, monkeypatch):
    """
    App with a throw-away SQLite database and no content API keys.
    """
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("APP_NAME", "MediLearn API (tests)")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("DB_CONNECT_RETRY_DELAY", "0")
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost")
    monkeypatch.setenv("YOUTUBE_API_KEY", "")
    monkeypatch.setenv("NEWS_API_KEY", "")

    # settings are cached: reload them from the env above
    get_settings.cache_clear()
    yield create_app()
    get_settings.cache_clear()


@pytest.fixture
def test_client(app):
    # "with" runs the lifespan (database init)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def use_sources(app):
    """
    Replace the recommendation service's content sources with a FakeSources.
    """

    def _use(fake):
        app.dependency_overrides[get_recommendation_service] = lambda: RecommendationService(fake)
        return fake

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
def registered_user(test_client):
    """
    Registers a user; the client keeps the session cookie.
    """
    r = test_client.post(
        "/api/auth/register",
        json={"email": "ada@example.com", "password": "correct-horse", "name": "Ada"},
    )
    assert r.status_code == 201, r.text
    return r.json()["user"]
