from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from medilearn.core.config import get_settings
from medilearn.core.errors import register_exception_handlers
from medilearn.core.gate import register_route_gate
from medilearn.core.logging import setup_logging
from medilearn.db.database import init_db
from medilearn.routers import system, auth, users, recommendations, flashcards, quizzes, pages


@asynccontextmanager
async def lifespan(app: FastAPI):
    # connects with retry, then creates the tables
    init_db(get_settings())
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="MediLearn API (auth, stats, recommendations, flashcards, quizzes)",
        lifespan=lifespan,
    )

    # Middleware CORS
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],  # fallback if misconfigured
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_route_gate(app)
    register_exception_handlers(app)

    # Routers
    app.include_router(system.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(recommendations.router)
    app.include_router(flashcards.router)
    app.include_router(quizzes.router)
    app.include_router(pages.router)

    # Redirect root → docs
    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    return app


app = create_app()
