import logging
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from medilearn.core.config import get_settings
from medilearn.core.security import InvalidSessionToken, decode_session_token

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"

# Pages that require a session
PROTECTED_PREFIXES = ("/personalized", "/profile")

# Checked first: reachable without a session
EXCLUDED_PREFIXES = ("/personalized/direct",)


def is_protected(path: str) -> bool:
    if any(path.startswith(p) for p in EXCLUDED_PREFIXES):
        return False
    return any(path.startswith(p) for p in PROTECTED_PREFIXES)


def login_redirect(path: str) -> RedirectResponse:
    return RedirectResponse(url=f"{LOGIN_PATH}?{urlencode({'redirectTo': path})}", status_code=307)


def register_route_gate(app: FastAPI) -> None:
    """
    Redirect page requests on protected prefixes to the login page when the
    session cookie is missing or does not verify. API routes answer 401 instead.
    """

    @app.middleware("http")
    async def route_gate(request: Request, call_next):
        path = request.url.path
        if not is_protected(path):
            return await call_next(request)

        token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
        if not token:
            logger.info("No session cookie for %s, redirecting to login", path)
            return login_redirect(path)

        try:
            decode_session_token(token)
        except InvalidSessionToken:
            logger.info("Invalid session cookie for %s, redirecting to login", path)
            return login_redirect(path)

        return await call_next(request)
