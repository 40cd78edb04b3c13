# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from gatehouse.auth.session import COOKIE_NAME, SessionTokens
from gatehouse.auth.users import UserRepository, build_user_repository
from gatehouse.config import Settings
from gatehouse.errors import GatehouseError
from gatehouse.permissions import (
    LoginRequired,
    clear_session_cookie,
    cookie_settings,
    login_redirect,
    require_user_id,
)
from gatehouse.services.account_service import MSG_REGISTERED, authenticate, register_account

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _render(request: Request, template_name: str, ctx: Optional[dict] = None, status_code: int = 200):
    """TemplateResponse wrapper with the message slots every form expects."""
    base_ctx = {"error": None, "success": None}
    merged = {**base_ctx, **(ctx or {})}
    return templates.TemplateResponse(request, template_name, merged, status_code=status_code)


async def _read_fields(request: Request, *names: str) -> dict[str, str]:
    """Read named fields from a JSON or form body. Non-string values count as missing."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
    else:
        body = await request.form()

    out = {}
    for name in names:
        value = body.get(name)
        out[name] = value if isinstance(value, str) else ""
    return out


def create_app(
    settings: Optional[Settings] = None,
    *,
    users: Optional[UserRepository] = None,
    tokens: Optional[SessionTokens] = None,
) -> FastAPI:
    if settings is None:
        settings = Settings.from_env()

    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.users = users if users is not None else build_user_repository(settings.users_path)
    app.state.tokens = tokens if tokens is not None else SessionTokens(settings.secret_key)

    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    # ------------------ Error handlers ------------------

    @app.exception_handler(LoginRequired)
    async def _login_required(request: Request, exc: LoginRequired):
        return login_redirect(settings, clear_cookie=exc.clear_cookie)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        # A known path with the wrong method is unmatched as well.
        if exc.status_code in (404, 405):
            return _render(request, "404.html", status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse("Something went wrong!", status_code=500)

    # ------------------ Routes ------------------

    @app.get("/")
    def home():
        return RedirectResponse(url="/register", status_code=303)

    @app.get("/register", response_class=HTMLResponse)
    def register_get(request: Request):
        return _render(request, "register.html")

    @app.post("/register", response_class=HTMLResponse)
    async def register_post(request: Request):
        fields = await _read_fields(request, "name", "email", "password")
        try:
            await run_in_threadpool(register_account, request.app.state.users, **fields)
        except GatehouseError as exc:
            return _render(request, "register.html", {"error": exc.message})
        return _render(request, "register.html", {"success": MSG_REGISTERED})

    @app.get("/login", response_class=HTMLResponse)
    def login_get(request: Request):
        return _render(request, "login.html")

    @app.post("/login")
    async def login_post(request: Request):
        fields = await _read_fields(request, "email", "password")
        try:
            user = await run_in_threadpool(authenticate, request.app.state.users, **fields)
        except GatehouseError as exc:
            return _render(request, "login.html", {"error": exc.message})

        tokens: SessionTokens = request.app.state.tokens
        resp = RedirectResponse(url="/dashboard", status_code=303)
        resp.set_cookie(
            COOKIE_NAME,
            tokens.issue(user.id),
            max_age=tokens.max_age,
            **cookie_settings(settings),
        )
        return resp

    @app.get("/dashboard", response_class=HTMLResponse)
    def dashboard(request: Request, user_id: int = Depends(require_user_id)):
        user = request.app.state.users.find_by_id(user_id)
        if user is None:
            logger.warning("Session for unknown user id=%s; clearing cookie", user_id)
            return login_redirect(settings, clear_cookie=True)
        return _render(request, "dashboard.html", {"user": user})

    @app.post("/logout")
    def logout_post():
        # The token itself stays valid until it expires; only the cookie goes.
        resp = RedirectResponse(url="/login", status_code=303)
        clear_session_cookie(resp, settings)
        return resp

    return app
