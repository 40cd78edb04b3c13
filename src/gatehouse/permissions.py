# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from fastapi import Request
from fastapi.responses import RedirectResponse

from gatehouse.auth.session import COOKIE_NAME, SessionTokens
from gatehouse.config import Settings

LOGIN_URL = "/login"


class LoginRequired(Exception):
    """Raised by the auth gate; turned into a redirect to the login page."""

    def __init__(self, clear_cookie: bool = False) -> None:
        super().__init__("login required")
        self.clear_cookie = clear_cookie


def cookie_settings(settings: Settings) -> dict:
    return {"httponly": True, "samesite": "strict", "secure": settings.secure_cookies, "path": "/"}


def clear_session_cookie(response, settings: Settings) -> None:
    response.delete_cookie(COOKIE_NAME, **cookie_settings(settings))


def require_user_id(request: Request) -> int:
    """Gate a route on a valid session cookie and expose the id as ``request.state.user_id``."""
    token = request.cookies.get(COOKIE_NAME, "")
    if not token:
        raise LoginRequired(clear_cookie=False)

    tokens: SessionTokens = request.app.state.tokens
    user_id = tokens.verify(token)
    if user_id is None:
        raise LoginRequired(clear_cookie=True)

    request.state.user_id = user_id
    return user_id


def login_redirect(settings: Settings, *, clear_cookie: bool) -> RedirectResponse:
    resp = RedirectResponse(url=LOGIN_URL, status_code=303)
    if clear_cookie:
        clear_session_cookie(resp, settings)
    return resp
