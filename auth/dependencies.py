"""
auth/dependencies.py -- FastAPI Depends() helper that gates protected routes.

get_current_user() runs before any route that declares it. Steps, in order,
stopping at the first failure:
  1. Read the "jwt" session cookie            -> 401 if absent
  2. Verify signature and expiry              -> 401 if invalid
  3. Load the public projection of the user   -> 500 if the store fails
  4. User gone since the token was issued     -> 404
  5. Attach the UserView to request.state.user and return it

The wrapped route never runs unless all five steps pass.

Layer rule: auth/dependencies.py may import from fastapi (for HTTPException /
Request) because this module is part of the FastAPI dependency injection
system. It does not import from api/.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from auth.models import UserView
from auth.store import UserStore
from auth.tokens import AUTH_COOKIE_NAME, decode_access_token

logger = logging.getLogger("authgate.auth")


def get_current_user(request: Request) -> UserView:
    """Require an authenticated session and return the acting user.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user: UserView = Depends(get_current_user)): ...
    """
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if not token:
        raise HTTPException(
            status_code=401,
            detail={"error": "Unauthorized - No token provided", "code": "unauthorized"},
        )

    payload = decode_access_token(token)
    if payload is None:
        raise HTTPException(
            status_code=401,
            detail={"error": "Unauthorized - Invalid token", "code": "unauthorized"},
        )

    user_store: UserStore = request.app.state.user_store
    try:
        user = user_store.get_view_by_id(payload["sub"])
    except Exception:
        logger.exception("Error authenticating user on %s %s", request.method, request.url.path)
        raise HTTPException(
            status_code=500,
            detail={"error": "Error authenticating user", "code": "internal_error"},
        ) from None

    if user is None:
        raise HTTPException(
            status_code=404,
            detail={"error": "User not found", "code": "not_found"},
        )

    request.state.user = user
    return user
