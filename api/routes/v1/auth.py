"""
api/routes/v1/auth.py -- Registration, login, logout and session check.

Routes:
  POST /api/v1/auth/register  -- create account; sets JWT cookie; 201
  POST /api/v1/auth/login     -- password login; sets JWT cookie; 200
  POST /api/v1/auth/logout    -- clears cookie; 200, even with no session
  GET  /api/v1/auth/check     -- current user (requires auth)

Conventions:
  Duplicate email is 400, not 409. Clients of this API key on 400 +
  "User already exists"; keep it.

  Login distinguishes "User not found" from "Invalid credentials". Both are
  401.

  Handlers are plain `def` so FastAPI runs them in its thread pool; the
  UserStore calls block only that worker.

  Store failures (SQLAlchemyError) are logged with traceback and reported as a
  generic 500. No database detail reaches the client.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.models import AuthResponse, LoginRequest, MessageResponse, RegisterRequest, UserResponse
from auth.dependencies import get_current_user
from auth.models import User, UserRole, UserView
from auth.store import DuplicateEmailError, UserStore
from auth.tokens import clear_auth_cookie, create_access_token, hash_password, set_auth_cookie, verify_password

logger = logging.getLogger("authgate.api")

# Auth policy:
# - POST /api/v1/auth/register: public
# - POST /api/v1/auth/login:    public
# - POST /api/v1/auth/logout:   public -- clearing a cookie needs no prior auth
# - GET  /api/v1/auth/check:    requires auth (get_current_user)
router = APIRouter()


def _conflict() -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"error": "User already exists", "code": "conflict"},
    )


def _internal(message: str) -> HTTPException:
    return HTTPException(
        status_code=500,
        detail={"error": message, "code": "internal_error"},
    )


def _session_response(status_code: int, message: str, user: User) -> JSONResponse:
    """Mint a token for user, attach it as the session cookie, return the success envelope."""
    token = create_access_token(user.id)
    resp = JSONResponse(
        status_code=status_code,
        content=AuthResponse(message=message, user=UserResponse.from_user(user)).model_dump(),
    )
    set_auth_cookie(resp, token)
    resp.headers["Cache-Control"] = "no-store"
    return resp


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------


@router.post("/auth/register", response_model=AuthResponse, status_code=201)
def register(request: Request, body: RegisterRequest) -> JSONResponse:
    """Create an account with the base role and start a session for it."""
    user_store: UserStore = request.app.state.user_store
    try:
        if user_store.get_by_email(body.email) is not None:
            raise _conflict()

        new_user = User(
            email=body.email,
            name=body.name,
            hashed_password=hash_password(body.password),
            role=UserRole.USER.value,
        )
        try:
            new_user.id = user_store.create_user(new_user)
        except DuplicateEmailError:
            # Lost the race against a concurrent registration.
            raise _conflict() from None
    except SQLAlchemyError:
        logger.exception("Error creating user")
        raise _internal("Error creating user") from None

    logger.info("Registered user %s", new_user.id)
    return _session_response(201, "User created successfully", new_user)


@router.post("/auth/login", response_model=AuthResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password; set JWT cookie."""
    user_store: UserStore = request.app.state.user_store
    try:
        user = user_store.get_by_email(body.email)
    except SQLAlchemyError:
        logger.exception("Error logging in user")
        raise _internal("Error logging in user") from None

    if user is None:
        logger.info("Login failed: unknown email")
        raise HTTPException(
            status_code=401,
            detail={"error": "User not found", "code": "unauthorized"},
        )
    if not verify_password(body.password, user.hashed_password):
        logger.info("Login failed: bad password for user %s", user.id)
        raise HTTPException(
            status_code=401,
            detail={"error": "Invalid credentials", "code": "unauthorized"},
        )

    logger.info("Login: %s", user.id)
    return _session_response(200, "User logged in successfully", user)


@router.post("/auth/logout", response_model=MessageResponse)
def logout() -> JSONResponse:
    """Clear the JWT cookie. Succeeds whether or not a session exists."""
    resp = JSONResponse(content=MessageResponse(message="User logged out successfully").model_dump())
    clear_auth_cookie(resp)
    return resp


# ---------------------------------------------------------------------------
# Authenticated endpoints
# ---------------------------------------------------------------------------


@router.get("/auth/check", response_model=AuthResponse)
def check(current_user: UserView = Depends(get_current_user)) -> AuthResponse:
    """Return the identity resolved by the gating dependency."""
    return AuthResponse(
        message="User authenticated successfully",
        user=UserResponse.from_user(current_user),
    )
