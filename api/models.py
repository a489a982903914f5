"""
API request and response models for authgate REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py, which
own the internal domain representation. Route handlers map between the two.

UserResponse has no password field. Every success payload that carries a user
goes through it, so the hash has no way into a response body.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from auth.models import User, UserView

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /api/v1/auth/register.

    email is stored exactly as given; lookups are case-sensitive.
    """

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)


class LoginRequest(BaseModel):
    """Request body for POST /api/v1/auth/login."""

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)



# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """Public identity fields returned by register, login and check."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    role: str
    image: Optional[str] = None

    @classmethod
    def from_user(cls, user: Union[User, UserView]) -> "UserResponse":
        """Build the outward view from either the stored record or the gated projection."""
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            image=user.image,
        )


class AuthResponse(BaseModel):
    """Success envelope for register, login and check."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    """Success envelope without a user (logout)."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned on 4xx/5xx responses.

    error is the human-readable message; code is the machine-readable one.
    """

    model_config = ConfigDict(frozen=True)

    error: str
    code: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
