"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Stores and routes do
the work.

Two shapes of the same identity:
  User     -- the persisted record, including hashed_password. Only the store
              and the login flow ever hold one.
  UserView -- the outward projection. It has no hash field, so a response
              built from it cannot leak the hash.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass
class User:
    """A registered identity as stored in the users table.

    id is None before the record is written; the store assigns a UUID4 string
    on insert. email is matched exactly (case-sensitive), as stored.
    """

    email: str
    name: str
    hashed_password: str
    role: str = UserRole.USER.value
    id: str | None = None
    image: str | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class UserView:
    """Public fields of an identity, as resolved by the gating dependency."""

    id: str
    email: str
    name: str
    role: str
    image: str | None = None
