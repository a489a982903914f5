"""Unit tests for auth/store.py -- UserStore queries and writes.

Covers:
- create_user() assigns an opaque id and stamps created_at
- get_by_email() is exact-match (case-sensitive)
- the UNIQUE(email) constraint surfaces as DuplicateEmailError
- get_view_by_id() returns the public projection only
- delete_user() and lookups of missing ids
"""

import dataclasses
import uuid

import pytest

from auth.models import User, UserRole, UserView
from auth.store import DuplicateEmailError, UserStore


def _user(email: str = "a@x.com", name: str = "Ann") -> User:
    return User(email=email, name=name, hashed_password="$2b$04$notarealhashbutstoredverbatim")


def test_create_user_returns_uuid_id(store: UserStore) -> None:
    user_id = store.create_user(_user())
    assert str(uuid.UUID(user_id)) == user_id


def test_get_by_email_returns_full_record(store: UserStore) -> None:
    user_id = store.create_user(_user())
    found = store.get_by_email("a@x.com")
    assert found is not None
    assert found.id == user_id
    assert found.name == "Ann"
    assert found.role == UserRole.USER.value
    assert found.hashed_password.startswith("$2b$")
    assert found.image is None
    assert found.created_at


def test_get_by_email_is_case_sensitive(store: UserStore) -> None:
    store.create_user(_user())
    assert store.get_by_email("A@X.COM") is None


def test_get_by_email_missing(store: UserStore) -> None:
    assert store.get_by_email("nobody@x.com") is None


def test_duplicate_email_rejected_by_store(store: UserStore) -> None:
    """The unique constraint is the real guard, even without an application pre-check."""
    store.create_user(_user())
    with pytest.raises(DuplicateEmailError):
        store.create_user(_user(name="Ann2"))
    assert store.get_by_email("a@x.com").name == "Ann"


def test_get_view_by_id_excludes_hash(store: UserStore) -> None:
    user_id = store.create_user(_user())
    view = store.get_view_by_id(user_id)
    assert isinstance(view, UserView)
    assert view == UserView(id=user_id, email="a@x.com", name="Ann", role="USER", image=None)
    assert "hashed_password" not in {f.name for f in dataclasses.fields(view)}


def test_get_view_by_id_missing(store: UserStore) -> None:
    assert store.get_view_by_id(str(uuid.uuid4())) is None
    assert store.get_view_by_id("not-a-uuid") is None


def test_admin_role_round_trips(store: UserStore) -> None:
    admin = _user(email="root@x.com")
    admin.role = UserRole.ADMIN.value
    user_id = store.create_user(admin)
    assert store.get_view_by_id(user_id).role == "ADMIN"


def test_delete_user(store: UserStore) -> None:
    user_id = store.create_user(_user())
    assert store.delete_user(user_id) is True
    assert store.get_by_id(user_id) is None
    assert store.delete_user(user_id) is False
