"""
auth/store.py -- SQLAlchemy Core persistence layer for auth entities.

Pattern: Repository + Data Mapper.
UserStore is the repository; _row_to_user / _row_to_view are the mappers.
Route and dependency code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

  get_view_by_id() selects only the public columns. hashed_password is never
  read on the gated-request path, so it cannot end up in request state.

Uniqueness:
  UNIQUE(email) is the authoritative duplicate guard. create_user() turns the
  IntegrityError into DuplicateEmailError so callers do not need to know about
  SQLAlchemy. The registration route still pre-checks get_by_email() as a fast
  path, but two concurrent registrations for the same email are settled here.

DB path: auth/authgate.db unless DATABASE_URL says otherwise.

Layer rule: no imports from api/.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, MetaData, String, Table, Text, create_engine, event, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from auth.models import User, UserRole, UserView

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "users",
    _metadata,
    Column("id", String(36), primary_key=True),  # UUID4, assigned by create_user()
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("hashed_password", Text, nullable=False),
    Column("role", String(16), nullable=False, server_default=UserRole.USER.value),
    Column("image", Text),
    Column("created_at", String(32), nullable=False),
)

# Columns exposed outward. Anything not listed here stays in the database.
_public_columns = (
    _users.c.id,
    _users.c.image,
    _users.c.name,
    _users.c.email,
    _users.c.role,
)


class DuplicateEmailError(Exception):
    """Raised by create_user() when the email is already registered."""


# ---------------------------------------------------------------------------
# WAL mode
# ---------------------------------------------------------------------------


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User entities.

    One instance is created per process (in the API lifespan) and shared by
    every request; the engine's connection pool handles concurrency.

    Usage:
        store = UserStore("sqlite:///:memory:")
        user_id = store.create_user(User(email="a@x.com", name="Ann", hashed_password=hash_password("pw")))
        view = store.get_view_by_id(user_id)
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_wal_mode)
        _metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by exact email (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.email == email)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_id(self, user_id: str) -> User | None:
        """Look up the full record by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_view_by_id(self, user_id: str) -> UserView | None:
        """Look up the public projection of a user by primary key.

        Used by the gating dependency on every authenticated request. The
        SELECT lists only the public columns.
        """
        with self.engine.connect() as conn:
            row = conn.execute(select(*_public_columns).where(_users.c.id == user_id)).fetchone()
        return _row_to_view(row) if row is not None else None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_user(self, user: User) -> str:
        """Insert a new user and return its generated id.

        Raises DuplicateEmailError if the email already exists.
        """
        user_id = str(uuid.uuid4())
        try:
            with self.engine.connect() as conn:
                conn.execute(
                    _users.insert().values(
                        id=user_id,
                        email=user.email,
                        name=user.name,
                        hashed_password=user.hashed_password,
                        role=user.role,
                        image=user.image,
                        created_at=_now_iso(),
                    )
                )
                conn.commit()
        except IntegrityError as exc:
            raise DuplicateEmailError(user.email) from exc
        return user_id

    def delete_user(self, user_id: str) -> bool:
        """Permanently delete a user record. Returns True if deleted, False if not found.

        Tokens already issued for the user stay cryptographically valid; the
        gating dependency reports them as 404 on their next use.
        """
        with self.engine.connect() as conn:
            result = conn.execute(_users.delete().where(_users.c.id == user_id))
            conn.commit()
        return result.rowcount > 0

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        email=row.email,
        name=row.name,
        hashed_password=row.hashed_password,
        role=row.role,
        image=row.image,
        created_at=row.created_at,
    )


def _row_to_view(row) -> UserView:
    return UserView(
        id=row.id,
        email=row.email,
        name=row.name,
        role=row.role,
        image=row.image,
    )
