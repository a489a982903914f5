"""Unit tests for core/config.py -- Settings validation and defaults.

Settings is built directly (not via get_settings) with _env_file=None so a
developer's local .env cannot leak into the assertions.
"""

import pytest
from pydantic import ValidationError

from core.config import Settings

GOOD_SECRET = "s" * 32


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("JWT_SECRET", "APP_ENV", "BCRYPT_ROUNDS", "PORT", "TOKEN_EXPIRE_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def test_missing_secret_is_fatal() -> None:
    with pytest.raises(ValidationError, match="JWT_SECRET is required"):
        Settings(_env_file=None)


def test_short_secret_rejected() -> None:
    with pytest.raises(ValidationError, match="at least 32 characters"):
        Settings(_env_file=None, jwt_secret="too-short")


def test_missing_secret_is_fatal_in_development_too(monkeypatch) -> None:
    monkeypatch.setenv("APP_ENV", "development")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults() -> None:
    s = Settings(_env_file=None, jwt_secret=GOOD_SECRET)
    assert s.token_expire_seconds == 7 * 24 * 60 * 60
    assert s.bcrypt_rounds == 12
    assert s.port == 8080
    assert s.is_development is False


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("JWT_SECRET", GOOD_SECRET)
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("APP_ENV", "Development")
    s = Settings(_env_file=None)
    assert s.jwt_secret == GOOD_SECRET
    assert s.port == 9000
    assert s.is_development is True


def test_bcrypt_rounds_bounded() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, jwt_secret=GOOD_SECRET, bcrypt_rounds=2)
