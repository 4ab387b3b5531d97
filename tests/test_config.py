"""
tests/test_config.py -- Settings validation in core/config.py.

Settings is constructed directly with _env_file=None and keyword overrides,
so these tests never touch the cached get_settings() instance the rest of the
suite relies on.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import Settings

KEY = "k" * 40


def test_debug_generates_key() -> None:
    s = Settings(_env_file=None, debug=True, secret_key="")
    assert len(s.secret_key) >= 32


def test_production_requires_key() -> None:
    with pytest.raises(ValidationError, match="SECRET_KEY is required"):
        Settings(_env_file=None, debug=False, secret_key="")


def test_short_key_rejected() -> None:
    with pytest.raises(ValidationError, match="at least 32"):
        Settings(_env_file=None, debug=False, secret_key="short")


def test_explicit_key_kept() -> None:
    s = Settings(_env_file=None, debug=False, secret_key=KEY)
    assert s.secret_key == KEY
    assert s.token_expire_seconds == 86400
    assert s.strict_mutations is False


def test_retired_key_must_be_long() -> None:
    with pytest.raises(ValidationError, match="Retired key"):
        Settings(_env_file=None, secret_key=KEY, retired_secret_keys={"old": "short"})


def test_retired_kid_cannot_shadow_current() -> None:
    with pytest.raises(ValidationError, match="SECRET_KEY_ID"):
        Settings(_env_file=None, secret_key=KEY, secret_key_id="v2", retired_secret_keys={"v2": KEY})


@pytest.mark.parametrize("rounds", [3, 32])
def test_bcrypt_rounds_bounds(rounds: int) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, secret_key=KEY, bcrypt_rounds=rounds)


def test_token_ttl_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, secret_key=KEY, token_expire_seconds=0)


def test_retired_keys_from_env_json(monkeypatch) -> None:
    monkeypatch.setenv("RETIRED_SECRET_KEYS", '{"2025": "%s"}' % ("o" * 40))
    s = Settings(_env_file=None, secret_key=KEY)
    assert s.retired_secret_keys == {"2025": "o" * 40}
