"""
auth/tokens.py -- JWT signing/verification and password hashing.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry user_id, name, email, status
       (role) and expiry. Verification returns None on any failure -- the
       guard layer turns that into a 401. Tokens are stateless: a deleted or
       downgraded account keeps a working token until it expires.

  Keys: SigningKeys holds the current signing key plus retired keys that are
       still accepted for verification. Every token names its key in the
       "kid" header so a key can be rotated without logging everyone out.
       Key material comes from core.config -- never from literals here.

  Expiry: checked here against an injectable clock rather than inside
       jose.jwt.decode, so tests can pin "now". A token is rejected at
       now == exp, not only after it.

  Passwords: bcrypt, used directly. The _DUMMY_HASH constant enables timing
       equalization in IdentityService.login() so response time does not
       reveal whether an email is registered.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

import bcrypt
from jose import JWTError, jwt

from auth.models import Claims
from core.config import Settings, get_settings

logger = logging.getLogger("inventory.auth")

_settings = get_settings()

_ALGORITHM = "HS256"

# ---------------------------------------------------------------------------
# Password hashing (bcrypt -- direct usage, no passlib wrapper)
# ---------------------------------------------------------------------------


def hash_password(plain: str, rounds: int | None = None) -> str:
    """Return a bcrypt hash of the given plaintext password.

    bcrypt only looks at the first 72 bytes; longer inputs are truncated
    before hashing so bcrypt 4.x does not reject them.
    """
    salt = bcrypt.gensalt(rounds=rounds or _settings.bcrypt_rounds)
    return bcrypt.hashpw(plain.encode("utf-8")[:72], salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8")[:72], hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Computed once at module load so the first login attempt is not measurably
# slower than subsequent ones.
_DUMMY_HASH: str = hash_password("inventory_timing_dummy")


def verify_dummy_password(plain: str) -> None:
    """Burn one bcrypt check so an unknown email costs the same as a wrong password."""
    verify_password(plain, _DUMMY_HASH)


# ---------------------------------------------------------------------------
# Signing keys
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SigningKeys:
    """Key material for token signing.

    current_id/current_secret sign every new token. retired maps older key
    ids to secrets that are still accepted during verification.
    """

    current_id: str
    current_secret: str
    retired: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> SigningKeys:
        return cls(
            current_id=settings.secret_key_id,
            current_secret=settings.secret_key,
            retired=dict(settings.retired_secret_keys),
        )

    def secret_for(self, kid: str | None) -> str | None:
        """Return the secret for kid, or None if the key is unknown.

        Tokens without a kid are checked against the current key.
        """
        if kid is None or kid == self.current_id:
            return self.current_secret
        return self.retired.get(kid)


# ---------------------------------------------------------------------------
# Token service
# ---------------------------------------------------------------------------


class TokenService:
    """Issues and verifies signed, time-bounded identity assertions.

    Usage:
        tokens = TokenService(SigningKeys("primary", secret), ttl_seconds=86400)
        token = tokens.issue(1, "Admin User", "admin@mail.ru", "admin")
        claims = tokens.verify(token)   # Claims or None
    """

    def __init__(
        self,
        keys: SigningKeys,
        ttl_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.keys = keys
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenService:
        return cls(SigningKeys.from_settings(settings), ttl_seconds=settings.token_expire_seconds)

    def issue(self, user_id: int, name: str, email: str, role: str) -> str:
        """Encode a signed JWT for the given identity, valid for ttl_seconds."""
        now = int(self._clock())
        payload = {
            "sub": str(user_id),
            "user_id": user_id,
            "name": name,
            "email": email,
            "status": role,
            "iat": now,
            "exp": now + self.ttl_seconds,
        }
        return jwt.encode(
            payload,
            self.keys.current_secret,
            algorithm=_ALGORITHM,
            headers={"kid": self.keys.current_id},
        )

    def verify(self, token: str) -> Claims | None:
        """Decode and verify a JWT. Returns Claims, or None on any failure.

        Failure covers: malformed structure, unknown kid, bad signature,
        missing claims, and expiry (now >= exp).
        """
        try:
            header = jwt.get_unverified_header(token)
            secret = self.keys.secret_for(header.get("kid"))
            if secret is None:
                logger.info("Rejected token signed with unknown key id %r", header.get("kid"))
                return None
            payload = jwt.decode(
                token,
                secret,
                algorithms=[_ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError:
            return None

        exp = payload.get("exp")
        user_id = payload.get("user_id")
        if not isinstance(exp, int) or not isinstance(user_id, int):
            return None
        if self._clock() >= exp:
            return None
        if not all(isinstance(payload.get(k), str) for k in ("name", "email", "status")):
            return None
        return Claims(
            user_id=user_id,
            name=payload["name"],
            email=payload["email"],
            role=payload["status"],
            expires_at=exp,
        )
