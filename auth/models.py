"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic beyond trivial
properties). Stores, services and routes do the work.

Layer rule: no imports from api/, core/, or catalog/.
"""

from __future__ import annotations

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_USER = "user"


@dataclass
class Account:
    """A registered identity.

    role is "admin" (may mutate the catalog) or "user". Self-registration
    always produces "user"; admins exist only through seeding.

    id is None before the record is written to the database.
    """

    name: str
    email: str  # unique, case-sensitive as stored
    password_hash: str
    role: str = ROLE_USER
    id: int | None = None


@dataclass(frozen=True)
class Claims:
    """Verified payload of a bearer token.

    Built by TokenService.verify() and carried through the request on
    RequestContext. Reflects the account as it was at issue time -- the store
    is not consulted again until the token expires.
    """

    user_id: int
    name: str
    email: str
    role: str
    expires_at: int  # Unix timestamp

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass(frozen=True)
class Profile:
    user_id: int
    name: str
    email: str
    role: str


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful login or registration."""

    token: str
    account: Account
