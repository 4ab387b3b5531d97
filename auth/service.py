"""
auth/service.py -- Registration, login and profile lookup.

Both register() and login() end in token issuance. The store and token
service are injected at construction; api/main.py wires the real ones in the
lifespan and tests wire in-memory ones.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from auth.models import ROLE_USER, Account, AuthResult, Claims, Profile
from auth.store import UserStore
from auth.tokens import TokenService, hash_password, verify_dummy_password, verify_password
from core.exceptions import Conflict, Unauthenticated

logger = logging.getLogger("inventory.auth")


class IdentityService:
    def __init__(self, store: UserStore, tokens: TokenService) -> None:
        self.store = store
        self.tokens = tokens

    def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create a standard account and sign it in.

        The role is always ROLE_USER; callers cannot request another one.
        The email pre-check only produces a nicer message -- the UNIQUE
        constraint decides, and losing that race is also a Conflict.
        """
        logger.info("Registration attempt for %s", email)
        if self.store.email_exists(email):
            logger.info("Registration rejected, email already exists: %s", email)
            raise Conflict("User with this email already exists")

        account = Account(name=name, email=email, password_hash=hash_password(password), role=ROLE_USER)
        try:
            account.id = self.store.create_user(account)
        except IntegrityError as exc:
            logger.info("Registration lost uniqueness race for %s", email)
            raise Conflict("User with this email already exists") from exc

        logger.info("User created with id %d", account.id)
        return AuthResult(token=self._issue(account), account=account)

    def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and issue a token mirroring the stored role.

        Unknown email and wrong password raise the same Unauthenticated
        error. A dummy bcrypt check runs for unknown emails so both paths
        cost the same.
        """
        account = self.store.get_by_email(email)
        if account is None:
            verify_dummy_password(password)
            logger.info("Failed login for %s", email)
            raise Unauthenticated("Invalid credentials")
        if not verify_password(password, account.password_hash):
            logger.info("Failed login for %s", email)
            raise Unauthenticated("Invalid credentials")
        return AuthResult(token=self._issue(account), account=account)

    def profile(self, claims: Claims) -> Profile:
        """Project already-verified claims. No store access."""
        return Profile(
            user_id=claims.user_id,
            name=claims.name,
            email=claims.email,
            role=claims.role,
        )

    def _issue(self, account: Account) -> str:
        return self.tokens.issue(account.id, account.name, account.email, account.role)
