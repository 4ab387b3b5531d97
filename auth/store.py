"""
auth/store.py -- SQLAlchemy Core persistence layer for accounts.

Pattern: Repository + Data Mapper (same as catalog/store.py).
UserStore is the repository; _row_to_account is the mapper.
Service and route code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

  UNIQUE(email) is the authority for email uniqueness. email_exists() is a
  read-before-write convenience for a friendlier error message; two
  concurrent registrations can both pass it, and the second insert then
  fails with IntegrityError.

Layer rule: no imports from api/ or catalog/.
"""

from __future__ import annotations

import logging

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, text
from sqlalchemy.engine import Engine

from auth.models import ROLE_ADMIN, ROLE_USER, Account

logger = logging.getLogger("inventory.auth")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "users",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("status", String(30), nullable=False, server_default=ROLE_USER),
)

# (name, email, password, role) inserted on first boot when the table is empty.
SAMPLE_ACCOUNTS: list[tuple[str, str, str, str]] = [
    ("Admin User", "admin@mail.ru", "admin123", ROLE_ADMIN),
    ("Regular User", "user@mail.ru", "user123", ROLE_USER),
    ("Cat User", "cat@bsu.ru", "87654321", ROLE_USER),
]


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for Account entities.

    Usage:
        store = UserStore(engine)
        store.create_user(Account(name="Ann", email="ann@example.com", password_hash=hash_password("pw")))
        account = store.get_by_email("ann@example.com")
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        _metadata.create_all(self.engine)

    def has_users(self) -> bool:
        """Return True if at least one account exists."""
        with self.engine.connect() as conn:
            result = conn.execute(text("SELECT COUNT(*) FROM users")).scalar()
        return (result or 0) > 0

    def email_exists(self, email: str) -> bool:
        """Best-effort pre-check used by registration. Not a concurrency guarantee."""
        with self.engine.connect() as conn:
            result = conn.execute(
                text("SELECT COUNT(*) FROM users WHERE email = :email"),
                {"email": email},
            ).scalar()
        return (result or 0) > 0

    def create_user(self, account: Account) -> int:
        """Insert a new account and return its assigned database ID.

        Raises sqlalchemy.exc.IntegrityError if the email already exists.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _users.insert().values(
                    name=account.name,
                    email=account.email,
                    password_hash=account.password_hash,
                    status=account.role,
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get_by_email(self, email: str) -> Account | None:
        """Look up an account by exact email (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.email == email)).fetchone()
        return _row_to_account(row) if row is not None else None

    def get_by_id(self, user_id: int) -> Account | None:
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
        return _row_to_account(row) if row is not None else None

    def delete_user(self, user_id: int) -> bool:
        """Remove an account. Not exposed over HTTP."""
        with self.engine.connect() as conn:
            result = conn.execute(_users.delete().where(_users.c.id == user_id))
            conn.commit()
        return result.rowcount > 0

    def seed_if_empty(self, password_hasher) -> int:
        """Insert SAMPLE_ACCOUNTS when the users table is empty.

        password_hasher turns a plaintext password into the stored hash; it is
        passed in so this module stays free of bcrypt. Returns the number of
        accounts inserted (0 when the table already had rows).
        """
        if self.has_users():
            return 0
        for name, email, password, role in SAMPLE_ACCOUNTS:
            self.create_user(Account(name=name, email=email, password_hash=password_hasher(password), role=role))
        logger.info("Seeded %d sample accounts", len(SAMPLE_ACCOUNTS))
        return len(SAMPLE_ACCOUNTS)


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_account(row) -> Account:
    return Account(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        role=row.status,
    )
