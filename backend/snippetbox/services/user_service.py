"""
Snippetbox Backend — User Service
===================================

What:  Registration, authentication and lookup of user accounts.
How:   Runs parameterized statements through the request's AsyncSession and
       translates store-specific failures into the sentinel exceptions from
       `snippetbox.exceptions`.
Who:   Called by the /user/* route handlers.

Error translation:
    insert()        IntegrityError on users.email  → DuplicateEmailError
                    any other error                → propagated unchanged
    authenticate()  no row for the email           → InvalidCredentialsError
                    bcrypt mismatch                → InvalidCredentialsError
                    any other error                → propagated unchanged

bcrypt is CPU-bound (cost 12 ≈ 250ms), so hashing and comparison run in
Starlette's threadpool instead of on the event loop.
"""

import logging
from typing import Optional

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from snippetbox.config import settings
from snippetbox.exceptions import DuplicateEmailError, InvalidCredentialsError
from snippetbox.models.user import EMAIL_UNIQUE_CONSTRAINT, User

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, cost: Optional[int] = None) -> str:
    """bcrypt hash of `password` with a fresh salt, as an ASCII string."""
    rounds = cost if cost is not None else settings.bcrypt_cost
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("ascii")


def check_password(password: str, hashed_password: str) -> bool:
    encoded = password.encode("utf-8")
    # signup rejects longer passwords, so nothing stored can match one
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed_password.encode("ascii"))


def is_duplicate_email(exc: IntegrityError) -> bool:
    """
    True when an IntegrityError comes from the unique constraint on users.email.

    Driver messages differ:
        PostgreSQL: duplicate key value violates unique constraint "users_uc_email"
        MySQL:      Duplicate entry 'a@b.c' for key 'users_uc_email'
        SQLite:     UNIQUE constraint failed: users.email
    """
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return (
        EMAIL_UNIQUE_CONSTRAINT in message
        or "UNIQUE constraint failed: users.email" in message
    )


class UserService:
    """
    Data access for the `users` table.

    Stateless: every method receives the session to work in, so one
    module-level instance is shared by all requests.
    """

    async def insert(self, db: AsyncSession, name: str, email: str, password: str) -> User:
        """
        Create a user with a bcrypt-hashed password.

        Raises:
            DuplicateEmailError: the email is already registered
        """
        hashed_password = await run_in_threadpool(hash_password, password)

        user = User(name=name, email=email, hashed_password=hashed_password)
        db.add(user)
        try:
            # flush (not commit) so the violation surfaces here; the request's
            # session dependency commits at the end
            await db.flush()
        except IntegrityError as exc:
            await db.rollback()
            if is_duplicate_email(exc):
                logger.info("Signup rejected: email already registered")
                raise DuplicateEmailError(email=email) from exc
            raise

        logger.info("User %d created", user.id)
        return user

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> int:
        """
        Return the id of the user whose email and password match.

        Raises:
            InvalidCredentialsError: unknown email or wrong password
        """
        result = await db.execute(
            select(User.id, User.hashed_password).where(User.email == email)
        )
        row = result.one_or_none()
        if row is None:
            raise InvalidCredentialsError()

        user_id, hashed_password = row
        matches = await run_in_threadpool(check_password, password, hashed_password)
        if not matches:
            raise InvalidCredentialsError()

        return user_id

    async def get(self, db: AsyncSession, user_id: int) -> Optional[User]:
        """Primary-key lookup; None when no such user exists."""
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()


# Module-level singleton used by the routes
user_service = UserService()
