"""Service layer for local user registration."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.identity import Identity

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by email address."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def ensure_user(db: AsyncSession, identity: Identity) -> User:
    """
    Ensure a local user row exists for a verified identity.

    Idempotent upsert keyed by email: if a user with the identity's email exists
    it is returned untouched (name and avatar are a snapshot from first sign-in
    and are never refreshed); otherwise a row is inserted with the provider's id.

    Handles the race where a concurrent request inserts the same user between
    our SELECT and INSERT: the insert runs in a savepoint, and on a unique
    violation the existing row is fetched instead.

    Raises:
        IntegrityError: If the insert conflicts on something other than the
            email, e.g. an existing row with the same id but a different email.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    user = await get_user_by_email(db, identity.email)
    if user is not None:
        return user

    user = User(
        id=identity.id,
        email=identity.email,
        name=identity.name,
        image=identity.avatar_url,
    )
    try:
        async with db.begin_nested():
            db.add(user)
    except IntegrityError:
        existing = await get_user_by_email(db, identity.email)
        if existing is None:
            raise
        logger.info("User %s was registered by a concurrent request", identity.id)
        return existing

    logger.info("Registered new user %s", identity.id)
    return user
