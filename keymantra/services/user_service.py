# keymantra/services/user_service.py
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from keymantra.models.tables import User
from keymantra.services.course_service import DataAccessError
from keymantra.utils.logger import logger


def display_name(email: str, first_name: Optional[str] = None, last_name: Optional[str] = None,
                 username: Optional[str] = None) -> str:
    """Picks the friendliest name the identity provider gave us."""
    if first_name and last_name:
        return f"{first_name} {last_name}"
    return first_name or last_name or username or email.split("@")[0] or "User"


async def sync_user(session: AsyncSession, user_id: str, email: str = "",
                    first_name: Optional[str] = None, last_name: Optional[str] = None,
                    username: Optional[str] = None) -> Tuple[User, bool]:
    """
    Mirrors an authenticated user into the database. Existing users are left
    untouched. Returns the user and whether it was created.
    """
    user = await session.get(User, user_id)
    if user:
        logger.debug(f"User '{user_id}' already synced.")
        return user, False

    user = User(id=user_id, email=email, name=display_name(email, first_name, last_name, username))
    try:
        session.add(user)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception(f"Failed to sync user '{user_id}': {e}")
        raise DataAccessError("Failed to sync user") from e
    logger.info(f"Added new user '{user_id}' ({user.name}).")
    return user, True
