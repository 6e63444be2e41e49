"""User lookups and registration."""
import logging
from typing import Any, Dict, Mapping, Optional, Union

from sqlalchemy import insert, select

from lightbnb.db.models import User
from lightbnb.db.session import Database, get_database
from lightbnb.validation import UserCreate

logger = logging.getLogger(__name__)


async def get_user_with_email(email: str, db: Optional[Database] = None) -> Optional[Dict[str, Any]]:
    """Get a single user given their email.

    Args:
        email: Exact email to match
        db: Optional Database (uses the shared one if None)

    Returns:
        The user record, or None if no user has this email
    """
    db = db or get_database()
    return await db.fetch_one(select(User.__table__).where(User.email == email))


async def get_user_with_id(user_id: int, db: Optional[Database] = None) -> Optional[Dict[str, Any]]:
    """Get a single user given their id, or None if it does not exist."""
    db = db or get_database()
    return await db.fetch_one(select(User.__table__).where(User.id == user_id))


async def add_user(user: Union[UserCreate, Mapping[str, Any]], db: Optional[Database] = None) -> Dict[str, Any]:
    """Add a new user and return the stored row including its id.

    Raises:
        ConstraintViolation: If the email is already registered
    """
    db = db or get_database()
    if not isinstance(user, UserCreate):
        user = UserCreate.model_validate(user)

    stmt = (
        insert(User.__table__)
        .values(name=user.name, email=user.email, password=user.password)
        .returning(*User.__table__.c)
    )
    row = await db.fetch_one(stmt)
    logger.info(f"Created user {row['id']}")
    return row
