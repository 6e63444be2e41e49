"""Query functions for users, properties and reservations.

Every function is a coroutine that issues one statement against the shared
``Database`` (or the one passed as ``db``) and returns plain dicts.

Example usage:
    from lightbnb.repository import get_all_properties, get_user_with_email

    user = await get_user_with_email("tristanjacobs@gmail.com")
    cheap = await get_all_properties({"city": "Vancouver", "maximum_price_per_night": 150}, limit=5)
"""
from lightbnb.errors import (
    ConnectionFailure,
    ConstraintViolation,
    QuerySyntaxError,
    RepositoryError,
)
from lightbnb.repository.properties import add_property, build_property_query, get_all_properties
from lightbnb.repository.reservations import get_all_reservations
from lightbnb.repository.users import add_user, get_user_with_email, get_user_with_id

__all__ = [
    # Users
    "get_user_with_email",
    "get_user_with_id",
    "add_user",
    # Reservations
    "get_all_reservations",
    # Properties
    "build_property_query",
    "get_all_properties",
    "add_property",
    # Errors
    "RepositoryError",
    "ConnectionFailure",
    "ConstraintViolation",
    "QuerySyntaxError",
]
