"""Database layer: models and the shared connection resource."""
from lightbnb.db.models import Base, Property, PropertyReview, Reservation, User
from lightbnb.db.session import (
    Database,
    get_database,
    get_engine,
    init_db,
    reset_database,
)

__all__ = [
    # Models
    "Base",
    "User",
    "Property",
    "Reservation",
    "PropertyReview",
    # Connection resource
    "Database",
    "get_engine",
    "get_database",
    "reset_database",
    "init_db",
]
