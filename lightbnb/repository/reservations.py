"""Reservation listing for a guest."""
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select

from lightbnb.db.models import Property, PropertyReview, Reservation
from lightbnb.db.session import Database, get_database


def build_reservations_query(guest_id: int, limit: int = 10):
    """Build the SELECT behind get_all_reservations.

    Rows carry the property's columns, then the reservation's columns (so
    ``id`` is the reservation id) and the property's average rating.
    """
    property_columns = [c for c in Property.__table__.c if c.key != "id"]
    return (
        select(
            *property_columns,
            *Reservation.__table__.c,
            func.avg(PropertyReview.rating).label("average_rating"),
        )
        .select_from(Property)
        .join(Reservation, Reservation.property_id == Property.id)
        .join(PropertyReview, PropertyReview.property_id == Property.id)
        .where(Reservation.guest_id == guest_id)
        .group_by(Property.id, Reservation.id)
        .order_by(Reservation.start_date.asc())
        .limit(limit)
    )


async def get_all_reservations(
    guest_id: int, limit: int = 10, db: Optional[Database] = None
) -> List[Dict[str, Any]]:
    """Get all reservations for a single guest, earliest first.

    Only properties with at least one review are included, since the rating
    join is an inner join.

    Args:
        guest_id: The guest's user id
        limit: Maximum number of reservations to return
        db: Optional Database (uses the shared one if None)

    Returns:
        List of reservation records; empty if the guest has none
    """
    db = db or get_database()
    return await db.execute(build_reservations_query(guest_id, limit))
