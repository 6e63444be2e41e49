"""Property search and listing creation.

Search filters are collected as a list of predicates and handed to a single
``where()``, so the statement gets one WHERE clause joined with AND no matter
which filters are present. The minimum rating is checked after grouping
(HAVING), since it compares against the aggregated average.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from sqlalchemy import Select, func, insert, select

from lightbnb.db.models import Property, PropertyReview
from lightbnb.db.session import Database, get_database
from lightbnb.validation import PropertyCreate, PropertySearchOptions

logger = logging.getLogger(__name__)

SearchOptions = Union[PropertySearchOptions, Mapping[str, Any], None]


def _to_cents(amount: float) -> int:
    return int(round(amount * 100))


def _coerce_options(options: SearchOptions) -> PropertySearchOptions:
    if options is None:
        return PropertySearchOptions()
    if isinstance(options, PropertySearchOptions):
        return options
    return PropertySearchOptions.model_validate(dict(options))


def build_property_query(options: SearchOptions = None, limit: int = 10) -> Select:
    """Build the filtered, paginated property SELECT.

    Args:
        options: Search filters (model or plain mapping); None for no filters
        limit: Maximum number of rows, always the last bound parameter

    Returns:
        SQLAlchemy Select yielding property columns plus ``average_rating``,
        cheapest first
    """
    options = _coerce_options(options)
    average_rating = func.avg(PropertyReview.rating)

    predicates = []
    if options.owner_id is not None:
        predicates.append(Property.owner_id == options.owner_id)
    if options.city:
        predicates.append(Property.city.like(f"%{options.city}%"))
    if options.minimum_price_per_night is not None:
        predicates.append(Property.cost_per_night >= _to_cents(options.minimum_price_per_night))
    if options.maximum_price_per_night is not None:
        predicates.append(Property.cost_per_night <= _to_cents(options.maximum_price_per_night))

    stmt = (
        select(*Property.__table__.c, average_rating.label("average_rating"))
        .select_from(Property)
        .join(PropertyReview, PropertyReview.property_id == Property.id)
    )
    if predicates:
        stmt = stmt.where(*predicates)
    stmt = stmt.group_by(Property.id)
    if options.minimum_rating is not None:
        stmt = stmt.having(average_rating >= options.minimum_rating)

    return stmt.order_by(Property.cost_per_night.asc()).limit(limit)


async def get_all_properties(
    options: SearchOptions = None, limit: int = 10, db: Optional[Database] = None
) -> List[Dict[str, Any]]:
    """Get properties matching the search options.

    Example:
        >>> await get_all_properties({"city": "Vancouver", "minimum_rating": 4}, limit=5)
    """
    db = db or get_database()
    stmt = build_property_query(options, limit)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Property search: {stmt} {stmt.compile().params}")
    return await db.execute(stmt)


async def add_property(
    property: Union[PropertyCreate, Mapping[str, Any]], db: Optional[Database] = None
) -> Dict[str, Any]:
    """Add a property to the database and return the stored row.

    Args:
        property: Listing details (model or plain mapping)
        db: Optional Database (uses the shared one if None)

    Returns:
        The created property including its generated id

    Raises:
        ConstraintViolation: If owner_id does not reference an existing user
    """
    db = db or get_database()
    if not isinstance(property, PropertyCreate):
        property = PropertyCreate.model_validate(dict(property))

    stmt = (
        insert(Property.__table__)
        .values(**property.model_dump())
        .returning(*Property.__table__.c)
    )
    row = await db.fetch_one(stmt)
    logger.info(f"Created property {row['id']} for owner {row['owner_id']}")
    return row
