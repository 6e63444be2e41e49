"""Shared fixtures for the test suite."""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from lightbnb.db.models import Base, Property, PropertyReview, Reservation, User
from lightbnb.db.session import Database, get_engine


@pytest.fixture
def db_engine(tmp_path):
    """Create a file-backed SQLite engine with all tables."""
    engine = get_engine(f"sqlite:///{tmp_path / 'lightbnb.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(db_engine):
    """Database bound to the test engine."""
    database = Database(engine=db_engine)
    yield database
    database.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create a database session for seeding."""
    with Session(db_engine) as session:
        yield session


def make_user(name="Eva Stanley", email=None, password="$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u.", **kwargs) -> User:
    """Factory for creating test User instances."""
    email = email or f"{name.lower().replace(' ', '.')}@example.com"
    return User(name=name, email=email, password=password, **kwargs)


def make_property(owner, title="Speed lamp", city="Vancouver", cost_per_night=9300, **kwargs) -> Property:
    """Factory for creating test Property instances."""
    defaults = dict(
        owner=owner,
        title=title,
        description="description",
        thumbnail_photo_url="https://images.example.com/thumb.jpg",
        cover_photo_url="https://images.example.com/cover.jpg",
        cost_per_night=cost_per_night,
        street="536 Namsub Highway",
        city=city,
        province="British Columbia",
        post_code="41725",
        country="Canada",
        parking_spaces=1,
        number_of_bathrooms=1,
        number_of_bedrooms=2,
    )
    defaults.update(kwargs)
    return Property(**defaults)


def property_payload(owner_id, **kwargs) -> dict:
    """Plain insert payload for add_property."""
    payload = dict(
        owner_id=owner_id,
        title="Harbour view",
        description="Two blocks from the seawall",
        thumbnail_photo_url="https://images.example.com/harbour-thumb.jpg",
        cover_photo_url="https://images.example.com/harbour.jpg",
        cost_per_night=12500,
        street="1 Harbour Way",
        city="Vancouver",
        province="British Columbia",
        post_code="V6B 1A1",
        country="Canada",
        parking_spaces=2,
        number_of_bathrooms=1,
        number_of_bedrooms=3,
    )
    payload.update(kwargs)
    return payload


@pytest.fixture
def sample_data(db_session):
    """Users, properties, reviews and reservations for query tests.

    Reviewed properties by cost: Blank corner 4500, Port out 5000,
    Speed lamp 9300, Island cabin 12000, Habit mix 15000, Headed know 20000.
    "No reviews" (1000) has no reviews and never appears in joined results.
    Returns the generated ids keyed by name.
    """
    eva = make_user("Eva Stanley")
    louisa = make_user("Louisa Meyer")
    dominic = make_user("Dominic Parks")
    db_session.add_all([eva, louisa, dominic])
    db_session.flush()

    props = {
        "speed_lamp": make_property(eva, "Speed lamp", "Vancouver", 9300),
        "blank_corner": make_property(eva, "Blank corner", "North Vancouver", 4500),
        "habit_mix": make_property(louisa, "Habit mix", "Toronto", 15000),
        "headed_know": make_property(louisa, "Headed know", "Calgary", 20000),
        "port_out": make_property(louisa, "Port out", "Vancouver", 5000),
        "no_reviews": make_property(louisa, "No reviews", "Vancouver", 1000),
        "island_cabin": make_property(louisa, "Island cabin", "Victoria", 12000),
    }
    db_session.add_all(props.values())
    db_session.flush()

    ratings = {
        "speed_lamp": [5, 4],
        "blank_corner": [3],
        "habit_mix": [4, 4],
        "headed_know": [2],
        "port_out": [5],
        "island_cabin": [3],
    }
    for key, values in ratings.items():
        for rating in values:
            db_session.add(PropertyReview(guest_id=dominic.id, property_id=props[key].id, rating=rating))

    reservations = {
        "eva_habit_mix": Reservation(
            guest_id=eva.id, property_id=props["habit_mix"].id,
            start_date=date(2023, 3, 1), end_date=date(2023, 3, 5),
        ),
        "eva_port_out": Reservation(
            guest_id=eva.id, property_id=props["port_out"].id,
            start_date=date(2022, 11, 10), end_date=date(2022, 11, 12),
        ),
        "eva_no_reviews": Reservation(
            guest_id=eva.id, property_id=props["no_reviews"].id,
            start_date=date(2023, 1, 1), end_date=date(2023, 1, 3),
        ),
        "eva_headed_know": Reservation(
            guest_id=eva.id, property_id=props["headed_know"].id,
            start_date=date(2024, 1, 1), end_date=date(2024, 1, 8),
        ),
        "louisa_speed_lamp": Reservation(
            guest_id=louisa.id, property_id=props["speed_lamp"].id,
            start_date=date(2023, 6, 1), end_date=date(2023, 6, 4),
        ),
    }
    db_session.add_all(reservations.values())
    db_session.flush()

    # Plain ids so tests never touch expired ORM instances
    ids = {
        "users": {"eva": eva.id, "louisa": louisa.id, "dominic": dominic.id},
        "properties": {key: p.id for key, p in props.items()},
        "reservations": {key: r.id for key, r in reservations.items()},
    }
    db_session.commit()
    return ids
