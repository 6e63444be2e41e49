"""CLI entrypoint for the LightBnB data-access layer."""

import argparse
import asyncio
import json
import sys


def _print_json(data):
    print(json.dumps(data, indent=2, default=str))


def cmd_user(args):
    """Look up a user by email or id."""
    from lightbnb.repository import get_user_with_email, get_user_with_id

    if args.email:
        user = asyncio.run(get_user_with_email(args.email))
    else:
        user = asyncio.run(get_user_with_id(args.id))

    if user is None:
        print("✗ User not found")
        sys.exit(1)
    _print_json(user)


def cmd_properties(args):
    """Search properties."""
    from lightbnb.repository import get_all_properties

    options = {
        "owner_id": args.owner_id,
        "city": args.city,
        "minimum_price_per_night": args.min_price,
        "maximum_price_per_night": args.max_price,
        "minimum_rating": args.min_rating,
    }
    _print_json(asyncio.run(get_all_properties(options, limit=args.limit)))


def cmd_reservations(args):
    """List a guest's reservations."""
    from lightbnb.repository import get_all_reservations

    _print_json(asyncio.run(get_all_reservations(args.guest_id, limit=args.limit)))


def cmd_db(args):
    """Database management commands."""
    from sqlalchemy import func, select

    from lightbnb.db.models import Base
    from lightbnb.db.session import get_database, init_db

    db = get_database()

    if args.db_command == "init":
        init_db()
        print(f"✓ Tables created in {db.engine.url!r}")

    elif args.db_command == "info":
        print(f"Database URL: {db.engine.url!r}")
        print(f"Database Type: {db.engine.dialect.name}")
        print()
        print("Table Row Counts:")
        for table in Base.metadata.sorted_tables:
            row = asyncio.run(db.fetch_one(select(func.count().label("n")).select_from(table)))
            print(f"  {table.name}: {row['n']}")

    else:
        print("Usage: lightbnb db {init,info}")
        sys.exit(1)


def main():
    from lightbnb.config import settings, setup_logging
    from lightbnb.db.session import reset_database
    from pydantic import ValidationError

    from lightbnb.errors import RepositoryError

    parser = argparse.ArgumentParser(description="LightBnB data access")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log queries (DEBUG)")
    sub = parser.add_subparsers(dest="command")

    # user
    p_user = sub.add_parser("user", help="Look up a user")
    who = p_user.add_mutually_exclusive_group(required=True)
    who.add_argument("--email")
    who.add_argument("--id", type=int)
    p_user.set_defaults(func=cmd_user)

    # properties
    p_props = sub.add_parser("properties", help="Search properties")
    p_props.add_argument("--owner-id", type=int, default=None)
    p_props.add_argument("--city", default=None)
    p_props.add_argument("--min-price", type=float, default=None, help="Minimum price per night")
    p_props.add_argument("--max-price", type=float, default=None, help="Maximum price per night")
    p_props.add_argument("--min-rating", type=float, default=None)
    p_props.add_argument("--limit", type=int, default=settings.default_limit)
    p_props.set_defaults(func=cmd_properties)

    # reservations
    p_res = sub.add_parser("reservations", help="List a guest's reservations")
    p_res.add_argument("--guest-id", type=int, required=True)
    p_res.add_argument("--limit", type=int, default=settings.default_limit)
    p_res.set_defaults(func=cmd_reservations)

    # db
    p_db = sub.add_parser("db", help="Database management")
    db_sub = p_db.add_subparsers(dest="db_command")
    db_sub.add_parser("init", help="Create tables (development only)")
    db_sub.add_parser("info", help="Show database connection and row counts")
    p_db.set_defaults(func=cmd_db)

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        settings.log_level = "DEBUG"
    setup_logging()

    try:
        args.func(args)
    except RepositoryError as e:
        print(f"\n✗ {type(e).__name__}: {e}")
        sys.exit(1)
    except ValidationError as e:
        print(f"\n✗ Invalid input: {e}")
        sys.exit(1)
    finally:
        reset_database()


if __name__ == "__main__":
    main()
