"""Shopfront database management CLI.

Creates and drops the database schema for the shopfront domain. The
target database comes from the active ``PROTEAN_ENV`` overlay in
``domain.toml`` (PostgreSQL via ``DATABASE_URL`` in production).

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the shopfront domain."""
    import shopfront.elements  # noqa: F401
    from shopfront.domain import shopfront
    from shopfront.utils.db import setup_db

    print("Initializing shopfront domain...")
    shopfront.init()
    print("Creating database schema...")
    setup_db(shopfront)
    print("Done.")


def drop_database():
    """Drop the database schema for the shopfront domain."""
    import shopfront.elements  # noqa: F401
    from shopfront.domain import shopfront
    from shopfront.utils.db import drop_db

    print("Initializing shopfront domain...")
    shopfront.init()
    print("Dropping database schema...")
    drop_db(shopfront)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Shopfront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
