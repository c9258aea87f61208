"""Tablerank database management CLI.

Creates and drops the relational schema of the dining domain when it runs
against PostgreSQL or SQLite (``PROTEAN_ENV=production``).

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_databases():
    """Create the dining database schema."""
    from dining.domain import dining
    from dining.utils.db import setup_db

    print("Initializing dining domain...")
    dining.init()
    print("Creating dining database schema...")
    setup_db(dining)
    print("Done.")


def drop_databases():
    """Drop the dining database schema."""
    from dining.domain import dining
    from dining.utils.db import drop_db

    print("Initializing dining domain...")
    dining.init()
    print("Dropping dining database schema...")
    drop_db(dining)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Tablerank database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
