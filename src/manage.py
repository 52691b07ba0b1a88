"""Storefront database management CLI.

Creates and drops the address book and order tables on every relational
provider configured for the storefront domain.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def _init_domain():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_databases():
    """Create the storefront schema."""
    from storefront.utils.db import setup_db

    domain = _init_domain()
    print("Creating storefront database schema...")
    created = setup_db(domain)
    if created:
        print(f"  schema ready on: {', '.join(created)}")
    else:
        print("  no relational provider configured, nothing to create.")

    print("Done.")


def drop_databases():
    """Drop the storefront schema."""
    from storefront.utils.db import drop_db

    domain = _init_domain()
    print("Dropping storefront database schema...")
    dropped = drop_db(domain)
    if dropped:
        print(f"  schema dropped on: {', '.join(dropped)}")
    else:
        print("  no relational provider configured, nothing to drop.")

    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
