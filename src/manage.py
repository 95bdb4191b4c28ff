"""SweetShop database management CLI.

Creates and drops every domain's tables, and seeds the default content.

Usage:
    python src/manage.py setup-db     # Create all tables
    python src/manage.py drop-db      # Drop all tables
    python src/manage.py initialize   # Seed content, catalog and payment gateways
"""

import argparse
import sys

from content.domain import content
from identity.domain import identity
from ordering.domain import ordering
from shared.config import get_settings
from shared.database import configure_domain, drop_db, init_domains
from shared.logging import configure_logging

DOMAINS = (identity, ordering, content)


def _settings(database_url=None):
    settings = get_settings()
    if database_url:
        settings = settings.model_copy(update={"database_url": database_url})
    configure_logging(settings.env, settings.log_level, settings.log_dir)
    return settings


def setup_database(database_url=None):
    """Create the tables of every domain."""
    settings = _settings(database_url)
    print("Creating database tables...")
    init_domains(DOMAINS, settings)
    print("Done.")


def drop_database(database_url=None):
    """Drop the tables of every domain and everything in them."""
    settings = _settings(database_url)
    print("Dropping database tables...")
    for domain in DOMAINS:
        configure_domain(domain, settings)
        domain.init()
        drop_db(domain)
    print("Done.")


def initialize_content(database_url=None):
    """Seed the content document, the starter catalog and the payment gateways."""
    from content import management
    from content.gateways import configuration
    from content.management import InitializeContent

    init_domains(DOMAINS, _settings(database_url))

    with content.domain_context():
        management.load()
        if content.process(InitializeContent(), asynchronous=False):
            print("Default data initialized successfully")
        else:
            print("Data already initialized")

        gateways = configuration.list_gateways()
        print(f"  {len(gateways)} payment gateways configured.")
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="SweetShop database management")
    parser.add_argument("--database-url", help="Override SWEETSHOP_DATABASE_URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all tables")
    subparsers.add_parser("drop-db", help="Drop all tables")
    subparsers.add_parser("initialize", help="Seed default content")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database(args.database_url)
    elif args.command == "drop-db":
        drop_database(args.database_url)
    elif args.command == "initialize":
        initialize_content(args.database_url)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
