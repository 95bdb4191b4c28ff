"""Database wiring for the protean domains.

Every domain stores its aggregates through the provider named by
``SWEETSHOP_DATABASE_URL``: ``memory://`` selects protean's in-memory
provider, any SQLite or PostgreSQL URL selects the matching SQLAlchemy
provider.
"""

from protean.domain import Domain
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from shared.config import Settings
from shared.logging import get_logger

logger = get_logger(__name__)


def database_config(database_url: str, pool_timeout: int = 10) -> dict:
    """Translate a database URL into a protean ``databases.default`` entry."""
    if database_url.startswith("memory://"):
        return {"provider": "memory"}

    url = make_url(database_url)
    backend = url.get_backend_name()

    if backend == "sqlite":
        # Requests are served from a worker thread pool
        config = {
            "provider": "sqlite",
            "database_uri": database_url,
            "connect_args": {"check_same_thread": False},
        }
        if url.database in (None, "", ":memory:"):
            # One shared connection, or every checkout sees an empty database
            config["poolclass"] = StaticPool
        else:
            config["pool_timeout"] = pool_timeout
        return config

    if backend == "postgresql":
        return {
            "provider": "postgresql",
            "database_uri": database_url,
            "pool_timeout": pool_timeout,
            "pool_pre_ping": True,
        }

    raise ValueError(f"Unsupported database URL: {database_url!r}")


def configure_domain(domain: Domain, settings: Settings) -> None:
    """Point ``domain`` at the configured database and pricing.

    Must run before ``domain.init()``, which builds the providers.
    """
    domain.config["databases"]["default"] = database_config(settings.database_url, settings.pool_timeout)
    domain.config["custom"] = {
        **domain.config.get("custom", {}),
        "delivery_fee": settings.delivery_fee,
        "free_delivery_threshold": settings.free_delivery_threshold,
    }


def init_domains(domains, settings: Settings) -> None:
    """Configure and initialize each domain, then create its tables."""
    for domain in domains:
        configure_domain(domain, settings)
        domain.init()
        setup_db(domain)
        logger.debug("Domain initialized", domain=domain.name, provider=domain.config["databases"]["default"]["provider"])


def setup_db(domain: Domain) -> None:
    """Create the tables of every aggregate in ``domain``."""
    with domain.domain_context():
        domain.setup_database()


def drop_db(domain: Domain) -> None:
    """Drop the tables of every aggregate in ``domain``."""
    with domain.domain_context():
        domain.drop_database()
