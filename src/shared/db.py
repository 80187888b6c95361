"""Schema management for SQL-backed providers.

Protean builds its SQLAlchemy models lazily, the first time a repository's
DAO is touched. Every registered aggregate, entity and projection is
touched here so that ``create_all`` sees the complete metadata.
"""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _touch_daos(domain: Domain, provider) -> None:
    records = [
        *domain.registry.aggregates.values(),
        *domain.registry.entities.values(),
        *domain.registry.projections.values(),
    ]
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018

    # Outbox tables are registered internally, outside the registry
    if hasattr(domain, "_outbox_repos") and provider.name in domain._outbox_repos:
        domain._outbox_repos[provider.name]._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create database tables for every SQL provider of the domain."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in SQL_PROVIDERS:
                continue

            engine = create_engine(provider.conn_info["database_uri"])
            _touch_daos(domain, provider)
            provider._metadata.create_all(engine)
            logger.info("Database schema created", domain=domain.name, provider=provider.name)


def drop_db(domain: Domain) -> None:
    """Drop database tables for every SQL provider of the domain."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in SQL_PROVIDERS:
                continue

            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            logger.info("Database schema dropped", domain=domain.name, provider=provider.name)
