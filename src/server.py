"""Protean Engine runner for the Forja domains.

Starts Engine workers that process events asynchronously:
- OutboxProcessor: polls outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes projectors and event handlers

Usage:
    python src/server.py                   # Run every domain engine
    python src/server.py --domain store    # Run only the store engine
"""

import argparse
import asyncio

import structlog
from protean.server.engine import Engine

DOMAIN_NAMES = ["identity", "catalogue", "store", "library"]

logger = structlog.get_logger(__name__)


def _get_domain(name):
    """Import and initialize a domain by name."""
    if name == "identity":
        from identity.domain import identity as domain
    elif name == "catalogue":
        from catalogue.domain import catalogue as domain
    elif name == "store":
        from store.domain import store as domain
    elif name == "library":
        from library.domain import library as domain
    else:
        raise ValueError(f"Unknown domain: {name}")

    domain.init()
    return domain


async def run(domain_names):
    engines = [Engine(_get_domain(name)) for name in domain_names]
    logger.info("Starting engines", domains=domain_names)
    await asyncio.gather(*(engine.run() for engine in engines))


def main():
    parser = argparse.ArgumentParser(description="Forja Engine runner")
    parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args()

    asyncio.run(run([args.domain] if args.domain else DOMAIN_NAMES))


if __name__ == "__main__":
    main()
