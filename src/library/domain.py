"""Library bounded context — owned games, achievements, reviews and wishlists.

Ownership is granted from Store payment events; everything else in the
context hangs off "does this user own this game".
"""

import structlog
from protean.domain import Domain
from shared.logging import configure_logging

configure_logging()

library = Domain(name="library")

logger = structlog.get_logger(__name__)
