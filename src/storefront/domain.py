"""Storefront domain — product catalogue, shopping cart and order history.

A single bounded context backing the storefront clients: catalogue lookups
and stock reservation, cart arithmetic, and the order lifecycle.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
