"""Domain initialization and configuration."""

from protean.domain import Domain

from shared.logging import get_logger

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
ordering = Domain(name="ordering")
