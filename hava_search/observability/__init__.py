"""
Observability Layer.

Logging helpers shared by every component.
"""

from hava_search.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
