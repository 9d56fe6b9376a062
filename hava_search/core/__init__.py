"""
Core Layer - Core business logic.

This package contains:
- Configuration management (settings.py)
- Listing data type (types.py)
- Query engine (free-text interpretation and SQL building)
- Trace collection
"""

from hava_search.core.types import Listing

__all__ = ["Listing"]
