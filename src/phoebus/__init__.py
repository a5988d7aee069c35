"""
Phoebus
People, pets and breeds: a query-only GraphQL schema contract
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
