"""Adapters — data-access bindings for the command engine.

Public re-exports for convenient access.
"""

from distrocmd.adapters.base import CatalogReader
from distrocmd.adapters.memory import InMemoryCatalog

__all__ = [
    "CatalogReader",
    "InMemoryCatalog",
]
