"""
Persistence module for registry snapshots.

This module implements the Strategy Pattern for pluggable persistence.
The registry stays the source of truth; backends only hold snapshots of it.
"""

from .strategies import PersistenceStrategy, JsonFilePersistence, InMemoryPersistence, NullPersistence
from .factory import PersistenceFactory, PersistenceBackend

__all__ = [
    "PersistenceStrategy",
    "JsonFilePersistence",
    "InMemoryPersistence",
    "NullPersistence",
    "PersistenceFactory",
    "PersistenceBackend",
]
