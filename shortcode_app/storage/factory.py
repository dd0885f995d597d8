"""
Factory for creating persistence instances.
"""

from enum import Enum
import logging

from .strategies import PersistenceStrategy, JsonFilePersistence, InMemoryPersistence, NullPersistence
from shortcode_app.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class PersistenceBackend(Enum):
    """Available persistence backends"""
    JSON = "json"
    MEMORY = "memory"
    NULL = "null"


class PersistenceFactory:
    """
    Simple factory for creating persistence instances.

    Gets configuration from settings (not passed as parameters).
    Instances are not cached here; the application wires one per Registry.
    """

    @classmethod
    def create(cls, backend: PersistenceBackend = None, config: Settings = None) -> PersistenceStrategy:
        """
        Create a persistence instance.

        Args:
            backend: Type of persistence backend (from enum).
                     If None, uses value from settings.
            config: Settings to read from (defaults to the global settings)

        Returns:
            PersistenceStrategy instance

        Raises:
            ValueError: If backend is unknown
        """
        config = config or default_settings
        if backend is None:
            backend = PersistenceBackend(config.persistence_backend)

        if backend == PersistenceBackend.JSON:
            instance = JsonFilePersistence(path=config.persistence_path)
            logger.info("JSON file persistence initialized at %s", config.persistence_path)

        elif backend == PersistenceBackend.MEMORY:
            instance = InMemoryPersistence()
            logger.info("In-memory persistence initialized")

        elif backend == PersistenceBackend.NULL:
            instance = NullPersistence()
            logger.info("Persistence disabled")

        else:
            raise ValueError(f"Unknown persistence backend: {backend}")

        return instance
