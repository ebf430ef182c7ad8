import logging

from django.db import DatabaseError

from apps.converter.domain.interfaces import BaseStateStore
from apps.converter.infrastructure.persistence.repositories import StoredValueRepository

logger = logging.getLogger(__name__)


class DatabaseStateStore(BaseStateStore):
    """
    State store backed by the StoredValue table.
    Storage failures are logged and never raised to the caller.
    """

    def load(self, key: str) -> str | None:
        """
        Read a stored value.

        Args:
            key: Storage key (e.g. "usdRate")

        Returns:
            The stored text, or None if missing or the database failed
        """
        try:
            return StoredValueRepository.get_value(key)
        except DatabaseError as e:
            logger.error("Failed to load '%s' from the database: %s", key, e)
            return None

    def save(self, key: str, value: str) -> None:
        """Write a value. Fire-and-forget: errors are only logged."""
        try:
            StoredValueRepository.set_value(key, value)
        except DatabaseError as e:
            logger.error("Failed to save '%s' to the database: %s", key, e)
