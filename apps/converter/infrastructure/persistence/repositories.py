"""
Repository pattern implementation.
Abstracts database access to decouple domain logic from persistence.
"""

from typing import Optional

from apps.converter.infrastructure.persistence.models import StoredValue


class StoredValueRepository:
    """Repository for StoredValue entries."""

    @staticmethod
    def get_value(key: str) -> Optional[str]:
        """Get the value stored under key."""
        entry = StoredValue.objects.filter(key=key).first()
        return entry.value if entry else None

    @staticmethod
    def set_value(key: str, value: str) -> StoredValue:
        """Create or overwrite the value stored under key."""
        entry, _ = StoredValue.objects.update_or_create(
            key=key,
            defaults={"value": value}
        )
        return entry
