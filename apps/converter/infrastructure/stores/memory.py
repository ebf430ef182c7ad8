"""
In-memory state store for testing and development.
Nothing survives the process.
"""

from typing import Dict, Optional

from apps.converter.domain.interfaces import BaseStateStore


class InMemoryStateStore(BaseStateStore):
    """
    Dict-backed state store.
    Useful for:
    - Testing without a database
    - Running the converter without persistence
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self.values.get(key)

    def save(self, key: str, value: str) -> None:
        self.values[key] = value
