"""
Store Registry - Maps the CONVERTER_STATE_STORE setting to store classes.
"""

import logging

from core.settings import CONVERTER_STATE_STORE
from apps.converter.domain.interfaces import BaseStateStore
from apps.converter.infrastructure.stores.database import DatabaseStateStore
from apps.converter.infrastructure.stores.memory import InMemoryStateStore

logger = logging.getLogger(__name__)

# Registry: Maps backend name to the corresponding store class
STATE_STORE_REGISTRY: dict[str, type[BaseStateStore]] = {
    "database": DatabaseStateStore,
    "memory": InMemoryStateStore,
}

_shared_stores: dict[str, BaseStateStore] = {}


def get_state_store(backend: str | None = None) -> BaseStateStore:
    """
    Get the state store for a backend name.

    Args:
        backend: Name from STATE_STORE_REGISTRY; defaults to CONVERTER_STATE_STORE

    Returns:
        Store instance. One instance is shared per backend so the memory
        store keeps its values between requests.

    Raises:
        ValueError: If the backend is not registered
    """
    backend = backend or CONVERTER_STATE_STORE
    store_class = STATE_STORE_REGISTRY.get(backend)

    if store_class is None:
        raise ValueError(
            f"Unknown state store '{backend}'. Choose one of: {', '.join(sorted(STATE_STORE_REGISTRY))}"
        )

    if backend not in _shared_stores:
        logger.info("Using %s state store", backend)
        _shared_stores[backend] = store_class()

    return _shared_stores[backend]
