"""Initialize the link and category store"""

import logging

from linkshelf.configs import settings
from linkshelf.links.backends.memory import InMemoryStore
from linkshelf.links.backends.protocol import Store

logger = logging.getLogger(__name__)

store: Store | None = None


def init_store() -> Store:
    """Create the configured storage backend.

    This should only be called once at the startup of application.
    """
    global store

    match settings["store"].backend:
        case "memory":
            store = InMemoryStore()
        case _:
            raise ValueError(f"Unknown store backend: {settings['store'].backend}")

    logger.info("Store initialized", extra={"backend": settings["store"].backend})
    return store


async def shutdown_store() -> None:
    """Shut down the store and forget it."""
    global store

    if store is not None:
        await store.shutdown()
        store = None


def get_store() -> Store:
    """Return the store"""
    if store is None:
        raise ValueError("Store has not been initialized.")
    return store
