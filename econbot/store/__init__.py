"""Store package — SQLite-backed economy store."""

from typing import Optional

from aiosqlite import Error as StorageFailure

from .base import DataSource
from .sqlite_store import AlreadyInitialized, EconomyStore

__all__ = [
    "AlreadyInitialized",
    "DataSource",
    "EconomyStore",
    "StorageFailure",
    "init_store",
    "get_store",
    "close_store",
]

store: Optional[EconomyStore] = None


async def init_store(data_file: Optional[str] = None) -> EconomyStore:
    """Open the process-wide economy store and create its tables."""
    global store
    store = EconomyStore()
    await store.initialize(data_file)
    return store


def get_store() -> EconomyStore:
    """Return the economy store opened by init_store()."""
    if store is None:
        raise RuntimeError("Store not initialized. Call init_store() first.")
    return store


async def close_store() -> None:
    """Close and drop the global store."""
    global store
    if store is not None:
        await store.close()
        store = None
