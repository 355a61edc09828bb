"""
Storage component.

Persists accounts, API keys and todo items behind narrow async interfaces.
"""

import logging
from typing import NamedTuple

from todoapi.storage.base import AccountStore, KeyStore, TaskStore
from todoapi.storage.memory import InMemoryAccountStore, InMemoryKeyStore, InMemoryTaskStore
from todoapi.storage.json_store import JsonAccountStore, JsonKeyStore, JsonTaskStore


logger = logging.getLogger(__name__)


class Stores(NamedTuple):
    """The three stores a running service needs."""
    accounts: AccountStore
    api_keys: KeyStore
    tasks: TaskStore


def build_stores(backend: str = "memory", data_dir: str = "data") -> Stores:
    """
    Create the stores for the configured backend.

    Args:
        backend: "memory" or "json"
        data_dir: Directory for the JSON files

    Returns:
        Stores for accounts, API keys and tasks
    """
    if backend == "json":
        logger.info(f"Using JSON storage in {data_dir}")
        return Stores(
            accounts=JsonAccountStore(data_dir),
            api_keys=JsonKeyStore(data_dir),
            tasks=JsonTaskStore(data_dir)
        )

    logger.info("Using in-memory storage")
    return Stores(
        accounts=InMemoryAccountStore(),
        api_keys=InMemoryKeyStore(),
        tasks=InMemoryTaskStore()
    )


__all__ = [
    "AccountStore",
    "KeyStore",
    "TaskStore",
    "InMemoryAccountStore",
    "InMemoryKeyStore",
    "InMemoryTaskStore",
    "JsonAccountStore",
    "JsonKeyStore",
    "JsonTaskStore",
    "Stores",
    "build_stores"
]
