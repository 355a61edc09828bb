"""
Shared fixtures for the todo API tests.
"""

import pytest

from todoapi.account_manager.models import Account
from todoapi.config import Settings
from todoapi.storage import InMemoryAccountStore, InMemoryKeyStore, InMemoryTaskStore, Stores


ALICE_PASSWORD = "alice-password"


@pytest.fixture
def test_settings():
    """Settings with a small API key limit and in-memory storage."""
    return Settings(api_key_limit=2, storage_backend="memory")


@pytest.fixture
def alice():
    """An existing account."""
    return Account(username="alice", password=ALICE_PASSWORD)


@pytest.fixture
def bob():
    """A second existing account."""
    return Account(username="bob", password="bob-password")


@pytest.fixture
def account_store(alice, bob):
    return InMemoryAccountStore([alice, bob])


@pytest.fixture
def key_store():
    return InMemoryKeyStore()


@pytest.fixture
def task_store():
    return InMemoryTaskStore()


@pytest.fixture
def stores(account_store, key_store, task_store):
    return Stores(accounts=account_store, api_keys=key_store, tasks=task_store)
