"""
In-memory store implementations.

Records are copied on the way in and out so callers never share state with
the store, the same as with a real database.
"""

import logging
from typing import Dict, Iterable, List, Optional

from todoapi.account_manager.models import Account, ApiKey
from todoapi.storage.base import AccountStore, KeyStore, TaskStore
from todoapi.todo_manager.models import Task


logger = logging.getLogger(__name__)


class InMemoryAccountStore(AccountStore):
    """Account store backed by a dict keyed on account id."""

    def __init__(self, accounts: Optional[Iterable[Account]] = None):
        self.accounts: Dict[str, Account] = {}
        for account in accounts or []:
            self.accounts[account.id] = account.model_copy()

    async def find(self, username: str) -> Optional[Account]:
        for account in self.accounts.values():
            if account.username == username:
                return account.model_copy()
        return None

    async def insert(self, account: Account) -> None:
        self.accounts[account.id] = account.model_copy()


class InMemoryKeyStore(KeyStore):
    """API key store backed by a dict keyed on key id."""

    def __init__(self, api_keys: Optional[Iterable[ApiKey]] = None):
        self.api_keys: Dict[str, ApiKey] = {}
        for api_key in api_keys or []:
            self.api_keys[api_key.id] = api_key.model_copy()

    async def find(self, key_id: str) -> Optional[ApiKey]:
        api_key = self.api_keys.get(key_id)
        return api_key.model_copy() if api_key else None

    async def find_by_owner(self, user_id: str) -> List[ApiKey]:
        return [
            api_key.model_copy()
            for api_key in self.api_keys.values()
            if api_key.user_id == user_id
        ]

    async def find_by_value(self, key: str) -> Optional[ApiKey]:
        for api_key in self.api_keys.values():
            if api_key.key == key:
                return api_key.model_copy()
        return None

    async def insert(self, api_key: ApiKey) -> None:
        self.api_keys[api_key.id] = api_key.model_copy()

    async def set_active(self, key_id: str, is_active: bool) -> None:
        self.api_keys[key_id].is_active = is_active


class InMemoryTaskStore(TaskStore):
    """Task store backed by a dict keyed on task id."""

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self.tasks: Dict[str, Task] = {}
        for task in tasks or []:
            self.tasks[task.id] = task.model_copy()

    async def find(self, task_id: str, owner_id: str) -> Optional[Task]:
        task = self.tasks.get(task_id)
        if task is None or task.user_id != owner_id:
            return None
        return task.model_copy()

    async def find_by_owner(self, owner_id: str) -> List[Task]:
        return [task.model_copy() for task in self.tasks.values() if task.user_id == owner_id]

    async def upsert(self, task: Task) -> int:
        self.tasks[task.id] = task.model_copy()
        return 1

    async def delete(self, task_id: str) -> None:
        self.tasks.pop(task_id, None)
