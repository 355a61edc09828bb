"""
Store interfaces consumed by the services.

Each store persists one record type. Atomicity of individual reads and
writes is the store's responsibility; the services hold no locks.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from todoapi.account_manager.models import Account, ApiKey
from todoapi.todo_manager.models import Task


class AccountStore(ABC):
    """Account records, looked up by username."""

    @abstractmethod
    async def find(self, username: str) -> Optional[Account]:
        """Return the account with this exact username, or None."""

    @abstractmethod
    async def insert(self, account: Account) -> None:
        """Persist a new account."""


class KeyStore(ABC):
    """API key records."""

    @abstractmethod
    async def find(self, key_id: str) -> Optional[ApiKey]:
        """Return the API key with this id, or None."""

    @abstractmethod
    async def find_by_owner(self, user_id: str) -> List[ApiKey]:
        """Return every API key owned by the account."""

    @abstractmethod
    async def find_by_value(self, key: str) -> Optional[ApiKey]:
        """Return the API key whose secret value matches, or None."""

    @abstractmethod
    async def insert(self, api_key: ApiKey) -> None:
        """Persist a new API key."""

    @abstractmethod
    async def set_active(self, key_id: str, is_active: bool) -> None:
        """Overwrite the active flag of an existing API key."""


class TaskStore(ABC):
    """Task records, always read through their owner."""

    @abstractmethod
    async def find(self, task_id: str, owner_id: str) -> Optional[Task]:
        """Return the task only if it exists and belongs to owner_id."""

    @abstractmethod
    async def find_by_owner(self, owner_id: str) -> List[Task]:
        """Return every task owned by the account."""

    @abstractmethod
    async def upsert(self, task: Task) -> int:
        """
        Insert or replace a task by id.

        Returns:
            Number of affected rows
        """

    @abstractmethod
    async def delete(self, task_id: str) -> None:
        """Remove the task with this id."""
