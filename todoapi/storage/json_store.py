"""
JSON-file backed stores.

Each store keeps its records in memory and rewrites a single JSON file after
every mutation. Suitable for a single-process deployment.

A mutation whose write fails is rolled back in memory before the StorageError
propagates, so memory never holds records the file does not.
"""

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, List

from todoapi.account_manager.models import Account, ApiKey
from todoapi.storage.memory import InMemoryAccountStore, InMemoryKeyStore, InMemoryTaskStore
from todoapi.todo_manager.models import Difficulty, Task
from todoapi.utils.error_handling import ErrorContext, StorageError


logger = logging.getLogger(__name__)

ACCOUNTS_FILE = "accounts.json"
API_KEYS_FILE = "api_keys.json"
TASKS_FILE = "tasks.json"


def _read_records(path: str) -> List[Dict[str, Any]]:
    """Read a list of records, or nothing if the file does not exist yet."""
    if not os.path.exists(path):
        return []

    with ErrorContext("json_store", f"Failed to load {path}", StorageError):
        with open(path, 'r') as f:
            records = json.load(f)

        # Convert timestamp strings to datetime
        for record in records:
            if record.get("created_at") is not None:
                record["created_at"] = datetime.fromisoformat(record["created_at"])

    return records


def _write_records(path: str, records: List[Dict[str, Any]]) -> None:
    """Replace the file contents with the given records."""
    for record in records:
        if record.get("created_at") is not None:
            record["created_at"] = record["created_at"].isoformat()

    tmp_path = f"{path}.tmp"
    with ErrorContext("json_store", f"Failed to save {path}", StorageError):
        with open(tmp_path, 'w') as f:
            json.dump(records, f, indent=2)
        os.replace(tmp_path, path)


def _restore(records: Dict[str, Any], snapshot: Dict[str, Any]) -> None:
    records.clear()
    records.update(snapshot)


class JsonAccountStore(InMemoryAccountStore):
    """Account store persisted to accounts.json."""

    def __init__(self, data_dir: str):
        super().__init__()
        os.makedirs(data_dir, exist_ok=True)
        self.path = os.path.join(data_dir, ACCOUNTS_FILE)

        records = _read_records(self.path)
        with ErrorContext("json_store", f"Invalid record in {self.path}", StorageError):
            for account_data in records:
                account = Account(**account_data)
                self.accounts[account.id] = account

        logger.info(f"Loaded {len(self.accounts)} accounts")

    async def insert(self, account: Account) -> None:
        snapshot = dict(self.accounts)
        await super().insert(account)
        try:
            self._save()
        except StorageError:
            _restore(self.accounts, snapshot)
            raise

    def _save(self) -> None:
        _write_records(self.path, [account.model_dump() for account in self.accounts.values()])


class JsonKeyStore(InMemoryKeyStore):
    """API key store persisted to api_keys.json."""

    def __init__(self, data_dir: str):
        super().__init__()
        os.makedirs(data_dir, exist_ok=True)
        self.path = os.path.join(data_dir, API_KEYS_FILE)

        records = _read_records(self.path)
        with ErrorContext("json_store", f"Invalid record in {self.path}", StorageError):
            for key_data in records:
                api_key = ApiKey(**key_data)
                self.api_keys[api_key.id] = api_key

        logger.info(f"Loaded {len(self.api_keys)} API keys")

    async def insert(self, api_key: ApiKey) -> None:
        snapshot = dict(self.api_keys)
        await super().insert(api_key)
        try:
            self._save()
        except StorageError:
            _restore(self.api_keys, snapshot)
            raise

    async def set_active(self, key_id: str, is_active: bool) -> None:
        # set_active changes the stored record in place, so copy the records too
        snapshot = {k: api_key.model_copy() for k, api_key in self.api_keys.items()}
        await super().set_active(key_id, is_active)
        try:
            self._save()
        except StorageError:
            _restore(self.api_keys, snapshot)
            raise

    def _save(self) -> None:
        _write_records(self.path, [api_key.model_dump() for api_key in self.api_keys.values()])


class JsonTaskStore(InMemoryTaskStore):
    """Task store persisted to tasks.json."""

    def __init__(self, data_dir: str):
        super().__init__()
        os.makedirs(data_dir, exist_ok=True)
        self.path = os.path.join(data_dir, TASKS_FILE)

        records = _read_records(self.path)
        with ErrorContext("json_store", f"Invalid record in {self.path}", StorageError):
            for task_data in records:
                task_data["difficulty"] = Difficulty(task_data["difficulty"])
                task = Task(**task_data)
                self.tasks[task.id] = task

        logger.info(f"Loaded {len(self.tasks)} tasks")

    async def upsert(self, task: Task) -> int:
        snapshot = dict(self.tasks)
        rows_affected = await super().upsert(task)
        try:
            self._save()
        except StorageError:
            _restore(self.tasks, snapshot)
            raise
        return rows_affected

    async def delete(self, task_id: str) -> None:
        snapshot = dict(self.tasks)
        await super().delete(task_id)
        try:
            self._save()
        except StorageError:
            _restore(self.tasks, snapshot)
            raise

    def _save(self) -> None:
        records = []
        for task in self.tasks.values():
            task_dict = task.model_dump()
            task_dict["difficulty"] = task.difficulty.value
            records.append(task_dict)
        _write_records(self.path, records)
