"""
Data models for the API Gateway component.

This module defines the request and response models exposed over HTTP.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field

from todoapi.account_manager.models import Account, ApiKey
from todoapi.todo_manager.models import Difficulty, Task


class SignUpRequest(BaseModel):
    """Request model for registering an account."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SignUpResponse(BaseModel):
    """Response model for a registered account. Never carries the password."""
    id: str
    username: str
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "SignUpResponse":
        return cls(id=account.id, username=account.username, created_at=account.created_at)


class ApiKeyRequest(BaseModel):
    """Request model for issuing an API key."""
    username: str
    password: str


class UpdateKeyStateRequest(BaseModel):
    """Request model for activating or deactivating an API key."""
    is_active: bool


class ApiKeyResponse(BaseModel):
    """Response model for API key data. The secret value is exposed as api_key."""
    id: str
    user_id: str
    api_key: str
    is_active: bool
    created_at: datetime

    @classmethod
    def from_api_key(cls, api_key: ApiKey) -> "ApiKeyResponse":
        return cls(
            id=api_key.id,
            user_id=api_key.user_id,
            api_key=api_key.key,
            is_active=api_key.is_active,
            created_at=api_key.created_at
        )


class CreateTodoItemRequest(BaseModel):
    """Request model for creating a todo item."""
    title: str = Field(..., min_length=1)
    description: str = ""
    difficulty: Difficulty = Difficulty.NORMAL


class UpdateTodoItemRequest(BaseModel):
    """Request model for replacing the editable fields of a todo item."""
    title: str = Field(..., min_length=1)
    description: str = ""
    difficulty: Difficulty = Difficulty.NORMAL


class TodoItemResponse(BaseModel):
    """Response model for a todo item."""
    id: str
    user_id: str
    title: str
    description: str
    difficulty: Difficulty
    is_done: bool
    created_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TodoItemResponse":
        return cls(**task.model_dump())


class SystemHealth(BaseModel):
    """System health status model."""
    status: str  # "healthy", "degraded"
    uptime_seconds: float
    components: Dict[str, Dict[str, Any]]
    resource_utilization: Dict[str, float]
    timestamp: datetime = Field(default_factory=datetime.now)
