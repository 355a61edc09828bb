"""
Data models for the Account Manager component.
"""

from datetime import datetime
import uuid

from pydantic import BaseModel, Field


class Account(BaseModel):
    """
    A registered account, authenticated by username and password.

    The password is stored and compared as plain text.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    username: str
    password: str
    created_at: datetime = Field(default_factory=datetime.now)


class ApiKey(BaseModel):
    """
    An issued API key bound to exactly one account.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    key: str
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
