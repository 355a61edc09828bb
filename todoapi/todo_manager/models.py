"""
Data models for the Todo Manager component.
"""

from datetime import datetime
from enum import Enum
import uuid

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    """How demanding a todo item is."""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class Task(BaseModel):
    """
    A todo item owned by a single account.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    title: str
    description: str = ""
    difficulty: Difficulty = Difficulty.NORMAL
    is_done: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
