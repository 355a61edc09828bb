"""
Todo Management component.

Create, read, update, toggle and delete todo items scoped to their owner.
"""

from todoapi.todo_manager.manager import TaskResourceManager
from todoapi.todo_manager.models import Difficulty, Task

__all__ = ["TaskResourceManager", "Difficulty", "Task"]
