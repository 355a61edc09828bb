"""
API endpoints for todo items.

Every route resolves the caller from the API key header first and only ever
touches that caller's items.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from todoapi.api_gateway.auth import get_current_user_id
from todoapi.api_gateway.dependencies import get_task_manager
from todoapi.api_gateway.models import (
    CreateTodoItemRequest,
    TodoItemResponse,
    UpdateTodoItemRequest
)
from todoapi.todo_manager.manager import TaskResourceManager


# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={401: {"description": "Missing or invalid API key"}, 404: {"description": "Not found"}}
)


@router.get("", response_model=List[TodoItemResponse])
async def get_all_todo_items(
    user_id: str = Depends(get_current_user_id),
    manager: TaskResourceManager = Depends(get_task_manager)
):
    """List the caller's todo items."""
    tasks = await manager.list_owned(user_id)
    return [TodoItemResponse.from_task(task) for task in tasks]


@router.get("/{task_id}", response_model=TodoItemResponse)
async def get_todo_item(
    task_id: str = Path(..., description="The todo item ID"),
    user_id: str = Depends(get_current_user_id),
    manager: TaskResourceManager = Depends(get_task_manager)
):
    """Get one of the caller's todo items."""
    task = await manager.get_owned(task_id, user_id)
    return TodoItemResponse.from_task(task)


@router.post("", response_model=TodoItemResponse, status_code=status.HTTP_201_CREATED)
async def create_todo_item(
    request: CreateTodoItemRequest,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    manager: TaskResourceManager = Depends(get_task_manager)
):
    """
    Create a todo item for the caller.

    Returns:
        The created todo item, with a Location header pointing at it
    """
    task = await manager.create(user_id, request.title, request.description, request.difficulty)
    response.headers["Location"] = f"{router.prefix}/{task.id}"
    return TodoItemResponse.from_task(task)


@router.put("/{task_id}", response_model=TodoItemResponse)
async def update_todo_item(
    request: UpdateTodoItemRequest,
    task_id: str = Path(..., description="The todo item ID"),
    user_id: str = Depends(get_current_user_id),
    manager: TaskResourceManager = Depends(get_task_manager)
):
    """Replace the title, description and difficulty of a todo item."""
    task = await manager.update(task_id, user_id, request.title, request.description, request.difficulty)
    return TodoItemResponse.from_task(task)


@router.patch("/{task_id}/status", response_model=TodoItemResponse)
async def update_todo_item_status(
    task_id: str = Path(..., description="The todo item ID"),
    user_id: str = Depends(get_current_user_id),
    manager: TaskResourceManager = Depends(get_task_manager)
):
    """Toggle a todo item between pending and done."""
    task = await manager.toggle_done(task_id, user_id)
    return TodoItemResponse.from_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo_item(
    task_id: str = Path(..., description="The todo item ID"),
    user_id: str = Depends(get_current_user_id),
    manager: TaskResourceManager = Depends(get_task_manager)
):
    """Delete one of the caller's todo items."""
    await manager.delete(task_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
