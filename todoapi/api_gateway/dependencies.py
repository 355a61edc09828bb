"""
FastAPI dependencies that hand the services stored on app.state to routes.
"""

from fastapi import Request

from todoapi.account_manager.manager import AccountService, CredentialService
from todoapi.todo_manager.manager import TaskResourceManager


def get_account_service(request: Request) -> AccountService:
    """Get the account service instance."""
    return request.app.state.account_service


def get_credential_service(request: Request) -> CredentialService:
    """Get the credential service instance."""
    return request.app.state.credential_service


def get_task_manager(request: Request) -> TaskResourceManager:
    """Get the todo item manager instance."""
    return request.app.state.task_manager
