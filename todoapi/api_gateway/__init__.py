"""
API Gateway component.

Exposes the account, API key and todo operations over HTTP, resolving the
caller's identity from the API key header.
"""

from todoapi.api_gateway.auth import get_current_user_id
from todoapi.api_gateway.gateway import app, create_app, run_gateway

__all__ = [
    "get_current_user_id",
    "app",
    "create_app",
    "run_gateway"
]
