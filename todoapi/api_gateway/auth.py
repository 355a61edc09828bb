"""
Identity resolution for the API Gateway.

Requests to owner-scoped routes carry an API key header. The key is looked up
in the key store and replaced by the owning account ID before the route runs.
The header name comes from the settings the app was built with.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.security import APIKeyHeader


# Set up logging
logger = logging.getLogger(__name__)


def build_api_key_scheme(header_name: str) -> APIKeyHeader:
    """Header scheme for the given header name; a missing header yields None."""
    return APIKeyHeader(name=header_name, auto_error=False)


async def get_current_user_id(request: Request) -> str:
    """
    Resolve the caller's account ID from the API key header.

    Args:
        request: The incoming request

    Returns:
        ID of the account owning the API key

    Raises:
        HTTPException: If the key is missing, unknown or inactive
    """
    api_key = await request.app.state.api_key_scheme(request)
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key required",
            headers={"WWW-Authenticate": "APIKey"}
        )

    key = await request.app.state.stores.api_keys.find_by_value(api_key)
    if not key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "APIKey"}
        )

    if not key.is_active:
        logger.info(f"Rejected inactive API key {key.id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key is inactive",
            headers={"WWW-Authenticate": "APIKey"}
        )

    return key.user_id
