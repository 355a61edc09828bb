"""
API endpoints for accounts and API keys.

Sign-up and key management authenticate with username and password rather
than with an API key.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Query

from todoapi.account_manager.manager import AccountService, CredentialService
from todoapi.api_gateway.dependencies import get_account_service, get_credential_service
from todoapi.api_gateway.models import (
    ApiKeyRequest,
    ApiKeyResponse,
    SignUpRequest,
    SignUpResponse,
    UpdateKeyStateRequest
)


# Set up logging
logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["auth"])

api_keys_router = APIRouter(
    prefix="/apikeys",
    tags=["apikeys"],
    responses={404: {"description": "Not found"}}
)


@auth_router.post("/signup", response_model=SignUpResponse)
async def sign_up(
    request: SignUpRequest,
    service: AccountService = Depends(get_account_service)
):
    """
    Register a new account.

    Returns:
        The created account, without its password
    """
    account = await service.sign_up(request.username, request.password)
    return SignUpResponse.from_account(account)


@api_keys_router.post("", response_model=ApiKeyResponse)
async def create_api_key(
    request: ApiKeyRequest,
    service: CredentialService = Depends(get_credential_service)
):
    """
    Issue a new API key for the account.

    Returns:
        The created API key, including its secret value
    """
    api_key = await service.issue_key(request.username, request.password)
    return ApiKeyResponse.from_api_key(api_key)


@api_keys_router.get("", response_model=List[ApiKeyResponse])
async def get_all_api_keys(
    username: str = Query(...),
    password: str = Query(...),
    service: CredentialService = Depends(get_credential_service)
):
    """
    List every API key of the account.

    Returns:
        List of API keys
    """
    api_keys = await service.list_keys(username, password)
    return [ApiKeyResponse.from_api_key(api_key) for api_key in api_keys]


@api_keys_router.put("/{key_id}/state", response_model=ApiKeyResponse)
async def update_api_key_state(
    request: UpdateKeyStateRequest,
    key_id: str = Path(..., description="The API key ID"),
    service: CredentialService = Depends(get_credential_service)
):
    """
    Activate or deactivate an API key.

    Returns:
        The updated API key
    """
    api_key = await service.set_key_active(key_id, request.is_active)
    return ApiKeyResponse.from_api_key(api_key)
