"""
Account and API key management.

CredentialService issues and manages API keys for username/password
authenticated accounts. AccountService handles sign-up.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from todoapi.account_manager.models import Account, ApiKey
from todoapi.account_manager.security import generate_api_key, verify_password
from todoapi.config import Settings, settings as default_settings
from todoapi.utils.error_handling import (
    AccountNotFound,
    InvalidCredential,
    IssuanceLimitReached,
    KeyNotFound,
    UsernameTaken
)

if TYPE_CHECKING:
    from todoapi.storage.base import AccountStore, KeyStore


logger = logging.getLogger(__name__)

COMPONENT = "account_manager"


class CredentialService:
    """
    Issues API keys against username/password credentials.

    The issuance limit is read from settings on every call, so changes to
    settings.api_key_limit take effect without a restart.
    """

    def __init__(self,
                 account_store: "AccountStore",
                 key_store: "KeyStore",
                 settings: Optional[Settings] = None):
        """
        Initialize the credential service.

        Args:
            account_store: Store holding account records
            key_store: Store holding API key records
            settings: Settings providing api_key_limit (default: global settings)
        """
        self.account_store = account_store
        self.key_store = key_store
        self.settings = settings or default_settings

    async def issue_key(self, username: str, password: str) -> ApiKey:
        """
        Create a new active API key for an account.

        The count check and the insert are separate store calls, so two
        concurrent requests for the same account can both pass the check.

        Args:
            username: Account username
            password: Account password

        Returns:
            The created API key

        Raises:
            AccountNotFound: If no account has this username
            InvalidCredential: If the password is wrong
            IssuanceLimitReached: If the account already holds api_key_limit keys
        """
        account = await self._authenticate(username, password)

        existing_keys = await self.key_store.find_by_owner(account.id)
        limit = self.settings.api_key_limit
        if len(existing_keys) >= limit:
            logger.info(f"API key limit ({limit}) reached for account {account.id}")
            raise IssuanceLimitReached(
                "Api key limit is reached",
                component=COMPONENT,
                details={"user_id": account.id, "limit": limit}
            )

        api_key = ApiKey(
            user_id=account.id,
            key=generate_api_key(),
            is_active=True
        )
        await self.key_store.insert(api_key)

        logger.info(f"Issued API key {api_key.id} for account {account.id}")
        return api_key

    async def list_keys(self, username: str, password: str) -> List[ApiKey]:
        """
        Get all API keys owned by an account.

        Args:
            username: Account username
            password: Account password

        Returns:
            List of API keys, in no particular order
        """
        account = await self._authenticate(username, password)
        return await self.key_store.find_by_owner(account.id)

    async def set_key_active(self, key_id: str, is_active: bool) -> ApiKey:
        """
        Activate or deactivate an API key.

        Setting the flag to its current value is a plain overwrite and succeeds.

        Args:
            key_id: API key ID
            is_active: New state

        Returns:
            The updated API key

        Raises:
            KeyNotFound: If no API key has this ID
        """
        api_key = await self.key_store.find(key_id)
        if api_key is None:
            raise KeyNotFound(
                f"Api key with Id: '{key_id}' does not exist",
                component=COMPONENT,
                details={"key_id": key_id}
            )

        await self.key_store.set_active(key_id, is_active)
        api_key.is_active = is_active

        logger.info(f"API key {key_id} set to {'active' if is_active else 'inactive'}")
        return api_key

    async def _authenticate(self, username: str, password: str) -> Account:
        """Look up the account and check its password, existence first."""
        account = await self.account_store.find(username)
        if account is None:
            raise AccountNotFound(
                f"User with Username: '{username}' does not exist!",
                component=COMPONENT,
                details={"username": username}
            )

        if not verify_password(password, account.password):
            logger.warning(f"Wrong password supplied for account {account.id}")
            raise InvalidCredential(
                f"Wrong password for user: '{username}'",
                component=COMPONENT,
                details={"username": username}
            )

        return account


class AccountService:
    """Registers new accounts."""

    def __init__(self, account_store: "AccountStore"):
        self.account_store = account_store

    async def sign_up(self, username: str, password: str) -> Account:
        """
        Register a new account.

        Args:
            username: Requested username, compared case-sensitively
            password: Password, stored as given

        Returns:
            The created account

        Raises:
            UsernameTaken: If the username is already registered
        """
        if await self.account_store.find(username) is not None:
            raise UsernameTaken(
                f"User with Username: '{username}' already exists",
                component=COMPONENT,
                details={"username": username}
            )

        account = Account(username=username, password=password)
        await self.account_store.insert(account)

        logger.info(f"Registered account {account.id}")
        return account
