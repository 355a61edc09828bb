"""
Account & Key Management component.

Register accounts and issue, list and toggle their API keys.
"""

from todoapi.account_manager.manager import AccountService, CredentialService
from todoapi.account_manager.models import Account, ApiKey

__all__ = ["AccountService", "CredentialService", "Account", "ApiKey"]
