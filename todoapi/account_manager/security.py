"""
Credential checks and key generation for the Account Manager.
"""

import secrets


def verify_password(plain_password: str, stored_password: str) -> bool:
    """
    Check a supplied password against the stored one.

    Accounts keep their password in plain text, so this is an exact string
    comparison. Swap this function out to introduce password hashing.

    Args:
        plain_password: Password supplied by the caller
        stored_password: Password held by the account store

    Returns:
        True if the passwords match, False otherwise
    """
    return plain_password == stored_password


def generate_api_key() -> str:
    """
    Generate a new opaque API key value.

    Returns:
        New API key
    """
    return secrets.token_urlsafe(32)
