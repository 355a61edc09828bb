"""
Tests for error handling helpers and settings validation.
"""

import pytest

from todoapi.config import Settings
from todoapi.utils.error_handling import (
    ErrorContext,
    KeyNotFound,
    StorageError,
    TodoAPIError,
    catch_and_log
)


def test_service_error_attributes():
    """Test that errors carry their message, component and details."""
    error = KeyNotFound("Api key with Id: 'k1' does not exist", component="account_manager",
                        details={"key_id": "k1"})

    assert isinstance(error, TodoAPIError)
    assert str(error) == error.message
    assert error.component == "account_manager"
    assert error.details == {"key_id": "k1"}


def test_catch_and_log_returns_default():
    """Test that a caught exception yields the default return value."""
    @catch_and_log(component="test", default_return="fallback")
    def failing():
        raise ValueError("bad")

    assert failing() == "fallback"


@pytest.mark.asyncio
async def test_catch_and_log_wraps_async_errors():
    """Test converting an async failure into a service error."""
    @catch_and_log(component="test", raise_service_error=True, service_error_class=StorageError)
    async def failing():
        raise OSError("disk full")

    with pytest.raises(StorageError) as exc_info:
        await failing()

    assert exc_info.value.details["original_error"] == "OSError"
    assert isinstance(exc_info.value.__cause__, OSError)


def test_catch_and_log_ignores_other_exceptions():
    """Test that exceptions outside the configured types propagate."""
    @catch_and_log(component="test", exceptions=[KeyError])
    def failing():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        failing()


def test_error_context_wraps_foreign_errors():
    """Test that ErrorContext turns an OSError into a StorageError."""
    with pytest.raises(StorageError) as exc_info:
        with ErrorContext("json_store", "Failed to save", StorageError):
            raise OSError("read-only file system")

    assert str(exc_info.value).startswith("Failed to save: ")


def test_error_context_passes_service_errors():
    """Test that service errors leave ErrorContext unchanged."""
    with pytest.raises(KeyNotFound):
        with ErrorContext("json_store", "Failed to save", StorageError):
            raise KeyNotFound("missing")


def test_validate_settings():
    """Test warnings for unusable settings."""
    assert Settings(api_key_limit=3, storage_backend="memory", enable_file_logging=False).validate_settings() == {}

    messages = Settings(api_key_limit=0, storage_backend="postgres", enable_file_logging=False).validate_settings()
    assert set(messages) == {"api_key_limit", "storage_backend"}


def test_validate_settings_creates_data_dir(tmp_path):
    """Test that the JSON backend gets its data directory."""
    data_dir = tmp_path / "store"

    messages = Settings(storage_backend="json", data_dir=str(data_dir), enable_file_logging=False).validate_settings()

    assert messages == {}
    assert data_dir.is_dir()
