"""
Configuration settings for the todo API service.

This module provides a centralized configuration loaded from the environment
or a .env file.
"""

import os
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import ConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """
    Application settings.

    Load configuration from environment variables or .env file.
    """
    # API key issuance
    api_key_limit: int = int(os.getenv("API_KEY_LIMIT", "3"))
    api_key_header: str = os.getenv("API_KEY_HEADER", "X-API-Key")

    # Storage settings
    storage_backend: str = os.getenv("STORAGE_BACKEND", "memory")
    data_dir: str = os.getenv("DATA_DIR", "data")

    # Development mode
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"

    # API Gateway settings
    api_gateway_host: str = os.getenv("API_GATEWAY_HOST", "0.0.0.0")
    api_gateway_port: int = int(os.getenv("API_GATEWAY_PORT", "8000"))

    # Logging settings
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE", None)
    enable_file_logging: bool = os.getenv("ENABLE_FILE_LOGGING", "False").lower() == "true"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def validate_settings(self) -> Dict[str, str]:
        """
        Validate all settings and return any warnings or errors.

        Returns:
            Dictionary of validation messages
        """
        validation_messages = {}

        if self.api_key_limit < 1:
            validation_messages["api_key_limit"] = (
                f"API_KEY_LIMIT is {self.api_key_limit}, no API keys can be issued"
            )

        if self.storage_backend not in ("memory", "json"):
            validation_messages["storage_backend"] = (
                f"Unknown storage backend '{self.storage_backend}', falling back to memory"
            )

        # Check the JSON storage directory
        if self.storage_backend == "json" and not os.path.isdir(self.data_dir):
            try:
                os.makedirs(self.data_dir, exist_ok=True)
            except OSError as e:
                validation_messages["data_dir"] = f"Failed to create data directory: {e}"

        if self.enable_file_logging and not self.log_file:
            validation_messages["log_file"] = "File logging is enabled, but no LOG_FILE provided"

        return validation_messages

    def configure_logging(self) -> None:
        """Configure logging based on settings."""
        import logging

        log_level = getattr(logging, self.log_level.upper(), logging.INFO)

        logging_config = {
            'level': log_level,
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        }

        # Add file handler if enabled
        if self.enable_file_logging and self.log_file:
            logging_config['filename'] = self.log_file
            logging_config['filemode'] = 'a'

        logging.basicConfig(**logging_config)

        # Uvicorn access logs duplicate the gateway's request logging
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# Create a global settings instance
settings = Settings()

# Automatically configure logging
settings.configure_logging()


def validate_environment() -> None:
    """
    Validate the environment and display warnings or errors.
    """
    import logging
    logger = logging.getLogger(__name__)

    validation_messages = settings.validate_settings()

    if validation_messages:
        logger.warning("Environment validation found issues:")
        for category, message in validation_messages.items():
            logger.warning(f"  {category}: {message}")
    else:
        logger.info("Environment validation: All checks passed")


# Auto-validate environment when module is imported
validate_environment()
