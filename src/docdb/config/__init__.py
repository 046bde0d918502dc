"""
Configuration Package for the Document Store Facade

This package provides configuration management with environment variable support.
Connection settings are normally placed in a .env file next to the host application.
"""

import logging
from dotenv import load_dotenv
from .env_validator import ConfigValidator, ConfigurationError, get_env, require_env

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """
    Document store configuration with environment variable support.

    Values are read once, when the package is first imported.
    """

    # MongoDB Configuration
    try:
        MONGODB_URI = ConfigValidator.get_required_env(
            "MONGODB_URI",
            "MongoDB connection URI",
            "mongodb://localhost:27017"
        )
    except ConfigurationError:
        logger.warning("MONGODB_URI not set, using default: mongodb://localhost:27017")
        MONGODB_URI = "mongodb://localhost:27017"

    DATABASE_NAME = get_env("DATABASE_NAME", "docdb", "MongoDB database name")

    MONGODB_APP_NAME = get_env("MONGODB_APP_NAME", "docdb", "Application name reported to the server")

    MONGODB_SERVER_SELECTION_TIMEOUT_MS = get_env(
        "MONGODB_SERVER_SELECTION_TIMEOUT_MS",
        30000,
        "How long the driver waits to find a usable server, in milliseconds",
        int
    )

    # Unset means calls run without a deadline unless the caller passes one
    MONGODB_OPERATION_TIMEOUT = get_env(
        "MONGODB_OPERATION_TIMEOUT",
        None,
        "Default deadline for a single facade call, in seconds",
        float
    )

    # Logging
    LOG_LEVEL = get_env("LOG_LEVEL", "INFO", "Logging level")

    @classmethod
    def log_configuration(cls):
        """Log current configuration (masking sensitive values)"""
        config_dict = {
            "MONGODB_URI": cls.MONGODB_URI,
            "DATABASE_NAME": cls.DATABASE_NAME,
            "MONGODB_APP_NAME": cls.MONGODB_APP_NAME,
            "MONGODB_SERVER_SELECTION_TIMEOUT_MS": cls.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            "MONGODB_OPERATION_TIMEOUT": cls.MONGODB_OPERATION_TIMEOUT,
            "LOG_LEVEL": cls.LOG_LEVEL,
        }

        ConfigValidator.log_configuration(
            config_dict,
            mask_keys=['password', 'secret', 'token', 'uri']
        )

__all__ = [
    "Config",
    "ConfigValidator",
    "ConfigurationError",
    "get_env",
    "require_env",
]
