"""
Environment Configuration Validator

Reads connection settings from the environment, converts them to the
expected type and logs a hint when something is missing or malformed.
"""

import os
import re
import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('true', '1', 'yes', 'on')

_CONVERTERS: Dict[type, Callable[[str], Any]] = {
    bool: lambda raw: raw.lower() in _TRUE_VALUES,
    int: int,
    float: float,
    str: str,
}

# user:password@ section of a connection string
_URI_CREDENTIALS = re.compile(r"(?<=://)[^@/]+@")


class ConfigurationError(Exception):
    """Raised when required configuration is missing"""
    pass


def mask_uri(uri: str) -> str:
    """Hide the credentials of a mongodb:// or mongodb+srv:// URI"""
    return _URI_CREDENTIALS.sub("***@", uri)


def mask_value(value: Any) -> str:
    """Mask a secret, keeping a short prefix and suffix for recognition"""
    text = str(value)
    if "://" in text:
        return mask_uri(text)
    return f"{text[:4]}...{text[-4:]}" if len(text) > 8 else "***"


class ConfigValidator:
    """Validates environment configuration and provides helpful error messages"""

    @staticmethod
    def get_required_env(
        key: str,
        description: str,
        example: Optional[str] = None
    ) -> str:
        """
        Get a required environment variable

        Raises:
            ConfigurationError: If the variable is not set
        """
        value = os.getenv(key)

        if not value:
            hint = example or "<your_value>"
            logger.error(
                f"❌ CONFIGURATION ERROR: {key} is not set ({description}). "
                f"Add it to your .env file, e.g. {key}={hint}"
            )
            raise ConfigurationError(f"Missing required environment variable: {key}")

        return value

    @staticmethod
    def get_env_with_default(
        key: str,
        default: Any,
        description: str,
        env_type: type = str
    ) -> Any:
        """
        Get environment variable with default value and type conversion

        Args:
            key: Environment variable name
            default: Returned when the variable is unset or cannot be converted
            description: Description of the variable, used in log messages
            env_type: One of str, int, float, bool
        """
        value = os.getenv(key)

        if not value:
            logger.debug(f"Using default value for {key}: {default} ({description})")
            return default

        try:
            return _CONVERTERS[env_type](value)
        except (KeyError, ValueError):
            logger.warning(
                f"Invalid value for {key}: {value}. "
                f"Expected {env_type.__name__}. Using default: {default}"
            )
            return default

    @staticmethod
    def log_configuration(config_dict: Dict[str, Any], mask_keys: Optional[List[str]] = None) -> None:
        """
        Log configuration values, masking any whose key contains a mask word

        Args:
            config_dict: Dictionary of configuration values
            mask_keys: Key fragments to mask (default: password, secret, token, uri)
        """
        mask_keys = mask_keys or ['password', 'secret', 'token', 'uri']

        logger.info("="*80)
        logger.info("DOCUMENT STORE CONFIGURATION")
        logger.info("="*80)

        for key, value in sorted(config_dict.items()):
            should_mask = any(mask_word in key.lower() for mask_word in mask_keys)
            display_value = mask_value(value) if should_mask and value else value
            logger.info(f"{key}: {display_value}")

        logger.info("="*80)


def require_env(key: str, description: str, example: Optional[str] = None) -> str:
    """Shorthand for ConfigValidator.get_required_env"""
    return ConfigValidator.get_required_env(key, description, example)


def get_env(key: str, default: Any, description: str = "", env_type: type = str) -> Any:
    """Shorthand for ConfigValidator.get_env_with_default"""
    return ConfigValidator.get_env_with_default(key, default, description, env_type)
