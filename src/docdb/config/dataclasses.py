"""
Configuration Data Classes for the Document Store Facade

This module provides the dataclass consumed by ``MongoDB.from_config``.
Defaults come from the environment-backed ``Config`` values.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from . import Config


@dataclass
class MongoConfig:
    """Configuration for a MongoDB connection"""
    uri: str = field(default_factory=lambda: Config.MONGODB_URI)
    database_name: str = field(default_factory=lambda: Config.DATABASE_NAME)
    app_name: Optional[str] = field(default_factory=lambda: Config.MONGODB_APP_NAME)
    server_selection_timeout_ms: int = field(
        default_factory=lambda: Config.MONGODB_SERVER_SELECTION_TIMEOUT_MS
    )

    # Default deadline (seconds) for facade calls that do not pass one
    operation_timeout: Optional[float] = field(
        default_factory=lambda: Config.MONGODB_OPERATION_TIMEOUT
    )

    # Extra keyword arguments handed to pymongo.MongoClient as-is
    client_options: Dict[str, Any] = field(default_factory=dict)

    def to_client_kwargs(self) -> Dict[str, Any]:
        """Build MongoClient keyword arguments"""
        kwargs: Dict[str, Any] = {
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
        }
        if self.app_name:
            kwargs["appname"] = self.app_name
        kwargs.update(self.client_options)
        return kwargs
