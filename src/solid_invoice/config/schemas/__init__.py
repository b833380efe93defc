"""Configuration schemas package."""

from .app_schema import AppConfig, validate_config
from .logging_schema import LoggingConfig
from .persistence_schema import (
    DynamodbStrategyConfig,
    FileStrategyConfig,
    LocalDatabaseStrategyConfig,
    PersistenceConfig,
    ServerStrategyConfig,
)

__all__ = [
    # Main configuration
    "AppConfig",
    "validate_config",
    # Logging configuration
    "LoggingConfig",
    # Persistence configurations
    "PersistenceConfig",
    "FileStrategyConfig",
    "ServerStrategyConfig",
    "LocalDatabaseStrategyConfig",
    "DynamodbStrategyConfig",
]
