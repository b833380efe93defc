"""Local database persistence registration.

Registers the ``local_database`` save type with the save strategy registry.
"""

from typing import Any, Dict

from solid_invoice.config.schemas.persistence_schema import LocalDatabaseStrategyConfig
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.registry.save_strategy_registry import get_save_strategy_registry


def create_local_database_strategy(config: LocalDatabaseStrategyConfig) -> Any:
    """
    Create SQLite persistence strategy from configuration.

    Args:
        config: Local database configuration

    Returns:
        LocalDatabasePersistenceStrategy instance
    """
    from solid_invoice.infrastructure.persistence.sql.strategy import (
        LocalDatabasePersistenceStrategy,
    )

    return LocalDatabasePersistenceStrategy(
        db_path=config.db_path,
        table_name=config.table_name,
    )


def create_local_database_config(data: Dict[str, Any]) -> LocalDatabaseStrategyConfig:
    return LocalDatabaseStrategyConfig(**data)


def register_local_database_persistence() -> None:
    """Register the local_database save type with the global registry."""
    registry = get_save_strategy_registry()
    logger = get_logger(__name__)

    try:
        registry.register_strategy(
            save_type=SaveType.LOCAL_DATABASE,
            strategy_factory=create_local_database_strategy,
            config_factory=create_local_database_config,
        )
        logger.info("Successfully registered local_database save type")
    except Exception as e:
        logger.error(f"Failed to register local_database save type: {e}")
        raise
