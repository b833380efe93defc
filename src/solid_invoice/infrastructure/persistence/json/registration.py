"""File persistence registration.

Registers the ``file`` save type with the save strategy registry.
"""

from typing import Any, Dict

from solid_invoice.config.schemas.persistence_schema import FileStrategyConfig
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.registry.save_strategy_registry import get_save_strategy_registry


def create_file_strategy(config: FileStrategyConfig) -> Any:
    """
    Create file persistence strategy from configuration.

    Args:
        config: File strategy configuration

    Returns:
        FilePersistenceStrategy instance
    """
    from solid_invoice.infrastructure.persistence.json.strategy import FilePersistenceStrategy

    return FilePersistenceStrategy(
        file_path=config.file_path,
        create_dirs=config.create_dirs,
        backup_count=config.backup_count,
    )


def create_file_config(data: Dict[str, Any]) -> FileStrategyConfig:
    return FileStrategyConfig(**data)


def register_file_persistence() -> None:
    """Register the file save type with the global registry."""
    registry = get_save_strategy_registry()
    logger = get_logger(__name__)

    try:
        registry.register_strategy(
            save_type=SaveType.FILE,
            strategy_factory=create_file_strategy,
            config_factory=create_file_config,
        )
        logger.info("Successfully registered file save type")
    except Exception as e:
        logger.error(f"Failed to register file save type: {e}")
        raise
