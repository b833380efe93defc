"""Remote server persistence registration."""

from typing import Any, Dict

from solid_invoice.config.schemas.persistence_schema import ServerStrategyConfig
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.registry.save_strategy_registry import get_save_strategy_registry


def create_server_strategy(config: ServerStrategyConfig) -> Any:
    from solid_invoice.infrastructure.persistence.server.strategy import ServerPersistenceStrategy

    return ServerPersistenceStrategy(
        url=config.url,
        timeout_seconds=config.timeout_seconds,
        api_token=config.api_token,
        headers=config.headers,
    )


def create_server_config(data: Dict[str, Any]) -> ServerStrategyConfig:
    return ServerStrategyConfig(**data)


def register_server_persistence() -> None:
    """Register the server save type with the global registry."""
    registry = get_save_strategy_registry()
    logger = get_logger(__name__)

    try:
        registry.register_strategy(
            save_type=SaveType.SERVER,
            strategy_factory=create_server_strategy,
            config_factory=create_server_config,
        )
        logger.info("Successfully registered server save type")
    except Exception as e:
        logger.error(f"Failed to register server save type: {e}")
        raise
