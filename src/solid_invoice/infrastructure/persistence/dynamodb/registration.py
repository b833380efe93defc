"""DynamoDB persistence registration.

The strategy module imports boto3, so it is only loaded when a DynamoDB
strategy is actually built.
"""

from typing import Any, Dict

from solid_invoice.config.schemas.persistence_schema import DynamodbStrategyConfig
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.registry.save_strategy_registry import get_save_strategy_registry


def create_dynamodb_strategy(config: DynamodbStrategyConfig) -> Any:
    """
    Create DynamoDB persistence strategy from configuration.

    Args:
        config: DynamoDB configuration

    Returns:
        DynamoDBPersistenceStrategy instance
    """
    from solid_invoice.infrastructure.persistence.dynamodb.strategy import (
        DynamoDBPersistenceStrategy,
    )

    return DynamoDBPersistenceStrategy(
        table_name=config.table_name,
        region=config.region,
        profile=config.profile,
        endpoint_url=config.endpoint_url,
        create_table=config.create_table,
    )


def create_dynamodb_config(data: Dict[str, Any]) -> DynamodbStrategyConfig:
    return DynamodbStrategyConfig(**data)


def register_dynamodb_persistence() -> None:
    """Register the dynamodb save type with the global registry."""
    registry = get_save_strategy_registry()
    logger = get_logger(__name__)

    try:
        registry.register_strategy(
            save_type=SaveType.DYNAMODB,
            strategy_factory=create_dynamodb_strategy,
            config_factory=create_dynamodb_config,
        )
        logger.info("Successfully registered dynamodb save type")
    except Exception as e:
        logger.error(f"Failed to register dynamodb save type: {e}")
        raise
