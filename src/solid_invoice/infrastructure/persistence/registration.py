"""Central Save Type Registration Module.

Registers every built-in persistence strategy with the save strategy registry.
"""

from typing import Callable, Dict, List

from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.persistence.dynamodb.registration import (
    register_dynamodb_persistence,
)
from solid_invoice.infrastructure.persistence.json.registration import register_file_persistence
from solid_invoice.infrastructure.persistence.server.registration import (
    register_server_persistence,
)
from solid_invoice.infrastructure.persistence.sql.registration import (
    register_local_database_persistence,
)
from solid_invoice.infrastructure.registry.save_strategy_registry import get_save_strategy_registry

BUILTIN_REGISTRATIONS: Dict[str, Callable[[], None]] = {
    "file": register_file_persistence,
    "server": register_server_persistence,
    "local_database": register_local_database_persistence,
    "dynamodb": register_dynamodb_persistence,
}


def register_all_save_types() -> List[str]:
    """
    Register all built-in save types with the save strategy registry.

    Save types that are already registered are skipped. A save type that
    fails to register is logged and the remaining ones are still attempted.

    Returns:
        Save types registered by this call

    Raises:
        RuntimeError: If no save type ends up registered
    """
    logger = get_logger(__name__)
    registry = get_save_strategy_registry()

    registered_types = []
    failed_types = []

    for save_type, register in BUILTIN_REGISTRATIONS.items():
        if registry.is_registered(save_type):
            logger.debug(f"Save type '{save_type}' already registered")
            continue
        try:
            register()
            registered_types.append(save_type)
        except Exception as e:
            failed_types.append((save_type, str(e)))
            logger.warning(f"Failed to register {save_type} save type: {e}")

    if registered_types:
        logger.info(f"Successfully registered save types: {', '.join(registered_types)}")

    if failed_types:
        failed_summary = ", ".join(f"{name} ({error})" for name, error in failed_types)
        logger.warning(f"Failed to register save types: {failed_summary}")

    if not registry.get_registered_types():
        logger.error("No save types were successfully registered!")
        raise RuntimeError("Failed to register any save types")

    return registered_types


def register_save_type(save_type: str) -> bool:
    """
    Register a single built-in save type.

    Args:
        save_type: Name of the save type to register

    Returns:
        True if the save type is registered after the call, False otherwise
    """
    logger = get_logger(__name__)
    registry = get_save_strategy_registry()

    if registry.is_registered(save_type):
        return True

    register = BUILTIN_REGISTRATIONS.get(save_type)
    if register is None:
        logger.error(f"Unknown built-in save type: {save_type}")
        return False

    try:
        register()
    except Exception as e:
        logger.error(f"Failed to register save type '{save_type}': {e}")
        return False
    return True
