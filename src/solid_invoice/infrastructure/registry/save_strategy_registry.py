"""Save Strategy Registry - Registry pattern for persistence strategy factories.

Maps save-type tags to persistence strategy factories, so a new persistence
medium is added by registering it rather than by editing a conditional or any
existing strategy.
"""

from typing import Dict, Callable, Optional, List, Any, Union
import threading

from solid_invoice.domain.core.exceptions import ConfigurationError, DomainException
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.persistence.base import InvoicePersistenceStrategy


class UnknownSaveTypeError(DomainException):
    """Raised when a save type has no registered strategy."""

    def __init__(self, save_type: str, available_types: List[str]):
        super().__init__(
            f"Save type '{save_type}' is not registered. "
            f"Available types: {available_types}"
        )
        self.save_type = save_type
        self.available_types = available_types


class SaveStrategyRegistration:
    """Container for save strategy registration information."""

    def __init__(self,
                 save_type: str,
                 strategy_factory: Callable[[Any], InvoicePersistenceStrategy],
                 config_factory: Callable[[Dict[str, Any]], Any]):
        """
        Initialize save strategy registration.

        Args:
            save_type: Save-type tag (e.g., 'file', 'server', 'local_database')
            strategy_factory: Builds a strategy from a configuration object
            config_factory: Builds a configuration object from a dictionary
        """
        self.save_type = save_type
        self.strategy_factory = strategy_factory
        self.config_factory = config_factory

    def __repr__(self) -> str:
        return f"SaveStrategyRegistration(type='{self.save_type}')"


class SaveStrategyRegistry:
    """
    Registry for persistence strategy factories.

    Resolution is a pure lookup: it builds a fresh strategy from the
    registered factory and never touches stored invoices. Registering a new
    save type leaves the resolution of every existing type unchanged.

    Thread-safe singleton implementation.
    """

    _instance: Optional['SaveStrategyRegistry'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'SaveStrategyRegistry':
        """Ensure singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize save strategy registry."""
        if hasattr(self, '_initialized'):
            return

        self._registrations: Dict[str, SaveStrategyRegistration] = {}
        self._registry_lock = threading.Lock()
        self.logger = get_logger(__name__)
        self._initialized = True

        self.logger.debug("Save strategy registry initialized")

    def register_strategy(self,
                          save_type: Union[SaveType, str],
                          strategy_factory: Callable[[Any], InvoicePersistenceStrategy],
                          config_factory: Callable[[Dict[str, Any]], Any]) -> None:
        """
        Register a save type with its factories.

        Args:
            save_type: Save-type tag
            strategy_factory: Factory function to create the persistence strategy
            config_factory: Factory function to create the strategy configuration

        Raises:
            ConfigurationError: If save type is already registered
        """
        tag = SaveType.normalize(save_type)
        with self._registry_lock:
            if tag in self._registrations:
                raise ConfigurationError(f"Save type '{tag}' is already registered")

            registration = SaveStrategyRegistration(
                save_type=tag,
                strategy_factory=strategy_factory,
                config_factory=config_factory
            )
            self._registrations[tag] = registration

        self.logger.info(f"Registered save type: {tag}")
        self.logger.debug(f"Save strategy registration: {registration}")

    def resolve(self, save_type: Union[SaveType, str], config: Any = None) -> InvoicePersistenceStrategy:
        """
        Resolve the persistence strategy for a save type.

        Args:
            save_type: Save-type tag
            config: Strategy configuration; the config factory's defaults are
                used when omitted

        Returns:
            Persistence strategy instance

        Raises:
            UnknownSaveTypeError: If save type is not registered
            ConfigurationError: If the strategy cannot be built
        """
        tag = SaveType.normalize(save_type)
        registration = self._get_registration(tag)

        if config is None:
            config = self.create_config(tag, {})

        try:
            strategy = registration.strategy_factory(config)
        except Exception as e:
            error_msg = f"Failed to create persistence strategy for save type '{tag}': {e}"
            self.logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

        self.logger.debug(f"Resolved save type '{tag}' to {strategy!r}")
        return strategy

    def create_config(self, save_type: Union[SaveType, str], data: Dict[str, Any]) -> Any:
        """
        Create a strategy configuration for the given save type and data.

        Args:
            save_type: Save-type tag
            data: Configuration data

        Returns:
            Strategy configuration instance

        Raises:
            UnknownSaveTypeError: If save type is not registered
            ConfigurationError: If the data is invalid for this save type
        """
        tag = SaveType.normalize(save_type)
        registration = self._get_registration(tag)

        try:
            config = registration.config_factory(data)
        except Exception as e:
            error_msg = f"Failed to create config for save type '{tag}': {e}"
            self.logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

        self.logger.debug(f"Created config for save type: {tag}")
        return config

    def get_registered_types(self) -> List[str]:
        """
        Get list of registered save types.

        Returns:
            Registered save-type tags in registration order
        """
        with self._registry_lock:
            return list(self._registrations.keys())

    def is_registered(self, save_type: Union[SaveType, str]) -> bool:
        """Check if a save type is registered."""
        tag = SaveType.normalize(save_type)
        with self._registry_lock:
            return tag in self._registrations

    def clear_registrations(self) -> None:
        """
        Clear all save type registrations.

        This method is primarily for testing purposes.
        """
        with self._registry_lock:
            self._registrations.clear()
        self.logger.debug("Cleared all save type registrations")

    def _get_registration(self, save_type: str) -> SaveStrategyRegistration:
        with self._registry_lock:
            if save_type not in self._registrations:
                raise UnknownSaveTypeError(save_type, list(self._registrations.keys()))
            return self._registrations[save_type]


# Global registry instance
_save_strategy_registry: Optional[SaveStrategyRegistry] = None


def get_save_strategy_registry() -> SaveStrategyRegistry:
    """
    Get the global save strategy registry instance.

    Returns:
        Save strategy registry singleton instance
    """
    global _save_strategy_registry
    if _save_strategy_registry is None:
        _save_strategy_registry = SaveStrategyRegistry()
    return _save_strategy_registry


def reset_save_strategy_registry() -> None:
    """
    Reset the global save strategy registry instance.

    This function is primarily for testing purposes.
    """
    global _save_strategy_registry
    if _save_strategy_registry is not None:
        _save_strategy_registry.clear_registrations()
    _save_strategy_registry = None
