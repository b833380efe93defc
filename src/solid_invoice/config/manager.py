"""Unified configuration management for the application."""
from __future__ import annotations
import threading
from typing import Dict, Any, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from solid_invoice.config.loader import ConfigurationLoader
from solid_invoice.config.schemas import (
    AppConfig,
    LoggingConfig,
    PersistenceConfig,
)
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger

T = TypeVar('T')
logger = get_logger(__name__)

class ConfigurationManager:
    """
    Configuration manager that serves as the single source of truth.

    Provides:
    - Type safety through pydantic schemas
    - Environment variable overrides
    - Configuration validation
    - Lazy loading
    """

    def __init__(self, config_file: Optional[str] = None):
        """Initialize configuration manager with lazy loading."""
        self._config_file = config_file
        self._lock = threading.RLock()
        self._raw_config: Optional[Dict[str, Any]] = None
        self._app_config: Optional[AppConfig] = None
        self._config_cache: Dict[Type, Any] = {}

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        """Load application configuration from sources."""
        self._raw_config = ConfigurationLoader.load(self._config_file)
        app_config = ConfigurationLoader.create_app_config(self._raw_config)
        logger.info("Configuration loaded successfully")
        return app_config

    def get_typed(self, config_type: Type[T]) -> T:
        """Get typed configuration with caching."""
        if config_type not in self._config_cache:
            with self._lock:
                if config_type not in self._config_cache:
                    self._config_cache[config_type] = self._create_typed_config(config_type)
        return self._config_cache[config_type]

    def _create_typed_config(self, config_type: Type[T]) -> T:
        """Create typed configuration instance."""
        type_mapping = {
            'AppConfig': None,
            'LoggingConfig': 'logging',
            'PersistenceConfig': 'persistence',
        }

        config_name = config_type.__name__
        if config_name not in type_mapping:
            raise ValueError(f"Unknown configuration type: {config_name}")
        attr_name = type_mapping[config_name]
        if attr_name is None:
            return self.app_config
        return getattr(self.app_config, attr_name)

    def get_default_save_type(self) -> str:
        """Get the save type used when an invoice names none."""
        return self.get_typed(PersistenceConfig).default_save_type

    def get_strategy_config(self, save_type: Union[SaveType, str]) -> Optional[Union[BaseModel, Dict[str, Any]]]:
        """
        Get the configuration section for a save type.

        Args:
            save_type: Save-type tag

        Returns:
            Typed section for built-in save types, the raw dictionary for
            sections belonging to externally registered types, or None when
            the configuration has no section for the tag
        """
        tag = SaveType.normalize(save_type)
        persistence = self.get_typed(PersistenceConfig)
        if tag in type(persistence).model_fields:
            return getattr(persistence, tag)
        extra = persistence.model_extra or {}
        return extra.get(tag)

    def get_logging_config(self) -> LoggingConfig:
        return self.get_typed(LoggingConfig)

    def get_raw_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        with self._lock:
            if self._app_config is None:
                self._app_config = self._load_app_config()
            return ConfigurationLoader._deep_copy(self._raw_config or {})

    def reload(self) -> None:
        """Reload configuration from sources."""
        with self._lock:
            self._app_config = None
            self._raw_config = None
            self._config_cache.clear()


_config_manager: Optional[ConfigurationManager] = None
_manager_lock = threading.Lock()


def get_config_manager(config_file: Optional[str] = None) -> ConfigurationManager:
    """
    Get the global configuration manager.

    Args:
        config_file: Configuration file used when the manager is first created

    Returns:
        Configuration manager instance
    """
    global _config_manager
    if _config_manager is None:
        with _manager_lock:
            if _config_manager is None:
                _config_manager = ConfigurationManager(config_file)
    return _config_manager


def reset_config_manager() -> None:
    """
    Reset the global configuration manager.

    This function is primarily for testing purposes.
    """
    global _config_manager
    _config_manager = None
