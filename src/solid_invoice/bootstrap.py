"""Application bootstrap - wires configuration, logging and save types."""

from __future__ import annotations

from typing import Any, Dict, Optional

from solid_invoice.application.invoice.service import InvoiceApplicationService
from solid_invoice.config.manager import ConfigurationManager
from solid_invoice.infrastructure.logging.logger import get_logger, setup_logging
from solid_invoice.infrastructure.persistence.registration import register_all_save_types
from solid_invoice.infrastructure.registry.save_strategy_registry import (
    SaveStrategyRegistry,
    get_save_strategy_registry,
)


class Application:
    """Application context holding the configuration, registry and invoice service."""

    def __init__(self, config_path: Optional[str] = None) -> None:
        self.config_path = config_path
        self._initialized = False

        # Defer heavy initialization until first use
        self._config_manager: Optional[ConfigurationManager] = None
        self._registry: Optional[SaveStrategyRegistry] = None
        self._invoice_service: Optional[InvoiceApplicationService] = None

        self.logger = get_logger(__name__)

    def initialize(self) -> bool:
        """
        Load configuration, configure logging and register built-in save types.

        Returns:
            True once the application is ready

        Raises:
            ConfigurationError: If the configuration is invalid
            RuntimeError: If no save type could be registered
        """
        if self._initialized:
            return True

        try:
            self._config_manager = ConfigurationManager(self.config_path)
            setup_logging(self._config_manager.get_logging_config())

            self._registry = get_save_strategy_registry()
            register_all_save_types()

            self._invoice_service = InvoiceApplicationService(self._registry, self._config_manager)
        except Exception as e:
            self.logger.error(f"Failed to initialize application: {e}")
            raise

        self._initialized = True
        self.logger.info(
            f"Application initialized with save types: {self._registry.get_registered_types()}"
        )
        return True

    @property
    def config_manager(self) -> ConfigurationManager:
        self._ensure_initialized()
        return self._config_manager

    @property
    def registry(self) -> SaveStrategyRegistry:
        self._ensure_initialized()
        return self._registry

    @property
    def invoice_service(self) -> InvoiceApplicationService:
        self._ensure_initialized()
        return self._invoice_service

    def get_info(self) -> Dict[str, Any]:
        """Get application status information."""
        if not self._initialized:
            return {"status": "not_initialized"}
        return {
            "status": "initialized",
            "config_path": self.config_path,
            "default_save_type": self._config_manager.get_default_save_type(),
            "save_types": self._registry.get_registered_types(),
        }

    def shutdown(self) -> None:
        """Shutdown the application."""
        self.logger.info("Shutting down application")
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("Application not initialized")

    def __enter__(self) -> "Application":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()


def create_application(config_path: Optional[str] = None) -> Application:
    """Create and initialize an application."""
    app = Application(config_path)
    app.initialize()
    return app
