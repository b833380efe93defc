"""Tests for the save strategy registry."""
import pytest
from typing import Any, Dict, List

from solid_invoice.config.schemas.persistence_schema import FileStrategyConfig
from solid_invoice.domain.core.exceptions import ConfigurationError, DomainException
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.persistence.base import InvoicePersistenceStrategy
from solid_invoice.infrastructure.persistence.json.strategy import FilePersistenceStrategy
from solid_invoice.infrastructure.persistence.registration import (
    register_all_save_types,
    register_save_type,
)
from solid_invoice.infrastructure.persistence.server.strategy import ServerPersistenceStrategy
from solid_invoice.infrastructure.persistence.sql.strategy import LocalDatabasePersistenceStrategy
from solid_invoice.infrastructure.registry.save_strategy_registry import (
    SaveStrategyRegistry,
    UnknownSaveTypeError,
    get_save_strategy_registry,
)


class InMemoryPersistenceStrategy(InvoicePersistenceStrategy):
    """Strategy added from outside the package."""

    save_type = "in_memory"

    def __init__(self, store: List[Any]):
        self.store = store

    def save(self, invoice) -> None:
        self.store.append(invoice)


class TestSaveStrategyRegistry:
    """Test registration and resolution of save types."""

    def setup_method(self):
        self.registry = get_save_strategy_registry()
        self.store: List[Any] = []

    def _register_in_memory(self):
        self.registry.register_strategy(
            "in_memory",
            strategy_factory=lambda config: InMemoryPersistenceStrategy(self.store),
            config_factory=lambda data: dict(data),
        )

    def test_registry_is_singleton(self):
        assert SaveStrategyRegistry() is self.registry
        assert get_save_strategy_registry() is self.registry

    def test_resolve_unknown_save_type_raises(self):
        register_all_save_types()

        with pytest.raises(UnknownSaveTypeError) as exc:
            self.registry.resolve("UnregisteredTag")

        assert exc.value.save_type == "UnregisteredTag"
        assert "file" in exc.value.available_types
        assert "UnregisteredTag" in str(exc.value)
        assert isinstance(exc.value, DomainException)

    def test_resolve_on_empty_registry_raises(self):
        with pytest.raises(UnknownSaveTypeError) as exc:
            self.registry.resolve(SaveType.FILE)
        assert exc.value.available_types == []

    def test_builtin_save_types_resolve_to_matching_strategy(self, tmp_path):
        register_all_save_types()

        file_config = self.registry.create_config("file", {"file_path": str(tmp_path / "i.json")})
        db_config = self.registry.create_config("local_database", {"db_path": str(tmp_path / "i.db")})

        assert isinstance(self.registry.resolve("file", file_config), FilePersistenceStrategy)
        assert isinstance(self.registry.resolve("server"), ServerPersistenceStrategy)
        assert isinstance(
            self.registry.resolve(SaveType.LOCAL_DATABASE, db_config),
            LocalDatabasePersistenceStrategy,
        )

    def test_resolution_is_pure(self, tmp_path):
        register_all_save_types()
        config = self.registry.create_config("file", {"file_path": str(tmp_path / "i.json")})

        first = self.registry.resolve("file", config)
        second = self.registry.resolve("file", config)

        assert type(first) is type(second)
        assert not (tmp_path / "i.json").exists()

    def test_new_save_type_leaves_existing_resolution_unchanged(self):
        register_all_save_types()
        before = {tag: type(self.registry.resolve(tag)) for tag in ("server",)}

        self._register_in_memory()

        assert {tag: type(self.registry.resolve(tag)) for tag in ("server",)} == before
        assert isinstance(self.registry.resolve("in_memory"), InMemoryPersistenceStrategy)

    def test_registered_strategy_saves_through_registry(self, sample_invoice):
        self._register_in_memory()

        self.registry.resolve("in_memory").save(sample_invoice)

        assert self.store == [sample_invoice]

    def test_duplicate_registration_raises(self):
        self._register_in_memory()
        with pytest.raises(ConfigurationError):
            self._register_in_memory()

    def test_get_registered_types_in_registration_order(self):
        register_all_save_types()
        self._register_in_memory()

        assert self.registry.get_registered_types() == [
            "file", "server", "local_database", "dynamodb", "in_memory",
        ]
        assert self.registry.is_registered(SaveType.DYNAMODB)
        assert not self.registry.is_registered("ftp")

    def test_resolve_uses_default_config(self):
        register_all_save_types()
        strategy = self.registry.resolve("server")
        assert strategy.url == "http://localhost:8080/invoices"
        assert strategy.timeout_seconds == 10.0

    def test_create_config_rejects_invalid_data(self):
        register_all_save_types()
        with pytest.raises(ConfigurationError):
            self.registry.create_config("server", {"url": "ftp://invoices"})

    def test_factory_failure_is_wrapped(self):
        def broken_factory(config: Dict[str, Any]):
            raise RuntimeError("medium unavailable")

        self.registry.register_strategy("broken", broken_factory, lambda data: data)

        with pytest.raises(ConfigurationError) as exc:
            self.registry.resolve("broken")
        assert isinstance(exc.value.__cause__, RuntimeError)

    def test_file_config_factory_returns_typed_config(self):
        register_all_save_types()
        config = self.registry.create_config("file", {})
        assert isinstance(config, FileStrategyConfig)
        assert config.backup_count == 5


class TestSaveTypeRegistration:
    """Test the central registration functions."""

    def test_register_all_save_types(self):
        registered = register_all_save_types()
        assert registered == ["file", "server", "local_database", "dynamodb"]

    def test_register_all_save_types_is_idempotent(self):
        register_all_save_types()
        assert register_all_save_types() == []
        assert len(get_save_strategy_registry().get_registered_types()) == 4

    def test_register_single_save_type(self):
        assert register_save_type("local_database") is True
        assert get_save_strategy_registry().get_registered_types() == ["local_database"]

    def test_register_unknown_builtin_save_type(self):
        assert register_save_type("carrier_pigeon") is False
