"""Tests for configuration loading and the configuration manager."""
import json
import pytest
import yaml

from solid_invoice.config.loader import ConfigurationLoader
from solid_invoice.config.manager import ConfigurationManager, get_config_manager
from solid_invoice.config.schemas import (
    AppConfig,
    validate_config,
    FileStrategyConfig,
    LocalDatabaseStrategyConfig,
    LoggingConfig,
    PersistenceConfig,
    ServerStrategyConfig,
)
from solid_invoice.domain.core.exceptions import ConfigurationError


class TestConfigurationLoader:

    def test_defaults_without_file(self):
        config = ConfigurationLoader.load(environ={})

        assert config["persistence"]["default_save_type"] == "file"
        assert config["persistence"]["file"]["file_path"] == "data/invoices.json"
        assert config["logging"]["level"] == "INFO"

    def test_yaml_file_is_merged_over_defaults(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(yaml.safe_dump({"persistence": {"server": {"url": "https://billing.test"}}}))

        config = ConfigurationLoader.load(str(path), environ={})

        assert config["persistence"]["server"]["url"] == "https://billing.test"
        assert config["persistence"]["server"]["timeout_seconds"] == 10.0
        assert config["persistence"]["default_save_type"] == "file"

    def test_config_file_from_environment(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"persistence": {"default_save_type": "server"}}))

        config = ConfigurationLoader.load(environ={"SOLID_INVOICE_CONFIG": str(path)})

        assert config["persistence"]["default_save_type"] == "server"

    def test_environment_overrides(self, tmp_path):
        environ = {
            "SOLID_INVOICE_PERSISTENCE__DEFAULT_SAVE_TYPE": "local_database",
            "SOLID_INVOICE_PERSISTENCE__SERVER__TIMEOUT_SECONDS": "2.5",
            "SOLID_INVOICE_PERSISTENCE__FILE__CREATE_DIRS": "false",
            "SOLID_INVOICE_WORKDIR": str(tmp_path),
        }

        config = ConfigurationLoader.load(environ=environ)

        assert config["persistence"]["default_save_type"] == "local_database"
        assert config["persistence"]["server"]["timeout_seconds"] == 2.5
        assert config["persistence"]["file"]["create_dirs"] is False
        assert config["persistence"]["local_database"]["db_path"] == f"{tmp_path}/invoices.db"

    def test_environment_override_beats_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"persistence": {"default_save_type": "server"}}))

        config = ConfigurationLoader.load(
            str(path), environ={"SOLID_INVOICE_PERSISTENCE__DEFAULT_SAVE_TYPE": "file"}
        )

        assert config["persistence"]["default_save_type"] == "file"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigurationLoader.load(str(tmp_path / "absent.yaml"), environ={})

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{broken")
        with pytest.raises(ConfigurationError):
            ConfigurationLoader.load_from_file(str(path))

    def test_non_mapping_file_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            ConfigurationLoader.load_from_file(str(path))

    def test_empty_file_is_empty_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert ConfigurationLoader.load_from_file(str(path)) == {}

    def test_invalid_values_raise_configuration_error(self):
        raw = ConfigurationLoader.load(environ={})
        raw["persistence"]["server"]["url"] = "ftp://nope"

        with pytest.raises(ConfigurationError):
            ConfigurationLoader.create_app_config(raw)


class TestConfigurationManager:

    def test_typed_sections(self, config_manager, tmp_path):
        assert isinstance(config_manager.get_typed(AppConfig), AppConfig)
        assert isinstance(config_manager.get_typed(PersistenceConfig), PersistenceConfig)

        logging_config = config_manager.get_logging_config()
        assert isinstance(logging_config, LoggingConfig)
        assert logging_config.level == "DEBUG"

    def test_unknown_typed_section(self, config_manager):
        with pytest.raises(ValueError):
            config_manager.get_typed(dict)

    def test_strategy_config_for_builtin_types(self, config_manager, tmp_path):
        file_config = config_manager.get_strategy_config("file")
        assert isinstance(file_config, FileStrategyConfig)
        assert file_config.file_path == str(tmp_path / "data" / "invoices.json")
        assert file_config.backup_count == 2

        server_config = config_manager.get_strategy_config("server")
        assert isinstance(server_config, ServerStrategyConfig)
        assert server_config.timeout_seconds == 5

        assert isinstance(config_manager.get_strategy_config("local_database"), LocalDatabaseStrategyConfig)

    def test_strategy_config_for_external_type(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"persistence": {"in_memory": {"capacity": 3}}}))

        manager = ConfigurationManager(str(path))

        assert manager.get_strategy_config("in_memory") == {"capacity": 3}
        assert manager.get_strategy_config("ftp") is None

    def test_default_save_type(self, config_manager):
        assert config_manager.get_default_save_type() == "file"

    def test_reload_picks_up_changes(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"persistence": {"default_save_type": "file"}}))
        manager = ConfigurationManager(str(path))
        assert manager.get_default_save_type() == "file"

        path.write_text(json.dumps({"persistence": {"default_save_type": "server"}}))
        assert manager.get_default_save_type() == "file"

        manager.reload()
        assert manager.get_default_save_type() == "server"

    def test_raw_config_is_a_copy(self, config_manager):
        raw = config_manager.get_raw_config()
        raw["persistence"]["default_save_type"] = "server"
        assert config_manager.get_default_save_type() == "file"

    def test_invalid_configuration_raises_on_access(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"environment": "moon"}))
        manager = ConfigurationManager(str(path))

        with pytest.raises(ConfigurationError):
            manager.app_config

    def test_global_manager(self, config_file):
        manager = get_config_manager(config_file)
        assert get_config_manager() is manager


def test_validate_config_returns_typed_config():
    config = validate_config({"persistence": {"default_save_type": "server"}})

    assert isinstance(config, AppConfig)
    assert config.persistence.default_save_type == "server"
    assert config.persistence.file.file_path == "data/invoices.json"
