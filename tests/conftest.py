import json
import logging
import pytest

from solid_invoice.config.manager import ConfigurationManager, reset_config_manager
from solid_invoice.domain.invoice.invoice_aggregate import Invoice
from solid_invoice.domain.invoice.value_objects import Book
from solid_invoice.infrastructure.registry.save_strategy_registry import (
    get_save_strategy_registry,
    reset_save_strategy_registry,
)


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')


@pytest.fixture(autouse=True)
def clean_registry():
    """Every test starts with an empty save strategy registry."""
    reset_save_strategy_registry()
    reset_config_manager()
    yield
    reset_save_strategy_registry()
    reset_config_manager()
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def registry():
    return get_save_strategy_registry()


@pytest.fixture
def sample_book():
    return Book(name="Clean Code", price=1090.0)


@pytest.fixture
def sample_invoice(sample_book):
    return Invoice(
        book=sample_book,
        quantity=1,
        discount_rate=0.1,
        tax_rate=0.15,
        save_type="file",
    )


@pytest.fixture
def config_file(tmp_path):
    """Configuration file pointing every local medium into tmp_path."""
    config_data = {
        "environment": "testing",
        "logging": {"level": "DEBUG", "destination": "stdout"},
        "persistence": {
            "default_save_type": "file",
            "file": {"file_path": str(tmp_path / "data" / "invoices.json"), "backup_count": 2},
            "server": {"url": "http://invoices.test/api/invoices", "timeout_seconds": 5},
            "local_database": {"db_path": str(tmp_path / "data" / "invoices.db")},
        },
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config_data, indent=2))
    return str(path)


@pytest.fixture
def config_manager(config_file):
    return ConfigurationManager(config_file)
