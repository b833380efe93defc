# src/solid_invoice/config/defaults.py
from typing import Dict, Any
from enum import Enum

class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class LogDestination(str, Enum):
    """Log destination enumeration."""
    FILE = "file"
    STDOUT = "stdout"
    BOTH = "both"

ENV_PREFIX = "SOLID_INVOICE_"
DEFAULT_CONFIG_FILE_ENV = "SOLID_INVOICE_CONFIG"

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",
    "environment": "${SOLID_INVOICE_ENVIRONMENT:development}",

    # Logging configuration
    "logging": {
        "level": "${LOG_LEVEL:INFO}",
        "destination": "${LOG_DESTINATION:stdout}",
        "file_path": "${SOLID_INVOICE_LOGDIR:logs}/solid_invoice.log",
        "max_size_mb": 10,
        "backup_count": 5,
    },

    # Persistence configuration, one section per save type
    "persistence": {
        "default_save_type": "file",
        "file": {
            "file_path": "${SOLID_INVOICE_WORKDIR:data}/invoices.json",
            "create_dirs": True,
            "backup_count": 5,
        },
        "server": {
            "url": "${SOLID_INVOICE_SERVER_URL:http://localhost:8080/invoices}",
            "timeout_seconds": 10.0,
        },
        "local_database": {
            "db_path": "${SOLID_INVOICE_WORKDIR:data}/invoices.db",
            "table_name": "invoices",
        },
        "dynamodb": {
            "table_name": "invoices",
            "region": "${AWS_REGION:us-east-1}",
            "create_table": True,
        },
    },
}
