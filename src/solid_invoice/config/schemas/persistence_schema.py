"""Persistence configuration schemas, one section per save type."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileStrategyConfig(BaseModel):
    """File (JSON document) persistence configuration."""

    file_path: str = Field("data/invoices.json", description="Path to the invoice JSON file")
    create_dirs: bool = Field(True, description="Create parent directories if missing")
    backup_count: int = Field(5, description="Number of backup files to keep")

    @field_validator("backup_count")
    @classmethod
    def validate_backup_count(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Backup count cannot be negative")
        return v


class ServerStrategyConfig(BaseModel):
    """Remote server persistence configuration."""

    url: str = Field("http://localhost:8080/invoices", description="Endpoint receiving invoice POSTs")
    timeout_seconds: float = Field(10.0, description="Request timeout in seconds")
    api_token: Optional[str] = Field(None, description="Bearer token sent with each request")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra request headers")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate endpoint URL scheme."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Server URL must start with http:// or https://")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Server timeout must be positive")
        return v


class LocalDatabaseStrategyConfig(BaseModel):
    """Local SQLite database persistence configuration."""

    db_path: str = Field("data/invoices.db", description="Path to the SQLite database file")
    table_name: str = Field("invoices", description="Table holding invoices")

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        """Table names are interpolated into SQL, so restrict them to identifiers."""
        if not v.isidentifier():
            raise ValueError(f"Invalid table name: {v}")
        return v


class DynamodbStrategyConfig(BaseModel):
    """DynamoDB persistence configuration."""

    table_name: str = Field("invoices", description="DynamoDB table name")
    region: str = Field("us-east-1", description="AWS region")
    profile: Optional[str] = Field(None, description="AWS profile name")
    endpoint_url: Optional[str] = Field(None, description="Custom endpoint, e.g. DynamoDB Local")
    create_table: bool = Field(True, description="Create the table if it does not exist")


class PersistenceConfig(BaseModel):
    """
    Persistence configuration.

    Sections for save types registered outside this package are kept as raw
    dictionaries and handed to that type's config factory.
    """

    model_config = ConfigDict(extra="allow")

    default_save_type: str = Field("file", description="Save type used when none is given")
    file: FileStrategyConfig = Field(default_factory=FileStrategyConfig)
    server: ServerStrategyConfig = Field(default_factory=ServerStrategyConfig)
    local_database: LocalDatabaseStrategyConfig = Field(default_factory=LocalDatabaseStrategyConfig)
    dynamodb: DynamodbStrategyConfig = Field(default_factory=DynamodbStrategyConfig)
