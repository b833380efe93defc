"""Configuration loading from defaults, files and environment variables."""
import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from solid_invoice.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_FILE_ENV, ENV_PREFIX
from solid_invoice.config.schemas import AppConfig, validate_config
from solid_invoice.config.utils.env_expansion import expand_env_vars
from solid_invoice.domain.core.exceptions import ConfigurationError
from solid_invoice.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

# Separator between nesting levels in override variable names
_NESTING_SEPARATOR = "__"


class ConfigurationLoader:
    """
    Builds the raw configuration dictionary.

    Precedence, lowest to highest:
    1. Built-in defaults
    2. Configuration file (YAML or JSON, chosen by suffix)
    3. SOLID_INVOICE_<SECTION>__<KEY> environment overrides

    Environment variable references in string values are expanded last.
    """

    @classmethod
    def load(cls, config_path: Optional[str] = None,
             environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """
        Load raw configuration.

        Args:
            config_path: Optional configuration file; falls back to $SOLID_INVOICE_CONFIG
            environ: Environment mapping, defaults to os.environ

        Returns:
            Merged and expanded configuration dictionary

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        env = os.environ if environ is None else environ
        config = cls._deep_copy(DEFAULT_CONFIG)

        path = config_path or env.get(DEFAULT_CONFIG_FILE_ENV)
        if path:
            file_config = cls.load_from_file(path)
            config = cls._deep_merge(config, file_config)
            logger.debug(f"Merged configuration file: {path}")

        config = cls.apply_environment_overrides(config, env)
        return expand_env_vars(config, env)

    @staticmethod
    def load_from_file(config_path: str) -> Dict[str, Any]:
        """
        Read a YAML or JSON configuration file.

        Args:
            config_path: File path

        Returns:
            Parsed configuration dictionary (empty for an empty file)
        """
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    content = f.read()
                    data = json.loads(content) if content.strip() else None
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
        return data

    @classmethod
    def apply_environment_overrides(cls, config: Dict[str, Any],
                                    environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """
        Apply SOLID_INVOICE_* overrides.

        Only names with a nesting separator are treated as overrides, e.g.
        SOLID_INVOICE_PERSISTENCE__DEFAULT_SAVE_TYPE=server. Values are parsed
        as YAML scalars so numbers and booleans keep their types.
        """
        env = os.environ if environ is None else environ
        result = cls._deep_copy(config)

        for name, raw_value in env.items():
            if not name.startswith(ENV_PREFIX):
                continue
            key_path = name[len(ENV_PREFIX):].lower()
            if _NESTING_SEPARATOR not in key_path:
                continue

            keys = [key for key in key_path.split(_NESTING_SEPARATOR) if key]
            target = result
            for key in keys[:-1]:
                if not isinstance(target.get(key), dict):
                    target[key] = {}
                target = target[key]
            target[keys[-1]] = cls._parse_env_value(raw_value)
            logger.debug(f"Applied environment override: {name}")

        return result

    @staticmethod
    def create_app_config(raw_config: Dict[str, Any]) -> AppConfig:
        """Validate raw configuration into a typed AppConfig."""
        try:
            return validate_config(raw_config)
        except PydanticValidationError as e:
            missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()
                       if err.get("type") == "missing"]
            raise ConfigurationError(f"Invalid configuration: {e}", missing_fields=missing) from e

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        try:
            parsed = yaml.safe_load(value)
        except yaml.YAMLError:
            return value
        # Mappings and lists from the environment are not supported, keep the raw string
        if isinstance(parsed, (dict, list)) or parsed is None:
            return value
        return parsed

    @classmethod
    def _deep_merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        merged = cls._deep_copy(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = cls._deep_merge(merged[key], value)
            else:
                merged[key] = copy.deepcopy(value)
        return merged

    @staticmethod
    def _deep_copy(config: Dict[str, Any]) -> Dict[str, Any]:
        return copy.deepcopy(config)
