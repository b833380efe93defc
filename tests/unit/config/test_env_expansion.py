"""Tests for environment variable expansion in configuration values."""
import pytest

from solid_invoice.config.utils.env_expansion import expand_config_env_vars, expand_env_vars


class TestEnvExpansion:

    def setup_method(self):
        self.env = {"WORKDIR": "/srv/invoices", "PORT": "8080", "EMPTY": ""}

    def test_braced_variable(self):
        assert expand_env_vars("${WORKDIR}/invoices.json", self.env) == "/srv/invoices/invoices.json"

    def test_bare_variable(self):
        assert expand_env_vars("$WORKDIR/data", self.env) == "/srv/invoices/data"

    def test_default_used_when_unset(self):
        assert expand_env_vars("${MISSING:fallback}", self.env) == "fallback"

    def test_default_ignored_when_set(self):
        assert expand_env_vars("${PORT:9000}", self.env) == "8080"

    def test_empty_value_wins_over_default(self):
        assert expand_env_vars("${EMPTY:fallback}", self.env) == ""

    def test_unset_variable_without_default_is_left_unchanged(self):
        assert expand_env_vars("${MISSING}/x and $ALSO_MISSING", self.env) == "${MISSING}/x and $ALSO_MISSING"

    def test_nested_structures(self):
        config = {
            "persistence": {"file": {"file_path": "${WORKDIR}/a.json"}},
            "urls": ["http://localhost:${PORT}", 42],
            "enabled": True,
        }
        assert expand_env_vars(config, self.env) == {
            "persistence": {"file": {"file_path": "/srv/invoices/a.json"}},
            "urls": ["http://localhost:8080", 42],
            "enabled": True,
        }

    @pytest.mark.parametrize("value", [None, 3, 2.5, False])
    def test_non_string_values_unchanged(self, value):
        assert expand_env_vars(value, self.env) is value

    def test_uses_process_environment(self, monkeypatch):
        monkeypatch.setenv("SOLID_INVOICE_TEST_DIR", "/tmp/x")
        assert expand_config_env_vars({"path": "${SOLID_INVOICE_TEST_DIR}"}) == {"path": "/tmp/x"}
