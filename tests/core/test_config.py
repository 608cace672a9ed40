"""Tests for configuration loading and binding."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from restrecord.config.properties import ClientProperties, LoggingProperties
from restrecord.core.config import Config, config_properties


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"restrecord": {"client": {"endpoint": "http://x", "timeout": 10}}})
        assert config.get("restrecord.client.endpoint") == "http://x"
        assert config.get("restrecord.client.timeout") == 10

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "restrecord.yaml"
        config_file.write_text("restrecord:\n  client:\n    endpoint: http://yaml\n")
        config = Config.from_file(config_file)
        assert config.get("restrecord.client.endpoint") == "http://yaml"
        assert config.get("restrecord.client.timeout") == 30

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "restrecord.toml"
        config_file.write_text('[restrecord.client]\nendpoint = "http://toml"\n')
        config = Config.from_file(config_file, load_defaults=False)
        assert config.get("restrecord.client.endpoint") == "http://toml"
        assert config.get("restrecord.client.timeout") is None

    def test_missing_file_keeps_defaults(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("restrecord.logging.format") == "console"

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "app.yaml").write_text("restrecord:\n  client:\n    endpoint: http://base\n    timeout: 5\n")
        (tmp_path / "app-prod.yaml").write_text("restrecord:\n  client:\n    endpoint: http://prod\n")
        config = Config.from_file(tmp_path / "app.yaml", active_profiles=["prod"])
        assert config.get("restrecord.client.endpoint") == "http://prod"
        assert config.get("restrecord.client.timeout") == 5

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("RESTRECORD_CLIENT_ENDPOINT", "http://env")
        config = Config({"restrecord": {"client": {"endpoint": "http://file"}}})
        assert config.get("restrecord.client.endpoint") == "http://env"

    def test_env_key(self):
        assert Config.env_key("restrecord.client.api-key") == "RESTRECORD_CLIENT_API_KEY"

    def test_placeholders(self, monkeypatch):
        monkeypatch.setenv("RECORDS_HOST", "records.local")
        config = Config(
            {
                "hosts": {"backup": "backup.local"},
                "a": "http://${RECORDS_HOST}/api",
                "b": "http://${hosts.backup}/api",
                "c": "${UNSET_RESTRECORD_VAR:fallback}",
            }
        )
        assert config.get("a") == "http://records.local/api"
        assert config.get("b") == "http://backup.local/api"
        assert config.get("c") == "fallback"

    def test_unresolvable_placeholder(self):
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            Config({"a": "${nowhere.to.be.found}"}).get("a")

    def test_circular_placeholder(self):
        config = Config({"a": "${b}", "b": "x-${a}"})
        with pytest.raises(ValueError, match="Circular placeholder: a -> b -> a"):
            config.get("a")

    def test_empty_fallback(self):
        assert Config({"a": "[${UNSET_RESTRECORD_VAR:}]"}).get("a") == "[]"

    def test_bind_resolves_placeholders(self, monkeypatch):
        monkeypatch.setenv("RECORDS_API_KEY", "from-placeholder")
        config = Config({"restrecord": {"client": {"api-key": "${RECORDS_API_KEY}"}}})
        assert config.bind(ClientProperties).api_key == "from-placeholder"


class TestBind:
    def test_bind_client_properties_with_kebab_keys(self):
        config = Config({"restrecord": {"client": {"endpoint": "http://x", "api-key": "secret", "timeout": 12}}})
        props = config.bind(ClientProperties)
        assert props == ClientProperties(endpoint="http://x", api_key="secret", timeout=12)

    def test_bind_snake_case_keys(self):
        config = Config({"restrecord": {"client": {"api_key": "snake"}}})
        assert config.bind(ClientProperties).api_key == "snake"

    def test_bind_uses_defaults(self):
        assert Config({}).bind(ClientProperties) == ClientProperties()

    def test_bind_coerces_env_strings(self, monkeypatch):
        monkeypatch.setenv("RESTRECORD_CLIENT_TIMEOUT", "45")
        assert Config({}).bind(ClientProperties).timeout == 45

    def test_bind_logging_properties(self):
        config = Config({"restrecord": {"logging": {"format": "json", "level": {"root": "DEBUG"}}}})
        props = config.bind(LoggingProperties)
        assert props.format == "json"
        assert props.level == {"root": "DEBUG"}

    def test_bind_bool(self, monkeypatch):
        @config_properties(prefix="feature")
        @dataclass
        class Feature:
            enabled: bool = False

        monkeypatch.setenv("RESTRECORD_FEATURE_ENABLED", "yes")
        assert Config({}).bind(Feature).enabled is True

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            x: int = 0

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)
