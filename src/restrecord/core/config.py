# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Client configuration from YAML/TOML files, env vars, and dataclass binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__restrecord_config_prefix__"

_ENV_PREFIX = "RESTRECORD_"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="restrecord.client")
        @dataclass
        class ClientProperties:
            endpoint: str = ""
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (RESTRECORD_SECTION_KEY format)
    2. Configuration dict / YAML / TOML file values
    3. Package defaults and dataclass defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load configuration from a YAML or TOML file.

        Merge order (later wins): package defaults, *path*, then one
        ``<stem>-<profile><suffix>`` overlay per active profile.
        A missing *path* leaves only the defaults.
        """
        path = Path(path)
        data = cls._load_package_defaults() if load_defaults else {}

        if path.exists():
            data = cls._deep_merge(data, cls._load_config_data(path))
            for profile in active_profiles or []:
                profile_path = path.parent / f"{path.stem}-{profile}{path.suffix}"
                if profile_path.exists():
                    data = cls._deep_merge(data, cls._load_config_data(profile_path))

        return cls(data)

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        """Load config data from a YAML or TOML file."""
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _load_package_defaults() -> dict[str, Any]:
        """Load built-in defaults from restrecord.resources."""
        defaults_file = importlib.resources.files("restrecord.resources").joinpath("restrecord-defaults.yaml")
        with importlib.resources.as_file(defaults_file) as p, open(p) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge override into base, with override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    @staticmethod
    def env_key(key: str) -> str:
        """Environment variable overriding *key*: restrecord.client.api-key -> RESTRECORD_CLIENT_API_KEY."""
        base = key.removeprefix("restrecord.")
        return _ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        Strings may reference other values as ``${NAME}`` (environment
        variable or config key) with an optional fallback, ``${NAME:fallback}``.
        This keeps secrets such as the API key out of config files::

            restrecord:
              client:
                api-key: ${RECORDS_API_KEY}
        """
        env_val = os.environ.get(self.env_key(key))
        if env_val is not None:
            return env_val

        current = self._lookup(key)
        if current is None:
            return default
        if isinstance(current, str):
            return self._expand(current, (key,))
        return current

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    def _expand(self, value: str, chain: tuple[str, ...]) -> str:
        """Substitute placeholders in *value*; *chain* holds the keys being expanded."""

        def substitute(match: re.Match[str]) -> str:
            name, _, fallback = match.group(1).partition(":")
            if name in chain:
                raise ValueError(f"Circular placeholder: {' -> '.join((*chain, name))}")

            env_val = os.environ.get(name)
            if env_val is not None:
                return env_val
            referenced = self._lookup(name)
            if referenced is not None:
                return self._expand(str(referenced), (*chain, name))
            if match.group(1) != name:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{name}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(substitute, value)

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a @config_properties dataclass.

        Keys may use kebab-case (``api-key``) for snake_case fields, and each
        field can be overridden by its environment variable.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name.replace('_', '-')}")
            if value is None:
                value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            expected_type = hints.get(field.name)
            if expected_type is int and isinstance(value, str):
                value = int(value)
            elif expected_type is float and isinstance(value, str):
                value = float(value)
            elif expected_type is bool and isinstance(value, str):
                value = value.lower() in ("true", "1", "yes")
            kwargs[field.name] = value

        return config_cls(**kwargs)
