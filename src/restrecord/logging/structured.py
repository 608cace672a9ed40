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
"""Structured logging configuration using structlog.

Configured from the ``restrecord.logging`` section::

    restrecord:
      logging:
        format: json          # or console
        level:
          root: INFO
          restrecord.client.rest_api: DEBUG

Credentials never reach the output: :func:`redact_credentials` runs before
the renderer.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, MutableMapping
from typing import Any

import structlog

from restrecord.config.properties.logging import LoggingProperties
from restrecord.core.config import Config

REDACTED = "***"

_SENSITIVE_KEYS = frozenset({"authorization", "x-api-key", "api_key", "api-key", "token"})


def _mask(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return {k: REDACTED if k.lower() in _SENSITIVE_KEYS and v else v for k, v in mapping.items()}


def redact_credentials(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking bearer tokens and API keys."""
    for key, value in list(event_dict.items()):
        if key.lower() in _SENSITIVE_KEYS and value:
            event_dict[key] = REDACTED
        elif key == "headers" and isinstance(value, Mapping):
            event_dict[key] = _mask(value)
    return event_dict


def configure_logging(config: Config | None = None) -> LoggingProperties:
    """Configure structlog and stdlib levels from *config*.

    Returns the bound :class:`LoggingProperties` so callers can inspect
    what was applied.
    """
    props = (config or Config()).bind(LoggingProperties)
    levels = {name: str(level).upper() for name, level in dict(props.level).items()}
    root_level = levels.pop("root", "INFO")
    json_output = str(props.format).lower() == "json"

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_credentials,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, root_level, logging.INFO),
        force=True,
    )
    for name, level in levels.items():
        logging.getLogger(name).setLevel(getattr(logging, level, logging.INFO))

    return props


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger by name."""
    return structlog.get_logger(name)
