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
"""Tests for structlog configuration and credential redaction."""

import logging

import structlog

from restrecord.core.config import Config
from restrecord.logging import REDACTED, configure_logging, get_logger, redact_credentials


class TestRedactCredentials:
    def test_masks_top_level_keys(self):
        event = {"event": "request_sent", "token": "abc", "api_key": "k", "path": "/users"}
        result = redact_credentials(None, "info", event)
        assert result == {"event": "request_sent", "token": REDACTED, "api_key": REDACTED, "path": "/users"}

    def test_masks_header_mapping(self):
        event = {
            "event": "request_sent",
            "headers": {"Authorization": "Bearer abc", "X-API-Key": "k", "Accept": "application/json"},
        }
        result = redact_credentials(None, "debug", event)
        assert result["headers"] == {"Authorization": REDACTED, "X-API-Key": REDACTED, "Accept": "application/json"}

    def test_empty_values_are_left_alone(self):
        event = {"event": "x", "token": ""}
        assert redact_credentials(None, "info", event)["token"] == ""

    def test_other_events_untouched(self):
        event = {"event": "file_saved", "path": "/tmp/list.xls", "size": 3}
        assert redact_credentials(None, "info", dict(event)) == event


class TestConfigureLogging:
    def test_defaults(self):
        props = configure_logging()
        assert props.format == "console"
        assert props.level == {"root": "INFO"}
        assert logging.getLogger().level == logging.INFO

    def test_reads_root_level(self):
        configure_logging(Config({"restrecord": {"logging": {"level": {"root": "debug"}}}}))
        assert logging.getLogger().level == logging.DEBUG

    def test_applies_logger_levels(self):
        config = Config({"restrecord": {"logging": {"level": {"root": "INFO", "restrecord.client": "warning"}}}})
        configure_logging(config)
        assert logging.getLogger("restrecord.client").level == logging.WARNING

    def test_json_format_uses_redaction_and_json_renderer(self):
        props = configure_logging(Config({"restrecord": {"logging": {"format": "JSON"}}}))
        processors = structlog.get_config()["processors"]
        assert props.format == "JSON"
        assert redact_credentials in processors
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_format(self):
        configure_logging(Config({}))
        assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)

    def test_get_logger(self):
        assert get_logger("restrecord.test") is not None
