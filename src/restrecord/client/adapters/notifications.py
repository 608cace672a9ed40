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
"""Default notification sink: failure messages go to the log."""

from __future__ import annotations

from typing import Any

import structlog


class LoggingNotificationSink:
    """Writes alerts to a structlog logger instead of a UI."""

    def __init__(self, logger: Any | None = None) -> None:
        self._logger = logger or structlog.get_logger("restrecord.notifications")

    async def alert(self, message: str, *, in_dialog: bool = False) -> None:
        self._logger.warning("alert", message=message, in_dialog=in_dialog)
