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
"""Simple credential providers.

Token acquisition itself (OAuth flows, refresh) belongs to the host
application; these cover the anonymous and fixed-token cases.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger("restrecord.client.credentials")


class AnonymousCredentials:
    """No Authorization header; invalidation is a no-op."""

    async def get_token(self) -> str:
        return ""

    async def on_unauthorized(self) -> None:
        return None


class StaticTokenCredentials:
    """A fixed bearer token, dropped once the server rejects it."""

    def __init__(self, token: str) -> None:
        self._token = token

    async def get_token(self) -> str:
        return self._token

    async def on_unauthorized(self) -> None:
        logger.info("credentials_invalidated")
        self._token = ""
