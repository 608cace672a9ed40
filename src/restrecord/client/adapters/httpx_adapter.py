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
"""httpx-based HTTP client adapter."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import httpx

from restrecord.kernel.exceptions import TransportFailureException


class HttpxClientAdapter:
    """HTTP client adapter backed by httpx.AsyncClient.

    Non-2xx responses are returned as-is; request errors (connection,
    DNS, timeout, undecodable body, redirect loop) are raised as
    :class:`TransportFailureException`.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: timedelta = timedelta(seconds=30),
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout.total_seconds(),
            headers=headers or {},
            transport=transport,
        )

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise TransportFailureException(
                str(exc) or type(exc).__name__,
                code="TRANSPORT",
                context={"method": method, "url": url},
            ) from exc

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
