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
"""Tests for EntityApi routing on top of RestApi."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx
import pytest

from restrecord.client.entity_api import EntityApi
from restrecord.client.rest_api import RestApi
from restrecord.data.query import Query


@dataclass
class User:
    id: int
    name: str


class FakeFileSaver:
    def __init__(self) -> None:
        self.saved: list[tuple[bytes, str]] = []

    async def save(self, content: bytes, file_name: str) -> None:
        self.saved.append((content, file_name))


class Backend:
    """Answers every request with a canned body and remembers the request."""

    def __init__(self, body: Any = None, content: bytes | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._body = body if body is not None else {"messages": [], "id": 1}
        self._content = content

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._content is not None:
            return httpx.Response(200, content=self._content)
        return httpx.Response(200, json=self._body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def users_api(backend: Backend, file_saver: FakeFileSaver | None = None, **kwargs: Any) -> EntityApi:
    api = (
        RestApi.rest("users")
        .base_url("http://api.example.com")
        .api_key("k")
        .file_saver(file_saver or FakeFileSaver())
        .transport(httpx.MockTransport(backend))
        .build()
    )
    return EntityApi(api, "/users/", **kwargs)


class TestEntityApi:
    @pytest.mark.asyncio
    async def test_load(self) -> None:
        backend = Backend({"id": 42, "name": "Jana"})
        users = users_api(backend)

        assert await users.load(42) == {"id": 42, "name": "Jana"}
        assert backend.last.method == "GET"
        assert backend.last.url.path == "/users/42"

    @pytest.mark.asyncio
    async def test_load_with_item_factory(self) -> None:
        users = users_api(Backend({"id": 42, "name": "Jana"}), item_factory=lambda d: User(**d))
        assert await users.load(42) == User(42, "Jana")

    @pytest.mark.asyncio
    async def test_create_puts_to_zero(self) -> None:
        backend = Backend({"messages": [], "id": 7})
        users = users_api(backend)

        result = await users.create({"name": "Petr"})

        assert result["id"] == 7
        assert backend.last.method == "PUT"
        assert backend.last.url.path == "/users/0"
        assert json.loads(backend.last.content) == {"name": "Petr"}

    @pytest.mark.asyncio
    async def test_update_uses_entity_id(self) -> None:
        backend = Backend()
        users = users_api(backend)

        await users.update({"id": 5, "name": "Eva"})
        assert backend.last.url.path == "/users/5"

        await users.update(User(6, "Adam"))
        assert backend.last.url.path == "/users/6"
        assert json.loads(backend.last.content) == {"id": 6, "name": "Adam"}

    @pytest.mark.asyncio
    async def test_remove_and_restore(self) -> None:
        backend = Backend()
        users = users_api(backend)

        await users.remove(3)
        assert (backend.last.method, backend.last.url.path) == ("DELETE", "/users/3")

        await users.restore(3)
        assert (backend.last.method, backend.last.url.path) == ("POST", "/users/3/restore")

    @pytest.mark.asyncio
    async def test_bulk_operations_send_id_list(self) -> None:
        backend = Backend()
        users = users_api(backend)

        await users.bulk_remove((1, 2, 3))
        assert backend.last.url.path == "/users/bulk/delete"
        assert json.loads(backend.last.content) == [1, 2, 3]

        await users.bulk_restore([4])
        assert backend.last.url.path == "/users/bulk/restore"
        assert json.loads(backend.last.content) == [4]

    @pytest.mark.asyncio
    async def test_load_list(self) -> None:
        body = {
            "data": [{"id": 1, "name": "Jana"}],
            "pagination": {"object_count": 1, "page": 1, "per_page": 25},
        }
        backend = Backend(body)
        users = users_api(backend, item_factory=lambda d: User(**d))

        result = await users.load_list(Query(page=1, page_size=25))

        assert backend.last.url.path == "/users"
        assert result.data == [User(1, "Jana")]

    @pytest.mark.asyncio
    async def test_download_list(self) -> None:
        backend = Backend(content=b"xls")
        saver = FakeFileSaver()
        users = users_api(backend, saver)

        await users.download_list(Query(sort=["name"]))

        assert backend.last.url.path == "/users/export"
        assert backend.last.url.params["file_type"] == "xls"
        assert saver.saved == [(b"xls", "list.xls")]
