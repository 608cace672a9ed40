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
"""Standard per-entity API: the set of operations every record type exposes."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from restrecord.client.rest_api import RestApi
from restrecord.data.page import ListResponse
from restrecord.data.query import Query

T = TypeVar("T")

EntityId = int | str


class EntityApi(Generic[T]):
    """CRUD, soft-delete and list operations under one root *path*.

    Every method delegates to :class:`RestApi` without extra logic::

        users = EntityApi(api, "/users")
        user = await users.load(42)
        await users.update({**user, "first_name": "Jana"})
    """

    export_file_name = "list.xls"

    def __init__(
        self,
        api: RestApi,
        path: str,
        item_factory: Callable[[Any], T] | None = None,
    ) -> None:
        self.api = api
        self.path = path.rstrip("/")
        self._item_factory = item_factory

    def _url(self, *parts: Any) -> str:
        return "/".join([self.path, *(str(p) for p in parts)])

    async def load(self, id: EntityId) -> T:
        """Load a single entity."""
        data = await self.api.get(self._url(id), {})
        return self._item_factory(data) if self._item_factory else data

    async def create(self, entity: Any) -> Any:
        """Create a new entity (id 0 means "new")."""
        return await self.api.put(self._url(0), entity)

    async def update(self, entity: Any) -> Any:
        """Update an existing entity, addressed by its own ``id``."""
        return await self.api.put(self._url(_entity_id(entity)), entity)

    async def remove(self, id: EntityId) -> Any:
        """Remove an entity (moves it among deleted records)."""
        return await self.api.delete(self._url(id))

    async def restore(self, id: EntityId) -> Any:
        """Restore a removed entity."""
        return await self.api.post(self._url(id, "restore"), {})

    async def bulk_remove(self, ids: Sequence[EntityId]) -> Any:
        return await self.api.post(self._url("bulk", "delete"), list(ids))

    async def bulk_restore(self, ids: Sequence[EntityId]) -> Any:
        return await self.api.post(self._url("bulk", "restore"), list(ids))

    async def load_list(self, query: Query | None = None) -> ListResponse[T]:
        """Load entities matching *query*."""
        return await self.api.load_list(self.path, query, item_factory=self._item_factory)

    async def download_list(self, query: Query | None = None) -> None:
        """Export entities matching *query* as a spreadsheet."""
        await self.api.download_list(
            self._url("export") + "?file_type=xls",
            self.export_file_name,
            query,
        )


def _entity_id(entity: Any) -> EntityId:
    if isinstance(entity, dict):
        return entity["id"]
    return entity.id
