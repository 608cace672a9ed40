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
"""List query descriptor and its flattened wire form."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from restrecord.data.filter import FilterExpression

Direction = Literal["asc", "desc"]
SortSpec = str | tuple[str, Direction]


@dataclass(frozen=True)
class Order:
    """A single sort order: field name + direction."""

    field: str
    direction: Direction = "asc"

    def __post_init__(self) -> None:
        if self.direction not in ("asc", "desc"):
            raise ValueError(f"direction must be 'asc' or 'desc', got {self.direction!r}")

    @staticmethod
    def asc(field: str) -> Order:
        """Create an ascending order for the given field."""
        return Order(field=field, direction="asc")

    @staticmethod
    def desc(field: str) -> Order:
        """Create a descending order for the given field."""
        return Order(field=field, direction="desc")

    @staticmethod
    def of(spec: SortSpec | Order) -> Order:
        """Normalize ``"field"`` or ``("field", direction)``; bare names sort ascending."""
        if isinstance(spec, Order):
            return spec
        if isinstance(spec, str):
            return Order.asc(spec)
        field, direction = spec
        return Order(field=field, direction=direction)


@dataclass(frozen=True)
class Query:
    """Request for a filtered, sorted and paged list of records.

    Attributes:
        search: Free-text search phrase.
        filter: Filter expressions, ANDed together.
        fields: Names of the fields to return.
        page: 1-based page number.
        page_size: Records per page.
        sort: Field names (ascending) or ``(field, "asc" | "desc")`` pairs.
        include_deleted: Include soft-deleted records.
        disable_count: Skip the total-count computation.
    """

    search: str | None = None
    filter: Sequence[FilterExpression] | None = None
    fields: Sequence[str] | None = None
    page: int | None = None
    page_size: int | None = None
    sort: Sequence[SortSpec | Order] | None = None
    include_deleted: bool | None = None
    disable_count: bool | None = None

    def __post_init__(self) -> None:
        if self.page is not None and self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.page_size is not None and self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")

    @property
    def orders(self) -> tuple[Order, ...]:
        return tuple(Order.of(s) for s in self.sort or ())

    def next(self) -> Query:
        """Return the same query for the next page."""
        return self._with_page((self.page or 1) + 1)

    def previous(self) -> Query:
        """Return the same query for the previous page (min page 1)."""
        return self._with_page(max(1, (self.page or 1) - 1))

    def _with_page(self, page: int) -> Query:
        return dataclasses.replace(self, page=page)


@dataclass(frozen=True)
class TransportQuery:
    """A :class:`Query` flattened to the backend's wire names.

    ``filter`` holds the serialized query-language string and sort orders
    are split into comma-joined ascending and descending field lists.
    """

    fulltext: str | None = None
    filter: str | None = None
    fields: list[str] | None = None
    page: int | None = None
    per_page: int | None = None
    sort_fields: str | None = None
    sort_fields_desc: str | None = None
    deleted: bool | None = None
    disable_count: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        """Wire representation; absent entries are omitted."""
        values = {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        return {k: v for k, v in values.items() if v is not None}
