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
"""List envelope returned by the backend for paginated queries."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE_SIZE = 25


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata of a list response.

    Attributes:
        object_count: Total number of records across all pages.
        page: Current page number (1-based).
        per_page: Maximum records per page.
    """

    object_count: int = 0
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        """Total number of pages."""
        if self.object_count == 0 or self.per_page <= 0:
            return 0
        return math.ceil(self.object_count / self.per_page)

    @property
    def has_next(self) -> bool:
        """Whether there is a next page."""
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        """Whether there is a previous page."""
        return self.page > 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Pagination:
        return cls(
            object_count=int(data.get("object_count") or 0),
            page=int(data.get("page") or 1),
            per_page=int(data.get("per_page") or DEFAULT_PAGE_SIZE),
        )


@dataclass(frozen=True)
class FieldMetadata:
    """Field description the server may attach for dynamic UIs."""

    name: str


@dataclass(frozen=True)
class ListResponse(Generic[T]):
    """A page of records with the server message and pagination metadata."""

    data: list[T] = field(default_factory=list)
    message: str | None = None
    pagination: Pagination = field(default_factory=Pagination)
    structure: list[FieldMetadata] | None = None

    @staticmethod
    def empty(per_page: int = DEFAULT_PAGE_SIZE) -> ListResponse[Any]:
        """Default envelope used before the first page is loaded."""
        return ListResponse(data=[], message="", pagination=Pagination(0, 1, per_page))

    @staticmethod
    def from_dict(
        payload: dict[str, Any],
        item_factory: Callable[[Any], T] | None = None,
    ) -> ListResponse[T]:
        """Build from the decoded wire payload, optionally converting each record."""
        items = list(payload.get("data") or [])
        structure = payload.get("structure")
        return ListResponse(
            data=[item_factory(i) for i in items] if item_factory else items,
            message=payload.get("message"),
            pagination=Pagination.from_dict(payload.get("pagination") or {}),
            structure=[FieldMetadata(name=s["name"]) for s in structure] if structure is not None else None,
        )

    def map(self, func: Callable[[T], U]) -> ListResponse[U]:
        """Transform records, preserving message and pagination metadata."""
        return ListResponse(
            data=[func(item) for item in self.data],
            message=self.message,
            pagination=self.pagination,
            structure=self.structure,
        )
