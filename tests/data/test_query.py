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
"""Tests for Query, Order, TransportQuery and the list envelope."""

from __future__ import annotations

import pytest

from restrecord.data.page import FieldMetadata, ListResponse, Pagination
from restrecord.data.query import Order, Query, TransportQuery

# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------


class TestOrder:
    def test_factories(self) -> None:
        assert Order.asc("name") == Order("name", "asc")
        assert Order.desc("age") == Order("age", "desc")

    def test_default_direction_is_asc(self) -> None:
        assert Order(field="email").direction == "asc"

    def test_of_bare_name(self) -> None:
        assert Order.of("firstName") == Order.asc("firstName")

    def test_of_pair(self) -> None:
        assert Order.of(("lastName", "desc")) == Order.desc("lastName")

    def test_of_order_is_identity(self) -> None:
        order = Order.desc("x")
        assert Order.of(order) is order

    def test_rejects_unknown_direction(self) -> None:
        with pytest.raises(ValueError, match="direction"):
            Order("x", "down")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


class TestQuery:
    def test_defaults_are_absent(self) -> None:
        q = Query()
        assert q.filter is None
        assert q.page is None
        assert q.orders == ()

    def test_page_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="page must be >= 1"):
            Query(page=0)

    def test_page_size_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="page_size must be >= 1"):
            Query(page_size=0)

    def test_next_and_previous(self) -> None:
        q = Query(page=2, page_size=10, search="x")
        assert q.next().page == 3
        assert q.next().search == "x"
        assert q.previous().page == 1
        assert Query(page=1).previous().page == 1

    def test_next_from_unpaged(self) -> None:
        assert Query().next().page == 2


class TestTransportQuery:
    def test_to_dict_omits_absent(self) -> None:
        tq = TransportQuery(page=1, per_page=30, filter="")
        assert tq.to_dict() == {"page": 1, "per_page": 30, "filter": ""}


# ---------------------------------------------------------------------------
# Pagination / ListResponse
# ---------------------------------------------------------------------------


class TestPagination:
    def test_total_pages(self) -> None:
        assert Pagination(object_count=51, page=1, per_page=25).total_pages == 3

    def test_zero_items(self) -> None:
        p = Pagination(object_count=0)
        assert p.total_pages == 0
        assert not p.has_next

    def test_has_next_and_previous(self) -> None:
        p = Pagination(object_count=30, page=2, per_page=10)
        assert p.has_next
        assert p.has_previous

    def test_from_dict(self) -> None:
        p = Pagination.from_dict({"object_count": 7, "page": 2, "per_page": 5})
        assert p == Pagination(7, 2, 5)


class TestListResponse:
    PAYLOAD = {
        "data": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}],
        "message": None,
        "pagination": {"object_count": 2, "page": 1, "per_page": 25},
        "structure": [{"name": "id"}, {"name": "name"}],
    }

    def test_from_dict(self) -> None:
        response = ListResponse.from_dict(self.PAYLOAD)
        assert [i["name"] for i in response.data] == ["Alice", "Bob"]
        assert response.message is None
        assert response.pagination.object_count == 2
        assert response.structure == [FieldMetadata("id"), FieldMetadata("name")]

    def test_from_dict_with_item_factory(self) -> None:
        response = ListResponse.from_dict(self.PAYLOAD, lambda d: d["id"])
        assert response.data == [1, 2]

    def test_structure_is_optional(self) -> None:
        response = ListResponse.from_dict({"data": [], "pagination": {}})
        assert response.structure is None
        assert response.pagination == Pagination()

    def test_map_keeps_metadata(self) -> None:
        response = ListResponse.from_dict(self.PAYLOAD).map(lambda d: d["name"].upper())
        assert response.data == ["ALICE", "BOB"]
        assert response.pagination.object_count == 2

    def test_empty_envelope(self) -> None:
        empty = ListResponse.empty()
        assert empty.data == []
        assert empty.message == ""
        assert empty.pagination == Pagination(object_count=0, page=1, per_page=25)
