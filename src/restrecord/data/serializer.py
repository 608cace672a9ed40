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
"""Serialization of filter expressions into the backend query language.

The grammar is part of the contract with the remote service and is
reproduced verbatim:

* a predicate renders as ``<field><operator><value>`` with no spaces
* fragments are joined with the joiner padded by two spaces on each side
* raw expressions and OR groups are wrapped in parentheses
* strings are double-quoted, lists render as ``[a,b,c]``

Serialization runs in two passes. Expressions whose value is empty are
elided first, so that a missing filter and a filter with an empty value
produce the same (empty) fragment, then the survivors are rendered.

Example::

    serialize([predicate("age", ">", 18), predicate("gender", "=", "male")])
    # 'age>18  &  gender="male"'
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping, Sequence, Set
from enum import Enum, StrEnum
from typing import Any

from restrecord.data.filter import FilterExpression, OrGroup, Predicate, RawExpression
from restrecord.data.query import Query, TransportQuery


class Joiner(StrEnum):
    """Logical connective between rendered fragments."""

    AND = "&"
    OR = "||"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, list | tuple | Set)


def has_value(expression: FilterExpression) -> bool:
    """Whether *expression* survives elision."""
    match expression:
        case RawExpression(expression=text):
            return text.strip() != ""
        case OrGroup(expressions=members):
            return any(has_value(m) for m in members)
        case Predicate(value=value):
            if value is None:
                return False
            if isinstance(value, str):
                return value.strip() != ""
            if _is_sequence(value):
                return len(value) > 0
            return True
    raise TypeError(f"Not a filter expression: {expression!r}")


def format_datetime(value: datetime.date) -> str:
    """ISO-8601 form of a date; date-times are rendered in UTC with milliseconds."""
    if not isinstance(value, datetime.datetime):
        return value.isoformat()
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.UTC)
    utc = value.astimezone(datetime.UTC)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _render_scalar(value: Any) -> str:
    if isinstance(value, Enum):
        return _render_scalar(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None:
        return "null"
    return str(value)


def _identifier(item: Any) -> Any:
    if isinstance(item, Mapping):
        identifier = item.get("id")
    else:
        identifier = getattr(item, "id", None)
    return item if identifier is None else identifier


def render_value(value: Any) -> str:
    """Render a predicate value in the query language."""
    if isinstance(value, datetime.date):
        return format_datetime(value)
    if _is_sequence(value):
        rendered = []
        for item in value:
            item = _identifier(item)
            if isinstance(item, Enum):
                item = item.value
            rendered.append(f'"{item}"' if isinstance(item, str) else _render_scalar(item))
        return "[" + ",".join(rendered) + "]"
    if isinstance(value, str):
        return f'"{value}"'
    return _render_scalar(value)


def _render(expression: FilterExpression) -> str:
    match expression:
        case RawExpression(expression=text):
            return f"({text})"
        case OrGroup(expressions=members):
            return f"({serialize(members, Joiner.OR)})"
        case Predicate(field=field, operator=operator, value=value):
            return f"{field}{operator}{render_value(value)}"
    raise TypeError(f"Not a filter expression: {expression!r}")


def _joiner(joiner: Joiner | str) -> Joiner:
    # accepts "AND" / "OR" as well as the wire tokens
    if joiner.upper() in Joiner.__members__:
        return Joiner[joiner.upper()]
    return Joiner(joiner)


def serialize(expressions: Sequence[FilterExpression], joiner: Joiner | str = Joiner.AND) -> str:
    """Render *expressions* joined by *joiner*; empty string when nothing survives.

    Nested OR groups always join their members with ``||``, whatever the
    outer joiner is.
    """
    separator = f"  {_joiner(joiner)}  "
    return separator.join(_render(e) for e in expressions if has_value(e))


def to_transport_query(query: Query) -> TransportQuery:
    """Flatten *query* into the form sent to the backend."""
    orders = query.orders
    ascending = [o.field for o in orders if o.direction == "asc"]
    descending = [o.field for o in orders if o.direction == "desc"]
    return TransportQuery(
        fulltext=query.search,
        filter=serialize(query.filter, Joiner.AND) if query.filter is not None else None,
        fields=list(query.fields) if query.fields is not None else None,
        page=query.page,
        per_page=query.page_size,
        sort_fields=",".join(ascending) if ascending else None,
        sort_fields_desc=",".join(descending) if descending else None,
        deleted=query.include_deleted,
        disable_count=query.disable_count,
    )
