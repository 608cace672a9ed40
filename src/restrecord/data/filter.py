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
"""Typed filter expressions for list queries.

A filter is an ordered list of :data:`FilterExpression` values, ANDed
together on the wire. Each expression is one of three immutable variants:

* :class:`Predicate`: ``field`` / ``operator`` / ``value`` comparison
* :class:`RawExpression`: pre-formatted fragment of the query language
* :class:`OrGroup`: nested expressions combined with OR

Operators are checked against the value's type when a predicate is built,
so an illegal comparison never reaches the network::

    filters = [
        predicate("age", ">", 18),
        predicate("gender", "=", "male"),
        or_group([predicate("city", "=", "Brno"), raw("city=null")]),
    ]

    predicate("name", ">", "Alice")  # raises ValidationMismatchException
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Mapping, Set
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any

from restrecord.kernel.exceptions import ValidationMismatchException


class Operator(StrEnum):
    """Comparison operators of the query language."""

    EQ = "="
    NE = "!="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="


class ValueCategory(StrEnum):
    """Value types that decide which operators a predicate may use."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    SEQUENCE = "sequence"


_EQUALITY = frozenset({Operator.EQ, Operator.NE})
_ORDERING = frozenset(Operator)

LEGAL_OPERATORS: Mapping[ValueCategory, frozenset[Operator]] = {
    ValueCategory.STRING: _EQUALITY,
    ValueCategory.NUMBER: _ORDERING,
    ValueCategory.BOOLEAN: frozenset({Operator.EQ}),
    ValueCategory.DATE: _ORDERING,
    ValueCategory.SEQUENCE: _EQUALITY,
}


@dataclass(frozen=True)
class Predicate:
    """A single ``field`` / ``operator`` / ``value`` comparison."""

    field: str
    operator: Operator
    value: Any = None


@dataclass(frozen=True)
class RawExpression:
    """An unvalidated fragment of the target query language."""

    expression: str

    def __str__(self) -> str:
        return self.expression


@dataclass(frozen=True)
class OrGroup:
    """Expressions combined with OR. May nest any variant, including itself."""

    expressions: tuple[FilterExpression, ...] = ()


FilterExpression = Predicate | RawExpression | OrGroup


def value_category(value: Any) -> ValueCategory | None:
    """Return the category of *value*, or ``None`` when no operator applies to it."""
    # bool is an int subclass and datetime a date subclass; order matters.
    if isinstance(value, bool):
        return ValueCategory.BOOLEAN
    if isinstance(value, int | float | Decimal):
        return ValueCategory.NUMBER
    if isinstance(value, datetime.date):
        return ValueCategory.DATE
    if isinstance(value, str):
        return ValueCategory.STRING
    if isinstance(value, list | tuple | Set):
        return ValueCategory.SEQUENCE
    return None


def legal_operators(value: Any) -> frozenset[Operator]:
    """Operators allowed for *value*. ``None`` has no static type, so all are."""
    if value is None:
        return _ORDERING
    category = value_category(value)
    if category is None:
        return frozenset()
    return LEGAL_OPERATORS[category]


def _coerce_operator(operator: Operator | str) -> Operator:
    try:
        return Operator(operator)
    except ValueError:
        raise ValidationMismatchException(
            f"Unknown filter operator '{operator}'",
            code="FILTER_OPERATOR",
            context={"operator": str(operator)},
        ) from None


def _check(field: str, op: Operator, value: Any, allowed: frozenset[Operator]) -> None:
    if op not in allowed:
        raise ValidationMismatchException(
            f"Operator '{op}' is not allowed for field '{field}' with value of type "
            f"{type(value).__name__}",
            code="FILTER_OPERATOR",
            context={
                "field": field,
                "operator": str(op),
                "allowed": sorted(str(o) for o in allowed),
            },
        )


def predicate(field: str, operator: Operator | str, value: Any) -> Predicate:
    """Build a predicate, rejecting operators illegal for the value's type.

    Raises:
        ValidationMismatchException: If the operator is unknown or not in
            the operator set of the value's category.
    """
    op = _coerce_operator(operator)
    _check(field, op, value, legal_operators(value))
    return Predicate(field=field, operator=op, value=value)


def _category_predicate(
    category: ValueCategory, field: str, operator: Operator | str, value: Any
) -> Predicate:
    op = _coerce_operator(operator)
    if value is not None and value_category(value) is not category:
        raise ValidationMismatchException(
            f"Field '{field}' expects a {category} value, got {type(value).__name__}",
            code="FILTER_VALUE_TYPE",
            context={"field": field, "category": str(category)},
        )
    _check(field, op, value, LEGAL_OPERATORS[category])
    return Predicate(field=field, operator=op, value=value)


def string_predicate(field: str, operator: Operator | str, value: str | None) -> Predicate:
    """Equality or inequality on a text field."""
    return _category_predicate(ValueCategory.STRING, field, operator, value)


def number_predicate(
    field: str, operator: Operator | str, value: int | float | Decimal | None
) -> Predicate:
    """Any comparison on a numeric field."""
    return _category_predicate(ValueCategory.NUMBER, field, operator, value)


def boolean_predicate(field: str, operator: Operator | str, value: bool | None) -> Predicate:
    """Equality on a boolean field."""
    return _category_predicate(ValueCategory.BOOLEAN, field, operator, value)


def date_predicate(
    field: str, operator: Operator | str, value: datetime.date | None
) -> Predicate:
    """Any comparison on a date or date-time field."""
    return _category_predicate(ValueCategory.DATE, field, operator, value)


def sequence_predicate(
    field: str, operator: Operator | str, value: list[Any] | tuple[Any, ...] | None
) -> Predicate:
    """Equality or inequality against a list of values or identified records."""
    return _category_predicate(ValueCategory.SEQUENCE, field, operator, value)


def raw(expression: str) -> RawExpression:
    """Wrap a pre-formatted query fragment. The caller owns its syntax."""
    return RawExpression(expression)


def or_group(expressions: Iterable[FilterExpression]) -> OrGroup:
    """Combine *expressions* with OR. An empty group is legal."""
    return OrGroup(tuple(expressions))
