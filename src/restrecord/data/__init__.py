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
"""restrecord Data: typed filters, list queries and their wire serialization."""

from restrecord.data.filter import (
    FilterExpression,
    Operator,
    OrGroup,
    Predicate,
    RawExpression,
    ValueCategory,
    boolean_predicate,
    date_predicate,
    legal_operators,
    number_predicate,
    or_group,
    predicate,
    raw,
    sequence_predicate,
    string_predicate,
    value_category,
)
from restrecord.data.page import FieldMetadata, ListResponse, Pagination
from restrecord.data.query import Order, Query, TransportQuery
from restrecord.data.serializer import Joiner, render_value, serialize, to_transport_query

__all__ = [
    # Filter model
    "FilterExpression",
    "Operator",
    "OrGroup",
    "Predicate",
    "RawExpression",
    "ValueCategory",
    "boolean_predicate",
    "date_predicate",
    "legal_operators",
    "number_predicate",
    "or_group",
    "predicate",
    "raw",
    "sequence_predicate",
    "string_predicate",
    "value_category",
    # Query
    "Order",
    "Query",
    "TransportQuery",
    # Serialization
    "Joiner",
    "render_value",
    "serialize",
    "to_transport_query",
    # Envelopes
    "FieldMetadata",
    "ListResponse",
    "Pagination",
]
