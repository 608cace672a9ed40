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
"""Date revival for JSON responses.

Every string in a decoded payload that fully matches an ISO-8601 date-time
with an offset or ``Z`` suffix becomes an aware :class:`datetime`. The
check is a blanket heuristic over all values, not a per-field schema, so
other date formats stay strings.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any

_ISO_DATETIME_RE = re.compile(
    r"\d{4}-[01]\d-[0-3]\dT[0-2]\d:[0-5]\d:[0-5]\d(?:\.\d+)?(?:[+-][0-2]\d:[0-5]\d|Z)"
)


def is_iso_datetime(value: str) -> bool:
    """Whether *value* is exactly an ISO-8601 date-time (``"2024 units"`` is not)."""
    return _ISO_DATETIME_RE.fullmatch(value) is not None


def revive_dates(value: Any) -> Any:
    """Convert date-time strings to datetimes, recursively."""
    if isinstance(value, str):
        if is_iso_datetime(value):
            try:
                return datetime.fromisoformat(value)
            except ValueError:
                # pattern allows e.g. month 19
                return value
        return value
    if isinstance(value, dict):
        return {k: revive_dates(v) for k, v in value.items()}
    if isinstance(value, list):
        return [revive_dates(v) for v in value]
    return value


def parse_json(text: str) -> Any:
    """Decode a JSON body and revive its dates. An empty body decodes to ``None``."""
    if not text.strip():
        return None
    return revive_dates(json.loads(text))
