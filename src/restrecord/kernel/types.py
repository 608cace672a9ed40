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
"""Wire-level result types shared by every API operation.

The backend answers non-list operations with an :class:`OperationResponse`:
an ordered list of severity-tagged messages plus the identifier of the
affected record. Failures on the network path reuse the same shape.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

EMPTY_GUID = "00000000-0000-0000-0000-000000000000"


class ServerMessageType(IntEnum):
    """Severity of a message sent by the server."""

    ERROR = 1
    WARNING = 2
    INFO = 3


@dataclass(frozen=True)
class ServerMessage:
    """A single message from the server."""

    type: ServerMessageType
    code: int
    message: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ServerMessage:
        """Lenient parse: unknown types become ERROR, non-integer codes -1."""
        message = data.get("message")
        return cls(
            type=_message_type(data.get("type")),
            code=_message_code(data.get("code")),
            message="" if message is None else str(message),
        )


def _message_type(value: Any) -> ServerMessageType:
    try:
        return ServerMessageType(int(value))
    except (TypeError, ValueError):
        return ServerMessageType.ERROR


def _message_code(value: Any) -> int:
    if isinstance(value, bool):
        return -1
    try:
        return int(value)
    except (TypeError, ValueError):
        return -1


@dataclass
class OperationResponse:
    """Standard answer to an operation (create, update, delete or custom).

    ``id`` is the affected record: a numeric id or a string key such as
    :data:`EMPTY_GUID` for "no id".
    """

    messages: list[ServerMessage] = field(default_factory=list)
    id: int | str = -1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OperationResponse:
        """Entries of ``messages`` that are not objects are skipped."""
        return cls(
            messages=[ServerMessage.from_dict(m) for m in data.get("messages") or [] if isinstance(m, Mapping)],
            id=data.get("id", -1),
        )

    @classmethod
    def error(cls, message: str) -> OperationResponse:
        """Synthesize a single-error response for failures without a server body."""
        return cls(messages=[ServerMessage(ServerMessageType.ERROR, -1, message)], id=-1)

    @property
    def errors(self) -> list[ServerMessage]:
        return [m for m in self.messages if m.type is ServerMessageType.ERROR]

    def to_dict(self) -> dict[str, Any]:
        return {
            "messages": [
                {**dataclasses.asdict(m), "type": int(m.type)} for m in self.messages
            ],
            "id": self.id,
        }


@dataclass(frozen=True)
class RequestOptions:
    """Per-call switches that only change how a failure is surfaced."""

    suppress_error_notification: bool = False
    notification_in_dialog: bool = False


def is_operation_response(response: Any) -> bool:
    """Whether *response* carries a server message list."""
    if isinstance(response, OperationResponse):
        return True
    return isinstance(response, dict) and isinstance(response.get("messages"), list)


def get_error_message(err: Any, fallback_message: str) -> str:
    """Join the messages of an operation response, or return *fallback_message*.

    Accepts an :class:`OperationResponse`, its wire dict, or an exception
    carrying one in ``response``.
    """
    candidate = getattr(err, "response", err)
    if not is_operation_response(candidate):
        return fallback_message
    if isinstance(candidate, dict):
        candidate = OperationResponse.from_dict(candidate)
    return ". ".join(m.message for m in candidate.messages) + "."
