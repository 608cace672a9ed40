"""Outbound ports: transport and the collaborators of the request executor."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HttpResponse(Protocol):
    """The parts of an HTTP response the executor reads."""

    status_code: int

    @property
    def content(self) -> bytes: ...

    @property
    def text(self) -> str: ...


@runtime_checkable
class HttpClientPort(Protocol):
    """Abstract HTTP client interface.

    Must return non-2xx responses instead of raising, and raise
    :class:`~restrecord.kernel.exceptions.TransportFailureException` when no
    response was received.
    """

    async def request(self, method: str, url: str, **kwargs: Any) -> HttpResponse: ...

    async def close(self) -> None: ...


@runtime_checkable
class CredentialProvider(Protocol):
    """Supplies the bearer token and is told when the server rejects it."""

    async def get_token(self) -> str:
        """Current token; an empty string sends no Authorization header."""
        ...

    async def on_unauthorized(self) -> None:
        """Invalidate the current token after a 401."""
        ...


@runtime_checkable
class NotificationSink(Protocol):
    """Presents failure messages to the user."""

    async def alert(self, message: str, *, in_dialog: bool = False) -> None: ...


@runtime_checkable
class FileSaver(Protocol):
    """Persists or presents a downloaded file."""

    async def save(self, content: bytes, file_name: str) -> None: ...
