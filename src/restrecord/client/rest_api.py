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
"""Request executor for the record backend.

Each call goes through the same steps:

1. **Build**: POST/PUT payloads are JSON (or multipart for
   :class:`FormData`), GET/DELETE payloads become query parameters.
2. **Authenticate**: the bearer token is fetched from the credential
   provider and the API key header is added, right before sending.
3. **Send and decode**: JSON bodies get their ISO-8601 strings revived to
   datetimes; blob and download calls keep the raw bytes.
4. **Classify**: 2xx returns the body; 401 invalidates the credential
   once; every failure is reported to the notification sink (unless
   suppressed) and raised as a :mod:`restrecord.kernel` exception.

There is no retry, queue or shared per-request state: concurrent calls
are independent.
"""

from __future__ import annotations

import dataclasses
import datetime
import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Literal, TypeVar

import httpx
import structlog

from restrecord.client.adapters.credentials import AnonymousCredentials
from restrecord.client.adapters.file_saver import DirectoryFileSaver
from restrecord.client.adapters.httpx_adapter import HttpxClientAdapter
from restrecord.client.adapters.notifications import LoggingNotificationSink
from restrecord.client.dates import parse_json
from restrecord.client.ports.outbound import (
    CredentialProvider,
    FileSaver,
    HttpClientPort,
    HttpResponse,
    NotificationSink,
)
from restrecord.config.properties.client import ClientProperties
from restrecord.core.config import Config
from restrecord.data.page import ListResponse
from restrecord.data.query import Query
from restrecord.data.serializer import format_datetime, to_transport_query
from restrecord.kernel.exceptions import (
    InfrastructureException,
    ServerException,
    TransportFailureException,
    UnauthorizedException,
)
from restrecord.kernel.types import OperationResponse, RequestOptions, is_operation_response

logger = structlog.get_logger("restrecord.client.rest_api")

T = TypeVar("T")

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

CONNECTIVITY_FAILURE_MESSAGE = "A server communication error occurred."
STATUS_FAILURE_MESSAGE = "Server communication failed with error no. {status}."

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"


@dataclass(frozen=True)
class FormData:
    """Multipart payload: plain form fields plus uploaded files.

    ``files`` follows httpx: ``{"name": (file_name, content, content_type)}``.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)


def _as_mapping(data: Any) -> Any:
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        to_dict = getattr(data, "to_dict", None)
        return to_dict() if callable(to_dict) else dataclasses.asdict(data)
    return data


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime.date):
        return format_datetime(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, set | frozenset):
        return list(value)
    mapped = _as_mapping(value)
    if mapped is not value:
        return mapped
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _param_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime.date):
        return format_datetime(value)
    if isinstance(value, Enum):
        return _param_value(value.value)
    if isinstance(value, list | tuple | set | frozenset):
        return [_param_value(v) for v in value]
    return value


def _query_params(data: Any) -> dict[str, Any] | None:
    data = _as_mapping(data)
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise TypeError(f"GET/DELETE data must be a mapping, got {type(data).__name__}")
    return {k: _param_value(v) for k, v in data.items() if v is not None}


def _multipart(data: Any) -> tuple[Mapping[str, Any], Mapping[str, Any]] | None:
    """``(fields, files)`` when *data* looks like a form upload, else ``None``.

    Any object with a ``files`` mapping qualifies, :class:`FormData` included.
    """
    files = getattr(data, "files", None)
    if not isinstance(files, Mapping):
        return None
    fields = getattr(data, "fields", None)
    return (fields if isinstance(fields, Mapping) else {}), files


def _encode(method: HttpMethod, data: Any) -> tuple[dict[str, str], dict[str, Any]]:
    """Headers and httpx keyword arguments carrying *data* for *method*."""
    form = _multipart(data)
    if method in ("GET", "DELETE"):
        if form is not None:
            fields, files = form
            if files:
                raise TypeError(f"{method} requests cannot carry file uploads")
            data = fields
        return {"Content-Type": FORM_CONTENT_TYPE}, {"params": _query_params(data)}
    if form is not None:
        fields, files = form
        # multipart boundary is set by the transport
        return {}, {"data": dict(fields), "files": dict(files) or None}
    content = None if data is None else json.dumps(data, default=_json_default)
    return {"Content-Type": JSON_CONTENT_TYPE}, {"content": content}


def _decode(response: HttpResponse) -> Any:
    text = response.text
    try:
        return parse_json(text)
    except ValueError:
        logger.debug("response_not_json", status=response.status_code)
        return text or None


class RestApi:
    """Typed HTTP access to the record backend.

    Built on an :class:`HttpClientPort` with injected collaborators, or via
    the fluent builder:

        api = (RestApi.rest("records")
            .base_url("https://api.example.com")
            .api_key("secret")
            .credentials(token_provider)
            .build())

        users = await api.load_list("/users", Query(page=1, page_size=30))
    """

    def __init__(
        self,
        http_client: HttpClientPort,
        api_key: str,
        credentials: CredentialProvider | None = None,
        notifications: NotificationSink | None = None,
        file_saver: FileSaver | None = None,
        name: str = "rest-api",
    ) -> None:
        self.name = name
        self._http = http_client
        self._api_key = api_key
        self._credentials = credentials or AnonymousCredentials()
        self._notifications = notifications or LoggingNotificationSink()
        self._file_saver = file_saver or DirectoryFileSaver(Path.cwd())

    async def server_request(
        self,
        path: str,
        method: HttpMethod,
        data: Any = None,
        options: RequestOptions | None = None,
        *,
        download_file_name: str | None = None,
        returns_blob: bool = False,
    ) -> Any:
        """Execute one HTTP exchange.

        Returns the decoded JSON body (or ``bytes`` in blob mode, or ``None``
        once a download has been handed to the file saver).

        Raises:
            UnauthorizedException: The server answered 401.
            ServerException: Any other non-2xx status.
            TransportFailureException: No response was received.
        """
        options = options or RequestOptions()
        binary = bool(download_file_name) or returns_blob

        headers, kwargs = _encode(method, data)
        token = await self._credentials.get_token()
        if token != "":
            headers["Authorization"] = f"Bearer {token}"
        headers["X-API-Key"] = self._api_key

        logger.debug("request_sent", client=self.name, method=method, path=path)
        try:
            response = await self._http.request(method, path, headers=headers, **kwargs)
        except TransportFailureException as exc:
            logger.warning("request_failed", client=self.name, method=method, path=path, error=str(exc))
            raise await self._failure(None, None, options) from exc

        status = response.status_code
        if 200 <= status <= 299:
            if not binary:
                return _decode(response)
            if download_file_name:
                await self._file_saver.save(response.content, download_file_name)
                return None
            return response.content

        logger.warning("request_failed", client=self.name, method=method, path=path, status=status)
        raise await self._failure(response, _decode(response), options)

    async def _failure(
        self,
        response: HttpResponse | None,
        body: Any,
        options: RequestOptions,
    ) -> InfrastructureException:
        status = response.status_code if response is not None else 0
        if status == 401:
            logger.info("credentials_rejected", client=self.name)
            await self._credentials.on_unauthorized()

        operation = OperationResponse.from_dict(body) if is_operation_response(body) else None
        if operation is not None and operation.messages:
            message = ". ".join(m.message for m in operation.messages)
        elif status:
            message = STATUS_FAILURE_MESSAGE.format(status=status)
        else:
            message = CONNECTIVITY_FAILURE_MESSAGE

        if not options.suppress_error_notification:
            await self._notifications.alert(message, in_dialog=options.notification_in_dialog)

        result = operation or OperationResponse.error(message)
        if not status:
            return TransportFailureException(message, response=result, code="TRANSPORT")
        if status == 401:
            return UnauthorizedException(message, status, response=result, code="UNAUTHORIZED")
        return ServerException(message, status, response=result, code=f"HTTP_{status}")

    async def get(self, path: str, data: Any = None, options: RequestOptions | None = None) -> Any:
        """GET; *data* is sent as the query string."""
        return await self.server_request(path, "GET", data, options)

    async def post(self, path: str, data: Any = None, options: RequestOptions | None = None) -> Any:
        """POST; *data* is sent as JSON, or multipart when it carries ``files``."""
        return await self.server_request(path, "POST", data, options)

    async def put(self, path: str, data: Any = None, options: RequestOptions | None = None) -> Any:
        """PUT; *data* is sent as JSON, or multipart when it carries ``files``."""
        return await self.server_request(path, "PUT", data, options)

    async def delete(self, path: str, data: Any = None, options: RequestOptions | None = None) -> Any:
        """DELETE; *data* is sent as the query string."""
        return await self.server_request(path, "DELETE", data, options)

    async def download(
        self,
        path: str,
        file_name: str,
        data: Any = None,
        options: RequestOptions | None = None,
    ) -> None:
        """POST and hand the binary answer to the file saver as *file_name*."""
        await self.server_request(path, "POST", data, options, download_file_name=file_name)

    async def blob(self, path: str, data: Any = None, options: RequestOptions | None = None) -> bytes:
        """POST and return the binary answer."""
        return await self.server_request(path, "POST", data, options, returns_blob=True)

    async def load_list(
        self,
        path: str,
        query: Query | None = None,
        options: RequestOptions | None = None,
        item_factory: Callable[[Any], T] | None = None,
    ) -> ListResponse[T]:
        """Load a filtered, sorted and paged list."""
        payload = await self.post(path, to_transport_query(query or Query()), options)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise TypeError(f"List endpoint {path} returned {type(payload).__name__}, expected a JSON object")
        return ListResponse.from_dict(payload, item_factory)

    async def download_list(
        self,
        path: str,
        file_name: str,
        query: Query | None = None,
        options: RequestOptions | None = None,
    ) -> None:
        """Download a filtered, sorted list as a file."""
        await self.download(path, file_name, to_transport_query(query or Query()), options)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.close()

    @staticmethod
    def rest(name: str) -> RestApiBuilder:
        """Create a builder for a REST API client."""
        return RestApiBuilder(name)

    @staticmethod
    def from_config(
        config: Config,
        name: str = "rest-api",
        credentials: CredentialProvider | None = None,
        notifications: NotificationSink | None = None,
        file_saver: FileSaver | None = None,
    ) -> RestApi:
        """Build a client from ``restrecord.client.*`` configuration."""
        props = config.bind(ClientProperties)
        builder = (
            RestApiBuilder(name)
            .base_url(props.endpoint)
            .api_key(props.api_key)
            .timeout(timedelta(seconds=props.timeout))
        )
        if credentials is not None:
            builder.credentials(credentials)
        if notifications is not None:
            builder.notifications(notifications)
        if file_saver is not None:
            builder.file_saver(file_saver)
        return builder.build()


class RestApiBuilder:
    """Fluent builder for RestApi."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._base_url: str = ""
        self._api_key: str = ""
        self._timeout: timedelta = timedelta(seconds=30)
        self._headers: dict[str, str] = {}
        self._credentials: CredentialProvider | None = None
        self._notifications: NotificationSink | None = None
        self._file_saver: FileSaver | None = None
        self._transport: httpx.AsyncBaseTransport | None = None

    def base_url(self, url: str) -> RestApiBuilder:
        """Set the endpoint all paths are relative to."""
        self._base_url = url
        return self

    def api_key(self, key: str) -> RestApiBuilder:
        """Set the value of the X-API-Key header."""
        self._api_key = key
        return self

    def timeout(self, timeout: timedelta) -> RestApiBuilder:
        """Set the transport timeout."""
        self._timeout = timeout
        return self

    def header(self, name: str, value: str) -> RestApiBuilder:
        """Add a default header."""
        self._headers[name] = value
        return self

    def credentials(self, provider: CredentialProvider) -> RestApiBuilder:
        self._credentials = provider
        return self

    def notifications(self, sink: NotificationSink) -> RestApiBuilder:
        self._notifications = sink
        return self

    def file_saver(self, saver: FileSaver) -> RestApiBuilder:
        self._file_saver = saver
        return self

    def transport(self, transport: httpx.AsyncBaseTransport) -> RestApiBuilder:
        """Use a custom httpx transport (e.g. ``httpx.MockTransport``)."""
        self._transport = transport
        return self

    def build(self) -> RestApi:
        """Build the RestApi."""
        http_client = HttpxClientAdapter(
            base_url=self._base_url,
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
        )
        return RestApi(
            http_client=http_client,
            api_key=self._api_key,
            credentials=self._credentials,
            notifications=self._notifications,
            file_saver=self._file_saver,
            name=self._name,
        )
