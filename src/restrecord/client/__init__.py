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
"""restrecord Client: request executor, list façade and per-entity API."""

from restrecord.client.adapters.credentials import AnonymousCredentials, StaticTokenCredentials
from restrecord.client.adapters.file_saver import DirectoryFileSaver
from restrecord.client.adapters.httpx_adapter import HttpxClientAdapter
from restrecord.client.adapters.notifications import LoggingNotificationSink
from restrecord.client.dates import is_iso_datetime, parse_json, revive_dates
from restrecord.client.entity_api import EntityApi
from restrecord.client.ports.outbound import (
    CredentialProvider,
    FileSaver,
    HttpClientPort,
    NotificationSink,
)
from restrecord.client.rest_api import FormData, RestApi, RestApiBuilder

__all__ = [
    "AnonymousCredentials",
    "CredentialProvider",
    "DirectoryFileSaver",
    "EntityApi",
    "FileSaver",
    "FormData",
    "HttpClientPort",
    "HttpxClientAdapter",
    "LoggingNotificationSink",
    "NotificationSink",
    "RestApi",
    "RestApiBuilder",
    "StaticTokenCredentials",
    "is_iso_datetime",
    "parse_json",
    "revive_dates",
]
