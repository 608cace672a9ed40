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
"""File-save collaborator writing downloads into a directory."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

logger = structlog.get_logger("restrecord.client.file_saver")


class DirectoryFileSaver:
    """Saves downloaded content as ``<directory>/<file_name>``.

    Only the base name of *file_name* is used, so a server-suggested name
    cannot escape the target directory.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    async def save(self, content: bytes, file_name: str) -> None:
        target = self._directory / Path(file_name).name
        await asyncio.to_thread(self._write, target, content)
        logger.info("file_saved", path=str(target), size=len(content))

    @staticmethod
    def _write(target: Path, content: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
