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

"""Core manifest types and constants.

The manifest is a full snapshot of the installable assets found under a
source root. Every entity is created fresh on each run; nothing carries
identity across runs.

Typical shape once serialized::

    {
      "version": "1.0.0",
      "generated": "2025-01-01T12:00:00.000Z",
      "agents": [{"name": ..., "filename": ..., "size": ..., "description": ...}],
      "docs": [{..., "category": "Bun"}],
      "reference": [{"name": ..., "files": [...], "description": ...}]
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

__all__ = [
    "MANIFEST_VERSION",
    "AssetManifest",
    "FileInfo",
    "ReferenceProject",
]

MANIFEST_VERSION: str = "1.0.0"
"""Schema version written into every manifest."""


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Metadata for a single agent or documentation file.

    Attributes:
        name: Filename with a trailing ``.md``, ``.ts``, ``.js`` or ``.json``
            extension removed.
        filename: The original filename, extension included.
        size: Size in bytes as reported by ``stat`` at scan time.
        description: Curated description for known agents, otherwise the
            name with ``-`` and ``_`` replaced by spaces.
        category: Topical label for documentation entries. Agents leave this
            unset and it is omitted from the serialized form.
    """

    name: str
    filename: str
    size: int
    description: str
    category: str | None = None


@dataclass(frozen=True, slots=True)
class ReferenceProject:
    """A reference-code project directory and its top-level entries."""

    name: str
    files: tuple[str, ...]
    description: str


@dataclass(frozen=True, slots=True)
class AssetManifest:
    """Root document describing every installable asset."""

    version: str
    generated: datetime
    agents: tuple[FileInfo, ...] = ()
    docs: tuple[FileInfo, ...] = ()
    reference: tuple[ReferenceProject, ...] = ()

    def same_assets(self, other: AssetManifest) -> bool:
        """Return ``True`` when both manifests list identical assets.

        ``version`` and ``generated`` are ignored.
        """

        return (
            self.agents == other.agents
            and self.docs == other.docs
            and self.reference == other.reference
        )
