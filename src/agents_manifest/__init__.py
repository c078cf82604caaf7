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

"""Asset manifest builder for the agents installer.

Scans ``assets/agents``, ``assets/docs`` and ``assets/reference_code`` under a
source root and produces the ``manifest.json`` the installer downloads to
decide which assets to fetch.

Example::

    from pathlib import Path
    from agents_manifest import ManifestConfig, generate_manifest

    manifest = generate_manifest(ManifestConfig.for_root(Path(".")))
    print(len(manifest.agents))
"""

from __future__ import annotations

from ._types import MANIFEST_VERSION, AssetManifest, FileInfo, ReferenceProject
from .builder import (
    build_manifest,
    generate_manifest,
    load_manifest,
    manifest_is_current,
    render_manifest,
    write_manifest,
)
from .catalog import categorize_doc, describe_agent, humanize, strip_extension
from .config import ManifestConfig, load_config
from .errors import (
    ConfigError,
    ManifestError,
    ManifestFormatError,
    ManifestWriteError,
)
from .scanner import (
    scan_agents,
    scan_docs,
    scan_reference_projects,
    try_list_directory,
)

__all__ = [
    "MANIFEST_VERSION",
    "AssetManifest",
    "ConfigError",
    "FileInfo",
    "ManifestConfig",
    "ManifestError",
    "ManifestFormatError",
    "ManifestWriteError",
    "ReferenceProject",
    "build_manifest",
    "categorize_doc",
    "describe_agent",
    "generate_manifest",
    "humanize",
    "load_config",
    "load_manifest",
    "manifest_is_current",
    "render_manifest",
    "scan_agents",
    "scan_docs",
    "scan_reference_projects",
    "strip_extension",
    "try_list_directory",
    "write_manifest",
]
