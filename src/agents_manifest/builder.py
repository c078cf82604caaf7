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

"""Assemble, write, and read back asset manifests."""

from __future__ import annotations

import json
from pathlib import Path

from ._types import MANIFEST_VERSION, AssetManifest
from .clock import SYSTEM_CLOCK, WallClock
from .config import ManifestConfig
from .errors import ManifestFormatError, ManifestWriteError
from .logging import StructuredLogger, get_logger
from .scanner import scan_agents, scan_docs, scan_reference_projects
from .serde import dump, parse_manifest

__all__ = [
    "build_manifest",
    "generate_manifest",
    "load_manifest",
    "manifest_is_current",
    "render_manifest",
    "write_manifest",
]

_logger: StructuredLogger = get_logger(__name__, context={"component": "builder"})


def build_manifest(
    source: Path | ManifestConfig,
    *,
    clock: WallClock = SYSTEM_CLOCK,
    logger: StructuredLogger | None = None,
) -> AssetManifest:
    """Scan the asset directories and return a fresh manifest.

    ``source`` is either a source root using the default ``assets/`` layout
    or a fully resolved :class:`ManifestConfig`. Nothing is written to disk.
    """

    config = (
        source if isinstance(source, ManifestConfig) else ManifestConfig.for_root(source)
    )
    log = get_logger(
        __name__,
        logger_override=logger or _logger,
        context={"source_root": str(config.source_root)},
    )

    manifest = AssetManifest(
        version=MANIFEST_VERSION,
        generated=clock.utcnow(),
        agents=scan_agents(config.agents_path, logger=log),
        docs=scan_docs(config.docs_path, logger=log),
        reference=scan_reference_projects(config.reference_path, logger=log),
    )
    log.info(
        "Manifest built.",
        event="manifest.build.complete",
        context={
            "agents": len(manifest.agents),
            "docs": len(manifest.docs),
            "reference": len(manifest.reference),
        },
    )
    return manifest


def render_manifest(manifest: AssetManifest) -> str:
    """Serialize ``manifest`` as 2-space indented JSON."""
    return json.dumps(dump(manifest), indent=2, ensure_ascii=False)


def write_manifest(
    manifest: AssetManifest,
    path: Path,
    *,
    logger: StructuredLogger | None = None,
) -> Path:
    """Write ``manifest`` to ``path``, replacing any existing file.

    Raises:
        ManifestWriteError: If the file cannot be written.
    """

    log = logger or _logger
    payload = render_manifest(manifest)
    try:
        _ = path.write_text(payload, encoding="utf-8")
    except OSError as error:
        msg = f"Could not write manifest to {path}: {error}"
        raise ManifestWriteError(msg) from error
    log.info(
        "Manifest written.",
        event="manifest.write.complete",
        context={"path": str(path), "bytes": len(payload.encode("utf-8"))},
    )
    return path


def generate_manifest(
    config: ManifestConfig,
    *,
    clock: WallClock = SYSTEM_CLOCK,
    logger: StructuredLogger | None = None,
) -> AssetManifest:
    """Build the manifest for ``config`` and write it to ``config.output_path``."""

    manifest = build_manifest(config, clock=clock, logger=logger)
    _ = write_manifest(manifest, config.output_path, logger=logger)
    return manifest


def load_manifest(path: Path) -> AssetManifest:
    """Read a manifest previously written by :func:`write_manifest`.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ManifestFormatError: If the document is not valid manifest JSON.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"{path} is not valid UTF-8: {exc}"
        raise ManifestFormatError(msg) from exc
    try:
        data: object = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"{path} is not valid JSON: {exc}"
        raise ManifestFormatError(msg) from exc
    return parse_manifest(data)


def manifest_is_current(
    config: ManifestConfig,
    *,
    clock: WallClock = SYSTEM_CLOCK,
    logger: StructuredLogger | None = None,
) -> bool:
    """Return ``True`` when ``config.output_path`` lists the current assets.

    The ``generated`` timestamp is ignored. A missing or malformed output file
    is reported as stale. Other read errors propagate.
    """

    log = logger or _logger
    try:
        existing = load_manifest(config.output_path)
    except FileNotFoundError:
        return False
    except ManifestFormatError as error:
        log.warning(
            "Existing manifest is malformed.",
            event="manifest.check.malformed",
            context={"path": str(config.output_path), "error": str(error)},
        )
        return False
    fresh = build_manifest(config, clock=clock, logger=logger)
    return fresh.same_assets(existing)
