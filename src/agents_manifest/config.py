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

"""Configuration for the manifest builder.

Settings come from an optional ``manifest.toml`` (or ``manifest.yaml``) file in
the source root and are then overridden by command line values. A relative
``root`` is resolved against the working directory. Relative ``output`` and
asset paths from a configuration file are resolved against the source root.
Paths given on the command line are used as given.

Example ``manifest.toml``::

    output = "dist/manifest.json"

    [assets]
    agents = "assets/agents"
    docs = "assets/docs"
    reference = "assets/reference_code"
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml

from .errors import ConfigError

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "DEFAULT_OUTPUT_NAME",
    "ManifestConfig",
    "load_config",
]

DEFAULT_OUTPUT_NAME = "manifest.json"
DEFAULT_CONFIG_NAMES: tuple[str, ...] = (
    "manifest.toml",
    "manifest.yaml",
    "manifest.yml",
)

_DEFAULT_AGENTS_DIR = Path("assets/agents")
_DEFAULT_DOCS_DIR = Path("assets/docs")
_DEFAULT_REFERENCE_DIR = Path("assets/reference_code")


@dataclass(frozen=True, slots=True)
class ManifestConfig:
    """Resolved builder configuration."""

    source_root: Path
    output_path: Path
    agents_dir: Path = _DEFAULT_AGENTS_DIR
    docs_dir: Path = _DEFAULT_DOCS_DIR
    reference_dir: Path = _DEFAULT_REFERENCE_DIR

    @classmethod
    def for_root(cls, source_root: Path) -> ManifestConfig:
        """Return the default layout rooted at ``source_root``."""
        return cls(
            source_root=source_root,
            output_path=source_root / DEFAULT_OUTPUT_NAME,
        )

    @property
    def agents_path(self) -> Path:
        return self.source_root / self.agents_dir

    @property
    def docs_path(self) -> Path:
        return self.source_root / self.docs_dir

    @property
    def reference_path(self) -> Path:
        return self.source_root / self.reference_dir


def load_config(
    path: Path | Mapping[str, Any] | None = None,
    cli_overrides: object | None = None,
    *,
    cwd: Path | None = None,
) -> ManifestConfig:
    """Load and validate the builder configuration.

    Parameters
    ----------
    path:
        Configuration file. ``None`` looks for one of
        :data:`DEFAULT_CONFIG_NAMES` in the source root and falls back to
        defaults when none exists. Tests may pass an in-memory mapping to
        skip filesystem I/O.
    cli_overrides:
        Mapping or namespace with ``source_root`` and ``output_path`` keys.
        ``None`` values are ignored.
    cwd:
        Directory used when no source root is configured. Defaults to
        :func:`Path.cwd`.

    Returns
    -------
    ManifestConfig
        The resolved configuration object.
    """

    overrides = _materialise_overrides(cli_overrides)
    base = cwd if cwd is not None else Path.cwd()
    root_override = _coerce_path(overrides.get("source_root"), "source_root")
    search_root = root_override if root_override is not None else base

    if isinstance(path, Mapping):
        raw: dict[str, object] = dict(cast(Mapping[str, object], path))
    elif path is not None:
        raw = _load_config_file(path)
    else:
        raw = _load_default_config_file(search_root)

    source_root = root_override or _coerce_path(raw.get("root"), "root") or base
    if not source_root.is_absolute():
        source_root = base / source_root

    assets = raw.get("assets") or {}
    if not isinstance(assets, Mapping):
        raise ConfigError("`assets` must be a table of directory paths.")
    assets_map = cast(Mapping[str, object], assets)

    output_path = _coerce_path(overrides.get("output_path"), "output_path")
    if output_path is None:
        configured = _coerce_path(raw.get("output"), "output")
        output_path = source_root / (configured or Path(DEFAULT_OUTPUT_NAME))

    return ManifestConfig(
        source_root=source_root,
        output_path=output_path,
        agents_dir=_coerce_path(assets_map.get("agents"), "assets.agents")
        or _DEFAULT_AGENTS_DIR,
        docs_dir=_coerce_path(assets_map.get("docs"), "assets.docs")
        or _DEFAULT_DOCS_DIR,
        reference_dir=_coerce_path(assets_map.get("reference"), "assets.reference")
        or _DEFAULT_REFERENCE_DIR,
    )


def _load_default_config_file(root: Path) -> dict[str, object]:
    for name in DEFAULT_CONFIG_NAMES:
        candidate = root / name
        if candidate.is_file():
            return _load_config_file(candidate)
    return {}


def _load_config_file(path: Path) -> dict[str, object]:
    if not path.is_file():
        msg = f"Configuration file not found: {path}"
        raise ConfigError(msg)

    suffix = path.suffix.lower()
    data: object
    try:
        if suffix == ".toml":
            with path.open("rb") as handle:
                data = tomllib.load(handle)
        elif suffix in {".yaml", ".yml"}:
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        else:
            msg = f"Unsupported configuration format: {path.suffix}"
            raise ConfigError(msg)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        msg = f"Invalid configuration file {path}: {exc}"
        raise ConfigError(msg) from exc
    except OSError as exc:
        msg = f"Could not read configuration file {path}: {exc}"
        raise ConfigError(msg) from exc

    if not isinstance(data, MutableMapping):
        msg = "Configuration file must contain a mapping at the root."
        raise ConfigError(msg)

    typed_data: dict[str, object] = {}
    for key, value in cast(MutableMapping[object, object], data).items():
        if not isinstance(key, str):
            msg = f"Configuration keys must be strings (got {key!r})."
            raise ConfigError(msg)
        typed_data[key] = value
    return typed_data


def _materialise_overrides(overrides: object | None) -> dict[str, object]:
    if overrides is None:
        return {}
    if isinstance(overrides, Mapping):
        items = dict(cast(Mapping[str, object], overrides))
    elif hasattr(overrides, "__dict__"):
        items = {key: getattr(overrides, key) for key in vars(overrides)}
    else:
        msg = "CLI overrides must be a mapping or support attribute access."
        raise TypeError(msg)
    return {key: value for key, value in items.items() if value is not None}


def _coerce_path(value: object, field_name: str) -> Path | None:
    if value is None:
        return None
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str) and value.strip():
        return Path(value).expanduser()
    msg = f"{field_name} must be a path-like value."
    raise ConfigError(msg)
