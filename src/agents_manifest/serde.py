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

"""Serialization between manifest dataclasses and JSON-compatible values."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any, cast

from ._types import AssetManifest, FileInfo, ReferenceProject
from .errors import ManifestFormatError

__all__ = ["dump", "format_timestamp", "parse_manifest"]

type JSONValue = (
    str | int | float | bool | None | list[JSONValue] | dict[str, JSONValue]
)


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as UTC ISO 8601 with milliseconds and a ``Z`` suffix."""
    if value.tzinfo is None:
        raise ValueError("Manifest timestamps must be timezone-aware.")
    rendered = value.astimezone(UTC).isoformat(timespec="milliseconds")
    return rendered.removesuffix("+00:00") + "Z"


def dump(obj: object) -> JSONValue:
    """Convert a manifest dataclass into JSON-compatible primitives.

    Field order follows the dataclass declaration. ``None`` fields are dropped,
    tuples become lists and datetimes are rendered with
    :func:`format_timestamp`.
    """

    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError("dump() requires a dataclass instance")
    return _serialize(obj)


def _serialize(value: object) -> JSONValue:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, datetime):
        return format_timestamp(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result: dict[str, JSONValue] = {}
        for field in dataclasses.fields(value):
            item = getattr(value, field.name)
            if item is None:
                continue
            result[field.name] = _serialize(item)
        return result
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        sequence = cast(Sequence[object], value)
        return [_serialize(item) for item in sequence]
    raise TypeError(f"Unsupported value for serialization: {value!r}")


def parse_manifest(data: object) -> AssetManifest:
    """Build an :class:`AssetManifest` from decoded JSON.

    Raises:
        ManifestFormatError: If ``data`` does not have the manifest shape.
    """

    root = _require_mapping(data, "manifest")
    generated_raw = _require_str(root, "generated", "manifest")
    try:
        generated = datetime.fromisoformat(generated_raw)
    except ValueError as exc:
        msg = f"manifest.generated is not an ISO 8601 timestamp: {generated_raw!r}"
        raise ManifestFormatError(msg) from exc

    return AssetManifest(
        version=_require_str(root, "version", "manifest"),
        generated=generated,
        agents=tuple(
            _parse_file_info(item, f"agents[{index}]")
            for index, item in enumerate(_require_list(root, "agents"))
        ),
        docs=tuple(
            _parse_file_info(item, f"docs[{index}]")
            for index, item in enumerate(_require_list(root, "docs"))
        ),
        reference=tuple(
            _parse_reference(item, f"reference[{index}]")
            for index, item in enumerate(_require_list(root, "reference"))
        ),
    )


def _parse_file_info(data: object, where: str) -> FileInfo:
    entry = _require_mapping(data, where)
    size = entry.get("size")
    if not isinstance(size, int) or isinstance(size, bool):
        raise ManifestFormatError(f"{where}.size must be an integer.")
    category = entry.get("category")
    if category is not None and not isinstance(category, str):
        raise ManifestFormatError(f"{where}.category must be a string.")
    return FileInfo(
        name=_require_str(entry, "name", where),
        filename=_require_str(entry, "filename", where),
        size=size,
        description=_require_str(entry, "description", where),
        category=category,
    )


def _parse_reference(data: object, where: str) -> ReferenceProject:
    entry = _require_mapping(data, where)
    files = _require_list(entry, "files", where)
    if not all(isinstance(name, str) for name in files):
        raise ManifestFormatError(f"{where}.files must contain only strings.")
    return ReferenceProject(
        name=_require_str(entry, "name", where),
        files=tuple(cast(list[str], files)),
        description=_require_str(entry, "description", where),
    )


def _require_mapping(data: object, where: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ManifestFormatError(f"{where} must be a JSON object.")
    return cast(Mapping[str, Any], data)


def _require_str(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ManifestFormatError(f"{where}.{key} must be a string.")
    return value


def _require_list(
    data: Mapping[str, Any], key: str, where: str = "manifest"
) -> list[object]:
    value = data.get(key)
    if not isinstance(value, list):
        raise ManifestFormatError(f"{where}.{key} must be a JSON array.")
    return cast(list[object], value)
