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

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

import pytest

from agents_manifest.clock import FixedClock


class AssetTreeFactory(Protocol):
    def __call__(self, files: Mapping[str, str | bytes]) -> Path:
        """Create ``files`` (relative path -> content) and return the root."""


@pytest.fixture
def asset_tree(tmp_path: Path) -> AssetTreeFactory:
    """Return a factory that lays out files under a fresh source root."""

    root = tmp_path / "bundle"
    root.mkdir()

    def factory(files: Mapping[str, str | bytes]) -> Path:
        for relative, content in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                _ = target.write_bytes(content)
            else:
                _ = target.write_text(content, encoding="utf-8")
        return root

    return factory


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=UTC))


@pytest.fixture(autouse=True)
def reset_logging_state() -> Iterator[None]:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        yield
    finally:
        for handler in root.handlers:
            if handler not in original_handlers:
                handler.close()
        root.handlers = original_handlers
        root.setLevel(original_level)
