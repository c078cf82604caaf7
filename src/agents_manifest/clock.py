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

"""Wall-clock abstraction for the manifest ``generated`` timestamp.

The timestamp is the only part of a manifest that is not derived from the
filesystem. Injecting the clock keeps builds reproducible under test::

    from datetime import UTC, datetime
    from agents_manifest.clock import FixedClock

    clock = FixedClock(datetime(2025, 1, 1, tzinfo=UTC))
    manifest = build_manifest(root, clock=clock)
    assert manifest.generated == clock.utcnow()
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final, Protocol, runtime_checkable

__all__ = [
    "SYSTEM_CLOCK",
    "FixedClock",
    "SystemClock",
    "WallClock",
]


@runtime_checkable
class WallClock(Protocol):
    """Protocol for wall-clock time measurement."""

    def utcnow(self) -> datetime:
        """Return current UTC datetime (timezone-aware)."""
        ...


@dataclass(frozen=True, slots=True)
class SystemClock:
    """Production clock delegating to ``datetime.now(UTC)``."""

    def utcnow(self) -> datetime:
        """Return the current UTC time."""
        return datetime.now(UTC)


SYSTEM_CLOCK: Final[WallClock] = SystemClock()
"""Default clock used when callers do not inject one."""


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Clock that always reports the same instant."""

    instant: datetime

    def __post_init__(self) -> None:
        if self.instant.tzinfo is None:
            msg = "Wall clock time must be timezone-aware"
            raise ValueError(msg)

    def utcnow(self) -> datetime:
        """Return the fixed instant."""
        return self.instant
