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

"""Directory scans for the three asset categories.

All scans are best effort. A missing or unreadable category directory yields
no entries, and an individual file that cannot be stat'ed is skipped. Entry
order is the order in which the operating system lists the directory.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from ._types import FileInfo, ReferenceProject
from .catalog import categorize_doc, describe_agent, humanize, strip_extension
from .logging import StructuredLogger, get_logger

__all__ = [
    "scan_agents",
    "scan_docs",
    "scan_reference_projects",
    "try_list_directory",
]

_logger: StructuredLogger = get_logger(__name__, context={"component": "scanner"})


def try_list_directory(
    path: Path, *, logger: StructuredLogger | None = None
) -> tuple[str, ...]:
    """Return the visible entry names of ``path``.

    Names starting with ``.`` are dropped. Any :class:`OSError` (the directory
    is missing, is a file, or is not readable) results in an empty tuple.
    """

    log = logger or _logger
    try:
        names = os.listdir(path)
    except OSError as error:
        log.debug(
            "Directory not readable; treating as empty.",
            event="manifest.scan.directory_unreadable",
            context={"path": str(path), "error": str(error)},
        )
        return ()
    return tuple(name for name in names if not name.startswith("."))


def scan_agents(
    directory: Path, *, logger: StructuredLogger | None = None
) -> tuple[FileInfo, ...]:
    """Describe every agent definition in ``directory``."""

    return _scan_files(directory, describe=describe_agent, logger=logger)


def scan_docs(
    directory: Path, *, logger: StructuredLogger | None = None
) -> tuple[FileInfo, ...]:
    """Describe and categorize every documentation page in ``directory``.

    Unlike agents, docs never use curated descriptions.
    """

    return _scan_files(
        directory,
        describe=lambda filename: humanize(strip_extension(filename)),
        categorize=categorize_doc,
        logger=logger,
    )


def scan_reference_projects(
    directory: Path, *, logger: StructuredLogger | None = None
) -> tuple[ReferenceProject, ...]:
    """Describe each project directory directly inside ``directory``.

    Top-level entries that are not directories are skipped. Project listings
    are not recursive.
    """

    log = logger or _logger
    projects: list[ReferenceProject] = []
    for name in try_list_directory(directory, logger=log):
        path = directory / name
        if not path.is_dir():
            log.debug(
                "Skipping non-directory reference entry.",
                event="manifest.scan.skip_non_directory",
                context={"path": str(path)},
            )
            continue
        projects.append(
            ReferenceProject(
                name=path.name,
                files=try_list_directory(path, logger=log),
                description=humanize(path.name),
            )
        )
    return tuple(projects)


def _scan_files(
    directory: Path,
    *,
    describe: Callable[[str], str],
    categorize: Callable[[str], str] | None = None,
    logger: StructuredLogger | None,
) -> tuple[FileInfo, ...]:
    log = logger or _logger
    entries: list[FileInfo] = []
    for filename in try_list_directory(directory, logger=log):
        path = directory / filename
        try:
            size = path.stat().st_size
        except OSError as error:
            log.warning(
                "Could not stat asset; skipping.",
                event="manifest.scan.stat_failed",
                context={"path": str(path), "error": str(error)},
            )
            continue
        entries.append(
            FileInfo(
                name=strip_extension(filename),
                filename=filename,
                size=size,
                description=describe(filename),
                category=categorize(filename) if categorize is not None else None,
            )
        )
    return tuple(entries)
