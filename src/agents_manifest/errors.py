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

"""Base exception hierarchy for :mod:`agents_manifest`."""

from __future__ import annotations


class ManifestError(Exception):
    """Base class for all manifest builder exceptions.

    Catch this to handle any error raised by the builder while letting
    standard Python exceptions propagate normally.

    Exception hierarchy::

        ManifestError
        ├── ManifestWriteError (output file could not be written)
        ├── ManifestFormatError (existing manifest is malformed)
        └── ConfigError (builder configuration is invalid)

    Note:
        Unreadable source directories are never reported through this
        hierarchy. Scans recover from them locally and yield no entries.
    """


class ManifestWriteError(ManifestError, OSError):
    """Raised when ``manifest.json`` cannot be written.

    This is the only fatal filesystem failure of a run. Common causes are a
    missing parent directory, a read-only location, or a full disk.

    Example::

        try:
            generate_manifest(config)
        except ManifestWriteError as e:
            logger.error("Manifest not written: %s", e)

    Note:
        This exception also inherits from ``OSError`` so handlers written for
        plain I/O errors keep working.
    """


class ManifestFormatError(ManifestError, ValueError):
    """Raised when an existing manifest document does not have the expected shape."""


class ConfigError(ManifestError, ValueError):
    """Raised when the builder configuration is invalid."""


__all__ = [
    "ConfigError",
    "ManifestError",
    "ManifestFormatError",
    "ManifestWriteError",
]
