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

"""Command line entry point for the ``create-manifest`` executable."""

from __future__ import annotations

import argparse
import io
import sys
from collections.abc import Sequence
from pathlib import Path

from ._types import AssetManifest
from .builder import generate_manifest, manifest_is_current
from .config import ManifestConfig, load_config
from .errors import ConfigError, ManifestWriteError
from .logging import StructuredLogger, configure_logging, get_logger

EXIT_OK = 0
EXIT_STALE = 1
EXIT_CONFIG_ERROR = 2
EXIT_WRITE_ERROR = 3
EXIT_UNEXPECTED_ERROR = 4


def main(argv: Sequence[str] | None = None) -> int:
    """Run the manifest generator."""

    _replace_unencodable_output()
    parser = _build_parser()
    try:
        args = parser.parse_args(list(argv) if argv is not None else None)
    except SystemExit as exc:  # argparse exits with code 2 on errors
        code = exc.code if isinstance(exc.code, int) else 2
        return int(code)

    try:
        configure_logging(level=args.log_level, json_mode=args.json_logs)
    except ValueError as error:
        print(f"Configuration error: {error}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    logger = get_logger(__name__)

    try:
        config = load_config(
            args.config,
            {"source_root": args.root, "output_path": args.output},
        )
    except ConfigError as error:
        logger.exception(
            "Invalid configuration",
            event="manifest.cli.config_error",
            context={"error": str(error)},
        )
        print(f"Configuration error: {error}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.check:
        return _run_check(config, logger)
    return _run_generate(config, logger)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-manifest",
        description="Generate manifest.json from the assets directory.",
    )
    _ = parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Source root containing the assets/ directory (default: current directory).",
    )
    _ = parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Manifest destination (default: <root>/manifest.json).",
    )
    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: manifest.toml in the source root, if present).",
    )
    _ = parser.add_argument(
        "--check",
        action="store_true",
        help="Exit non-zero if the existing manifest is out of date instead of writing it.",
    )
    _ = parser.add_argument(
        "--log-level",
        choices=("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"),
        default=None,
        help="Override the log level emitted on stderr.",
    )
    _ = parser.add_argument(
        "--json-logs",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Emit structured JSON logs (disable with --no-json-logs).",
    )
    return parser


def _run_generate(config: ManifestConfig, logger: StructuredLogger) -> int:
    print(f"📋 Generating {config.output_path.name}...")
    try:
        manifest = generate_manifest(config, logger=logger)
    except ManifestWriteError as error:
        logger.exception(
            "Manifest could not be written",
            event="manifest.cli.write_error",
            context={"output": str(config.output_path), "error": str(error)},
        )
        print(f"Error: {error}", file=sys.stderr)
        return EXIT_WRITE_ERROR
    except Exception as error:
        logger.exception(
            "Manifest generation failed",
            event="manifest.cli.unexpected_error",
            context={"error": repr(error)},
        )
        print(f"Error: {error!r}", file=sys.stderr)
        return EXIT_UNEXPECTED_ERROR

    _print_summary(manifest)
    return EXIT_OK


def _run_check(config: ManifestConfig, logger: StructuredLogger) -> int:
    try:
        current = manifest_is_current(config, logger=logger)
    except Exception as error:
        logger.exception(
            "Manifest check failed",
            event="manifest.cli.check_error",
            context={"output": str(config.output_path), "error": repr(error)},
        )
        print(f"Error: {error!r}", file=sys.stderr)
        return EXIT_UNEXPECTED_ERROR

    if current:
        print(f"✅ {config.output_path} is up to date.")
        return EXIT_OK
    print(
        f"❌ {config.output_path} is out of date. Run create-manifest to regenerate it.",
        file=sys.stderr,
    )
    return EXIT_STALE


def _replace_unencodable_output() -> None:
    # The status lines use emoji; consoles such as cp1252 cannot encode them.
    for stream in (sys.stdout, sys.stderr):
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors="replace")


def _print_summary(manifest: AssetManifest) -> None:
    print("✅ Generated manifest with:")
    print(f"   {len(manifest.agents)} agents")
    print(f"   {len(manifest.docs)} documentation files")
    print(f"   {len(manifest.reference)} reference projects")


if __name__ == "__main__":
    raise SystemExit(main())
