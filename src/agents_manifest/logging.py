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

"""Structured logging helpers for :mod:`agents_manifest`.

Every record carries an ``event`` name and a ``context`` mapping. Logs are
written to stderr so the human-readable summary on stdout stays clean.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
from collections.abc import Mapping, MutableMapping
from datetime import UTC, datetime
from typing import Any, cast, override

__all__ = [
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]

LOG_LEVEL_ENV = "AGENTS_MANIFEST_LOG_LEVEL"
LOG_FORMAT_ENV = "AGENTS_MANIFEST_LOG_FORMAT"
_LEVEL_NAMES = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


class StructuredLogger(logging.LoggerAdapter[logging.Logger]):
    """Logger adapter requiring an ``event`` on every record."""

    def __init__(
        self,
        logger: logging.Logger,
        *,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(logger, dict(context) if context is not None else {})

    @override
    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra_obj = kwargs.get("extra")
        extra_mapping: dict[str, object] = (
            dict(cast(Mapping[str, object], extra_obj))
            if isinstance(extra_obj, Mapping)
            else {}
        )

        context_payload: dict[str, object] = dict(
            cast(Mapping[str, object], self.extra)
        )
        inline_context = kwargs.pop("context", None)
        if inline_context is not None:
            if not isinstance(inline_context, Mapping):
                raise TypeError("context must be a mapping when provided.")
            context_payload.update(cast(Mapping[str, object], inline_context))

        event_obj = kwargs.pop("event", None)
        if event_obj is None:
            event_obj = extra_mapping.pop("event", None)
        if not isinstance(event_obj, str):
            raise TypeError("Structured logs require an 'event' field.")
        context_payload.update(extra_mapping)

        kwargs["extra"] = {"event": event_obj, "context": context_payload}
        return msg, kwargs


def get_logger(
    name: str,
    *,
    logger_override: logging.Logger | StructuredLogger | None = None,
    context: Mapping[str, object] | None = None,
) -> StructuredLogger:
    """Return a :class:`StructuredLogger` scoped to ``name``.

    When ``logger_override`` is a :class:`StructuredLogger`, its bound context
    is kept and ``context`` is layered on top.
    """

    base_context: dict[str, object] = dict(context or {})
    if isinstance(logger_override, StructuredLogger):
        inherited = dict(cast(Mapping[str, object], logger_override.extra))
        return StructuredLogger(
            logger_override.logger, context={**inherited, **base_context}
        )
    if isinstance(logger_override, logging.Logger):
        return StructuredLogger(logger_override, context=base_context)
    return StructuredLogger(logging.getLogger(name), context=base_context)


def configure_logging(
    *,
    level: int | str | None = None,
    json_mode: bool | None = None,
    env: Mapping[str, str] | None = None,
    force: bool = False,
) -> None:
    """Configure the root logger.

    ``level`` and ``json_mode`` fall back to ``AGENTS_MANIFEST_LOG_LEVEL`` and
    ``AGENTS_MANIFEST_LOG_FORMAT`` (``json`` or ``text``). Existing handlers
    are left alone unless ``force=True``; only the level is updated.
    """

    env = env if env is not None else os.environ

    resolved_level = _coerce_level(level or env.get(LOG_LEVEL_ENV) or logging.WARNING)

    if json_mode is None:
        json_mode = env.get(LOG_FORMAT_ENV, "text").lower() == "json"

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        root_logger.setLevel(resolved_level)
        return

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {
                    "()": "agents_manifest.logging._TextFormatter",
                    "fmt": "%(asctime)s %(levelname)s %(name)s %(event)s %(message)s %(context)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": "agents_manifest.logging._JsonFormatter",
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "json" if json_mode else "text",
                }
            },
            "root": {
                "handlers": ["stderr"],
                "level": resolved_level,
            },
        }
    )


class _TextFormatter(logging.Formatter):
    """Plain formatter tolerating records emitted without structured fields."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "event"):
            record.event = "-"
        if not hasattr(record, "context"):
            record.context = {}
        return super().format(record)


class _JsonFormatter(logging.Formatter):
    """Formatter that renders structured records as compact JSON."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        event = getattr(record, "event", None)
        if event is not None:
            payload["event"] = event
        context = getattr(record, "context", None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=repr, separators=(",", ":"))


def _coerce_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    try:
        return _LEVEL_NAMES[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None
