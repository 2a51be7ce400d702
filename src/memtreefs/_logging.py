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

"""Structured logging for filesystem mutation events.

Every record written through :class:`StructuredLogger` carries two extra
attributes: ``event``, a dotted name such as ``memfs.mkdir.created``, and
``context``, a mapping with the adapter's baseline fields (``component``)
merged with the fields of the individual call (``path``, ``size``).

``configure_logging`` only touches the ``memtreefs`` package logger, so the
host application's root logger is left as it is.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
from collections.abc import Mapping, MutableMapping
from datetime import UTC, datetime
from typing import Any, Final, cast, override

PACKAGE_LOGGER: Final[str] = "memtreefs"

_LOG_LEVEL_ENV: Final[str] = "MEMTREEFS_LOG_LEVEL"
_LOG_FORMAT_ENV: Final[str] = "MEMTREEFS_LOG_FORMAT"
_TEXT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s %(event)s %(context)s"

type LoggerLike = logging.Logger | logging.LoggerAdapter[logging.Logger]


class StructuredLogger(logging.LoggerAdapter[logging.Logger]):
    """Adapter stamping records with an ``event`` name and a ``context`` mapping.

    The adapter's ``extra`` holds the baseline context. Fields passed with
    ``context=`` on a call are merged on top of it, call fields winning.
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(logger, dict(context or {}))

    @property
    def context(self) -> Mapping[str, object]:
        """Baseline fields attached to every record."""
        return cast(Mapping[str, object], self.extra)

    def mutation(self, event: str, /, **fields: object) -> None:
        """Log the mutation ``event`` at DEBUG with ``fields`` as context."""
        self.debug(event, event=event, context=fields)

    @override
    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        if "extra" in kwargs:
            raise TypeError("Structured logs take fields through context=, not extra=.")

        event = kwargs.pop("event", None)
        if not isinstance(event, str):
            raise TypeError("Structured logs require an 'event' name.")

        fields = kwargs.pop("context", None) or {}
        if not isinstance(fields, Mapping):
            raise TypeError("context must be a mapping when provided.")

        kwargs["extra"] = {
            "event": event,
            "context": {**self.context, **cast(Mapping[str, object], fields)},
        }
        return msg, kwargs


def get_logger(
    name: str,
    *,
    logger_override: LoggerLike | None = None,
    context: Mapping[str, object] | None = None,
) -> StructuredLogger:
    """Return a :class:`StructuredLogger` for ``name``.

    With ``logger_override`` the records go to the supplied logger instead.
    An adapter's ``extra`` is kept as part of the baseline context, under the
    fields given in ``context``.
    """
    if logger_override is None:
        return StructuredLogger(logging.getLogger(name), context=context)

    if isinstance(logger_override, logging.Logger):
        return StructuredLogger(logger_override, context=context)

    base_logger = logger_override.logger
    if not isinstance(base_logger, logging.Logger):
        raise TypeError("LoggerAdapter.logger must be a logging.Logger instance.")
    inherited = cast(Mapping[str, object], logger_override.extra or {})
    return StructuredLogger(base_logger, context={**inherited, **(context or {})})


def configure_logging(
    *,
    level: int | str | None = None,
    json_mode: bool | None = None,
    env: Mapping[str, str] | None = None,
    force: bool = False,
) -> None:
    """Send ``memtreefs`` records to stderr.

    ``level`` and ``json_mode`` fall back to ``MEMTREEFS_LOG_LEVEL`` and
    ``MEMTREEFS_LOG_FORMAT`` (``json`` or ``text``), then to ``INFO`` text.
    Mutation events are DEBUG, so they only show up at that level.

    If the package logger already has handlers only its level is updated,
    unless ``force=True`` replaces them.

    Raises:
        ValueError: The level name is not a known logging level.
    """
    env = env if env is not None else os.environ
    resolved_level = _coerce_level(
        level if level is not None else env.get(_LOG_LEVEL_ENV)
    )
    if json_mode is None:
        json_mode = env.get(_LOG_FORMAT_ENV, "text").lower() == "json"

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.handlers and not force:
        package_logger.setLevel(resolved_level)
        return

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {
                    "format": _TEXT_FORMAT,
                    "defaults": {"event": "-", "context": {}},
                },
                "json": {"()": "memtreefs._logging._JsonFormatter"},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "json" if json_mode else "text",
                }
            },
            "loggers": {
                PACKAGE_LOGGER: {
                    "handlers": ["stderr"],
                    "level": resolved_level,
                    "propagate": False,
                }
            },
        }
    )


class _JsonFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, event and context."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", record.getMessage()),
            "context": getattr(record, "context", {}),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=repr, separators=(",", ":"))


def _coerce_level(level: int | str | None) -> int:
    match level:
        case None:
            return logging.INFO
        case int():
            return level
        case str():
            resolved = logging.getLevelNamesMapping().get(level.upper())
            if resolved is None:
                raise ValueError(f"Unknown log level: {level!r}")
            return resolved


__all__ = [
    "PACKAGE_LOGGER",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]
