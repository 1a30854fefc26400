from __future__ import annotations

import logging
import time
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Protocol

from gizmo.tokens import Token, token


class BaseLogger(Protocol):
    """Logger interface expected from ``LOGGER_TOKEN`` values."""

    def debug(self, msg: str, *args: object, **kwargs: object) -> None: ...
    def info(self, msg: str, *args: object, **kwargs: object) -> None: ...
    def warning(self, msg: str, *args: object, **kwargs: object) -> None: ...
    def error(self, msg: str, *args: object, **kwargs: object) -> None: ...
    def critical(self, msg: str, *args: object, **kwargs: object) -> None: ...


class SystemClock:
    """Clock reading the system time."""

    def now(self) -> float:
        """Return the wall clock time in seconds since the epoch."""
        return time.time()

    def monotonic(self) -> float:
        return time.monotonic()


@dataclass(frozen=True)
class Storages:
    """In-memory key/value storages, shared by the whole process."""

    local: MutableMapping[str, str] = field(default_factory=dict)
    session: MutableMapping[str, str] = field(default_factory=dict)
    runtime: MutableMapping[str, str] = field(default_factory=dict)


def _default_storages() -> Storages:
    session: dict[str, str] = {}
    return Storages(local={}, session=session, runtime=session)


LOGGER_TOKEN: Token[BaseLogger] = token("Logger", lambda: logging.getLogger("gizmo"))
"""Application logger, the ``gizmo`` stdlib logger unless overridden."""

GLOBAL_TIME_TOKEN: Token[SystemClock] = token("GlobalTime", SystemClock)
"""Time source, override it to freeze time in tests."""

STORAGES_TOKEN: Token[Storages] = token("Storages", _default_storages)
"""Key/value storages; ``runtime`` shares the ``session`` mapping by default."""
