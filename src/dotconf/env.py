"""Environment tables — where loaded variables end up.

Every process has an environment: a table of ``KEY=VALUE`` strings
inherited from its parent.  Loading a dotenv file means writing into
that table, and reading a variable means looking it up again.  All of
this library's reads and writes go through the two classes here:

- **ProcessEnvironment** — the real table, ``os.environ``.  It is
  process-wide state; every instance shares one lock.
- **Environment** — an in-memory table with the same interface, so
  tests (or callers who want a dry run) can load files without touching
  the process.

Thread safety:
    The process table has no synchronisation of its own.  Reads and
    writes made *through this library* are serialised by a single
    re-entrant lock, and the loader holds that lock for a whole file so
    nobody reading through the library sees half of it.  Code that writes
    ``os.environ`` directly is not covered, so load your files early,
    before other threads start.
"""

from __future__ import annotations

import os
import threading
from typing import Protocol

_PROCESS_LOCK = threading.RLock()


class EnvironmentTable(Protocol):
    """The operations the loader and the reader need from a table."""

    @property
    def lock(self) -> threading.RLock:
        """Return the lock guarding this table."""
        ...

    def get(self, key: str) -> str | None:
        """Return the value for *key*, or None if not set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites)."""
        ...


def is_storable(key: str, value: str) -> bool:
    """Return whether the host accepts *key* = *value* as a variable.

    Operating systems refuse empty names, names containing ``=``, and
    NUL characters anywhere.  Text must also encode with the filesystem
    encoding, which rules out lone surrogates that ``surrogateescape``
    did not produce.
    """
    if not key or "=" in key or "\0" in key or "\0" in value:
        return False
    try:
        os.fsencode(key)
        os.fsencode(value)
    except UnicodeEncodeError:
        return False
    return True


class ProcessEnvironment:
    """The running process's environment, backed by ``os.environ``."""

    @property
    def lock(self) -> threading.RLock:
        """Return the process-wide lock."""
        return _PROCESS_LOCK

    def get(self, key: str) -> str | None:
        """Return the value for *key*, or None if not set."""
        with _PROCESS_LOCK:
            return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* in the process environment.

        Raises:
            ValueError: If the host refuses the name or value.
            UnicodeEncodeError: If either cannot be encoded for the host.
                Check with ``is_storable`` first to avoid both.

        """
        with _PROCESS_LOCK:
            os.environ[key] = value


class Environment:
    """An in-memory key-value store standing in for the process table.

    Each instance is independent, so tests running side by side never
    see each other's variables.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Return the lock guarding this table."""
        return self._lock

    def get(self, key: str) -> str | None:
        """Return the value for *key*, or None if not set."""
        with self._lock:
            return self._vars.get(key)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites).

        Raises:
            ValueError: If the name or value could not live in a real
                process environment.

        """
        if not is_storable(key, value):
            msg = f"illegal environment variable: {key!r}"
            raise ValueError(msg)
        with self._lock:
            self._vars[key] = value

