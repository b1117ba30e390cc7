"""The loader — read a dotenv file and bind its entries to a table.

``Loader`` ties the pieces together: it parses a file, writes every
entry into an environment table, and reads variables back as ``Value``
snapshots.  It also keeps a log of what it did, since most of what can
go "wrong" while loading (a line with no ``=``, a name the host refuses)
is skipped rather than reported.

Binding rules:
    - Entries are written in file order, so the last assignment to a
      key wins, both within one file and across successive loads.
    - Variables that existed before loading are overwritten.
    - Entries the host cannot store (empty name, NUL characters) are
      skipped with a WARNING in the log.
    - The whole file is applied while holding the table's lock.
"""

from __future__ import annotations

import os
from collections.abc import Generator, Iterable
from contextlib import contextmanager

from dotconf.env import EnvironmentTable, ProcessEnvironment, is_storable
from dotconf.errors import DotconfError
from dotconf.logging import Logger, LogLevel
from dotconf.parser import parse_entries
from dotconf.value import Value, lookup

DEFAULT_PATH = ".env"


class Loader:
    """Load dotenv files into an environment table and read them back."""

    def __init__(self, environment: EnvironmentTable | None = None) -> None:
        """Create a loader bound to *environment*.

        Args:
            environment: The table to write to and read from.  Defaults
                to the real process environment.

        """
        if environment is None:
            environment = ProcessEnvironment()
        self._environment: EnvironmentTable = environment
        self._logger = Logger()

    @property
    def environment(self) -> EnvironmentTable:
        """Return the table this loader writes to."""
        return self._environment

    @property
    def logger(self) -> Logger:
        """Return the load log."""
        return self._logger

    def dmesg(self, min_level: LogLevel = LogLevel.DEBUG) -> list[str]:
        """Return the load log at or above *min_level* as formatted lines."""
        return [str(entry) for entry in self._logger.filter(min_level=min_level)]

    @contextmanager
    def using(self, environment: EnvironmentTable) -> Generator[EnvironmentTable]:
        """Swap in *environment* for the duration, then restore."""
        previous = self._environment
        self._environment = environment
        try:
            yield environment
        finally:
            self._environment = previous

    def apply(self, entries: Iterable[tuple[str, str]]) -> None:
        """Write *entries* into the table in order.

        Later entries overwrite earlier ones with the same key.
        """
        table = self._environment
        with table.lock:
            for key, value in entries:
                if not is_storable(key, value):
                    self._logger.log(
                        LogLevel.WARNING,
                        f"Skipped {key!r}: not a valid environment variable",
                        source="binder",
                    )
                    continue
                table.set(key, value)

    def init_with_path(self, path: str | os.PathLike[str]) -> None:
        """Load *path* and apply its entries to the table.

        Raises:
            DotconfError: If the file cannot be opened or read.

        """

        def _skipped(line_number: int, reason: str) -> None:
            self._logger.log(
                LogLevel.DEBUG,
                f"{os.fspath(path)}:{line_number}: skipped, {reason}",
                source="parser",
            )

        try:
            entries = parse_entries(path, on_skip=_skipped)
        except DotconfError as e:
            self._logger.log(
                LogLevel.ERROR,
                f"Cannot load {os.fspath(path)}: {e}",
                source="parser",
            )
            raise
        self.apply(entries)
        self._logger.log(
            LogLevel.INFO,
            f"Loaded {len(entries)} entries from {os.fspath(path)}",
            source="binder",
        )

    def init(self) -> None:
        """Load the default file (``.env`` in the working directory).

        Raises:
            DotconfError: If the file cannot be opened or read.

        """
        self.init_with_path(DEFAULT_PATH)

    def var(self, key: str) -> Value:
        """Look *key* up in the table."""
        return lookup(self._environment, key)
