"""Load log — a record of what the loader did with each file.

Loading a dotenv file is deliberately forgiving: lines without ``=`` are
ignored, undecodable lines are ignored, and names the host refuses are
dropped.  None of that is an error, so the log is where those decisions
become visible afterwards:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source).
- **Logger** — an append-only log with filtering and clearing.

The log lives in memory and is never written to a stream; callers that
want output can format ``Logger.entries`` however they like.

The buffer is bounded: once it holds ``capacity`` entries, each new one
drops the oldest, so a process that reloads often does not grow without
limit.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes minimum-level filtering trivial.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The stage that generated the event ("parser", "binder").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


DEFAULT_CAPACITY = 1000


class Logger:
    """Bounded log buffer, oldest entries evicted first."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        """Create an empty logger holding at most *capacity* entries."""
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        """Return the maximum number of entries kept."""
        return self._entries.maxlen or 0

    @property
    def entries(self) -> list[LogEntry]:
        """Return the retained entries in chronological order."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry, evicting the oldest if the buffer is full."""
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel = LogLevel.DEBUG,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return retained entries at or above *min_level*, optionally from one *source*."""
        return [
            e
            for e in self._entries
            if e.level >= min_level and (source is None or e.source == source)
        ]

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()
