"""Dotenv parsing — turn a text file into ordered key/value pairs.

The dialect is intentionally small.  Each physical line is handled on
its own:

1. Everything from the first ``#`` onward is a comment and is dropped.
   There is no escaping, and quotes mean nothing, so a ``#`` inside a
   would-be value still starts a comment.
2. A line with no ``=`` left over produces nothing.  Blank lines,
   comment-only lines and malformed lines all vanish this way.
3. Otherwise the line splits at the *first* ``=``; values may contain
   more ``=`` characters.
4. Key and value are stripped of surrounding whitespace independently.

Example::

    url = https://example.com/?a=1  # where the server lives

parses to ``("url", "https://example.com/?a=1")``.

Duplicate keys are kept in file order; deciding which one wins is the
binder's job, not the parser's.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from dotconf.errors import DotconfError

ENCODING = "utf-8"
COMMENT = "#"
SEPARATOR = "="


@dataclass(frozen=True)
class ConfigEntry:
    """One ``key = value`` assignment taken from a file.

    Attributes:
        key: The variable name, whitespace stripped.
        value: The variable value, whitespace and comment stripped.
        line_number: 1-based line the entry came from (0 if unknown).

    """

    key: str
    value: str
    line_number: int = 0

    def __iter__(self) -> Iterator[str]:
        """Unpack as ``key, value``."""
        yield self.key
        yield self.value

    def as_pair(self) -> tuple[str, str]:
        """Return the entry as a plain ``(key, value)`` tuple."""
        return (self.key, self.value)


def parse_line(line: str) -> tuple[str, str] | None:
    """Parse one line of text, or return None if it holds no assignment."""
    content = line.split(COMMENT, 1)[0]
    key, sep, value = content.partition(SEPARATOR)
    if not sep:
        return None
    return key.strip(), value.strip()


def _physical_lines(path: str | os.PathLike[str]) -> Iterator[bytes]:
    """Yield the raw lines of *path* without their line terminators.

    Raises:
        DotconfError: If the file cannot be opened.

    """
    try:
        handle = Path(path).open("rb")
    except OSError as e:
        raise DotconfError(str(e)) from e
    with handle:
        for raw in handle:
            yield raw.removesuffix(b"\n").removesuffix(b"\r")


def parse_entries(
    path: str | os.PathLike[str],
    *,
    on_skip: Callable[[int, str], None] | None = None,
) -> list[ConfigEntry]:
    """Parse *path* into entries, in file order.

    Lines that are not valid UTF-8, or that carry no ``=``, are skipped
    silently.  Pass *on_skip* to be told about each one; it receives the
    1-based line number and a short reason.

    Raises:
        DotconfError: If the file cannot be opened or read.  The message
            is the operating system's, unchanged.

    """
    entries: list[ConfigEntry] = []
    try:
        for number, raw in enumerate(_physical_lines(path), start=1):
            try:
                text = raw.decode(ENCODING)
            except UnicodeDecodeError:
                if on_skip is not None:
                    on_skip(number, f"not valid {ENCODING}")
                continue
            pair = parse_line(text)
            if pair is None:
                if on_skip is not None and text.strip():
                    on_skip(number, f"no '{SEPARATOR}' outside comment")
                continue
            entries.append(ConfigEntry(key=pair[0], value=pair[1], line_number=number))
    except OSError as e:
        raise DotconfError(str(e)) from e
    return entries


def parse_dotconf_file(path: str | os.PathLike[str]) -> list[tuple[str, str]]:
    """Parse *path* into ``(key, value)`` pairs without touching the environment.

    Useful for dry runs, or for applying the pairs somewhere other than
    the process environment.

    Raises:
        DotconfError: If the file cannot be opened or read.

    """
    return [entry.as_pair() for entry in parse_entries(path)]
