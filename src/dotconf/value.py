"""Typed reading — look a variable up once, then convert it.

Environment values are always strings.  A ``Value`` captures the result
of a single lookup and offers best-effort conversions on top of it.  The
conversions never raise: anything that does not fit the target type,
and any variable that is missing, comes back as ``None`` so callers can
write ``var("PORT").as_unsigned_integer() or 8080``.

A lookup has three outcomes:

- **FOUND** — the variable exists and is valid text.
- **NOT_FOUND** — the variable does not exist.
- **NOT_UNICODE** — the variable exists but its bytes are not valid
  UTF-8.  Python decodes such bytes with ``surrogateescape`` on POSIX,
  which leaves lone surrogates in the string; that is how we spot them.

A ``Value`` is an immutable snapshot.  Every conversion may be called as
often as you like, and none of them sees later changes to the table.

Grammar accepted by the numeric conversions (no surrounding whitespace,
no ``_`` separators):

- signed integer: ``[+-]?[0-9]+`` in the 64-bit signed range
- unsigned integer: ``+?[0-9]+`` in the 64-bit unsigned range
- float: ``1``, ``1.``, ``.5``, ``2.5e-3``, ``inf``, ``infinity`` or
  ``nan``, each with an optional sign
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotconf.env import EnvironmentTable

ISIZE_MIN = -(2**63)
ISIZE_MAX = 2**63 - 1
USIZE_MAX = 2**64 - 1

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)
_BOOLS = {"true": True, "false": False}
# Digits in USIZE_MAX; anything longer overflows every supported width.
_MAX_DIGITS = 20


class LookupStatus(StrEnum):
    """Outcome of looking a variable up."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    NOT_UNICODE = "not_unicode"


@dataclass(frozen=True)
class Value:
    """The snapshot of one environment lookup.

    Attributes:
        status: Whether the variable was found and readable.
        raw: The stored string, or None when not found.  For
            ``NOT_UNICODE`` this still holds the undecodable string.

    """

    status: LookupStatus
    raw: str | None = None

    @classmethod
    def found(cls, text: str) -> Value:
        """Build a FOUND value."""
        return cls(LookupStatus.FOUND, text)

    @classmethod
    def not_found(cls) -> Value:
        """Build a NOT_FOUND value."""
        return cls(LookupStatus.NOT_FOUND)

    @property
    def is_found(self) -> bool:
        """Return whether the lookup produced usable text."""
        return self.status is LookupStatus.FOUND

    def as_text(self) -> str | None:
        """Return the text, or None if missing or not valid text."""
        return self.raw if self.is_found else None

    def as_signed_integer(self) -> int | None:
        """Return the text as a 64-bit signed integer, or None."""
        text = self.as_text()
        if text is None or not _SIGNED_RE.fullmatch(text):
            return None
        number = _to_int(text)
        if number is None:
            return None
        return number if ISIZE_MIN <= number <= ISIZE_MAX else None

    def as_unsigned_integer(self) -> int | None:
        """Return the text as a 64-bit unsigned integer, or None.

        Negative numbers, including ``-0``, are rejected.
        """
        text = self.as_text()
        if text is None or not _UNSIGNED_RE.fullmatch(text):
            return None
        number = _to_int(text)
        if number is None:
            return None
        return number if number <= USIZE_MAX else None

    def as_float(self) -> float | None:
        """Return the text as a float, or None."""
        text = self.as_text()
        if text is None or not _FLOAT_RE.fullmatch(text):
            return None
        return float(text)

    def as_bool(self) -> bool | None:
        """Return True/False for ``true``/``false`` in any case, else None."""
        text = self.as_text()
        if text is None:
            return None
        return _BOOLS.get(text.lower())

    # Aliases.
    to_string = as_text
    to_isize = as_signed_integer
    to_usize = as_unsigned_integer
    to_f64 = as_float
    to_bool = as_bool

    def __str__(self) -> str:
        """Return the text, or a description of why there is none."""
        if self.status is LookupStatus.FOUND:
            return self.raw or ""
        if self.status is LookupStatus.NOT_UNICODE:
            return f"environment variable was not valid unicode: {self.raw!r}"
        return "environment variable not found"


def _to_int(literal: str) -> int | None:
    """Convert a matched integer literal, or None if it has too many digits.

    Leading zeros are dropped first so they never count against the limit,
    and ``int()`` is never handed more digits than a 64-bit value can have.
    """
    digits = literal.lstrip("+-").lstrip("0")
    if len(digits) > _MAX_DIGITS:
        return None
    magnitude = int(digits) if digits else 0
    return -magnitude if literal.startswith("-") else magnitude


def _is_valid_text(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def lookup(table: EnvironmentTable, key: str) -> Value:
    """Read *key* from *table* and capture the outcome."""
    raw = table.get(key)
    if raw is None:
        return Value.not_found()
    if not _is_valid_text(raw):
        return Value(LookupStatus.NOT_UNICODE, raw)
    return Value.found(raw)
