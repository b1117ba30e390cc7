"""A lightweight dotenv loader.

Write ``KEY = VALUE`` lines to a file, load it into the process
environment, and read the values back with simple type conversions::

    import dotconf

    dotconf.init()                      # loads ./.env
    dotconf.init_with_path("app.env")   # or any other file

    host = dotconf.var("HOST").as_text()
    port = dotconf.var("PORT").as_unsigned_integer() or 8080
    debug = dotconf.var("DEBUG").as_bool() or False

Loading should happen once, early, before other threads start touching
the environment.  See ``dotconf.env`` for the details.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from dotconf.env import Environment, EnvironmentTable, ProcessEnvironment
from dotconf.errors import DotconfError
from dotconf.loader import DEFAULT_PATH, Loader
from dotconf.parser import ConfigEntry, parse_dotconf_file, parse_entries, parse_line
from dotconf.value import LookupStatus, Value

__all__ = [
    "DEFAULT_PATH",
    "ConfigEntry",
    "DotconfError",
    "Environment",
    "EnvironmentTable",
    "Loader",
    "LookupStatus",
    "ProcessEnvironment",
    "Value",
    "apply",
    "default_loader",
    "init",
    "init_with_path",
    "parse_dotconf_file",
    "parse_entries",
    "parse_line",
    "var",
]

_default_loader = Loader()


def default_loader() -> Loader:
    """Return the loader behind the module-level functions.

    Its log is shared by every call for the life of the process and keeps
    only the most recent entries.  Call ``default_loader().logger.clear()``
    after inspecting it if you want each load reported on its own.
    """
    return _default_loader


def init() -> None:
    """Load ``.env`` from the working directory into the environment.

    Raises:
        DotconfError: If the file cannot be opened or read.

    """
    _default_loader.init()


def init_with_path(path: str | os.PathLike[str]) -> None:
    """Load *path* into the environment.

    Raises:
        DotconfError: If the file cannot be opened or read.

    """
    _default_loader.init_with_path(path)


def apply(entries: Iterable[tuple[str, str]]) -> None:
    """Write already-parsed *entries* into the environment."""
    _default_loader.apply(entries)


def var(key: str) -> Value:
    """Look *key* up in the environment."""
    return _default_loader.var(key)
