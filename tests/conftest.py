"""Shared fixtures for the dotconf tests."""

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture
def process_env() -> Iterator[None]:
    """Restore ``os.environ`` after a test that writes to it."""
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def write_env(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a dotenv file and returns its path."""

    def _write(content: str | bytes, name: str = ".env") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write
