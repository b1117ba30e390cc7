"""Tests for the module-level API against the real process environment.

These write to ``os.environ``; the ``process_env`` fixture puts it back
afterwards.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

import dotconf
from dotconf import DotconfError, Loader, LookupStatus, ProcessEnvironment
from dotconf.logging import LogLevel


class TestInit:
    """Verify init() and init_with_path() write the process environment."""

    def test_init_reads_dotenv(
        self,
        process_env: None,
        write_env: Callable[..., Path],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """init() should load ./.env into os.environ."""
        write_env("\n    DOTCONF_A = hi\n    DOTCONF_B = -123\n    DOTCONF_C = false\n    ")
        monkeypatch.chdir(tmp_path)
        dotconf.init()
        assert os.environ["DOTCONF_A"] == "hi"
        assert dotconf.var("DOTCONF_A").as_text() == "hi"
        assert dotconf.var("DOTCONF_B").as_signed_integer() == -123  # noqa: PLR2004
        assert dotconf.var("DOTCONF_C").as_bool() is False

    def test_init_with_path(self, process_env: None, write_env: Callable[..., Path]) -> None:
        """init_with_path() should load the named file."""
        path = write_env(
            "DOTCONF_A=b # This is a comment\nDOTCONF_B=32\nDOTCONF_C=true\n",
            name=".dotenvfile",
        )
        dotconf.init_with_path(path)
        assert dotconf.var("DOTCONF_A").to_string() == "b"
        assert dotconf.var("DOTCONF_B").to_isize() == 32  # noqa: PLR2004
        assert dotconf.var("DOTCONF_C").to_bool() is True

    def test_overwrites_preexisting_variable(
        self, process_env: None, write_env: Callable[..., Path]
    ) -> None:
        """A variable already in the environment should be overwritten."""
        os.environ["DOTCONF_PRESET"] = "before"
        dotconf.init_with_path(write_env("DOTCONF_PRESET=after"))
        assert os.environ["DOTCONF_PRESET"] == "after"

    def test_missing_file_message_is_verbatim(self, tmp_path: Path) -> None:
        """The error text should be the OS message, unchanged."""
        missing = tmp_path / "absent.env"
        with pytest.raises(DotconfError) as exc_info:
            dotconf.init_with_path(missing)
        assert str(exc_info.value) == str(exc_info.value.__cause__)

    def test_default_loader_uses_process_environment(self) -> None:
        """The module-level functions should target os.environ."""
        assert isinstance(dotconf.default_loader().environment, ProcessEnvironment)


class TestApply:
    """Verify apply() with caller-supplied pairs."""

    def test_apply_pairs(self, process_env: None) -> None:
        """apply() should write pairs straight into os.environ."""
        dotconf.apply([("DOTCONF_X", "1"), ("DOTCONF_X", "2")])
        assert os.environ["DOTCONF_X"] == "2"

    @pytest.mark.skipif(os.name != "posix", reason="surrogateescape filesystem encoding")
    def test_unencodable_entry_skipped_rest_applied(self, process_env: None) -> None:
        """A value the OS cannot encode should be skipped, not abort the batch."""
        loader = Loader()
        loader.apply([("DOTCONF_S1", "a"), ("DOTCONF_BAD", "\ud800"), ("DOTCONF_S2", "b")])
        assert os.environ["DOTCONF_S1"] == "a"
        assert "DOTCONF_BAD" not in os.environ
        assert os.environ["DOTCONF_S2"] == "b"
        assert [e.level for e in loader.logger.entries] == [LogLevel.WARNING]

    def test_parse_then_apply(self, process_env: None, write_env: Callable[..., Path]) -> None:
        """parse_dotconf_file() output should feed apply() directly."""
        pairs = dotconf.parse_dotconf_file(write_env("DOTCONF_P = parsed"))
        assert "DOTCONF_P" not in os.environ
        dotconf.apply(pairs)
        assert dotconf.var("DOTCONF_P").as_text() == "parsed"


class TestVar:
    """Verify var() against the process environment."""

    def test_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An unset variable should be NOT_FOUND."""
        monkeypatch.delenv("DOTCONF_NOPE", raising=False)
        value = dotconf.var("DOTCONF_NOPE")
        assert value.status is LookupStatus.NOT_FOUND
        assert value.as_text() is None

    @pytest.mark.skipif(os.name != "posix", reason="needs byte-level environment")
    def test_undecodable_bytes(self, process_env: None) -> None:
        """A value that is not valid UTF-8 should be NOT_UNICODE."""
        os.environb[b"DOTCONF_RAW"] = b"caf\xe9"
        value = dotconf.var("DOTCONF_RAW")
        assert value.status is LookupStatus.NOT_UNICODE
        assert value.as_text() is None
