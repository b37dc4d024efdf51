"""Tests for the command line entry point."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from ics23_testgen.cli import main
from ics23_testgen.fixture import Fixture
from ics23_testgen.generator import generate_fixture
from ics23_testgen.selection import Mode, Position


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers bound to this test's captured stderr."""
    yield
    package_logger = logging.getLogger("ics23_testgen")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


def _run_failing(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 1


class TestSuccess:
    """Fixture output on standard output."""

    def test_prints_fixture(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The JSON on stdout is the generated fixture, nothing else."""
        main(["exist", "left", "10"])

        captured = capsys.readouterr()
        assert Fixture.from_json(captured.out) == generate_fixture(Mode.EXIST, Position.LEFT, 10)
        assert captured.out.endswith("}\n")
        assert captured.err == ""

    def test_default_size(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Omitting SIZE is the same as passing 400."""
        main(["nonexist", "right"])
        implicit = capsys.readouterr().out

        main(["nonexist", "right", "400"])
        explicit = capsys.readouterr().out

        assert implicit == explicit

    def test_field_layout(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Four lowercase hex fields, value empty for non-existence."""
        main(["nonexist", "middle", "10"])

        data = json.loads(capsys.readouterr().out)
        assert list(data) == ["root", "key", "value", "proof"]
        assert data["value"] == ""
        assert len(data["root"]) == 64
        assert data["proof"] == data["proof"].lower()

    def test_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Help exits normally and documents the options."""
        main(["--help"])

        out = capsys.readouterr().out
        assert "Usage: testgen" in out
        assert "--verbose" in out


class TestLogging:
    """Log records never reach standard output."""

    def test_verbose_logs_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Debug output goes to stderr while stdout stays pure JSON."""
        main(["exist", "right", "10", "--verbose", "--no-color"])

        captured = capsys.readouterr()
        json.loads(captured.out)
        assert "DEBUG" in captured.err
        assert "Generated exist right fixture over 10 keys" in captured.err
        assert "\x1b[" not in captured.err

    def test_colored_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without --no-color the records carry ANSI colors."""
        main(["-v", "exist", "left", "5"])

        assert "\x1b[" in capsys.readouterr().err


class TestFailures:
    """Every failure exits 1 with nothing on stdout."""

    @pytest.mark.parametrize(
        "argv",
        [
            [],
            ["exist"],
            ["maybe", "left"],
            ["exist", "top"],
            ["exist", "left", "ten"],
            ["exist", "left", "0"],
            ["exist", "left", "-3"],
            ["exist", "left", "65537"],
            ["exist", "left", "10", "extra"],
            ["--bogus", "exist", "left"],
        ],
    )
    def test_usage_errors(self, capsys: pytest.CaptureFixture[str], argv: list[str]) -> None:
        """Bad arguments print usage to stderr."""
        _run_failing(argv)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Usage: testgen" in captured.err
        assert "Error" in captured.err

    def test_selection_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """An unsatisfiable scenario reports the selection error and the usage line."""
        _run_failing(["exist", "middle", "2"])

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: cannot select exist middle key among 2 keys" in captured.err
        assert "Usage: testgen" in captured.err

    def test_nonexist_middle_needs_two_keys(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A single key has no gap for a missing middle key."""
        _run_failing(["nonexist", "middle", "1"])

        assert capsys.readouterr().out == ""
