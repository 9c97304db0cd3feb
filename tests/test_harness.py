"""End-to-end tests that drive the engine as a subprocess."""

import subprocess
import sys
import time

import pytest

from rowstore.harness import ScriptResult, run_script, split_lines


class TestSplitLines:
    """Tests for scanner-style line splitting."""

    def test_trailing_newline(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_unterminated_fragment_is_kept(self):
        assert split_lines("db > Executed.\ndb > ") == ["db > Executed.", "db > "]

    def test_empty_output(self):
        assert split_lines("") == []


class TestScriptResult:
    def test_ok(self):
        assert ScriptResult(lines=[], returncode=0).ok
        assert not ScriptResult(lines=[], returncode=1).ok


class TestDatabase:
    """Transcript tests against a real engine process."""

    def test_inserts_and_retrieves_a_row(self):
        result = run_script([
            "insert 1 user1 person1@example.com",
            "select",
            ".exit",
        ])

        assert result.ok
        assert result.lines == [
            "db > Executed.",
            "db > (1, user1, person1@example.com)",
            "Executed.",
            "db > ",
        ]

    def test_allows_inserting_strings_that_are_the_maximum_length(self):
        long_username = "a" * 32
        long_email = "b" * 255

        result = run_script([
            f"insert 1 {long_username} {long_email}",
            "select",
            ".exit",
        ])

        assert result.ok
        assert result.lines == [
            "db > Executed.",
            f"db > (1, {long_username}, {long_email})",
            "Executed.",
            "db > ",
        ]

    def test_prints_error_message_when_strings_are_too_long(self):
        long_username = "a" * 33
        long_email = "b" * 256

        result = run_script([
            f"insert 1 {long_username} {long_email}",
            "select",
            ".exit",
        ])

        assert result.ok
        assert result.lines == [
            "db > String is too long.",
            "db > Executed.",
            "db > ",
        ]

    def test_prints_an_error_message_if_id_is_negative(self):
        result = run_script([
            "insert -1 user1 person1@example.com",
            "select",
            ".exit",
        ])

        assert result.ok
        assert result.lines == [
            "db > ID must be positive.",
            "db > Executed.",
            "db > ",
        ]

    def test_prints_error_message_when_table_is_full(self):
        """The script ends without .exit; closing stdin ends the session."""
        commands = [f"insert {i} user{i} person{i}@example.com" for i in range(1401)]

        result = run_script(commands, timeout=30.0)

        assert result.ok
        assert result.lines[-2:-1] == ["db > Error: Table full."]

    def test_select_after_table_full_returns_stored_rows(self):
        commands = [f"insert {i} user{i} person{i}@example.com" for i in range(1401)]
        result = run_script(commands + ["select", ".exit"], timeout=30.0)

        assert result.ok
        assert result.lines[-3] == "(1399, user1399, person1399@example.com)"
        assert result.lines[-2] == "Executed."
        assert "(1400, user1400, person1400@example.com)" not in result.lines

    def test_custom_command_line(self):
        """The engine command line can be overridden, e.g. to pass options."""
        result = run_script(
            ["select", ".exit"],
            argv=[sys.executable, "-m", "rowstore.repl", "--log-level", "ERROR"],
        )

        assert result.ok
        assert result.lines == ["db > Executed.", "db > "]

    def test_nonzero_exit_is_reported(self, tmp_path):
        result = run_script([], argv=[sys.executable, "-m", "rowstore.repl", "-f", str(tmp_path / "missing")])

        assert not result.ok
        assert result.returncode == 1
        assert result.lines == []


class TestUndecodableInput:
    """Bytes that are not valid UTF-8 must not end the session."""

    def test_invalid_utf8_is_stored_and_echoed(self):
        result = run_script([
            "insert 1 a b",
            "insert 2 \udcff\udcfe c",
            "select",
            ".exit",
        ])

        assert result.ok
        assert result.lines == [
            "db > Executed.",
            "db > Executed.",
            "db > (1, a, b)",
            "(2, \udcff\udcfe, c)",
            "Executed.",
            "db > ",
        ]


class TestTimeout:
    """The timeout bounds the whole exchange, not just the final wait."""

    def test_hanging_engine_is_killed(self):
        argv = [sys.executable, "-c", "import time; time.sleep(30)"]

        start = time.monotonic()
        with pytest.raises(subprocess.TimeoutExpired):
            run_script([], argv=argv, timeout=1.0)

        assert time.monotonic() - start < 10
