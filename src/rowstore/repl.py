"""Line-oriented REPL for the users table.

Each turn writes the prompt, reads one line and writes that line's output.
Lines starting with ``.`` are meta-commands handled here; everything else is
compiled into a statement and executed against the session's table.
"""

from __future__ import annotations

import argparse
import io
import sys
from enum import Enum, auto
from pathlib import Path
from typing import TextIO

from rowstore.errors import RowStoreError
from rowstore.executor import ExecuteResult, execute_statement
from rowstore.log import default_level, get_logger, setup_logging
from rowstore.row import ENCODING, ENCODING_ERRORS, ROW_SIZE, Row
from rowstore.statement import StatementCompiler
from rowstore.table import PAGE_SIZE, ROWS_PER_PAGE, TABLE_MAX_PAGES, TABLE_MAX_ROWS, Table

PROMPT = "db > "

logger = get_logger(__name__)


class ReplState(Enum):
    AWAITING_LINE = auto()
    DISPATCHING = auto()
    TERMINATED = auto()


class MetaCommandResult(Enum):
    SUCCESS = auto()
    EXIT = auto()
    UNRECOGNIZED_COMMAND = auto()


def format_row(row: Row) -> str:
    """Format a row as ``(id, username, email)``."""
    return f"({row.id}, {row.username}, {row.email})"


def print_result(result: ExecuteResult, out: TextIO) -> None:
    """Write a statement's rows, one per line, then its summary line."""
    for row in result.rows:
        out.write(format_row(row) + "\n")
    out.write(result.message + "\n")


def print_constants(out: TextIO) -> None:
    out.write("Constants:\n")
    out.write(f"ROW_SIZE: {ROW_SIZE}\n")
    out.write(f"PAGE_SIZE: {PAGE_SIZE}\n")
    out.write(f"ROWS_PER_PAGE: {ROWS_PER_PAGE}\n")
    out.write(f"TABLE_MAX_PAGES: {TABLE_MAX_PAGES}\n")
    out.write(f"TABLE_MAX_ROWS: {TABLE_MAX_ROWS}\n")


class Repl:
    """Drives one session over a table.

    The table is owned by the caller; the REPL only reads and appends rows.
    Streams default to the process's stdin and stdout.
    """

    def __init__(
        self,
        table: Table,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        prompt: str = PROMPT,
    ) -> None:
        self.table = table
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.prompt = prompt
        self.state = ReplState.AWAITING_LINE
        self.turns = 0
        self._compiler = StatementCompiler()

    def read_line(self) -> str | None:
        """Write the prompt and read the next line, or None at end of input."""
        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def do_meta_command(self, line: str) -> MetaCommandResult:
        if line == ".exit":
            return MetaCommandResult.EXIT
        elif line == ".constants":
            print_constants(self.stdout)
            return MetaCommandResult.SUCCESS
        return MetaCommandResult.UNRECOGNIZED_COMMAND

    def dispatch(self, line: str) -> None:
        """Handle one line of input and write its output."""
        self.state = ReplState.DISPATCHING
        self.turns += 1

        if line.startswith("."):
            meta_result = self.do_meta_command(line)
            if meta_result == MetaCommandResult.EXIT:
                self.state = ReplState.TERMINATED
                return
            if meta_result == MetaCommandResult.UNRECOGNIZED_COMMAND:
                self.stdout.write(f"Unrecognized command '{line}'\n")
        else:
            try:
                statement = self._compiler.prepare(line)
                result = execute_statement(statement, self.table)
            except RowStoreError as e:
                logger.debug("statement_failed", error=type(e).__name__)
                self.stdout.write(e.message + "\n")
            else:
                print_result(result, self.stdout)

        self.stdout.flush()
        self.state = ReplState.AWAITING_LINE

    def run(self) -> int:
        """Run turns until ``.exit`` or end of input. Returns the exit status."""
        while self.state != ReplState.TERMINATED:
            line = self.read_line()
            if line is None:
                self.state = ReplState.TERMINATED
                break
            self.dispatch(line)

        logger.debug("session_ended", turns=self.turns, rows=self.table.count)
        return 0


def use_surrogateescape(stream: TextIO) -> None:
    """Make a standard stream pass undecodable bytes through unchanged."""
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(encoding=ENCODING, errors=ENCODING_ERRORS)


def run_repl(stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """Run a session over a fresh table."""
    with Table() as table:
        return Repl(table, stdin=stdin, stdout=stdout).run()


def run_file(file_path: Path, stdout: TextIO | None = None) -> int:
    """Run a session reading its lines from a file.

    Returns:
        The session's exit status, or 1 if the file cannot be read.
    """
    try:
        script = open(file_path, encoding=ENCODING, errors=ENCODING_ERRORS)
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    with script:
        return run_repl(stdin=script, stdout=stdout)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(
        description="Line-oriented REPL for a single fixed-schema users table"
    )
    arg_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Read input lines from a file instead of standard input",
    )
    arg_parser.add_argument(
        "--log-level",
        default=default_level(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Log level for messages written to standard error",
    )
    arg_parser.add_argument(
        "--log-format",
        default="console",
        choices=["console", "json"],
        help="Log output format",
    )

    args = arg_parser.parse_args(argv)
    setup_logging(args.log_level, args.log_format)
    use_surrogateescape(sys.stdin)
    use_surrogateescape(sys.stdout)

    if args.file:
        if not args.file.exists():
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return 1
        return run_file(args.file)

    return run_repl()


if __name__ == "__main__":
    sys.exit(main())
