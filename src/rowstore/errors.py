"""Errors raised while preparing and executing statements.

Every error carries the exact line the REPL prints for it. None of them end
a session: the dispatcher reports the message and reads the next line.
"""

from __future__ import annotations


class RowStoreError(Exception):
    """Base class for statement-level failures."""

    default_message = "Error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        """Text written to the output stream for this error."""
        return str(self.args[0])


class PrepareError(RowStoreError):
    """A line could not be compiled into a statement."""


class StatementSyntaxError(PrepareError):
    default_message = "Syntax error. Could not parse statement."


class UnrecognizedStatementError(PrepareError):
    def __init__(self, line: str) -> None:
        super().__init__(f"Unrecognized keyword at start of '{line}'.")
        self.line = line


class NegativeIdError(PrepareError):
    default_message = "ID must be positive."


class StringTooLongError(PrepareError):
    default_message = "String is too long."


class ExecuteError(RowStoreError):
    """A compiled statement could not be applied to the table."""


class TableFullError(ExecuteError):
    default_message = "Error: Table full."
