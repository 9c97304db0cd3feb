"""Compile input lines into validated statements."""

from __future__ import annotations

from rowstore.errors import (
    NegativeIdError,
    StatementSyntaxError,
    StringTooLongError,
    UnrecognizedStatementError,
)
from rowstore.log import get_logger
from rowstore.parsing.statement_lexer import STATEMENT_KEYWORDS
from rowstore.parsing.statement_parser import InsertStatement, Statement, StatementParser
from rowstore.row import COLUMN_EMAIL_SIZE, COLUMN_USERNAME_SIZE, ENCODING, ENCODING_ERRORS, ID_MAX, Row

logger = get_logger(__name__)


def _encoded_width(text: str) -> int:
    """Return the stored width of a text field.

    Raises:
        StatementSyntaxError: If the text cannot be stored, either because it
            holds a NUL (the column padding byte) or a character that has no
            byte encoding.
    """
    if "\x00" in text:
        raise StatementSyntaxError()
    try:
        return len(text.encode(ENCODING, ENCODING_ERRORS))
    except UnicodeEncodeError:
        raise StatementSyntaxError() from None


def validate_row(row: Row) -> None:
    """Check a row against the column constraints.

    Checks run in a fixed order and the first failure wins: the id sign,
    then the id range, then the username, then the email.

    Raises:
        NegativeIdError: If the id is below zero.
        StatementSyntaxError: If the id does not fit the id column, or a text
            field cannot be stored.
        StringTooLongError: If a text field is wider than its column.
    """
    if row.id < 0:
        raise NegativeIdError()
    if row.id > ID_MAX:
        raise StatementSyntaxError()
    if _encoded_width(row.username) > COLUMN_USERNAME_SIZE:
        raise StringTooLongError()
    if _encoded_width(row.email) > COLUMN_EMAIL_SIZE:
        raise StringTooLongError()


class StatementCompiler:
    """Turns one line of input into a statement ready for execution."""

    def __init__(self) -> None:
        self._parser = StatementParser()

    def prepare(self, line: str) -> Statement:
        """Parse and validate a line.

        Raises:
            UnrecognizedStatementError: If the line does not start with a
                statement keyword.
            PrepareError: Any other parse or validation failure.
        """
        keyword = self._parser.lexer.leading_keyword(line)
        if keyword not in STATEMENT_KEYWORDS:
            raise UnrecognizedStatementError(line)

        statement = self._parser.parse(line)
        if isinstance(statement, InsertStatement):
            validate_row(statement.row)

        logger.debug("statement_prepared", kind=type(statement).__name__)
        return statement


def prepare_statement(line: str, compiler: StatementCompiler | None = None) -> Statement:
    """Compile a single line, building a compiler if none is given."""
    return (compiler or StatementCompiler()).prepare(line)
