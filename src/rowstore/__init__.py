"""rowstore - a single-table, fixed-width row store behind a line protocol."""

from rowstore.errors import (
    ExecuteError,
    NegativeIdError,
    PrepareError,
    RowStoreError,
    StatementSyntaxError,
    StringTooLongError,
    TableFullError,
    UnrecognizedStatementError,
)
from rowstore.executor import ExecuteResult, execute_statement
from rowstore.parsing import InsertStatement, SelectStatement, Statement, StatementParser
from rowstore.row import ROW_SIZE, Row, deserialize_row, serialize_row
from rowstore.statement import StatementCompiler, prepare_statement
from rowstore.table import PAGE_SIZE, ROWS_PER_PAGE, TABLE_MAX_PAGES, TABLE_MAX_ROWS, Table

__all__ = [
    # Main API
    "Table",
    "Row",
    "StatementCompiler",
    "prepare_statement",
    "execute_statement",
    "ExecuteResult",
    # Statements
    "Statement",
    "InsertStatement",
    "SelectStatement",
    "StatementParser",
    # Row codec
    "serialize_row",
    "deserialize_row",
    "ROW_SIZE",
    "PAGE_SIZE",
    "ROWS_PER_PAGE",
    "TABLE_MAX_PAGES",
    "TABLE_MAX_ROWS",
    # Errors
    "RowStoreError",
    "PrepareError",
    "ExecuteError",
    "StatementSyntaxError",
    "UnrecognizedStatementError",
    "NegativeIdError",
    "StringTooLongError",
    "TableFullError",
]

__version__ = "0.1.0"
