"""Apply compiled statements to a table."""

from __future__ import annotations

from dataclasses import dataclass, field

from rowstore.parsing.statement_parser import InsertStatement, SelectStatement, Statement
from rowstore.row import Row
from rowstore.table import Table

EXECUTED = "Executed."


@dataclass
class ExecuteResult:
    """Result of executing a statement."""

    rows: list[Row] = field(default_factory=list)
    message: str = EXECUTED


def execute_insert(statement: InsertStatement, table: Table) -> ExecuteResult:
    """Append the statement's row.

    Raises:
        TableFullError: If the table has no free slot.
    """
    table.append(statement.row)
    return ExecuteResult()


def execute_select(statement: SelectStatement, table: Table) -> ExecuteResult:
    return ExecuteResult(rows=list(table.scan_all()))


def execute_statement(statement: Statement, table: Table) -> ExecuteResult:
    """Execute a compiled statement against a table."""
    if isinstance(statement, InsertStatement):
        return execute_insert(statement, table)
    elif isinstance(statement, SelectStatement):
        return execute_select(statement, table)
    raise TypeError(f"Unknown statement type: {type(statement).__name__}")
