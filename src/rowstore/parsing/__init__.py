"""Parsing module for the statement language."""

from rowstore.parsing.statement_lexer import StatementLexer
from rowstore.parsing.statement_parser import (
    InsertStatement,
    SelectStatement,
    Statement,
    StatementParser,
)

__all__ = [
    "InsertStatement",
    "SelectStatement",
    "Statement",
    "StatementLexer",
    "StatementParser",
]
