"""Parser for the insert/select statement language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import ply.yacc as yacc

from rowstore.errors import StatementSyntaxError
from rowstore.parsing.statement_lexer import StatementLexer
from rowstore.row import Row


@dataclass
class InsertStatement:
    """insert <id> <username> <email>"""

    row: Row


@dataclass
class SelectStatement:
    """select -- every row, in insertion order."""


Statement = InsertStatement | SelectStatement


class StatementParser:
    """Parser for statements.

    Only the shape of a statement is checked here. Column constraints are
    applied by :func:`rowstore.statement.prepare_statement`.
    """

    tokens = StatementLexer.tokens

    def __init__(self) -> None:
        self.lexer = StatementLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_statement(self, p: yacc.YaccProduction) -> None:
        """statement : insert_statement
                     | select_statement"""
        p[0] = p[1]

    def p_insert_statement(self, p: yacc.YaccProduction) -> None:
        """insert_statement : INSERT INTEGER value value"""
        p[0] = InsertStatement(row=Row(id=int(p[2]), username=p[3], email=p[4]))

    def p_select_statement(self, p: yacc.YaccProduction) -> None:
        """select_statement : SELECT"""
        p[0] = SelectStatement()

    def p_value(self, p: yacc.YaccProduction) -> None:
        """value : WORD
                 | INTEGER
                 | INSERT
                 | SELECT"""
        p[0] = p[1]

    def p_error(self, p: yacc.YaccProduction) -> None:
        raise StatementSyntaxError()

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="statement", **kwargs)

    def parse(self, data: str) -> Statement:
        """Parse a statement string."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        return self.parser.parse(data, lexer=self.lexer.lexer)
