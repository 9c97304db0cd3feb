"""Lexer for the insert/select statement language."""

import ply.lex as lex

from rowstore.errors import StatementSyntaxError


class StatementLexer:
    """Lexer for tokenizing statements.

    Arguments are whitespace-delimited and unquoted, so anything that is not
    an integer or a keyword lexes as a WORD.
    """

    # Reserved keywords (case-sensitive)
    reserved = {
        "insert": "INSERT",
        "select": "SELECT",
    }

    tokens = [
        "INTEGER",
        "WORD",
    ] + list(reserved.values())

    t_ignore = " \t"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_INTEGER(self, t: lex.LexToken) -> lex.LexToken:
        r"[-+]?\d+(?=\s|$)"
        # Kept as text: an integer is also a valid username or email
        return t

    def t_WORD(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\s]+"
        t.type = self.reserved.get(t.value, "WORD")
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"[\r\n]+"
        t.lexer.lineno += t.value.count("\n")

    def t_error(self, t: lex.LexToken) -> None:
        raise StatementSyntaxError()

    # --- Lexer methods ---

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens

    def leading_keyword(self, data: str) -> str | None:
        """Return the token type of the first token, or None for a blank line."""
        self.input(data)
        tok = self.token()
        return tok.type if tok is not None else None


# Token types that start a statement
STATEMENT_KEYWORDS: frozenset[str] = frozenset(StatementLexer.reserved.values())
