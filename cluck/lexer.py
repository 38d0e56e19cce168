"""
Cluck Lexer

Turns Cluck source code into a pull-based token stream with one token of
lookahead.
"""

import logging
from typing import Callable, List, Optional, Tuple, Type

import numpy as np

from .tokens import Token, TokenType, KEYWORDS, PUNCTUATION, describe
from .errors import SourceError, LexError, ParseError


logger = logging.getLogger(__name__)

# Integer literals are stored as signed 64-bit values
INT64 = np.iinfo(np.int64)

ESCAPES = {
    'n': '\n',
    't': '\t',
    '"': '"',
}


def is_digit(c: Optional[str]) -> bool:
    return c is not None and '0' <= c <= '9'


def is_ident_char(c: Optional[str]) -> bool:
    # Identifiers may start with any letter but continue in ASCII only
    return c is not None and c.isascii() and (c.isalnum() or c == '_')


class Lexer:
    """
    Lexical analyzer for Cluck source code.

    The lexer always holds exactly one token of lookahead: it is computed
    in the constructor and again on every ``advance``. ``peek`` returns
    ``None`` once the input is exhausted.
    """

    def __init__(self, source: str):
        """
        Initialize the lexer.

        Args:
            source: Cluck source code to tokenize
        """
        self.source = source
        self.current = 0     # Offset of the cursor character
        self.line = 1        # Current line number
        self.column = 1      # Column of the cursor character
        self.line_start = 0  # Offset of current line start
        self.char: Optional[str] = source[0] if source else None

        # (line, column, line_start) just past the lookahead token
        self.token_end: Tuple[int, int, int] = (1, 1, 0)
        self.lookahead: Optional[Token] = self.scan_token()

    # =========================================================================
    # Lookahead protocol
    # =========================================================================

    def peek(self) -> Optional[Token]:
        """Return the lookahead token without consuming it."""
        return self.lookahead

    def advance(self) -> Optional[Token]:
        """Consume the lookahead token and scan the next one."""
        token = self.lookahead
        self.lookahead = self.scan_token()
        return token

    def match_token(self, expected: Token) -> Token:
        """Consume the lookahead if it equals expected, else fail."""
        if self.lookahead != expected:
            raise self.parse_error(
                f"Expected {describe(expected)}, got {describe(self.lookahead)}"
            )
        return self.advance()

    def tokenize(self) -> List[Token]:
        """
        Drain the remaining token stream.

        Returns:
            List of tokens, starting with the current lookahead
        """
        tokens = []
        while self.lookahead is not None:
            tokens.append(self.advance())
        logger.debug("Lexed %d tokens", len(tokens))
        return tokens

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def source_line(self, line_start: int) -> str:
        """Return the source line beginning at line_start."""
        end = self.source.find('\n', line_start)
        if end == -1:
            end = len(self.source)
        return self.source[line_start:end].rstrip('\r')

    def error(self, cls: Type[SourceError], message: str) -> SourceError:
        """Build an error pointing just behind the cursor."""
        return cls(message, self.line, self.column,
                   self.source_line(self.line_start))

    def parse_error(self, message: str) -> ParseError:
        """Build an error pointing at the end of the lookahead token."""
        line, column, line_start = self.token_end
        return ParseError(message, line, column, self.source_line(line_start))

    # =========================================================================
    # Scanning
    # =========================================================================

    def scan_token(self) -> Optional[Token]:
        """Scan the next token, or return None at end of input."""
        self.skip_whitespace()

        c = self.char
        if c is None:
            return None

        line, column = self.line, self.column

        if c in PUNCTUATION:
            self.step()
            token = Token(PUNCTUATION[c], None, line, column)
        elif c == '"':
            token = Token(TokenType.STRING, self.string(), line, column)
        elif is_digit(c):
            token = self.number(line, column)
        elif c.isalpha() or c == '_':
            token = self.identifier(line, column)
        else:
            self.step()
            raise self.error(LexError, f"Invalid character {c!r}")

        self.token_end = (self.line, self.column, self.line_start)
        return token

    def step(self) -> None:
        """Consume the cursor character."""
        if self.char == '\n':
            self.line += 1
            self.column = 1
            self.line_start = self.current + 1
        else:
            self.column += 1

        self.current += 1
        if self.current < len(self.source):
            self.char = self.source[self.current]
        else:
            self.char = None

    def consume_while(self, pred: Callable[[str], bool]) -> None:
        while self.char is not None and pred(self.char):
            self.step()

    def skip_whitespace(self) -> None:
        self.consume_while(str.isspace)

    def string(self) -> str:
        """Scan a string literal, returning its unescaped text."""
        self.step()  # Opening quote
        parts = []

        while True:
            start = self.current
            self.consume_while(lambda c: c != '\\' and c != '"')
            parts.append(self.source[start:self.current])

            if self.char is None:
                raise self.error(LexError, "Unterminated string literal")

            if self.char == '"':
                self.step()
                return ''.join(parts)

            self.step()  # Backslash
            c = self.char
            if c is None:
                raise self.error(LexError, "Unterminated string literal")
            self.step()
            if c not in ESCAPES:
                raise self.error(LexError, f"Invalid escape sequence '\\{c}'")
            parts.append(ESCAPES[c])

    def number(self, line: int, column: int) -> Token:
        """Scan an integer or float literal."""
        start = self.current
        self.consume_while(is_digit)

        if self.char == '.':
            self.step()
            self.consume_while(is_digit)
            value = float(self.source[start:self.current])
            return Token(TokenType.FLOAT, value, line, column)

        text = self.source[start:self.current]
        if len(text.lstrip('0')) > len(str(INT64.max)) or int(text) > INT64.max:
            raise self.error(LexError, "Integer literal out of range")
        return Token(TokenType.INT, int(text), line, column)

    def identifier(self, line: int, column: int) -> Token:
        """Scan an identifier or reserved word."""
        start = self.current
        self.consume_while(is_ident_char)
        text = self.source[start:self.current]

        token_type = KEYWORDS.get(text)
        if token_type is not None:
            return Token(token_type, None, line, column)
        return Token(TokenType.IDENTIFIER, text, line, column)
