"""
Cluck Token Definitions

Defines all token types and the Token class for lexical analysis.
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any


class TokenType(Enum):
    """All token types in Cluck."""

    # Literals
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    IDENTIFIER = auto()

    # Keywords
    LET = auto()
    BUILD = auto()
    HATCH = auto()
    PUSH = auto()
    TOP = auto()

    # Statement words
    AXE = auto()
    CHICKEN = auto()
    ADD = auto()
    FOX = auto()
    ROOSTER = auto()
    COMPARE = auto()
    PICK = auto()
    PECK = auto()
    FR = auto()
    BBQ = auto()

    # Operators
    PLUS = auto()          # +
    MINUS = auto()         # -
    STAR = auto()          # *
    SLASH = auto()         # /
    EQUALS = auto()        # =

    # Delimiters
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    LBRACKET = auto()      # [
    RBRACKET = auto()      # ]
    LBRACE = auto()        # {
    RBRACE = auto()        # }
    COMMA = auto()         # ,
    SEMICOLON = auto()     # ;


# Keyword mapping
KEYWORDS = {
    'let': TokenType.LET,
    'build': TokenType.BUILD,
    'hatch': TokenType.HATCH,
    'push': TokenType.PUSH,
    'TOP': TokenType.TOP,
    'axe': TokenType.AXE,
    'chicken': TokenType.CHICKEN,
    'add': TokenType.ADD,
    'fox': TokenType.FOX,
    'rooster': TokenType.ROOSTER,
    'compare': TokenType.COMPARE,
    'pick': TokenType.PICK,
    'peck': TokenType.PECK,
    'fr': TokenType.FR,
    'bbq': TokenType.BBQ,
}

# Single-character punctuation
PUNCTUATION = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    ',': TokenType.COMMA,
    '=': TokenType.EQUALS,
    ';': TokenType.SEMICOLON,
}

# Words that form a complete statement on their own
WORD_TOKENS = (
    TokenType.AXE,
    TokenType.CHICKEN,
    TokenType.ADD,
    TokenType.FOX,
    TokenType.ROOSTER,
    TokenType.COMPARE,
    TokenType.PICK,
    TokenType.PECK,
    TokenType.FR,
    TokenType.BBQ,
)


@dataclass(frozen=True)
class Token:
    """
    A single token from the source code.

    Equality only looks at the kind and value, so a token built by hand
    (``Token(TokenType.RPAREN)``) matches the one the lexer produced.
    """

    type: TokenType
    value: Any = None
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, line={self.line})"
        return f"Token({self.type.name}, line={self.line})"

    def is_word(self) -> bool:
        """Check if this token is a zero-argument statement word."""
        return self.type in WORD_TOKENS


def describe(token) -> str:
    """Describe a lookahead token for diagnostics."""
    if token is None:
        return "end of input"
    if token.value is not None:
        return f"{token.type.name}({token.value!r})"
    return token.type.name
