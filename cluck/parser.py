"""
Cluck Parser

Recursive descent parser that builds an AST from the lexer's token stream.
Every decision is made on the single lookahead token.
"""

import logging
from typing import List, Optional

from .tokens import Token, TokenType, describe
from .lexer import Lexer
from .ast import *


logger = logging.getLogger(__name__)


class Parser:
    """Recursive descent parser for Cluck."""

    def __init__(self, lexer: Lexer):
        """
        Initialize the parser.

        Args:
            lexer: Lexer positioned at the start of the program
        """
        self.lexer = lexer

    def parse(self) -> SequenceStmt:
        """
        Parse statements until the input is exhausted.

        Returns:
            SequenceStmt holding every top-level statement
        """
        statements = []

        while self.peek() is not None:
            statements.append(self.statement())
            self.match(TokenType.SEMICOLON)

        logger.debug("Parsed %d statements", len(statements))
        return SequenceStmt(statements)

    # =========================================================================
    # Statements
    # =========================================================================

    def statement(self) -> Statement:
        """Parse a single statement."""
        token = self.peek()

        if token.is_word():
            self.lexer.advance()
            return WordStmt(token.type, token)
        if self.match(TokenType.PUSH):
            return PushStmt(self.expression())
        if self.match(TokenType.LET):
            return self.assignment(token)

        raise self.lexer.parse_error(f"Unexpected token {describe(token)}")

    def assignment(self, keyword: Token) -> AssignStmt:
        """Parse the rest of `let <name> = <expression>`."""
        name = self.consume(TokenType.IDENTIFIER, "variable name")
        self.lexer.match_token(Token(TokenType.EQUALS))
        return AssignStmt(name.value, self.expression(), keyword)

    # =========================================================================
    # Expressions
    # =========================================================================

    def expression(self) -> Expression:
        """Parse addition/subtraction."""
        expr = self.term()

        while self.check(TokenType.PLUS) or self.check(TokenType.MINUS):
            operator = self.lexer.advance()
            right = self.term()
            expr = BinaryExpr(expr, operator, right)

        return expr

    def term(self) -> Expression:
        """Parse multiplication/division."""
        expr = self.factor()

        while self.check(TokenType.STAR) or self.check(TokenType.SLASH):
            operator = self.lexer.advance()
            right = self.factor()
            expr = BinaryExpr(expr, operator, right)

        return expr

    def factor(self) -> Expression:
        """Parse literals, unary operators, groups, calls and variables."""
        token = self.peek()

        if self.match(TokenType.INT):
            return IntExpr(token.value, token)
        if self.match(TokenType.FLOAT):
            return FloatExpr(token.value, token)

        if self.match(TokenType.PLUS) or self.match(TokenType.MINUS):
            return UnaryExpr(token, self.factor())

        if self.match(TokenType.LPAREN):
            expr = self.expression()
            self.lexer.match_token(Token(TokenType.RPAREN))
            return expr

        if self.match(TokenType.IDENTIFIER):
            if self.match(TokenType.LPAREN):
                arguments = self.arguments()
                self.lexer.match_token(Token(TokenType.RPAREN))
                return CallExpr(token.value, arguments, token)
            return VariableExpr(token.value, token)

        raise self.lexer.parse_error(
            f"Expected an expression, got {describe(token)}"
        )

    def arguments(self) -> List[Expression]:
        """Parse a possibly empty, comma separated argument list."""
        arguments = []

        if not self.check(TokenType.RPAREN):
            arguments.append(self.expression())
            while self.match(TokenType.COMMA):
                arguments.append(self.expression())

        return arguments

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def peek(self) -> Optional[Token]:
        """Return the lookahead token."""
        return self.lexer.peek()

    def check(self, type: TokenType) -> bool:
        """Check if the lookahead is of the given type."""
        token = self.lexer.peek()
        return token is not None and token.type == type

    def match(self, type: TokenType) -> bool:
        """Consume the lookahead if it is of the given type."""
        if self.check(type):
            self.lexer.advance()
            return True
        return False

    def consume(self, type: TokenType, what: str) -> Token:
        """Consume a token of the expected type or raise an error."""
        if self.check(type):
            return self.lexer.advance()
        raise self.lexer.parse_error(
            f"Expected {what}, got {describe(self.peek())}"
        )
