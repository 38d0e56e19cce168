"""
Cluck Parser Tests

Tests for statement dispatch, precedence, associativity and parse errors.
"""

import pytest
from cluck import parse_source, ParseError, LexError
from cluck.ast import *
from cluck.tokens import Token, TokenType, WORD_TOKENS

PLUS = Token(TokenType.PLUS)
MINUS = Token(TokenType.MINUS)
STAR = Token(TokenType.STAR)
SLASH = Token(TokenType.SLASH)


def parse_push(source):
    """Parse a single push statement and return its expression."""
    program = parse_source(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, PushStmt)
    return stmt.expression


# =============================================================================
# Statements
# =============================================================================

class TestParserStatements:
    """Statement parsing tests."""

    def test_empty_program(self):
        assert parse_source("") == SequenceStmt([])

    @pytest.mark.parametrize("word", WORD_TOKENS)
    def test_word_statement(self, word):
        source = word.name.lower()
        assert parse_source(source) == SequenceStmt([WordStmt(word)])

    def test_semicolons_are_optional(self):
        program = parse_source("axe chicken; fox\npeck;")
        assert program.statements == [
            WordStmt(TokenType.AXE),
            WordStmt(TokenType.CHICKEN),
            WordStmt(TokenType.FOX),
            WordStmt(TokenType.PECK),
        ]

    def test_push_statement(self):
        program = parse_source("push 1; push 2.5")
        assert program.statements == [
            PushStmt(IntExpr(1)),
            PushStmt(FloatExpr(2.5)),
        ]

    def test_assignment_statement(self):
        program = parse_source("let x = 1 + y;")
        assert program.statements == [
            AssignStmt("x", BinaryExpr(IntExpr(1), PLUS, VariableExpr("y"))),
        ]

    def test_word_token_is_kept(self):
        stmt = parse_source("\n  bbq").statements[0]
        assert stmt.token.line == 2


# =============================================================================
# Expressions
# =============================================================================

class TestParserExpressions:
    """Expression parsing tests."""

    def test_literals(self):
        assert parse_push("push 42") == IntExpr(42)
        assert parse_push("push 4.25") == FloatExpr(4.25)

    def test_precedence(self):
        assert parse_push("push 1 + 2 * 3;") == BinaryExpr(
            IntExpr(1), PLUS, BinaryExpr(IntExpr(2), STAR, IntExpr(3))
        )

    def test_additive_left_associative(self):
        assert parse_push("push 1 - 2 + 3") == BinaryExpr(
            BinaryExpr(IntExpr(1), MINUS, IntExpr(2)), PLUS, IntExpr(3)
        )

    def test_multiplicative_left_associative(self):
        assert parse_push("push 8 / 4 * 2") == BinaryExpr(
            BinaryExpr(IntExpr(8), SLASH, IntExpr(4)), STAR, IntExpr(2)
        )

    def test_parentheses_override_precedence(self):
        assert parse_push("push (1 + 2) * 3") == BinaryExpr(
            BinaryExpr(IntExpr(1), PLUS, IntExpr(2)), STAR, IntExpr(3)
        )

    def test_parentheses_add_no_node(self):
        assert parse_push("push ((7))") == IntExpr(7)

    def test_unary_minus(self):
        assert parse_push("push -5") == UnaryExpr(MINUS, IntExpr(5))

    def test_unary_is_right_recursive(self):
        assert parse_push("push -+x") == UnaryExpr(
            MINUS, UnaryExpr(PLUS, VariableExpr("x"))
        )

    def test_unary_binds_tighter_than_binary(self):
        assert parse_push("push -2 * 3") == BinaryExpr(
            UnaryExpr(MINUS, IntExpr(2)), STAR, IntExpr(3)
        )

    def test_variable(self):
        assert parse_push("push speed") == VariableExpr("speed")

    def test_call(self):
        assert parse_push("push f(1, x, 2 * 3)") == CallExpr(
            "f", [IntExpr(1), VariableExpr("x"),
                  BinaryExpr(IntExpr(2), STAR, IntExpr(3))]
        )

    def test_call_without_arguments(self):
        assert parse_push("push now()") == CallExpr("now", [])

    def test_nested_calls(self):
        assert parse_push("push f(g(1), h())") == CallExpr(
            "f", [CallExpr("g", [IntExpr(1)]), CallExpr("h", [])]
        )

    def test_variable_then_group_is_call(self):
        # The lookahead after an identifier decides
        assert parse_push("push f (1)") == CallExpr("f", [IntExpr(1)])


# =============================================================================
# Errors
# =============================================================================

class TestParserErrors:
    """Parse error tests."""

    @pytest.mark.parametrize("source", [
        "push ;",
        "push",
        "push 1 +",
        "push * 2",
        "push f(1,)",
        "push \"text\"",
        "push )",
    ])
    def test_missing_expression(self, source):
        with pytest.raises(ParseError, match="Expected an expression"):
            parse_source(source)

    @pytest.mark.parametrize("source", [
        "build",
        "hatch",
        "TOP",
        "x",
        "1",
        ";",
        "axe;;",
        ")",
    ])
    def test_unexpected_token(self, source):
        with pytest.raises(ParseError, match="Unexpected token"):
            parse_source(source)

    def test_missing_close_paren(self):
        with pytest.raises(ParseError, match="Expected RPAREN, got end of input"):
            parse_source("push (1 + 2")

    def test_missing_close_paren_in_call(self):
        with pytest.raises(ParseError, match="Expected RPAREN, got INT"):
            parse_source("push f(1 2)")

    def test_assignment_needs_name(self):
        with pytest.raises(ParseError, match="Expected variable name"):
            parse_source("let 5 = 1")

    def test_assignment_needs_equals(self):
        with pytest.raises(ParseError, match="Expected EQUALS"):
            parse_source("let x 1")

    def test_lex_errors_propagate(self):
        with pytest.raises(LexError):
            parse_source("push 1 + @")

    def test_error_points_at_lookahead(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source("push ;")
        err = exc_info.value
        assert err.line == 1
        assert err.source_line == "push ;"
        assert err.pointer() == " " * 5 + "^"

    def test_error_at_end_points_at_last_token(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source("push 1 +\n\n")
        err = exc_info.value
        assert err.line == 1
        assert err.source_line == "push 1 +"
        assert err.pointer() == " " * 7 + "^"

    def test_error_on_later_line(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source("axe\npush )")
        err = exc_info.value
        assert err.line == 2
        assert err.source_line == "push )"
        assert err.render().endswith("push )\n     ^")

    def test_first_error_wins(self):
        with pytest.raises(ParseError, match="Unexpected token"):
            parse_source("build; push ;")
