"""
Cluck Abstract Syntax Tree

Defines AST node classes for the Cluck language.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Any, Optional
from .tokens import Token, TokenType


# =============================================================================
# Base Classes
# =============================================================================

class ASTNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: 'ASTVisitor') -> Any:
        """Accept a visitor for traversal."""
        pass


class Expression(ASTNode):
    """Base class for expression nodes."""
    pass


class Statement(ASTNode):
    """Base class for statement nodes."""
    pass


# =============================================================================
# Expressions
# =============================================================================

@dataclass
class IntExpr(Expression):
    """Integer literal."""
    value: int
    token: Optional[Token] = field(default=None, compare=False)

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_int(self)


@dataclass
class FloatExpr(Expression):
    """Float literal."""
    value: float
    token: Optional[Token] = field(default=None, compare=False)

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_float(self)


@dataclass
class VariableExpr(Expression):
    """Reference to a variable by name."""
    name: str
    token: Optional[Token] = field(default=None, compare=False)

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_variable(self)


@dataclass
class UnaryExpr(Expression):
    """Unary operator expression (+, -)."""
    operator: Token
    operand: Expression

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_unary(self)


@dataclass
class BinaryExpr(Expression):
    """Binary operator expression."""
    left: Expression
    operator: Token
    right: Expression

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary(self)


@dataclass
class CallExpr(Expression):
    """Function call by name."""
    name: str
    arguments: List[Expression]
    token: Optional[Token] = field(default=None, compare=False)

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_call(self)


# =============================================================================
# Statements
# =============================================================================

@dataclass
class SequenceStmt(Statement):
    """Ordered sequence of statements; the root of every program."""
    statements: List[Statement]

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_sequence(self)


@dataclass
class WordStmt(Statement):
    """A statement word that takes no arguments (axe, chicken, ...)."""
    keyword: TokenType
    token: Optional[Token] = field(default=None, compare=False)

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_word(self)


@dataclass
class PushStmt(Statement):
    """push <expression>"""
    expression: Expression

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_push(self)


@dataclass
class AssignStmt(Statement):
    """let <name> = <expression>"""
    name: str
    value: Expression
    token: Optional[Token] = field(default=None, compare=False)

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_assign(self)


# =============================================================================
# Visitor
# =============================================================================

class ASTVisitor(ABC):
    """Base class for AST visitors."""

    @abstractmethod
    def visit_int(self, node: IntExpr) -> Any:
        pass

    @abstractmethod
    def visit_float(self, node: FloatExpr) -> Any:
        pass

    @abstractmethod
    def visit_variable(self, node: VariableExpr) -> Any:
        pass

    @abstractmethod
    def visit_unary(self, node: UnaryExpr) -> Any:
        pass

    @abstractmethod
    def visit_binary(self, node: BinaryExpr) -> Any:
        pass

    @abstractmethod
    def visit_call(self, node: CallExpr) -> Any:
        pass

    @abstractmethod
    def visit_sequence(self, node: SequenceStmt) -> Any:
        pass

    @abstractmethod
    def visit_word(self, node: WordStmt) -> Any:
        pass

    @abstractmethod
    def visit_push(self, node: PushStmt) -> Any:
        pass

    @abstractmethod
    def visit_assign(self, node: AssignStmt) -> Any:
        pass


# =============================================================================
# AST Printer (for debugging)
# =============================================================================

OPERATOR_SYMBOLS = {
    TokenType.PLUS: '+',
    TokenType.MINUS: '-',
    TokenType.STAR: '*',
    TokenType.SLASH: '/',
}


class ASTPrinter(ASTVisitor):
    """Prints AST for debugging."""

    def __init__(self):
        self.indent = 0

    def print(self, node: ASTNode) -> str:
        return node.accept(self)

    def _indent(self) -> str:
        return "  " * self.indent

    def _symbol(self, operator: Token) -> str:
        return OPERATOR_SYMBOLS.get(operator.type, operator.type.name)

    def visit_int(self, node: IntExpr) -> str:
        return f"{self._indent()}Int({node.value})"

    def visit_float(self, node: FloatExpr) -> str:
        return f"{self._indent()}Float({node.value!r})"

    def visit_variable(self, node: VariableExpr) -> str:
        return f"{self._indent()}Variable({node.name})"

    def visit_unary(self, node: UnaryExpr) -> str:
        self.indent += 1
        operand = node.operand.accept(self)
        self.indent -= 1
        return f"{self._indent()}UnOp({self._symbol(node.operator)})\n{operand}"

    def visit_binary(self, node: BinaryExpr) -> str:
        self.indent += 1
        left = node.left.accept(self)
        right = node.right.accept(self)
        self.indent -= 1
        return f"{self._indent()}BinOp({self._symbol(node.operator)})\n{left}\n{right}"

    def visit_call(self, node: CallExpr) -> str:
        self.indent += 1
        args = [arg.accept(self) for arg in node.arguments]
        self.indent -= 1
        header = f"{self._indent()}Call({node.name})"
        return "\n".join([header] + args)

    def visit_sequence(self, node: SequenceStmt) -> str:
        self.indent += 1
        stmts = [stmt.accept(self) for stmt in node.statements]
        self.indent -= 1
        return "\n".join([f"{self._indent()}Sequence"] + stmts)

    def visit_word(self, node: WordStmt) -> str:
        return f"{self._indent()}{node.keyword.name.capitalize()}"

    def visit_push(self, node: PushStmt) -> str:
        self.indent += 1
        expr = node.expression.accept(self)
        self.indent -= 1
        return f"{self._indent()}Push\n{expr}"

    def visit_assign(self, node: AssignStmt) -> str:
        self.indent += 1
        value = node.value.accept(self)
        self.indent -= 1
        return f"{self._indent()}Assign({node.name})\n{value}"
