"""
Cluck Code Generator

Walks the AST and emits a flat, postfix instruction list.
"""

import logging

from .tokens import TokenType
from .ast import *
from .bytecode import Bytecode, OpCode
from .errors import CompileError, UnsupportedFeature


logger = logging.getLogger(__name__)

WORD_OPCODES = {
    TokenType.AXE: OpCode.AXE,
    TokenType.CHICKEN: OpCode.CHICKEN,
    TokenType.ADD: OpCode.ADD,
    TokenType.FOX: OpCode.FOX,
    TokenType.ROOSTER: OpCode.ROOSTER,
    TokenType.COMPARE: OpCode.COMPARE,
    TokenType.PICK: OpCode.PICK,
    TokenType.PECK: OpCode.PECK,
    TokenType.FR: OpCode.FR,
    TokenType.BBQ: OpCode.BBQ,
}

BINARY_OPCODES = {
    TokenType.PLUS: OpCode.ADD,
    TokenType.MINUS: OpCode.SUB,
    TokenType.STAR: OpCode.MUL,
    TokenType.SLASH: OpCode.DIV,
}


class CodeGenerator(ASTVisitor):
    """Generates an instruction list from an AST."""

    def __init__(self):
        self.bytecode = Bytecode()

    def generate(self, program: Statement) -> Bytecode:
        """Generate the instruction list for a program AST."""
        self.bytecode = Bytecode()
        program.accept(self)
        logger.debug("Emitted %d instructions", len(self.bytecode))
        return self.bytecode

    # =========================================================================
    # Statement Visitors
    # =========================================================================

    def visit_sequence(self, node: SequenceStmt) -> None:
        for stmt in node.statements:
            stmt.accept(self)

    def visit_word(self, node: WordStmt) -> None:
        opcode = WORD_OPCODES.get(node.keyword)
        if opcode is None:
            raise CompileError(f"Unknown statement word: {node.keyword.name}")
        self.bytecode.emit(opcode)

    def visit_push(self, node: PushStmt) -> None:
        # Leaves exactly one value on the operand stack
        node.expression.accept(self)

    def visit_assign(self, node: AssignStmt) -> None:
        line = node.token.line if node.token else None
        raise UnsupportedFeature(
            f"Assignment to '{node.name}' is not supported", line
        )

    # =========================================================================
    # Expression Visitors
    # =========================================================================

    def visit_int(self, node: IntExpr) -> None:
        self.bytecode.emit(OpCode.PUSH_INT, node.value)

    def visit_float(self, node: FloatExpr) -> None:
        self.bytecode.emit(OpCode.PUSH_FLOAT, node.value)

    def visit_variable(self, node: VariableExpr) -> None:
        self.bytecode.emit(OpCode.PUSH_VAR, node.name)

    def visit_unary(self, node: UnaryExpr) -> None:
        """Generate code for unary expression."""
        op = node.operator.type

        if op == TokenType.PLUS:
            node.operand.accept(self)
        elif op == TokenType.MINUS:
            # No negate instruction: -x compiles as 0 - x
            BinaryExpr(IntExpr(0), node.operator, node.operand).accept(self)
        else:
            raise CompileError(f"Unknown unary operator: {op.name}")

    def visit_binary(self, node: BinaryExpr) -> None:
        """Generate code for binary expression."""
        opcode = BINARY_OPCODES.get(node.operator.type)
        if opcode is None:
            raise CompileError(f"Unexpected operator: {node.operator.type.name}")

        node.left.accept(self)
        node.right.accept(self)
        self.bytecode.emit(opcode)

    def visit_call(self, node: CallExpr) -> None:
        """Generate code for function call; the arity is not encoded."""
        for arg in node.arguments:
            arg.accept(self)
        self.bytecode.emit(OpCode.CALL, node.name)
