"""
Cluck Bytecode Tests

Tests for the instruction container, disassembly and the binary image.
"""

import struct

import pytest
from cluck import compile_source, Bytecode, Instruction, OpCode
from cluck.bytecode import MAX_NAME_BYTES


class TestOpCode:
    """Opcode numbering tests."""

    def test_words_numbered_as_chicken(self):
        names = ["AXE", "CHICKEN", "ADD", "FOX", "ROOSTER",
                 "COMPARE", "PICK", "PECK", "FR", "BBQ"]
        assert [OpCode[name].value for name in names] == list(range(10))

    def test_arithmetic_aliases(self):
        assert OpCode.SUB is OpCode.FOX
        assert OpCode.MUL is OpCode.ROOSTER
        assert OpCode.DIV not in (OpCode.ADD, OpCode.FOX, OpCode.ROOSTER)


class TestBytecodeContainer:
    """Instruction list container tests."""

    def test_emit_returns_index(self):
        bc = Bytecode()
        assert bc.emit(OpCode.AXE) == 0
        assert bc.emit(OpCode.PUSH_INT, 3) == 1
        assert len(bc) == 2
        assert bc[1] == Instruction(OpCode.PUSH_INT, 3)

    def test_iteration_and_opcodes(self):
        bc = compile_source("push 1 + x")
        assert list(bc) == bc.instructions
        assert bc.opcodes() == [OpCode.PUSH_INT, OpCode.PUSH_VAR, OpCode.ADD]

    def test_instruction_repr(self):
        assert repr(Instruction(OpCode.ADD)) == "ADD"
        assert repr(Instruction(OpCode.CALL, "f")) == "CALL('f')"

    def test_disassemble(self):
        text = compile_source("push f(2.5) / 3; bbq").disassemble()
        lines = text.split("\n")
        assert len(lines) == 5
        assert lines[0].split() == ["0000:", "PUSH_FLOAT", "2.5"]
        assert lines[1].split() == ["0001:", "CALL", "'f'"]
        assert lines[2].split() == ["0002:", "PUSH_INT", "3"]
        assert lines[3].split() == ["0003:", "DIV"]
        assert lines[4].split() == ["0004:", "BBQ"]

    def test_disassemble_empty(self):
        assert Bytecode().disassemble() == ""


class TestBinaryImage:
    """Serialization tests."""

    def test_header(self):
        data = Bytecode().serialize()
        assert data[:4] == Bytecode.MAGIC
        assert struct.unpack_from('<HI', data, 4) == (Bytecode.VERSION, 0)

    def test_program_survives_serialization(self):
        source = 'push -9223372036854775807 * 0.125; push say(name, über); axe'
        bc = compile_source(source)
        restored = Bytecode.deserialize(bc.serialize())
        assert restored.instructions == bc.instructions
        assert isinstance(restored[1].operand, int)

    def test_operand_layout(self):
        bc = Bytecode()
        bc.emit(OpCode.PUSH_INT, -2)
        bc.emit(OpCode.CALL, "go")
        data = bc.serialize()[10:]
        assert data == (bytes([OpCode.PUSH_INT]) + struct.pack('<q', -2)
                        + bytes([OpCode.CALL]) + struct.pack('<H', 2) + b"go")

    def test_bad_magic(self):
        with pytest.raises(ValueError, match="magic"):
            Bytecode.deserialize(b"NOPE\x01\x00\x00\x00\x00\x00")

    def test_bad_version(self):
        data = Bytecode.MAGIC + struct.pack('<HI', 99, 0)
        with pytest.raises(ValueError, match="version"):
            Bytecode.deserialize(data)

    def test_unknown_opcode(self):
        data = Bytecode.MAGIC + struct.pack('<HI', Bytecode.VERSION, 1) + b"\x7f"
        with pytest.raises(ValueError, match="Unknown opcode 0x7f"):
            Bytecode.deserialize(data)

    def test_name_length_limit(self):
        bc = Bytecode()
        bc.emit(OpCode.CALL, "f" * MAX_NAME_BYTES)
        assert Bytecode.deserialize(bc.serialize())[0].operand == "f" * MAX_NAME_BYTES

        bc.emit(OpCode.PUSH_VAR, "é" * (MAX_NAME_BYTES // 2 + 1))
        with pytest.raises(ValueError, match="Name too long"):
            bc.serialize()
