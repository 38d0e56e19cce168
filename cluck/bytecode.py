"""
Cluck Bytecode Format

Defines the instruction set and the compiled instruction list container.
"""

from enum import IntEnum
from dataclasses import dataclass, field
from typing import Any, Iterator, List
import struct


class OpCode(IntEnum):
    """Cluck instruction opcodes."""

    # Statement words, numbered as in Chicken
    AXE = 0x00
    CHICKEN = 0x01
    ADD = 0x02
    FOX = 0x03
    ROOSTER = 0x04
    COMPARE = 0x05
    PICK = 0x06
    PECK = 0x07
    FR = 0x08
    BBQ = 0x09

    # Pushes
    PUSH_INT = 0x10      # operand: int64
    PUSH_FLOAT = 0x11    # operand: float64
    PUSH_VAR = 0x12      # operand: variable name

    # Calls
    CALL = 0x20          # operand: function name

    # Arithmetic without a statement word
    DIV = 0x30

    # `-` and `*` compile to the fox and rooster words
    SUB = FOX
    MUL = ROOSTER


NAME_OPERANDS = (OpCode.PUSH_VAR, OpCode.CALL)

# Names are stored with a u16 length prefix
MAX_NAME_BYTES = 0xFFFF


@dataclass(frozen=True)
class Instruction:
    """A single instruction with its inline operand, if any."""

    opcode: OpCode
    operand: Any = None

    def __repr__(self) -> str:
        if self.operand is None:
            return self.opcode.name
        return f"{self.opcode.name}({self.operand!r})"


@dataclass
class Bytecode:
    """Container for a compiled Cluck instruction list."""

    # Magic number for file format
    MAGIC = b'CLK\x00'
    VERSION = 1

    instructions: List[Instruction] = field(default_factory=list)

    def emit(self, opcode: OpCode, operand: Any = None) -> int:
        """Append an instruction, returning its index."""
        index = len(self.instructions)
        self.instructions.append(Instruction(opcode, operand))
        return index

    def opcodes(self) -> List[OpCode]:
        """Return the opcodes in program order."""
        return [instr.opcode for instr in self.instructions]

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def serialize(self) -> bytes:
        """Serialize the instruction list to binary format."""
        output = bytearray()

        # Header
        output.extend(self.MAGIC)
        output.extend(struct.pack('<H', self.VERSION))
        output.extend(struct.pack('<I', len(self.instructions)))

        for instr in self.instructions:
            output.append(instr.opcode)
            if instr.opcode == OpCode.PUSH_INT:
                output.extend(struct.pack('<q', instr.operand))
            elif instr.opcode == OpCode.PUSH_FLOAT:
                output.extend(struct.pack('<d', instr.operand))
            elif instr.opcode in NAME_OPERANDS:
                encoded = instr.operand.encode('utf-8')
                if len(encoded) > MAX_NAME_BYTES:
                    raise ValueError(
                        f"Name too long for the binary image: {len(encoded)} bytes "
                        f"(limit {MAX_NAME_BYTES})"
                    )
                output.extend(struct.pack('<H', len(encoded)))
                output.extend(encoded)

        return bytes(output)

    @classmethod
    def deserialize(cls, data: bytes) -> 'Bytecode':
        """Deserialize an instruction list from binary format."""
        offset = 0

        magic = data[offset:offset+4]
        if magic != cls.MAGIC:
            raise ValueError("Invalid bytecode magic number")
        offset += 4

        version = struct.unpack_from('<H', data, offset)[0]
        if version != cls.VERSION:
            raise ValueError(f"Unsupported bytecode version: {version}")
        offset += 2

        count = struct.unpack_from('<I', data, offset)[0]
        offset += 4

        bc = cls()
        for _ in range(count):
            try:
                opcode = OpCode(data[offset])
            except ValueError:
                raise ValueError(f"Unknown opcode 0x{data[offset]:02x} at offset {offset}")
            offset += 1

            if opcode == OpCode.PUSH_INT:
                bc.emit(opcode, struct.unpack_from('<q', data, offset)[0])
                offset += 8
            elif opcode == OpCode.PUSH_FLOAT:
                bc.emit(opcode, struct.unpack_from('<d', data, offset)[0])
                offset += 8
            elif opcode in NAME_OPERANDS:
                length = struct.unpack_from('<H', data, offset)[0]
                offset += 2
                bc.emit(opcode, data[offset:offset+length].decode('utf-8'))
                offset += length
            else:
                bc.emit(opcode)

        return bc

    def disassemble(self) -> str:
        """Disassemble the instruction list to human-readable format."""
        lines = []
        for index, instr in enumerate(self.instructions):
            name = instr.opcode.name
            if instr.operand is None:
                lines.append(f"  {index:04d}: {name}")
            else:
                lines.append(f"  {index:04d}: {name:12s} {instr.operand!r}")
        return "\n".join(lines)
