"""The interpreter: operand stack, local variables and instruction execution."""

from __future__ import annotations

import io
import sys
from os import PathLike
from typing import IO, Any, Callable, Dict, Optional, Union

from .binary import Program, load_program
from .opcodes import Opcode, to_word

STACK_CAPACITY = 1024
LOCAL_SLOTS = 256
_PC_MASK = 0xFFFFFFFF


class MachineError(RuntimeError):
    """Raised when the machine cannot carry on executing."""


class StackError(MachineError):
    """Raised on stack overflow or underflow."""


class UnknownOpcodeError(MachineError):
    """Raised when an instruction byte is not one the machine implements."""

    def __init__(self, opcode: int, pc: int, wide: bool = False) -> None:
        kind = "WIDE opcode" if wide else "opcode"
        super().__init__(f"Unimplemented {kind} 0x{opcode:02x} at pc={pc}")
        self.opcode = opcode
        self.pc = pc


class Stack:
    """A fixed-capacity stack of words whose slots can also be addressed directly."""

    def __init__(self, capacity: int = STACK_CAPACITY) -> None:
        self._data = [0] * capacity
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    def push(self, value: int) -> None:
        if self._size >= len(self._data):
            raise StackError("Stack overflow")
        self._data[self._size] = value
        self._size += 1

    def pop(self) -> int:
        if self._size == 0:
            raise StackError("Stack underflow")
        self._size -= 1
        return self._data[self._size]

    def top(self) -> int:
        if self._size == 0:
            raise StackError("Stack is empty")
        return self._data[self._size - 1]

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, slot: int) -> int:
        if not 0 <= slot < len(self._data):
            raise IndexError(f"stack slot {slot} out of range")
        return self._data[slot]

    def __setitem__(self, slot: int, value: int) -> None:
        if not 0 <= slot < len(self._data):
            raise IndexError(f"stack slot {slot} out of range")
        self._data[slot] = value


class Machine:
    """Executes a loaded program one instruction at a time."""

    def __init__(
        self,
        program: Program,
        input: Optional[IO[Any]] = None,
        output: Optional[IO[Any]] = None,
    ) -> None:
        self.program = program
        self.input = input if input is not None else sys.stdin.buffer
        self.output = output if output is not None else sys.stdout.buffer
        self._pc = 0
        self._lv = 0
        self._stack = Stack(STACK_CAPACITY)
        for _ in range(LOCAL_SLOTS):
            self._stack.push(0)
        self._handlers: Dict[int, Callable[[], None]] = {
            Opcode.BIPUSH: self._bipush,
            Opcode.IADD: lambda: self._binary(lambda a, b: a + b),
            Opcode.ISUB: lambda: self._binary(lambda a, b: a - b),
            Opcode.IAND: lambda: self._binary(lambda a, b: a & b),
            Opcode.IOR: lambda: self._binary(lambda a, b: a | b),
            Opcode.DUP: self._dup,
            Opcode.NOP: lambda: None,
            Opcode.POP: self._stack.pop,
            Opcode.SWAP: self._swap,
            Opcode.ERR: self._err,
            Opcode.IN: self._in,
            Opcode.OUT: self._out,
            Opcode.GOTO: lambda: self._branch(True),
            Opcode.IFEQ: lambda: self._branch(self._stack.pop() == 0),
            Opcode.IFLT: lambda: self._branch(self._stack.pop() < 0),
            Opcode.IF_ICMPEQ: self._if_icmpeq,
            Opcode.LDC_W: self._ldc_w,
            Opcode.ISTORE: lambda: self._istore(self._fetch_byte()),
            Opcode.ILOAD: lambda: self._iload(self._fetch_byte()),
            Opcode.IINC: lambda: self._iinc(self._fetch_byte()),
            Opcode.WIDE: self._wide,
            Opcode.HALT: self._halt,
        }

    @classmethod
    def load(
        cls,
        path: Union[str, "PathLike[str]"],
        input: Optional[IO[Any]] = None,
        output: Optional[IO[Any]] = None,
    ) -> "Machine":
        """Load the program binary at ``path`` into a new machine."""
        return cls(load_program(path), input, output)

    @property
    def text(self) -> bytes:
        return self.program.text

    @property
    def text_size(self) -> int:
        return len(self.program.text)

    def constant(self, index: int) -> int:
        return self.program.constant(index)

    @property
    def program_counter(self) -> int:
        return self._pc

    @property
    def tos(self) -> int:
        """The word on top of the stack."""
        return self._stack.top()

    @property
    def finished(self) -> bool:
        return self._pc >= self.text_size

    def local_variable(self, index: int) -> int:
        """Return local variable ``index`` of the current frame."""
        try:
            return self._stack[self._lv + index]
        except IndexError:
            raise MachineError(f"local variable {index} out of range") from None

    @property
    def instruction(self) -> int:
        """The byte at the program counter, without advancing it."""
        if self.finished:
            raise MachineError("no instruction: the machine has finished")
        return self.program.text[self._pc]

    def step(self) -> None:
        """Execute one instruction, including the one a WIDE prefixes."""
        opcode = self.instruction
        self._pc += 1
        handler = self._handlers.get(opcode)
        if handler is None:
            raise UnknownOpcodeError(opcode, self._pc - 1)
        handler()

    def run(self) -> None:
        """Execute until the machine has finished."""
        while not self.finished:
            self.step()

    def _fetch_byte(self) -> int:
        if self._pc >= self.text_size:
            raise MachineError(f"truncated instruction at pc={self._pc}")
        value = self.program.text[self._pc]
        self._pc += 1
        return value

    def _fetch_u16(self) -> int:
        high = self._fetch_byte()
        return (high << 8) | self._fetch_byte()

    def _fetch_s16(self) -> int:
        value = self._fetch_u16()
        return value - 0x10000 if value & 0x8000 else value

    def _fetch_s8(self) -> int:
        value = self._fetch_byte()
        return value - 0x100 if value & 0x80 else value

    def _bipush(self) -> None:
        self._stack.push(self._fetch_s8())

    def _binary(self, operation: Callable[[int, int], int]) -> None:
        right = self._stack.pop()
        left = self._stack.pop()
        self._stack.push(to_word(operation(left, right)))

    def _dup(self) -> None:
        self._stack.push(self._stack.top())

    def _swap(self) -> None:
        right = self._stack.pop()
        left = self._stack.pop()
        self._stack.push(right)
        self._stack.push(left)

    def _write(self, data: bytes) -> None:
        if isinstance(self.output, io.TextIOBase):
            self.output.write(data.decode("latin-1"))
        else:
            self.output.write(data)

    def _err(self) -> None:
        self._write(b"Error\n")
        self._pc = self.text_size

    def _halt(self) -> None:
        self._pc = self.text_size

    def _in(self) -> None:
        char = self.input.read(1)
        if not char:
            value = 0
        elif isinstance(char, str):
            value = ord(char)
        else:
            value = char[0]
        self._stack.push(value)

    def _out(self) -> None:
        self._write(bytes([self._stack.pop() & 0xFF]))

    def _branch(self, taken: bool) -> None:
        origin = self._pc - 1
        offset = self._fetch_s16()
        if taken:
            self._pc = (origin + offset) & _PC_MASK

    def _if_icmpeq(self) -> None:
        right = self._stack.pop()
        left = self._stack.pop()
        self._branch(left == right)

    def _ldc_w(self) -> None:
        index = self._fetch_u16()
        try:
            value = self.program.constant(index)
        except IndexError as exc:
            raise MachineError(str(exc)) from None
        self._stack.push(value)

    def _set_local(self, index: int, value: int) -> None:
        try:
            self._stack[self._lv + index] = to_word(value)
        except IndexError:
            raise MachineError(f"local variable {index} out of range") from None

    def _istore(self, index: int) -> None:
        self._set_local(index, self._stack.pop())

    def _iload(self, index: int) -> None:
        self._stack.push(self.local_variable(index))

    def _iinc(self, index: int) -> None:
        delta = self._fetch_s8()
        self._set_local(index, self.local_variable(index) + delta)

    def _wide(self) -> None:
        opcode = self._fetch_byte()
        if opcode == Opcode.ILOAD:
            self._iload(self._fetch_u16())
        elif opcode == Opcode.ISTORE:
            self._istore(self._fetch_u16())
        elif opcode == Opcode.IINC:
            self._iinc(self._fetch_u16())
        else:
            raise UnknownOpcodeError(opcode, self._pc - 1, wide=True)