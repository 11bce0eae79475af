# ijvm

An interpreter for IJVM programs. It reads a compiled `.ijvm` binary and
executes its instructions on a stack of signed 32-bit words. The binary starts
with the magic number `0x1DEADFAD`, followed by a constant pool block and a
text block. Each block has a 4-byte origin and a 4-byte size, and all values
are big-endian.

## Installation

```
pip install .
```

## Command line

```
ijvm program.ijvm
```

The program reads its `IN` bytes from standard input and writes its `OUT`
bytes to standard output. The command exits with status 1 in three cases:

- It is called without a binary. It prints `Usage: ijvm binary`.
- The binary cannot be opened or parsed. It reports the problem and
  `Couldn't load binary <path>` on standard error.
- Execution stops on a machine error, such as a stack underflow or an
  unimplemented instruction. The error message goes to standard error.

Otherwise the exit status is 0.

## Library use

```python
import io
from ijvm.machine import Machine

output = io.BytesIO()
machine = Machine.load("program.ijvm", io.BytesIO(b"ABC"), output)

machine.step()                  # execute one instruction
print(machine.program_counter)  # offset of the next instruction
print(machine.tos)              # word on top of the stack
print(machine.local_variable(0))

machine.run()                   # continue until HALT, ERR or the end of the text
print(machine.finished)         # True
print(output.getvalue())
```

If no streams are given, `Machine` uses the binary streams of standard input
and standard output. The output stream may be a binary or a text stream.

The machine has these members:

- `text`, `text_size`: the program text and its length.
- `constant(index)`: a word from the constant pool.
- `program_counter`: the offset of the next instruction.
- `instruction`: the byte at the program counter. The counter does not move.
- `tos`: the word on top of the stack.
- `finished`: `True` once the program counter has reached the end of the
  text. `HALT` and `ERR` move it there. `ERR` first writes `Error\n`.
- `local_variable(index)`: a local variable of the frame.
- `step()`: executes one instruction. A `WIDE` instruction and the
  instruction it prefixes count as one step.
- `run()`: steps until the machine has finished.

`IN` pushes 0 when the input is exhausted. `OUT` writes the low byte of the
popped word. Arithmetic wraps to 32 bits.

`ijvm.binary` parses binaries on its own:

- `parse_program` takes bytes, and `load_program` takes a path. Both return a
  `Program` with `constant_pool`, `text`, `constant_pool_origin`,
  `text_origin` and `constant(index)`.
- A bad magic number or a truncated block raises `BinaryFormatError`.
- The module also provides the big-endian helpers `read_uint32`,
  `read_uint16`, `read_int32` and `read_int16`, and the byte-swapping helpers
  `swap_uint32`, `swap_uint16`, `swap_int32` and `swap_int16`.

`ijvm.opcodes` provides:

- `Opcode`, the byte value of every instruction.
- `MAGIC_NUMBER`.
- `to_word` and `to_byte` for wrapping integers.

Three exceptions report execution problems:

- `StackError`: a stack overflow or underflow. The stack holds 1024 words, and
  the first 256 of them are local variables.
- `UnknownOpcodeError`: an instruction the machine does not implement.
- `MachineError`: the base of both. It is also raised for a truncated
  instruction, an out-of-range constant or local variable, and for reading
  `instruction` after the machine has finished.

## Supported instructions

- `BIPUSH`, `DUP`, `POP`, `SWAP`, `NOP`
- `IADD`, `ISUB`, `IAND`, `IOR`
- `GOTO`, `IFEQ`, `IFLT`, `IF_ICMPEQ`
- `LDC_W`, `ILOAD`, `ISTORE`, `IINC`, `WIDE`
- `IN`, `OUT`, `ERR`, `HALT`

## What the package does not do

There are no method calls. `INVOKEVIRTUAL` and `IRETURN` are listed in
`Opcode` but are not executed, so a program that calls methods stops with
`UnknownOpcodeError` when it reaches the call.

The same applies to these instructions in `Opcode`:

- the array instructions: `NEWARRAY`, `IALOAD`, `IASTORE`, `ANEWARRAY`,
  `AIALOAD`, `AIASTORE`
- garbage collection: `GC`
- tail calls: `TAILCALL`
- networking: `NETBIND`, `NETCONNECT`, `NETIN`, `NETOUT`, `NETCLOSE`

There is no heap, no call stack of frames, no debugger and no assembler. Programs must already be compiled to `.ijvm` binaries.

## Tests

```
pip install .[test]
pytest
```