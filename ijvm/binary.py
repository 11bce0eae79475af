"""Reading of program binaries and big-endian helpers."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from typing import Union

from .opcodes import MAGIC_NUMBER, to_word

BytesLike = Union[bytes, bytearray, memoryview]


class BinaryFormatError(ValueError):
    """Raised when a program binary is malformed or truncated."""


def swap_uint32(num: int) -> int:
    """Reverse the byte order of an unsigned 32-bit integer."""
    num &= 0xFFFFFFFF
    return int.from_bytes(num.to_bytes(4, "big"), "little")


def swap_uint16(num: int) -> int:
    """Reverse the byte order of an unsigned 16-bit integer."""
    num &= 0xFFFF
    return ((num >> 8) & 0xFF) | ((num << 8) & 0xFF00)


def swap_int32(num: int) -> int:
    """Reverse the byte order of a signed 32-bit integer."""
    return to_word(swap_uint32(num))


def swap_int16(num: int) -> int:
    """Reverse the byte order of a signed 16-bit integer."""
    value = swap_uint16(num)
    return value - 0x10000 if value & 0x8000 else value


def _take(buf: BytesLike, offset: int, size: int) -> bytes:
    if offset < 0 or offset + size > len(buf):
        raise BinaryFormatError(
            f"need {size} bytes at offset {offset}, buffer holds {len(buf)}"
        )
    return bytes(buf[offset:offset + size])


def read_uint32(buf: BytesLike, offset: int = 0) -> int:
    """Read a big-endian unsigned 32-bit integer."""
    return int.from_bytes(_take(buf, offset, 4), "big")


def read_uint16(buf: BytesLike, offset: int = 0) -> int:
    """Read a big-endian unsigned 16-bit integer."""
    return int.from_bytes(_take(buf, offset, 2), "big")


def read_int32(buf: BytesLike, offset: int = 0) -> int:
    """Read a big-endian signed 32-bit integer."""
    return int.from_bytes(_take(buf, offset, 4), "big", signed=True)


def read_int16(buf: BytesLike, offset: int = 0) -> int:
    """Read a big-endian signed 16-bit integer."""
    return int.from_bytes(_take(buf, offset, 2), "big", signed=True)


@dataclass(frozen=True)
class Program:
    """A loaded program: its constant pool and its text."""

    constant_pool: bytes
    text: bytes
    constant_pool_origin: int = 0
    text_origin: int = 0

    def constant(self, index: int) -> int:
        """Return the signed word at position ``index`` of the constant pool."""
        offset = index * 4
        if index < 0 or offset + 4 > len(self.constant_pool):
            raise IndexError(f"constant index {index} out of range")
        return read_int32(self.constant_pool, offset)


class _Reader:
    def __init__(self, data: BytesLike) -> None:
        self._data = bytes(data)
        self._pos = 0

    def uint32(self, what: str) -> int:
        try:
            value = read_uint32(self._data, self._pos)
        except BinaryFormatError as exc:
            raise BinaryFormatError(f"error reading {what}") from exc
        self._pos += 4
        return value

    def block(self, size: int, what: str) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise BinaryFormatError(
                f"error reading {what}: {size} bytes declared, "
                f"{len(self._data) - self._pos} available"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk


def parse_program(data: BytesLike) -> Program:
    """Parse the bytes of a program binary."""
    reader = _Reader(data)
    magic = reader.uint32("magic number")
    if magic != MAGIC_NUMBER:
        raise BinaryFormatError(
            f"bad magic number: 0x{magic:08x} (expected 0x{MAGIC_NUMBER:08X})"
        )
    pool_origin = reader.uint32("constant pool origin")
    pool_size = reader.uint32("constant pool size")
    pool = reader.block(pool_size, "constant pool data")
    text_origin = reader.uint32("text origin")
    text_size = reader.uint32("text size")
    text = reader.block(text_size, "text data")
    return Program(
        constant_pool=pool,
        text=text,
        constant_pool_origin=pool_origin,
        text_origin=text_origin,
    )


def load_program(path: Union[str, "PathLike[str]"]) -> Program:
    """Read and parse the program binary at ``path``."""
    with open(path, "rb") as handle:
        data = handle.read()
    try:
        return parse_program(data)
    except BinaryFormatError as exc:
        raise BinaryFormatError(f"{path}: {exc}") from exc