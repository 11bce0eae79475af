"""Instruction set, file magic number and word/byte conversions."""

from __future__ import annotations

from enum import IntEnum

MAGIC_NUMBER = 0x1DEADFAD

WORD_BITS = 32
_WORD_MODULUS = 1 << WORD_BITS
_WORD_HALF = 1 << (WORD_BITS - 1)


class Opcode(IntEnum):
    """Byte values of the machine's instructions."""

    NOP = 0x00
    BIPUSH = 0x10
    LDC_W = 0x13
    ILOAD = 0x15
    AIALOAD = 0x32
    ISTORE = 0x36
    AIASTORE = 0x53
    POP = 0x57
    DUP = 0x59
    SWAP = 0x5F
    IADD = 0x60
    ISUB = 0x64
    IAND = 0x7E
    IINC = 0x84
    IFEQ = 0x99
    IFLT = 0x9B
    IF_ICMPEQ = 0x9F
    GOTO = 0xA7
    IRETURN = 0xAC
    IOR = 0xB0
    INVOKEVIRTUAL = 0xB6
    ANEWARRAY = 0xBD
    WIDE = 0xC4
    TAILCALL = 0xCB
    NEWARRAY = 0xD1
    IALOAD = 0xD2
    IASTORE = 0xD3
    GC = 0xD4
    NETBIND = 0xE1
    NETCONNECT = 0xE2
    NETIN = 0xE3
    NETOUT = 0xE4
    NETCLOSE = 0xE5
    IN = 0xFC
    OUT = 0xFD
    ERR = 0xFE
    HALT = 0xFF


def to_word(value: int) -> int:
    """Wrap an integer to a signed 32-bit machine word."""
    return (value + _WORD_HALF) % _WORD_MODULUS - _WORD_HALF


def to_byte(value: int) -> int:
    """Wrap an integer to an unsigned 8-bit byte."""
    return value & 0xFF