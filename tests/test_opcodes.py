import pytest

from ijvm.opcodes import MAGIC_NUMBER, Opcode, to_byte, to_word


@pytest.mark.parametrize(
    "opcode, value",
    [
        (Opcode.BIPUSH, 0x10),
        (Opcode.DUP, 0x59),
        (Opcode.ERR, 0xFE),
        (Opcode.GOTO, 0xA7),
        (Opcode.HALT, 0xFF),
        (Opcode.IADD, 0x60),
        (Opcode.IAND, 0x7E),
        (Opcode.IFEQ, 0x99),
        (Opcode.IFLT, 0x9B),
        (Opcode.IF_ICMPEQ, 0x9F),
        (Opcode.IINC, 0x84),
        (Opcode.ILOAD, 0x15),
        (Opcode.IN, 0xFC),
        (Opcode.INVOKEVIRTUAL, 0xB6),
        (Opcode.IOR, 0xB0),
        (Opcode.IRETURN, 0xAC),
        (Opcode.ISTORE, 0x36),
        (Opcode.ISUB, 0x64),
        (Opcode.LDC_W, 0x13),
        (Opcode.NOP, 0x00),
        (Opcode.OUT, 0xFD),
        (Opcode.POP, 0x57),
        (Opcode.SWAP, 0x5F),
        (Opcode.WIDE, 0xC4),
        (Opcode.TAILCALL, 0xCB),
        (Opcode.NEWARRAY, 0xD1),
        (Opcode.IALOAD, 0xD2),
        (Opcode.IASTORE, 0xD3),
        (Opcode.ANEWARRAY, 0xBD),
        (Opcode.AIALOAD, 0x32),
        (Opcode.AIASTORE, 0x53),
        (Opcode.GC, 0xD4),
        (Opcode.NETBIND, 0xE1),
        (Opcode.NETCONNECT, 0xE2),
        (Opcode.NETIN, 0xE3),
        (Opcode.NETOUT, 0xE4),
        (Opcode.NETCLOSE, 0xE5),
    ],
)
def test_opcode_values(opcode, value):
    assert opcode == value
    assert Opcode(value) is opcode


def test_magic_number_fits_in_word():
    assert to_word(MAGIC_NUMBER) == 0x1DEADFAD
    assert to_byte(MAGIC_NUMBER) == 0xAD


def test_unknown_opcode_value_rejected():
    with pytest.raises(ValueError):
        Opcode(0x01)


def test_opcode_values_round_trip_as_bytes():
    values = [op.value for op in Opcode]
    assert len(values) == len(set(values))
    for op in Opcode:
        assert to_byte(op.value) == op.value
        assert Opcode(to_byte(op.value)) is op


@pytest.mark.parametrize("value", [0, 1, -1, 65537, 2147483647, -2147483648, -65536])
def test_to_word_identity_in_range(value):
    assert to_word(value) == value


@pytest.mark.parametrize("value", [0, 5, -7, 2147483647, -2147483648, 123456789])
def test_to_word_wraps_by_modulus(value):
    assert to_word(value + (1 << 32)) == to_word(value)
    assert to_word(value - (1 << 32)) == to_word(value)


def test_to_word_overflow_wraps_to_minimum():
    assert to_word(2147483647 + 1) == -2147483648


@pytest.mark.parametrize("value", [-1000, -1, 0, 255, 256, 4096, 10**12])
def test_to_word_range(value):
    result = to_word(value)
    assert -(1 << 31) <= result < (1 << 31)


@pytest.mark.parametrize("value", [0, 1, 0x10, 0x7F, 0x80, 0xFF])
def test_to_byte_identity_in_range(value):
    assert to_byte(value) == value


@pytest.mark.parametrize("value", [-300, -1, 0, 42, 256, 999, 10**9])
def test_to_byte_range_and_wrap(value):
    result = to_byte(value)
    assert 0 <= result <= 0xFF
    assert to_byte(value + 256) == result