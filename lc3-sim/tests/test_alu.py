import pytest

from lc3.alu import ALU, sext, field


def test_add():
    assert ALU.execute("ADD", 2, 3) == 5


def test_add_wraps_16_bits():
    assert ALU.execute("ADD", 0xFFFF, 1) == 0
    assert ALU.execute("ADD", 0x7FFF, 1) == 0x8000


def test_and():
    assert ALU.execute("AND", 0xF0F0, 0x0FF0) == 0x00F0


def test_not():
    assert ALU.execute("NOT", 0x00FF) == 0xFF00
    assert ALU.execute("NOT", 0xFFFF) == 0


def test_unsupported_op():
    with pytest.raises(ValueError):
        ALU.execute("DIV", 7, 3)


@pytest.mark.parametrize("val, bits, expected", [
    (0x1F, 5, 0xFFFF),
    (0x0F, 5, 0x000F),
    (0x10, 5, 0xFFF0),
    (0x00, 5, 0x0000),
    (0x20, 6, 0xFFE0),
    (0x1F, 6, 0x001F),
    (0x1FF, 9, 0xFFFF),
    (0x100, 9, 0xFF00),
    (0x0FF, 9, 0x00FF),
    (0x400, 11, 0xFC00),
    (0x3FF, 11, 0x03FF),
])
def test_sext(val, bits, expected):
    assert sext(val, bits) == expected


def test_sext_all_imm5_values():
    for v in range(32):
        expected = v if v < 16 else (v - 32) & 0xFFFF
        assert sext(v, 5) == expected


def test_sext_ignores_bits_above_field():
    # only the low 5 bits (0b00101) count
    assert sext(0xFFE5, 5) == 0x0005


def test_field():
    assert field(0x1E00, 9, 3) == 7
    assert field(0xF025, 0, 8) == 0x25
    assert field(0xF025, 12, 4) == 0xF
