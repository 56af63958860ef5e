import pytest

from minievm.opcodes import Opcode


def test_lookup_by_value_round_trip():
    assert all(Opcode(int(member)) is member for member in Opcode)


def test_values_fit_in_a_byte_and_are_unique():
    found = []
    for value in range(256):
        try:
            found.append(Opcode(value))
        except ValueError:
            continue
    assert len(found) == len(set(found)) == len(Opcode)


def test_unassigned_byte_is_rejected():
    with pytest.raises(ValueError):
        Opcode(0x0C)


def test_lookup_by_name_matches_lookup_by_value():
    assert Opcode(0x53) is Opcode["MSTORE8"]
    assert Opcode(0x52) is Opcode["MSTORE"]


def test_arithmetic_block_is_contiguous():
    names = [Opcode(value).name for value in range(0x01, 0x0C)]
    assert names == [
        "ADD",
        "MUL",
        "SUB",
        "DIV",
        "SDIV",
        "MOD",
        "SMOD",
        "ADDMOD",
        "MULMOD",
        "EXP",
        "SIGNEXTEND",
    ]


def test_comparison_and_bitwise_block_values():
    names = [Opcode(value).name for value in range(0x10, 0x1E)]
    assert names == [
        "LT",
        "GT",
        "SLT",
        "SGT",
        "EQ",
        "ISZERO",
        "AND",
        "OR",
        "XOR",
        "NOT",
        "BYTE",
        "SHL",
        "SHR",
        "SAR",
    ]


def test_push_range_bounds():
    assert Opcode(0x5F) is Opcode.PUSH0
    assert Opcode(0x7F) is Opcode.PUSH32
    assert Opcode(0x59) is Opcode.MSIZE