"""A small stack machine executing EVM bytecode."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .opcodes import Opcode

logger = logging.getLogger(__name__)

_MODULUS = 1 << 256
_MAX_WORD = _MODULUS - 1
_SIGN_BIT = 1 << 255
_LOW_MASK = _SIGN_BIT - 1
_MAX_OFFSET = (1 << 64) - 1


def _is_negative(value: int) -> bool:
    return bool(value & _SIGN_BIT)


def _magnitude(value: int) -> int:
    return _SIGN_BIT - (value & _LOW_MASK)


def _negate(value: int) -> int:
    return (_magnitude(value) | _SIGN_BIT) % _MODULUS


def _add(a: int, b: int) -> int:
    return (a + b) % _MODULUS


def _mul(a: int, b: int) -> int:
    return (a * b) % _MODULUS


def _sub(a: int, b: int) -> int:
    return (a - b) % _MODULUS


def _div(a: int, b: int) -> int:
    return 0 if b == 0 else a // b


def _mod(a: int, b: int) -> int:
    return 0 if b == 0 else a % b


def _sdiv(a: int, b: int) -> int:
    if b == 0:
        return 0
    a_negative, b_negative = _is_negative(a), _is_negative(b)
    if a_negative:
        a = _magnitude(a)
    if b_negative:
        b = _magnitude(b)
    quotient = a // b
    if a_negative != b_negative:
        return _negate(quotient)
    return quotient % _MODULUS


def _smod(a: int, b: int) -> int:
    if b == 0:
        return 0
    if _is_negative(b):
        b = _magnitude(b)
    if _is_negative(a):
        return _magnitude(_magnitude(a) % b) | _SIGN_BIT
    return a % b


def _exp(base: int, exponent: int) -> int:
    return pow(base, exponent, _MODULUS)


def _signextend(index: int, value: int) -> int:
    if index >= 32:
        return value
    value &= (1 << (8 * (index + 1))) - 1
    if (value >> (8 * index + 7)) & 1:
        return _magnitude(value) | _SIGN_BIT
    return value


def _slt(a: int, b: int) -> int:
    if _is_negative(a) != _is_negative(b):
        return int(a >= b)
    return int(a < b)


def _sgt(a: int, b: int) -> int:
    if _is_negative(a) != _is_negative(b):
        return int(a <= b)
    return int(a > b)


def _byte(index: int, value: int) -> int:
    if index >= 32:
        return 0
    return (value >> (8 * (31 - index))) & 0xFF


def _shl(shift: int, value: int) -> int:
    return 0 if shift >= 256 else (value << shift) & _MAX_WORD


def _shr(shift: int, value: int) -> int:
    return 0 if shift >= 256 else value >> shift


def _sar(shift: int, value: int) -> int:
    if not _is_negative(value):
        return _shr(shift, value)
    if shift >= 256:
        return _MAX_WORD
    fill = ((1 << shift) - 1) << (256 - shift)
    return ((value >> shift) | fill) & _MAX_WORD


_BINARY: dict[int, Callable[[int, int], int]] = {
    Opcode.ADD: _add,
    Opcode.MUL: _mul,
    Opcode.SUB: _sub,
    Opcode.DIV: _div,
    Opcode.SDIV: _sdiv,
    Opcode.MOD: _mod,
    Opcode.SMOD: _smod,
    Opcode.EXP: _exp,
    Opcode.SIGNEXTEND: _signextend,
    Opcode.LT: lambda a, b: int(a < b),
    Opcode.GT: lambda a, b: int(a > b),
    Opcode.SLT: _slt,
    Opcode.SGT: _sgt,
    Opcode.EQ: lambda a, b: int(a == b),
    Opcode.AND: lambda a, b: a & b,
    Opcode.OR: lambda a, b: a | b,
    Opcode.XOR: lambda a, b: a ^ b,
    Opcode.BYTE: _byte,
    Opcode.SHL: _shl,
    Opcode.SHR: _shr,
    Opcode.SAR: _sar,
}

_UNARY: dict[int, Callable[[int], int]] = {
    Opcode.ISZERO: lambda a: int(a == 0),
    Opcode.NOT: lambda a: ~a & _MAX_WORD,
}


class EVM:
    """Interpreter state: a word stack (top last), byte memory and code."""

    def __init__(self, code):
        self.code = bytes(code)
        self.stack: list[int] = []
        self.memory = bytearray()
        self.counter = 0
        self.pc = 0

    def __repr__(self) -> str:
        return (
            f"EVM(stack={self.stack!r}, memory={self.memory.hex()!r}, "
            f"code={self.code.hex()!r}, counter={self.counter}, pc={self.pc})"
        )

    @property
    def halted(self) -> bool:
        """True once the counter has moved past the end of the code."""
        return self.counter >= len(self.code)

    def run(self) -> None:
        """Execute instructions until the end of the code."""
        while not self.halted:
            self.step()

    def step(self) -> None:
        """Execute the instruction at the current counter."""
        if self.halted:
            raise RuntimeError("execution has already finished")
        op = self.code[self.counter]
        logger.debug("Byte: 0x%02X", op)
        match op:
            case Opcode.POP:
                self._pop()
            case Opcode.MLOAD:
                self._mload()
            case Opcode.MSTORE:
                self._mstore(32)
            case Opcode.MSTORE8:
                self._mstore(1)
            case Opcode.MSIZE:
                self.stack.append(len(self.memory))
                self.counter += 1
            case Opcode.ADDMOD:
                self._modular(_add)
            case Opcode.MULMOD:
                self._modular(_mul)
            case _ if op in _UNARY:
                self._apply(1, _UNARY[op])
            case _ if op in _BINARY:
                self._apply(2, _BINARY[op])
            case _ if Opcode.PUSH0 <= op <= Opcode.PUSH32:
                self._push(op - Opcode.PUSH0)
            case _:
                raise ValueError(f"unknown opcode 0x{op:02X} at offset {self.counter}")
        self.pc += 1

    def _take(self, count: int) -> list[int] | None:
        if len(self.stack) < count:
            logger.warning("there is not enough value in stack")
            return None
        return [self.stack.pop() for _ in range(count)]

    def _apply(self, arity: int, operation: Callable[..., int]) -> None:
        values = self._take(arity)
        if values is not None:
            self.stack.append(operation(*values))
        self.counter += 1

    def _modular(self, operation: Callable[[int, int], int]) -> None:
        self._apply(2, operation)
        self._apply(2, _mod)
        self.counter += 1

    def _push(self, width: int) -> None:
        start = self.counter + 1
        length = max(width, 1)
        immediate = self.code[start:start + length]
        if len(immediate) < length:
            raise IndexError(
                f"PUSH{width} at offset {self.counter} runs past the end of the code"
            )
        self.stack.append(int.from_bytes(immediate, "big"))
        self.counter = start + width

    def _pop(self) -> None:
        if self.stack:
            logger.debug("the number we pop is : %d", self.stack.pop())
        else:
            logger.warning("the stack is empty")
        self.counter += 1

    def _expand(self, offset: int) -> None:
        if offset > _MAX_OFFSET:
            raise ValueError(f"memory offset {offset} is too large")
        if offset + 31 >= len(self.memory):
            size = ((offset + 31) // 32 + 1) * 32
            self.memory.extend(bytes(size - len(self.memory)))

    def _mstore(self, width: int) -> None:
        values = self._take(2)
        if values is not None:
            offset, value = values
            self._expand(offset)
            if width == 32:
                self.memory[offset:offset + 32] = value.to_bytes(32, "big")
            else:
                self.memory[offset] = value & 0xFF
        self.counter += 1

    def _mload(self) -> None:
        values = self._take(1)
        if values is not None:
            (offset,) = values
            self._expand(offset)
            self.stack.append(int.from_bytes(self.memory[offset:offset + 32], "big"))
        self.counter += 1