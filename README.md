# minievm

A small interpreter for a subset of EVM bytecode. It has a stack of
256-bit words and byte-addressed memory that grows in 32-byte steps.

Supported instructions (see `minievm.opcodes.Opcode`):

- arithmetic: `ADD`, `MUL`, `SUB`, `DIV`, `SDIV`, `MOD`, `SMOD`,
  `ADDMOD`, `MULMOD`, `EXP`, `SIGNEXTEND`
- comparison: `LT`, `GT`, `SLT`, `SGT`, `EQ`, `ISZERO`
- bitwise: `AND`, `OR`, `XOR`, `NOT`, `BYTE`, `SHL`, `SHR`, `SAR`
- stack and memory: `POP`, `MLOAD`, `MSTORE`, `MSTORE8`, `MSIZE`,
  `PUSH0` to `PUSH32`

## Installation

```
pip install .
```

Install the test dependencies with `pip install .[test]`.

## Command line

```
minievm 60ff600052601160015360015159
```

The argument is bytecode as a hex string; a trailing odd digit is read as
a byte of its own. While the program runs, each instruction byte is
printed (`Byte: 0x60`, ...), and the final machine state is printed at the
end. With no argument, the sample program above runs.

Options:

- `-q`, `--quiet`: do not print each byte; warnings are still shown.

A string that is not hexadecimal is rejected with a usage error. If the
program hits an unknown opcode, a `PUSH` that runs past the end of the
code, or a memory offset that is too large, an `error: ...` line goes to
standard error and the command exits with status 1.

## Library use

```python
from minievm.cli import hex_string_to_bytes
from minievm.machine import EVM

evm = EVM(hex_string_to_bytes("6002600301"))  # PUSH1 2, PUSH1 3, ADD
evm.run()
print(evm.stack)   # [5]
```

- `EVM(code)` takes the bytecode as bytes or any iterable of byte values.
- `EVM.run()` executes until the end of the code.
- `EVM.step()` executes one instruction; it raises `RuntimeError` once
  execution has finished. `EVM.halted` tells whether the end is reached.
- `EVM.stack` is a list of ints with the top of the stack last;
  `EVM.memory` is a `bytearray`.
- `hex_string_to_bytes(hex_str)` decodes a hex string and raises
  `ValueError` for non-hex characters.

Behaviour worth knowing:

- Operands are taken from the top of the stack first: for `SUB` the top
  is the minuend, for `SHL`/`SHR`/`SAR` the top is the shift amount.
- If the stack holds too few values, a warning is logged and the
  instruction is skipped; `POP` on an empty stack only logs a warning.
- `ADDMOD` and `MULMOD` apply `ADD`/`MUL` and then `MOD` to the stack,
  and move the counter forward three bytes in total.
- An unknown opcode raises `ValueError`; a truncated `PUSH` raises
  `IndexError`.
- Tracing goes through the `logging` module under the `minievm` logger.

## What it does not do

There is no gas accounting, no storage, and no control flow (jumps,
calls, returns); only the instructions listed above are executed.

## Tests

```
pytest
```