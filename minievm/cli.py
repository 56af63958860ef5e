"""Command line entry point: run a hex-encoded program and show the final state."""

from __future__ import annotations

import argparse
import logging
import string
import sys

from .machine import EVM

DEFAULT_PROGRAM = "60ff600052601160015360015159"

_HEX_DIGITS = frozenset(string.hexdigits)


def hex_string_to_bytes(hex_str):
    """Decode a hexadecimal string two digits at a time; a trailing digit stands alone."""
    if not set(hex_str) <= _HEX_DIGITS:
        raise ValueError(f"not a hexadecimal string: {hex_str!r}")
    return bytes(int(hex_str[i:i + 2], 16) for i in range(0, len(hex_str), 2))


def main(argv=None):
    """Run a program, tracing each byte, then print the machine state."""
    parser = argparse.ArgumentParser(prog="minievm", description=__doc__)
    parser.add_argument("code", nargs="?", default=DEFAULT_PROGRAM, help="bytecode as hex")
    parser.add_argument("-q", "--quiet", action="store_true", help="do not trace each byte")
    args = parser.parse_args(argv)

    try:
        code = hex_string_to_bytes(args.code)
    except ValueError as exc:
        parser.error(str(exc))

    evm = EVM(code)
    package_logger = logging.getLogger("minievm")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.WARNING if args.quiet else logging.DEBUG)
    try:
        evm.run()
    except (ValueError, IndexError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)

    print(evm)
    return 0


if __name__ == "__main__":
    sys.exit(main())