"""A minimal interpreter for a subset of EVM bytecode, with a command-line runner."""

__version__ = "0.1.0"
__all__ = ["cli", "machine", "opcodes"]