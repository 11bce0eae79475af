"""Loader and interpreter for IJVM bytecode binaries."""

__version__ = "0.1.0"
__all__ = ["binary", "cli", "machine", "opcodes"]