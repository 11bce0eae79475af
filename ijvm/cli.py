"""Command line entry point: load a program binary and run it."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .binary import BinaryFormatError
from .machine import Machine, MachineError


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the program named on the command line; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: ijvm binary")
        return 1
    path = args[0]
    stdin = getattr(sys.stdin, "buffer", sys.stdin)
    stdout = getattr(sys.stdout, "buffer", sys.stdout)
    try:
        machine = Machine.load(path, stdin, stdout)
    except (OSError, BinaryFormatError) as exc:
        print(exc, file=sys.stderr)
        print(f"Couldn't load binary {path}", file=sys.stderr)
        return 1
    sys.stdout.flush()
    try:
        machine.run()
    except MachineError as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())