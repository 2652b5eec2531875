from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .errors import InterpreterError, SourcePathError
from .interpreter import Interpreter


def _read_source(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourcePathError(path) from exc


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Brainfuck interpreter")
    parser.add_argument("source_path", help="Path to the Brainfuck source file")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Warn about unbalanced brackets and run the rest of the program",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Abort after this many executed operations (default: unbounded)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        source_text = _read_source(args.source_path)
        interpreter = Interpreter(strict=not args.lenient, max_steps=args.max_steps)
        interpreter.interpret(source_text)
    except InterpreterError as exc:
        sys.stdout.flush()
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
