from __future__ import annotations

import io
import logging
from typing import BinaryIO, List, Optional, TextIO

from .errors import ParseCodeError
from .executor import TAPE_SIZE, Executor, MachineState
from .lexer import Token, tokenize
from .parser import ParseResult, parse

logger = logging.getLogger(__name__)


class Interpreter:
    """Single-use interpreter: one instance runs exactly one program.

    With ``strict`` enabled (the default) unbalanced brackets raise
    :class:`ParseCodeError` before anything executes. With ``strict`` off the
    diagnostics are only logged and the parsed remainder runs.
    """

    def __init__(
        self,
        tape_length: int = TAPE_SIZE,
        input_stream: Optional[BinaryIO] = None,
        output: Optional[TextIO] = None,
        strict: bool = True,
        max_steps: Optional[int] = None,
    ) -> None:
        self.state = MachineState(tape_length=tape_length, input_stream=input_stream)
        self.executor = Executor(self.state, output=output, max_steps=max_steps)
        self.strict = strict
        self._used = False

    def lex(self, source: str) -> List[Token]:
        return tokenize(source)

    def parse(self, source: str) -> ParseResult:
        return parse(self.lex(source))

    def interpret(self, source: str) -> None:
        if self._used:
            raise RuntimeError("Interpreter instances run a single program; create a new one")
        self._used = True

        result = self.parse(source)
        if result.diagnostics:
            if self.strict:
                raise ParseCodeError(result.diagnostics)
            for diagnostic in result.diagnostics:
                logger.warning("%s", diagnostic.message)

        logger.debug("Executing %d top-level operations", len(result.operations))
        self.executor.execute(result.operations)
        logger.debug("Finished after %d steps", self.executor.steps)


def run(
    source: str,
    input_data: bytes = b"",
    *,
    strict: bool = True,
    max_steps: Optional[int] = None,
    tape_length: int = TAPE_SIZE,
) -> str:
    """Run ``source`` against in-memory input and return everything it printed."""
    output = io.StringIO()
    interpreter = Interpreter(
        tape_length=tape_length,
        input_stream=io.BytesIO(input_data),
        output=output,
        strict=strict,
        max_steps=max_steps,
    )
    interpreter.interpret(source)
    return output.getvalue()


__all__ = ["Interpreter", "run"]
