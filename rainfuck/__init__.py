import logging

from .errors import (
    InputError,
    InterpreterError,
    MemoryOverflow,
    ParseCodeError,
    PointerOverflow,
    SourcePathError,
    StepLimitExceeded,
)
from .executor import TAPE_SIZE, Executor, MachineState
from .interpreter import Interpreter, run
from .lexer import Token, tokenize
from .parser import Loop, Operation, ParseDiagnostic, ParseResult, parse

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Interpreter",
    "run",
    "Token",
    "tokenize",
    "Operation",
    "Loop",
    "ParseDiagnostic",
    "ParseResult",
    "parse",
    "Executor",
    "MachineState",
    "TAPE_SIZE",
    "InterpreterError",
    "SourcePathError",
    "ParseCodeError",
    "MemoryOverflow",
    "PointerOverflow",
    "InputError",
    "StepLimitExceeded",
]
