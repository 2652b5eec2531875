from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .parser import ParseDiagnostic


class InterpreterError(Exception):
    """Base class for every failure surfaced by the interpreter."""


class SourcePathError(InterpreterError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Could not read source code from {path}")
        self.path = path


class ParseCodeError(InterpreterError):
    def __init__(self, diagnostics: Sequence["ParseDiagnostic"]) -> None:
        details = "; ".join(diagnostic.message for diagnostic in diagnostics)
        super().__init__(f"Could not interpret source code, {details}")
        self.diagnostics = list(diagnostics)


class MemoryOverflow(InterpreterError):
    def __init__(self, pointer: int, value: int) -> None:
        super().__init__("Memory overflow")
        self.pointer = pointer
        self.value = value


class PointerOverflow(InterpreterError):
    def __init__(self, pointer: int) -> None:
        super().__init__("Pointer overflow")
        self.pointer = pointer


class InputError(InterpreterError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Could not read from stdin, {cause}")
        self.cause = cause


class StepLimitExceeded(InterpreterError):
    """Raised when execution exceeds the configured step budget."""

    def __init__(self, max_steps: int) -> None:
        super().__init__("Program exceeded allowed step count")
        self.max_steps = max_steps


__all__ = [
    "InterpreterError",
    "SourcePathError",
    "ParseCodeError",
    "MemoryOverflow",
    "PointerOverflow",
    "InputError",
    "StepLimitExceeded",
]
