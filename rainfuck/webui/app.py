from __future__ import annotations

import io
from typing import List

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field, field_validator

from rainfuck.errors import (
    InputError,
    MemoryOverflow,
    ParseCodeError,
    PointerOverflow,
    StepLimitExceeded,
)
from rainfuck.interpreter import Interpreter

DEFAULT_MAX_STEPS = 100_000
MAX_STEPS_LIMIT = 1_000_000


class RunRequest(BaseModel):
    code: str = ""
    input: str = ""
    max_steps: int = Field(default=DEFAULT_MAX_STEPS, ge=1, le=MAX_STEPS_LIMIT)
    strict: bool = True
    tape_window: int = Field(default=10, ge=0)

    @field_validator("input")
    @classmethod
    def validate_input(cls, value: str) -> str:
        if any(ord(ch) > 255 for ch in value):
            raise ValueError("input must only contain characters in the range 0-255")
        return value


class Diagnostic(BaseModel):
    kind: str
    position: int
    message: str


class RunResponse(BaseModel):
    output: str
    pointer: int
    tape_start: int
    tape: List[int]
    steps: int


class ParseFailure(BaseModel):
    detail: str
    diagnostics: List[Diagnostic]


def create_app() -> FastAPI:
    app = FastAPI(title="rainfuck API", version="0.1.0")

    @app.post("/api/run", response_model=RunResponse)
    def run_program(payload: RunRequest) -> RunResponse:
        output = io.StringIO()
        interpreter = Interpreter(
            input_stream=io.BytesIO(payload.input.encode("latin-1")),
            output=output,
            strict=payload.strict,
            max_steps=payload.max_steps,
        )
        try:
            interpreter.interpret(payload.code)
        except ParseCodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=ParseFailure(
                    detail=str(exc),
                    diagnostics=[
                        Diagnostic(kind=d.kind.value, position=d.position, message=d.message)
                        for d in exc.diagnostics
                    ],
                ).model_dump(),
            ) from exc
        except (PointerOverflow, MemoryOverflow, StepLimitExceeded, InputError) as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(exc),
            ) from exc

        state = interpreter.state
        tape_start, tape = state.window(payload.tape_window)
        return RunResponse(
            output=output.getvalue(),
            pointer=state.pointer,
            tape_start=tape_start,
            tape=tape,
            steps=interpreter.executor.steps,
        )

    return app


__all__ = ["create_app", "RunRequest", "RunResponse"]
