from __future__ import annotations

from enum import Enum
from typing import List


class Token(str, Enum):
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    OUTPUT = "."
    INPUT = ","
    LOOP_OPEN = "["
    LOOP_CLOSE = "]"


_TOKENS = {token.value: token for token in Token}


def tokenize(source: str) -> List[Token]:
    """Return the instruction tokens in ``source``; other characters are comments."""
    return [_TOKENS[char] for char in source if char in _TOKENS]


__all__ = ["Token", "tokenize"]
