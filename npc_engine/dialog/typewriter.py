"""Typewriter text effect driven by elapsed time."""

from __future__ import annotations
import math
from dataclasses import dataclass

from ..config import DEFAULT_TYPE_SPEED, INSTANT_TYPE_SPEED

# Absorbs float error in elapsed * rate (e.g. 0.1 * 30 = 2.9999999999999996)
_EPSILON = 1e-9


@dataclass
class TypingHandle:
    text: str
    rate: float
    elapsed: float = 0.0
    revealed: int = 0

    @property
    def complete(self) -> bool:
        return self.revealed >= len(self.text)

    @property
    def revealed_text(self) -> str:
        return self.text[:self.revealed]


class TypewriterController:
    """Reveal dialog text one character at a time."""

    def start(self, text: str, rate_per_second: float = DEFAULT_TYPE_SPEED) -> TypingHandle:
        if rate_per_second != INSTANT_TYPE_SPEED and rate_per_second <= 0:
            raise ValueError(f"Typing rate must be > 0 or {INSTANT_TYPE_SPEED}, got {rate_per_second}")
        handle = TypingHandle(text=text, rate=rate_per_second)
        if rate_per_second == INSTANT_TYPE_SPEED:
            handle.revealed = len(text)
        return handle

    def advance_time(self, handle: TypingHandle, elapsed_seconds: float) -> str:
        """Advance the effect and return the revealed prefix (never shrinks)."""
        if handle.complete:
            return handle.text
        handle.elapsed += max(0.0, elapsed_seconds)
        count = int(math.floor(handle.elapsed * handle.rate + _EPSILON))
        handle.revealed = max(handle.revealed, min(len(handle.text), count))
        return handle.revealed_text

    def skip(self, handle: TypingHandle) -> str:
        handle.revealed = len(handle.text)
        return handle.text
