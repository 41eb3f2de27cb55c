"""Dialog session: navigation state over a DialogGraph while an NPC talks."""

from __future__ import annotations
from typing import List, Optional

from .graph import DialogGraph
from .model import Button, DialogFragment
from .typewriter import TypewriterController, TypingHandle


class DialogSession:
    """Current fragment, typing progress and active buttons of one conversation."""

    def __init__(self, graph: DialogGraph, typewriter: TypewriterController, type_speed: float):
        self.graph = graph
        self.typewriter = typewriter
        self.type_speed = type_speed
        self.current_index: int = -1
        self.typing: Optional[TypingHandle] = None
        self.active_buttons: List[Button] = []
        self.lines_shown = 0

    @property
    def fragment(self) -> DialogFragment:
        return self.graph.fragment_at(self.current_index)

    @property
    def is_typing(self) -> bool:
        return self.typing is not None and not self.typing.complete

    @property
    def revealed_text(self) -> str:
        return self.typing.revealed_text if self.typing else ""

    def show(self, index: int) -> DialogFragment:
        """Move to `index` and restart the typing effect for its text."""
        fragment = self.graph.fragment_at(index)
        self.current_index = index
        rate = fragment.type_speed if fragment.type_speed is not None else self.type_speed
        self.typing = self.typewriter.start(fragment.text, rate)
        self.active_buttons = []
        self.lines_shown += 1
        self._refresh_buttons()
        return fragment

    def advance_time(self, dt: float) -> str:
        if self.typing is None:
            return ""
        text = self.typewriter.advance_time(self.typing, dt)
        self._refresh_buttons()
        return text

    def skip(self) -> str:
        if self.typing is None:
            return ""
        text = self.typewriter.skip(self.typing)
        self._refresh_buttons()
        return text

    def _refresh_buttons(self):
        # Buttons appear once the question text is fully revealed
        if not self.active_buttons and not self.is_typing and self.fragment.is_question:
            self.active_buttons = list(self.fragment.buttons)
