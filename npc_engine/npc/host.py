"""Collaborator surface the engine calls into.

Rendering, animation, audio and scene plumbing belong to the host application.
`SceneHost` is the interface with headless defaults: positions are stored,
everything else does nothing. Hosts subclass it and override what they render.
"""

from __future__ import annotations
from typing import List, Optional

from ..dialog.model import Button, DialogFragment
from ..vector import Vector3


class SceneHost:
    """Headless scene / UI / audio / animation collaborators for one NPC."""

    def __init__(self, npc_position: Optional[Vector3] = None, player_position: Optional[Vector3] = None):
        self.npc_position = Vector3.of(npc_position) if npc_position is not None else Vector3()
        self.player_position = Vector3.of(player_position) if player_position is not None else Vector3()
        self.facing: Optional[Vector3] = None

    # --- Animation / audio ---
    def play_animation(self, name: str, loop: bool) -> None:
        pass

    def play_sound(self, path: str) -> None:
        pass

    # --- Dialog UI ---
    def render_dialog(self, fragment: DialogFragment, revealed_text: str, dark_ui: bool = False) -> None:
        """Show `revealed_text` of `fragment`; `dark_ui` selects the dark dialog theme."""
        pass

    def render_buttons(self, buttons: List[Button]) -> None:
        pass

    def hide_dialog(self) -> None:
        pass

    def show_hover_text(self, text: str) -> None:
        pass

    # --- Scene ---
    def get_player_position(self) -> Vector3:
        return self.player_position

    def get_npc_position(self) -> Vector3:
        return self.npc_position

    def set_npc_position(self, position: Vector3) -> None:
        self.npc_position = position

    def set_npc_facing(self, direction: Vector3) -> None:
        self.facing = direction
