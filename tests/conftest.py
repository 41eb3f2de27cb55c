"""Shared fixtures: a SceneHost that records every collaborator call."""

import pytest

from npc_engine.dialog.model import Button, DialogFragment
from npc_engine.dialog.graph import DialogGraph
from npc_engine.npc.controller import InteractionController
from npc_engine.npc.host import SceneHost
from npc_engine.npc.models import NPCData
from npc_engine.vector import Vector3

FAR_AWAY = Vector3(100, 0, 0)


class RecordingHost(SceneHost):
    """Headless host that keeps a log of the calls made by the engine."""

    def __init__(self, npc_position=None, player_position=FAR_AWAY):
        super().__init__(npc_position, player_position)
        self.calls = []
        self.themes = []

    def of(self, kind):
        return [c[1:] for c in self.calls if c[0] == kind]

    def play_animation(self, name, loop):
        self.calls.append(("play_animation", name, loop))

    def play_sound(self, path):
        self.calls.append(("play_sound", path))

    def render_dialog(self, fragment, revealed_text, dark_ui=False):
        self.calls.append(("render_dialog", fragment, revealed_text))
        self.themes.append(dark_ui)

    def render_buttons(self, buttons):
        self.calls.append(("render_buttons", [b.label for b in buttons]))

    def hide_dialog(self):
        self.calls.append(("hide_dialog",))

    def show_hover_text(self, text):
        self.calls.append(("show_hover_text", text))

    def set_npc_position(self, position):
        super().set_npc_position(position)
        self.calls.append(("set_npc_position", position))

    def set_npc_facing(self, direction):
        super().set_npc_facing(direction)
        self.calls.append(("set_npc_facing", direction))


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def question_dialog():
    """Hi? -> A goes to index 1, B goes to the fragment named 'end'."""
    return DialogGraph([
        DialogFragment(text="Hi", is_question=True, buttons=[
            Button(label="A", go_to=1),
            Button(label="B", go_to="end"),
        ]),
        DialogFragment(text="...", is_end_of_dialog=True),
        DialogFragment(text="Bye", name="end", is_end_of_dialog=True),
    ])


@pytest.fixture
def linear_dialog():
    return DialogGraph([
        DialogFragment(text="Hello there"),
        DialogFragment(text="Nice weather"),
        DialogFragment(text="See you"),
    ])


@pytest.fixture
def make_npc(host):
    """Factory building an InteractionController on the shared host."""
    def _make(**options):
        options.setdefault("cool_down_duration", 5.0)
        return InteractionController("test_npc", host, NPCData(**options))
    return _make
