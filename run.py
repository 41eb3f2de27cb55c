"""Minimal CLI loop to try an NPC without a game engine.

Usage (example):
    python run.py
Then type commands:
    approach
    tick 1
    next
    choose 0
"""
from __future__ import annotations
import difflib
import logging

from npc_engine.config import DEMO_TICK_SECONDS, get_log_level
from npc_engine.errors import NPCEngineError
from npc_engine.npc.host import SceneHost
from npc_engine.npc.loader import load_npc_data
from npc_engine.npc.registry import NPCRegistry
from npc_engine.path.model import FollowPathData
from npc_engine.vector import Vector3

PROMPT = "> "

COMMAND_HELP = {
    'status': {'usage': 'status', 'desc': 'Show NPC mode, positions, cooldown and current line.'},
    'tick': {'usage': 'tick [seconds]', 'desc': 'Advance the simulation (default one demo tick).'},
    'approach': {'usage': 'approach', 'desc': 'Move the player next to the NPC.'},
    'leave': {'usage': 'leave', 'desc': 'Move the player far away from the NPC.'},
    'hover': {'usage': 'hover', 'desc': 'Point at the NPC.'},
    'click': {'usage': 'click', 'desc': 'Click the NPC to start talking.'},
    'next': {'usage': 'next', 'desc': 'Finish the typing effect, or go to the next line.'},
    'choose': {'usage': 'choose <n>', 'desc': 'Pick answer n on a question.'},
    'walk': {'usage': 'walk', 'desc': 'Send the NPC around the market stalls (curved path).'},
    'stop': {'usage': 'stop', 'desc': 'Stop walking.'},
    'bye': {'usage': 'bye', 'desc': 'End the conversation.'},
    'quit': {'usage': 'quit | exit', 'desc': 'Leave the demo.'},
}

MERCHANT = {
    "portrait": "faces/merchant.png",
    "react_distance": 3,
    "cool_down_duration": 4,
    "type_speed": 40,
    "on_walk_away": "walk_away",
    "path": [[0, 0, 0], [6, 0, 0], [6, 0, 6], [0, 0, 6]],
    "dialog": [
        {"text": "Fresh apples! Want one?", "is_question": True, "buttons": [
            {"label": "Yes please", "go_to": "sold", "triggered_actions": "sell_apple"},
            {"label": "No thanks", "go_to": "refused"},
        ]},
        {"text": "Enjoy it, traveller.", "name": "sold", "is_end_of_dialog": True},
        {"text": "Maybe next time.", "name": "refused"},
        {"text": "The market closes at sunset.", "is_end_of_dialog": True},
    ],
}


class ConsoleHost(SceneHost):
    """Prints what a game engine would render."""

    def play_animation(self, name, loop):
        print(f"  [anim] {name}{' (loop)' if loop else ''}")

    def play_sound(self, path):
        print(f"  [sound] {path}")

    def render_dialog(self, fragment, revealed_text, dark_ui=False):
        if revealed_text == fragment.text:
            print(f"  NPC: {revealed_text}")

    def render_buttons(self, buttons):
        for i, button in enumerate(buttons):
            print(f"    {i}) {button.label}")

    def hide_dialog(self):
        print("  [dialog closed]")

    def show_hover_text(self, text):
        print(f"  [{text}]")


def help_lines():
    lines = ["Available commands:"]
    max_usage = max(len(info['usage']) for info in COMMAND_HELP.values())
    for info in COMMAND_HELP.values():
        lines.append(f" {info['usage'].ljust(max_usage)}  - {info['desc']}")
    return lines


def status_lines(npc, host):
    state = npc.state
    lines = [
        f"mode: {npc.mode.value}",
        f"npc at {host.get_npc_position().as_tuple()}, player at {host.get_player_position().as_tuple()}",
        f"cooldown: {state.cooldown_remaining:.1f}s",
    ]
    if npc.session is not None:
        lines.append(f"line {npc.session.current_index}: {npc.session.revealed_text!r}")
    if npc.plan is not None:
        lines.append(f"walking {len(npc.plan.points)} points, lap {state.walker.laps}")
    return lines


def npc_loop():
    registry = NPCRegistry()
    host = ConsoleHost(player_position=Vector3(20, 0, 0))
    actions = {
        "sell_apple": lambda: print("  [+1 apple]"),
        "walk_away": lambda: print("  [the merchant watches you leave]"),
    }
    data = load_npc_data(MERCHANT, actions)
    # Standing still at first; 'walk' uses the default market path
    data.path, market = None, data.path
    npc = registry.register_npc("merchant", host, data)
    print("-- Market demo. Type 'help' for the command list. --")

    while True:
        cmd = input(PROMPT).strip()
        if not cmd:
            continue
        if cmd in {"quit", "exit"}:
            print("Goodbye.")
            registry.unregister_npc("merchant")
            break
        if cmd == "help":
            for line in help_lines():
                print(line)
            continue
        try:
            if cmd == "status":
                for line in status_lines(npc, host):
                    print(line)
            elif cmd.startswith("tick"):
                parts = cmd.split(maxsplit=1)
                seconds = float(parts[1]) if len(parts) > 1 else DEMO_TICK_SECONDS
                # Small steps so typing and walking stay smooth
                steps = max(1, int(round(seconds / DEMO_TICK_SECONDS)))
                for _ in range(steps):
                    registry.tick(seconds / steps)
            elif cmd == "approach":
                host.player_position = host.get_npc_position() + Vector3(1, 0, 0)
                registry.tick(0.0)
            elif cmd == "leave":
                host.player_position = host.get_npc_position() + Vector3(20, 0, 0)
                registry.tick(0.0)
            elif cmd == "hover":
                npc.on_hover()
            elif cmd == "click":
                print(f"  -> {npc.on_click().value}")
            elif cmd == "next":
                npc.next()
            elif cmd.startswith("choose"):
                parts = cmd.split(maxsplit=1)
                if len(parts) == 1:
                    print("Usage: choose <n>")
                    continue
                npc.advance_dialog(int(parts[1]))
            elif cmd == "walk":
                npc.follow_path(FollowPathData(
                    path=market, curve=True, loop=True,
                    on_reached_point=lambda i: print(f"  [stall {i}]"),
                    on_loop=lambda lap: print(f"  [lap {lap}]"),
                ))
            elif cmd == "stop":
                npc.stop_walking()
            elif cmd == "bye":
                npc.deactivate()
            else:
                close = difflib.get_close_matches(cmd, COMMAND_HELP.keys(), n=3)
                if close:
                    print(f"Unknown command: '{cmd}'. Did you mean: {', '.join(close)}")
                else:
                    print(f"Unknown command: '{cmd}'. Type 'help' for the list.")
        except NPCEngineError as e:
            print(f"[ERROR] {e}")
        except ValueError as e:
            print(f"[ERROR] bad number: {e}")


def main():
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    npc_loop()


if __name__ == "__main__":
    main()
