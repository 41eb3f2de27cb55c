"""NPC options loader - builds NPCData from plain dicts / JSON files.

Follows the same pattern as the dialog loader: the payload is validated with
jsonschema first, callback fields are action names resolved in `actions`.
"""

from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import jsonschema

from ..dialog.loader import load_dialog, parse_image
from ..errors import NPCEngineError
from ..schema import NPC_DATA_SCHEMA
from ..vector import to_vectors
from .models import NPCData

Actions = Dict[str, Callable[[], None]]


def _action(name: Optional[str], actions: Actions):
    if name is None:
        return None
    if name not in actions:
        raise NPCEngineError(f"Unknown NPC action: {name!r}")
    return actions[name]


def load_npc_data(data: Dict[str, Any], actions: Optional[Actions] = None) -> NPCData:
    """Validate an NPC options dict and convert it to NPCData.

    Raises:
        jsonschema.ValidationError: payload does not match NPC_DATA_SCHEMA
        NPCEngineError: unknown action name or broken dialog script
    """
    jsonschema.validate(data, NPC_DATA_SCHEMA)
    actions = actions or {}

    portrait = data.get('portrait')
    if isinstance(portrait, dict):
        portrait = parse_image(portrait)

    return NPCData(
        portrait=portrait,
        react_distance=data.get('react_distance'),
        idle_anim=data.get('idle_anim'),
        face_user=data.get('face_user'),
        only_external_trigger=data.get('only_external_trigger'),
        only_click_trigger=data.get('only_click_trigger'),
        on_walk_away=_action(data.get('on_walk_away'), actions),
        on_activate=_action(data.get('on_activate'), actions),
        continue_on_walk_away=data.get('continue_on_walk_away'),
        dark_ui=data.get('dark_ui'),
        cool_down_duration=data.get('cool_down_duration'),
        hover_text=data.get('hover_text'),
        dialog_sound=data.get('dialog_sound'),
        walking_anim=data.get('walking_anim'),
        walking_speed=data.get('walking_speed'),
        type_speed=data.get('type_speed'),
        path=to_vectors(data['path']) if 'path' in data else None,
        dialog=load_dialog(data['dialog'], actions) if 'dialog' in data else None,
        start_dialog=data.get('start_dialog'),
    )


def load_npc_file(path: str, actions: Optional[Actions] = None) -> NPCData:
    """Load NPC options from a JSON file."""
    npc_path = Path(path)
    if not npc_path.exists():
        raise FileNotFoundError(f"NPC file not found: {path}")
    try:
        with open(npc_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in NPC file: {e}")
    return load_npc_data(data, actions)
