"""Dialog script loader from plain dicts / JSON files.

Scripts are validated against DIALOG_SCHEMA before conversion. Callback fields
(`triggered_by_next`, button `triggered_actions`) are action names looked up in
the `actions` mapping supplied by the host.
"""

from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import jsonschema

from ..errors import DialogError
from ..schema import DIALOG_SCHEMA
from .graph import DialogGraph
from .model import Button, DialogFragment, ImageData, ImageSection

Actions = Dict[str, Callable[[], None]]


def _action(name: Optional[str], actions: Actions) -> Optional[Callable[[], None]]:
    if name is None:
        return None
    try:
        return actions[name]
    except KeyError:
        raise DialogError(f"Unknown dialog action: {name!r}") from None


def parse_image(data: Optional[Dict[str, Any]]) -> Optional[ImageData]:
    if data is None:
        return None
    section = None
    if 'section' in data:
        s = data['section']
        section = ImageSection(
            source_width=s['source_width'],
            source_height=s['source_height'],
            source_left=s.get('source_left', 0),
            source_top=s.get('source_top', 0),
        )
    return ImageData(
        path=data['path'],
        offset_x=data.get('offset_x', 0),
        offset_y=data.get('offset_y', 0),
        width=data.get('width'),
        height=data.get('height'),
        section=section,
    )


def _parse_button(data: Dict[str, Any], actions: Actions) -> Button:
    return Button(
        label=data['label'],
        go_to=data['go_to'],
        triggered_actions=_action(data.get('triggered_actions'), actions),
        font_size=data.get('font_size'),
        offset_x=data.get('offset_x', 0),
        offset_y=data.get('offset_y', 0),
    )


def _parse_fragment(data: Dict[str, Any], actions: Actions) -> DialogFragment:
    return DialogFragment(
        text=data['text'],
        name=data.get('name'),
        font_size=data.get('font_size'),
        offset_x=data.get('offset_x', 0),
        offset_y=data.get('offset_y', 0),
        type_speed=data.get('type_speed'),
        is_question=data.get('is_question', False),
        is_fixed_screen=data.get('is_fixed_screen', False),
        buttons=[_parse_button(b, actions) for b in data.get('buttons', [])],
        portrait=parse_image(data.get('portrait')),
        image=parse_image(data.get('image')),
        audio=data.get('audio'),
        is_end_of_dialog=data.get('is_end_of_dialog', False),
        triggered_by_next=_action(data.get('triggered_by_next'), actions),
    )


def load_dialog(entries: List[Dict[str, Any]], actions: Optional[Actions] = None) -> DialogGraph:
    """Validate and convert a list of fragment dicts into a DialogGraph.

    Raises:
        jsonschema.ValidationError: the script does not match DIALOG_SCHEMA
        DialogError: unknown action name, duplicate name or broken fragment
    """
    jsonschema.validate(entries, DIALOG_SCHEMA)
    actions = actions or {}
    return DialogGraph(_parse_fragment(entry, actions) for entry in entries)


def load_dialog_file(path: str, actions: Optional[Actions] = None) -> DialogGraph:
    """Load a dialog script from a JSON file.

    The file holds either a list of fragments or an object with a `dialog` key.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If JSON format is invalid
    """
    script_path = Path(path)
    if not script_path.exists():
        raise FileNotFoundError(f"Dialog file not found: {path}")

    try:
        with open(script_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in dialog file: {e}")

    if isinstance(data, dict):
        data = data.get('dialog', [])
    return load_dialog(data, actions)
