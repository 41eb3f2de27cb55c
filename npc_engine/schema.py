"""JSON schemas for data-driven dialog scripts and NPC option objects.

Callback fields hold action names, resolved against a host-supplied mapping.
"""

_IMAGE_SCHEMA = {
    "type": "object",
    "required": ["path"],
    "properties": {
        "path": {"type": "string", "minLength": 1},
        "offset_x": {"type": "number"},
        "offset_y": {"type": "number"},
        "width": {"type": "number", "exclusiveMinimum": 0},
        "height": {"type": "number", "exclusiveMinimum": 0},
        "section": {
            "type": "object",
            "required": ["source_width", "source_height"],
            "properties": {
                "source_width": {"type": "number", "exclusiveMinimum": 0},
                "source_height": {"type": "number", "exclusiveMinimum": 0},
                "source_left": {"type": "number", "minimum": 0},
                "source_top": {"type": "number", "minimum": 0},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

_VECTOR_SCHEMA = {
    "type": "array",
    "items": {"type": "number"},
    "minItems": 3,
    "maxItems": 3,
}

BUTTON_SCHEMA = {
    "type": "object",
    "required": ["label", "go_to"],
    "properties": {
        "label": {"type": "string"},
        "go_to": {"type": ["integer", "string"]},
        "triggered_actions": {"type": "string"},
        "font_size": {"type": "number", "exclusiveMinimum": 0},
        "offset_x": {"type": "number"},
        "offset_y": {"type": "number"},
    },
    "additionalProperties": False,
}

FRAGMENT_SCHEMA = {
    "type": "object",
    "required": ["text"],
    "properties": {
        "text": {"type": "string"},
        "name": {"type": "string", "minLength": 1},
        "font_size": {"type": "number", "exclusiveMinimum": 0},
        "offset_x": {"type": "number"},
        "offset_y": {"type": "number"},
        "type_speed": {"type": "number"},
        "is_question": {"type": "boolean"},
        "is_fixed_screen": {"type": "boolean"},
        "buttons": {"type": "array", "items": BUTTON_SCHEMA},
        "portrait": _IMAGE_SCHEMA,
        "image": _IMAGE_SCHEMA,
        "audio": {"type": "string"},
        "is_end_of_dialog": {"type": "boolean"},
        "triggered_by_next": {"type": "string"},
    },
    "additionalProperties": False,
}

DIALOG_SCHEMA = {
    "type": "array",
    "items": FRAGMENT_SCHEMA,
}

NPC_DATA_SCHEMA = {
    "type": "object",
    "properties": {
        "portrait": {"anyOf": [{"type": "string"}, _IMAGE_SCHEMA]},
        "react_distance": {"type": "number", "minimum": 0},
        "idle_anim": {"type": "string", "minLength": 1},
        "face_user": {"type": "boolean"},
        "only_external_trigger": {"type": "boolean"},
        "only_click_trigger": {"type": "boolean"},
        "on_walk_away": {"type": "string"},
        "on_activate": {"type": "string"},
        "continue_on_walk_away": {"type": "boolean"},
        "dark_ui": {"type": "boolean"},
        "cool_down_duration": {"type": "number", "minimum": 0},
        "hover_text": {"type": "string"},
        "dialog_sound": {"type": "string"},
        "walking_anim": {"type": "string", "minLength": 1},
        "walking_speed": {"type": "number", "exclusiveMinimum": 0},
        "type_speed": {"type": "number"},
        "path": {"type": "array", "items": _VECTOR_SCHEMA},
        "dialog": DIALOG_SCHEMA,
        "start_dialog": {"type": ["integer", "string"]},
    },
    "additionalProperties": False,
}
