"""NPC data models and enums.

`NPCData` mirrors the options object hosts pass in (every field optional);
`normalize` turns it into a fully populated `NPCConfig` at registration time so
the rest of the engine never checks for missing options.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from .. import config as cfg
from ..dialog.graph import DialogGraph
from ..dialog.model import DialogFragment, DialogTarget, ImageData, to_target
from ..dialog.session import DialogSession
from ..errors import InvalidDialogFragmentError
from ..path.model import FollowPathData, PathPlan
from ..path.runtime import PathWalker
from ..vector import Vector3, to_vectors


class NPCMode(Enum):
    """NPC behavioral states."""
    STANDING = "standing"
    TALKING = "talking"
    FOLLOWPATH = "followPath"


class TriggerSource(Enum):
    """Where an activation request comes from."""
    CLICK = "click"
    PROXIMITY = "proximity"
    EXTERNAL = "external"


class ActivationResult(Enum):
    """Outcome of an activation attempt. Only ACTIVATED changes state."""
    ACTIVATED = "activated"
    COOLDOWN = "cooldown"
    TRIGGER_FORBIDDEN = "trigger_forbidden"
    ALREADY_ACTIVE = "already_active"
    NO_DIALOG = "no_dialog"
    DEFERRED = "deferred"


@dataclass
class NPCData:
    """NPC options as supplied by the host. None means "use the default"."""
    portrait: Optional[Union[str, ImageData]] = None
    react_distance: Optional[float] = None
    idle_anim: Optional[str] = None
    face_user: Optional[bool] = None
    only_external_trigger: Optional[bool] = None
    only_click_trigger: Optional[bool] = None
    on_walk_away: Optional[Callable[[], None]] = None
    on_activate: Optional[Callable[[], None]] = None
    continue_on_walk_away: Optional[bool] = None
    dark_ui: Optional[bool] = None
    cool_down_duration: Optional[float] = None
    hover_text: Optional[str] = None
    dialog_sound: Optional[str] = None
    walking_anim: Optional[str] = None
    walking_speed: Optional[float] = None
    type_speed: Optional[float] = None
    path: Optional[Sequence] = None
    dialog: Optional[Union[DialogGraph, Sequence[DialogFragment]]] = None
    start_dialog: Optional[Union[DialogTarget, int, str]] = None


@dataclass
class NPCConfig:
    """Fully populated NPC configuration."""
    react_distance: float
    idle_anim: str
    face_user: bool
    only_external_trigger: bool
    only_click_trigger: bool
    continue_on_walk_away: bool
    dark_ui: bool
    cool_down_duration: float
    hover_text: str
    walking_anim: str
    walking_speed: float
    type_speed: float
    start_dialog: DialogTarget
    portrait: Optional[ImageData] = None
    dialog_sound: Optional[str] = None
    on_walk_away: Optional[Callable[[], None]] = None
    on_activate: Optional[Callable[[], None]] = None
    path: Optional[List[Vector3]] = None
    dialog: Optional[DialogGraph] = None


def _pick(value, default):
    return default if value is None else value


def normalize(data: Optional[NPCData] = None) -> NPCConfig:
    """Fill every missing option from the configured defaults."""
    data = data or NPCData()
    type_speed = _pick(data.type_speed, cfg.get_type_speed())
    if type_speed != cfg.INSTANT_TYPE_SPEED and type_speed <= 0:
        raise InvalidDialogFragmentError(f"Invalid NPC type_speed {type_speed}")
    walking_speed = _pick(data.walking_speed, cfg.get_walking_speed())
    if walking_speed <= 0:
        raise ValueError(f"walking_speed must be > 0, got {walking_speed}")

    portrait = data.portrait
    if isinstance(portrait, str):
        portrait = ImageData(path=portrait)

    dialog = data.dialog
    if dialog is not None and not isinstance(dialog, DialogGraph):
        dialog = DialogGraph(dialog)

    return NPCConfig(
        react_distance=float(_pick(data.react_distance, cfg.get_react_distance())),
        idle_anim=_pick(data.idle_anim, cfg.get_idle_anim()),
        face_user=_pick(data.face_user, cfg.get_face_user()),
        only_external_trigger=_pick(data.only_external_trigger, False),
        only_click_trigger=_pick(data.only_click_trigger, False),
        continue_on_walk_away=_pick(data.continue_on_walk_away, False),
        dark_ui=_pick(data.dark_ui, False),
        cool_down_duration=float(_pick(data.cool_down_duration, cfg.get_cooldown_seconds())),
        hover_text=_pick(data.hover_text, cfg.get_hover_text()),
        walking_anim=_pick(data.walking_anim, cfg.get_walking_anim()),
        walking_speed=float(walking_speed),
        type_speed=type_speed,
        start_dialog=to_target(_pick(data.start_dialog, 0)),
        portrait=portrait,
        dialog_sound=data.dialog_sound,
        on_walk_away=data.on_walk_away,
        on_activate=data.on_activate,
        path=to_vectors(data.path) if data.path is not None else None,
        dialog=dialog,
    )


@dataclass
class NPCRuntimeState:
    """Mutable runtime root of one registered NPC.

    At most one of `session` (TALKING) and `walker` (FOLLOWPATH) is set.
    """
    mode: NPCMode = NPCMode.STANDING
    player_distance: Optional[float] = None
    player_inside: bool = False
    cooldown_remaining: float = 0.0
    facing_target: Optional[Vector3] = None
    session: Optional[DialogSession] = None
    walker: Optional[PathWalker] = None
    path_data: Optional[FollowPathData] = None
    # Seconds left of a one-shot animation before going back to idle
    animation_remaining: Optional[float] = None

    @property
    def plan(self) -> Optional[PathPlan]:
        return self.walker.plan if self.walker else None

    @property
    def is_active(self) -> bool:
        return self.mode is NPCMode.TALKING
