"""Central configuration for the NPC interaction engine.

Every tunable default lives here. All values have a sensible default and can be
overridden through environment variables; malformed or out-of-range values fall
back silently to the default.
"""
from __future__ import annotations
import os


def _get_int_env(name: str, default: int, minval: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_float_env(name: str, default: float, minval: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = float(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in {"1", "true", "yes", "on"}


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# ---------------- Dialog ----------------
# Characters revealed per second by the typewriter effect
DEFAULT_TYPE_SPEED: float = 30.0

# Special typing rate: reveal the whole line at once
INSTANT_TYPE_SPEED: float = -1

ENV_TYPE_SPEED = "NPC_TYPE_SPEED"


def get_type_speed() -> float:
    """Typing rate in characters per second. Var: NPC_TYPE_SPEED (default 30).

    -1 is accepted and means instant reveal; any other value must be > 0.
    """
    raw = os.getenv(ENV_TYPE_SPEED)
    if raw is None:
        return DEFAULT_TYPE_SPEED
    try:
        val = float(raw)
        if val != INSTANT_TYPE_SPEED and val <= 0:
            raise ValueError
        return val
    except ValueError:
        return DEFAULT_TYPE_SPEED


# ---------------- Interaction ----------------
DEFAULT_REACT_DISTANCE: float = 6.0
DEFAULT_COOLDOWN_SECONDS: float = 5.0
DEFAULT_HOVER_TEXT: str = "TALK"


def get_react_distance() -> float:
    """Radius (meters) for proximity activation / walk-away. Var: NPC_REACT_DISTANCE."""
    return _get_float_env("NPC_REACT_DISTANCE", DEFAULT_REACT_DISTANCE, minval=0.0)


def get_cooldown_seconds() -> float:
    """Seconds after a deactivation before the NPC can be activated again. Var: NPC_COOLDOWN_SEC."""
    return _get_float_env("NPC_COOLDOWN_SEC", DEFAULT_COOLDOWN_SECONDS, minval=0.0)


def get_hover_text() -> str:
    """Hover feedback shown when pointing at the NPC. Var: NPC_HOVER_TEXT (default TALK)."""
    return _get_str_env("NPC_HOVER_TEXT", DEFAULT_HOVER_TEXT)


def get_face_user() -> bool:
    """Whether NPCs turn to face the player while talking. Var: NPC_FACE_USER (default True)."""
    return _get_bool_env("NPC_FACE_USER", True)


# ---------------- Motion & animation ----------------
DEFAULT_WALKING_SPEED: float = 2.0
DEFAULT_IDLE_ANIM: str = "Idle"
DEFAULT_WALKING_ANIM: str = "Walk"


def get_walking_speed() -> float:
    """Default walking speed (m/s) for followPath. Var: NPC_WALKING_SPEED (default 2.0)."""
    val = _get_float_env("NPC_WALKING_SPEED", DEFAULT_WALKING_SPEED)
    return val if val > 0 else DEFAULT_WALKING_SPEED


def get_idle_anim() -> str:
    """Looping idle animation name. Var: NPC_IDLE_ANIM."""
    return _get_str_env("NPC_IDLE_ANIM", DEFAULT_IDLE_ANIM)


def get_walking_anim() -> str:
    """Looping walking animation name. Var: NPC_WALKING_ANIM."""
    return _get_str_env("NPC_WALKING_ANIM", DEFAULT_WALKING_ANIM)


# ---------------- Demo / CLI ----------------
# Tick length (seconds) of the headless demo loop
DEMO_TICK_SECONDS: float = _get_float_env("NPC_DEMO_TICK_SEC", 0.1, minval=0.01)

# Number of path points generated per authored waypoint by curve=True
CURVE_POINTS_PER_WAYPOINT: int = 4


def get_log_level() -> str:
    """Logging level name used by the demo entry point. Var: NPC_LOG_LEVEL."""
    return _get_str_env("NPC_LOG_LEVEL", "WARNING").upper()


__all__ = [
    # Dialog
    "DEFAULT_TYPE_SPEED", "INSTANT_TYPE_SPEED", "ENV_TYPE_SPEED", "get_type_speed",
    # Interaction
    "DEFAULT_REACT_DISTANCE", "DEFAULT_COOLDOWN_SECONDS", "DEFAULT_HOVER_TEXT",
    "get_react_distance", "get_cooldown_seconds", "get_hover_text", "get_face_user",
    # Motion
    "DEFAULT_WALKING_SPEED", "DEFAULT_IDLE_ANIM", "DEFAULT_WALKING_ANIM",
    "CURVE_POINTS_PER_WAYPOINT",
    "get_walking_speed", "get_idle_anim", "get_walking_anim",
    # Demo
    "DEMO_TICK_SECONDS", "get_log_level",
]
