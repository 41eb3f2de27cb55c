"""NPC interaction engine: dialog, typewriter, path following and NPC state."""

from .errors import (
    NPCEngineError, InvalidPathError, DialogError, UnknownDialogTargetError,
    DuplicateDialogNameError, InvalidDialogFragmentError, InvalidChoiceError,
    NoActiveDialogError,
)
from .vector import Vector3
from .dialog import (
    ByIndex, ByName, Button, DialogFragment, DialogGraph, ImageData, ImageSection,
    TypewriterController, DialogSession, load_dialog, load_dialog_file,
)
from .path import FollowPathData, PathPlan, PathWalker, build_plan
from .npc import (
    NPCMode, TriggerSource, ActivationResult, NPCData, NPCConfig, SceneHost,
    NPCStateMachine, InteractionController, NPCRegistry, load_npc_data, load_npc_file,
)

__version__ = "0.1.0"

__all__ = [
    'NPCEngineError', 'InvalidPathError', 'DialogError', 'UnknownDialogTargetError',
    'DuplicateDialogNameError', 'InvalidDialogFragmentError', 'InvalidChoiceError',
    'NoActiveDialogError',
    'Vector3',
    'ByIndex', 'ByName', 'Button', 'DialogFragment', 'DialogGraph', 'ImageData', 'ImageSection',
    'TypewriterController', 'DialogSession', 'load_dialog', 'load_dialog_file',
    'FollowPathData', 'PathPlan', 'PathWalker', 'build_plan',
    'NPCMode', 'TriggerSource', 'ActivationResult', 'NPCData', 'NPCConfig', 'SceneHost',
    'NPCStateMachine', 'InteractionController', 'NPCRegistry', 'load_npc_data', 'load_npc_file',
]
