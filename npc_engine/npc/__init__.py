"""NPC runtime: state machine, interaction controller and registry."""

from .models import (
    NPCMode, TriggerSource, ActivationResult,
    NPCData, NPCConfig, NPCRuntimeState, normalize,
)
from .host import SceneHost
from .fsm import NPCStateMachine
from .controller import InteractionController
from .registry import NPCRegistry
from .loader import load_npc_data, load_npc_file

__all__ = [
    'NPCMode', 'TriggerSource', 'ActivationResult',
    'NPCData', 'NPCConfig', 'NPCRuntimeState', 'normalize',
    'SceneHost', 'NPCStateMachine', 'InteractionController', 'NPCRegistry',
    'load_npc_data', 'load_npc_file',
]
