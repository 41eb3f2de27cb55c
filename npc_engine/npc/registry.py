"""NPC registry for runtime NPC management."""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Union

from ..vector import Vector3
from .controller import InteractionController
from .host import SceneHost
from .models import NPCConfig, NPCData, NPCMode

logger = logging.getLogger(__name__)


class NPCRegistry:
    """Registry of the NPCs living in a scene.

    Registering creates the NPC runtime state, unregistering destroys it.
    """

    def __init__(self):
        self.npcs: Dict[str, InteractionController] = {}

    def register_npc(self, npc_id: str, host: SceneHost,
                     data: Optional[Union[NPCData, NPCConfig]] = None) -> InteractionController:
        """Create and register an NPC runtime."""
        if npc_id in self.npcs:
            raise ValueError(f"NPC {npc_id!r} is already registered")
        controller = InteractionController(npc_id, host, data)
        self.npcs[npc_id] = controller
        logger.debug("Registered NPC %s", npc_id)
        return controller

    def unregister_npc(self, npc_id: str) -> bool:
        controller = self.npcs.pop(npc_id, None)
        if controller is None:
            return False
        controller.dispose()
        logger.debug("Unregistered NPC %s", npc_id)
        return True

    def get_npc(self, npc_id: str) -> Optional[InteractionController]:
        return self.npcs.get(npc_id)

    def __contains__(self, npc_id: str) -> bool:
        return npc_id in self.npcs

    def __len__(self) -> int:
        return len(self.npcs)

    def tick(self, delta_seconds: float, player_position: Optional[Vector3] = None):
        """Tick every registered NPC once.

        NPCs unregistered by an earlier NPC's callback during this tick are skipped.
        """
        for npc_id, controller in list(self.npcs.items()):
            if self.npcs.get(npc_id) is not controller:
                continue
            controller.on_tick(delta_seconds, player_position)

    def get_talking_npcs(self) -> List[InteractionController]:
        return [c for c in self.npcs.values() if c.mode is NPCMode.TALKING]

    def get_walking_npcs(self) -> List[InteractionController]:
        return [c for c in self.npcs.values() if c.mode is NPCMode.FOLLOWPATH]
