"""Interaction controller: public API of one NPC.

Binds click, hover, proximity and explicit API calls to state-machine
transitions and turns each frame tick into the ordered sequence
cooldown/proximity -> transition -> typing or path advance -> facing ->
callback dispatch.

Host callbacks may call back into this API. Calls made while callbacks are
being dispatched are deferred and run, in order, once the current dispatch
has finished.
"""

from __future__ import annotations
import logging
from collections import deque
from typing import Optional, Union

from ..dialog.graph import DialogGraph
from ..dialog.model import DialogTarget
from ..dialog.typewriter import TypewriterController
from ..errors import NPCEngineError
from ..path.model import FollowPathData, PathPlan
from ..vector import Vector3
from .fsm import NPCStateMachine
from .host import SceneHost
from .models import ActivationResult, NPCConfig, NPCData, NPCMode, TriggerSource, normalize

logger = logging.getLogger(__name__)


class InteractionController:
    """Public operations of a registered NPC."""

    def __init__(self, npc_id: str, host: SceneHost,
                 data: Optional[Union[NPCData, NPCConfig]] = None,
                 typewriter: Optional[TypewriterController] = None):
        self.npc_id = npc_id
        self.host = host
        self.config = data if isinstance(data, NPCConfig) else normalize(data)
        self.machine = NPCStateMachine(npc_id, self.config, host, typewriter)
        self._dispatching = False
        self._disposed = False
        self._deferred = deque()

        host.play_animation(self.config.idle_anim, True)
        if self.config.path:
            self.follow_path(FollowPathData())

    # --- State access ---
    @property
    def mode(self) -> NPCMode:
        return self.machine.mode

    @property
    def state(self):
        return self.machine.state

    @property
    def session(self):
        return self.machine.state.session

    @property
    def plan(self) -> Optional[PathPlan]:
        return self.machine.state.plan

    @property
    def is_active(self) -> bool:
        return self.machine.state.is_active

    # --- Dispatch ---
    def _call(self, fn, *args, deferred_result=None):
        if self._disposed:
            logger.debug("NPC %s: ignoring %s after dispose", self.npc_id, fn.__name__)
            return None
        if self._dispatching:
            logger.debug("NPC %s: deferring %s until callbacks finish", self.npc_id, fn.__name__)
            self._deferred.append((fn, args))
            return deferred_result
        try:
            return fn(*args)
        finally:
            self._dispatch()

    def _dispatch(self) -> None:
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while True:
                callbacks = self.machine.drain_callbacks()
                if callbacks:
                    for handler, args in callbacks:
                        if self._disposed:
                            break
                        self._invoke(handler, args)
                    if self._disposed:
                        break
                    continue
                if self._deferred:
                    fn, args = self._deferred.popleft()
                    try:
                        fn(*args)
                    except NPCEngineError as e:
                        logger.warning("NPC %s: deferred %s rejected: %s", self.npc_id, fn.__name__, e)
                    continue
                break
        finally:
            self._dispatching = False

    def _invoke(self, handler, args) -> None:
        try:
            handler(*args)
        except Exception:
            logger.exception("NPC %s: callback %r failed", self.npc_id, handler)

    # --- Public API ---
    def activate(self, trigger_source: Union[TriggerSource, str] = TriggerSource.EXTERNAL) -> ActivationResult:
        """Start a conversation. Cooldown and trigger restrictions give a no-op result."""
        return self._call(self.machine.activate, TriggerSource(trigger_source),
                          deferred_result=ActivationResult.DEFERRED)

    def talk(self, dialog: DialogGraph, start: Optional[Union[DialogTarget, int, str]] = None) -> ActivationResult:
        """Switch to another dialog script, starting at `start` (index or name)."""
        return self._call(self.machine.talk, dialog, start, deferred_result=ActivationResult.DEFERRED)

    def deactivate(self) -> Optional[bool]:
        return self._call(self.machine.deactivate)

    def advance_dialog(self, button_choice: Optional[int] = None) -> Optional[bool]:
        return self._call(self.machine.advance_dialog, button_choice)

    def next(self) -> Optional[bool]:
        """"Next" input: finish the typing effect first, then advance.

        Questions wait for a button choice: "next" on a revealed question is a
        no-op returning False.
        """
        session = self.machine.state.session
        if session is not None:
            if session.is_typing:
                self._call(self.machine.skip_typing)
                return False
            if session.fragment.is_question:
                return False
        return self.advance_dialog()

    def follow_path(self, data: Optional[FollowPathData] = None) -> Optional[PathPlan]:
        return self._call(self.machine.follow_path, data or FollowPathData())

    def stop_walking(self) -> Optional[bool]:
        return self._call(self.machine.stop_walking)

    def play_animation(self, name: str, loop: bool = False, duration: Optional[float] = None) -> None:
        self._call(self.machine.play_animation, name, loop, duration)

    def on_click(self) -> ActivationResult:
        return self.activate(TriggerSource.CLICK)

    def on_hover(self) -> None:
        if not self.config.only_external_trigger:
            self.host.show_hover_text(self.config.hover_text)

    def on_tick(self, delta_seconds: float, player_position: Optional[Vector3] = None) -> None:
        """Advance the NPC by one frame. Negative deltas count as zero."""
        if self._disposed:
            return
        delta_seconds = max(0.0, delta_seconds)
        if self._dispatching:
            self._deferred.append((self._tick, (delta_seconds, player_position)))
            return
        try:
            self._tick(delta_seconds, player_position)
        finally:
            self._dispatch()

    def _tick(self, dt: float, player_position: Optional[Vector3]) -> None:
        machine = self.machine
        player = Vector3.of(player_position) if player_position is not None else self.host.get_player_position()
        try:
            machine.tick_cooldown(dt)
            machine.tick_animation(dt)
            machine.update_proximity(player)
            if machine.mode is NPCMode.TALKING:
                machine.advance_typing(dt)
            elif machine.mode is NPCMode.FOLLOWPATH:
                machine.advance_path(dt)
            machine.update_facing(player)
        except NPCEngineError as e:
            logger.warning("NPC %s: tick error: %s", self.npc_id, e)

    def dispose(self) -> None:
        """Cancel all live work; no callbacks fire afterwards."""
        self._disposed = True
        self._deferred.clear()
        self.machine.dispose()
