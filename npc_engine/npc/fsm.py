"""Finite State Machine for NPC behavior.

States: STANDING (initial), TALKING, FOLLOWPATH.
TALKING owns a DialogSession and FOLLOWPATH a PathWalker; entering one mode
cleanly exits the other first, so the runtime state never holds both.

Host callbacks are not invoked here: they are queued in `pending` and
dispatched by the InteractionController once the transition is complete.
"""

from __future__ import annotations
import dataclasses
import logging
from typing import Any, Callable, List, Optional, Tuple, Union

from ..dialog.graph import DialogGraph
from ..dialog.model import DialogFragment, DialogTarget
from ..dialog.session import DialogSession
from ..dialog.typewriter import TypewriterController
from ..errors import InvalidChoiceError, NoActiveDialogError, UnknownDialogTargetError
from ..path.interpolator import plan_from_data
from ..path.model import FollowPathData, LoopCompleted, PathFinished, PathPlan, WaypointReached
from ..path.runtime import PathWalker
from ..vector import Vector3
from .host import SceneHost
from .models import ActivationResult, NPCConfig, NPCMode, NPCRuntimeState, TriggerSource

logger = logging.getLogger(__name__)

PendingCallback = Tuple[Callable[..., Any], tuple]


class NPCStateMachine:
    """Mode, activation, proximity and cooldown logic of one NPC."""

    def __init__(self, npc_id: str, config: NPCConfig, host: SceneHost,
                 typewriter: Optional[TypewriterController] = None):
        self.npc_id = npc_id
        self.config = config
        self.host = host
        self.typewriter = typewriter or TypewriterController()
        self.dialog: Optional[DialogGraph] = config.dialog
        self.state = NPCRuntimeState()
        self.pending: List[PendingCallback] = []

    @property
    def mode(self) -> NPCMode:
        return self.state.mode

    def _emit(self, handler: Optional[Callable[..., Any]], *args) -> None:
        if handler is not None:
            self.pending.append((handler, args))

    def drain_callbacks(self) -> List[PendingCallback]:
        callbacks, self.pending = self.pending, []
        return callbacks

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def check_activation(self, source: TriggerSource) -> ActivationResult:
        """Outcome an activation from `source` would have right now."""
        if self.config.only_external_trigger and source is not TriggerSource.EXTERNAL:
            return ActivationResult.TRIGGER_FORBIDDEN
        if self.config.only_click_trigger and source is TriggerSource.PROXIMITY:
            return ActivationResult.TRIGGER_FORBIDDEN
        if self.state.cooldown_remaining > 0:
            return ActivationResult.COOLDOWN
        if self.state.mode is NPCMode.TALKING:
            return ActivationResult.ALREADY_ACTIVE
        if self.dialog is None:
            return ActivationResult.NO_DIALOG
        return ActivationResult.ACTIVATED

    def activate(self, source: TriggerSource = TriggerSource.EXTERNAL,
                 start: Optional[Union[DialogTarget, int, str]] = None) -> ActivationResult:
        """Start talking, unless cooldown or trigger restrictions forbid it.

        Raises:
            UnknownDialogTargetError: the start fragment does not exist. The NPC
                keeps its previous mode.
        """
        result = self.check_activation(source)
        if result is not ActivationResult.ACTIVATED:
            logger.info("NPC %s activation from %s ignored: %s", self.npc_id, source.value, result.value)
            return result

        start_index = self.dialog.resolve(start if start is not None else self.config.start_dialog)
        if self.state.mode is NPCMode.FOLLOWPATH:
            self._exit_path()
        self._begin_session(self.dialog, start_index)
        logger.info("NPC %s activated by %s", self.npc_id, source.value)
        self._emit(self.config.on_activate)
        return result

    def talk(self, dialog: DialogGraph, start: Optional[Union[DialogTarget, int, str]] = None,
             source: TriggerSource = TriggerSource.EXTERNAL) -> ActivationResult:
        """Replace the dialog script and start (or restart) talking on it."""
        if self.state.mode is not NPCMode.TALKING:
            previous, self.dialog = self.dialog, dialog
            try:
                result = self.activate(source, start)
            except UnknownDialogTargetError:
                self.dialog = previous
                raise
            if result is not ActivationResult.ACTIVATED:
                self.dialog = previous
            return result

        try:
            start_index = dialog.resolve(start if start is not None else 0)
        except UnknownDialogTargetError:
            self._end_dialog()
            raise
        self.dialog = dialog
        self._begin_session(dialog, start_index)
        return ActivationResult.ACTIVATED

    def deactivate(self) -> bool:
        """End the conversation (if any) and arm the cooldown.

        Returns True when a dialog was actually closed.
        """
        ended = False
        if self.state.mode is NPCMode.TALKING:
            self._end_dialog()
            ended = True
        self.state.cooldown_remaining = self.config.cool_down_duration
        return ended

    def walk_away(self) -> None:
        """Player left the react radius."""
        logger.debug("NPC %s: player walked away", self.npc_id)
        self._emit(self.config.on_walk_away)
        if self.state.mode is NPCMode.TALKING and not self.config.continue_on_walk_away:
            self._end_dialog()

    # ------------------------------------------------------------------
    # Dialog
    # ------------------------------------------------------------------

    def _begin_session(self, dialog: DialogGraph, start_index: int) -> None:
        self.state.session = DialogSession(dialog, self.typewriter, self.config.type_speed)
        self.state.mode = NPCMode.TALKING
        self._show(start_index)

    def _end_dialog(self) -> None:
        self.state.session = None
        self.state.mode = NPCMode.STANDING
        self.state.facing_target = None
        self.state.cooldown_remaining = self.config.cool_down_duration
        self.host.hide_dialog()
        logger.info("NPC %s dialog ended", self.npc_id)

    def _require_session(self) -> DialogSession:
        if self.state.session is None:
            raise NoActiveDialogError(f"NPC {self.npc_id} is not talking")
        return self.state.session

    def _render(self, fragment: DialogFragment, text: str) -> None:
        if fragment.portrait is None and self.config.portrait is not None:
            fragment = dataclasses.replace(fragment, portrait=self.config.portrait)
        self.host.render_dialog(fragment, text, dark_ui=self.config.dark_ui)

    def _show(self, index: int) -> None:
        session = self.state.session
        fragment = session.show(index)
        self._render(fragment, session.revealed_text)
        if self.config.dialog_sound:
            self.host.play_sound(self.config.dialog_sound)
        if fragment.audio:
            self.host.play_sound(fragment.audio)
        if session.active_buttons:
            self.host.render_buttons(session.active_buttons)

    def _after_reveal(self, had_buttons: bool) -> None:
        session = self.state.session
        self._render(session.fragment, session.revealed_text)
        if session.active_buttons and not had_buttons:
            self.host.render_buttons(session.active_buttons)

    def advance_typing(self, dt: float) -> None:
        session = self.state.session
        if session is None or not session.is_typing:
            return
        before = len(session.revealed_text)
        had_buttons = bool(session.active_buttons)
        session.advance_time(dt)
        if len(session.revealed_text) != before:
            self._after_reveal(had_buttons)

    def skip_typing(self) -> str:
        """Reveal the whole current line at once."""
        session = self._require_session()
        if session.is_typing:
            had_buttons = bool(session.active_buttons)
            session.skip()
            self._after_reveal(had_buttons)
        return session.revealed_text

    def advance_dialog(self, choice: Optional[int] = None) -> bool:
        """Move the conversation forward.

        Args:
            choice: Button index, mandatory on question fragments.

        Returns:
            False when the fragment is a fixed screen (no default navigation),
            True otherwise.

        Raises:
            InvalidChoiceError: missing/out of range choice; session unchanged.
            UnknownDialogTargetError: the button target does not resolve; the
                dialog is ended and the NPC returns to STANDING.
        """
        session = self._require_session()
        fragment = session.fragment

        if fragment.is_question:
            if choice is None or isinstance(choice, bool) or not 0 <= choice < len(fragment.buttons):
                raise InvalidChoiceError(
                    f"Fragment {fragment.label!r} needs a choice in 0..{len(fragment.buttons) - 1}, got {choice!r}"
                )
            button = fragment.buttons[choice]
            try:
                next_index = session.graph.resolve(button.go_to)
            except UnknownDialogTargetError:
                logger.warning("NPC %s: button %r has no valid target", self.npc_id, button.label)
                self._end_dialog()
                raise
            self._emit(button.triggered_actions)
        else:
            if choice is not None:
                raise InvalidChoiceError(f"Fragment {fragment.label!r} has no buttons")
            if fragment.is_fixed_screen:
                logger.debug("NPC %s: fixed screen %r ignores next", self.npc_id, fragment.label)
                return False
            self._emit(fragment.triggered_by_next)
            next_index = session.current_index + 1

        if fragment.is_end_of_dialog or next_index >= len(session.graph):
            self._end_dialog()
        else:
            self._show(next_index)
        return True

    # ------------------------------------------------------------------
    # Path following
    # ------------------------------------------------------------------

    def follow_path(self, data: FollowPathData) -> PathPlan:
        """Start walking a new plan, replacing any live one.

        Raises:
            InvalidPathError: the NPC keeps its previous mode.
        """
        plan = plan_from_data(data, default_path=self.config.path,
                              default_speed=self.config.walking_speed)
        if self.state.mode is NPCMode.TALKING:
            self._end_dialog()
        walker = PathWalker(plan)
        self.state.walker = walker
        self.state.path_data = data
        self.state.mode = NPCMode.FOLLOWPATH
        self.state.animation_remaining = None
        self.host.set_npc_position(walker.position)
        if plan.segments:
            self.host.set_npc_facing(walker.direction)
        self.host.play_animation(self.config.walking_anim, True)
        logger.info("NPC %s following path: %d points, loop=%s", self.npc_id, len(plan.points), plan.loop)
        return plan

    def _exit_path(self) -> None:
        self.state.walker = None
        self.state.path_data = None
        self.state.mode = NPCMode.STANDING
        self.host.play_animation(self.config.idle_anim, True)

    def stop_walking(self) -> bool:
        """Abandon the live plan without firing its finish callback."""
        if self.state.mode is not NPCMode.FOLLOWPATH:
            return False
        self._exit_path()
        return True

    def advance_path(self, dt: float) -> None:
        walker, data = self.state.walker, self.state.path_data
        if walker is None:
            return
        events = walker.advance(dt)
        self.host.set_npc_position(walker.position)
        if walker.plan.segments and not walker.finished:
            self.host.set_npc_facing(walker.direction)
        for event in events:
            if isinstance(event, WaypointReached):
                self._emit(data.on_reached_point, event.waypoint)
            elif isinstance(event, LoopCompleted):
                self._emit(data.on_loop, event.lap)
            elif isinstance(event, PathFinished):
                self._exit_path()
                self._emit(data.on_finish)

    # ------------------------------------------------------------------
    # Tick helpers
    # ------------------------------------------------------------------

    def tick_cooldown(self, dt: float) -> None:
        if self.state.cooldown_remaining > 0:
            self.state.cooldown_remaining = max(0.0, self.state.cooldown_remaining - dt)

    def update_proximity(self, player_position: Vector3) -> Optional[str]:
        """Compare the player distance with the react radius.

        Returns "walk_away", "activate" or None.
        """
        distance = self.host.get_npc_position().distance_to(player_position)
        was_inside = self.state.player_inside
        inside = distance <= self.config.react_distance
        self.state.player_distance = distance
        self.state.player_inside = inside

        if was_inside and not inside:
            self.walk_away()
            return "walk_away"
        if inside and not was_inside:
            if self.config.only_external_trigger or self.config.only_click_trigger:
                return None
            if self.activate(TriggerSource.PROXIMITY) is ActivationResult.ACTIVATED:
                return "activate"
        return None

    def update_facing(self, player_position: Vector3) -> None:
        if self.state.mode is not NPCMode.TALKING or not self.config.face_user:
            return
        direction = (player_position - self.host.get_npc_position()).normalized()
        self.state.facing_target = player_position
        self.host.set_npc_facing(direction)

    def play_animation(self, name: str, loop: bool = False, duration: Optional[float] = None) -> None:
        """Play an animation; a one-shot with `duration` falls back to idle afterwards."""
        self.host.play_animation(name, loop)
        self.state.animation_remaining = duration if (not loop and duration) else None

    def tick_animation(self, dt: float) -> None:
        if self.state.animation_remaining is None:
            return
        self.state.animation_remaining -= dt
        if self.state.animation_remaining <= 0:
            self.state.animation_remaining = None
            if self.state.mode is not NPCMode.FOLLOWPATH:
                self.host.play_animation(self.config.idle_anim, True)

    def dispose(self) -> None:
        """Drop all live work without firing callbacks (NPC unregistered)."""
        if self.state.mode is NPCMode.TALKING:
            self.host.hide_dialog()
        self.state = NPCRuntimeState()
        self.pending = []
