"""Path-following data models.

`FollowPathData` is the caller-facing request (every field optional), `PathPlan`
the immutable, resampled and timed result produced by the interpolator.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..vector import Vector3


@dataclass
class FollowPathData:
    """Request to walk a path.

    Args:
        path: Waypoints to walk over. None reuses the NPC's default path.
        speed: Walking speed (m/s). Falls back to the NPC's walking speed.
        total_duration: Seconds the whole lap should take; overrides `speed`.
        loop: Walk in circles. None means True when the NPC's default path is
            reused, False otherwise.
        curve: Trace a smooth curve through the waypoints (4 points per waypoint).
        starting_point: Index into the (possibly curved) point sequence.
        on_finish: Called once when a non-looping path completes.
        on_reached_point: Called with the waypoint index every time an authored
            waypoint is reached.
        on_loop: Called with the lap count every time a looping path wraps.
    """
    path: Optional[List[Vector3]] = None
    speed: Optional[float] = None
    total_duration: Optional[float] = None
    loop: Optional[bool] = None
    curve: bool = False
    starting_point: int = 0
    on_finish: Optional[Callable[[], None]] = None
    on_reached_point: Optional[Callable[[int], None]] = None
    on_loop: Optional[Callable[[int], None]] = None


@dataclass(frozen=True)
class PathSegment:
    """One straight piece of the walked polyline."""
    start_index: int
    end_index: int
    start: Vector3
    end: Vector3
    length: float
    duration: float

    def position_at(self, elapsed: float) -> Vector3:
        if self.duration <= 0:
            return self.end
        return self.start.lerp(self.end, min(1.0, elapsed / self.duration))

    @property
    def direction(self) -> Vector3:
        return (self.end - self.start).normalized()


@dataclass(frozen=True)
class PathPlan:
    """Resampled, timed sequence of points actually walked.

    `segments` lists one lap in walk order: from `starting_point` to the last
    point, plus (when looping) the closing segment back to `starting_point`.
    `waypoint_indices[i]` is the position of authored waypoint `i` in `points`.
    """
    points: Tuple[Vector3, ...]
    waypoint_indices: Tuple[int, ...]
    segments: Tuple[PathSegment, ...]
    loop: bool = False
    starting_point: int = 0
    curved: bool = False

    @property
    def total_duration(self) -> float:
        """Duration of one lap (or of the whole path when not looping)."""
        return sum(s.duration for s in self.segments)

    @property
    def start_position(self) -> Vector3:
        return self.points[self.starting_point]

    def waypoint_at(self, point_index: int) -> Optional[int]:
        """Authored waypoint number located at `point_index`, or None for curve points."""
        try:
            return self.waypoint_indices.index(point_index)
        except ValueError:
            return None


# Events produced while walking a plan, dispatched by the state machine.

@dataclass(frozen=True)
class WaypointReached:
    waypoint: int
    point_index: int


@dataclass(frozen=True)
class LoopCompleted:
    lap: int


@dataclass(frozen=True)
class PathFinished:
    pass
