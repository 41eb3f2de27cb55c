"""Runtime walker stepping a PathPlan with accumulated elapsed time."""

from __future__ import annotations
from typing import List

from ..vector import Vector3
from .model import LoopCompleted, PathFinished, PathPlan, WaypointReached


class PathWalker:
    """Walk progress over one immutable PathPlan.

    The walker never touches the scene: `advance` returns the events crossed
    during the step, in path order, and updates `position`/`direction`.
    """

    def __init__(self, plan: PathPlan):
        self.plan = plan
        self.segment_index = 0
        self.segment_elapsed = 0.0
        self.laps = 0
        self.finished = False
        self.position: Vector3 = plan.start_position
        self.direction: Vector3 = plan.segments[0].direction if plan.segments else Vector3()

    @property
    def current_segment(self):
        if self.finished or not self.plan.segments:
            return None
        return self.plan.segments[self.segment_index]

    def advance(self, dt: float) -> List[object]:
        """Move forward by `dt` seconds and return the events crossed."""
        events: List[object] = []
        if self.finished:
            return events
        segments = self.plan.segments
        if not segments:
            # Single point (or starting on the last point): nothing to walk
            if not self.plan.loop:
                self.finished = True
                events.append(PathFinished())
            return events

        remaining = self.segment_elapsed + max(0.0, dt)
        while True:
            seg = segments[self.segment_index]
            if remaining < seg.duration:
                self.segment_elapsed = remaining
                self.position = seg.position_at(remaining)
                self.direction = seg.direction
                break

            remaining -= seg.duration
            self.position = seg.end
            waypoint = self.plan.waypoint_at(seg.end_index)
            if waypoint is not None:
                events.append(WaypointReached(waypoint, seg.end_index))

            self.segment_index += 1
            if self.segment_index < len(segments):
                continue
            if self.plan.loop:
                self.laps += 1
                self.segment_index = 0
                events.append(LoopCompleted(self.laps))
                continue
            self.segment_index = len(segments) - 1
            self.segment_elapsed = seg.duration
            self.finished = True
            events.append(PathFinished())
            break
        return events
