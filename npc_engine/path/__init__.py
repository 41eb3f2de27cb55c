"""Path following: interpolation into timed plans and their runtime walker."""

from .model import (
    FollowPathData, PathPlan, PathSegment,
    WaypointReached, LoopCompleted, PathFinished,
)
from .interpolator import build_plan, plan_from_data, curve_points, catmull_rom
from .runtime import PathWalker

__all__ = [
    'FollowPathData', 'PathPlan', 'PathSegment',
    'WaypointReached', 'LoopCompleted', 'PathFinished',
    'build_plan', 'plan_from_data', 'curve_points', 'catmull_rom',
    'PathWalker',
]
