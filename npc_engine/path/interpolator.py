"""Path interpolation: turn waypoints into a timed, optionally curved PathPlan.

The curve is a uniform Catmull-Rom spline: each span between two waypoints is a
cubic whose tangents come from the neighbouring waypoints, so the curve passes
through every authored point. It is sampled evenly in the spline parameter, not
in arc length, so walking speed varies slightly along tight bends.

Sampling produces exactly ``4 * N`` points for ``N`` waypoints:
- looping paths form a closed ring of N spans, 4 samples each; waypoint ``i``
  sits at index ``4 * i``;
- open paths spread ``4N - 1`` intervals over the N - 1 spans as evenly as
  possible (earlier spans take the remainder) and end on the last waypoint.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from ..config import CURVE_POINTS_PER_WAYPOINT, get_walking_speed
from ..errors import InvalidPathError
from ..vector import Vector3, to_vectors
from .model import FollowPathData, PathPlan, PathSegment

logger = logging.getLogger(__name__)


def catmull_rom(p0: Vector3, p1: Vector3, p2: Vector3, p3: Vector3, t: float) -> Vector3:
    """Point at parameter t in [0, 1] on the span p1 -> p2."""
    t2 = t * t
    t3 = t2 * t
    return (
        p1 * 2.0
        + (p2 - p0) * t
        + (p0 * 2.0 - p1 * 5.0 + p2 * 4.0 - p3) * t2
        + (p1 * 3.0 - p0 - p2 * 3.0 + p3) * t3
    ) * 0.5


def _span_intervals(spans: int, intervals: int) -> List[int]:
    base, extra = divmod(intervals, spans)
    return [base + (1 if k < extra else 0) for k in range(spans)]


def curve_points(waypoints: Sequence[Vector3], closed: bool) -> Tuple[List[Vector3], List[int]]:
    """Resample waypoints into a smooth curve.

    Returns:
        (points, waypoint_indices) with ``len(points) == 4 * len(waypoints)``.
    """
    n = len(waypoints)
    if n < 2:
        raise InvalidPathError("A curved path needs at least 2 waypoints")
    total = CURVE_POINTS_PER_WAYPOINT * n

    if closed:
        def neighbour(i):
            return waypoints[i % n]
        samples = [CURVE_POINTS_PER_WAYPOINT] * n
        spans = n
    else:
        # Open ends duplicate the first/last point as phantom neighbours
        def neighbour(i):
            return waypoints[max(0, min(n - 1, i))]
        spans = n - 1
        samples = _span_intervals(spans, total - 1)

    points: List[Vector3] = []
    indices: List[int] = []
    for k in range(spans):
        indices.append(len(points))
        p0, p1, p2, p3 = neighbour(k - 1), neighbour(k), neighbour(k + 1), neighbour(k + 2)
        count = samples[k]
        for j in range(count):
            if j == 0:
                points.append(p1)
            else:
                points.append(catmull_rom(p0, p1, p2, p3, j / count))
    if not closed:
        indices.append(len(points))
        points.append(waypoints[-1])
    return points, indices


def _segment_pairs(count: int, start: int, loop: bool) -> List[Tuple[int, int]]:
    pairs = [(i, i + 1) for i in range(start, count - 1)]
    if loop and count > 1:
        pairs.append((count - 1, start))
    return pairs


def build_plan(
    waypoints: Sequence,
    *,
    speed: Optional[float] = None,
    total_duration: Optional[float] = None,
    loop: bool = False,
    curve: bool = False,
    starting_point: int = 0,
    default_speed: Optional[float] = None,
) -> PathPlan:
    """Build a deterministic PathPlan.

    Args:
        waypoints: Authored points (Vector3 or (x, y, z) tuples).
        speed: Walking speed in m/s.
        total_duration: Seconds for one lap; overrides `speed`.
        loop: Wrap from the last point back to `starting_point` forever.
        curve: Resample through a Catmull-Rom curve.
        starting_point: Index into the (possibly curved) point sequence.
        default_speed: Speed used when neither `speed` nor `total_duration` is
            given. Defaults to the configured walking speed.

    Raises:
        InvalidPathError: on empty input, a curve over fewer than 2 points, an
            out of range starting point, a non-positive speed/duration, or a
            looping path of zero length.
    """
    pts = to_vectors(waypoints or [])
    if not pts:
        raise InvalidPathError("A path needs at least 1 waypoint")

    if curve:
        points, waypoint_indices = curve_points(pts, closed=loop)
    else:
        points, waypoint_indices = pts, list(range(len(pts)))

    if isinstance(starting_point, bool) or not isinstance(starting_point, int):
        raise InvalidPathError(f"Starting point must be an integer, got {starting_point!r}")
    if not 0 <= starting_point < len(points):
        raise InvalidPathError(
            f"Starting point {starting_point} out of range (0..{len(points) - 1})"
        )

    pairs = _segment_pairs(len(points), starting_point, loop)
    lengths = [points[a].distance_to(points[b]) for a, b in pairs]
    path_length = sum(lengths)

    if total_duration is not None:
        if total_duration <= 0:
            raise InvalidPathError(f"Total duration must be > 0, got {total_duration}")
        if path_length > 0:
            durations = [total_duration * length / path_length for length in lengths]
        else:
            durations = [total_duration / len(pairs)] * len(pairs) if pairs else []
    else:
        walk_speed = speed if speed is not None else (
            default_speed if default_speed is not None else get_walking_speed()
        )
        if walk_speed <= 0:
            raise InvalidPathError(f"Speed must be > 0, got {walk_speed}")
        durations = [length / walk_speed for length in lengths]

    if loop and pairs and sum(durations) <= 0:
        raise InvalidPathError("A looping path must have a non-zero length")

    segments = tuple(
        PathSegment(a, b, points[a], points[b], length, duration)
        for (a, b), length, duration in zip(pairs, lengths, durations)
    )
    logger.debug(
        "Built path plan: %d waypoints -> %d points, %d segments, %.2fs per lap",
        len(pts), len(points), len(segments), sum(durations),
    )
    return PathPlan(
        points=tuple(points),
        waypoint_indices=tuple(waypoint_indices),
        segments=segments,
        loop=loop,
        starting_point=starting_point,
        curved=curve,
    )


def plan_from_data(
    data: FollowPathData,
    default_path: Optional[Sequence] = None,
    default_speed: Optional[float] = None,
) -> PathPlan:
    """Build a plan from a FollowPathData request.

    A request without its own path walks `default_path`, looping unless the
    request says otherwise.
    """
    path = data.path
    loop = data.loop
    if path is None:
        path = default_path
        if loop is None:
            loop = True
    if path is None:
        raise InvalidPathError("No path given and the NPC has no default path")
    return build_plan(
        path,
        speed=data.speed,
        total_duration=data.total_duration,
        loop=bool(loop),
        curve=data.curve,
        starting_point=data.starting_point,
        default_speed=default_speed,
    )
