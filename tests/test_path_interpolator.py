"""Tests for path interpolation into timed plans."""

import pytest

from npc_engine.errors import InvalidPathError
from npc_engine.path.interpolator import build_plan, catmull_rom, curve_points, plan_from_data
from npc_engine.path.model import FollowPathData
from npc_engine.vector import Vector3

L_PATH = [(0, 0, 0), (3, 0, 0), (3, 4, 0)]
SQUARE = [(0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1)]


class TestStraightPlans:
    """Plans without curve resampling."""

    def test_total_duration_split_by_length(self):
        """Segment durations are proportional to length and sum to total_duration."""
        plan = build_plan(L_PATH, total_duration=14)
        assert [s.duration for s in plan.segments] == pytest.approx([6.0, 8.0])
        assert plan.total_duration == pytest.approx(14.0)

    def test_speed(self):
        plan = build_plan(L_PATH, speed=2)
        assert [s.duration for s in plan.segments] == pytest.approx([1.5, 2.0])

    def test_total_duration_overrides_speed(self):
        plan = build_plan(L_PATH, speed=100, total_duration=7)
        assert plan.total_duration == pytest.approx(7.0)

    def test_default_speed_fallback(self):
        plan = build_plan(L_PATH, default_speed=1)
        assert [s.duration for s in plan.segments] == pytest.approx([3.0, 4.0])

    def test_configured_walking_speed(self, monkeypatch):
        """Without speed or default_speed the configured walking speed applies."""
        monkeypatch.setenv("NPC_WALKING_SPEED", "4")
        plan = build_plan(L_PATH)
        assert [s.duration for s in plan.segments] == pytest.approx([0.75, 1.0])

    def test_points_are_the_waypoints(self):
        plan = build_plan(L_PATH, speed=1)
        assert plan.points == tuple(Vector3.of(p) for p in L_PATH)
        assert plan.waypoint_indices == (0, 1, 2)
        assert plan.curved is False

    def test_loop_adds_closing_segment(self):
        plan = build_plan(SQUARE, speed=1, loop=True)
        assert len(plan.segments) == 4
        assert (plan.segments[-1].start_index, plan.segments[-1].end_index) == (3, 0)
        assert plan.total_duration == pytest.approx(4.0)

    def test_loop_total_duration(self):
        plan = build_plan(SQUARE, total_duration=10, loop=True)
        assert plan.total_duration == pytest.approx(10.0)

    def test_starting_point_skips_earlier_segments(self):
        plan = build_plan(L_PATH, speed=1, starting_point=1)
        assert len(plan.segments) == 1
        assert plan.start_position == Vector3(3, 0, 0)

    def test_loop_wraps_to_starting_point(self):
        plan = build_plan(SQUARE, speed=1, loop=True, starting_point=1)
        assert (plan.segments[-1].start_index, plan.segments[-1].end_index) == (3, 1)

    def test_single_point_is_legal(self):
        """A single waypoint is a degenerate plan with no motion."""
        plan = build_plan([(1, 2, 3)])
        assert plan.points == (Vector3(1, 2, 3),)
        assert plan.segments == ()
        assert plan.total_duration == 0

    def test_zero_length_path_with_duration(self):
        plan = build_plan([(0, 0, 0), (0, 0, 0)], total_duration=2)
        assert plan.total_duration == pytest.approx(2.0)


class TestCurvedPlans:
    """Catmull-Rom resampling."""

    @pytest.mark.parametrize("count", [2, 3, 4, 5, 7])
    @pytest.mark.parametrize("loop", [False, True])
    def test_four_points_per_waypoint(self, count, loop):
        """N waypoints give 4N points and every waypoint sits at its index."""
        waypoints = [Vector3(i * 2.0, 0, (i % 2) * 3.0) for i in range(count)]
        plan = build_plan(waypoints, speed=1, curve=True, loop=loop)
        assert len(plan.points) == 4 * count
        assert len(plan.waypoint_indices) == count
        for waypoint, index in zip(waypoints, plan.waypoint_indices):
            assert plan.points[index] == waypoint

    def test_open_curve_indices(self):
        plan = build_plan([(0, 0, 0), (4, 0, 0), (8, 0, 0)], speed=1, curve=True)
        assert len(plan.points) == 12
        assert plan.waypoint_indices == (0, 6, 11)

    def test_closed_curve_indices(self):
        plan = build_plan([(0, 0, 0), (4, 0, 0), (4, 0, 4)], speed=1, curve=True, loop=True)
        assert plan.waypoint_indices == (0, 4, 8)
        assert len(plan.segments) == 12

    def test_collinear_curve_stays_on_line(self):
        plan = build_plan([(0, 0, 0), (1, 0, 0), (2, 0, 0), (3, 0, 0)], speed=1, curve=True)
        assert all(p.y == pytest.approx(0) and p.z == pytest.approx(0) for p in plan.points)
        xs = [p.x for p in plan.points]
        assert xs == sorted(xs)

    def test_curve_durations_sum_to_total(self):
        plan = build_plan(SQUARE, total_duration=12, curve=True, loop=True)
        assert plan.total_duration == pytest.approx(12.0)

    def test_starting_point_indexes_curved_sequence(self):
        plan = build_plan(L_PATH, speed=1, curve=True, starting_point=10)
        assert plan.starting_point == 10
        assert len(plan.segments) == 1

    def test_catmull_rom_endpoints(self):
        p0, p1, p2, p3 = Vector3(0, 0, 0), Vector3(1, 1, 0), Vector3(2, 0, 0), Vector3(3, 1, 0)
        assert catmull_rom(p0, p1, p2, p3, 0.0).is_close(p1)
        assert catmull_rom(p0, p1, p2, p3, 1.0).is_close(p2)

    def test_curve_points_helper(self):
        points, indices = curve_points([Vector3(0, 0, 0), Vector3(1, 0, 0)], closed=False)
        assert len(points) == 8
        assert indices == [0, 7]


class TestInvalidPaths:
    """InvalidPathError cases."""

    def test_empty_path(self):
        with pytest.raises(InvalidPathError):
            build_plan([])

    def test_curve_needs_two_points(self):
        with pytest.raises(InvalidPathError):
            build_plan([(0, 0, 0)], curve=True)

    @pytest.mark.parametrize("start", [-1, 3, 99])
    def test_starting_point_out_of_range(self, start):
        with pytest.raises(InvalidPathError):
            build_plan(L_PATH, starting_point=start)

    def test_curved_starting_point_out_of_range(self):
        with pytest.raises(InvalidPathError):
            build_plan(L_PATH, curve=True, starting_point=12)

    def test_non_positive_speed(self):
        with pytest.raises(InvalidPathError):
            build_plan(L_PATH, speed=0)

    def test_non_positive_duration(self):
        with pytest.raises(InvalidPathError):
            build_plan(L_PATH, total_duration=0)

    def test_zero_length_loop(self):
        with pytest.raises(InvalidPathError):
            build_plan([(1, 1, 1), (1, 1, 1)], speed=1, loop=True)


class TestPlanFromData:
    """FollowPathData resolution."""

    def test_uses_request_path(self):
        plan = plan_from_data(FollowPathData(path=L_PATH, speed=1))
        assert plan.loop is False
        assert len(plan.points) == 3

    def test_default_path_loops(self):
        plan = plan_from_data(FollowPathData(speed=1), default_path=SQUARE)
        assert plan.loop is True
        assert len(plan.segments) == 4

    def test_default_path_explicit_no_loop(self):
        plan = plan_from_data(FollowPathData(speed=1, loop=False), default_path=SQUARE)
        assert plan.loop is False

    def test_default_speed_from_npc(self):
        plan = plan_from_data(FollowPathData(path=L_PATH), default_speed=0.5)
        assert plan.total_duration == pytest.approx(14.0)

    def test_no_path_at_all(self):
        with pytest.raises(InvalidPathError):
            plan_from_data(FollowPathData())
