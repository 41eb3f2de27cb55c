"""Tests for NPC registry."""

import pytest

from conftest import FAR_AWAY, RecordingHost
from npc_engine.npc.models import NPCData, NPCMode
from npc_engine.npc.registry import NPCRegistry
from npc_engine.path.model import FollowPathData
from npc_engine.vector import Vector3


@pytest.fixture
def registry():
    return NPCRegistry()


class TestNPCRegistry:
    """Registration lifecycle and per-frame ticking."""

    def test_register_and_get(self, registry, linear_dialog):
        npc = registry.register_npc("guide", RecordingHost(), NPCData(dialog=linear_dialog))
        assert "guide" in registry
        assert len(registry) == 1
        assert registry.get_npc("guide") is npc
        assert registry.get_npc("ghost") is None

    def test_duplicate_id(self, registry):
        registry.register_npc("guide", RecordingHost())
        with pytest.raises(ValueError):
            registry.register_npc("guide", RecordingHost())

    def test_states_are_independent(self, registry, linear_dialog):
        a = registry.register_npc("a", RecordingHost(), NPCData(dialog=linear_dialog))
        b = registry.register_npc("b", RecordingHost(), NPCData(dialog=linear_dialog))
        a.activate()
        assert a.mode is NPCMode.TALKING
        assert b.mode is NPCMode.STANDING
        assert registry.get_talking_npcs() == [a]

    def test_tick_reaches_every_npc(self, registry):
        finished = []
        for npc_id in ("a", "b"):
            npc = registry.register_npc(npc_id, RecordingHost())
            npc.follow_path(FollowPathData(path=[(0, 0, 0), (1, 0, 0)], speed=1.0,
                                           on_finish=lambda n=npc_id: finished.append(n)))
        assert len(registry.get_walking_npcs()) == 2
        registry.tick(2.0, FAR_AWAY)
        assert sorted(finished) == ["a", "b"]
        assert registry.get_walking_npcs() == []

    def test_npc_unregistered_during_tick_is_skipped(self, registry, linear_dialog):
        host_a, host_b = RecordingHost(), RecordingHost()
        a = registry.register_npc("a", host_a, NPCData(dialog=linear_dialog,
                                                       on_activate=lambda: registry.unregister_npc("b")))
        b = registry.register_npc("b", host_b, NPCData(dialog=linear_dialog))
        registry.tick(0.0, Vector3(1, 0, 0))
        assert a.mode is NPCMode.TALKING
        assert "b" not in registry
        assert b.mode is NPCMode.STANDING
        assert host_b.of("render_dialog") == []

    def test_unregister_disposes(self, registry, linear_dialog):
        host = RecordingHost()
        npc = registry.register_npc("guide", host, NPCData(dialog=linear_dialog))
        npc.activate()
        assert registry.unregister_npc("guide") is True
        assert "guide" not in registry
        assert host.of("hide_dialog") == [()]
        assert npc.mode is NPCMode.STANDING
        assert registry.unregister_npc("guide") is False
