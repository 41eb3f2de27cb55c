"""Tests for environment driven configuration."""

from npc_engine import config


def test_type_speed_default(monkeypatch):
    monkeypatch.delenv("NPC_TYPE_SPEED", raising=False)
    assert config.get_type_speed() == 30.0


def test_type_speed_invalid_falls_back(monkeypatch):
    for raw in ("0", "-3", "fast"):
        monkeypatch.setenv("NPC_TYPE_SPEED", raw)
        assert config.get_type_speed() == config.DEFAULT_TYPE_SPEED


def test_type_speed_instant(monkeypatch):
    monkeypatch.setenv("NPC_TYPE_SPEED", "-1")
    assert config.get_type_speed() == config.INSTANT_TYPE_SPEED


def test_float_env_minimum(monkeypatch):
    monkeypatch.setenv("NPC_REACT_DISTANCE", "-2")
    assert config.get_react_distance() == config.DEFAULT_REACT_DISTANCE
    monkeypatch.setenv("NPC_REACT_DISTANCE", "9.5")
    assert config.get_react_distance() == 9.5


def test_walking_speed_must_be_positive(monkeypatch):
    monkeypatch.setenv("NPC_WALKING_SPEED", "0")
    assert config.get_walking_speed() == config.DEFAULT_WALKING_SPEED


def test_bool_env(monkeypatch):
    monkeypatch.setenv("NPC_FACE_USER", "off")
    assert config.get_face_user() is False
    monkeypatch.setenv("NPC_FACE_USER", "YES")
    assert config.get_face_user() is True


def test_blank_string_env(monkeypatch):
    monkeypatch.setenv("NPC_IDLE_ANIM", "   ")
    assert config.get_idle_anim() == "Idle"


def test_log_level_upper(monkeypatch):
    monkeypatch.setenv("NPC_LOG_LEVEL", "debug")
    assert config.get_log_level() == "DEBUG"
