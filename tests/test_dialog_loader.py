"""Tests for loading dialog scripts from dicts and JSON files."""

import json

import jsonschema
import pytest

from npc_engine.dialog.loader import load_dialog, load_dialog_file
from npc_engine.dialog.model import ByIndex, ByName
from npc_engine.errors import DialogError, DuplicateDialogNameError


@pytest.fixture
def script():
    return [
        {"text": "Want a map?", "is_question": True, "portrait": {"path": "images/guide.png",
                                                                 "section": {"source_width": 64, "source_height": 64}},
         "buttons": [
             {"label": "Yes", "go_to": "map", "triggered_actions": "give_map"},
             {"label": "No", "go_to": 2},
         ]},
        {"text": "Here you go.", "name": "map", "audio": "sounds/paper.mp3", "triggered_by_next": "log"},
        {"text": "Suit yourself.", "type_speed": -1, "is_end_of_dialog": True},
    ]


def test_load_dialog(script):
    calls = []
    actions = {"give_map": lambda: calls.append("map"), "log": lambda: calls.append("log")}
    graph = load_dialog(script, actions)

    assert len(graph) == 3
    question = graph.fragment_at(0)
    assert question.is_question
    assert [b.go_to for b in question.buttons] == [ByName("map"), ByIndex(2)]
    assert question.portrait.section.source_width == 64
    question.buttons[0].triggered_actions()
    graph.fragment_at(1).triggered_by_next()
    assert calls == ["map", "log"]
    assert graph.resolve("map") == 1
    assert graph.fragment_at(2).type_speed == -1


def test_schema_rejects_unknown_field(script):
    script[0]["colour"] = "red"
    with pytest.raises(jsonschema.ValidationError):
        load_dialog(script, {"give_map": lambda: None, "log": lambda: None})


def test_schema_requires_text():
    with pytest.raises(jsonschema.ValidationError):
        load_dialog([{"name": "empty"}])


def test_unknown_action(script):
    with pytest.raises(DialogError):
        load_dialog(script, {"log": lambda: None})


def test_duplicate_names():
    with pytest.raises(DuplicateDialogNameError):
        load_dialog([{"text": "a", "name": "x"}, {"text": "b", "name": "x"}])


def test_load_dialog_file(tmp_path):
    path = tmp_path / "guide.json"
    path.write_text(json.dumps({"dialog": [{"text": "Hi"}, {"text": "Bye", "name": "end"}]}), encoding="utf-8")
    graph = load_dialog_file(str(path))
    assert graph.resolve("end") == 1


def test_load_dialog_file_list(tmp_path):
    path = tmp_path / "plain.json"
    path.write_text(json.dumps([{"text": "Only line"}]), encoding="utf-8")
    assert len(load_dialog_file(str(path))) == 1


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dialog_file(str(tmp_path / "nope.json"))


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_dialog_file(str(path))
