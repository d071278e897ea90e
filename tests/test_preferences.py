import json

from backend.engine import LAST_VALUE_KEY, CalculatorEngine
from backend.preferences import DEFAULT_STORE_NAME, JSONPreferences, MemoryPreferences


def test_memory_preferences_round_trip():
    prefs = MemoryPreferences()
    assert prefs.load("lastValue") is None
    prefs.save("lastValue", "12")
    assert prefs.load("lastValue") == "12"


def test_memory_preferences_copies_initial_values():
    initial = {"lastValue": "3"}
    prefs = MemoryPreferences(initial)
    prefs.save("lastValue", "4")
    assert initial == {"lastValue": "3"}


def test_json_missing_file_loads_nothing(tmp_path):
    prefs = JSONPreferences(tmp_path / "missing.json")
    assert prefs.load("lastValue") is None


def test_json_save_creates_directories(tmp_path):
    path = tmp_path / "nested" / "dir" / "prefs.json"
    prefs = JSONPreferences(path)
    prefs.save("lastValue", "3.5")
    assert json.loads(path.read_text(encoding="utf-8")) == {"lastValue": "3.5"}


def test_json_save_keeps_other_keys(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    JSONPreferences(path).save("lastValue", "8")
    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark", "lastValue": "8"}


def test_json_corrupt_file_is_treated_as_empty(tmp_path, caplog):
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")
    prefs = JSONPreferences(path)
    with caplog.at_level("WARNING", logger="backend.preferences"):
        assert prefs.load("lastValue") is None
    assert "Could not read preferences" in caplog.text
    prefs.save("lastValue", "1")
    assert prefs.load("lastValue") == "1"


def test_json_non_object_is_ignored(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps(["lastValue", "9"]), encoding="utf-8")
    assert JSONPreferences(path).load("lastValue") is None


def test_json_non_string_value_loads_nothing(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"lastValue": 42}), encoding="utf-8")
    assert JSONPreferences(path).load("lastValue") is None


def test_json_save_failure_is_logged_not_raised(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    prefs = JSONPreferences(blocker / "prefs.json")
    with caplog.at_level("ERROR", logger="backend.preferences"):
        prefs.save("lastValue", "5")
    assert "Failed to save preferences" in caplog.text


def test_json_clear_removes_file(tmp_path):
    prefs = JSONPreferences(tmp_path / "prefs.json")
    prefs.save("lastValue", "1")
    prefs.clear()
    assert not prefs.path.exists()
    prefs.clear()


def test_in_directory_uses_store_name(tmp_path):
    prefs = JSONPreferences.in_directory(tmp_path)
    assert prefs.path == tmp_path / f"{DEFAULT_STORE_NAME}.json"


def test_display_survives_restart(tmp_path):
    prefs = JSONPreferences.in_directory(tmp_path)
    engine = CalculatorEngine(prefs)
    for token in ["7", "/", "2", "="]:
        engine.handle_input(token)

    restarted = CalculatorEngine(JSONPreferences.in_directory(tmp_path))
    assert restarted.display == "3.5"
    assert prefs.load(LAST_VALUE_KEY) == "3.5"
