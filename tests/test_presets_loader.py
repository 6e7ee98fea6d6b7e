import json
import logging

import pytest

from orrery.constants import AU
from orrery.presets import SOLAR_SYSTEM
from orrery.presets_loader import PresetError, list_templates, load_template, parse_template


def write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return path


def test_builtin_solar_system_table():
    assert [s.name for s in SOLAR_SYSTEM] == [
        "Sun", "Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn", "Uranus", "Neptune",
    ]
    sun = SOLAR_SYSTEM[0]
    assert sun.mass == 1.98892e30 and sun.position == (0.0, 0.0) and sun.velocity == (0.0, 0.0)
    for planet in SOLAR_SYSTEM[1:]:
        assert planet.position[1] == 0.0 and planet.velocity[0] == 0.0
        assert 0 < planet.size
    assert SOLAR_SYSTEM[3].size == pytest.approx(6371.0 / 69634.0 * 75.0)


def test_load_template_in_au(tmp_path):
    write(tmp_path, "pair.json", {
        "name": "Pair",
        "units": "au",
        "bodies": [
            {"name": "Star", "mass": 2e30, "position": [0, 0], "velocity": [0, 0], "size": 40, "color": [255, 255, 0]},
            {"name": "Rock", "mass": 1e24, "position": [2, 0], "velocity": [0, 20000], "color": [999, -5, 10]},
        ],
    })
    specs, display = load_template("pair.json", directory=str(tmp_path))
    assert display == "Pair"
    assert specs[1].position == (2 * AU, 0.0)
    assert specs[1].velocity == (0.0, 20000.0)
    assert specs[1].color == (255, 0, 10)
    assert specs[1].size == 5.0


def test_malformed_bodies_are_skipped(tmp_path, caplog):
    write(tmp_path, "mixed.json", {
        "bodies": [
            {"name": "NoMass", "position": [0, 0], "velocity": [0, 0]},
            {"name": "Negative", "mass": -1, "position": [0, 0], "velocity": [0, 0]},
            {"name": "Good", "mass": 1, "position": [1, 1], "velocity": [0, 0]},
        ],
    })
    with caplog.at_level(logging.WARNING, logger="orrery.presets_loader"):
        specs, display = load_template(str(tmp_path / "mixed.json"))
    assert [s.name for s in specs] == ["Good"]
    assert display == "mixed"
    assert "NoMass" not in [s.name for s in specs]
    assert len([r for r in caplog.records if "skipping body" in r.getMessage()]) == 2


def test_unreadable_templates_raise(tmp_path):
    write(tmp_path, "broken.json", "{not json")
    with pytest.raises(PresetError):
        load_template("broken.json", directory=str(tmp_path))
    with pytest.raises(PresetError):
        load_template("missing.json", directory=str(tmp_path))
    with pytest.raises(PresetError):
        parse_template({"bodies": []})
    with pytest.raises(PresetError):
        parse_template({"units": "parsec", "bodies": []})
    with pytest.raises(PresetError):
        parse_template({"bodies": None})
    with pytest.raises(PresetError):
        parse_template({"bodies": 5})
    with pytest.raises(PresetError):
        parse_template([{"name": "Sun"}])


def test_list_templates(tmp_path):
    write(tmp_path, "b.json", {"name": "Bravo", "bodies": []})
    write(tmp_path, "a.json", {"bodies": []})
    write(tmp_path, "broken.json", "[")
    write(tmp_path, "notes.txt", "ignored")
    assert list_templates(str(tmp_path)) == [("a.json", "a"), ("b.json", "Bravo")]
    assert list_templates(str(tmp_path / "nowhere")) == []


def test_shipped_templates_load():
    names = [fn for fn, _ in list_templates()]
    assert "inner_planets.json" in names
    for fn in names:
        specs, _ = load_template(fn)
        assert specs
