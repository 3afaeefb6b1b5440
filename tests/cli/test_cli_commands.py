# SPDX-License-Identifier: Apache-2.0
import json
import os

import pytest

from treatyglobe.cli import main


def _coords(tmp_path, mapping):
    path = tmp_path / "coords_cli.json"
    path.write_text(json.dumps(mapping), encoding="utf-8")
    return str(path)


def test_markers_command_writes_projected_positions(tmp_path, treaty_csv, coords_json):
    out = tmp_path / "out" / "markers.json"
    rc = main(
        ["markers", "-i", str(treaty_csv), "--coords", str(coords_json), "-o", str(out)]
    )
    assert rc == 0
    markers = json.loads(out.read_text(encoding="utf-8"))
    assert [m["record"]["country"] for m in markers] == ["France", "Japan", "Brazil"]
    for m in markers:
        assert sum(c * c for c in m["position"]) ** 0.5 == pytest.approx(5.1)


def test_markers_command_honours_radius_flags(tmp_path, treaty_csv, coords_json):
    out = tmp_path / "markers.json"
    rc = main(
        [
            "markers",
            "-i",
            str(treaty_csv),
            "--coords",
            str(coords_json),
            "--radius",
            "1",
            "--marker-offset",
            "0",
            "-o",
            str(out),
        ]
    )
    assert rc == 0
    first = json.loads(out.read_text(encoding="utf-8"))[0]
    assert sum(c * c for c in first["position"]) ** 0.5 == pytest.approx(1.0)


def test_pick_command_reports_marker_under_pointer(tmp_path, treaty_csv):
    coords = _coords(tmp_path, {"Japan": [0, 90], "France": [0, 0]})
    out = tmp_path / "pick.json"
    rc = main(
        [
            "pick",
            "-i",
            str(treaty_csv),
            "--coords",
            coords,
            "--x",
            "400",
            "--y",
            "300",
            "--width",
            "800",
            "--height",
            "600",
            "-o",
            str(out),
        ]
    )
    assert rc == 0
    tooltip = json.loads(out.read_text(encoding="utf-8"))
    assert tooltip["visible"] is True
    assert tooltip["left"] == 410
    assert tooltip["top"] == 290
    assert tooltip["record"]["country"] == "Japan"
    assert tooltip["lines"][0] == "Japan"


def test_pick_command_miss(tmp_path, treaty_csv, capsys):
    coords = _coords(tmp_path, {"Japan": [0, 90]})
    rc = main(
        ["pick", "-i", str(treaty_csv), "--coords", coords, "--x", "3", "--y", "3"]
    )
    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {"visible": False}


def test_globe_command_builds_bundle(tmp_path, treaty_csv, coords_json):
    out_dir = tmp_path / "bundle"
    rc = main(
        [
            "globe",
            "-i",
            str(treaty_csv),
            "--coords",
            str(coords_json),
            "-o",
            str(out_dir),
            "--title",
            "양자조약",
            "--no-rotate",
        ]
    )
    assert rc == 0
    assert (out_dir / "index.html").exists()
    config = json.loads((out_dir / "assets" / "config.json").read_text(encoding="utf-8"))
    assert config["title"] == "양자조약"
    assert config["auto_rotate"] is False
    markers = json.loads((out_dir / "assets" / "markers.json").read_text(encoding="utf-8"))
    assert len(markers) == 3


def test_missing_input_exits_with_error(tmp_path, capsys):
    rc = main(["markers", "-i", str(tmp_path / "absent.csv"), "--coords", "x.json"])
    assert rc == 2
    assert "Treaty table not found" in capsys.readouterr().err


def test_invalid_config_flag_exits_with_error(tmp_path, treaty_csv, coords_json, capsys):
    rc = main(
        [
            "markers",
            "-i",
            str(treaty_csv),
            "--coords",
            str(coords_json),
            "--marker-offset",
            "-1",
        ]
    )
    assert rc == 2
    assert "marker_offset" in capsys.readouterr().err


def test_verbose_flag_sets_verbosity(tmp_path, treaty_csv, coords_json, monkeypatch):
    monkeypatch.setenv("TREATYGLOBE_VERBOSITY", "info")
    rc = main(
        [
            "markers",
            "-i",
            str(treaty_csv),
            "--coords",
            str(coords_json),
            "-o",
            str(tmp_path / "m.json"),
            "--verbose",
        ]
    )
    assert rc == 0
    assert os.environ["TREATYGLOBE_VERBOSITY"] == "debug"
