# SPDX-License-Identifier: Apache-2.0
import pytest

from treatyglobe.config import ConfigError, GlobeConfig, load_config


def test_defaults_match_original_globe():
    cfg = load_config(environ={})
    assert cfg == GlobeConfig()
    assert cfg.globe_radius == 5.0
    assert cfg.marker_offset == 0.1
    assert cfg.camera_distance == 10.0


def test_file_env_and_overrides_layer_in_order(tmp_path):
    path = tmp_path / "globe.yaml"
    path.write_text("globe_radius: 3\nhit_radius: 0.2\ntimeout: 4\n", encoding="utf-8")
    env = {"TREATYGLOBE_HIT_RADIUS": "0.3", "TREATYGLOBE_WIDTH": "800"}

    cfg = load_config(path, environ=env, timeout=7)

    assert cfg.globe_radius == 3.0
    assert cfg.hit_radius == 0.3
    assert cfg.width == 800
    assert cfg.timeout == 7.0


def test_none_overrides_are_ignored():
    assert load_config(environ={}, globe_radius=None) == GlobeConfig()


def test_config_path_from_environment(tmp_path):
    path = tmp_path / "env.yaml"
    path.write_text("marker_offset: 0.5\n", encoding="utf-8")
    cfg = load_config(environ={"TREATYGLOBE_CONFIG": str(path)})
    assert cfg.marker_offset == 0.5


@pytest.mark.parametrize(
    "overrides",
    [
        {"marker_offset": -0.1},
        {"globe_radius": 0},
        {"hit_radius": "wide"},
        {"near": 10, "far": 5},
        {"camera_distance": 4},
        {"colour": "red"},
    ],
)
def test_invalid_values_raise(overrides):
    with pytest.raises(ConfigError):
        load_config(environ={}, **overrides)


def test_malformed_file(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path, environ={})
