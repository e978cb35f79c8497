import pytest

from glassvis.config import DIFF_COLOR, LumaMethod, get_default_config
from glassvis.errors import ConfigError
from glassvis.json_config import (
    config_from_dict, load_config, load_glassvis_config, save_config, save_glassvis_config
)


def test_default_config_values():
    config = get_default_config()
    assert config.diff.significance == 10
    assert config.diff.draw_bounding_box is True
    assert config.diff.diff_color == DIFF_COLOR
    assert (config.display.max_width, config.display.max_height) == (600, 800)
    assert config.display.zoom_step == (60, 80)


def test_default_config_is_a_copy():
    a = get_default_config()
    a.diff.significance = 99
    assert get_default_config().diff.significance == 10


def test_config_from_dict_coerces_values():
    config = config_from_dict({
        'diff': {'significance': 20, 'luma_method': 'opencv', 'box_color': [1, 2, 3, 4]},
        'camera': {'resolution': [640, 480]},
        'unknown': {'x': 1},
    })
    assert config.diff.significance == 20
    assert config.diff.luma_method is LumaMethod.OPENCV
    assert config.diff.box_color == (1, 2, 3, 4)
    assert config.camera.resolution == (640, 480)
    assert config.display.max_width == 600


def test_unknown_keys_are_ignored():
    config = config_from_dict({'diff': {'nope': 1}})
    assert not hasattr(config.diff, 'nope')


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / "missing.json")) == {}
    assert load_glassvis_config(str(tmp_path / "missing.json")).diff.significance == 10
    assert load_glassvis_config(None).diff.significance == 10


def test_settings_round_trip(tmp_path):
    config = get_default_config()
    config.diff.significance = 42
    config.diff.luma_method = LumaMethod.OPENCV
    config.display.data_dir = "elsewhere"
    path = str(tmp_path / "settings" / "glassvis.json")

    save_glassvis_config(config, path)
    loaded = load_glassvis_config(path)

    assert loaded == config


def test_partial_settings_file(tmp_path):
    path = str(tmp_path / "glassvis.json")
    save_config({'diff': {'draw_bounding_box': False}}, path)
    loaded = load_glassvis_config(path)
    assert loaded.diff.draw_bounding_box is False
    assert loaded.diff.significance == 10


def test_config_from_dict_leaves_base_unchanged():
    base = get_default_config()
    merged = config_from_dict({'diff': {'significance': 30}}, base)
    assert merged.diff.significance == 30
    assert base.diff.significance == 10
    assert merged is not base


def test_invalid_json_raises_config_error(tmp_path):
    path = tmp_path / "glassvis.json"
    path.write_text("[1, 2")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_non_object_settings_raise_config_error(tmp_path):
    path = tmp_path / "glassvis.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(str(path))
    with pytest.raises(ConfigError):
        config_from_dict({'diff': 5})


def test_bad_values_raise_config_error():
    with pytest.raises(ConfigError):
        config_from_dict({'diff': {'luma_method': 'hsv'}})
    with pytest.raises(ConfigError):
        config_from_dict({'camera': {'resolution': 720}})
