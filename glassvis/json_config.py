"""JSON settings files for Glassvis.

A settings file holds one object per config section:

    {
        "diff": {"significance": 12, "draw_bounding_box": false},
        "display": {"max_width": 800},
        "camera": {"device": 1}
    }

Values present in the file override the defaults; unknown keys are ignored.
"""
import copy
import json
import os
from dataclasses import asdict, fields
from enum import Enum
from typing import Dict, Optional

from .config import GlassvisConfig, get_default_config
from .errors import ConfigError


SECTIONS = ('diff', 'display', 'camera')


def load_config(file_path: str) -> Dict:
    """Load raw settings from a JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Dictionary with settings data, empty if the file does not exist

    Raises:
        ConfigError: if the file is not a JSON object
    """
    if not os.path.exists(file_path):
        return {}

    with open(file_path, 'r', encoding='utf-8') as file:
        try:
            config = json.load(file)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid settings file {file_path}: {e}") from e
    if not isinstance(config, dict):
        raise ConfigError(f"Settings file {file_path} must hold a JSON object")
    return config


def save_config(config: Dict, file_path: str) -> None:
    """Save raw settings to a JSON file.

    Args:
        config: Settings dictionary
        file_path: Path to save JSON file
    """
    os.makedirs(os.path.dirname(file_path) or '.', exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as file:
        json.dump(config, file, indent=4, ensure_ascii=False)


def _coerce(current, value):
    if isinstance(current, Enum):
        return type(current)(value)
    if isinstance(current, tuple):
        return tuple(value)
    return value


def config_from_dict(data: Dict, base: Optional[GlassvisConfig] = None) -> GlassvisConfig:
    """Merge a settings dictionary over a config.

    Args:
        data: Dictionary shaped like the settings file
        base: Config to start from (defaults if None)

    Returns:
        New GlassvisConfig, base is left unchanged

    Raises:
        ConfigError: if a value cannot be converted to the field's type
    """
    config = get_default_config() if base is None else copy.deepcopy(base)

    for section_name in SECTIONS:
        values = data.get(section_name) or {}
        if not isinstance(values, dict):
            raise ConfigError(f"Settings section '{section_name}' must be an object")
        section = getattr(config, section_name)
        for f in fields(section):
            if f.name in values:
                try:
                    value = _coerce(getattr(section, f.name), values[f.name])
                except (TypeError, ValueError) as e:
                    raise ConfigError(
                        f"Invalid value for {section_name}.{f.name}: {values[f.name]!r}"
                    ) from e
                setattr(section, f.name, value)

    return config


def config_to_dict(config: GlassvisConfig) -> Dict:
    """Flatten a config into JSON-friendly data."""
    data = asdict(config)
    data['diff']['luma_method'] = config.diff.luma_method.value
    return data


def load_glassvis_config(file_path: Optional[str]) -> GlassvisConfig:
    """Load a settings file and merge it over the defaults."""
    if not file_path:
        return get_default_config()
    return config_from_dict(load_config(file_path))


def save_glassvis_config(config: GlassvisConfig, file_path: str) -> None:
    save_config(config_to_dict(config), file_path)


__all__ = [
    'load_config', 'save_config',
    'config_from_dict', 'config_to_dict',
    'load_glassvis_config', 'save_glassvis_config'
]
