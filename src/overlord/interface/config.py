"""
Player preferences for the terminal front end.

Kept as a small JSON file in `.overlord/` under the working directory.
Anything unreadable or unknown falls back to the defaults; a broken
preferences file should never stop someone from playing.
"""

import json
from pathlib import Path
from typing import TypedDict


class Config(TypedDict, total=False):
    player_name: str  # Offered as the default at the name prompt
    gender: str | None  # "male", "female", or None to ask every time
    seed: int | None  # Fixed seed for reproducible games
    animate_text: bool  # Type visitor speech out character by character
    text_speed: float  # Delay per character when animating, in seconds


DEFAULT_CONFIG: Config = {
    "player_name": "",
    "gender": None,
    "seed": None,
    "animate_text": True,
    "text_speed": 0.015,
}


def get_config_path(config_dir: Path | str = ".overlord") -> Path:
    return Path(config_dir) / "config.json"


def load_config(config_dir: Path | str = ".overlord") -> Config:
    """Saved preferences layered over the defaults."""
    config = DEFAULT_CONFIG.copy()
    path = get_config_path(config_dir)
    if not path.is_file():
        return config

    try:
        saved = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return config

    if isinstance(saved, dict):
        for key in DEFAULT_CONFIG:
            if key in saved:
                config[key] = saved[key]
    return config


def save_config(config: Config, config_dir: Path | str = ".overlord") -> bool:
    """Write preferences. Returns False if the file could not be written."""
    path = get_config_path(config_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except OSError:
        return False
    return True


def set_player(name: str, gender: str | None, config_dir: Path | str = ".overlord") -> None:
    """Remember the last ruler so the next game can offer them again."""
    config = load_config(config_dir)
    config["player_name"] = name
    config["gender"] = gender
    save_config(config, config_dir)


def set_animate_text(animate: bool, config_dir: Path | str = ".overlord") -> None:
    config = load_config(config_dir)
    config["animate_text"] = animate
    save_config(config, config_dir)
