"""Locate, read and update the dashboard's YAML settings file."""

import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import yaml

PROJECT_MARKERS: Iterable[str] = (".git", "pyproject.toml", "config")
DEFAULT_SETTINGS_PATH = Path("config/dashboard.yml")

PathLike = Union[str, os.PathLike]


def find_project_root(markers: Iterable[str] = PROJECT_MARKERS) -> Path:
    """First ancestor of this package that holds one of ``markers``."""
    here = Path(__file__).resolve().parent
    for directory in (here, *here.parents):
        if any((directory / marker).exists() for marker in markers):
            return directory
    return here


def settings_path(path: Optional[PathLike] = None) -> Path:
    """Absolute location of the dashboard settings file.

    Relative paths are taken from the project root, not the working directory,
    so the scripts behave the same wherever they are launched from.
    """
    target = Path(path or DEFAULT_SETTINGS_PATH)
    if target.is_absolute():
        return target
    return find_project_root() / target


def _read(target: Path) -> Dict[str, Any]:
    if not target.exists():
        raise FileNotFoundError(f"settings file not found: {target}")
    with open(target, "r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_settings(path: Optional[PathLike] = None) -> Dict[str, Any]:
    return _read(settings_path(path))


def update_settings_value(key: str, value: Any, path: Optional[PathLike] = None) -> Path:
    """Set the dotted ``key`` (e.g. ``filters.crop``) and write the file back.

    Every section along the key must already exist; only the final entry may
    be new. Returns the file that was written.
    """
    sections = key.split(".") if key else []
    if not sections or not all(sections):
        raise ValueError(f"Invalid settings key '{key}'")

    target = settings_path(path)
    data = _read(target)

    node = data
    for name in sections[:-1]:
        child = node.get(name)
        if not isinstance(child, dict):
            raise KeyError(f"No settings section '{name}' in '{key}'")
        node = child
    node[sections[-1]] = value

    with open(target, "w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False)
    return target
