#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the bbcode2html CLI.

A configuration file holds option values, either flat or grouped:

.. code-block:: toml

    max_depth = 16
    newline_mode = "preserve"

    [renderer]
    link_rel = "nofollow noopener"

Keys may use dashes or underscores. Files are looked up in this order:

1. ``--config PATH``
2. The file named by the ``BBCODE2HTML_CONFIG`` environment variable
3. The first of ``.bbcode2html.toml``, ``.bbcode2html.yaml``,
   ``.bbcode2html.yml``, ``.bbcode2html.json`` or a ``pyproject.toml`` with a
   ``[tool.bbcode2html]`` table, searching from the working directory up to
   the filesystem root, then the user's home directory
"""

import argparse
import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Optional

import yaml

CONFIG_FILENAMES = [".bbcode2html.toml", ".bbcode2html.yaml", ".bbcode2html.yml", ".bbcode2html.json"]
PYPROJECT_TOOL_KEY = "bbcode2html"

# Tables inside a config file that group parser or renderer options
SECTION_KEYS = ("parser", "renderer")


def _read_toml(config_path: Path) -> Any:
    with open(config_path, "rb") as f:
        return tomllib.load(f)


def _read_json(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


def _read_yaml(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


_READERS: Dict[str, tuple[str, Callable[[Path], Any], tuple[type[Exception], ...]]] = {
    ".toml": ("TOML", _read_toml, (tomllib.TOMLDecodeError,)),
    ".json": ("JSON", _read_json, (json.JSONDecodeError,)),
    ".yaml": ("YAML", _read_yaml, (yaml.YAMLError,)),
    ".yml": ("YAML", _read_yaml, (yaml.YAMLError,)),
}


def _load_mapping(config_path: Path) -> Dict[str, Any]:
    """Read a config file and check it holds a mapping at the top level.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read or parsed, or is not a mapping

    """
    ext = config_path.suffix.lower()
    if ext not in _READERS:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")

    format_name, reader, decode_errors = _READERS[ext]
    try:
        config = reader(config_path)
    except decode_errors as e:
        raise argparse.ArgumentTypeError(f"Invalid {format_name} in config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Error reading {format_name} config {config_path}: {e}") from e

    if config is None and format_name == "YAML":
        # An empty YAML document
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"{format_name} config file {config_path} must contain a mapping, got {type(config).__name__}"
        )
    return config


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.bbcode2html]`` table, or {} if there is none.

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed or the table is not a table

    """
    data = _load_mapping(pyproject_path)
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        return {}
    config = tool.get(PYPROJECT_TOOL_KEY, {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_KEY}] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file from ``start_dir`` upwards.

    Each directory is checked for the dedicated config files first, then for
    a pyproject.toml with a ``[tool.bbcode2html]`` table. Unparseable
    pyproject.toml files are skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                pass

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file(start_dir: Optional[Path] = None, home_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in parent directories or the home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = home_dir or Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    Examples
    --------
    >>> config = load_config_file(".bbcode2html.toml")
    >>> config.get("max_depth")
    16

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)
    return _load_mapping(config_path)


def flatten_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``[parser]`` and ``[renderer]`` tables into one flat mapping.

    Keys are normalized to use underscores. Grouped values win over flat
    ones with the same name.

    Examples
    --------
    >>> flatten_config({"max-depth": 8, "renderer": {"standalone": True}})
    {'max_depth': 8, 'standalone': True}

    """
    flat: Dict[str, Any] = {}
    for key, value in config.items():
        if key not in SECTION_KEYS:
            flat[str(key).replace("-", "_")] = value
    for section in SECTION_KEYS:
        grouped = config.get(section)
        if grouped is None:
            continue
        if not isinstance(grouped, dict):
            raise argparse.ArgumentTypeError(f"[{section}] in config must be a table, got {type(grouped).__name__}")
        for key, value in grouped.items():
            flat[str(key).replace("-", "_")] = value
    return flat


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    discover: bool = True,
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (BBCODE2HTML_CONFIG)
    3. Auto-discovered config file, unless ``discover`` is False

    Returns
    -------
    dict
        Flattened configuration (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return flatten_config(load_config_file(explicit_path))

    if env_var_path:
        return flatten_config(load_config_file(env_var_path))

    if discover:
        discovered_path = discover_config_file()
        if discovered_path:
            return flatten_config(load_config_file(discovered_path))

    return {}


__all__ = [
    "CONFIG_FILENAMES",
    "discover_config_file",
    "find_config_in_parents",
    "flatten_config",
    "load_config_file",
    "load_config_with_priority",
]
