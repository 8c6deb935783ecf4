"""Load ProjectConfig from pagepack.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from pagepack._errors import ConfigError
from pagepack.config import ProjectConfig

# Project config files, in lookup order
CONFIG_FILENAMES: tuple[str, ...] = ("pagepack.yaml", "pagepack.yml", "pagepack.toml")

_KNOWN_KEYS: frozenset[str] = frozenset({
    "src_dir",
    "pages_dir",
    "public_dir",
    "output",
    "entry",
    "styles_file",
    "style_extension",
    "copy_folders",
    "dev_port",
    "api_url_default",
})


def load_config(root: Path, **overrides: object) -> ProjectConfig:
    """Load ProjectConfig from root, optionally merging pagepack.yaml.

    Looks for pagepack.yaml, pagepack.yml, or pagepack.toml in root. If found,
    loads and merges with overrides. Overrides take precedence; ``None``
    overrides are ignored so unset CLI flags fall through to the file.

    Raises:
        ConfigError: If the config file cannot be parsed or names unknown keys.

    """
    file_config = _read_project_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    # Normalize output to Path
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "copy_folders" in merged:
        folders = merged["copy_folders"]
        if isinstance(folders, str) or not isinstance(folders, (list, tuple)):
            msg = f"copy_folders must be a list of folder names, got {folders!r}"
            raise ConfigError(msg)
        merged["copy_folders"] = tuple(str(f) for f in folders)
    return ProjectConfig(root=root, **merged)


def _read_project_config(root: Path) -> dict[str, object]:
    """Read pagepack config from yaml/toml if present. Returns empty dict otherwise."""
    for name in CONFIG_FILENAMES:
        path = root / name
        if not path.is_file():
            continue
        if path.suffix == ".toml":
            return _parse_toml(path)
        return _parse_yaml(path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping at the top level"
        raise ConfigError(msg)
    return _flatten_section(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_section(data, path)


def _flatten_section(data: dict[str, object], path: Path) -> dict[str, object]:
    """Extract pagepack.* keys into top-level config."""
    result: dict[str, object] = {}
    section = data.get("pagepack")
    if isinstance(section, dict):
        result.update(section)
    for k, v in data.items():
        if k != "pagepack" and k in _KNOWN_KEYS:
            result[k] = v

    unknown = sorted(set(result) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown config keys in {path}: {', '.join(unknown)}"
        raise ConfigError(msg)
    return result
