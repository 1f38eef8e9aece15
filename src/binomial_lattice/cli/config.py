"""YAML config loading and `CLI > YAML > defaults` merging."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Mapping

import yaml


def add_config_arg(parser) -> None:
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file with logging/market/export sections "
        "(see config/price_tree.yml).",
    )


def load_yaml_config(path: str | Path | None) -> dict[str, Any]:
    """Read a YAML mapping; `None` means "no config file"."""
    if path is None:
        return {}

    p = resolve_path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Config file not found: {p}")

    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"{p} must contain a YAML mapping at the top level, "
            f"got {type(data).__name__}."
        )
    return data


def deep_merge(
    base: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    """Recursively merge mappings; non-mapping values in `updates` win.

    Neither input is mutated: nested mappings of `base` are copied.
    """
    merged = {
        key: deep_merge(value, {}) if isinstance(value, Mapping) else value
        for key, value in base.items()
    }
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def require_sections(config: Mapping[str, Any], sections: Iterable[str]) -> None:
    """Fail early when a named section was overwritten by a scalar/list."""
    for name in sections:
        value = config.get(name)
        if not isinstance(value, Mapping):
            raise ValueError(
                f"Config section {name!r} must be a mapping, "
                f"got {type(value).__name__}."
            )


def build_config(
    defaults: Mapping[str, Any],
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
    *,
    sections: Iterable[str] = (),
) -> dict[str, Any]:
    """Merge defaults, YAML and CLI overrides, then check `sections`."""
    config = deep_merge(defaults, load_yaml_config(yaml_path))
    config = deep_merge(config, overrides or {})
    require_sections(config, sections)
    return config


def resolve_path(value: str | Path | None) -> Path | None:
    """Expand `~` and environment variables in a configured path."""
    if value is None:
        return None
    if isinstance(value, Path):
        return value
    return Path(os.path.expandvars(os.path.expanduser(str(value))))
