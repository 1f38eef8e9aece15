from __future__ import annotations

from typing import Any, Mapping

from binomial_lattice.utils.logging_config import setup_logging


DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": True,
    "modules": None,
}

# Older config files spell the keys the way `setup_logging` does.
_LEGACY_KEYS = {
    "fmt_console": "format",
    "log_file": "file",
    "colored": "color",
    "module_levels": "modules",
}


def add_logging_args(parser) -> None:
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (e.g., INFO, DEBUG).",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file path.",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        default=None,
        help="Console log format string.",
    )
    parser.add_argument(
        "--log-module",
        dest="log_modules",
        action="append",
        default=None,
        metavar="NAME=LEVEL",
        help=(
            "Per-logger level override (repeatable), "
            "e.g. binomial_lattice.reporting=DEBUG."
        ),
    )
    parser.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Enable colored console logs.",
    )
    parser.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Disable colored console logs.",
    )
    parser.set_defaults(log_color=None)


def _normalize_logging_config(
    config: Mapping[str, Any] | None
) -> dict[str, Any]:
    merged = dict(DEFAULT_LOGGING)
    if not config:
        return merged

    for key in ("level", "format", "file", "color", "modules"):
        if config.get(key) is not None:
            merged[key] = config[key]

    for legacy, key in _LEGACY_KEYS.items():
        if config.get(legacy) is not None:
            merged[key] = config[legacy]

    return merged


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=log_cfg["file"],
        colored=log_cfg["color"],
        module_levels=log_cfg["modules"],
    )


def parse_module_levels(items: list[str] | None) -> dict[str, str] | None:
    """Turn repeated `NAME=LEVEL` flags into a logger-level mapping."""
    if not items:
        return None

    levels: dict[str, str] = {}
    for item in items:
        name, sep, level = item.partition("=")
        if not sep or not name.strip() or not level.strip():
            raise ValueError(f"Expected NAME=LEVEL for --log-module, got {item!r}")
        levels[name.strip()] = level.strip()
    return levels
