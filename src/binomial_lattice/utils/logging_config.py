"""Project-wide logging configuration for entrypoints.

Library modules never call basicConfig; they only do
`logger = getLogger(__name__)`. The pricing core does not log at all.
Entrypoints call `setup_logging(...)` once.

The console handler attaches `_AddShortNameFilter`, which injects

    record.shortname = record.name.split(".")[-1]

so console formats may use `%(shortname)s`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

# Plotting backends are chatty at DEBUG level.
_NOISY_LOGGERS = ("matplotlib", "matplotlib.font_manager", "PIL")


class _AddShortNameFilter(logging.Filter):
    """Inject `record.shortname` = last component of `record.name`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.split(".")[-1]
        return True


class _ColorFormatter(logging.Formatter):
    """ANSI-colored formatter for console logs.

    Only the levelname is colored; file logs stay plain.
    """

    _RESET = "\033[0m"
    _LEVEL_COLOR: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._LEVEL_COLOR.get(record.levelno)
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self._RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def coerce_level(level: int | str) -> int:
    """Coerce a logging level given as int or string into an int."""
    if isinstance(level, int):
        return level

    s = str(level).strip().upper()
    if not s:
        raise ValueError("Empty logging level")

    if s.isdigit():
        return int(s)

    mapping = logging.getLevelNamesMapping()
    try:
        return mapping[s]
    except KeyError as e:
        raise ValueError(f"Unknown logging level: {level!r}") from e


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt_console: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    fmt_file: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
    quiet_third_party: bool = True,
) -> None:
    """Configure logging (call once from entrypoints).

    Parameters
    - level: Root log level (int or string, e.g. logging.INFO or "INFO").
    - fmt_console: Console log format; `%(shortname)s` is available.
    - fmt_file: File log format (used only when `log_file` is provided).
    - datefmt: Timestamp format.
    - log_file: If provided, also write logs to this file.
    - module_levels: Optional per-logger overrides.
    - colored: If True, colorize console output (ANSI).
    - quiet_third_party: If True, keep matplotlib/PIL at WARNING.

    Uses `force=True` so reruns (tests, notebooks) don't duplicate handlers.
    """
    root_level = coerce_level(level)
    handlers: list[logging.Handler] = []

    console = logging.StreamHandler()
    console.addFilter(_AddShortNameFilter())
    if colored:
        console.setFormatter(_ColorFormatter(fmt=fmt_console, datefmt=datefmt))
    else:
        console.setFormatter(logging.Formatter(fmt=fmt_console, datefmt=datefmt))
    handlers.append(console)

    if log_file is not None:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)

        fh = logging.FileHandler(p, encoding="utf-8")
        fh.setFormatter(logging.Formatter(fmt=fmt_file, datefmt=datefmt))
        handlers.append(fh)

    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    if module_levels:
        for name, lvl in module_levels.items():
            logging.getLogger(name).setLevel(coerce_level(lvl))

    if quiet_third_party:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
