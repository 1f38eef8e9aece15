from __future__ import annotations

import importlib
import logging

import pytest


def test_normalize_logging_config_defaults() -> None:
    mod = importlib.import_module("binomial_lattice.cli.logging")
    normalized = mod._normalize_logging_config(None)
    assert normalized == mod.DEFAULT_LOGGING


def test_normalize_logging_config_overrides() -> None:
    mod = importlib.import_module("binomial_lattice.cli.logging")
    cfg = {
        "level": "DEBUG",
        "format": "%(message)s",
        "file": "log.txt",
        "color": False,
        "modules": {"binomial_lattice.reporting": "DEBUG"},
    }
    normalized = mod._normalize_logging_config(cfg)
    assert normalized == cfg


def test_normalize_logging_config_legacy_keys_override() -> None:
    mod = importlib.import_module("binomial_lattice.cli.logging")
    cfg = {
        "format": "new",
        "file": "new.log",
        "color": True,
        "fmt_console": "legacy",
        "log_file": "legacy.log",
        "colored": False,
    }
    normalized = mod._normalize_logging_config(cfg)
    assert normalized["format"] == "legacy"
    assert normalized["file"] == "legacy.log"
    assert normalized["color"] is False


def test_setup_logging_from_config_uses_normalized(monkeypatch) -> None:
    mod = importlib.import_module("binomial_lattice.cli.logging")

    captured: dict[str, object] = {}

    def _setup_logging(level, *, fmt_console, log_file, colored, module_levels):
        captured["level"] = level
        captured["fmt_console"] = fmt_console
        captured["log_file"] = log_file
        captured["colored"] = colored
        captured["module_levels"] = module_levels

    monkeypatch.setattr(mod, "setup_logging", _setup_logging)

    mod.setup_logging_from_config({"level": "WARNING", "colored": False})

    assert captured == {
        "level": "WARNING",
        "fmt_console": mod.DEFAULT_LOGGING["format"],
        "log_file": None,
        "colored": False,
        "module_levels": None,
    }


@pytest.mark.parametrize(
    ("value", "expected"),
    [("info", logging.INFO), (" warn ", logging.WARNING), ("10", 10), (30, 30)],
)
def test_coerce_level_accepts_names_and_numbers(value, expected) -> None:
    mod = importlib.import_module("binomial_lattice.utils.logging_config")
    assert mod.coerce_level(value) == expected


def test_coerce_level_rejects_unknown_names() -> None:
    mod = importlib.import_module("binomial_lattice.utils.logging_config")
    with pytest.raises(ValueError, match="Unknown logging level"):
        mod.coerce_level("LOUD")


def test_setup_logging_writes_file_and_quiets_matplotlib(tmp_path) -> None:
    mod = importlib.import_module("binomial_lattice.utils.logging_config")
    log_file = tmp_path / "logs" / "run.log"

    mod.setup_logging("DEBUG", log_file=log_file)
    logging.getLogger("binomial_lattice.test").info("hello lattice")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "hello lattice" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger("matplotlib").level == logging.WARNING

    logging.basicConfig(handlers=[logging.NullHandler()], force=True)


def test_setup_logging_from_config_applies_module_levels() -> None:
    mod = importlib.import_module("binomial_lattice.cli.logging")
    target = logging.getLogger("binomial_lattice.reporting")
    previous = target.level

    try:
        mod.setup_logging_from_config(
            {
                "level": "WARNING",
                "color": False,
                "modules": {"binomial_lattice.reporting": "DEBUG"},
            }
        )
        assert logging.getLogger().level == logging.WARNING
        assert target.level == logging.DEBUG
    finally:
        target.setLevel(previous)
        logging.basicConfig(handlers=[logging.NullHandler()], force=True)


def test_legacy_module_levels_key_maps_to_modules() -> None:
    mod = importlib.import_module("binomial_lattice.cli.logging")
    normalized = mod._normalize_logging_config(
        {"module_levels": {"binomial_lattice.options": "ERROR"}}
    )
    assert normalized["modules"] == {"binomial_lattice.options": "ERROR"}


def test_parse_module_levels_builds_mapping() -> None:
    mod = importlib.import_module("binomial_lattice.cli.logging")
    assert mod.parse_module_levels(None) is None
    assert mod.parse_module_levels(
        ["binomial_lattice.reporting=DEBUG", " matplotlib = ERROR "]
    ) == {"binomial_lattice.reporting": "DEBUG", "matplotlib": "ERROR"}


@pytest.mark.parametrize("item", ["binomial_lattice", "=DEBUG", "name="])
def test_parse_module_levels_rejects_malformed_items(item) -> None:
    mod = importlib.import_module("binomial_lattice.cli.logging")
    with pytest.raises(ValueError, match="NAME=LEVEL"):
        mod.parse_module_levels([item])
