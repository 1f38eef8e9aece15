from __future__ import annotations

import json
import logging
from typing import Any

import pytest


@pytest.fixture
def parse_printed_config():
    def _parse(text: str) -> dict[str, Any]:
        return json.loads(text)

    return _parse


@pytest.fixture
def run_help(capsys):
    def _run(mod, expected: str) -> None:
        with pytest.raises(SystemExit) as exc:
            mod.main(["--help"])
        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert expected in out

    return _run


@pytest.fixture(autouse=True)
def _reset_root_logging():
    yield
    # Entry points reconfigure the root logger with force=True.
    logging.basicConfig(handlers=[logging.NullHandler()], force=True)
