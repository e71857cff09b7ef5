from __future__ import annotations

import logging

import pytest

from nudwim.config import ColorMode, Settings
from nudwim.logs import OFF, TRACE, configure_logging, level_for_verbosity


def test_defaults_with_empty_environment() -> None:
    assert Settings.from_env({}) == Settings()
    assert Settings().marker == "|"


def test_from_env_reads_color_and_verbosity() -> None:
    settings = Settings.from_env({"NUDWIM_COLOR": " Never ", "NUDWIM_VERBOSITY": "2"})
    assert settings.color is ColorMode.NEVER
    assert settings.verbosity == 2


@pytest.mark.parametrize(
    "env",
    [
        {"NUDWIM_COLOR": "sometimes"},
        {"NUDWIM_VERBOSITY": "loud"},
    ],
)
def test_from_env_rejects_bad_values(env: dict[str, str]) -> None:
    with pytest.raises(ValueError, match="NUDWIM_"):
        Settings.from_env(env)


# --- logging levels ----------------------------------------------------------------

@pytest.mark.parametrize(
    "verbosity,level",
    [
        (-5, OFF),
        (-1, OFF),
        (0, logging.ERROR),
        (1, logging.WARNING),
        (2, logging.INFO),
        (3, logging.DEBUG),
        (4, TRACE),
        (9, TRACE),
    ],
)
def test_level_for_verbosity(verbosity: int, level: int) -> None:
    assert level_for_verbosity(verbosity) == level


def test_configure_logging_replaces_handlers() -> None:
    configure_logging(0)
    level = configure_logging(3)
    log = logging.getLogger("nudwim")
    assert level == logging.DEBUG
    assert log.level == logging.DEBUG
    assert len(log.handlers) == 1
    assert logging.getLevelName(TRACE) == "TRACE"
