"""
nudwim.config
=============

Process settings read from the environment. The CLI flags are applied on top
of these; the library itself takes no configuration.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from nudwim.constants import MARKER

__all__ = ["ColorMode", "Settings"]

ENV_COLOR = "NUDWIM_COLOR"
ENV_VERBOSITY = "NUDWIM_VERBOSITY"


class ColorMode(StrEnum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


@dataclass(frozen=True, slots=True)
class Settings:
    color: ColorMode = ColorMode.AUTO
    verbosity: int = 0
    marker: str = MARKER

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        raw_color = (env.get(ENV_COLOR) or ColorMode.AUTO.value).strip().lower()
        try:
            color = ColorMode(raw_color)
        except ValueError:
            raise ValueError(
                f"{ENV_COLOR}={raw_color!r}: expected one of {[m.value for m in ColorMode]}"
            ) from None

        raw_verbosity = (env.get(ENV_VERBOSITY) or "0").strip()
        try:
            verbosity = int(raw_verbosity)
        except ValueError:
            raise ValueError(f"{ENV_VERBOSITY}={raw_verbosity!r}: expected an integer") from None

        return cls(color=color, verbosity=verbosity)
