"""Settings for the command-line front end.

Values come from the defaults below, overridden by environment variables::

    CHORDSHEET_DEFAULT_KEY            key used when an import has no usable chord
    CHORDSHEET_CHORD_LINE_THRESHOLD   share of chord tokens for a chord-staff line
    CHORDSHEET_LOG_LEVEL              logging level name
"""

import logging
import os
from dataclasses import dataclass

from .classify import CHORD_LINE_THRESHOLD
from .exceptions import ConfigError
from .keys import is_canonical_key
from .stacked import DEFAULT_KEY

ENV_PREFIX = "CHORDSHEET_"


@dataclass(frozen=True)
class Settings:
    default_key: str = DEFAULT_KEY
    chord_line_threshold: float = CHORD_LINE_THRESHOLD
    log_level: str = "WARNING"

    def __post_init__(self):
        if not is_canonical_key(self.default_key):
            raise ConfigError("default_key", f"{self.default_key!r} is not a known key")
        if not 0 < self.chord_line_threshold <= 1:
            raise ConfigError("chord_line_threshold", "must be in (0, 1]")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError("log_level", f"unknown level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        values = {}
        if f"{ENV_PREFIX}DEFAULT_KEY" in environ:
            values["default_key"] = environ[f"{ENV_PREFIX}DEFAULT_KEY"]
        if f"{ENV_PREFIX}CHORD_LINE_THRESHOLD" in environ:
            raw = environ[f"{ENV_PREFIX}CHORD_LINE_THRESHOLD"]
            try:
                values["chord_line_threshold"] = float(raw)
            except ValueError:
                raise ConfigError("chord_line_threshold", f"not a number: {raw!r}") from None
        if f"{ENV_PREFIX}LOG_LEVEL" in environ:
            values["log_level"] = environ[f"{ENV_PREFIX}LOG_LEVEL"]
        return cls(**values)
