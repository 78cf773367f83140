import pytest

from chordsheet.config import Settings
from chordsheet.exceptions import ConfigError


def test_defaults():
    settings = Settings()
    assert settings.default_key == "C"
    assert settings.chord_line_threshold == 0.5
    assert settings.log_level == "WARNING"


def test_from_env_overrides():
    settings = Settings.from_env({
        "CHORDSHEET_DEFAULT_KEY": "Em",
        "CHORDSHEET_CHORD_LINE_THRESHOLD": "0.75",
        "CHORDSHEET_LOG_LEVEL": "debug",
    })
    assert settings == Settings(default_key="Em", chord_line_threshold=0.75, log_level="debug")


def test_from_env_empty_uses_defaults():
    assert Settings.from_env({}) == Settings()


def test_unknown_default_key():
    with pytest.raises(ConfigError, match="default_key"):
        Settings.from_env({"CHORDSHEET_DEFAULT_KEY": "H"})


def test_threshold_not_a_number():
    with pytest.raises(ConfigError, match="chord_line_threshold"):
        Settings.from_env({"CHORDSHEET_CHORD_LINE_THRESHOLD": "half"})


def test_threshold_out_of_range():
    with pytest.raises(ConfigError):
        Settings(chord_line_threshold=0)
    with pytest.raises(ConfigError):
        Settings(chord_line_threshold=1.5)


def test_unknown_log_level():
    with pytest.raises(ConfigError, match="log_level"):
        Settings(log_level="LOUD")
