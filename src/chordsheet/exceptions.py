class ChordSheetError(Exception):
    """Base exception for chordsheet."""


class UnknownKeyError(ChordSheetError, ValueError):
    """Raised when a key name is not one of the canonical key names."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown key: {key!r}")


class ConfigError(ChordSheetError):
    """Raised when a setting has an unusable value."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid setting {name}: {reason}")
