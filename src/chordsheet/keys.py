"""Key model: note spellings, pitch classes and the canonical key names.

All tables here are immutable module constants.  A key name is a note name
(``C``, ``F#``, ``Bb``) optionally followed by the minor marker ``m``.

Spelling preference
-------------------

A key prefers flats when its name carries a ``b``, prefers sharps when it
carries a ``#``, and otherwise prefers flats only if it is one of the
flat-side keys (``F``, ``Dm``, ``Gm``, ``Cm``, ``Fm``).
"""

import re
from dataclasses import dataclass
from types import MappingProxyType

from .exceptions import UnknownKeyError

SHARP_NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
FLAT_NOTE_NAMES = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

_NATURAL_PITCH_CLASSES = MappingProxyType(
    {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
)
_ACCIDENTAL_OFFSETS = MappingProxyType({"": 0, "#": 1, "b": -1})

MINOR_MARKER = "m"

MAJOR_KEYS = (
    "C", "C#", "Db", "D", "D#", "Eb", "E", "F", "F#",
    "Gb", "G", "G#", "Ab", "A", "A#", "Bb", "B",
)
MINOR_KEYS = tuple(f"{name}{MINOR_MARKER}" for name in MAJOR_KEYS)
CANONICAL_KEY_NAMES = MAJOR_KEYS + MINOR_KEYS

FLAT_PREFERRED_KEYS = frozenset({
    "F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb",
    "Dm", "Gm", "Cm", "Fm", "Bbm", "Ebm", "Abm", "Dbm", "Gbm", "Cbm",
})

NOTE_RE = re.compile(r"(?P<letter>[A-G])(?P<accidental>[#b]?)")


@dataclass(frozen=True)
class Note:
    """A pitch class together with the letter spelling used to display it."""

    letter: str
    accidental: str = ""

    @classmethod
    def parse(cls, text: str) -> "Note | None":
        """Return the note spelled by *text*, or ``None`` if it is not a note name."""
        m = NOTE_RE.fullmatch(text.strip())
        if not m:
            return None
        return cls(m.group("letter"), m.group("accidental"))

    @classmethod
    def from_pitch_class(cls, pitch_class: int, prefer_flats: bool) -> "Note":
        names = FLAT_NOTE_NAMES if prefer_flats else SHARP_NOTE_NAMES
        name = names[pitch_class % 12]
        return cls(name[0], name[1:])

    @property
    def pitch_class(self) -> int:
        return (_NATURAL_PITCH_CLASSES[self.letter] + _ACCIDENTAL_OFFSETS[self.accidental]) % 12

    def __str__(self) -> str:
        return f"{self.letter}{self.accidental}"


@dataclass(frozen=True)
class Key:
    """One of the 34 canonical keys."""

    name: str

    def __post_init__(self):
        if not is_canonical_key(self.name):
            raise UnknownKeyError(self.name)

    @property
    def tonic(self) -> Note:
        return Note.parse(_strip_minor(self.name))

    @property
    def is_minor(self) -> bool:
        return is_minor(self.name)

    @property
    def pitch_class(self) -> int:
        return self.tonic.pitch_class

    @property
    def prefer_flats(self) -> bool:
        return prefer_flats(self.name)

    def __str__(self) -> str:
        return self.name


def is_canonical_key(name: str) -> bool:
    return name in CANONICAL_KEY_NAMES


def is_minor(key_name: str) -> bool:
    return key_name.endswith(MINOR_MARKER)


def pitch_class_of(key_name: str) -> int:
    """Return the pitch class (0-11) of the tonic of *key_name*.

    Raises UnknownKeyError if *key_name* is not a canonical key name.
    """
    return Key(key_name).pitch_class


def prefer_flats(key_name: str) -> bool:
    """Return True if chords in *key_name* should be spelled with flats."""
    if "b" in key_name:
        return True
    if "#" in key_name:
        return False
    return key_name in FLAT_PREFERRED_KEYS


def _strip_minor(key_name: str) -> str:
    if is_minor(key_name):
        return key_name[: -len(MINOR_MARKER)]
    return key_name
