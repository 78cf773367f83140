"""Line classification.

:func:`is_chord_only_line` is the chord-staff heuristic used everywhere a raw
line has to be told apart from lyrics::

    1. drop section tags such as [Intro] or [Refrão]
    2. turn bar separators (| - – —) into spaces
    3. any remaining [...] group means the line is already inline-annotated
    4. at least one token, and at least half the tokens, must be chords

:func:`classify_line` builds the coarser BLANK / SECTION / TAB / CHORD / LYRIC
classification on top of it.
"""

import re
from enum import Enum, auto

from .chords import is_chord

SECTION_TAGS = (
    "Intro", "Verse", "Chorus", "Bridge", "Refrão", "Ponte", "Solo", "Tab",
    "Instrumental", "Pre-Chorus", "Pré-Refrão", "Outro", "Final",
)

_TAG_ALTERNATION = "|".join(re.escape(tag) for tag in SECTION_TAGS)

# An exact [Tag] group, as removed before counting chord tokens.
SECTION_TAG_RE = re.compile(rf"\[(?:{_TAG_ALTERNATION})\]", re.IGNORECASE)

# Bracket content naming a section, optionally numbered: "Verse 2", "Refrão".
SECTION_LABEL_RE = re.compile(rf"(?:{_TAG_ALTERNATION})(?:\s*\d+)?", re.IGNORECASE)

_SECTION_LINE_RE = re.compile(rf"\[(?P<label>{SECTION_LABEL_RE.pattern})\]", re.IGNORECASE)

_BAR_SEPARATOR_RE = re.compile(r"[|\-–—]")

# ASCII tablature: E|---0---1---  or  e----2---
TAB_LINE_RE = re.compile(r"^[eEBGDAd](?:\|[-\d]|--)")

CHORD_LINE_THRESHOLD = 0.5


class LineType(Enum):
    BLANK = auto()  # empty or whitespace only
    SECTION = auto()  # a lone section tag: [Verse 2], [Refrão]
    TAB = auto()  # ASCII tablature
    CHORD = auto()  # chord staff: G  D/F#  Em  C
    LYRIC = auto()  # everything else, including inline-annotated text


def is_chord_only_line(line: str, threshold: float = CHORD_LINE_THRESHOLD) -> bool:
    """Return True if *line* looks like a row of chords rather than lyrics.

    >>> is_chord_only_line("Dm G C")
    True
    >>> is_chord_only_line("[G]Hello [D]world")
    False
    """
    clean = SECTION_TAG_RE.sub("", line)
    clean = _BAR_SEPARATOR_RE.sub(" ", clean)
    if "[" in clean and "]" in clean:
        return False
    tokens = clean.split()
    if not tokens:
        return False
    chord_count = sum(1 for token in tokens if is_chord(token))
    return chord_count > 0 and chord_count >= len(tokens) * threshold


def section_label(line: str) -> str | None:
    """Return the label of a lone section-tag line, e.g. ``"Verse 2"``."""
    m = _SECTION_LINE_RE.fullmatch(line.strip())
    return m.group("label") if m else None


def classify_line(line: str, threshold: float = CHORD_LINE_THRESHOLD) -> LineType:
    stripped = line.strip()
    if not stripped:
        return LineType.BLANK
    if section_label(stripped) is not None:
        return LineType.SECTION
    if TAB_LINE_RE.match(stripped):
        return LineType.TAB
    if is_chord_only_line(stripped, threshold):
        return LineType.CHORD
    return LineType.LYRIC
