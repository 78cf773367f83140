"""The chord-token grammar shared by every module in the package.

A chord token is::

    root      [A-G]
    accidental [#b]?
    suffix    zero or more quality/extension pieces:
                maj min dim aug sus add 11 13 m M 7 9 6 5 4 2 + - ° ø º
                or a parenthesised alteration group such as (9) (b5) (#11/13)
    bass      optional "/" followed by a bare note name, e.g. G/B, D/F#

Examples: ``A``, ``Am7``, ``C7M``, ``F#m7(b5)``, ``Bbsus4``, ``G/B``, ``E°``.

A bare letter is a valid chord, which makes single-letter lyric words such as
"A" ambiguous.  Nothing here tries to resolve that.

The suffix is never interpreted; it is only carried along.
"""

import re

from .keys import Note
from .models import ChordSymbol

# Longer alternatives first so that e.g. "maj" is not consumed as "m" + "aj".
# A suffix splits into pieces only one way ("7M" is "7" then "M"), so a long
# near-chord token fails without backtracking blowup.
SUFFIX_PATTERN = (
    r"(?:maj|min|dim|aug|sus|add|11|13|m|M|7|9|6|5|4|2|\+|-|°|ø|º"
    r"|\([0-9#b+\-/]+\))*"
)
NOTE_PATTERN = r"[A-G][#b]?"
CHORD_PATTERN = rf"{NOTE_PATTERN}{SUFFIX_PATTERN}(?:/{NOTE_PATTERN})?"

CHORD_RE = re.compile(
    rf"(?P<root>{NOTE_PATTERN})(?P<suffix>{SUFFIX_PATTERN})(?:/(?P<bass>{NOTE_PATTERN}))?"
)

# One or more chord tokens separated by whitespace, spanning a whole line.
CHORD_SEQUENCE_RE = re.compile(rf"{CHORD_PATTERN}(?:\s+{CHORD_PATTERN})*")


def parse_chord(token: str) -> ChordSymbol | None:
    """Decompose *token* into a :class:`~chordsheet.models.ChordSymbol`.

    Surrounding whitespace is ignored.  Returns ``None`` for anything that is
    not a chord; never raises.
    """
    m = CHORD_RE.fullmatch(token.strip())
    if not m:
        return None
    bass = m.group("bass")
    return ChordSymbol(
        root=Note.parse(m.group("root")),
        suffix=m.group("suffix"),
        bass=Note.parse(bass) if bass else None,
    )


def is_chord(token: str) -> bool:
    return CHORD_RE.fullmatch(token.strip()) is not None


def is_chord_sequence(line: str) -> bool:
    """Return True if *line*, trimmed, is nothing but whitespace-separated chords."""
    return CHORD_SEQUENCE_RE.fullmatch(line.strip()) is not None
