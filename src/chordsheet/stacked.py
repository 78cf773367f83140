"""Stacked chord sheets → inline notation.

Chord sites print chords on their own row above the lyric they belong to::

    G       D
    Amazing grace

This module merges each such pair into a single inline line::

    [G]Amazing [D]grace

Algorithm
---------
1. A line is a chord row when, trimmed and with whitespace collapsed, it is
   one or more chord tokens and nothing else.
2. A chord row followed by a non-blank line that is not itself a chord row is
   merged with it: every chord is anchored at the lyric character in the
   column where the chord starts.  Chords past the end of the lyric are
   appended to it.
3. A chord row with no lyric below it (an instrumental passage) becomes
   ``[G] [D] [Em]``.
4. Every other line is copied as is; blank lines become empty lines.

The first chord of the document, reduced to root, accidental and minor
marker, is taken as the song's key.  ``"C"`` is used when there is no chord
or the reduced name is not a canonical key.
"""

import logging
import re

from .chords import is_chord_sequence, parse_chord
from .keys import MINOR_MARKER, is_canonical_key
from .models import ConversionResult

logger = logging.getLogger(__name__)

DEFAULT_KEY = "C"

# A "min"/"m" suffix marks a minor key, "maj" does not.
_MINOR_SUFFIX_RE = re.compile(r"m(?!aj)")


def chord_columns(line: str, chords: list[str]) -> list[tuple[int, str]]:
    """Return ``(column, chord)`` pairs locating each of *chords* in *line*.

    *chords* must appear in *line* in order.  Each is matched at the first
    non-space column from which the rest of the line starts with it.
    """
    positions: list[tuple[int, str]] = []
    pos = 0
    index = 0
    while pos < len(line) and index < len(chords):
        chord = chords[index]
        if not line[pos].isspace() and line.startswith(chord, pos):
            positions.append((pos, chord))
            index += 1
            pos += len(chord)
        else:
            pos += 1
    return positions


def merge_chord_lyric_lines(chord_line: str, lyric_line: str) -> str:
    """Merge a chord row and the lyric row below it into one inline line.

    Example::

        chord_line = "G       D"
        lyric_line = "Amazing grace"
        result     = "[G]Amazing [D]grace"
    """
    positions = chord_columns(chord_line, chord_line.split())
    parts: list[str] = []
    pending = 0
    for lyric_pos, char in enumerate(lyric_line):
        while pending < len(positions) and positions[pending][0] <= lyric_pos:
            parts.append(f"[{positions[pending][1]}]")
            pending += 1
        parts.append(char)
    parts.extend(f"[{chord}]" for _, chord in positions[pending:])
    return "".join(parts)


def detect_key(chord: str | None, default: str = DEFAULT_KEY) -> str:
    """Reduce *chord* to a key name: ``"G7"`` → ``"G"``, ``"Dm7"`` → ``"Dm"``."""
    parsed = parse_chord(chord) if chord else None
    if parsed is None:
        return default
    name = str(parsed.root)
    if _MINOR_SUFFIX_RE.match(parsed.suffix):
        name += MINOR_MARKER
    if not is_canonical_key(name):
        logger.info("Detected key %r is not a canonical key; using %s", name, default)
        return default
    return name


def convert_stacked(raw_text: str, default_key: str = DEFAULT_KEY) -> ConversionResult:
    """Convert a stacked chord sheet to canonical inline content.

    Never fails: text without any chord rows comes back as plain lyrics with
    the key set to *default_key*.
    """
    lines = [line.removesuffix("\r") for line in raw_text.split("\n")]
    result: list[str] = []
    first_chord: str | None = None
    merged = 0

    i = 0
    while i < len(lines):
        line = lines[i]
        if not is_chord_sequence(line):
            result.append(line if line.strip() else "")
            i += 1
            continue

        chords = line.split()
        if first_chord is None:
            first_chord = chords[0]

        next_line = lines[i + 1] if i + 1 < len(lines) else ""
        if next_line.strip() and not is_chord_sequence(next_line):
            result.append(merge_chord_lyric_lines(line, next_line))
            merged += 1
            i += 2
        else:
            result.append(" ".join(f"[{chord}]" for chord in chords))
            i += 1

    key = detect_key(first_chord, default_key)
    logger.debug(
        "Converted %d lines (%d chord/lyric pairs), key %s", len(lines), merged, key
    )
    return ConversionResult(content="\n".join(result), key=key)
