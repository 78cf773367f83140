"""Transposition of notes, chords and whole songs.

Pitch arithmetic is done on pitch classes and normalised with a double modulo,
so negative intervals work.  The target spelling (sharps or flats) is passed
in explicitly, usually ``prefer_flats(target_key)``.  Anything that is not a
note or chord is returned unchanged.
"""

import logging

from .chords import parse_chord
from .classify import CHORD_LINE_THRESHOLD, LineType, classify_line
from .inline import BRACKET_GROUP_RE, staff_to_inline
from .keys import Note, pitch_class_of, prefer_flats
from .models import ChordSymbol

logger = logging.getLogger(__name__)


def _shift(note: Note, semitones: int, prefer_flats: bool) -> Note:
    pitch_class = ((note.pitch_class + semitones) % 12 + 12) % 12
    return Note.from_pitch_class(pitch_class, prefer_flats)


def transpose_note(note: str, semitones: int, prefer_flats: bool) -> str:
    """Shift a bare note name such as ``"F#"`` by *semitones*."""
    parsed = Note.parse(note)
    if parsed is None:
        return note
    return str(_shift(parsed, semitones, prefer_flats))


def transpose_symbol(chord: ChordSymbol, semitones: int, prefer_flats: bool) -> ChordSymbol:
    """Shift root and bass of *chord*; the suffix is copied untouched."""
    bass = _shift(chord.bass, semitones, prefer_flats) if chord.bass is not None else None
    return ChordSymbol(
        root=_shift(chord.root, semitones, prefer_flats),
        suffix=chord.suffix,
        bass=bass,
    )


def transpose_chord(chord: str, semitones: int, prefer_flats: bool) -> str:
    """Shift the chord token *chord* by *semitones*.

    ``transpose_chord("D/F#", 3, True) == "F/A"``.  Tokens that are not chords
    come back unchanged.
    """
    parsed = parse_chord(chord)
    if parsed is None:
        return chord
    return str(transpose_symbol(parsed, semitones, prefer_flats))


def semitones_between(from_key: str, to_key: str) -> int:
    """Signed distance from *from_key* to *to_key*; may be negative.

    Raises UnknownKeyError for non-canonical key names.
    """
    return pitch_class_of(to_key) - pitch_class_of(from_key)


# ---------------------------------------------------------------------------
# Whole content
# ---------------------------------------------------------------------------


def transpose_inline_line(line: str, semitones: int, prefer_flats: bool) -> str:
    """Transpose every ``[chord]`` group of an inline line.

    Groups whose content is not a chord (section tags, notes) are kept.
    """
    return BRACKET_GROUP_RE.sub(
        lambda m: f"[{transpose_chord(m.group(1), semitones, prefer_flats)}]", line
    )


def normalize_chord_staff(line: str, semitones: int, prefer_flats: bool) -> str:
    """Rewrite a chord-staff line in inline form, transposing as it goes.

    ``"G  |  D/F#"`` shifted by 2 becomes ``"[A]  |  [E/G#]"``.  Tokens that
    are not chords keep their text and position.
    """
    return staff_to_inline(line, lambda chord: transpose_chord(chord, semitones, prefer_flats))


def transpose_line(
    line: str,
    semitones: int,
    prefer_flats: bool,
    threshold: float = CHORD_LINE_THRESHOLD,
) -> str:
    line_type = classify_line(line, threshold)
    if line_type == LineType.CHORD:
        return normalize_chord_staff(line, semitones, prefer_flats)
    if line_type in (LineType.BLANK, LineType.TAB):
        return line
    return transpose_inline_line(line, semitones, prefer_flats)


def transpose_content(
    content: str,
    from_key: str,
    to_key: str,
    threshold: float = CHORD_LINE_THRESHOLD,
) -> str:
    """Transpose canonical content written in *from_key* into *to_key*.

    Chord-staff lines are turned into inline form on the way.  Transposing into
    the same key still normalises chord spelling to that key's preference.

    Raises UnknownKeyError if either key is not a canonical key name.
    """
    semitones = semitones_between(from_key, to_key)
    flats = prefer_flats(to_key)
    logger.debug("Transposing %s -> %s (%+d semitones, flats=%s)", from_key, to_key, semitones, flats)
    return "\n".join(
        transpose_line(line, semitones, flats, threshold) for line in content.split("\n")
    )
