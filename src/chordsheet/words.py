"""Word-level view of an inline line, for attaching chords to lyric words.

:func:`segment_line` splits the lyric text into alternating word and
whitespace runs, each carrying the chord marker anchored inside it (a marker
exactly at the run's start wins).

Two families of edit operations rewrite the whole line:

* :func:`attach_chord` / :func:`detach_chord` work on a segment.  An existing
  chord is replaced or removed by searching for its ``[chord]`` text, so with
  two identical chords on a line the *first* one is affected, whichever word
  was clicked.
* :func:`replace_marker` / :func:`remove_marker` address a marker by its index
  in :attr:`ParsedLine.chords` and always hit the intended one.

Every operation returns a new line string; parse it again to get fresh
segments.
"""

import logging
import re
from dataclasses import replace

from .chords import is_chord
from .inline import parse_line, serialize_line
from .models import ChordMarker, WordSegment

logger = logging.getLogger(__name__)

_RUN_RE = re.compile(r"\S+|\s+")


def segment_line(line: str) -> list[WordSegment]:
    """Split *line* into :class:`~chordsheet.models.WordSegment` runs."""
    parsed = parse_line(line)
    segments: list[WordSegment] = []
    for m in _RUN_RE.finditer(parsed.lyrics):
        start, end = m.start(), m.end()
        exact = next((c for c in parsed.chords if c.offset == start), None)
        inside = next((c for c in parsed.chords if start <= c.offset < end), None)
        segments.append(WordSegment(text=m.group(), start=start, end=end, chord=exact or inside))

    if not segments and parsed.chords:
        # Chords with no lyric at all still need something to click on.
        segments.append(WordSegment(text="", start=0, end=0, chord=parsed.chords[0]))
    return segments


def _valid_chord(chord: str) -> str | None:
    chord = chord.strip()
    if not is_chord(chord):
        logger.debug("Rejected chord input %r", chord)
        return None
    return chord


def attach_chord(line: str, segment_index: int, chord: str) -> str:
    """Put *chord* on the segment at *segment_index*.

    If the segment already has a chord, the first ``[old]`` group in the line
    is rewritten to ``[chord]``.  Otherwise a new marker goes in front of the
    segment's first character.  Invalid chords and out-of-range indexes leave
    the line unchanged.
    """
    chord = _valid_chord(chord)
    segments = segment_line(line)
    if chord is None or not 0 <= segment_index < len(segments):
        return line

    segment = segments[segment_index]
    if segment.chord is not None:
        return line.replace(f"[{segment.chord.chord}]", f"[{chord}]", 1)

    parsed = parse_line(line)
    parsed.chords.append(ChordMarker(chord=chord, offset=segment.start))
    return serialize_line(parsed.lyrics, parsed.chords)


def detach_chord(line: str, segment_index: int) -> str:
    """Remove the chord of the segment at *segment_index*.

    The first ``[chord]`` group with the same text is removed, which is not
    necessarily the one on this segment when the chord appears twice.
    """
    segments = segment_line(line)
    if not 0 <= segment_index < len(segments):
        return line
    marker = segments[segment_index].chord
    if marker is None:
        return line
    return line.replace(f"[{marker.chord}]", "", 1)


def replace_marker(line: str, marker_index: int, chord: str) -> str:
    """Change the chord of the *marker_index*-th marker, keeping its position."""
    chord = _valid_chord(chord)
    parsed = parse_line(line)
    if chord is None or not 0 <= marker_index < len(parsed.chords):
        return line
    parsed.chords[marker_index] = replace(parsed.chords[marker_index], chord=chord)
    return serialize_line(parsed.lyrics, parsed.chords)


def remove_marker(line: str, marker_index: int) -> str:
    """Remove the *marker_index*-th marker and nothing else."""
    parsed = parse_line(line)
    if not 0 <= marker_index < len(parsed.chords):
        return line
    del parsed.chords[marker_index]
    return serialize_line(parsed.lyrics, parsed.chords)
