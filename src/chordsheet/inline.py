"""Inline bracket notation: ``[G]Amazing [D]grace``.

A line is parsed into lyric text plus chord markers anchored at offsets into
that text, and serialized back.  ``serialize_line(parse_line(x))`` reproduces
*x*; the parsed pair is the normal form, bracket layout is not.

What counts as a marker
-----------------------

A ``[...]`` group is a chord marker when its content starts with a note
letter (``A``-``G``) and it is not a section tag.  The rest of the content is
not validated, so free-form annotations like ``[G (2x)]`` survive as markers.
Section tags (``[Bridge]``, ``[Final]``) and other groups (``[x2]``) stay part
of the lyric text.
"""

import re
from collections import defaultdict
from collections.abc import Callable

from .chords import is_chord
from .classify import SECTION_LABEL_RE
from .models import ChordMarker, ParsedLine, RenderedLine

# Any bracket group without nested brackets.
BRACKET_GROUP_RE = re.compile(r"\[([^\[\]]+)\]")

_MARKER_START_RE = re.compile(r"[A-G]")

# Tokens of a chord staff; bar separators other than "-" split tokens.
_STAFF_TOKEN_RE = re.compile(r"[^\s|–—]+")

# A token such as "G-D" holds several chords joined by a bar dash.
_JOINED_CHORDS_RE = re.compile(r"([-–—|])")


def is_marker_content(content: str) -> bool:
    return bool(_MARKER_START_RE.match(content)) and not SECTION_LABEL_RE.fullmatch(content)


def parse_line(line: str) -> ParsedLine:
    """Split *line* into lyric text and :class:`~chordsheet.models.ChordMarker` objects."""
    lyrics: list[str] = []
    chords: list[ChordMarker] = []
    length = 0
    last = 0

    for m in BRACKET_GROUP_RE.finditer(line):
        if not is_marker_content(m.group(1)):
            continue
        literal = line[last : m.start()]
        lyrics.append(literal)
        length += len(literal)
        chords.append(ChordMarker(chord=m.group(1), offset=length))
        last = m.end()

    lyrics.append(line[last:])
    return ParsedLine(lyrics="".join(lyrics), chords=chords)


def serialize_line(lyrics: str, chords: list[ChordMarker]) -> str:
    """Embed *chords* into *lyrics* as ``[chord]`` groups.

    Markers at the same offset are written in list order.  Markers at or past
    the end of *lyrics* are appended after the last character.
    """
    by_offset: dict[int, list[ChordMarker]] = defaultdict(list)
    trailing: list[ChordMarker] = []
    for marker in chords:
        if marker.offset >= len(lyrics):
            trailing.append(marker)
        else:
            by_offset[max(marker.offset, 0)].append(marker)

    parts: list[str] = []
    for i, char in enumerate(lyrics):
        parts.extend(f"[{marker.chord}]" for marker in by_offset.get(i, ()))
        parts.append(char)
    parts.extend(f"[{marker.chord}]" for marker in trailing)
    return "".join(parts)


def staff_to_inline(line: str, convert: Callable[[str], str] | None = None) -> str:
    """Bracket every chord token of a chord-staff line in place.

    ``"G  |  D/F#"`` becomes ``"[G]  |  [D/F#]"`` and ``"G-D"`` becomes
    ``"[G]-[D]"``.  Other tokens keep their text and position.  *convert*, if
    given, is applied to each chord first.
    """

    def bracket(token: str) -> str:
        return f"[{convert(token) if convert else token}]"

    def replace(m: re.Match) -> str:
        token = m.group()
        if is_chord(token):
            return bracket(token)
        pieces = _JOINED_CHORDS_RE.split(token)
        return "".join(bracket(piece) if is_chord(piece) else piece for piece in pieces)

    return _STAFF_TOKEN_RE.sub(replace, line)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def chord_row(chords: list[ChordMarker]) -> str:
    """Lay *chords* out in a row so each starts above its lyric offset.

    A chord that would overlap the previous one is pushed right, leaving one
    space between them.
    """
    row = ""
    for marker in chords:
        if not row:
            row = " " * marker.offset
        elif len(row) < marker.offset:
            row += " " * (marker.offset - len(row))
        else:
            row += " "
        row += marker.chord
    return row


def render_line(line: str, show_chords: bool = True) -> RenderedLine:
    """Decompose an inline line into a two-row (or lyrics-only) display form."""
    parsed = parse_line(line)
    if not show_chords or not parsed.chords:
        return RenderedLine(lyric_row=parsed.lyrics)
    return RenderedLine(lyric_row=parsed.lyrics, chord_row=chord_row(parsed.chords))


def render_content(content: str, show_chords: bool = True) -> list[RenderedLine]:
    return [render_line(line, show_chords) for line in content.split("\n")]
