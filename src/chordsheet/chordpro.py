"""ChordPro export.

Renders a :class:`~chordsheet.models.Song` to ChordPro (``.cho``) text.  The
song's inline content is already ChordPro-compatible; section-tag lines are
turned into directives and chord-staff lines into inline chords.

Section tag → ChordPro directive mapping
----------------------------------------

+--------------------------------------+------------------------------------+
| Tag (case-insensitive first word)    | Directive pair                     |
+======================================+====================================+
| ``Verse``, ``Verse N``               | ``{start_of_verse: Verse N}`` /    |
|                                      | ``{end_of_verse}``                 |
+--------------------------------------+------------------------------------+
| ``Chorus``, ``Refrão``               | ``{start_of_chorus}`` /            |
|                                      | ``{end_of_chorus}``                |
+--------------------------------------+------------------------------------+
| ``Bridge``, ``Ponte``                | ``{start_of_bridge}`` /            |
|                                      | ``{end_of_bridge}``                |
+--------------------------------------+------------------------------------+
| ``Tab``                              | ``{start_of_tab}`` /               |
|                                      | ``{end_of_tab}``                   |
+--------------------------------------+------------------------------------+
| anything else (``Intro``, ``Solo``,  | ``{comment: <label>}``             |
| ``Final``, ``Pré-Refrão`` ...)       |                                    |
+--------------------------------------+------------------------------------+
| no tag yet                           | no wrapper directive               |
+--------------------------------------+------------------------------------+

Usage::

    from chordsheet.chordpro import ChordProFormatter
    text = ChordProFormatter().render(song)
"""

import re

from .classify import LineType, classify_line, section_label
from .inline import staff_to_inline
from .models import Section, Song

# Label without its number: "Verse 2" -> "Verse "
_LABEL_NAME_RE = re.compile(r"\D+")

_STRUCTURED = {
    "verse": ("start_of_verse", "end_of_verse"),
    "chorus": ("start_of_chorus", "end_of_chorus"),
    "refrão": ("start_of_chorus", "end_of_chorus"),
    "bridge": ("start_of_bridge", "end_of_bridge"),
    "ponte": ("start_of_bridge", "end_of_bridge"),
    "tab": ("start_of_tab", "end_of_tab"),
}


class ChordProFormatter:
    """Render a :class:`~chordsheet.models.Song` to ChordPro text."""

    def render(self, song: Song) -> str:
        """Return ChordPro text for *song*.

        The returned string ends with a single newline and uses Unix line
        endings (``\\n``) throughout.
        """
        parts: list[str] = []

        # --- Metadata block ---
        parts.append(f"{{title: {song.title}}}")
        parts.append(f"{{artist: {song.artist}}}")
        if song.key:
            parts.append(f"{{key: {song.key}}}")
        if song.capo:
            parts.append(f"{{capo: {song.capo}}}")

        # --- Section blocks ---
        for section in split_sections(song.content):
            parts.append("")  # blank line before every section
            parts.extend(_render_section(section))

        return "\n".join(parts) + "\n"


def split_sections(content: str) -> list[Section]:
    """Group content lines into sections, starting a new one at each tag line.

    Leading and trailing blank lines of a section are dropped; sections left
    empty are kept only when they carry a label.
    """
    sections: list[Section] = []
    current = Section(label=None)
    for line in content.split("\n"):
        label = section_label(line)
        if label is not None:
            sections.append(current)
            current = Section(label=label)
        else:
            current.lines.append(line)
    sections.append(current)

    for section in sections:
        while section.lines and not section.lines[0].strip():
            section.lines.pop(0)
        while section.lines and not section.lines[-1].strip():
            section.lines.pop()
    return [s for s in sections if s.lines or s.label]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _render_line(line: str) -> str:
    if classify_line(line) == LineType.CHORD:
        return staff_to_inline(line)
    return line


def _render_section(section: Section) -> list[str]:
    """Return a list of lines for one section (no trailing blank line)."""
    label = section.label
    lines = [_render_line(line) for line in section.lines]

    if not label:
        return lines

    name = _LABEL_NAME_RE.match(label).group().strip()
    if name.lower() in _STRUCTURED:
        start_dir, end_dir = _STRUCTURED[name.lower()]
        # Keep numbered labels ("Verse 2"); bare directive otherwise
        if name != label:
            start_line = f"{{{start_dir}: {label}}}"
        else:
            start_line = f"{{{start_dir}}}"
        return [start_line, *lines, f"{{{end_dir}}}"]

    return [f"{{comment: {label}}}", *lines]
