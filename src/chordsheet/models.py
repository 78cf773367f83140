from dataclasses import dataclass, field

from .keys import Note


@dataclass(frozen=True)
class ChordSymbol:
    """A parsed chord: root note, opaque quality suffix, optional slash bass.

    ``str()`` renders it back in chord-token form, e.g. ``"F#m7/E"``.
    """

    root: Note
    suffix: str = ""
    bass: Note | None = None

    def __str__(self) -> str:
        text = f"{self.root}{self.suffix}"
        if self.bass is not None:
            text += f"/{self.bass}"
        return text


@dataclass(frozen=True)
class ChordMarker:
    """A chord annotation anchored at *offset* in a line's lyric text.

    *chord* is the raw bracket content.  It usually parses as a chord but
    free-form annotations are tolerated.
    """

    chord: str
    offset: int


@dataclass
class ParsedLine:
    """A line split into its lyric text and the chords anchored in it.

    Example: ``"[G]Amazing [D]grace"`` parses to
    ``ParsedLine("Amazing grace", [ChordMarker("G", 0), ChordMarker("D", 8)])``.
    Markers keep their original order, including several at one offset.
    """

    lyrics: str
    chords: list[ChordMarker] = field(default_factory=list)


@dataclass(frozen=True)
class RenderedLine:
    """A display-ready line: an optional chord row above the lyric row."""

    lyric_row: str
    chord_row: str | None = None


@dataclass(frozen=True)
class WordSegment:
    """A whitespace run or a word of a line's lyric text.

    ``start``/``end`` are ``[start, end)`` offsets into the lyric text.
    ``chord`` is the marker attached to this run, if any.
    """

    text: str
    start: int
    end: int
    chord: ChordMarker | None = None

    @property
    def is_space(self) -> bool:
        return self.text != "" and self.text.isspace()


@dataclass(frozen=True)
class ConversionResult:
    """Output of a stacked-format import."""

    content: str
    key: str


@dataclass
class Section:
    """A labelled run of content lines (verse, chorus, bridge, etc.)."""

    label: str | None  # e.g. "Verse 2", "Refrão", None before the first tag
    lines: list[str] = field(default_factory=list)


@dataclass
class Song:
    """A song's metadata and its canonical inline content."""

    title: str
    artist: str
    content: str = ""
    key: str | None = None
    capo: int | None = None
