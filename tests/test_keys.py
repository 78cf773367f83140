import pytest

from chordsheet.exceptions import UnknownKeyError
from chordsheet.keys import (
    CANONICAL_KEY_NAMES,
    MAJOR_KEYS,
    MINOR_KEYS,
    Key,
    Note,
    is_minor,
    pitch_class_of,
    prefer_flats,
)

# ---------------------------------------------------------------------------
# Canonical key names
# ---------------------------------------------------------------------------


def test_thirty_four_canonical_keys():
    assert len(CANONICAL_KEY_NAMES) == 34
    assert len(set(CANONICAL_KEY_NAMES)) == 34
    assert len(MAJOR_KEYS) == 17
    assert len(MINOR_KEYS) == 17


def test_canonical_keys_cover_all_pitch_classes():
    assert {pitch_class_of(k) for k in MAJOR_KEYS} == set(range(12))
    assert {pitch_class_of(k) for k in MINOR_KEYS} == set(range(12))


def test_enharmonic_keys_share_pitch_class():
    assert pitch_class_of("C#") == pitch_class_of("Db") == 1
    assert pitch_class_of("A#m") == pitch_class_of("Bbm") == 10


# ---------------------------------------------------------------------------
# pitch_class_of / is_minor
# ---------------------------------------------------------------------------


def test_pitch_class_of_major_and_minor():
    assert pitch_class_of("C") == 0
    assert pitch_class_of("E") == 4
    assert pitch_class_of("B") == 11
    assert pitch_class_of("Em") == 4
    assert pitch_class_of("Gbm") == 6


def test_pitch_class_of_unknown_key_raises():
    with pytest.raises(UnknownKeyError):
        pitch_class_of("H")
    with pytest.raises(UnknownKeyError):
        pitch_class_of("Cb")


def test_unknown_key_error_is_value_error():
    with pytest.raises(ValueError):
        pitch_class_of("Zm")


def test_is_minor():
    assert is_minor("Am")
    assert is_minor("C#m")
    assert not is_minor("A")
    assert not is_minor("Bb")


# ---------------------------------------------------------------------------
# prefer_flats
# ---------------------------------------------------------------------------


def test_prefer_flats_by_accidental():
    assert prefer_flats("Eb")
    assert prefer_flats("Bbm")
    assert not prefer_flats("F#")
    assert not prefer_flats("C#m")


def test_prefer_flats_natural_keys():
    assert prefer_flats("F")
    assert prefer_flats("Dm")
    assert prefer_flats("Gm")
    assert not prefer_flats("C")
    assert not prefer_flats("D")
    assert not prefer_flats("Am")
    assert not prefer_flats("B")


# ---------------------------------------------------------------------------
# Note / Key
# ---------------------------------------------------------------------------


def test_note_parse():
    assert Note.parse("F#") == Note("F", "#")
    assert Note.parse(" Bb ") == Note("B", "b")
    assert Note.parse("H") is None
    assert Note.parse("Am") is None


def test_note_pitch_class_handles_edge_spellings():
    assert Note("C", "b").pitch_class == 11
    assert Note("B", "#").pitch_class == 0
    assert Note("E", "#").pitch_class == 5


def test_note_from_pitch_class():
    assert str(Note.from_pitch_class(1, prefer_flats=False)) == "C#"
    assert str(Note.from_pitch_class(1, prefer_flats=True)) == "Db"
    assert str(Note.from_pitch_class(14, prefer_flats=False)) == "D"


def test_key_properties():
    key = Key("Bbm")
    assert key.tonic == Note("B", "b")
    assert key.is_minor
    assert key.pitch_class == 10
    assert key.prefer_flats
    assert str(key) == "Bbm"


def test_key_rejects_unknown_name():
    with pytest.raises(UnknownKeyError):
        Key("Fb")


def test_pitch_class_of_matches_key():
    for name in CANONICAL_KEY_NAMES:
        assert pitch_class_of(name) == Key(name).pitch_class
