from click.testing import CliRunner

from chordsheet.cli import main

STACKED = "G       D\nAmazing grace\n"
INLINE = "[G]Amazing [D]grace\n"

# ---------------------------------------------------------------------------
# --help
# ---------------------------------------------------------------------------


def test_help_output():
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Convert, transpose and render chord sheets" in result.output
    for command in ("import", "transpose", "render", "chordpro"):
        assert command in result.output


# ---------------------------------------------------------------------------
# import
# ---------------------------------------------------------------------------


def test_import_from_stdin():
    result = CliRunner().invoke(main, ["import", "-"], input=STACKED)
    assert result.exit_code == 0
    assert "[G]Amazing [D]grace" in result.output
    assert "Key: G" in result.output


def test_import_key_only():
    result = CliRunner().invoke(main, ["import", "--key-only", "-"], input=STACKED)
    assert result.exit_code == 0
    assert result.output.strip() == "G"


def test_import_writes_output_file(tmp_path):
    source = tmp_path / "song.txt"
    source.write_text(STACKED, encoding="utf-8")
    dest = tmp_path / "song.inline"
    result = CliRunner().invoke(main, ["import", str(source), "-o", str(dest)])
    assert result.exit_code == 0
    assert dest.read_text(encoding="utf-8") == INLINE


def test_import_default_key_from_env():
    result = CliRunner().invoke(
        main, ["import", "--key-only", "-"], input="no chords\n",
        env={"CHORDSHEET_DEFAULT_KEY": "Em"},
    )
    assert result.exit_code == 0
    assert result.output.strip() == "Em"


def test_bad_setting_exits_nonzero():
    result = CliRunner().invoke(
        main, ["import", "-"], input=STACKED, env={"CHORDSHEET_DEFAULT_KEY": "H"}
    )
    assert result.exit_code == 1
    assert "Error" in result.output


def test_missing_file_exits_nonzero():
    result = CliRunner().invoke(main, ["import", "/nonexistent/song.txt"])
    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# transpose
# ---------------------------------------------------------------------------


def test_transpose():
    result = CliRunner().invoke(main, ["transpose", "-", "--from", "G", "--to", "A"], input=INLINE)
    assert result.exit_code == 0
    assert result.output == "[A]Amazing [E]grace\n"


def test_transpose_to_flat_key():
    result = CliRunner().invoke(main, ["transpose", "-", "--from", "G", "--to", "Ab"], input=INLINE)
    assert result.output == "[Ab]Amazing [Eb]grace\n"


def test_transpose_rejects_unknown_key():
    result = CliRunner().invoke(main, ["transpose", "-", "--from", "G", "--to", "H"], input=INLINE)
    assert result.exit_code != 0
    assert "Invalid value" in result.output


def test_transpose_requires_keys():
    result = CliRunner().invoke(main, ["transpose", "-"], input=INLINE)
    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


def test_render_two_rows():
    result = CliRunner().invoke(main, ["render", "-"], input=INLINE)
    assert result.exit_code == 0
    assert result.output == "G       D\nAmazing grace\n"


def test_render_lyrics_only():
    result = CliRunner().invoke(main, ["render", "--lyrics-only", "-"], input=INLINE)
    assert result.output == "Amazing grace\n"


def test_render_transposed():
    result = CliRunner().invoke(main, ["render", "-", "--from", "G", "--to", "F"], input=INLINE)
    assert result.output == "F       C\nAmazing grace\n"


def test_render_needs_both_keys():
    result = CliRunner().invoke(main, ["render", "-", "--to", "F"], input=INLINE)
    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# chordpro
# ---------------------------------------------------------------------------


def test_chordpro_export():
    result = CliRunner().invoke(
        main,
        ["chordpro", "-", "--title", "Amazing Grace", "--artist", "Traditional", "--key", "G"],
        input="[Verse 1]\n" + INLINE,
    )
    assert result.exit_code == 0
    assert "{title: Amazing Grace}" in result.output
    assert "{key: G}" in result.output
    assert "{start_of_verse: Verse 1}" in result.output


def test_chordpro_transposed_export():
    result = CliRunner().invoke(
        main,
        ["chordpro", "-", "--title", "T", "--artist", "A", "--key", "G", "--to", "D"],
        input=INLINE,
    )
    assert result.exit_code == 0
    assert "{key: D}" in result.output
    assert "[D]Amazing [A]grace" in result.output


def test_chordpro_to_needs_key():
    result = CliRunner().invoke(
        main, ["chordpro", "-", "--title", "T", "--artist", "A", "--to", "D"], input=INLINE
    )
    assert result.exit_code != 0
