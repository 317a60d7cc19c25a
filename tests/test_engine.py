"""Tests for the transliteration engine (engine.py)."""

import pytest
from ekushey.engine import (
    CompositionState,
    EngineConfig,
    InputClass,
    Splice,
    TransliterationEngine,
    classify_input,
    is_word_start,
    transliterate,
)
from ekushey.tables import AVRO, ARABIC_PHONETIC, GlyphMap


# ── Helpers ───────────────────────────────────────────────────────────────────

def _type(engine: TransliterationEngine, raw: str, text: str = "",
          config: EngineConfig = EngineConfig()) -> tuple[str, list[Splice]]:
    """Type ``raw`` at the end of ``text``; shift is held for upper case."""
    splices = []
    for char in raw:
        caret = len(text)
        splice = engine.process_keystroke(char, char.isupper(), text, caret, caret, config)
        text = text[:caret - splice.delete_count] + splice.text
        splices.append(splice)
    return text, splices


def _rollback(engine: TransliterationEngine, text: str) -> str:
    splice = engine.rollback(text, len(text))
    assert splice is not None
    return text[:len(text) - splice.delete_count] + splice.text


# ── classify_input ────────────────────────────────────────────────────────────

@pytest.mark.parametrize("char", ["a", "Z", "k", "^"])
def test_classify_alphabetic(char):
    assert classify_input(char) is InputClass.ALPHABETIC


def test_classify_reset_marker():
    assert classify_input("`") is InputClass.RESET_MARKER


@pytest.mark.parametrize("char", ["1", " ", "\n", ".", ",", "ক", "é"])
def test_classify_literal(char):
    assert classify_input(char) is InputClass.LITERAL


# ── Splice / state ────────────────────────────────────────────────────────────

def test_splice_cursor():
    assert Splice(2, "abc").cursor(10) == 11
    assert Splice(0, "x").cursor(0) == 1


def test_splice_noop():
    assert Splice().is_noop
    assert not Splice(0, "x").is_noop
    assert not Splice(1, "").is_noop


def test_composition_state_properties():
    state = CompositionState()
    assert state.is_empty
    assert state.match_buffer == ""
    assert state.last_output_length == 0


# ── is_word_start ─────────────────────────────────────────────────────────────

def test_word_start_at_buffer_start():
    assert is_word_start("", 0, "।")
    assert is_word_start("abc", 0, "।")


def test_word_start_after_space_newline_terminator():
    assert is_word_start("ক ", 2, "।")
    assert is_word_start("ক\n", 2, "।")
    assert is_word_start("ক।", 2, "।")


def test_not_word_start_after_letter():
    assert not is_word_start("ক", 1, "।")
    assert not is_word_start("ক.", 2, "।")


# ── Scenario ──────────────────────────────────────────────────────────────────

def test_aa_replaces_word_initial_a_then_m_appends():
    engine = TransliterationEngine(AVRO)
    text, splices = _type(engine, "a")
    assert text == "অ"
    assert splices[-1] == Splice(0, "অ")

    text, splices = _type(engine, "a", text)
    assert text == "আ"
    assert splices[-1] == Splice(1, "আ")

    text, splices = _type(engine, "m", text)
    assert text == "আম"
    assert splices[-1] == Splice(0, "ম")


# ── Longest match ─────────────────────────────────────────────────────────────

def test_kkh_replaces_both_partial_outputs():
    engine = TransliterationEngine(AVRO)
    text, splices = _type(engine, "kkh")
    assert splices == [Splice(0, "ক"), Splice(1, "ক্ক"), Splice(3, "ক্ষ")]
    assert text == "ক্ষ"


def test_ksh_replaces_two_single_units():
    text, _ = _type(TransliterationEngine(AVRO), "ksh")
    assert text == "ক্ষ"


@pytest.mark.parametrize("glyph_map", [AVRO, ARABIC_PHONETIC], ids=lambda g: g.name)
def test_every_key_typed_equals_direct_lookup(glyph_map):
    """Typing any key from a clean state gives that key's own glyph."""
    for key in glyph_map.sorted_keys():
        expected = glyph_map.lookup(key, word_initial=True)
        assert transliterate(key, glyph_map) == expected, key


def test_longer_general_key_beats_shorter_word_initial_key():
    gm = GlyphMap(
        name="test",
        general={"x": "1", "xy": "2", "xyz": "G3"},
        word_initial={"yz": "W2"},
    )
    assert transliterate("xyz", gm) == "G3"


def test_word_initial_tried_before_general_at_same_length():
    gm = GlyphMap(
        name="test",
        general={"b": "B", "ab": "G", "a": "a"},
        word_initial={"ab": "W"},
    )
    assert transliterate("ab", gm) == "W"
    assert transliterate("bab", gm) == "BG"


def test_match_inside_earlier_unit_rerenders_the_rest():
    """'rri' spanning the 'kr' cluster leaves 'k' on its own."""
    text, splices = _type(TransliterationEngine(AVRO), "krri")
    assert text == "কৃ"
    assert splices[-1] == Splice(4, "কৃ")


# ── Word-initial vs mid-word ──────────────────────────────────────────────────

def test_vowel_at_word_start_is_independent():
    assert transliterate("i", AVRO) == "ই"
    assert transliterate("u", AVRO) == "উ"


def test_vowel_after_consonant_is_sign():
    assert transliterate("ki", AVRO) == "কি"
    assert transliterate("ku", AVRO) == "কু"


@pytest.mark.parametrize("prefix", ["ক ", "ক\n", "ক।"])
def test_vowel_after_boundary_is_independent(prefix):
    text, _ = _type(TransliterationEngine(AVRO), "i", prefix)
    assert text == prefix + "ই"


def test_vowel_after_vowel_is_independent():
    assert transliterate("bai", AVRO) == "বাই"


def test_vowel_after_vowel_without_vowel_forming():
    config = EngineConfig(auto_vowel_forming=False)
    assert transliterate("bai", AVRO, config) == "বাি"
    # Word start still uses the independent form
    assert transliterate("i", AVRO, config) == "ই"


def test_inherent_o_produces_no_sign():
    assert transliterate("kotha", AVRO) == "কথা"


def test_oi_after_consonant():
    assert transliterate("boi", AVRO) == "বৈ"


def test_sentence():
    assert transliterate("Ami banglay gan gai", AVRO) == "আমি বাংলায় গান গাই"


# ── Case ──────────────────────────────────────────────────────────────────────

def test_shift_selects_upper_case_key():
    engine = TransliterationEngine(AVRO)
    splice = engine.process_keystroke("t", True, "", 0, 0)
    assert splice.text == "ট"


def test_no_shift_folds_to_lower_case():
    engine = TransliterationEngine(AVRO)
    splice = engine.process_keystroke("T", False, "", 0, 0)
    assert splice.text == "ত"


def test_caseless_letter_same_with_shift():
    assert transliterate("K", AVRO) == transliterate("k", AVRO)


# ── Reset marker / literals / fallback ────────────────────────────────────────

def test_reset_marker_on_clean_state_is_noop():
    engine = TransliterationEngine(AVRO)
    splice = engine.process_keystroke("`", False, "abc", 3, 3)
    assert splice.is_noop
    assert engine.state.is_empty


def test_reset_marker_ends_composition():
    engine = TransliterationEngine(AVRO)
    text, splices = _type(engine, "k`h")
    assert splices[1].is_noop
    assert text == "কহ"


def test_literal_commits_composition():
    engine = TransliterationEngine(AVRO)
    text, splices = _type(engine, "k1h")
    assert splices[1] == Splice(0, "1")
    assert text == "ক1হ"


def test_literal_clears_state():
    engine = TransliterationEngine(AVRO)
    _type(engine, "k ")
    assert engine.state.is_empty
    assert not engine.is_composing


def test_unmapped_key_falls_back_to_itself():
    gm = GlyphMap(name="test", general={"a": "A"}, word_initial={})
    engine = TransliterationEngine(gm)
    text, splices = _type(engine, "ab")
    assert text == "Ab"
    assert splices[-1] == Splice(0, "b")
    assert engine.state.match_buffer == "b"
    assert engine.state.last_output_length == 1


def test_state_tracks_match_buffer_and_last_output():
    engine = TransliterationEngine(AVRO)
    _type(engine, "kkh")
    assert engine.state.match_buffer == "kkh"
    assert engine.state.last_output_length == len("ক্ষ")


def test_external_edit_drops_stale_state():
    engine = TransliterationEngine(AVRO)
    _type(engine, "k")
    # Text no longer ends with the composed 'ক'
    splice = engine.process_keystroke("h", False, "z", 1, 1)
    assert splice == Splice(0, "হ")


# ── Rollback ──────────────────────────────────────────────────────────────────

def test_rollback_round_trip():
    engine = TransliterationEngine(AVRO)
    text, _ = _type(engine, "kha", "x ")
    assert text == "x খা"
    text = _rollback(engine, text)
    assert text == "x খ"
    text = _rollback(engine, text)
    assert text == "x ক"
    text = _rollback(engine, text)
    assert text == "x "
    assert engine.rollback(text, len(text)) is None


def test_rollback_then_type_is_clean():
    engine = TransliterationEngine(AVRO)
    text, _ = _type(engine, "kkh")
    for _ in range(3):
        text = _rollback(engine, text)
    assert text == ""
    text, _ = _type(engine, "h", text)
    assert text == "হ"


@pytest.mark.parametrize("raw", ["kkh", "aam", "banglay", "krri", "kotha", "boi"])
def test_rollback_matches_shorter_replay(raw):
    engine = TransliterationEngine(AVRO)
    text, _ = _type(engine, raw)
    text = _rollback(engine, text)
    assert text == transliterate(raw[:-1], AVRO)


def test_rollback_covers_keys_before_unmatched_key():
    """A key with no entry ends the run but stays undoable with the keys before it."""
    engine = TransliterationEngine(ARABIC_PHONETIC)
    text, splices = _type(engine, "shU", "x ")
    assert text == "x شU"
    assert splices[-1] == Splice(0, "U")
    assert engine.state.match_buffer == "U"
    text = _rollback(engine, text)
    assert text == "x ش"
    text = _rollback(engine, text)
    assert text == "x س"
    text = _rollback(engine, text)
    assert text == "x "
    assert engine.rollback(text, len(text)) is None


def test_rollback_with_changed_text_returns_none():
    engine = TransliterationEngine(AVRO)
    _type(engine, "kh")
    assert engine.rollback("something else", 3) is None
    assert engine.state.is_empty


# ── Other tables ──────────────────────────────────────────────────────────────

def test_arabic_phonetic():
    assert transliterate("ktb", ARABIC_PHONETIC) == "كتب"
    assert transliterate("kh", ARABIC_PHONETIC) == "خ"
    assert transliterate("i", ARABIC_PHONETIC) == "إ"
    assert transliterate("bi", ARABIC_PHONETIC) == "بي"


def test_summary():
    engine = TransliterationEngine(AVRO)
    assert "Avro" in engine.summary()
