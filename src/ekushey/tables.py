"""
Glyph tables for the phonetic and fixed keyboard layouts.

Principles:
- Phonetic keys are 1-3 Latin characters, matched longest first
- Tables are case-sensitive: shifted letters may carry their own glyph
  (t/T, d/D, n/N, s/S ...), caseless letters get uppercase aliases so that
  caps lock does not change what they produce
- Each phonetic layout has a general table and a word-initial table holding
  the independent vowel forms used at the start of a word
- Fixed layouts map one key to one glyph with no state

Usage:
    from ekushey.tables import AVRO, phonetic_table, direct_map

    AVRO.lookup("kh", word_initial=False)    # 'খ'
    direct_map(Layout.BANGLA_JATIYO)["j"]     # 'ক'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ekushey.layouts import Layout

MAX_KEY_LENGTH = 3

BENGALI_TERMINATOR = "।"  # দাঁড়ি ।


@dataclass(frozen=True, slots=True)
class GlyphMap:
    """A phonetic layout's general and word-initial tables."""

    name: str
    general: Mapping[str, str]
    word_initial: Mapping[str, str]
    terminator: str = "."
    # Glyphs after which a vowel takes its independent form (auto vowel forming)
    vowels: frozenset[str] = field(default_factory=frozenset)
    _max_key_length: int = field(default=1, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for table in (self.general, self.word_initial):
            for key in table:
                if not 1 <= len(key) <= MAX_KEY_LENGTH:
                    raise ValueError(
                        f"{self.name}: key {key!r} must be 1-{MAX_KEY_LENGTH} characters"
                    )
        object.__setattr__(self, "general", MappingProxyType(dict(self.general)))
        object.__setattr__(self, "word_initial", MappingProxyType(dict(self.word_initial)))
        keys = [*self.general, *self.word_initial]
        object.__setattr__(self, "_max_key_length", max(map(len, keys), default=1))

    @property
    def max_key_length(self) -> int:
        return self._max_key_length

    def has(self, key: str) -> bool:
        return key in self.general or key in self.word_initial

    def lookup(self, key: str, word_initial: bool) -> str | None:
        """Word-initial table first when at word start, then the general table."""
        if word_initial and key in self.word_initial:
            return self.word_initial[key]
        return self.general.get(key)

    def sorted_keys(self) -> list[str]:
        """All keys, longest first, for display."""
        return sorted({*self.general, *self.word_initial}, key=lambda k: (-len(k), k))


def _table(entries: list[tuple[str, str, str]], caseless: str = "") -> dict[str, str]:
    """Build a lookup dict from (latin, glyph, note) entries.

    Keys made only of ``caseless`` letters also get an all-uppercase alias,
    unless the table already defines that uppercase key explicitly.
    """
    table = {latin: glyph for latin, glyph, _ in entries}
    for latin, glyph, _ in entries:
        upper = latin.upper()
        if upper != latin and upper not in table and all(c in caseless for c in latin):
            table[upper] = glyph
    return table


# ── Avro-style Bengali phonetic ─────────────────────────────────────────────
# Each entry: (latin_input, bengali_output, notes)

AVRO_ENTRIES = [
    # ── Conjuncts and digraphs (three keys) ──────────────────────────────
    ("kkh", "ক্ষ",  "khiyo - k + ssa (also ksh)"),
    ("ksh", "ক্ষ",  "khiyo"),
    ("ngg", "ঙ্গ",  "nga + ga"),
    ("ngk", "ঙ্ক",  "nga + ka"),
    ("cch", "চ্ছ",  "ca + cha"),
    ("ShT", "ষ্ট",  "ssa + tta"),
    ("sth", "স্থ",  "sa + tha"),
    ("rri", "ৃ",   "ri-kar"),

    # ── Aspirated consonants and fricatives (two keys) ───────────────────
    ("kh",  "খ",  "kha"),
    ("gh",  "ঘ",  "gha"),
    ("Ng",  "ঙ",  "nga"),
    ("ch",  "ছ",  "cha"),
    ("jh",  "ঝ",  "jha"),
    ("NG",  "ঞ",  "nya"),
    ("Th",  "ঠ",  "ttha"),
    ("Dh",  "ঢ",  "ddha"),
    ("th",  "থ",  "tha"),
    ("dh",  "ধ",  "dha"),
    ("ph",  "ফ",  "pha"),
    ("bh",  "ভ",  "bha"),
    ("sh",  "শ",  "sha"),
    ("Sh",  "ষ",  "ssa"),
    ("Rh",  "ঢ়",  "rha"),
    ("ng",  "ং",  "anusvara"),

    # ── Doubled and clustered consonants (two keys) ──────────────────────
    ("kk",  "ক্ক",  "ka + ka"),
    ("kt",  "ক্ত",  "ka + ta"),
    ("gg",  "জ্ঞ",  "gya - Avro convention"),
    ("cc",  "চ্চ",  "ca + ca"),
    ("jj",  "জ্জ",  "ja + ja"),
    ("TT",  "ট্ট",  "tta + tta"),
    ("DD",  "ড্ড",  "dda + dda"),
    ("tt",  "ত্ত",  "ta + ta"),
    ("dd",  "দ্দ",  "da + da"),
    ("nt",  "ন্ত",  "na + ta"),
    ("nd",  "ন্দ",  "na + da"),
    ("nn",  "ন্ন",  "na + na"),
    ("pp",  "প্প",  "pa + pa"),
    ("mb",  "ম্ব",  "ma + ba"),
    ("mp",  "ম্প",  "ma + pa"),
    ("mm",  "ম্ম",  "ma + ma"),
    ("ll",  "ল্ল",  "la + la"),
    ("st",  "স্ত",  "sa + ta"),
    ("sT",  "স্ট",  "sa + tta"),
    ("sk",  "স্ক",  "sa + ka"),
    ("sp",  "স্প",  "sa + pa"),

    # r-phola after a consonant
    ("kr",  "ক্র",  "ka + ra-phola"),
    ("gr",  "গ্র",  "ga + ra-phola"),
    ("pr",  "প্র",  "pa + ra-phola"),
    ("br",  "ব্র",  "ba + ra-phola"),
    ("tr",  "ত্র",  "ta + ra-phola"),
    ("dr",  "দ্র",  "da + ra-phola"),

    # ── Vowel signs (kar) ────────────────────────────────────────────────
    ("aa",  "া",  "aa-kar (same as a mid-word)"),
    ("ii",  "ী",  "dirgho i-kar"),
    ("ee",  "ী",  "dirgho i-kar"),
    ("uu",  "ূ",  "dirgho u-kar"),
    ("oo",  "ু",  "u-kar - Avro convention"),
    ("oi",  "ৈ",  "oi-kar"),
    ("OI",  "ৈ",  "oi-kar"),
    ("ou",  "ৌ",  "ou-kar"),
    ("OU",  "ৌ",  "ou-kar"),
    ("a",   "া",  "aa-kar"),
    ("A",   "া",  "aa-kar"),
    ("i",   "ি",  "i-kar"),
    ("I",   "ী",  "dirgho i-kar"),
    ("u",   "ু",  "u-kar"),
    ("U",   "ূ",  "dirgho u-kar"),
    ("e",   "ে",  "e-kar"),
    ("O",   "ো",  "o-kar"),
    ("o",   "",   "inherent vowel - no sign"),

    # ── Single consonants ────────────────────────────────────────────────
    ("k",   "ক",  "ka"),
    ("q",   "ক",  "ka (alias)"),
    ("g",   "গ",  "ga"),
    ("c",   "চ",  "ca"),
    ("j",   "জ",  "ja"),
    ("T",   "ট",  "tta"),
    ("D",   "ড",  "dda"),
    ("N",   "ণ",  "murdhonno na"),
    ("t",   "ত",  "ta"),
    ("d",   "দ",  "da"),
    ("n",   "ন",  "donto na"),
    ("p",   "প",  "pa"),
    ("f",   "ফ",  "pha (alias)"),
    ("b",   "ব",  "ba"),
    ("v",   "ভ",  "bha (alias)"),
    ("m",   "ম",  "ma"),
    ("z",   "য",  "antostho ja"),
    ("r",   "র",  "ra"),
    ("R",   "ড়",  "rra"),
    ("l",   "ল",  "la"),
    ("S",   "শ",  "talobyo sha"),
    ("s",   "স",  "donto sa"),
    ("h",   "হ",  "ha"),
    ("y",   "য়",  "antostho ya"),
    ("x",   "ক্স",  "ka + sa"),
    ("w",   "্ব",  "ba-phola after a consonant"),
    ("Z",   "্য",  "ya-phola"),
    ("^",   "ঁ",  "chandrabindu"),
]

AVRO_INITIAL_ENTRIES = [
    ("rri", "ঋ",  "ri"),
    ("aa",  "আ",  "aa"),
    ("ii",  "ঈ",  "dirgho i"),
    ("ee",  "ঈ",  "dirgho i"),
    ("uu",  "ঊ",  "dirgho u"),
    ("oo",  "উ",  "u"),
    ("oi",  "ঐ",  "oi"),
    ("OI",  "ঐ",  "oi"),
    ("ou",  "ঔ",  "ou"),
    ("OU",  "ঔ",  "ou"),
    ("a",   "অ",  "o - short a at word start"),
    ("A",   "আ",  "aa"),
    ("o",   "অ",  "o"),
    ("O",   "ও",  "o"),
    ("i",   "ই",  "i"),
    ("I",   "ঈ",  "dirgho i"),
    ("u",   "উ",  "u"),
    ("U",   "ঊ",  "dirgho u"),
    ("e",   "এ",  "e"),
    ("E",   "এ",  "e"),
    ("w",   "ও",  "o (alias at word start)"),
]

# Letters whose upper case means nothing special in the Avro scheme
_AVRO_CASELESS = "bcefghjklmpqvwxy"

BENGALI_VOWELS = frozenset(
    "অআইঈউঊঋএঐওঔ"   # independent vowels
    "ািীুূৃেৈোৌ"    # vowel signs
)

AVRO = GlyphMap(
    name="Avro",
    general=_table(AVRO_ENTRIES, _AVRO_CASELESS),
    word_initial=_table(AVRO_INITIAL_ENTRIES, _AVRO_CASELESS),
    terminator=BENGALI_TERMINATOR,
    vowels=BENGALI_VOWELS,
)


# ── Arabic phonetic ─────────────────────────────────────────────────────────

ARABIC_PHONETIC_ENTRIES = [
    # ── Digraphs ─────────────────────────────────────────────────────────
    ("th",  "ث",  "tha"),
    ("kh",  "خ",  "kha"),
    ("dh",  "ذ",  "dhal"),
    ("sh",  "ش",  "shin"),
    ("gh",  "غ",  "ghayn"),
    ("aa",  "ا",  "alif (long a)"),
    ("ee",  "ي",  "ya (long i)"),
    ("oo",  "و",  "waw (long u)"),
    ("la",  "لا", "lam-alif ligature"),

    # ── Emphatics and other capitals ─────────────────────────────────────
    ("H",   "ح",  "ha (pharyngeal)"),
    ("S",   "ص",  "sad"),
    ("D",   "ض",  "dad"),
    ("T",   "ط",  "ta (emphatic)"),
    ("Z",   "ظ",  "za (emphatic)"),
    ("E",   "ع",  "ayn"),
    ("A",   "ء",  "hamza"),
    ("Q",   "ة",  "ta marbuta"),
    ("Y",   "ى",  "alif maqsura"),
    ("W",   "ؤ",  "waw with hamza"),
    ("I",   "ئ",  "ya with hamza"),

    # ── Single letters ───────────────────────────────────────────────────
    ("a",   "ا",  "alif"),
    ("b",   "ب",  "ba"),
    ("p",   "ب",  "ba (alias)"),
    ("t",   "ت",  "ta"),
    ("j",   "ج",  "jim"),
    ("g",   "ج",  "jim (Egyptian g)"),
    ("x",   "خ",  "kha (alias)"),
    ("d",   "د",  "dal"),
    ("r",   "ر",  "ra"),
    ("z",   "ز",  "zay"),
    ("s",   "س",  "sin"),
    ("f",   "ف",  "fa"),
    ("v",   "ف",  "fa (alias)"),
    ("q",   "ق",  "qaf"),
    ("k",   "ك",  "kaf"),
    ("c",   "ك",  "kaf (alias)"),
    ("l",   "ل",  "lam"),
    ("m",   "م",  "mim"),
    ("n",   "ن",  "nun"),
    ("h",   "ه",  "ha"),
    ("w",   "و",  "waw"),
    ("o",   "و",  "waw (vowel o)"),
    ("u",   "و",  "waw (vowel u)"),
    ("y",   "ي",  "ya"),
    ("i",   "ي",  "ya (vowel i)"),
    ("e",   "ي",  "ya (vowel e)"),
]

ARABIC_PHONETIC_INITIAL_ENTRIES = [
    ("aa",  "آ",   "alif madda"),
    ("ee",  "إي",  "hamza-below alif + ya"),
    ("oo",  "أو",  "hamza-above alif + waw"),
    ("a",   "ا",   "alif"),
    ("A",   "أ",   "alif with hamza above"),
    ("i",   "إ",   "alif with hamza below"),
    ("e",   "إ",   "alif with hamza below"),
    ("u",   "أ",   "alif with hamza above"),
    ("o",   "أ",   "alif with hamza above"),
]

_ARABIC_CASELESS = "bcfgjklmnoprvx"

ARABIC_PHONETIC = GlyphMap(
    name="Arabic Phonetic",
    general=_table(ARABIC_PHONETIC_ENTRIES, _ARABIC_CASELESS),
    word_initial=_table(ARABIC_PHONETIC_INITIAL_ENTRIES),
    terminator=".",
)


# ── Fixed (one key, one glyph) layouts ──────────────────────────────────────

JATIYO = MappingProxyType({
    # Consonants
    "j": "ক", "J": "খ", "o": "গ", "O": "ঘ", "q": "ঙ",
    "y": "চ", "Y": "ছ", "u": "জ", "U": "ঝ", "I": "ঞ",
    "t": "ট", "T": "ঠ", "e": "ড", "E": "ঢ", "B": "ণ",
    "k": "ত", "K": "থ", "l": "দ", "L": "ধ", "b": "ন",
    "r": "প", "R": "ফ", "h": "ব", "H": "ভ", "m": "ম",
    "w": "য", "v": "র", "V": "ল", "M": "শ", "N": "ষ",
    "n": "স", "i": "হ", "p": "ড়", "P": "ঢ়", "W": "য়",
    "\\": "ৎ", "|": "ঃ", "&": "ঁ", "Q": "ং",
    # Vowel signs, link and independent vowels
    "f": "া", "d": "ি", "D": "ী", "s": "ু", "S": "ূ",
    "a": "ৃ", "c": "ে", "C": "ৈ", "x": "ো", "X": "ৌ",
    "g": "্", "G": "।", "F": "অ", "Z": "্য", "A": "র্",
})

UNIBIJOY = MappingProxyType({
    # Consonants
    "j": "ক", "J": "খ", "o": "গ", "O": "ঘ", "q": "ঙ",
    "y": "চ", "Y": "ছ", "u": "জ", "U": "ঝ", "I": "ঞ",
    "t": "ট", "T": "ঠ", "e": "ড", "E": "ঢ", "B": "ণ",
    "k": "ত", "K": "থ", "l": "দ", "L": "ধ", "b": "ন",
    "r": "প", "R": "ফ", "h": "ব", "H": "ভ", "m": "ম",
    "w": "য", "v": "র", "V": "ল", "M": "শ", "N": "ষ",
    "n": "স", "i": "হ", "p": "ড়", "P": "ঢ়", "W": "য়",
    "\\": "ৎ", "|": "ঃ", "&": "ঁ", "Q": "ং",
    # Vowel signs, link and independent vowels
    "f": "া", "d": "ি", "D": "ী", "s": "ু", "S": "ূ",
    "a": "ৃ", "c": "ে", "C": "ৈ", "x": "ও", "X": "ৌ",
    "g": "্", "G": "।", "F": "া", "Z": "্য", "A": "র্",
})

PROVHAT = MappingProxyType({
    "q": "দ", "Q": "ধ", "w": "ূ", "W": "ঊ", "e": "ী", "E": "ঈ",
    "r": "র", "R": "ড়", "t": "ট", "T": "ঠ", "y": "এ", "Y": "ঐ",
    "u": "ু", "U": "উ", "i": "ি", "I": "ই", "o": "ও", "O": "ঔ",
    "p": "প", "P": "ফ", "[": "ে", "{": "ৈ", "]": "ো", "}": "ৌ",
    "a": "া", "A": "অ", "s": "স", "S": "ষ", "d": "ড", "D": "ঢ",
    "f": "ত", "F": "থ", "g": "গ", "G": "ঘ", "h": "হ", "H": "ঃ",
    "j": "জ", "J": "ঝ", "k": "ক", "K": "খ", "l": "ল", "L": "ং",
    "z": "য়", "Z": "য", "x": "শ", "X": "ঢ়", "c": "চ", "C": "ছ",
    "v": "আ", "V": "ঋ", "b": "ব", "B": "ভ", "n": "ন", "N": "ণ",
    "m": "ম", "M": "ঙ", "\\": "ৎ", "|": "ঞ", ".": "।", "&": "ঁ",
    "/": "্",
})

ARABIC = MappingProxyType({
    "q": "ض", "w": "ص", "e": "ث", "r": "ق", "t": "ف", "y": "غ",
    "u": "ع", "i": "ه", "o": "خ", "p": "ح", "[": "ج", "]": "د",
    "a": "ش", "s": "س", "d": "ي", "f": "ب", "g": "ل", "h": "ا",
    "j": "ت", "k": "ن", "l": "م", ";": "ك", "'": "ط",
    "z": "ئ", "x": "ء", "c": "ؤ", "v": "ر", "b": "لا", "n": "ى",
    "m": "ة", ",": "و", ".": "ز", "/": "ظ",
    # Shifted: harakat and hamza forms
    "Q": "َ", "W": "ً", "E": "ُ", "R": "ٌ", "Y": "إ",
    "A": "ِ", "S": "ٍ", "H": "أ", "J": "ـ", "K": "،",
    "X": "ْ", "N": "آ", "?": "؟", "P": "؛",
})


# ── Numerals ────────────────────────────────────────────────────────────────

NUMERALS = MappingProxyType({
    "en": "0123456789",
    "bn": "০১২৩৪৫৬৭৮৯",
    "ar": "٠١٢٣٤٥٦٧٨٩",
})


# ── Convenience accessors ───────────────────────────────────────────────────

_PHONETIC = {
    Layout.BANGLA_AVRO: AVRO,
    Layout.ARABIC_PHONETIC: ARABIC_PHONETIC,
}

_DIRECT = {
    Layout.BANGLA_JATIYO: JATIYO,
    Layout.BANGLA_UNIBIJOY: UNIBIJOY,
    Layout.BANGLA_PROVHAT: PROVHAT,
    Layout.ARABIC: ARABIC,
}


def phonetic_table(layout: Layout) -> GlyphMap:
    """Return the glyph map driving a phonetic layout."""
    try:
        return _PHONETIC[layout]
    except KeyError:
        raise ValueError(f"{layout.value} is not a phonetic layout") from None


def direct_map(layout: Layout) -> Mapping[str, str]:
    """Return the one-key table of a fixed layout (empty for English)."""
    return _DIRECT.get(layout, MappingProxyType({}))


def numerals(script: str) -> str:
    """Digits 0-9 for a script code, falling back to ASCII."""
    return NUMERALS.get(script, NUMERALS["en"])


def sentence_terminator(layout: Layout) -> str:
    return BENGALI_TERMINATOR if layout.script == "bn" else "."
