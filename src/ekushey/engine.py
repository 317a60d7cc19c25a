"""
Phonetic transliteration engine.

Turns Latin keystrokes into composed native-script text one key at a time.
Each keystroke yields a splice instruction: delete some characters behind
the caret, then insert the new glyphs.  A multi-key match replaces the
glyphs already shown for the keys it covers, so the user sees output
immediately and it is corrected as longer sequences complete.

Usage:
    from ekushey.engine import TransliterationEngine, transliterate
    from ekushey.tables import AVRO

    engine = TransliterationEngine(AVRO)
    splice = engine.process_keystroke("k", False, text, caret, caret)
    text = text[:caret - splice.delete_count] + splice.text + text[caret:]

    transliterate("Ami banglay gan gai", AVRO)   # replay a whole string
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ekushey.tables import GlyphMap

log = logging.getLogger(__name__)

RESET_MARKER = "`"


class InputClass(Enum):
    ALPHABETIC = "alphabetic"
    RESET_MARKER = "reset_marker"
    LITERAL = "literal"


def classify_input(char: str) -> InputClass:
    """Decide whether a key goes through the phonetic engine.

    ASCII letters and the chandrabindu key (^) compose; the backtick ends a
    composition without inserting anything; everything else is literal.
    """
    if char == RESET_MARKER:
        return InputClass.RESET_MARKER
    if len(char) == 1 and ((char.isascii() and char.isalpha()) or char == "^"):
        return InputClass.ALPHABETIC
    return InputClass.LITERAL


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Typing options, passed with every call rather than held by the engine."""

    auto_vowel_forming: bool = True
    auto_capitalization: bool = True
    double_space_period: bool = True
    double_space_interval: float = 0.3  # seconds between the two spaces
    localized_digits: bool = True


DEFAULT_CONFIG = EngineConfig()


@dataclass(frozen=True, slots=True)
class Splice:
    """Delete ``delete_count`` characters before the caret, then insert ``text``."""

    delete_count: int = 0
    text: str = ""

    def cursor(self, selection_start: int) -> int:
        return selection_start - self.delete_count + len(self.text)

    @property
    def is_noop(self) -> bool:
        return self.delete_count == 0 and not self.text


@dataclass(frozen=True, slots=True)
class Segment:
    """One matched unit: the raw keys and the glyphs they produced."""

    raw: str
    output: str


@dataclass(frozen=True, slots=True)
class CompositionState:
    """The current composition run, as a sequence of matched units.

    ``segments`` is the trailing run that new keys can still extend.
    ``committed`` holds the earlier units of the same run, closed by a key
    that matched nothing; they are kept only so backspace can replay them.
    """

    segments: tuple[Segment, ...] = ()
    committed: tuple[Segment, ...] = ()

    @property
    def match_buffer(self) -> str:
        return "".join(s.raw for s in self.segments)

    @property
    def raw(self) -> str:
        return "".join(s.raw for s in (*self.committed, *self.segments))

    @property
    def output(self) -> str:
        return "".join(s.output for s in (*self.committed, *self.segments))

    @property
    def last_output_length(self) -> int:
        return len(self.segments[-1].output) if self.segments else 0

    @property
    def is_empty(self) -> bool:
        return not self.segments and not self.committed


def is_word_start(text: str, position: int, terminator: str) -> bool:
    """True at buffer start or after whitespace or the sentence terminator."""
    if position <= 0:
        return True
    prev = text[position - 1]
    return prev.isspace() or prev == terminator


def _covering_span(segments: tuple[Segment, ...], need: int) -> tuple[int, str]:
    """Find the trailing segments holding the last ``need`` raw keys.

    Returns (segments consumed, leftover) where leftover is the raw prefix of
    the earliest consumed segment that lies outside the span.
    """
    if need == 0:
        return 0, ""
    count = 0
    for consumed, seg in enumerate(reversed(segments), start=1):
        count += len(seg.raw)
        if count >= need:
            return consumed, seg.raw[:count - need]
    raise ValueError(f"composition holds fewer than {need} keys")


class TransliterationEngine:
    """
    Longest-match phonetic composer for one input session.

    The engine owns the composition state; the caller owns the text.  Every
    call receives the current text and selection and returns a ``Splice``
    for the caller to apply.  One engine serves one text field: a new field
    gets a new engine.
    """

    def __init__(self, glyph_map: GlyphMap):
        self.glyph_map = glyph_map
        self.state = CompositionState()

    @property
    def is_composing(self) -> bool:
        return not self.state.is_empty

    def reset(self) -> None:
        if self.is_composing:
            log.debug("composition reset (buffer %r)", self.state.match_buffer)
        self.state = CompositionState()

    # ── Keystrokes ───────────────────────────────────────────────────────

    def process_keystroke(
        self,
        char: str,
        is_shift_active: bool,
        text: str,
        selection_start: int,
        selection_end: int | None = None,
        config: EngineConfig = DEFAULT_CONFIG,
    ) -> Splice:
        """Compose one key against the text behind ``selection_start``.

        A selection up to ``selection_end`` is replaced by whatever the
        splice inserts; the engine itself only reads text before the caret.
        """
        kind = classify_input(char)
        if kind is InputClass.RESET_MARKER:
            self.reset()
            return Splice()
        if kind is InputClass.LITERAL:
            self.reset()
            return Splice(0, char)

        char = char.upper() if is_shift_active else char.lower()
        if self.is_composing and not text[:selection_start].endswith(self.state.output):
            log.debug("text changed behind the engine, dropping %r", self.state.match_buffer)
            self.state = CompositionState()

        state = self.state
        splice, segments, restarted = self._compose(
            state.segments, char, text, selection_start, config,
        )
        committed = state.committed + state.segments if restarted else state.committed
        self.state = CompositionState(segments, committed)
        return splice

    def rollback(
        self,
        text: str,
        caret: int,
        config: EngineConfig = DEFAULT_CONFIG,
    ) -> Splice | None:
        """Undo the last raw key of the current run.

        The remaining keys are composed again from the start of the run, so
        N keystrokes followed by N rollbacks restore the original text.
        Returns None when there is no run to roll back; the caller then
        deletes a plain character.
        """
        if not self.is_composing:
            return None
        output = self.state.output
        if not text[:caret].endswith(output):
            log.debug("text changed behind the engine, dropping %r", self.state.match_buffer)
            self.state = CompositionState()
            return None

        prefix = text[:caret - len(output)]
        replayed, committed, segments = self._replay(self.state.raw[:-1], prefix, config)
        self.state = CompositionState(segments, committed)
        return Splice(len(output), replayed)

    # ── Matching ─────────────────────────────────────────────────────────

    def _independent_vowel_context(self, text: str, position: int, config: EngineConfig) -> bool:
        if is_word_start(text, position, self.glyph_map.terminator):
            return True
        return (
            config.auto_vowel_forming
            and position > 0
            and text[position - 1] in self.glyph_map.vowels
        )

    def _compose(
        self,
        segments: tuple[Segment, ...],
        char: str,
        text: str,
        caret: int,
        config: EngineConfig,
    ) -> tuple[Splice, tuple[Segment, ...], bool]:
        """Match ``char`` on top of ``segments``.

        Returns (splice, new segments, restarted).  ``restarted`` is True
        when nothing matched and the run starts over from the literal key.
        """
        candidate = "".join(s.raw for s in segments) + char
        longest = min(len(candidate), self.glyph_map.max_key_length)

        for length in range(longest, 0, -1):
            key = candidate[-length:]
            if not self.glyph_map.has(key):
                continue

            consumed, leftover = _covering_span(segments, length - 1)
            kept = segments[:len(segments) - consumed]
            delete_count = sum(len(s.output) for s in segments[len(kept):])
            prefix = text[:caret - delete_count]

            # A match that starts inside an earlier unit re-renders that
            # unit's uncovered keys on their own.
            left_text, left_segments = ("", ())
            if leftover:
                left_text, left_committed, left_run = self._replay(leftover, prefix, config)
                left_segments = left_committed + left_run

            context = prefix + left_text
            glyph = self.glyph_map.lookup(
                key, self._independent_vowel_context(context, len(context), config),
            )
            if glyph is None:
                continue

            new_segments = kept + left_segments + (Segment(key, glyph),)
            return Splice(delete_count, left_text + glyph), new_segments, False

        return Splice(0, char), (Segment(char, char),), True

    def _replay(
        self,
        raw: str,
        prefix: str,
        config: EngineConfig,
    ) -> tuple[str, tuple[Segment, ...], tuple[Segment, ...]]:
        """Compose ``raw`` from scratch after ``prefix``.

        Returns (output, committed, segments) as the live path would leave them.
        """
        text = prefix
        committed: tuple[Segment, ...] = ()
        segments: tuple[Segment, ...] = ()
        for char in raw:
            splice, new_segments, restarted = self._compose(
                segments, char, text, len(text), config,
            )
            if restarted:
                committed += segments
            segments = new_segments
            text = text[:len(text) - splice.delete_count] + splice.text
        return text[len(prefix):], committed, segments

    def summary(self) -> str:
        lines = [f"TransliterationEngine ({self.glyph_map.name})"]
        lines.append(f"  General keys:      {len(self.glyph_map.general)}")
        lines.append(f"  Word-initial keys: {len(self.glyph_map.word_initial)}")
        lines.append(f"  Match buffer:      {self.state.match_buffer!r}")
        return "\n".join(lines)


def transliterate(
    raw: str,
    glyph_map: GlyphMap,
    config: EngineConfig = DEFAULT_CONFIG,
) -> str:
    """Type ``raw`` key by key into an empty buffer and return the result.

    Upper-case letters are typed with shift held.
    """
    engine = TransliterationEngine(glyph_map)
    text = ""
    for char in raw:
        caret = len(text)
        splice = engine.process_keystroke(char, char.isupper(), text, caret, caret, config)
        text = text[:caret - splice.delete_count] + splice.text
    return text
