"""
Keyboard and per-field input sessions.

A ``Keyboard`` holds the settings and the layout/mode state.  Focusing a text
field attaches a new ``InputSession`` with its own composition state; all
keys for that field go through ``InputSession.handle_key`` in arrival order.

Usage:
    from ekushey.layouts import Layout
    from ekushey.session import Keyboard

    kb = Keyboard.from_config("ekushey.toml")
    kb.switch_layout(Layout.BANGLA_AVRO)
    session = kb.focus()
    kb.press_shift()
    for ch in "Ami":
        session.handle_key(ch)
    session.text        # 'আমি'
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from ekushey.config import KeyboardSettings, load_settings
from ekushey.editor import TextBuffer
from ekushey.engine import EngineConfig, Splice, TransliterationEngine
from ekushey.layouts import Layout, Mode, ShiftState
from ekushey.resolver import ModeResolver, Route
from ekushey.tables import phonetic_table, sentence_terminator

log = logging.getLogger(__name__)

_SENTENCE_END = ".!?"


class InputSession:
    """Composition state and text buffer of one focused text field."""

    def __init__(self, keyboard: Keyboard, text: str = "", cursor: int | None = None):
        self.keyboard = keyboard
        self.buffer = TextBuffer(text, cursor)
        self.engine: TransliterationEngine | None = None
        self._last_space: float | None = None

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor(self) -> int:
        return self.buffer.cursor

    @property
    def config(self) -> EngineConfig:
        return self.keyboard.settings.engine

    def _engine_for(self, layout: Layout) -> TransliterationEngine:
        glyph_map = phonetic_table(layout)
        if self.engine is None or self.engine.glyph_map is not glyph_map:
            self.engine = TransliterationEngine(glyph_map)
        return self.engine

    def reset_composition(self) -> None:
        if self.engine is not None:
            self.engine.reset()

    # ── Keys ─────────────────────────────────────────────────────────────

    def handle_key(self, char: str, timestamp: float | None = None) -> Splice:
        """Process one key and apply the result to the buffer."""
        resolver = self.keyboard.resolver
        config = self.config
        now = time.monotonic() if timestamp is None else timestamp

        splice = self._double_space(char, now, config)
        if splice is None:
            resolution = resolver.resolve(char, config)
            if resolution.route is Route.PHONETIC:
                engine = self._engine_for(resolver.layout)
                splice = engine.process_keystroke(
                    char, resolver.is_shift_active, self.buffer.text,
                    self.buffer.selection_start, self.buffer.selection_end, config,
                )
            else:
                self.reset_composition()
                text = resolution.text
                if resolution.route is Route.DIRECT and self._should_capitalize(text, config):
                    text = text.upper()
                splice = Splice(0, text)

        if not splice.is_noop:
            self.buffer.apply(splice)
        self._last_space = now if char == " " and splice.text == " " else None
        resolver.release_shift()
        return splice

    def _double_space(self, char: str, now: float, config: EngineConfig) -> Splice | None:
        """Second space in quick succession ends the sentence."""
        if char != " " or not config.double_space_period or self._last_space is None:
            return None
        if now - self._last_space > config.double_space_interval:
            return None
        if self.buffer.has_selection or self.keyboard.resolver.mode is not Mode.ALPHA:
            return None
        before = self.buffer.text[:self.buffer.cursor]
        terminator = sentence_terminator(self.keyboard.layout)
        if len(before) < 2 or before[-1] != " ":
            return None
        prev = before[-2]
        if prev.isspace() or prev == terminator or prev in _SENTENCE_END:
            return None
        self.reset_composition()
        log.debug("double space, inserting %r", terminator)
        return Splice(1, terminator + " ")

    def _should_capitalize(self, text: str, config: EngineConfig) -> bool:
        """English only: first letter of the text or of a new sentence."""
        resolver = self.keyboard.resolver
        if not config.auto_capitalization or resolver.layout is not Layout.ENGLISH:
            return False
        if resolver.is_shift_active or not text.isalpha():
            return False
        before = self.buffer.text[:self.buffer.cursor]
        stripped = before.rstrip()
        if not stripped:
            return True
        return stripped[-1] in _SENTENCE_END and stripped != before

    # ── Edits ────────────────────────────────────────────────────────────

    def backspace(self) -> Splice | None:
        """Delete backwards; inside a composition, undo the last key."""
        self._last_space = None
        if self.engine is not None and not self.buffer.has_selection:
            splice = self.engine.rollback(self.buffer.text, self.buffer.cursor, self.config)
            if splice is not None:
                self.buffer.apply(splice)
                return splice
        self.reset_composition()
        self.buffer.delete_backward()
        return None

    def move_cursor(self, start: int, end: int | None = None) -> None:
        self.reset_composition()
        self.buffer.select(start, end)

    def set_text(self, text: str, cursor: int | None = None) -> None:
        """Replace the field's content from outside the keyboard."""
        self.reset_composition()
        self.buffer.replace(text, cursor)

    def insert_text(self, text: str) -> None:
        """Insert pasted or assistant-produced text as it is (never transliterated)."""
        self.reset_composition()
        self._last_space = None
        self.buffer.insert(text)

    paste = insert_text

    def undo(self) -> bool:
        self.reset_composition()
        return self.buffer.undo()

    def redo(self) -> bool:
        self.reset_composition()
        return self.buffer.redo()

    def __repr__(self) -> str:
        return f"InputSession({self.buffer.text!r}, cursor={self.buffer.cursor})"


class Keyboard:
    """Settings plus layout/mode state, shared by the sessions it focuses."""

    def __init__(self, settings: KeyboardSettings | None = None):
        self.settings = settings or KeyboardSettings()
        self.resolver = ModeResolver(self.settings.enabled_layouts, self.settings.default_layout)
        self.session: InputSession | None = None

    @classmethod
    def from_config(cls, config_path: str | Path) -> Keyboard:
        return cls(load_settings(config_path))

    @property
    def layout(self) -> Layout:
        return self.resolver.layout

    def focus(self, text: str = "", cursor: int | None = None) -> InputSession:
        """Attach a new session (with fresh composition state) to a text field."""
        if self.session is not None:
            self.session.reset_composition()
        self.session = InputSession(self, text, cursor)
        log.debug("focused new field (%d chars)", len(text))
        return self.session

    # ── Layout switching ─────────────────────────────────────────────────

    def switch_layout(self, layout: Layout) -> Layout:
        self._reset_session()
        return self.resolver.switch_layout(layout)

    def next_layout(self) -> Layout:
        self._reset_session()
        return self.resolver.next_layout()

    def prev_layout(self) -> Layout:
        self._reset_session()
        return self.resolver.prev_layout()

    def _reset_session(self) -> None:
        if self.session is not None:
            self.session.reset_composition()

    # ── Modes and shift ──────────────────────────────────────────────────

    def set_mode(self, mode: Mode) -> None:
        self.resolver.set_mode(mode)

    def toggle_symbol_mode(self) -> Mode:
        return self.resolver.toggle_symbol_mode()

    def toggle_numeric_mode(self) -> Mode:
        return self.resolver.toggle_numeric_mode()

    def press_shift(self) -> ShiftState:
        return self.resolver.press_shift()

    def toggle_caps_lock(self) -> ShiftState:
        return self.resolver.toggle_caps_lock()

    def summary(self) -> str:
        lines = ["Keyboard"]
        for sub_line in self.resolver.summary().split("\n"):
            lines.append(f"  {sub_line}")
        engine = self.settings.engine
        lines.append(f"  Vowel forming:       {engine.auto_vowel_forming}")
        lines.append(f"  Auto capitalization: {engine.auto_capitalization}")
        lines.append(f"  Double-space period: {engine.double_space_period}")
        lines.append(f"  Localized digits:    {engine.localized_digits}")
        return "\n".join(lines)
