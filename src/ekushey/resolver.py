"""
Layout switching and key routing.

Tracks the active layout, input mode and shift state, and decides for each
key whether it goes through the phonetic engine, a fixed layout table, or is
inserted as it is.

Usage:
    from ekushey.resolver import ModeResolver, Route

    resolver = ModeResolver([Layout.ENGLISH, Layout.BANGLA_AVRO])
    resolver.next_layout()
    resolver.resolve("k")       # Resolution(route=Route.PHONETIC, text='k')
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ekushey.engine import DEFAULT_CONFIG, EngineConfig, InputClass, classify_input
from ekushey.layouts import Layout, Mode, ShiftState
from ekushey.tables import direct_map, numerals

log = logging.getLogger(__name__)


class Route(Enum):
    PHONETIC = "phonetic"  # send through the transliteration engine
    DIRECT = "direct"      # glyph from a fixed layout table
    LITERAL = "literal"    # insert as given (or as a localized digit)


@dataclass(frozen=True, slots=True)
class Resolution:
    route: Route
    text: str


class ModeResolver:
    """Layout, mode and shift state of the keyboard."""

    def __init__(self, enabled_layouts: list[Layout], layout: Layout | None = None):
        self.enabled_layouts = list(enabled_layouts)
        if layout is None:
            layout = self.enabled_layouts[0] if self.enabled_layouts else Layout.ENGLISH
        self.layout = layout
        self.mode = Mode.ALPHA
        self.shift = ShiftState.OFF

    # ── Layouts ──────────────────────────────────────────────────────────

    def switch_layout(self, layout: Layout) -> Layout:
        if layout is not self.layout:
            log.debug("layout %s -> %s", self.layout.value, layout.value)
        self.layout = layout
        return layout

    def next_layout(self) -> Layout:
        return self._step(1)

    def prev_layout(self) -> Layout:
        return self._step(-1)

    def _step(self, direction: int) -> Layout:
        """Cycle through the enabled layouts."""
        enabled = self.enabled_layouts
        if not enabled:
            log.warning("no layouts enabled, staying on %s", self.layout.value)
            return self.layout
        if self.layout not in enabled:
            return self.switch_layout(enabled[0])
        index = (enabled.index(self.layout) + direction) % len(enabled)
        return self.switch_layout(enabled[index])

    # ── Modes ────────────────────────────────────────────────────────────

    def set_mode(self, mode: Mode) -> None:
        self.mode = mode

    def toggle_symbol_mode(self) -> Mode:
        self.mode = Mode.ALPHA if self.mode is Mode.SYMBOL else Mode.SYMBOL
        return self.mode

    def toggle_numeric_mode(self) -> Mode:
        self.mode = Mode.ALPHA if self.mode is Mode.NUMERIC else Mode.NUMERIC
        return self.mode

    # ── Shift ────────────────────────────────────────────────────────────

    @property
    def is_shift_active(self) -> bool:
        return self.shift is not ShiftState.OFF

    def press_shift(self) -> ShiftState:
        """Arm shift for the next key; a second press (or caps lock) turns it off."""
        self.shift = ShiftState.SHIFTED if self.shift is ShiftState.OFF else ShiftState.OFF
        return self.shift

    def toggle_caps_lock(self) -> ShiftState:
        self.shift = ShiftState.OFF if self.shift is ShiftState.CAPS_LOCK else ShiftState.CAPS_LOCK
        return self.shift

    def release_shift(self) -> None:
        """Called after a key is consumed: momentary shift ends, caps lock stays."""
        if self.shift is ShiftState.SHIFTED:
            self.shift = ShiftState.OFF

    # ── Routing ──────────────────────────────────────────────────────────

    def resolve(self, char: str, config: EngineConfig = DEFAULT_CONFIG) -> Resolution:
        if self.mode is not Mode.ALPHA:
            return Resolution(Route.LITERAL, self._numeral(char, config))

        if self.layout.is_phonetic:
            if classify_input(char) is InputClass.LITERAL:
                return Resolution(Route.LITERAL, char)
            return Resolution(Route.PHONETIC, char)

        key = char.upper() if self.is_shift_active else char
        return Resolution(Route.DIRECT, direct_map(self.layout).get(key, key))

    def _numeral(self, char: str, config: EngineConfig) -> str:
        if config.localized_digits and len(char) == 1 and char in "0123456789":
            return numerals(self.layout.script)[int(char)]
        return char

    def summary(self) -> str:
        enabled = ", ".join(layout.value for layout in self.enabled_layouts) or "none"
        return (
            f"Layout: {self.layout.value} (enabled: {enabled})\n"
            f"Mode:   {self.mode.value}, shift: {self.shift.value}"
        )
