"""
Layout, mode and shift identifiers shared by the tables, resolver and session.

Layout values are the display names the keyboard shows in its layout picker;
``Layout.from_name`` accepts those or the member names, case-insensitively.
"""

from __future__ import annotations

from enum import Enum


class Layout(Enum):
    ENGLISH = "English"
    ARABIC = "Arabic"
    ARABIC_PHONETIC = "Arabic Phonetic"
    BANGLA_AVRO = "Avro"
    BANGLA_JATIYO = "Jatiyo"
    BANGLA_UNIBIJOY = "UniBijoy"
    BANGLA_PROVHAT = "Provhat"

    @classmethod
    def from_name(cls, name: str) -> Layout:
        """Resolve a display name ("Avro") or member name ("BANGLA_AVRO")."""
        wanted = name.strip().casefold()
        for layout in cls:
            if wanted in (layout.value.casefold(), layout.name.casefold()):
                return layout
        # Allow "arabic-phonetic" / "arabic_phonetic" spellings
        normalized = wanted.replace("-", " ").replace("_", " ")
        for layout in cls:
            if normalized == layout.value.casefold():
                return layout
        known = ", ".join(layout.value for layout in cls)
        raise ValueError(f"Unknown layout {name!r} (known: {known})")

    @property
    def is_phonetic(self) -> bool:
        return self in (Layout.BANGLA_AVRO, Layout.ARABIC_PHONETIC)

    @property
    def script(self) -> str:
        if self in (Layout.ARABIC, Layout.ARABIC_PHONETIC):
            return "ar"
        if self is Layout.ENGLISH:
            return "en"
        return "bn"


class Mode(Enum):
    ALPHA = "alpha"
    SYMBOL = "symbol"
    NUMERIC = "numeric"


class ShiftState(Enum):
    OFF = "off"
    SHIFTED = "shifted"
    CAPS_LOCK = "caps_lock"
