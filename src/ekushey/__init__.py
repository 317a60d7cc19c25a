"""ekushey: phonetic transliteration core for a multi-script keyboard."""

from ekushey.layouts import Layout, Mode, ShiftState
from ekushey.tables import GlyphMap, AVRO, ARABIC_PHONETIC, phonetic_table, direct_map
from ekushey.engine import (
    TransliterationEngine, CompositionState, EngineConfig, Splice,
    InputClass, classify_input, transliterate,
)
from ekushey.editor import TextBuffer, apply_splice, backspace
from ekushey.resolver import ModeResolver, Route, Resolution
from ekushey.config import KeyboardSettings, load_settings
from ekushey.session import Keyboard, InputSession

__all__ = [
    "Layout", "Mode", "ShiftState",
    "GlyphMap", "AVRO", "ARABIC_PHONETIC", "phonetic_table", "direct_map",
    "TransliterationEngine", "CompositionState", "EngineConfig", "Splice",
    "InputClass", "classify_input", "transliterate",
    "TextBuffer", "apply_splice", "backspace",
    "ModeResolver", "Route", "Resolution",
    "KeyboardSettings", "load_settings",
    "Keyboard", "InputSession",
]
