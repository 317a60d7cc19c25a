"""
Editable text model: applies splice instructions and plain edits.

``apply_splice`` and ``backspace`` are pure functions over (text, selection);
``TextBuffer`` wraps them with a caret/selection and a linear undo history.

Usage:
    from ekushey.editor import TextBuffer

    buf = TextBuffer("ami ")
    buf.apply(Splice(0, "ক"))
    buf.delete_backward()
    buf.undo()
"""

from __future__ import annotations

from ekushey.engine import Splice


def apply_splice(
    text: str,
    selection_start: int,
    selection_end: int,
    delete_count: int,
    inserted: str,
) -> tuple[str, int]:
    """Delete ``delete_count`` characters ending at ``selection_start``, insert.

    A non-empty selection is replaced by the insert as well.  Returns the new
    text and the caret position right after the inserted text.
    """
    start = max(0, selection_start - delete_count)
    new_text = text[:start] + inserted + text[selection_end:]
    return new_text, start + len(inserted)


def backspace(text: str, selection_start: int, selection_end: int) -> tuple[str, int]:
    """Delete the selection, or the one character before the caret."""
    if selection_start == selection_end:
        if selection_start == 0:
            return text, 0
        return text[:selection_start - 1] + text[selection_end:], selection_start - 1
    return text[:selection_start] + text[selection_end:], selection_start


class TextBuffer:
    """Text with a selection and undo/redo history.

    Every change that alters the text pushes a history entry; changes that
    leave the text as it was are ignored.
    """

    def __init__(self, text: str = "", cursor: int | None = None):
        self.text = text
        caret = len(text) if cursor is None else cursor
        self.selection_start = self.selection_end = 0
        self.select(caret)
        self._history: list[tuple[str, int]] = [(self.text, self.selection_start)]
        self._index = 0

    @property
    def cursor(self) -> int:
        return self.selection_start

    @property
    def has_selection(self) -> bool:
        return self.selection_start != self.selection_end

    def select(self, start: int, end: int | None = None) -> None:
        """Move the caret, or select [start, end).  Offsets are clamped."""
        if end is None:
            end = start
        if end < start:
            start, end = end, start
        size = len(self.text)
        self.selection_start = min(max(start, 0), size)
        self.selection_end = min(max(end, 0), size)

    # ── Edits ────────────────────────────────────────────────────────────

    def apply(self, splice: Splice) -> int:
        """Apply a splice at the current selection; return the new caret."""
        new_text, caret = apply_splice(
            self.text, self.selection_start, self.selection_end,
            splice.delete_count, splice.text,
        )
        self._commit(new_text, caret)
        return caret

    def insert(self, text: str) -> int:
        return self.apply(Splice(0, text))

    def delete_backward(self) -> int:
        new_text, caret = backspace(self.text, self.selection_start, self.selection_end)
        self._commit(new_text, caret)
        return caret

    def replace(self, text: str, cursor: int | None = None) -> None:
        """Replace the whole text (an edit made outside the keyboard)."""
        self._commit(text, len(text) if cursor is None else cursor)

    def _commit(self, text: str, caret: int) -> None:
        if text == self.text:
            self.select(caret)
            return
        self.text = text
        self.select(caret)
        del self._history[self._index + 1:]
        self._history.append((self.text, self.selection_start))
        self._index = len(self._history) - 1

    # ── History ──────────────────────────────────────────────────────────

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._history) - 1

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self._index -= 1
        self._restore()
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self._index += 1
        self._restore()
        return True

    def _restore(self) -> None:
        self.text, caret = self._history[self._index]
        self.select(caret)

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        return f"TextBuffer({self.text!r}, cursor={self.selection_start})"
