"""Text document model: gap-buffer storage, format runs, cursor, selection, undo/redo."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field, replace
from datetime import datetime

from .colours import Colour
from .gap_buffer import GapBuffer

_WHITESPACE = frozenset(" \t\n\r")


@dataclass(frozen=True)
class TextFormat:
    """Character formatting applied to a run of text."""

    font_name: str = ""
    font_size: int = 12
    bold: bool = False
    italic: bool = False
    underline: bool = False
    text_color: Colour = Colour(0, 0, 0)
    background_color: Colour = Colour(255, 255, 255)


@dataclass
class FormatRun:
    """A half-open span ``[start, end)`` of text sharing one format."""

    start: int
    end: int
    format: TextFormat = field(default_factory=TextFormat)

    def contains(self, pos: int) -> bool:
        """Whether ``pos`` lies inside the run."""
        return self.start <= pos < self.end


@dataclass
class Cursor:
    """Caret position with its derived line and column."""

    position: int = 0
    line: int = 0
    column: int = 0


@dataclass
class Selection:
    """A selected span; ``start`` may lie after ``end``."""

    start: int = 0
    end: int = 0
    active: bool = False

    def min(self) -> int:
        """Lower bound of the selection."""
        return min(self.start, self.end)

    def max(self) -> int:
        """Upper bound of the selection."""
        return max(self.start, self.end)

    def is_empty(self) -> bool:
        """Whether the selection spans no characters."""
        return self.start == self.end


@dataclass
class DocumentMetadata:
    """Statistics kept up to date as the document changes."""

    word_count: int = 0
    character_count: int = 0
    modified: datetime = field(default_factory=datetime.now)


class DocumentObserver:
    """Receives change notifications from a :class:`TextDocument`.

    The default hooks tally each notification in :attr:`events`;
    subclasses override them to react.
    """

    @property
    def events(self) -> Counter:
        """How many times each notification has been received."""
        return vars(self).setdefault("_events", Counter())

    def _record(self, event: str) -> None:
        self.events[event] += 1

    def on_text_changed(self) -> None:
        """The text was edited."""
        self._record("text_changed")

    def on_cursor_moved(self) -> None:
        """The cursor was moved."""
        self._record("cursor_moved")

    def on_selection_changed(self) -> None:
        """The selection changed."""
        self._record("selection_changed")

    def on_format_changed(self) -> None:
        """Formatting changed."""
        self._record("format_changed")


class _Command:
    def execute(self, doc: TextDocument) -> None:
        raise NotImplementedError

    def undo(self, doc: TextDocument) -> None:
        raise NotImplementedError

    def can_merge(self, other: _Command) -> bool:
        return False

    def merge(self, other: _Command) -> None:
        pass


class _InsertCommand(_Command):
    def __init__(self, position: int, text: str) -> None:
        self.position = position
        self.text = text

    def execute(self, doc: TextDocument) -> None:
        doc._insert_internal(self.position, self.text)

    def undo(self, doc: TextDocument) -> None:
        doc._delete_internal(self.position, self.position + len(self.text))

    def can_merge(self, other: _Command) -> bool:
        # Only consecutive single-character typing is merged.
        if not isinstance(other, _InsertCommand):
            return False
        if len(self.text) != 1 or len(other.text) != 1:
            return False
        return other.position == self.position + len(self.text)

    def merge(self, other: _Command) -> None:
        if isinstance(other, _InsertCommand):
            self.text += other.text


class _DeleteCommand(_Command):
    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        self.deleted = ""

    def execute(self, doc: TextDocument) -> None:
        self.deleted = doc.get_text(self.start, self.end)
        doc._delete_internal(self.start, self.end)

    def undo(self, doc: TextDocument) -> None:
        doc._insert_internal(self.start, self.deleted)


class _FormatCommand(_Command):
    def __init__(self, start: int, end: int, fmt: TextFormat) -> None:
        self.start = start
        self.end = end
        self.fmt = fmt
        self.old_runs: list[FormatRun] = []

    def execute(self, doc: TextDocument) -> None:
        self.old_runs = doc.format_runs(self.start, self.end)
        doc._apply_format_internal(self.start, self.end, self.fmt)

    def undo(self, doc: TextDocument) -> None:
        doc.restore_format_runs(self.start, self.end, self.old_runs)


class TextDocument:
    """Editable formatted text with undo/redo and observers."""

    def __init__(self, max_undo: int = 100) -> None:
        self._storage = GapBuffer()
        self._runs: list[FormatRun] = [FormatRun(0, 0)]
        self._cursor = Cursor()
        self._selection = Selection()
        self._metadata = DocumentMetadata()
        self._undo: deque[_Command] = deque(maxlen=max_undo)
        self._redo: list[_Command] = []
        self._observers: list[DocumentObserver] = []

    # -- state access ------------------------------------------------------

    @property
    def cursor(self) -> Cursor:
        """A copy of the current cursor."""
        return replace(self._cursor)

    @property
    def selection(self) -> Selection:
        """A copy of the current selection."""
        return replace(self._selection)

    @property
    def metadata(self) -> DocumentMetadata:
        """A copy of the document statistics."""
        return replace(self._metadata)

    @property
    def runs(self) -> list[FormatRun]:
        """Copies of all format runs, in order."""
        return [replace(run) for run in self._runs]

    # -- text operations ---------------------------------------------------

    def get_text(self, start: int | None = None, end: int | None = None) -> str:
        """Return the whole text, or the ``[start, end)`` slice of it."""
        return self._storage.get_text(start, end)

    def set_text(self, text: str) -> None:
        """Replace the whole document, resetting format, cursor and history."""
        self._storage.set_text(text)
        self._runs = [FormatRun(0, len(text))]
        self._cursor = Cursor()
        self._selection = Selection()
        self.clear_undo_history()
        self._touch()
        self._notify("on_text_changed")

    def insert_text(self, pos: int, text: str) -> None:
        """Insert ``text`` at ``pos`` as an undoable action."""
        if not text:
            return
        self._run_command(_InsertCommand(pos, text))

    def delete_text(self, start: int, end: int) -> None:
        """Delete ``[start, end)`` as an undoable action."""
        if start >= end:
            return
        self._run_command(_DeleteCommand(start, end))

    def char_at(self, pos: int) -> str:
        """Return the character at ``pos``, or ``""`` when out of range."""
        return self._storage.char_at(pos)

    def __len__(self) -> int:
        return len(self._storage)

    def clear(self) -> None:
        """Empty the document."""
        self.set_text("")

    def _insert_internal(self, pos: int, text: str) -> None:
        if not text:
            return
        length = len(text)
        self._storage.insert(pos, text)

        for run in self._runs:
            if pos < run.start:
                run.start += length
                run.end += length
            elif run.start <= pos < run.end:
                run.end += length
            elif pos == run.end and run.start == run.end:
                run.end += length

        if self._cursor.position >= pos:
            self._cursor.position += length

        if self._selection.active:
            if self._selection.start >= pos:
                self._selection.start += length
            if self._selection.end >= pos:
                self._selection.end += length

        self._touch()
        self._notify("on_text_changed")

    def _delete_internal(self, start: int, end: int) -> None:
        if start >= end:
            return
        length = end - start
        self._storage.delete(start, end)

        kept: list[FormatRun] = []
        for run in self._runs:
            if run.end <= start:
                pass
            elif run.start >= end:
                run.start -= length
                run.end -= length
            elif run.start >= start and run.end <= end:
                continue
            elif run.start < start and run.end > end:
                run.end -= length
            elif run.start < start:
                run.end = start
            else:
                run.start = start
                run.end -= length
            kept.append(run)
        self._runs = kept or [FormatRun(0, 0)]

        self._cursor.position = self._shift_for_delete(self._cursor.position, start, end)

        if self._selection.active:
            sel = self._selection
            sel.start = self._shift_for_delete(sel.start, start, end)
            sel.end = self._shift_for_delete(sel.end, start, end)
            if sel.start == sel.end:
                sel.active = False

        self._touch()
        self._notify("on_text_changed")

    @staticmethod
    def _shift_for_delete(value: int, start: int, end: int) -> int:
        if value >= end:
            return value - (end - start)
        if value > start:
            return start
        return value

    # -- formatting --------------------------------------------------------

    def apply_format(self, start: int, end: int, fmt: TextFormat) -> None:
        """Apply ``fmt`` to ``[start, end)`` as an undoable action."""
        if start >= end:
            return
        self._run_command(_FormatCommand(start, end, fmt))

    def _apply_format_internal(self, start: int, end: int, fmt: TextFormat) -> None:
        if start >= end:
            return
        self._split_run_at(start)
        self._split_run_at(end)
        for run in self._runs:
            if run.start >= start and run.end <= end:
                run.format = fmt
        self._merge_adjacent_runs()
        self._notify("on_format_changed")

    def format_at(self, pos: int) -> TextFormat:
        """Format of the run containing ``pos``, or the default format."""
        for run in self._runs:
            if run.contains(pos):
                return run.format
        return TextFormat()

    def format_runs(self, start: int, end: int) -> list[FormatRun]:
        """Runs intersecting ``[start, end)``, clipped to that range."""
        result: list[FormatRun] = []
        for run in self._runs:
            if run.end <= start:
                continue
            if run.start >= end:
                break
            result.append(FormatRun(max(run.start, start), min(run.end, end), run.format))
        return result

    def restore_format_runs(self, start: int, end: int, runs: list[FormatRun]) -> None:
        """Replace the runs lying within ``[start, end)`` with ``runs``."""
        kept = [run for run in self._runs if not (run.start >= start and run.end <= end)]
        kept.extend(replace(run) for run in runs)
        kept.sort(key=lambda run: run.start)
        self._runs = kept
        self._merge_adjacent_runs()
        self._notify("on_format_changed")

    def clear_formatting(self, start: int | None = None, end: int | None = None) -> None:
        """Reset formatting of the whole document, or undoably of ``[start, end)``."""
        if start is None and end is None:
            self._runs = [FormatRun(0, len(self))]
            self._notify("on_format_changed")
            return
        start = 0 if start is None else start
        end = len(self) if end is None else end
        self.apply_format(start, end, TextFormat())

    def _split_run_at(self, pos: int) -> None:
        for index, run in enumerate(self._runs):
            if run.start < pos < run.end:
                self._runs.insert(index + 1, FormatRun(pos, run.end, run.format))
                run.end = pos
                return

    def _merge_adjacent_runs(self) -> None:
        if len(self._runs) <= 1:
            return
        merged = [self._runs[0]]
        for run in self._runs[1:]:
            last = merged[-1]
            if last.end == run.start and last.format == run.format:
                last.end = run.end
            else:
                merged.append(run)
        self._runs = merged

    # -- cursor and selection ----------------------------------------------

    def set_cursor(self, cursor: Cursor) -> None:
        """Move the cursor, clamping its position and recomputing line/column."""
        self._cursor = replace(cursor, position=self._clamp(cursor.position))
        self._update_line_column()
        self._notify("on_cursor_moved")

    def set_cursor_position(self, pos: int) -> None:
        """Move the cursor to ``pos``, clamped to the document."""
        self._cursor.position = self._clamp(pos)
        self._update_line_column()
        self._notify("on_cursor_moved")

    def move_cursor(self, offset: int) -> None:
        """Move the cursor by ``offset`` characters."""
        self.set_cursor_position(self._cursor.position + offset)

    def set_selection(self, start: int, end: int) -> None:
        """Select ``start`` to ``end``; both are clamped to the document."""
        self._selection.start = self._clamp(start)
        self._selection.end = self._clamp(end)
        self._selection.active = self._selection.start != self._selection.end
        self._notify("on_selection_changed")

    def clear_selection(self) -> None:
        """Drop the selection."""
        self._selection = Selection()
        self._notify("on_selection_changed")

    def select_all(self) -> None:
        """Select the whole document."""
        self.set_selection(0, len(self))

    def selected_text(self) -> str:
        """Text of the active selection, or ``""``."""
        if not self._selection.active:
            return ""
        return self.get_text(self._selection.min(), self._selection.max())

    def delete_selection(self) -> bool:
        """Delete the selected text; return whether anything was deleted."""
        if not self._selection.active or self._selection.is_empty():
            return False
        self.delete_text(self._selection.min(), self._selection.max())
        self.clear_selection()
        return True

    def _clamp(self, pos: int) -> int:
        return max(0, min(pos, len(self)))

    def _update_line_column(self) -> None:
        before = self.get_text()[: self._cursor.position]
        self._cursor.line = before.count("\n")
        self._cursor.column = len(before) - (before.rfind("\n") + 1)

    # -- undo / redo -------------------------------------------------------

    def undo(self) -> None:
        """Revert the most recent action, if any."""
        if not self._undo:
            return
        cmd = self._undo.pop()
        cmd.undo(self)
        self._redo.append(cmd)

    def redo(self) -> None:
        """Re-apply the most recently undone action, if any."""
        if not self._redo:
            return
        cmd = self._redo.pop()
        cmd.execute(self)
        self._undo.append(cmd)

    def can_undo(self) -> bool:
        """Whether there is an action to undo."""
        return bool(self._undo)

    def can_redo(self) -> bool:
        """Whether there is an action to redo."""
        return bool(self._redo)

    def clear_undo_history(self) -> None:
        """Forget all undo and redo actions."""
        self._undo.clear()
        self._redo.clear()

    def _run_command(self, cmd: _Command) -> None:
        cmd.execute(self)
        self._redo.clear()
        if self._undo and self._undo[-1].can_merge(cmd):
            self._undo[-1].merge(cmd)
            return
        self._undo.append(cmd)

    # -- metadata ----------------------------------------------------------

    def _touch(self) -> None:
        text = self.get_text()
        self._metadata.character_count = len(text)
        words = 0
        in_word = False
        for ch in text:
            if ch in _WHITESPACE:
                in_word = False
            elif not in_word:
                words += 1
                in_word = True
        self._metadata.word_count = words
        self._metadata.modified = datetime.now()

    # -- observers ---------------------------------------------------------

    def add_observer(self, observer: DocumentObserver) -> None:
        """Register ``observer`` once; ``None`` is ignored."""
        if observer is None or any(o is observer for o in self._observers):
            return
        self._observers.append(observer)

    def remove_observer(self, observer: DocumentObserver) -> None:
        """Unregister ``observer``."""
        self._observers = [o for o in self._observers if o is not observer]

    def _notify(self, hook: str) -> None:
        for observer in list(self._observers):
            getattr(observer, hook)()