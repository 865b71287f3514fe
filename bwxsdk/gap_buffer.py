"""Gap-buffer text storage suited to sequential editing."""

from __future__ import annotations

_MIN_CAPACITY = 1024
_GROWTH_SLACK = 512


class GapBuffer:
    """Text storage with a movable gap at the editing point.

    The buffer is laid out as ``[text before gap][gap][text after gap]``.
    Inserting or deleting at the gap is cheap; editing elsewhere first moves
    the gap to that position.

    Out-of-range edits are ignored and out-of-range reads return an empty
    string.
    """

    def __init__(self, capacity: int = _MIN_CAPACITY) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._buf: list[str] = [""] * capacity
        self._gap_start = 0
        self._gap_end = capacity

    @property
    def capacity(self) -> int:
        """Total number of slots, text and gap together."""
        return len(self._buf)

    def __len__(self) -> int:
        return len(self._buf) - (self._gap_end - self._gap_start)

    def __str__(self) -> str:
        return "".join(self._buf[: self._gap_start]) + "".join(self._buf[self._gap_end :])

    def __repr__(self) -> str:
        return f"GapBuffer({str(self)!r})"

    def get_text(self, start: int | None = None, end: int | None = None) -> str:
        """Return the whole text, or the ``[start, end)`` slice of it.

        An invalid range (negative start, end past the text, or an empty or
        reversed range) yields an empty string.
        """
        if start is None and end is None:
            return str(self)
        start = 0 if start is None else start
        end = len(self) if end is None else end
        if start < 0 or end > len(self) or start >= end:
            return ""
        return str(self)[start:end]

    def set_text(self, text: str) -> None:
        """Replace the contents, leaving the gap at the end."""
        capacity = max(_MIN_CAPACITY, len(text) + _GROWTH_SLACK)
        self._buf = list(text) + [""] * (capacity - len(text))
        self._gap_start = len(text)
        self._gap_end = capacity

    def insert(self, pos: int, text: str) -> None:
        """Insert ``text`` before position ``pos``."""
        if pos < 0 or pos > len(self) or not text:
            return
        self._move_gap_to(pos)
        needed = len(text)
        gap = self._gap_end - self._gap_start
        if needed > gap:
            self._expand_gap(needed - gap + _GROWTH_SLACK)
        self._buf[self._gap_start : self._gap_start + needed] = list(text)
        self._gap_start += needed

    def delete(self, start: int, end: int) -> None:
        """Remove the characters in ``[start, end)``."""
        if start < 0 or end > len(self) or start >= end:
            return
        self._move_gap_to(start)
        self._gap_end += end - start

    def char_at(self, pos: int) -> str:
        """Return the character at ``pos``, or ``""`` when out of range."""
        if pos < 0 or pos >= len(self):
            return ""
        if pos < self._gap_start:
            return self._buf[pos]
        return self._buf[pos + (self._gap_end - self._gap_start)]

    def clear(self) -> None:
        """Drop all text while keeping the allocated capacity."""
        self._gap_start = 0
        self._gap_end = len(self._buf)

    def _move_gap_to(self, pos: int) -> None:
        if pos < self._gap_start:
            distance = self._gap_start - pos
            self._buf[self._gap_end - distance : self._gap_end] = self._buf[pos : self._gap_start]
            self._gap_start = pos
            self._gap_end -= distance
        elif pos > self._gap_start:
            distance = pos - self._gap_start
            self._buf[self._gap_start : self._gap_start + distance] = self._buf[
                self._gap_end : self._gap_end + distance
            ]
            self._gap_start += distance
            self._gap_end += distance

    def _expand_gap(self, additional: int) -> None:
        gap = self._gap_end - self._gap_start
        self._buf = (
            self._buf[: self._gap_start]
            + [""] * (gap + additional)
            + self._buf[self._gap_end :]
        )
        self._gap_end += additional