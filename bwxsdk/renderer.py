"""Full-view text layout, hit testing and rendering for a text document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .colours import Colour
from .document import TextDocument, TextFormat

_WHITE = Colour(255, 255, 255)
_BLACK = Colour(0, 0, 0)
_DEFAULT_CARET_HEIGHT = 20


@dataclass
class CharInfo:
    """Horizontal placement of one laid-out character."""

    x: int
    width: int


@dataclass
class LayoutLine:
    """One visual line covering document positions ``[start, end)``."""

    start: int
    end: int
    y: int
    height: int
    char_info: list[CharInfo] = field(default_factory=list)

    def contains(self, pos: int) -> bool:
        """Whether ``pos`` lies on this line, its end position included."""
        return self.start <= pos <= self.end


@dataclass
class Rect:
    """An axis-aligned rectangle."""

    x: int
    y: int
    width: int
    height: int

    def is_empty(self) -> bool:
        """Whether the rectangle has no area."""
        return self.width <= 0 or self.height <= 0


class _Measurer(Protocol):
    def measure(self, text: str, fmt: TextFormat) -> tuple[int, int]: ...


class _Canvas(Protocol):
    def clear(self, colour: Colour) -> None: ...

    def draw_text(self, text: str, x: int, y: int, fmt: TextFormat) -> None: ...

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, colour: Colour) -> None: ...

    def draw_rectangle(self, rect: Rect, colour: Colour, opacity: int) -> None: ...


class MonospaceMeasurer:
    """Text measurer giving every character the same cell size."""

    def __init__(self, char_width: int = 8, char_height: int = 16) -> None:
        if char_width < 0 or char_height < 0:
            raise ValueError("character cell size must not be negative")
        self.char_width = char_width
        self.char_height = char_height

    def measure(self, text: str, fmt: TextFormat | None = None) -> tuple[int, int]:
        """Return ``(width, height)`` of ``text``."""
        return len(text) * self.char_width, self.char_height


class FullViewRenderer:
    """Lays out a document as word-wrapped lines filling the client width."""

    def __init__(self, measurer: _Measurer | None = None) -> None:
        self.measurer = measurer if measurer is not None else MonospaceMeasurer()
        self.document: TextDocument | None = None
        self.client_width = 800
        self.client_height = 600
        self.margin_left = 20
        self.margin_right = 20
        self.line_spacing = 1.2
        self.selection_colour = Colour(100, 150, 255)
        self.selection_opacity = 128
        self._lines: list[LayoutLine] = []
        self._layout_valid = False

    @property
    def lines(self) -> list[LayoutLine]:
        """The current layout lines."""
        return list(self._lines)

    @property
    def layout_valid(self) -> bool:
        """Whether the layout reflects the current document and size."""
        return self._layout_valid

    def set_document(self, doc: TextDocument | None) -> None:
        """Attach a document and invalidate the layout."""
        self.document = doc
        self.invalidate_layout()

    def on_resize(self, width: int, height: int) -> None:
        """Record a new client size; the layout is invalidated if it changed."""
        if width != self.client_width or height != self.client_height:
            self.client_width = width
            self.client_height = height
            self.invalidate_layout()

    def invalidate_layout(self) -> None:
        """Mark the layout as needing recalculation."""
        self._layout_valid = False

    def total_height(self) -> int:
        """Bottom edge of the last laid-out line, or 0 without lines."""
        if not self._lines:
            return 0
        last = self._lines[-1]
        return last.y + last.height

    # -- layout ------------------------------------------------------------

    def calculate_layout(self) -> None:
        """Recompute the line layout if it is out of date."""
        if self.document is None or self._layout_valid:
            return
        self._lines = []
        text = self.document.get_text()
        if not text:
            self._layout_valid = True
            return

        y = self.margin_left
        offset = 0
        for paragraph in text.split("\n"):
            if paragraph:
                y = self._layout_paragraph(paragraph, offset, y)
            else:
                height = self._line_height(TextFormat())
                self._lines.append(LayoutLine(offset, offset, y, height))
                y += height
            offset += len(paragraph) + 1

        self._layout_valid = True

    def _line_height(self, fmt: TextFormat) -> int:
        return int(self.measurer.measure("M", fmt)[1] * self.line_spacing)

    def _char_infos(self, word: str, x: int, fmt: TextFormat) -> list[CharInfo]:
        infos = []
        for ch in word:
            width = self.measurer.measure(ch, fmt)[0]
            infos.append(CharInfo(x, width))
            x += width
        return infos

    @staticmethod
    def _split_words(text: str, offset: int) -> list[tuple[str, int]]:
        words: list[tuple[str, int]] = []
        current = ""
        current_start = offset
        for index, ch in enumerate(text):
            if ch in " \t":
                if current:
                    words.append((current, current_start))
                    current = ""
                words.append((ch, offset + index))
            else:
                if not current:
                    current_start = offset + index
                current += ch
        if current:
            words.append((current, current_start))
        return words

    def _layout_paragraph(self, text: str, start: int, y: int) -> int:
        assert self.document is not None
        fmt = self.document.format_at(start)
        height = self._line_height(fmt)
        limit = self.client_width - self.margin_right

        x = self.margin_left
        line_start = start
        line_text = ""
        chars: list[CharInfo] = []

        for word, word_start in self._split_words(text, start):
            width = self.measurer.measure(word, fmt)[0]
            if x + width > limit and line_text:
                self._lines.append(LayoutLine(line_start, word_start, y, height, chars))
                y += height
                line_text = word
                x = self.margin_left + width
                line_start = word_start
                chars = self._char_infos(word, self.margin_left, fmt)
            else:
                chars.extend(self._char_infos(word, x, fmt))
                line_text += word
                x += width

        if line_text:
            self._lines.append(LayoutLine(line_start, start + len(text), y, height, chars))
            y += height
        return y

    def visible_line_range(self, scroll_y: int, client_height: int) -> tuple[int, int]:
        """Indices ``(first, last)`` of lines visible in the viewport, inclusive."""
        first = 0
        last = len(self._lines) - 1
        for index, line in enumerate(self._lines):
            if line.y + line.height > scroll_y:
                first = index
                break
        for index in range(first, len(self._lines)):
            if self._lines[index].y > scroll_y + client_height:
                last = index - 1
                break
        return max(0, first), min(len(self._lines) - 1, last)

    # -- hit testing -------------------------------------------------------

    def hit_test(self, x: int, y: int, scroll_y: int) -> int:
        """Document position nearest to the point ``(x, y)`` in the viewport."""
        if not self._lines:
            return 0
        adjusted_y = y + scroll_y
        for line in self._lines:
            if not line.y <= adjusted_y < line.y + line.height:
                continue
            if x < self.margin_left:
                return line.start
            local_x = x - self.margin_left
            for index, info in enumerate(line.char_info):
                left = info.x - self.margin_left
                if left <= local_x < left + info.width:
                    if local_x < left + info.width // 2:
                        return line.start + index
                    return line.start + index + 1
            return line.end
        return len(self.document) if self.document is not None else 0

    def _line_end_x(self, line: LayoutLine) -> int:
        if not line.char_info:
            return self.margin_left
        last = line.char_info[-1]
        return last.x + last.width

    def cursor_rect(self, position: int) -> Rect:
        """Caret rectangle for document ``position``."""
        if not self._lines:
            return Rect(self.margin_left, 0, 1, _DEFAULT_CARET_HEIGHT)
        for line in self._lines:
            if line.contains(position):
                local = position - line.start
                if local < len(line.char_info):
                    return Rect(line.char_info[local].x, line.y, 1, line.height)
                return Rect(self._line_end_x(line), line.y, 1, line.height)
        last = self._lines[-1]
        return Rect(self._line_end_x(last), last.y, 1, last.height)

    def selection_rects(self, start: int, end: int) -> list[Rect]:
        """One highlight rectangle per line intersecting ``[start, end)``."""
        rects: list[Rect] = []
        if not self._lines or start >= end:
            return rects
        for line in self._lines:
            if line.end <= start or line.start >= end:
                continue
            local_start = max(start, line.start) - line.start
            local_end = min(end, line.end) - line.start
            count = len(line.char_info)

            x_start = self.margin_left
            if 0 < local_start <= count:
                before = line.char_info[local_start - 1]
                x_start = before.x + before.width

            x_end = self.margin_left
            if 0 < local_end <= count:
                if local_end < count:
                    x_end = line.char_info[local_end].x
                else:
                    x_end = self._line_end_x(line)

            rects.append(Rect(x_start, line.y, x_end - x_start, line.height))
        return rects

    # -- rendering ---------------------------------------------------------

    def render(self, canvas: _Canvas, client_height: int, scroll_y: int) -> None:
        """Draw visible text, the selection and the caret onto ``canvas``."""
        if self.document is None:
            return
        if not self._layout_valid:
            self.calculate_layout()

        canvas.clear(_WHITE)
        first, last = self.visible_line_range(scroll_y, client_height)
        for line in self._lines[first : last + 1]:
            self._render_line(canvas, line, scroll_y)

        if self.document.selection.active:
            self._render_selection(canvas, scroll_y)
        self._render_cursor(canvas, scroll_y)

    def _render_line(self, canvas: _Canvas, line: LayoutLine, scroll_y: int) -> None:
        assert self.document is not None
        y = line.y - scroll_y
        text = self.document.get_text(line.start, line.end)
        runs = self.document.format_runs(line.start, line.end)
        if not runs:
            canvas.draw_text(text, self.margin_left, y, TextFormat())
            return
        x = self.margin_left
        for run in runs:
            run_start = max(run.start, line.start) - line.start
            run_end = min(run.end, line.end) - line.start
            if run_start < run_end:
                run_text = text[run_start:run_end]
                canvas.draw_text(run_text, x, y, run.format)
                x += self.measurer.measure(run_text, run.format)[0]

    def _render_cursor(self, canvas: _Canvas, scroll_y: int) -> None:
        assert self.document is not None
        rect = self.cursor_rect(self.document.cursor.position)
        if rect.is_empty():
            return
        top = rect.y - scroll_y
        canvas.draw_line(rect.x, top, rect.x, top + rect.height, _BLACK)

    def _render_selection(self, canvas: _Canvas, scroll_y: int) -> None:
        assert self.document is not None
        sel = self.document.selection
        if not sel.active or sel.is_empty():
            return
        for rect in self.selection_rects(sel.min(), sel.max()):
            shifted = Rect(rect.x, rect.y - scroll_y, rect.width, rect.height)
            canvas.draw_rectangle(shifted, self.selection_colour, self.selection_opacity)