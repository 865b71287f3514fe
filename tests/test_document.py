import pytest

from bwxsdk.document import (
    Cursor,
    DocumentObserver,
    FormatRun,
    Selection,
    TextDocument,
    TextFormat,
)


def make(text):
    doc = TextDocument()
    doc.set_text(text)
    return doc


def assert_runs_cover(doc):
    runs = doc.runs
    assert runs[0].start == 0
    assert runs[-1].end == len(doc)
    for a, b in zip(runs, runs[1:]):
        assert a.end == b.start


class Recorder(DocumentObserver):
    def __init__(self):
        self.events = []

    def on_text_changed(self):
        self.events.append("text")

    def on_cursor_moved(self):
        self.events.append("cursor")

    def on_selection_changed(self):
        self.events.append("selection")

    def on_format_changed(self):
        self.events.append("format")


def test_set_text_round_trip():
    text = "Hello World"
    doc = make(text)
    assert doc.get_text() == text
    assert len(doc) == len(text)
    assert doc.get_text(2, 7) == text[2:7]


def test_char_at_and_out_of_range():
    doc = make("abc")
    assert doc.char_at(1) == "b"
    assert doc.char_at(3) == ""
    assert doc.char_at(-1) == ""


def test_clear_empties_document():
    doc = make("something")
    doc.clear()
    assert doc.get_text() == ""
    assert len(doc) == 0


def test_insert_undo_redo():
    doc = make("Hello")
    doc.insert_text(5, " World")
    assert doc.get_text() == "Hello World"
    doc.undo()
    assert doc.get_text() == "Hello"
    assert doc.can_redo()
    doc.redo()
    assert doc.get_text() == "Hello World"


def test_multi_character_inserts_not_merged():
    doc = TextDocument()
    doc.insert_text(0, "ab")
    doc.insert_text(2, "cd")
    doc.undo()
    assert doc.get_text() == "ab"
    doc.undo()
    assert doc.get_text() == ""


def test_delete_and_undo_restores():
    text = "abcdef"
    doc = make(text)
    doc.delete_text(1, 4)
    assert doc.get_text() == text[:1] + text[4:]
    doc.undo()
    assert doc.get_text() == text


def test_new_action_clears_redo():
    doc = make("abc")
    doc.insert_text(0, "xy")
    doc.undo()
    assert doc.can_redo()
    doc.delete_text(0, 1)
    assert not doc.can_redo()


def test_undo_limit_drops_oldest():
    doc = TextDocument(max_undo=2)
    doc.insert_text(0, "aa")
    doc.insert_text(2, "bb")
    doc.insert_text(4, "cc")
    doc.undo()
    doc.undo()
    assert not doc.can_undo()
    assert doc.get_text() == "aa"


def test_set_text_clears_history():
    doc = TextDocument()
    doc.insert_text(0, "abc")
    doc.set_text("new")
    assert not doc.can_undo()
    assert not doc.can_redo()


def test_apply_format_splits_runs_and_undo_merges_back():
    text = "abcde"
    doc = make(text)
    bold = TextFormat(bold=True)
    doc.apply_format(1, 3, bold)
    assert doc.runs == [
        FormatRun(0, 1, TextFormat()),
        FormatRun(1, 3, bold),
        FormatRun(3, len(text), TextFormat()),
    ]
    assert doc.format_at(1).bold
    assert not doc.format_at(3).bold
    doc.undo()
    assert doc.runs == [FormatRun(0, len(text), TextFormat())]


def test_format_runs_are_clipped():
    doc = make("abcde")
    bold = TextFormat(bold=True)
    doc.apply_format(1, 3, bold)
    assert doc.format_runs(2, 4) == [FormatRun(2, 3, bold), FormatRun(3, 4, TextFormat())]


def test_applying_same_format_merges():
    doc = make("abcdef")
    italic = TextFormat(italic=True)
    doc.apply_format(0, 3, italic)
    doc.apply_format(3, 6, italic)
    assert doc.runs == [FormatRun(0, 6, italic)]


def test_insert_inside_run_expands_it():
    doc = make("abcde")
    bold = TextFormat(bold=True)
    doc.apply_format(1, 3, bold)
    doc.insert_text(2, "XYZ")
    assert all(doc.format_at(p).bold for p in range(1, 3 + len("XYZ")))
    assert_runs_cover(doc)


def test_insert_at_document_end_leaves_runs():
    doc = make("abc")
    doc.insert_text(3, "d")
    assert doc.runs == [FormatRun(0, 3, TextFormat())]


def test_delete_across_runs_keeps_runs_contiguous():
    doc = make("abcde")
    bold = TextFormat(bold=True)
    doc.apply_format(1, 3, bold)
    doc.delete_text(0, 2)
    assert doc.format_at(0).bold
    assert_runs_cover(doc)


def test_clear_formatting_whole_and_range():
    doc = make("abcdef")
    doc.apply_format(0, 4, TextFormat(underline=True))
    doc.clear_formatting(1, 2)
    assert not doc.format_at(1).underline
    assert doc.format_at(0).underline
    doc.clear_formatting()
    assert doc.runs == [FormatRun(0, 6, TextFormat())]


def test_cursor_clamped():
    text = "abc"
    doc = make(text)
    doc.set_cursor_position(100)
    assert doc.cursor.position == len(text)
    doc.move_cursor(-100)
    assert doc.cursor.position == 0


def test_cursor_line_and_column():
    doc = make("ab\ncd")
    doc.set_cursor(Cursor(position=4))
    assert doc.cursor.line == 1
    assert doc.cursor.column == 1


def test_cursor_shifts_on_insert_before():
    doc = make("abc")
    doc.set_cursor_position(2)
    doc.insert_text(0, "xy")
    assert doc.cursor.position == 2 + len("xy")


def test_cursor_moves_to_delete_start_when_inside():
    doc = make("abcdef")
    doc.set_cursor_position(3)
    doc.delete_text(1, 5)
    assert doc.cursor.position == 1


def test_selection_text_and_bounds():
    text = "abcdef"
    doc = make(text)
    doc.set_selection(4, 1)
    sel = doc.selection
    assert sel.active
    assert (sel.min(), sel.max()) == (1, 4)
    assert doc.selected_text() == text[1:4]
    doc.set_selection(2, 2)
    assert not doc.selection.active
    assert doc.selected_text() == ""


def test_select_all_and_delete_selection():
    doc = make("abcdef")
    doc.select_all()
    assert doc.selected_text() == "abcdef"
    assert doc.delete_selection() is True
    assert doc.get_text() == ""
    assert doc.delete_selection() is False


def test_selection_collapses_when_deleted_over():
    doc = make("abcdef")
    doc.set_selection(2, 4)
    doc.delete_text(1, 5)
    assert not doc.selection.active


def test_selection_is_empty():
    assert Selection(3, 3).is_empty()
    assert not Selection(1, 3).is_empty()


def test_metadata_counts():
    text = "one two\tthree\nfour"
    doc = make(text)
    meta = doc.metadata
    assert meta.word_count == 4
    assert meta.character_count == len(text)


def test_format_run_contains():
    run = FormatRun(2, 5)
    assert run.contains(2)
    assert not run.contains(5)


def test_negative_undo_limit_rejected():
    with pytest.raises(ValueError):
        TextDocument(max_undo=-1)