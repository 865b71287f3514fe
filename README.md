# bwxsdk

Building blocks for a rich-text editor that do not depend on any GUI toolkit, plus a few colour helpers.

## Modules

- `bwxsdk.gap_buffer`: `GapBuffer` stores text with a movable gap at the editing point, so edits near the last edit are cheap. It supports `insert`, `delete`, `get_text`, `set_text`, `char_at`, `clear`, `len()` and `str()`. Edits outside the text are ignored. Reads outside the text return `""`.
- `bwxsdk.document`: `TextDocument` is a document model built on a gap buffer.
  - It keeps formatting as `FormatRun` spans of `TextFormat` (font name and size, bold, italic, underline, text and background colours).
  - It tracks a `Cursor` (position, line, column) and a `Selection`.
  - It keeps word and character counts in `DocumentMetadata`.
  - It has undo and redo with a bounded history (`max_undo`, 100 by default). Consecutive single-character insertions are merged into one undo step.
  - It notifies every registered `DocumentObserver` of text, cursor, selection and format changes. The default observer hooks count each notification in `events`.
- `bwxsdk.renderer`: `FullViewRenderer` lays out a document as word-wrapped lines (`LayoutLine`, `CharInfo`) across the client width. It provides:
  - `hit_test` to map a point to a document position;
  - `cursor_rect` and `selection_rects`, which return `Rect` objects;
  - `visible_line_range` for scrolling;
  - `render`, which draws onto any canvas object that has the methods `clear(colour)`, `draw_text(text, x, y, fmt)`, `draw_line(x1, y1, x2, y2, colour)` and `draw_rectangle(rect, colour, opacity)`.

  Text is measured by a measurer object with a `measure(text, fmt) -> (width, height)` method. `MonospaceMeasurer` is included and is the default.
- `bwxsdk.colours`: `Colour` (a frozen RGB value with channels checked to be in 0..255), `random_colour`, `random_colours` (optionally unique, always starting with a given first colour) and `mix_colours`.

## Installation

```
pip install .
```

## Example

```python
from bwxsdk.document import TextDocument, TextFormat
from bwxsdk.renderer import FullViewRenderer, MonospaceMeasurer
from bwxsdk.colours import Colour, mix_colours

doc = TextDocument()
doc.insert_text(0, "Hello world")
doc.apply_format(0, 5, TextFormat(bold=True))
doc.undo()                     # removes the bold formatting again
print(doc.get_text())          # Hello world
print(doc.metadata.word_count) # 2

renderer = FullViewRenderer(MonospaceMeasurer(8, 16))
renderer.set_document(doc)
renderer.on_resize(400, 300)
renderer.calculate_layout()
print(renderer.cursor_rect(0)) # Rect(x=20, y=20, width=1, height=19)

print(mix_colours(Colour(0, 0, 0), Colour(255, 255, 255), 0.5))  # Colour(red=127, green=127, blue=127)
```

## What this package does not do

The package has no editor control that handles keyboard, mouse, focus or the clipboard. You turn input events into calls on `TextDocument` yourself. It does not draw to a screen: `FullViewRenderer.render` only calls your canvas object. Documents are kept in memory only, and there is no loading or saving to files.

## Running the tests

```
pip install .[test]
pytest
```