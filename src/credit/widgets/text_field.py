"""Editable text buffer with a caret, rendered as rich Text lines."""

from __future__ import annotations

from rich.cells import cell_len
from rich.text import Text
from textual.widgets.text_area import Document, Location

from credit.theme import Theme


def _char_offset(line: str, cells: int) -> int:
    """Index of the first character that starts at or after column *cells*."""
    position = 0
    for index, char in enumerate(line):
        if position >= cells:
            return index
        position += cell_len(char)
    return len(line)


class TextField:
    """A single- or multi-line text input.

    The text lives in a Textual ``Document``, the same buffer ``TextArea``
    edits. Keys are Textual key names (``left``, ``backspace``, ...). The field
    only reacts while focused; the owner decides when its value is committed.
    """

    def __init__(
        self,
        multiline: bool = False,
        placeholder: str = "",
        prompt: str = "",
        theme: Theme | None = None,
    ) -> None:
        self.multiline = multiline
        self.placeholder = placeholder
        self.prompt = prompt
        self.theme = theme or Theme()
        self.focused = False
        self._document = Document("")
        self._caret: Location = (0, 0)

    # ── value ──

    def _clean(self, text: str) -> str:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        if not self.multiline:
            text = text.replace("\n", " ")
        return text

    @property
    def value(self) -> str:
        return self._document.text

    def set_value(self, text: str) -> None:
        """Replace the content and put the caret at the end."""
        self._document = Document(self._clean(text))
        self._caret = self._document.end

    @property
    def caret(self) -> tuple[int, int]:
        """(row, column) of the caret."""
        return self._caret

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    # ── editing ──

    def insert_text(self, text: str) -> bool:
        """Insert *text* at the caret, e.g. a paste. Single-line fields flatten newlines."""
        if not self.focused or not text:
            return False
        result = self._document.replace_range(self._caret, self._caret, self._clean(text))
        self._caret = result.end_location
        return True

    def handle_key(self, key: str, character: str | None = None) -> bool:
        """Apply a key press. Returns True if the key was consumed."""
        if not self.focused:
            return False
        row, col = self._caret
        line = self._document.get_line(row)
        last_row = self._document.line_count - 1
        if key == "left":
            if col > 0:
                self._caret = (row, col - 1)
            elif row > 0:
                self._caret = (row - 1, len(self._document.get_line(row - 1)))
        elif key == "right":
            if col < len(line):
                self._caret = (row, col + 1)
            elif row < last_row:
                self._caret = (row + 1, 0)
        elif key == "home":
            self._caret = (row, 0)
        elif key == "end":
            self._caret = (row, len(line))
        elif key == "backspace":
            self._backspace()
        elif key == "delete":
            self._delete()
        elif key in ("up", "down") and self.multiline:
            target = max(0, min(last_row, row + (-1 if key == "up" else 1)))
            self._caret = (target, min(col, len(self._document.get_line(target))))
        elif key == "enter":
            if not self.multiline:
                return False
            self.insert_text("\n")
        elif character is not None and len(character) == 1 and character.isprintable():
            self.insert_text(character)
        else:
            return False
        return True

    def _backspace(self) -> None:
        row, col = self._caret
        if col > 0:
            start = (row, col - 1)
        elif row > 0:
            start = (row - 1, len(self._document.get_line(row - 1)))
        else:
            return
        self._document.replace_range(start, self._caret, "")
        self._caret = start

    def _delete(self) -> None:
        row, col = self._caret
        if col < len(self._document.get_line(row)):
            end = (row, col + 1)
        elif row < self._document.line_count - 1:
            end = (row + 1, 0)
        else:
            return
        self._document.replace_range(self._caret, end, "")

    # ── rendering ──

    def render(self, width: int, height: int = 1) -> list[Text]:
        """Visible window of the field, scrolled so the caret stays in view.

        Scrolling is measured in terminal cells, so wide characters keep the
        caret on screen.
        """
        if width <= 0 or height <= 0:
            return []
        prompt_cells = cell_len(self.prompt)
        room = width - prompt_cells
        if room <= 0:
            prompt = Text(self.prompt, style=self.theme.label)
            prompt.truncate(width)
            return [prompt]

        if not self.value and not self.focused:
            text = Text(self.prompt, style=self.theme.label)
            text.append(self.placeholder, style=self.theme.placeholder)
            text.truncate(width)
            return [text]

        caret_row, caret_col = self._caret
        caret_line = self._document.get_line(caret_row)
        caret_cells = cell_len(caret_line[:caret_col])
        caret_width = cell_len(caret_line[caret_col : caret_col + 1] or " ")
        left = max(0, caret_cells + caret_width - room) if self.focused else 0

        rows = height if self.multiline else 1
        top = max(0, caret_row - rows + 1)
        result: list[Text] = []
        for row in range(top, min(self._document.line_count, top + rows)):
            line = self._document.get_line(row)
            body = Text(line)
            if self.focused and row == caret_row:
                if caret_col >= len(line):
                    body.append(" ")
                body.stylize(self.theme.caret, caret_col, caret_col + 1)
            visible = body.divide([_char_offset(line, left)])[-1]
            visible.truncate(room)
            text = Text(self.prompt if row == top else " " * prompt_cells, style=self.theme.label)
            text.append_text(visible)
            result.append(text)
        return result
