"""Left-hand list of work items with a clamped cursor."""

from __future__ import annotations

import math
from collections.abc import Iterator
from enum import Enum

from rich.console import Console, ConsoleOptions, RenderResult
from rich.text import Text

from credit.models import WorkItem
from credit.store import WorkItemStore
from credit.theme import Theme

LIST_TITLE = "Work Items"
CURSOR_MARKER = "> "
ROW_PADDING = 4  # cursor marker + selection glyph and its gap
PAGE_DOT_ACTIVE = "●"
PAGE_DOT_INACTIVE = "○"


class Direction(Enum):
    UP = -1
    DOWN = 1


class ListRender:
    """Snapshot of the list for one frame.

    Lines are produced lazily and every iteration starts over, so the same
    render can be drawn any number of times.
    """

    def __init__(
        self,
        items: list[WorkItem],
        cursor: int,
        width: int,
        height: int,
        theme: Theme,
    ) -> None:
        self._items = items
        self._cursor = cursor
        self.width = width
        self.height = height
        self._theme = theme

    def _page_size(self) -> int:
        chrome = 4  # title, blank, blank, status
        per_page = max(1, self.height - chrome)
        if len(self._items) > per_page:
            per_page = max(1, self.height - chrome - 1)
        return per_page

    def _row(self, index: int, item: WorkItem) -> Text | None:
        text_width = self.width - ROW_PADDING
        if text_width <= 0:
            return None
        title = Text(item.title.replace("\n", " "))
        title.truncate(text_width, overflow="ellipsis")
        is_cursor = index == self._cursor
        row = Text(CURSOR_MARKER if is_cursor else " " * len(CURSOR_MARKER))
        row.append(item.glyph, style=self._theme.selected_glyph)
        row.append(" ")
        row.append_text(title)
        row.stylize(self._theme.cursor_item if is_cursor else self._theme.item)
        return row

    def __iter__(self) -> Iterator[Text]:
        if self.width <= 0 or self.height <= 0:
            return
        title = Text(f" {LIST_TITLE} ", style=self._theme.title)
        title.truncate(self.width)
        yield title
        yield Text()

        per_page = self._page_size()
        pages = max(1, math.ceil(len(self._items) / per_page))
        page = self._cursor // per_page if self._items else 0
        start = page * per_page
        for index in range(start, min(len(self._items), start + per_page)):
            row = self._row(index, self._items[index])
            if row is not None:
                yield row

        yield Text()
        noun = "item" if len(self._items) == 1 else "items"
        status = Text(f"{len(self._items)} {noun} left", style=self._theme.status_bar)
        status.truncate(self.width)
        yield status
        if pages > 1:
            dots = Text(
                "".join(
                    PAGE_DOT_ACTIVE if p == page else PAGE_DOT_INACTIVE
                    for p in range(pages)
                ),
                style=self._theme.pagination,
            )
            dots.truncate(self.width)
            yield dots

    def lines(self) -> list[Text]:
        return list(self)

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        for line in self:
            line.no_wrap = True
            yield line


class ListPanel:
    """Navigable view over the store. The cursor is the store index of the highlighted item."""

    def __init__(self, store: WorkItemStore, theme: Theme | None = None) -> None:
        self.store = store
        self.theme = theme or Theme()
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.store)

    def current(self) -> WorkItem | None:
        if not len(self.store):
            return None
        return self.store.get(self.cursor)

    def _clamp(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.store) - 1))

    def move_cursor(self, direction: Direction) -> bool:
        """Move one row up or down without wrapping. Returns True if the cursor moved."""
        if not len(self.store):
            return False
        before = self.cursor
        self.cursor += direction.value
        self._clamp()
        return self.cursor != before

    def toggle_selection(self) -> None:
        """Flip the cursor item's selection and write it to the store right away."""
        item = self.current()
        if item is None:
            return
        self.store.set(self.cursor, item.toggled())

    def remove_current(self) -> None:
        """Remove the cursor item; the cursor re-clamps to the new bounds."""
        self.store.remove(self.cursor)
        self._clamp()

    def render(self, width: int, height: int) -> ListRender:
        return ListRender(self.store.items(), self.cursor, width, height, self.theme)
