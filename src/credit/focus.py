"""Focus state machine routing keys to the list or one of the editor fields."""

from __future__ import annotations

import logging
from enum import Enum

from credit.store import WorkItemStore
from credit.widgets.editor_panel import EditorPanel
from credit.widgets.list_panel import Direction, ListPanel
from credit.widgets.text_field import TextField

logger = logging.getLogger(__name__)

TAB_KEY = "tab"
UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")
TOGGLE_KEYS = ("enter", "space")
DELETE_KEYS = ("ctrl+d",)


class Focus(Enum):
    """Which region receives keyboard input."""

    LIST = "LIST"
    TITLE = "TITLE"
    BODY = "BODY"

    def next(self) -> Focus:
        members = list(Focus)
        return members[(members.index(self) + 1) % len(members)]


class FocusController:
    """Cycles LIST → TITLE → BODY → LIST and commits edits when leaving a field.

    Leaving TITLE or BODY is the single point where field text is written
    back to the store.
    """

    def __init__(self, store: WorkItemStore, list_panel: ListPanel, editor: EditorPanel) -> None:
        self.store = store
        self.list_panel = list_panel
        self.editor = editor
        self.focus = Focus.LIST
        self._apply_focus()

    def commit(self) -> None:
        """Write both field values into the store at the cursor index."""
        item = self.list_panel.current()
        if item is None:
            return
        title, body = self.editor.values()
        updated = item.with_text(title, body)
        if updated != item:
            logger.debug("Committing edit to %s", item.id)
        self.store.set(self.list_panel.cursor, updated)

    def cycle(self) -> Focus:
        """Advance focus one step, committing first if an editor field loses focus."""
        if self.focus is not Focus.LIST:
            self.commit()
        self.focus = self.focus.next()
        self._apply_focus()
        return self.focus

    def _apply_focus(self) -> None:
        title, body = self.editor.title_field, self.editor.body_field
        if self.focus is Focus.TITLE:
            title.focus()
            body.blur()
        elif self.focus is Focus.BODY:
            title.blur()
            body.focus()
        else:
            title.blur()
            body.blur()

    def _reload_editor(self) -> None:
        self.editor.load(self.list_panel.current())

    def route(self, key: str, character: str | None = None) -> bool:
        """Dispatch a key press. Returns True if something consumed it."""
        if key == TAB_KEY:
            self.cycle()
            return True

        if self.focus is Focus.LIST:
            if key in UP_KEYS or key in DOWN_KEYS:
                direction = Direction.UP if key in UP_KEYS else Direction.DOWN
                if self.list_panel.move_cursor(direction):
                    self._reload_editor()
                return True
            if key in TOGGLE_KEYS:
                self.list_panel.toggle_selection()
                return True
            if key in DELETE_KEYS:
                removed = self.list_panel.current()
                self.list_panel.remove_current()
                if removed is not None:
                    logger.info("Removed %s from the worklist", removed.id)
                self._reload_editor()
                return True
            return False

        return self._field().handle_key(key, character)

    def paste(self, text: str) -> bool:
        """Insert pasted text into the focused field. Pastes on the list are ignored."""
        if self.focus is Focus.LIST:
            return False
        return self._field().insert_text(text)

    def _field(self) -> TextField:
        return self.editor.title_field if self.focus is Focus.TITLE else self.editor.body_field
