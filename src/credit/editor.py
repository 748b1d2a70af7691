"""Terminal-free editor core: ``handle_event(state, event) -> (state, frame)``.

The Textual app only translates terminal events into ``KeyEvent`` /
``ResizeEvent`` and paints the returned frame, so every state transition
can be exercised without a terminal.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from credit.focus import Focus, FocusController
from credit.layout import Frame, LayoutEngine
from credit.models import WorkItem
from credit.store import ConstructionError, WorkItemStore
from credit.theme import Theme
from credit.widgets.editor_panel import EditorPanel
from credit.widgets.list_panel import ListPanel

logger = logging.getLogger(__name__)

HELP_KEY = "question_mark"
DEFAULT_VIEWPORT = (80, 24)


@dataclass(frozen=True)
class KeyEvent:
    """A key press, named the way Textual names keys (``tab``, ``ctrl+d``, ``a``)."""

    key: str
    character: str | None = None


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class PasteEvent:
    """Bracketed paste: the whole pasted text at once."""

    text: str


Event = KeyEvent | ResizeEvent | PasteEvent


@dataclass
class EditorState:
    store: WorkItemStore
    list_panel: ListPanel
    editor: EditorPanel
    controller: FocusController
    layout: LayoutEngine
    show_help: bool = False
    theme: Theme = field(default_factory=Theme)

    @property
    def focus(self) -> Focus:
        return self.controller.focus

    def render(self) -> Frame:
        return self.layout.render(self.focus, self.show_help)


def build_editor(
    items: Iterable[WorkItem],
    theme: Theme | None = None,
    list_weight: int = 1,
    editor_weight: int = 2,
) -> EditorState:
    """Wire store, panels, focus controller and layout around *items*.

    Raises ConstructionError when there is nothing to edit or two items
    share an id.
    """
    theme = theme or Theme()
    try:
        store = WorkItemStore(items)
    except ValueError as e:
        raise ConstructionError(str(e)) from e
    if not len(store):
        raise ConstructionError("no merged pull requests or closed issues to edit")

    list_panel = ListPanel(store, theme)
    editor = EditorPanel(theme)
    editor.load(list_panel.current())
    controller = FocusController(store, list_panel, editor)
    layout = LayoutEngine(list_panel, editor, theme, list_weight, editor_weight)
    layout.set_viewport(*DEFAULT_VIEWPORT)
    logger.info("Editor started with %d items", len(store))
    return EditorState(
        store=store,
        list_panel=list_panel,
        editor=editor,
        controller=controller,
        layout=layout,
        theme=theme,
    )


def handle_event(state: EditorState, event: Event) -> tuple[EditorState, Frame]:
    """Apply one input event and return the state with a freshly rendered frame."""
    if isinstance(event, ResizeEvent):
        state.layout.set_viewport(event.width, event.height)
    elif isinstance(event, PasteEvent):
        state.controller.paste(event.text)
    elif isinstance(event, KeyEvent):
        if event.key == HELP_KEY and state.focus is Focus.LIST:
            state.show_help = not state.show_help
        else:
            state.controller.route(event.key, event.character)
    return state, state.render()
