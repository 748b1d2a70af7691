"""Main Textual App for credit."""

from __future__ import annotations

import os

from textual import events
from textual.app import App, ComposeResult, RenderResult
from textual.binding import Binding
from textual.widget import Widget
from textual.widgets import Footer, Header

from credit.editor import EditorState, KeyEvent, PasteEvent, ResizeEvent, handle_event
from credit.focus import Focus
from credit.layout import Frame
from credit.models import WorkItem


class WorklistView(Widget):
    """Paints the editor frame and feeds it terminal events.

    All key handling happens in ``handle_event``; this widget only
    translates Textual events and keeps the latest frame.
    """

    can_focus = True

    DEFAULT_CSS = """
    WorklistView {
        height: 1fr;
        width: 1fr;
    }
    """

    def __init__(self, state: EditorState, **kwargs) -> None:
        super().__init__(**kwargs)
        self.state = state
        self.frame: Frame = state.render()

    def render(self) -> RenderResult:
        return self.frame

    def on_resize(self, event: events.Resize) -> None:
        self.state, self.frame = handle_event(
            self.state, ResizeEvent(event.size.width, event.size.height)
        )
        self.refresh()

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.state, self.frame = handle_event(
            self.state, KeyEvent(event.key, event.character)
        )
        self.refresh()

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        self.state, self.frame = handle_event(self.state, PasteEvent(event.text))
        self.refresh()

    @property
    def focus_state(self) -> Focus:
        return self.state.focus


class CreditApp(App[list[WorkItem]]):
    """Worklist editor. Exits with the remaining items, edits included."""

    TITLE = "credit"
    CSS = """
    Screen {
        layout: vertical;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit & export", priority=True),
        Binding("ctrl+q", "quit", "Quit & export", show=False, priority=True),
    ]

    def __init__(self, state: EditorState, user: str = "", no_color: bool = False) -> None:
        if no_color:
            os.environ["NO_COLOR"] = "1"
        super().__init__()
        self.state = state
        self.user = user
        self.no_color = no_color

    def compose(self) -> ComposeResult:
        yield Header()
        yield WorklistView(self.state, id="worklist")
        yield Footer()

    def on_mount(self) -> None:
        if self.user:
            self.title = f"credit: {self.user}"
        self.query_one(WorklistView).focus()

    async def action_quit(self) -> None:
        """Leave without committing; text still being edited in a field is dropped."""
        self.exit(self.state.store.items())
