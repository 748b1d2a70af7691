"""Two-column frame: list on the left, editor on the right."""

from __future__ import annotations

from io import StringIO

from rich import box
from rich.console import Console, ConsoleOptions, RenderableType, RenderResult
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from credit.focus import Focus
from credit.theme import Theme
from credit.widgets.editor_panel import EditorPanel
from credit.widgets.list_panel import ListPanel

# Same footprint as a normal border, drawn with spaces.
HIDDEN = box.Box(
    "    \n"
    "    \n"
    "    \n"
    "    \n"
    "    \n"
    "    \n"
    "    \n"
    "    \n"
)
FOCUSED = box.SQUARE
BORDER = 2  # one column/row on each side
PADDING = 1  # horizontal padding inside the border, each side

HELP_TEXT = (
    "↑/k up • ↓/j down • enter/space select • ctrl+d delete • "
    "tab switch focus • ? help • ctrl+c quit"
)


class Frame:
    """One rendered screen: immutable once built, drawable any number of times."""

    def __init__(
        self,
        focus: Focus,
        width: int,
        height: int,
        list_width: int,
        editor_width: int,
        regions: list[RenderableType],
        help_line: Text | None = None,
    ) -> None:
        self.focus = focus
        self.width = width
        self.height = height
        self.list_width = list_width
        self.editor_width = editor_width
        self._regions = regions
        self._help_line = help_line

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        if self.width <= 0 or self.height <= 0:
            return
        grid = Table.grid(padding=0)
        widths = [w for w in (self.list_width, self.editor_width) if w > 0]
        for width in widths:
            grid.add_column(width=width, no_wrap=True)
        if widths:
            grid.add_row(*self._regions)
            yield grid
        if self._help_line is not None:
            yield self._help_line

    def plain(self) -> str:
        """The frame as plain text, e.g. for snapshot-free assertions."""
        console = Console(
            file=StringIO(),
            width=max(self.width, 1),
            color_system=None,
            legacy_windows=False,
        )
        console.print(self)
        return console.file.getvalue()  # type: ignore[attr-defined]


class LayoutEngine:
    """Splits the viewport between the panels by relative weight."""

    def __init__(
        self,
        list_panel: ListPanel,
        editor: EditorPanel,
        theme: Theme | None = None,
        list_weight: int = 1,
        editor_weight: int = 2,
    ) -> None:
        if list_weight <= 0 or editor_weight <= 0:
            raise ValueError("layout weights must be positive")
        self.list_panel = list_panel
        self.editor = editor
        self.theme = theme or Theme()
        self.list_weight = list_weight
        self.editor_weight = editor_weight
        self.width = 0
        self.height = 0
        self.list_width = 0
        self.editor_width = 0

    def set_viewport(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        total = self.list_weight + self.editor_weight
        self.list_width = self.width * self.list_weight // total
        self.editor_width = self.width - self.list_width

    def _region(self, content_width: int, height: int, focused: bool, kind: str) -> RenderableType:
        inner_width = content_width - BORDER - 2 * PADDING
        inner_height = height - BORDER
        if inner_width <= 0 or inner_height <= 0:
            return Text("")
        if kind == "list":
            content: RenderableType = self.list_panel.render(inner_width, inner_height)
        else:
            content = self.editor.render(inner_width, inner_height)
        return Panel(
            content,
            box=FOCUSED if focused else HIDDEN,
            border_style=self.theme.focused_border if focused else self.theme.blurred_border,
            width=content_width,
            height=height,
            padding=(0, PADDING),
        )

    def render(self, focus: Focus, show_help: bool = False) -> Frame:
        help_line: Text | None = None
        panel_height = self.height
        if show_help and self.height > 0:
            help_line = Text(HELP_TEXT, style=self.theme.help)
            help_line.truncate(self.width, overflow="ellipsis")
            panel_height -= 1

        regions: list[RenderableType] = []
        if self.list_width > 0:
            regions.append(
                self._region(self.list_width, panel_height, focus is Focus.LIST, "list")
            )
        if self.editor_width > 0:
            regions.append(
                self._region(self.editor_width, panel_height, focus is not Focus.LIST, "editor")
            )
        return Frame(
            focus,
            self.width,
            self.height,
            self.list_width,
            self.editor_width,
            regions,
            help_line,
        )
