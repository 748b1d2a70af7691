"""Right-hand editor: title and description fields for the highlighted item."""

from __future__ import annotations

from rich.console import Group
from rich.text import Text

from credit.models import WorkItem
from credit.theme import Theme
from credit.widgets.text_field import TextField

TITLE_PROMPT = "Title: "
TITLE_PLACEHOLDER = "Issue Summary"
BODY_HEADER = "Description:"
BODY_PLACEHOLDER = "Issue Description"
HEADER_ROWS = 5  # repository, blank, title, blank, description header


class EditorPanel:
    """Two independently focusable fields bound to the item under the list cursor.

    ``load`` only fills the fields; writing them back is the focus
    controller's job.
    """

    def __init__(self, theme: Theme | None = None) -> None:
        self.theme = theme or Theme()
        self.title_field = TextField(
            multiline=False,
            placeholder=TITLE_PLACEHOLDER,
            prompt=TITLE_PROMPT,
            theme=self.theme,
        )
        self.body_field = TextField(
            multiline=True,
            placeholder=BODY_PLACEHOLDER,
            theme=self.theme,
        )
        self.repo_name = ""

    def load(self, item: WorkItem | None) -> None:
        if item is None:
            self.repo_name = ""
            self.title_field.set_value("")
            self.body_field.set_value("")
            return
        self.repo_name = item.repo_name
        self.title_field.set_value(item.title)
        self.body_field.set_value(item.body)

    def values(self) -> tuple[str, str]:
        return self.title_field.value, self.body_field.value

    def render(self, width: int, height: int) -> Group:
        if width <= 0 or height <= 0:
            return Group()
        repo = Text(f"Repository: {self.repo_name}", style=self.theme.repo_name)
        repo.truncate(width, overflow="ellipsis")
        lines: list[Text] = [repo, Text()]
        lines.extend(self.title_field.render(width, 1))
        lines.append(Text())
        lines.append(Text(BODY_HEADER, style=self.theme.label))
        body_rows = height - HEADER_ROWS
        if body_rows > 0:
            lines.extend(self.body_field.render(width, body_rows))
        for line in lines:
            line.no_wrap = True
        return Group(*lines[:height])
