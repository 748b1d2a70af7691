"""Tests for the editor panel."""

from io import StringIO

import pytest
from rich.console import Console

from credit.models import ItemKind, WorkItem
from credit.widgets.editor_panel import BODY_HEADER, EditorPanel


def _plain(renderable, width: int) -> str:
    console = Console(file=StringIO(), width=width, color_system=None, legacy_windows=False)
    console.print(renderable)
    return console.file.getvalue()


@pytest.fixture
def item():
    return WorkItem(
        id="I_1",
        kind=ItemKind.ISSUE,
        repo_name="credit",
        title="Fix bug",
        body="First line\nSecond line",
        url="https://github.com/o/credit/issues/1",
    )


def test_load_fills_fields(item):
    editor = EditorPanel()
    editor.load(item)
    assert editor.values() == ("Fix bug", "First line\nSecond line")
    assert editor.repo_name == "credit"


def test_load_none_clears(item):
    editor = EditorPanel()
    editor.load(item)
    editor.load(None)
    assert editor.values() == ("", "")
    assert editor.repo_name == ""


def test_load_does_not_change_focus(item):
    editor = EditorPanel()
    editor.title_field.focus()
    editor.load(item)
    assert editor.title_field.focused
    assert not editor.body_field.focused


def test_render_contents(item):
    editor = EditorPanel()
    editor.load(item)
    text = _plain(editor.render(40, 12), 40)
    assert "Repository: credit" in text
    assert "Title: Fix bug" in text
    assert BODY_HEADER in text
    assert "First line" in text
    assert "Second line" in text


def test_render_respects_height(item):
    editor = EditorPanel()
    editor.load(item)
    text = _plain(editor.render(40, 3), 40)
    assert len(text.splitlines()) == 3
    assert BODY_HEADER not in text


def test_render_degenerate_size(item):
    editor = EditorPanel()
    editor.load(item)
    assert _plain(editor.render(0, 10), 40).strip() == ""


def test_placeholders_when_empty():
    editor = EditorPanel()
    text = _plain(editor.render(40, 8), 40)
    assert "Issue Summary" in text
    assert "Issue Description" in text
