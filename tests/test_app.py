"""Integration tests for the TUI app using Textual Pilot."""

import pytest
from textual import events

from credit.app import CreditApp, WorklistView
from credit.editor import build_editor
from credit.focus import Focus
from credit.models import ItemKind, WorkItem


PAUSE = 0.1


@pytest.fixture
def state():
    return build_editor([
        WorkItem(id="PR_1", kind=ItemKind.PULL_REQUEST, repo_name="credit",
                 title="Fix bug", body="PR body", url="https://x/1"),
        WorkItem(id="I_2", kind=ItemKind.ISSUE, repo_name="api",
                 title="Crash", body="Issue body", url="https://x/2",
                 labels=("bug",)),
    ])


@pytest.mark.asyncio
async def test_app_starts(state):
    app = CreditApp(state, user="octo")
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        view = app.query_one(WorklistView)
        assert app.focused is view
        assert view.focus_state is Focus.LIST
        assert "octo" in app.title


@pytest.mark.asyncio
async def test_view_tracks_widget_size(state):
    app = CreditApp(state)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        view = app.query_one(WorklistView)
        assert view.frame.width == view.size.width
        assert view.frame.height == view.size.height


@pytest.mark.asyncio
async def test_down_moves_cursor_and_reloads_editor(state):
    app = CreditApp(state)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        await pilot.press("down")
        await pilot.pause(delay=PAUSE)
        assert state.list_panel.cursor == 1
        assert state.editor.values() == ("Crash", "Issue body")
        await pilot.press("k")
        await pilot.pause(delay=PAUSE)
        assert state.list_panel.cursor == 0


@pytest.mark.asyncio
async def test_tab_cycles_focus_inside_view(state):
    app = CreditApp(state)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        view = app.query_one(WorklistView)
        await pilot.press("tab")
        await pilot.pause(delay=PAUSE)
        assert view.focus_state is Focus.TITLE
        assert app.focused is view
        await pilot.press("tab", "tab")
        await pilot.pause(delay=PAUSE)
        assert view.focus_state is Focus.LIST


@pytest.mark.asyncio
async def test_title_edit_committed_on_tab(state):
    app = CreditApp(state)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        await pilot.press("tab", "x", "tab")
        await pilot.pause(delay=PAUSE)
        assert state.store.get(0).title == "Fix bugx"
        assert state.focus is Focus.BODY


@pytest.mark.asyncio
async def test_paste_into_title_committed_on_tab(state):
    app = CreditApp(state)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        view = app.query_one(WorklistView)
        await pilot.press("tab")
        view.post_message(events.Paste(" pasted"))
        await pilot.pause(delay=PAUSE)
        await pilot.press("tab")
        await pilot.pause(delay=PAUSE)
        assert state.store.get(0).title == "Fix bug pasted"


@pytest.mark.asyncio
async def test_enter_toggles_and_ctrl_d_removes(state):
    app = CreditApp(state)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        await pilot.press("enter")
        await pilot.pause(delay=PAUSE)
        assert state.store.get(0).selected is True
        await pilot.press("ctrl+d")
        await pilot.pause(delay=PAUSE)
        assert [item.id for item in state.store] == ["I_2"]
        assert state.editor.values() == ("Crash", "Issue body")


@pytest.mark.asyncio
async def test_quit_returns_items_without_pending_edit(state):
    app = CreditApp(state)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        await pilot.press("tab", "z")
        await pilot.pause(delay=PAUSE)
        await app.action_quit()
    assert app.return_value is not None
    assert [item.title for item in app.return_value] == ["Fix bug", "Crash"]


@pytest.mark.asyncio
async def test_ctrl_c_quits_with_items(state):
    app = CreditApp(state)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause(delay=PAUSE)
        await pilot.press("ctrl+d")
        await pilot.pause(delay=PAUSE)
        await pilot.press("ctrl+c")
    assert [item.id for item in app.return_value] == ["I_2"]
