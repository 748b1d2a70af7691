"""Tests for CSV export."""

import csv

from credit.export import CSV_HEADERS, describe, export_csv, to_row
from credit.models import ItemKind, WorkItem


def _issue(**kwargs):
    defaults = dict(id="I_1", kind=ItemKind.ISSUE, repo_name="api", title="A",
                    body="B", url="https://x/1", labels=("bug", "p1"))
    defaults.update(kwargs)
    return WorkItem(**defaults)


def _pr(**kwargs):
    defaults = dict(id="PR_1", kind=ItemKind.PULL_REQUEST, repo_name="credit",
                    title="Fix bug", body="Body", url="https://x/2")
    defaults.update(kwargs)
    return WorkItem(**defaults)


def _read(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


class TestDescribe:
    def test_issue_with_labels(self):
        assert describe(_issue()) == "B\nURL: https://x/1\nLabels: bug, p1"

    def test_issue_without_labels(self):
        assert describe(_issue(labels=())) == "B\nURL: https://x/1"

    def test_pull_request(self):
        assert describe(_pr()) == "Body\nURL: https://x/2"

    def test_edited_body_is_used(self):
        item = _issue().with_text("A", "Edited")
        assert describe(item).startswith("Edited\nURL: ")


class TestExport:
    def test_header_and_rows(self, tmp_path):
        path = tmp_path / "out.csv"
        count = export_csv([_pr(), _issue()], "octo", path)
        assert count == 2
        with open(path, newline="", encoding="utf-8") as f:
            assert next(csv.reader(f)) == CSV_HEADERS
        rows = _read(path)
        assert rows[0] == {
            "title": "Fix bug",
            "description": "Body\nURL: https://x/2",
            "assignee": "octo",
            "repo": "credit",
            "type": "pr",
        }
        assert rows[1]["type"] == "issue"
        assert rows[1]["description"] == "B\nURL: https://x/1\nLabels: bug, p1"

    def test_selection_does_not_filter(self, tmp_path):
        path = tmp_path / "out.csv"
        items = [_pr(), _issue(selected=True), _issue(id="I_2", selected=False)]
        assert export_csv(items, "octo", path) == 3
        assert len(_read(path)) == 3

    def test_order_is_preserved(self, tmp_path):
        path = tmp_path / "out.csv"
        items = [_issue(id="I_2", title="second"), _pr(title="first")]
        export_csv(items, "octo", path)
        assert [r["title"] for r in _read(path)] == ["second", "first"]

    def test_empty_list_writes_header_only(self, tmp_path):
        path = tmp_path / "out.csv"
        assert export_csv([], "octo", path) == 0
        assert path.read_text(encoding="utf-8").strip() == ",".join(CSV_HEADERS)

    def test_fields_with_commas_and_quotes(self, tmp_path):
        path = tmp_path / "out.csv"
        export_csv([_pr(title='Fix "quoted", thing')], "octo", path)
        assert _read(path)[0]["title"] == 'Fix "quoted", thing'


def test_to_row_assignee():
    assert to_row(_pr(), "someone")["assignee"] == "someone"
