"""Data models for credit."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class ItemKind(Enum):
    """Where a work item came from."""

    PULL_REQUEST = "PULL_REQUEST"
    ISSUE = "ISSUE"

    @property
    def csv_type(self) -> str:
        """Value written to the ``type`` column of the export."""
        return "pr" if self is ItemKind.PULL_REQUEST else "issue"


SELECTED_GLYPH = "✓"
UNSELECTED_GLYPH = " "


@dataclass(frozen=True)
class WorkItem:
    """A single exportable unit of work. Immutable; edit with dataclasses.replace()."""

    id: str
    kind: ItemKind
    repo_name: str = ""
    title: str = ""
    body: str = ""
    url: str = ""
    labels: tuple[str, ...] = ()
    selected: bool = False

    def with_text(self, title: str, body: str) -> WorkItem:
        """Return a copy carrying edited title/body; identity fields are kept."""
        return replace(self, title=title, body=body)

    def toggled(self) -> WorkItem:
        """Return a copy with the selection flag flipped."""
        return replace(self, selected=not self.selected)

    @property
    def glyph(self) -> str:
        return SELECTED_GLYPH if self.selected else UNSELECTED_GLYPH


@dataclass
class PullRequestRecord:
    """A merged pull request as returned by the GitHub search."""

    id: str
    repo_name: str = ""
    title: str = ""
    body: str = ""
    url: str = ""
    created_at: str = ""
    merged_at: str = ""


@dataclass
class IssueRecord:
    """A closed issue as returned by the GitHub search."""

    id: str
    repo_name: str = ""
    title: str = ""
    body: str = ""
    url: str = ""
    labels: list[str] = field(default_factory=list)


def items_from_records(
    prs: list[PullRequestRecord], issues: dict[str, IssueRecord]
) -> list[WorkItem]:
    """Build the initial worklist: pull requests first, then issues."""
    items: list[WorkItem] = []
    for pr in prs:
        items.append(WorkItem(
            id=pr.id,
            kind=ItemKind.PULL_REQUEST,
            repo_name=pr.repo_name,
            title=pr.title,
            body=pr.body,
            url=pr.url,
        ))
    for issue in issues.values():
        items.append(WorkItem(
            id=issue.id,
            kind=ItemKind.ISSUE,
            repo_name=issue.repo_name,
            title=issue.title,
            body=issue.body,
            url=issue.url,
            labels=tuple(issue.labels),
        ))
    return items


@dataclass
class ProjectConfig:
    """User configuration stored in config.toml."""

    api_url: str = "https://api.github.com/graphql"
    token_env: str = "GITHUB_TOKEN"
    output: str = "issues.csv"
    days: int = 90
    list_weight: int = 1
    editor_weight: int = 2
