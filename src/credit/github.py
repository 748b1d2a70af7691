"""Fetch merged pull requests and closed issues from the GitHub GraphQL API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from credit.models import IssueRecord, PullRequestRecord

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com/graphql"
PAGE_SIZE = 100
REQUEST_TIMEOUT = 60

GQL_MERGED_PRS = """
query($query: String!, $searchCursor: String) {
  search(query: $query, type: ISSUE, first: 100, after: $searchCursor) {
    pageInfo { endCursor hasNextPage }
    nodes {
      ... on PullRequest {
        id
        title
        body
        url
        createdAt
        mergedAt
        baseRepository { name }
        closingIssuesReferences(first: 100) {
          nodes {
            id
            title
            body
            url
            repository { name }
            labels(first: 10) { nodes { name } }
          }
        }
      }
    }
  }
}
"""

GQL_CLOSED_ISSUES = """
query($query: String!, $searchCursor: String) {
  search(query: $query, type: ISSUE, first: 100, after: $searchCursor) {
    pageInfo { endCursor hasNextPage }
    nodes {
      ... on Issue {
        id
        title
        body
        url
        repository { name }
        labels(first: 10) { nodes { name } }
      }
    }
  }
}
"""


class GitHubError(Exception):
    """A GitHub request failed or returned GraphQL errors."""


def _session(token: str) -> requests.Session:
    s = requests.Session()
    s.headers["Authorization"] = f"Bearer {token}"
    s.headers["Accept"] = "application/vnd.github+json"
    return s


def _name(node: dict | None) -> str:
    return str((node or {}).get("name") or "")


def _labels(node: dict) -> list[str]:
    return [_name(label) for label in (node.get("labels") or {}).get("nodes") or [] if label]


def _issue_record(node: dict) -> IssueRecord:
    return IssueRecord(
        id=str(node["id"]),
        repo_name=_name(node.get("repository")),
        title=node.get("title") or "",
        body=node.get("body") or "",
        url=node.get("url") or "",
        labels=_labels(node),
    )


class GitHubClient:
    """Thin GraphQL client. Retries and auth flows are left to the caller."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url
        self.session = session or _session(token)

    def graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """POST a query and return its ``data`` payload."""
        try:
            resp = self.session.post(
                self.api_url,
                json={"query": query, "variables": variables},
                timeout=REQUEST_TIMEOUT,
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.exceptions.RequestException as exc:
            logger.error("GraphQL request failed: %s", exc)
            raise GitHubError(f"GitHub request failed: {exc}") from exc
        except ValueError as exc:
            raise GitHubError("GitHub returned a non-JSON response") from exc

        errors = payload.get("errors")
        if errors:
            logger.error("GraphQL errors: %s", errors)
            messages = "; ".join(str(e.get("message", e)) for e in errors)
            raise GitHubError(f"GitHub returned errors: {messages}")
        return payload.get("data") or {}

    def _search(self, query: str, search: str) -> list[dict[str, Any]]:
        """Collect every node of a paginated search."""
        cursor: str | None = None
        nodes: list[dict[str, Any]] = []
        pages = 0
        while True:
            data = self.graphql(query, {"query": search, "searchCursor": cursor})
            result = data.get("search") or {}
            nodes.extend(n for n in result.get("nodes") or [] if n)
            pages += 1
            page_info = result.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            cursor = page_info.get("endCursor")
        logger.info("Search %r returned %d nodes over %d pages", search, len(nodes), pages)
        return nodes

    def fetch_merged_prs(
        self, user: str, from_date: str, issues: dict[str, IssueRecord]
    ) -> list[PullRequestRecord]:
        """Merged PRs authored by *user*; issues they close are added to *issues*.

        A PR returned on more than one page is kept once (last write wins).
        """
        prs: dict[str, PullRequestRecord] = {}
        search = f"is:pr is:merged author:{user} merged:>{from_date}"
        for node in self._search(GQL_MERGED_PRS, search):
            if "id" not in node:
                continue
            for issue in (node.get("closingIssuesReferences") or {}).get("nodes") or []:
                if issue and "id" in issue:
                    issues[str(issue["id"])] = _issue_record(issue)
            prs[str(node["id"])] = PullRequestRecord(
                id=str(node["id"]),
                repo_name=_name(node.get("baseRepository")),
                title=node.get("title") or "",
                body=node.get("body") or "",
                url=node.get("url") or "",
                created_at=node.get("createdAt") or "",
                merged_at=node.get("mergedAt") or "",
            )
        return list(prs.values())

    def fetch_closed_issues(
        self, user: str, from_date: str, issues: dict[str, IssueRecord]
    ) -> dict[str, IssueRecord]:
        """Closed issues authored by *user*, merged into *issues* (last write wins)."""
        search = f"is:issue is:closed author:{user} closed:>{from_date}"
        for node in self._search(GQL_CLOSED_ISSUES, search):
            if "id" not in node:
                continue
            issues[str(node["id"])] = _issue_record(node)
        return issues

    def fetch_work(
        self, user: str, from_date: str
    ) -> tuple[list[PullRequestRecord], dict[str, IssueRecord]]:
        """All merged PRs and the deduplicated closed issues since *from_date*."""
        issues: dict[str, IssueRecord] = {}
        prs = self.fetch_merged_prs(user, from_date, issues)
        self.fetch_closed_issues(user, from_date, issues)
        logger.info("Fetched %d pull requests and %d issues for %s", len(prs), len(issues), user)
        return prs, issues
