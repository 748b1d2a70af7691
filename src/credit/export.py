"""Export the worklist to a CSV file for ticketing-system import."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path

from credit.models import ItemKind, WorkItem

logger = logging.getLogger(__name__)

CSV_HEADERS = ["title", "description", "assignee", "repo", "type"]


def describe(item: WorkItem) -> str:
    """Edited body plus a URL line and, for labelled issues, a Labels line."""
    description = f"{item.body}\nURL: {item.url}"
    if item.kind is ItemKind.ISSUE and item.labels:
        description = f"{description}\nLabels: {', '.join(item.labels)}"
    return description


def to_row(item: WorkItem, user: str) -> dict[str, str]:
    return {
        "title": item.title,
        "description": describe(item),
        "assignee": user,
        "repo": item.repo_name,
        "type": item.kind.csv_type,
    }


def export_csv(items: Iterable[WorkItem], user: str, output_path: Path) -> int:
    """Write one row per item, in order. Selection does not filter the export.

    Returns the number of rows written.
    """
    rows = [to_row(item, user) for item in items]
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_HEADERS)
        writer.writeheader()
        writer.writerows(rows)
    logger.info("Wrote %d rows to %s", len(rows), output_path)
    return len(rows)
