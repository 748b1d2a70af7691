"""Authoritative, ordered collection of work items."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from credit.models import WorkItem


class ConstructionError(Exception):
    """The editor cannot start (e.g. there is nothing to show)."""


class IndexOutOfRange(IndexError):
    """Store access outside ``[0, len)``. Navigation is clamped, so this is a bug."""


class WorkItemStore:
    """Ordered work items keyed by position.

    Owned by the editor's event loop; there is only ever one mutator.
    """

    def __init__(self, items: Iterable[WorkItem] = ()) -> None:
        self._items: list[WorkItem] = list(items)
        ids = [item.id for item in self._items]
        if len(ids) != len(set(ids)):
            raise ValueError("work item ids must be unique")

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[WorkItem]:
        return iter(list(self._items))

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexOutOfRange(
                f"index {index} outside [0, {len(self._items)})"
            )

    def get(self, index: int) -> WorkItem:
        self._check(index)
        return self._items[index]

    def set(self, index: int, item: WorkItem) -> None:
        """Replace the item at *index* in place."""
        self._check(index)
        self._items[index] = item

    def remove(self, index: int) -> None:
        """Delete the item at *index*. No-op when there is nothing to delete."""
        if not 0 <= index < len(self._items):
            return
        del self._items[index]

    def items(self) -> list[WorkItem]:
        """Snapshot of the current items in order."""
        return list(self._items)
