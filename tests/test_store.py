"""Tests for the work item store."""

import pytest

from credit.models import ItemKind, WorkItem
from credit.store import IndexOutOfRange, WorkItemStore


def _item(n: int) -> WorkItem:
    return WorkItem(id=f"PR_{n}", kind=ItemKind.PULL_REQUEST, title=f"Item {n}")


@pytest.fixture
def store():
    return WorkItemStore([_item(0), _item(1), _item(2)])


class TestAccess:
    def test_len(self, store):
        assert len(store) == 3

    def test_get(self, store):
        assert store.get(1).id == "PR_1"

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_get_out_of_range(self, store, index):
        with pytest.raises(IndexOutOfRange):
            store.get(index)

    def test_index_out_of_range_is_index_error(self):
        assert issubclass(IndexOutOfRange, IndexError)

    def test_iteration_order(self, store):
        assert [i.id for i in store] == ["PR_0", "PR_1", "PR_2"]

    def test_items_is_a_copy(self, store):
        items = store.items()
        items.clear()
        assert len(store) == 3


class TestMutation:
    def test_set(self, store):
        store.set(1, store.get(1).with_text("Edited", "Body"))
        assert store.get(1).title == "Edited"
        assert len(store) == 3

    def test_set_out_of_range(self, store):
        with pytest.raises(IndexOutOfRange):
            store.set(3, _item(9))

    def test_remove_shifts_down(self, store):
        store.remove(0)
        assert [i.id for i in store] == ["PR_1", "PR_2"]
        assert store.get(0).id == "PR_1"

    def test_remove_on_empty_is_noop(self):
        store = WorkItemStore()
        store.remove(0)
        store.remove(0)
        assert len(store) == 0

    def test_remove_out_of_range_is_noop(self, store):
        store.remove(7)
        assert len(store) == 3


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        WorkItemStore([_item(1), _item(1)])
