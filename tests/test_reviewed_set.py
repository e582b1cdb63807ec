from unittest.mock import AsyncMock

import pytest

from moments.domain.reviewed_set import ReviewedSet
from moments.domain.storage.memory import InMemoryReviewedStore


@pytest.mark.asyncio
async def test_load_from_store():
    store = InMemoryReviewedStore({"a", "b"})

    reviewed = await ReviewedSet.load(store)

    assert reviewed.all() == frozenset({"a", "b"})
    await reviewed.aclose()
    assert reviewed.contains("a")
    assert "c" not in reviewed


@pytest.mark.asyncio
async def test_mark_reviewed_is_idempotent(reviewed_set):
    assert reviewed_set.mark_reviewed("x") is True
    after_first = reviewed_set.all()

    assert reviewed_set.mark_reviewed("x") is False
    assert reviewed_set.all() == after_first
    await reviewed_set.aclose()


@pytest.mark.asyncio
async def test_insert_is_visible_before_flush(reviewed_set, reviewed_store):
    reviewed_set.mark_reviewed("x")

    assert reviewed_set.contains("x")
    await reviewed_set.aclose()
    assert reviewed_store.ids == {"x"}


@pytest.mark.asyncio
async def test_repeated_mark_of_same_id_writes_once(reviewed_set, reviewed_store):
    reviewed_set.mark_reviewed("x")
    reviewed_set.mark_reviewed("x")
    reviewed_set.mark_reviewed("x")

    await reviewed_set.aclose()

    assert reviewed_store.save_count == 1


@pytest.mark.asyncio
async def test_flush_writes_full_snapshot(reviewed_set, reviewed_store):
    for event_id in ["a", "b", "c"]:
        reviewed_set.mark_reviewed(event_id)

    await reviewed_set.aclose()

    assert reviewed_store.ids == {"a", "b", "c"}
    assert not reviewed_set.is_dirty


@pytest.mark.asyncio
async def test_failed_flush_is_retried():
    store = AsyncMock()
    store.save = AsyncMock(side_effect=[OSError("disk full"), None])
    reviewed = ReviewedSet(store)

    reviewed.mark_reviewed("x")
    assert await reviewed.aclose() is True

    assert store.save.await_count == 2
    store.save.assert_awaited_with(frozenset({"x"}))
    assert not reviewed.is_dirty


@pytest.mark.asyncio
async def test_failed_flush_keeps_set_dirty():
    store = AsyncMock()
    store.save = AsyncMock(side_effect=OSError("read-only"))
    reviewed = ReviewedSet(store, {"a"})

    reviewed.mark_reviewed("b")

    assert await reviewed.flush() is False
    assert reviewed.is_dirty
    assert reviewed.all() == frozenset({"a", "b"})
    assert await reviewed.aclose() is False


def test_mark_without_event_loop_defers_flush(reviewed_store):
    reviewed = ReviewedSet(reviewed_store)

    reviewed.mark_reviewed("x")

    assert reviewed.is_dirty
    assert reviewed_store.save_count == 0


@pytest.mark.asyncio
async def test_flush_without_changes_does_not_write(reviewed_set, reviewed_store):
    assert await reviewed_set.flush() is True
    assert reviewed_store.save_count == 0
