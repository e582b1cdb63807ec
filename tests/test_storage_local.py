import json

import pytest

from moments.domain.storage import StorageFactory
from moments.domain.storage.local import LocalReviewedStore
from moments.domain.storage.memory import InMemoryReviewedStore


@pytest.mark.asyncio
async def test_load_missing_file_is_empty(tmp_path):
    store = LocalReviewedStore(tmp_path / "reviewed.json")

    assert await store.load() == set()


@pytest.mark.asyncio
async def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "reviewed.json"
    store = LocalReviewedStore(path)

    await store.save({"b", "a"})

    assert json.loads(path.read_text()) == ["a", "b"]
    assert await LocalReviewedStore(path).load() == {"a", "b"}
    assert not (path.parent / "reviewed.json.tmp").exists()


@pytest.mark.asyncio
async def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / "reviewed.json"
    path.write_text("{not json")

    assert await LocalReviewedStore(path).load() == set()


def test_factory_builds_known_types():
    assert isinstance(StorageFactory.get_reviewed_store("memory"), InMemoryReviewedStore)


def test_factory_rejects_unknown_type():
    with pytest.raises(ValueError):
        StorageFactory.get_event_source("s3")
