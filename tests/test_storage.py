"""
Tests for the in-memory document store.
"""

import pytest

from bookshare.storage import Collections, InMemoryDocumentStorage


@pytest.fixture
def store():
    return InMemoryDocumentStorage()


class TestInsertAndFind:
    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, store):
        result = await store.insert_one(Collections.BOOKS, {"title": "Dune"})
        assert result.acknowledged
        assert result.inserted_id

        doc = await store.find_one(Collections.BOOKS, {"id": result.inserted_id})
        assert doc["title"] == "Dune"

    @pytest.mark.asyncio
    async def test_find_filters_and_keeps_order(self, store):
        await store.insert_one(Collections.BOOKS, {"title": "A", "email": "x@example.com"})
        await store.insert_one(Collections.BOOKS, {"title": "B", "email": "y@example.com"})
        await store.insert_one(Collections.BOOKS, {"title": "C", "email": "x@example.com"})

        mine = await store.find(Collections.BOOKS, {"email": "x@example.com"})
        assert [d["title"] for d in mine] == ["A", "C"]
        assert len(await store.find(Collections.BOOKS)) == 3

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self, store):
        result = await store.insert_one(Collections.BOOKS, {"title": "A"})
        doc = await store.find_one(Collections.BOOKS, {"id": result.inserted_id})
        doc["title"] = "changed"

        again = await store.find_one(Collections.BOOKS, {"id": result.inserted_id})
        assert again["title"] == "A"

    @pytest.mark.asyncio
    async def test_find_one_miss(self, store):
        assert await store.find_one(Collections.USERS, {"email": "nobody@example.com"}) is None


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_changes_only_supplied_fields(self, store):
        result = await store.insert_one(Collections.BOOKS, {"title": "A", "url": "u"})
        update = await store.update_one(
            Collections.BOOKS, {"id": result.inserted_id}, {"title": "B"}, upsert=True,
        )
        assert update.matched_count == 1
        assert update.modified_count == 1
        assert update.upserted_id is None

        doc = await store.find_one(Collections.BOOKS, {"id": result.inserted_id})
        assert doc == {"id": result.inserted_id, "title": "B", "url": "u"}

    @pytest.mark.asyncio
    async def test_same_value_is_matched_not_modified(self, store):
        result = await store.insert_one(Collections.BOOKS, {"title": "A"})
        update = await store.update_one(Collections.BOOKS, {"id": result.inserted_id}, {"title": "A"})
        assert update.matched_count == 1
        assert update.modified_count == 0

    @pytest.mark.asyncio
    async def test_upsert_creates_from_filter_and_fields(self, store):
        update = await store.update_one(
            Collections.BOOKS, {"id": "book-1"}, {"title": "New"}, upsert=True,
        )
        assert update.upserted_count == 1
        assert update.upserted_id == "book-1"

        doc = await store.find_one(Collections.BOOKS, {"id": "book-1"})
        assert doc == {"id": "book-1", "title": "New"}

    @pytest.mark.asyncio
    async def test_no_upsert_leaves_store_unchanged(self, store):
        update = await store.update_one(Collections.BOOKS, {"id": "missing"}, {"title": "X"})
        assert update.matched_count == 0
        assert await store.find(Collections.BOOKS) == []

    @pytest.mark.asyncio
    async def test_id_cannot_be_overwritten(self, store):
        result = await store.insert_one(Collections.BOOKS, {"title": "A"})
        await store.update_one(Collections.BOOKS, {"id": result.inserted_id}, {"id": "other"})
        assert await store.find_one(Collections.BOOKS, {"id": result.inserted_id})


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_one(self, store):
        result = await store.insert_one(Collections.BOOKS, {"title": "A"})
        deleted = await store.delete_one(Collections.BOOKS, {"id": result.inserted_id})
        assert deleted.deleted_count == 1
        assert await store.find(Collections.BOOKS) == []

    @pytest.mark.asyncio
    async def test_delete_missing_is_zero(self, store):
        deleted = await store.delete_one(Collections.BOOKS, {"id": "missing"})
        assert deleted.acknowledged
        assert deleted.deleted_count == 0
