"""Tests for InspirationStore against a real SQLite database."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import text

from capsule.core.errors import StoreError
from capsule.services.InspirationStore import InspirationStore, like_pattern


BASE_TIME = datetime(2026, 3, 1, 8, 0, 0)


async def _insert_series(store, contents, category="Quote"):
    records = []
    for index, content in enumerate(contents):
        records.append(
            await store.insert(content, category, created_at=BASE_TIME + timedelta(minutes=index))
        )
    return records


# ============================================================================
# Insert / get / delete
# ============================================================================


@pytest.mark.asyncio
async def test_insert_assigns_id_and_timestamp(store):
    record = await store.insert("hello", "Quote")

    assert record.id
    assert record.created_at is not None
    assert record.content == "hello"
    assert record.category == "Quote"


@pytest.mark.asyncio
async def test_insert_ids_are_unique(store):
    first = await store.insert("same", "Quote")
    second = await store.insert("same", "Quote")
    assert first.id != second.id


@pytest.mark.asyncio
async def test_get_returns_inserted_record(store):
    record = await store.insert("hello", "Quote")
    fetched = await store.get(record.id)
    assert fetched == record


@pytest.mark.asyncio
async def test_get_unknown_id_is_none(store):
    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_delete_reports_rows_removed(store):
    record = await store.insert("bye", "Note")

    assert await store.delete(record.id) == 1
    assert await store.delete(record.id) == 0
    assert await store.get(record.id) is None


# ============================================================================
# Count and range reads
# ============================================================================


@pytest.mark.asyncio
async def test_count_with_and_without_filter(store):
    await store.insert("one", "Quote")
    await store.insert("two", "Quote")
    await store.insert("https://x.io", "Link")

    assert await store.count() == 3
    assert await store.count(["Quote"]) == 2
    assert await store.count(["Quote", "Link"]) == 3
    assert await store.count(["Task"]) == 0


@pytest.mark.asyncio
async def test_empty_filter_means_unfiltered(store):
    await store.insert("one", "Quote")
    await store.insert("https://x.io", "Link")

    assert await store.count([]) == 2
    assert await store.read_at(1, []) is not None


@pytest.mark.asyncio
async def test_read_at_walks_creation_order(store):
    records = await _insert_series(store, ["first", "second", "third"])

    for offset, record in enumerate(records):
        assert (await store.read_at(offset)).id == record.id


@pytest.mark.asyncio
async def test_read_at_applies_filter(store):
    await store.insert("q1", "Quote", created_at=BASE_TIME)
    link = await store.insert("https://x.io", "Link", created_at=BASE_TIME + timedelta(minutes=1))
    await store.insert("q2", "Quote", created_at=BASE_TIME + timedelta(minutes=2))

    assert (await store.read_at(0, ["Link"])).id == link.id
    assert await store.read_at(1, ["Link"]) is None


@pytest.mark.asyncio
async def test_read_at_past_end_is_none(store):
    await store.insert("only", "Quote")
    assert await store.read_at(1) is None


# ============================================================================
# Search
# ============================================================================


@pytest.mark.asyncio
async def test_search_is_newest_first(store):
    records = await _insert_series(store, ["alpha-1", "alpha-2", "alpha-3", "beta"])

    results = await store.search("alpha", 20)

    assert [r.content for r in results] == ["alpha-3", "alpha-2", "alpha-1"]
    assert results[0].id == records[2].id


@pytest.mark.asyncio
async def test_search_is_case_insensitive(store):
    await store.insert("Alpha Centauri", "Thought")
    results = await store.search("aLPHA", 20)
    assert len(results) == 1


@pytest.mark.asyncio
async def test_search_respects_limit(store):
    await _insert_series(store, [f"alpha-{i}" for i in range(25)])

    results = await store.search("alpha", 20)

    assert len(results) == 20
    assert results[0].content == "alpha-24"


@pytest.mark.asyncio
async def test_search_no_hits_is_empty_list(store):
    await store.insert("something", "Quote")
    assert await store.search("nothing like it", 20) == []


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(store):
    await store.insert("100% sure", "Quote")
    await store.insert("100 points", "Quote")
    await store.insert("snake_case", "Quote")
    await store.insert("snakecase", "Quote")

    assert [r.content for r in await store.search("100%", 20)] == ["100% sure"]
    assert [r.content for r in await store.search("e_c", 20)] == ["snake_case"]


def test_like_pattern_escapes_metacharacters():
    assert like_pattern("a%b_c\\d") == "%a\\%b\\_c\\\\d%"


# ============================================================================
# Categories and failures
# ============================================================================


@pytest.mark.asyncio
async def test_distinct_categories(store):
    for category in ["Quote", "Link", "Quote", "Task"]:
        await store.insert("x", category)

    assert sorted(await store.distinct_categories()) == ["Link", "Quote", "Task"]


@pytest.mark.asyncio
async def test_database_failure_becomes_store_error(session_manager):
    store = InspirationStore(session_manager)
    async with session_manager.engine.begin() as conn:
        await conn.execute(text("DROP TABLE inspirations"))

    with pytest.raises(StoreError):
        await store.count()
    with pytest.raises(StoreError):
        await store.insert("hello", "Quote")


@pytest.mark.asyncio
async def test_search_is_case_insensitive_for_non_ascii(store):
    await store.insert("Été à Paris", "Thought")
    await store.insert("Привет мир", "Thought")
    await store.insert("ete", "Quote")

    assert [r.content for r in await store.search("été", 20)] == ["Été à Paris"]
    assert [r.content for r in await store.search("ÉTÉ", 20)] == ["Été à Paris"]
    assert [r.content for r in await store.search("привет", 20)] == ["Привет мир"]
