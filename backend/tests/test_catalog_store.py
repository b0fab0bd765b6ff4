"""Tests for the Catalog Store"""

import threading

import pytest

from catalog_api.services.catalog_store import CatalogStore


@pytest.fixture
def sample_items(store):
    """Create sample items for testing"""

    laptop = store.create(
        name="Laptop Pro",
        description="A fast portable computer",
        category="Electronics",
        tags=["computer", "portable"]
    )
    novel = store.create(name="Mystery Novel", description="A gripping story", category="Books", tags=["fiction"])
    mug = store.create(name="Coffee Mug")

    return laptop, novel, mug


def test_create_applies_defaults(store):
    """Test creating an item with only a name"""

    item = store.create(name="Test Item", description="desc")

    assert item.id
    assert item.name == "Test Item"
    assert item.description == "desc"
    assert item.category == "General"
    assert item.tags == []
    assert item.ai_insights is None
    assert item.sentiment is None
    assert item.created_at == item.updated_at


def test_get_by_id_round_trip(store):
    """Test that a created item can be read back unchanged"""

    created = store.create(name="Widget", description="Small part", category="Hardware", tags=["a", "b"])
    fetched = store.get_by_id(created.id)

    assert fetched is not None
    assert (fetched.name, fetched.description, fetched.category, fetched.tags) == (
        "Widget", "Small part", "Hardware", ["a", "b"]
    )
    assert fetched.ai_insights is None
    assert fetched.sentiment is None
    assert fetched.created_at == fetched.updated_at


def test_get_all_keeps_insertion_order(store, sample_items):
    """Test listing returns items in creation order"""

    names = [item.name for item in store.get_all()]
    assert names == ["Laptop Pro", "Mystery Novel", "Coffee Mug"]


def test_returned_items_are_copies(store):
    """Mutating a returned item must not change the stored one"""

    item = store.create(name="Original", tags=["one"])
    item.name = "Changed"
    item.tags.append("two")

    stored = store.get_by_id(item.id)
    assert stored.name == "Original"
    assert stored.tags == ["one"]


def test_get_missing_item_returns_none(store):
    assert store.get_by_id("does-not-exist") is None


def test_update_merges_only_provided_fields(store, sample_items):
    """Fields left out of the update keep their values"""

    laptop, _, _ = sample_items
    updated = store.update(laptop.id, {"description": "Now even faster"})

    assert updated.description == "Now even faster"
    assert updated.name == laptop.name
    assert updated.category == laptop.category
    assert updated.tags == laptop.tags
    assert updated.created_at == laptop.created_at
    assert updated.updated_at >= laptop.updated_at


def test_update_ignores_none_and_protected_fields(store, sample_items):
    """None values and non-editable keys never clear or overwrite anything"""

    laptop, _, _ = sample_items
    updated = store.update(laptop.id, {"name": None, "id": "hijack", "ai_insights": {"x": 1}})

    assert updated.id == laptop.id
    assert updated.name == laptop.name
    assert updated.ai_insights is None


def test_update_missing_item_returns_none(store):
    assert store.update("missing", {"name": "x"}) is None


def test_remove_is_idempotent(store, sample_items):
    """Test removing an item twice"""

    laptop, _, _ = sample_items

    removed = store.remove(laptop.id)
    assert removed.id == laptop.id
    assert store.get_by_id(laptop.id) is None
    assert store.remove(laptop.id) is None
    assert len(store) == 2


def test_ids_are_never_reused(store):
    """Ids stay unique across deletions"""

    seen = set()
    for _ in range(50):
        item = store.create(name="Churn")
        assert item.id not in seen
        seen.add(item.id)
        store.remove(item.id)


def test_removed_items_leave_nothing_behind(store):
    """Create/remove churn does not grow the store's state"""

    for _ in range(50):
        store.remove(store.create(name="Churn").id)

    assert len(store) == 0
    assert {name: len(value) for name, value in vars(store).items() if hasattr(value, "__len__")} == {"_items": 0}


@pytest.mark.parametrize("query,expected", [
    ("laptop", {"Laptop Pro"}),
    ("GRIPPING", {"Mystery Novel"}),
    ("electronics", {"Laptop Pro"}),
    ("fict", {"Mystery Novel"}),
    ("general", {"Coffee Mug"}),
    ("o", {"Laptop Pro", "Mystery Novel", "Coffee Mug"}),
    ("nothing-matches", set()),
])
def test_search(store, sample_items, query, expected):
    """Test search over name, description, category and tags"""

    assert {item.name for item in store.search(query)} == expected


def test_filters_use_exact_match(store, sample_items):
    """Category and tag filters do not match substrings"""

    assert [item.name for item in store.get_by_category("Books")] == ["Mystery Novel"]
    assert store.get_by_category("Book") == []
    assert [item.name for item in store.get_by_tag("portable")] == ["Laptop Pro"]
    assert store.get_by_tag("port") == []


def test_update_ai_insights_only_touches_insights(store, sample_items):
    """Targeted AI updates leave user fields alone"""

    laptop, _, _ = sample_items
    insights = {"category": "Tech", "tags": ["x"], "insights": "text", "suggestions": ["s"]}

    updated = store.update_ai_insights(laptop.id, insights)

    assert updated.ai_insights == insights
    assert updated.category == "Electronics"
    assert updated.tags == ["computer", "portable"]
    assert updated.sentiment is None
    assert updated.updated_at >= laptop.updated_at


def test_update_sentiment_missing_item(store):
    assert store.update_sentiment("missing", {"sentiment": "neutral"}) is None


def test_stats_example(store):
    """Three General items with 0, 1 and 2 tags"""

    store.create(name="A")
    store.create(name="B", tags=["x"])
    store.create(name="C", tags=["x", "y"])

    stats = store.get_stats()

    assert stats["total"] == 3
    assert stats["with_insights"] == 0
    assert stats["categories"] == 1
    assert stats["unique_tags"] <= 2
    assert stats["average_tags_per_item"] == "1.00"


def test_stats_empty_store(store):
    stats = store.get_stats()

    assert stats == {
        "total": 0,
        "with_insights": 0,
        "categories": 0,
        "unique_tags": 0,
        "average_tags_per_item": 0,
    }


def test_stats_counts_items_with_insights(store, sample_items):
    laptop, _, _ = sample_items
    store.update_ai_insights(laptop.id, {"category": "General", "tags": [], "insights": "", "suggestions": []})

    assert store.get_stats()["with_insights"] == 1


def test_concurrent_creates_are_all_kept():
    """Creates from many threads never lose an item"""

    store = CatalogStore()

    def worker():
        for index in range(25):
            store.create(name=f"Item {index}")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    items = store.get_all()
    assert len(items) == 200
    assert len({item.id for item in items}) == 200
