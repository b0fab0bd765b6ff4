"""In-memory Catalog Store"""

import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..models.catalog import CatalogItem, DEFAULT_CATEGORY
from ..utils.logging import get_logger
from ..utils.metrics import update_catalog_size

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("name", "description", "category", "tags")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CatalogStore:
    """
    Sole owner of the catalog items

    Items are kept in insertion order with an id index on the side. Every
    operation runs under one lock so a mutation is never interleaved with
    another, and every returned item is a copy: callers never hold a
    reference into the store.

    Lookups that miss return None rather than raising.
    """

    def __init__(self):
        self._items: Dict[str, CatalogItem] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def create(self, name: str, description: Optional[str] = None,
               category: Optional[str] = None, tags: Optional[List[str]] = None) -> CatalogItem:
        """Create an item with defaults applied and append it"""

        with self._lock:
            item_id = self._new_id()
            now = _utcnow()
            item = CatalogItem(
                id=item_id,
                name=name,
                description=description or "",
                category=category or DEFAULT_CATEGORY,
                tags=list(tags) if tags else [],
                created_at=now,
                updated_at=now,
            )
            self._items[item_id] = item
            update_catalog_size(len(self._items))

        logger.info("Item created", item_id=item_id)
        return self._copy(item)

    def get_all(self) -> List[CatalogItem]:
        with self._lock:
            return [self._copy(item) for item in self._items.values()]

    def get_by_id(self, item_id: str) -> Optional[CatalogItem]:
        with self._lock:
            item = self._items.get(item_id)
            return self._copy(item) if item else None

    def update(self, item_id: str, fields: Dict[str, Any]) -> Optional[CatalogItem]:
        """
        Merge the provided fields into an item

        Keys that are absent or None are left untouched, as are keys that
        are not user-editable (id, timestamps, AI results).
        """

        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                return None

            for name in UPDATABLE_FIELDS:
                value = fields.get(name)
                if value is None:
                    continue
                setattr(item, name, list(value) if name == "tags" else value)

            item.updated_at = _utcnow()
            return self._copy(item)

    def remove(self, item_id: str) -> Optional[CatalogItem]:
        with self._lock:
            item = self._items.pop(item_id, None)
            if item is None:
                return None
            update_catalog_size(len(self._items))

        logger.info("Item removed", item_id=item_id)
        return item

    def search(self, query: str) -> List[CatalogItem]:
        """Case-insensitive substring match on name, description, category and tags"""

        needle = query.lower()
        with self._lock:
            return [
                self._copy(item)
                for item in self._items.values()
                if needle in item.name.lower()
                or needle in item.description.lower()
                or needle in item.category.lower()
                or any(needle in tag.lower() for tag in item.tags)
            ]

    def get_by_category(self, category: str) -> List[CatalogItem]:
        with self._lock:
            return [self._copy(item) for item in self._items.values() if item.category == category]

    def get_by_tag(self, tag: str) -> List[CatalogItem]:
        with self._lock:
            return [self._copy(item) for item in self._items.values() if tag in item.tags]

    def update_ai_insights(self, item_id: str, insights: Dict[str, Any]) -> Optional[CatalogItem]:
        return self._set_augmentation(item_id, "ai_insights", insights)

    def update_sentiment(self, item_id: str, sentiment: Dict[str, Any]) -> Optional[CatalogItem]:
        return self._set_augmentation(item_id, "sentiment", sentiment)

    def get_stats(self) -> Dict[str, Any]:
        """
        Aggregate statistics

        averageTagsPerItem is formatted to two decimals, or 0 for an
        empty catalog.
        """

        with self._lock:
            items = list(self._items.values())

            total = len(items)
            total_tags = sum(len(item.tags) for item in items)
            return {
                "total": total,
                "with_insights": sum(1 for item in items if item.ai_insights is not None),
                "categories": len({item.category for item in items}),
                "unique_tags": len({tag for item in items for tag in item.tags}),
                "average_tags_per_item": f"{total_tags / total:.2f}" if total else 0,
            }

    def _set_augmentation(self, item_id: str, field_name: str, value: Dict[str, Any]) -> Optional[CatalogItem]:
        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                return None
            setattr(item, field_name, copy.deepcopy(value))
            item.updated_at = _utcnow()
            return self._copy(item)

    @staticmethod
    def _new_id() -> str:
        # random 122-bit ids; a removed item's id is not handed out again
        return str(uuid.uuid4())

    @staticmethod
    def _copy(item: CatalogItem) -> CatalogItem:
        return copy.deepcopy(item)
