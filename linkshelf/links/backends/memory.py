"""In-process storage backend for links and categories."""

import logging
from datetime import datetime, timezone
from typing import Any

from linkshelf.exceptions import CategoryNotFoundError, LinkNotFoundError
from linkshelf.links.backends.protocol import Category, Link
from linkshelf.links.ordering import sort_by_order

logger = logging.getLogger(__name__)


class InMemoryStore:
    """A dict-backed store. Writes are last-writer-wins and nothing survives a restart.

    Returned models are copies, so callers cannot mutate stored state by accident.
    """

    links: dict[str, Link]
    categories: dict[str, Category]

    def __init__(self) -> None:
        self.links = {}
        self.categories = {}

    async def list_links(self, user_id: str, category_id: str | None = None) -> list[Link]:
        """Return the user's links ordered by `order_index`, optionally for one category."""
        links = [
            link.model_copy()
            for link in self.links.values()
            if link.user_id == user_id and (category_id is None or link.category_id == category_id)
        ]
        return sort_by_order(links)

    async def get_link(self, user_id: str, link_id: str) -> Link | None:
        """Return the link, or None if the user has no such link."""
        link = self.links.get(link_id)
        if link is None or link.user_id != user_id:
            return None
        return link.model_copy()

    async def add_link(self, link: Link) -> Link:
        """Store a new link and return it."""
        self.links[link.id] = link.model_copy()
        return link

    async def update_link(self, user_id: str, link_id: str, **fields: Any) -> Link:
        """Update the given fields and return the stored link."""
        if await self.get_link(user_id, link_id) is None:
            raise LinkNotFoundError(link_id)
        updated = self.links[link_id].model_copy(update={**fields, "updated_at": _utcnow()})
        self.links[link_id] = updated
        return updated.model_copy()

    async def delete_link(self, user_id: str, link_id: str) -> None:
        """Delete the link."""
        if await self.get_link(user_id, link_id) is None:
            raise LinkNotFoundError(link_id)
        del self.links[link_id]

    async def set_link_order(self, user_id: str, positions: dict[str, int]) -> int:
        """Apply `order_index` values, skipping ids the user does not own."""
        updated = 0
        for link_id, order_index in positions.items():
            link = self.links.get(link_id)
            if link is None or link.user_id != user_id:
                continue
            self.links[link_id] = link.model_copy(update={"order_index": order_index})
            updated += 1
        return updated

    async def list_categories(self, user_id: str) -> list[Category]:
        """Return the user's categories ordered by `order_index`."""
        categories = [
            category.model_copy()
            for category in self.categories.values()
            if category.user_id == user_id
        ]
        return sort_by_order(categories)

    async def get_category(self, user_id: str, category_id: str) -> Category | None:
        """Return the category, or None if the user has no such category."""
        category = self.categories.get(category_id)
        if category is None or category.user_id != user_id:
            return None
        return category.model_copy()

    async def add_category(self, category: Category) -> Category:
        """Store a new category and return it."""
        self.categories[category.id] = category.model_copy()
        return category

    async def update_category(self, user_id: str, category_id: str, **fields: Any) -> Category:
        """Update the given fields and return the stored category."""
        if await self.get_category(user_id, category_id) is None:
            raise CategoryNotFoundError(category_id)
        updated = self.categories[category_id].model_copy(
            update={**fields, "updated_at": _utcnow()}
        )
        self.categories[category_id] = updated
        return updated.model_copy()

    async def delete_category(self, user_id: str, category_id: str) -> None:
        """Delete the category and detach its links."""
        if await self.get_category(user_id, category_id) is None:
            raise CategoryNotFoundError(category_id)
        del self.categories[category_id]
        for link_id, link in self.links.items():
            if link.category_id == category_id:
                self.links[link_id] = link.model_copy(update={"category_id": None})

    async def set_category_order(self, user_id: str, positions: dict[str, int]) -> int:
        """Apply `order_index` values, skipping ids the user does not own."""
        updated = 0
        for category_id, order_index in positions.items():
            category = self.categories.get(category_id)
            if category is None or category.user_id != user_id:
                continue
            self.categories[category_id] = category.model_copy(
                update={"order_index": order_index}
            )
            updated += 1
        return updated

    async def shutdown(self) -> None:
        """Drop everything held in memory."""
        logger.info(
            "Discarding in-memory store",
            extra={"links": len(self.links), "categories": len(self.categories)},
        )
        self.links.clear()
        self.categories.clear()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
