"""Protocol for the link and category storage backends."""

from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic import BaseModel, Field

DEFAULT_CATEGORY_COLOR = "#3B82F6"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Link(BaseModel):
    """A saved web link owned by a user."""

    id: str
    user_id: str
    title: str
    url: str
    favicon_url: str | None = None
    category_id: str | None = None
    order_index: int = 0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class Category(BaseModel):
    """A user-owned, ordered group of links."""

    id: str
    user_id: str
    name: str
    color: str = DEFAULT_CATEGORY_COLOR
    order_index: int = 0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class LinkStore(Protocol):
    """Protocol for link persistence.

    Every lookup is scoped to a user: another user's link behaves as if it did not exist.
    """

    async def list_links(
        self, user_id: str, category_id: str | None = None
    ) -> list[Link]:  # pragma: no cover
        """Return the user's links ordered by `order_index`, optionally for one category."""
        ...

    async def get_link(self, user_id: str, link_id: str) -> Link | None:  # pragma: no cover
        """Return the link, or None if the user has no such link."""
        ...

    async def add_link(self, link: Link) -> Link:  # pragma: no cover
        """Store a new link and return it."""
        ...

    async def update_link(
        self, user_id: str, link_id: str, **fields: Any
    ) -> Link:  # pragma: no cover
        """Update the given fields and return the stored link.

        Raises:
            LinkNotFoundError: if the user has no such link.
        """
        ...

    async def delete_link(self, user_id: str, link_id: str) -> None:  # pragma: no cover
        """Delete the link.

        Raises:
            LinkNotFoundError: if the user has no such link.
        """
        ...

    async def set_link_order(
        self, user_id: str, positions: dict[str, int]
    ) -> int:  # pragma: no cover
        """Apply `order_index` values, skipping ids the user does not own.

        Returns the number of links updated.
        """
        ...


class CategoryStore(Protocol):
    """Protocol for category persistence, scoped per user like `LinkStore`."""

    async def list_categories(self, user_id: str) -> list[Category]:  # pragma: no cover
        """Return the user's categories ordered by `order_index`."""
        ...

    async def get_category(
        self, user_id: str, category_id: str
    ) -> Category | None:  # pragma: no cover
        """Return the category, or None if the user has no such category."""
        ...

    async def add_category(self, category: Category) -> Category:  # pragma: no cover
        """Store a new category and return it."""
        ...

    async def update_category(
        self, user_id: str, category_id: str, **fields: Any
    ) -> Category:  # pragma: no cover
        """Update the given fields and return the stored category.

        Raises:
            CategoryNotFoundError: if the user has no such category.
        """
        ...

    async def delete_category(self, user_id: str, category_id: str) -> None:  # pragma: no cover
        """Delete the category and detach its links.

        Raises:
            CategoryNotFoundError: if the user has no such category.
        """
        ...

    async def set_category_order(
        self, user_id: str, positions: dict[str, int]
    ) -> int:  # pragma: no cover
        """Apply `order_index` values, skipping ids the user does not own."""
        ...


class Store(LinkStore, CategoryStore, Protocol):
    """A backend providing both link and category persistence."""

    async def shutdown(self) -> None:  # pragma: no cover
        """Release any resources held by the backend."""
        ...
