"""linkshelf V1 API"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from linkshelf.configs import settings
from linkshelf.favicon import get_coordinator
from linkshelf.favicon.coordinator import FaviconCoordinator
from linkshelf.links import get_store
from linkshelf.links.backends.protocol import Category, Link, Store
from linkshelf.links.ordering import next_order_index, positions_for
from linkshelf.web.models_v1 import (
    CategoriesResponse,
    CategoryCreateRequest,
    CategoryReorderRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    LinkCreateRequest,
    LinkReorderRequest,
    LinkResponse,
    LinksResponse,
    LinkUpdateRequest,
    MessageResponse,
    RefreshFaviconResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()

HEADER_CHARACTER_MAX = settings.web.api.v1.header_character_max


def get_user_id(
    x_user_id: Annotated[str, Header(min_length=1, max_length=HEADER_CHARACTER_MAX)],
) -> str:
    """Return the id of the user authenticated by the upstream gateway."""
    return x_user_id


UserId = Annotated[str, Depends(get_user_id)]
StoreDep = Annotated[Store, Depends(get_store)]
CoordinatorDep = Annotated[FaviconCoordinator, Depends(get_coordinator)]


async def _get_link_or_404(store: Store, user_id: str, link_id: str) -> Link:
    link = await store.get_link(user_id, link_id)
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
    return link


async def _ensure_category(store: Store, user_id: str, category_id: str | None) -> None:
    if category_id is not None and await store.get_category(user_id, category_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")


@router.get("/links", tags=["links"], summary="List links", response_model=LinksResponse)
async def list_links(
    user_id: UserId,
    store: StoreDep,
    category_id: Annotated[str | None, Query()] = None,
) -> LinksResponse:
    """List the user's links ordered by position, optionally for a single category."""
    return LinksResponse(links=await store.list_links(user_id, category_id=category_id))


@router.post(
    "/links",
    tags=["links"],
    summary="Create a link",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_link(
    body: LinkCreateRequest,
    user_id: UserId,
    store: StoreDep,
    coordinator: CoordinatorDep,
) -> LinkResponse:
    """Save a new link at the end of the user's list.

    The response carries a placeholder favicon built from the hostname. The real icon
    is resolved in the background and replaces it once found.
    """
    category_id = body.category_id or None
    await _ensure_category(store, user_id, category_id)

    existing = await store.list_links(user_id)
    link = await store.add_link(
        Link(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=body.title or body.url,
            url=body.url,
            favicon_url=coordinator.placeholder_for(body.url),
            category_id=category_id,
            order_index=next_order_index(item.order_index for item in existing),
        )
    )

    coordinator.schedule_refresh(link)
    return LinkResponse(link=link)


@router.put(
    "/links/reorder", tags=["links"], summary="Reorder links", response_model=MessageResponse
)
async def reorder_links(
    body: LinkReorderRequest,
    user_id: UserId,
    store: StoreDep,
) -> MessageResponse:
    """Give each listed link the position of its index in `link_ids`.

    Ids the user does not own are ignored.
    """
    await store.set_link_order(user_id, positions_for(body.link_ids))
    return MessageResponse(message="Links reordered")


@router.post(
    "/links/{link_id}/refresh-favicon",
    tags=["links"],
    summary="Re-resolve a link's favicon",
    response_model=RefreshFaviconResponse,
)
async def refresh_favicon(
    link_id: str,
    user_id: UserId,
    store: StoreDep,
    coordinator: CoordinatorDep,
) -> RefreshFaviconResponse:
    """Resolve the favicon now and report which tier produced it."""
    link = await _get_link_or_404(store, user_id, link_id)
    updated, result = await coordinator.refresh_now(link)
    return RefreshFaviconResponse(link=updated, favicon_source=result.source)


@router.put("/links/{link_id}", tags=["links"], summary="Update a link", response_model=LinkResponse)
async def update_link(
    link_id: str,
    body: LinkUpdateRequest,
    user_id: UserId,
    store: StoreDep,
    coordinator: CoordinatorDep,
) -> LinkResponse:
    """Update the fields sent in the body.

    A changed URL gets a placeholder favicon right away and a background refresh.
    """
    existing = await _get_link_or_404(store, user_id, link_id)

    changes = body.model_dump(exclude_unset=True)
    if not changes.get("url"):
        changes.pop("url", None)
    if changes.get("title") is None:
        changes.pop("title", None)
    if "category_id" in changes:
        changes["category_id"] = changes["category_id"] or None
        await _ensure_category(store, user_id, changes["category_id"])

    url_changed = "url" in changes and changes["url"] != existing.url
    if url_changed:
        changes["favicon_url"] = (
            coordinator.placeholder_for(changes["url"]) or existing.favicon_url
        )

    link = await store.update_link(user_id, link_id, **changes)

    if url_changed:
        coordinator.schedule_refresh(link)
    return LinkResponse(link=link)


@router.delete(
    "/links/{link_id}", tags=["links"], summary="Delete a link", response_model=MessageResponse
)
async def delete_link(link_id: str, user_id: UserId, store: StoreDep) -> MessageResponse:
    """Delete a link."""
    await _get_link_or_404(store, user_id, link_id)
    await store.delete_link(user_id, link_id)
    return MessageResponse(message="Link deleted")


@router.get(
    "/categories",
    tags=["categories"],
    summary="List categories",
    response_model=CategoriesResponse,
)
async def list_categories(user_id: UserId, store: StoreDep) -> CategoriesResponse:
    """List the user's categories ordered by position."""
    return CategoriesResponse(categories=await store.list_categories(user_id))


@router.post(
    "/categories",
    tags=["categories"],
    summary="Create a category",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreateRequest, user_id: UserId, store: StoreDep
) -> CategoryResponse:
    """Create a category at the end of the user's list."""
    existing = await store.list_categories(user_id)
    category = Category(
        id=str(uuid.uuid4()),
        user_id=user_id,
        name=body.name,
        order_index=next_order_index(item.order_index for item in existing),
    )
    if body.color:
        category.color = body.color
    return CategoryResponse(category=await store.add_category(category))


@router.put(
    "/categories/reorder",
    tags=["categories"],
    summary="Reorder categories",
    response_model=MessageResponse,
)
async def reorder_categories(
    body: CategoryReorderRequest, user_id: UserId, store: StoreDep
) -> MessageResponse:
    """Give each listed category the position of its index in `category_ids`."""
    await store.set_category_order(user_id, positions_for(body.category_ids))
    return MessageResponse(message="Categories reordered")


@router.put(
    "/categories/{category_id}",
    tags=["categories"],
    summary="Update a category",
    response_model=CategoryResponse,
)
async def update_category(
    category_id: str, body: CategoryUpdateRequest, user_id: UserId, store: StoreDep
) -> CategoryResponse:
    """Rename or recolor a category."""
    await _ensure_category(store, user_id, category_id)
    changes = {key: value for key, value in body.model_dump(exclude_unset=True).items() if value}
    return CategoryResponse(category=await store.update_category(user_id, category_id, **changes))


@router.delete(
    "/categories/{category_id}",
    tags=["categories"],
    summary="Delete a category",
    response_model=MessageResponse,
)
async def delete_category(category_id: str, user_id: UserId, store: StoreDep) -> MessageResponse:
    """Delete a category. Its links are kept and become uncategorized."""
    await _ensure_category(store, user_id, category_id)
    await store.delete_category(user_id, category_id)
    return MessageResponse(message="Category deleted")
