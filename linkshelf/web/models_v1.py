"""Link and Category API models"""

from pydantic import BaseModel, Field

from linkshelf.configs import settings
from linkshelf.favicon.models import IconSource
from linkshelf.links.backends.protocol import Category, Link

URL_CHARACTER_MAX = settings.web.api.v1.url_character_max
TITLE_CHARACTER_MAX = settings.web.api.v1.title_character_max


class LinkCreateRequest(BaseModel):
    """Body of the `POST /links` request. The title defaults to the URL."""

    url: str = Field(min_length=1, max_length=URL_CHARACTER_MAX)
    title: str | None = Field(default=None, max_length=TITLE_CHARACTER_MAX)
    category_id: str | None = None


class LinkUpdateRequest(BaseModel):
    """Body of the `PUT /links/{id}` request. Only the fields sent are changed;
    an empty `category_id` removes the link from its category.
    """

    url: str | None = Field(default=None, max_length=URL_CHARACTER_MAX)
    title: str | None = Field(default=None, max_length=TITLE_CHARACTER_MAX)
    category_id: str | None = None


class LinkReorderRequest(BaseModel):
    """Body of the `PUT /links/reorder` request."""

    link_ids: list[str]


class CategoryCreateRequest(BaseModel):
    """Body of the `POST /categories` request."""

    name: str = Field(min_length=1, max_length=TITLE_CHARACTER_MAX)
    color: str | None = None


class CategoryUpdateRequest(BaseModel):
    """Body of the `PUT /categories/{id}` request."""

    name: str | None = Field(default=None, min_length=1, max_length=TITLE_CHARACTER_MAX)
    color: str | None = None


class CategoryReorderRequest(BaseModel):
    """Body of the `PUT /categories/reorder` request."""

    category_ids: list[str]


class LinkResponse(BaseModel):
    """Model for a single link response."""

    link: Link


class LinksResponse(BaseModel):
    """Model for the `links` API response."""

    links: list[Link]


class RefreshFaviconResponse(BaseModel):
    """Model for the `refresh-favicon` response, including the tier that produced the icon."""

    link: Link
    favicon_source: IconSource


class CategoryResponse(BaseModel):
    """Model for a single category response."""

    category: Category


class CategoriesResponse(BaseModel):
    """Model for the `categories` API response."""

    categories: list[Category]


class MessageResponse(BaseModel):
    """Model for responses that only carry a confirmation message."""

    message: str
