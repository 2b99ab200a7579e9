"""linkshelf specific exceptions."""


class InvalidUrlError(ValueError):
    """Raised when a string cannot be parsed into a scheme and a hostname."""


class BackendError(Exception):
    """Error specific to storage backend functions."""


class NotFoundError(BackendError):
    """Raised when a user-owned item does not exist."""

    pass


class LinkNotFoundError(NotFoundError):
    """Raised when a link does not exist for the requesting user."""

    def __init__(self, link_id: str) -> None:
        super().__init__("Link not found")
        self.link_id = link_id


class CategoryNotFoundError(NotFoundError):
    """Raised when a category does not exist for the requesting user."""

    def __init__(self, category_id: str) -> None:
        super().__init__("Category not found")
        self.category_id = category_id
