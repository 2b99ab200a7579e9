"""Sequence positions (`order_index`) of user-owned items."""

from typing import Iterable, Protocol, Sequence, TypeVar


class Ordered(Protocol):
    """Anything carrying a sequence position."""

    order_index: int


T = TypeVar("T", bound=Ordered)


def next_order_index(order_indexes: Iterable[int]) -> int:
    """Return the position for a newly appended item: one past the current maximum,
    or 0 for the first item.

    Gaps left by deletions are not reused.
    """
    return max(order_indexes, default=-1) + 1


def positions_for(ids: Sequence[str]) -> dict[str, int]:
    """Map each id to its position in the requested order.

    A repeated id ends up at its last position.
    """
    return {item_id: position for position, item_id in enumerate(ids)}


def sort_by_order(items: Iterable[T]) -> list[T]:
    """Return items sorted by `order_index`, keeping insertion order for ties."""
    return sorted(items, key=lambda item: item.order_index)
