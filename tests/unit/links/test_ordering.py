# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the ordering helpers."""

import pytest

from linkshelf.links.backends.protocol import Category
from linkshelf.links.ordering import next_order_index, positions_for, sort_by_order


@pytest.mark.parametrize(
    ["order_indexes", "expected"],
    [([], 0), ([0], 1), ([0, 1, 2], 3), ([5, 2, 9], 10), ([0, 7], 8)],
    ids=["first", "second", "dense", "unsorted", "gap_not_reused"],
)
def test_next_order_index(order_indexes: list[int], expected: int) -> None:
    """Test that new items are appended one past the maximum."""
    assert next_order_index(order_indexes) == expected


def test_next_order_index_accepts_generators() -> None:
    """Test that any iterable of positions is accepted."""
    assert next_order_index(i for i in (3, 1)) == 4


def test_positions_for() -> None:
    """Test that ids map to their zero-based position in the request."""
    assert positions_for(["c", "a", "b"]) == {"c": 0, "a": 1, "b": 2}
    assert positions_for([]) == {}


def test_positions_for_duplicates() -> None:
    """Test that a repeated id keeps its last position."""
    assert positions_for(["a", "b", "a"]) == {"a": 2, "b": 1}


def test_sort_by_order() -> None:
    """Test that items sort by position and keep insertion order for ties."""
    categories = [
        Category(id="x", user_id="u", name="X", order_index=2),
        Category(id="y", user_id="u", name="Y", order_index=0),
        Category(id="z", user_id="u", name="Z", order_index=2),
        Category(id="w", user_id="u", name="W", order_index=1),
    ]

    assert [category.id for category in sort_by_order(categories)] == ["y", "w", "x", "z"]
