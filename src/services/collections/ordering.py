"""Collection reordering: turn a drag gesture into a full position batch."""

from typing import Any, Sequence, TypeVar

T = TypeVar("T")


def array_move(items: Sequence[T], old_index: int, new_index: int) -> list[T]:
    """Return a copy of items with the element at old_index moved to new_index."""
    size = len(items)
    if not 0 <= old_index < size:
        raise IndexError(f"old_index {old_index} out of range for {size} items")
    if not 0 <= new_index < size:
        raise IndexError(f"new_index {new_index} out of range for {size} items")

    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return moved


def position_updates(slugs: Sequence[str]) -> list[dict[str, Any]]:
    """Every collection gets its index in the new order as its position."""
    return [{"slug": slug, "position": index} for index, slug in enumerate(slugs)]


def sort_by_position(collections: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    # Stable: collections without a position keep their relative order at the end
    return sorted(
        collections,
        key=lambda c: (c.get("position") is None, c.get("position") or 0),
    )


def reorder(
    collections: Sequence[dict[str, Any]], slug: str, new_index: int
) -> list[dict[str, Any]]:
    """
    Move the collection identified by slug to new_index.

    Returns:
        list[dict]: {slug, position} for every collection, in the new order

    Raises:
        KeyError: If no collection has that slug
        IndexError: If new_index is outside the list
    """
    slugs = [c["slug"] for c in collections]
    try:
        old_index = slugs.index(slug)
    except ValueError:
        raise KeyError(slug) from None

    return position_updates(array_move(slugs, old_index, new_index))
